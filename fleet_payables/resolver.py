"""Answer "what is the owner of car C owed for year Y, month M"."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .carry_over import check_month
from .formatting import round_currency
from .ledger import LedgerSnapshot
from .split import owner_split
from .storage import LedgerStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayableResult:
    amount: float
    found: bool

    @property
    def display(self) -> float:
        """Amount rounded to cents for the payment form."""
        return round_currency(self.amount) if self.found else 0.0


NOT_FOUND = PayableResult(amount=0.0, found=False)


class PayableResolver:
    """Fetches ledger snapshots from a store and computes owner payables."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    def resolve(self, car_id: Any, year: int, month: int) -> PayableResult:
        check_month(month)
        ledger = self.store.load(car_id, year)
        if ledger is None:
            logger.warning("No income/expense ledger for car %s in %s", car_id, year)
            return NOT_FOUND

        previous: Optional[LedgerSnapshot] = None
        if month == 1:
            previous = self.store.load(car_id, year - 1)

        amount = owner_split(ledger, None, year, month, previous=previous)
        logger.debug("Owner payable for car %s %s-%02d: %.2f", car_id, year, month, amount)
        return PayableResult(amount=amount, found=True)


def resolve_payable(store: LedgerStore, car_id: Any, year: int, month: int) -> PayableResult:
    return PayableResolver(store).resolve(car_id, year, month)
