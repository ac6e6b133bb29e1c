"""Negative balance carried from one month into the next.

Only deficits propagate: when a month closes positive nothing is carried,
when it closes negative the shortfall reduces the following month.  The
*current* month's mode selects the formula applied to the *previous*
month's figures.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from . import config
from .categories import COGS, DIRECT_DELIVERY, PARKING_FEE_LABOR, category_totals
from .ledger import FormulaSettings, LedgerSnapshot, SplitMode

_NO_EXPENSES = {DIRECT_DELIVERY: 0.0, COGS: 0.0, PARKING_FEE_LABOR: 0.0}


def check_month(month: int) -> None:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise ValueError(f"Month must be an integer between 1 and 12, got {month!r}")


def carried_deficit(
    mode: SplitMode,
    income: Mapping[str, float],
    owner_percent: float,
    totals: Mapping[str, float],
    prior_carry_over: float,
) -> float:
    """Deficit a closed month passes on, given its figures and its own carry-over.

    Returns 0 when the month closed positive, otherwise the (negative) balance.
    """
    rental = income['rentalIncome']
    delivery = income['deliveryIncome']
    electric = income['electricPrepaidIncome']
    smoking = income['smokingFines']
    gas = income['gasPrepaidIncome']
    ski_racks = income['skiRacksIncome']
    miles = income['milesIncome']
    child_seat = income['childSeatIncome']
    coolers = income['coolersIncome']
    insurance_wreck = income['insuranceWreckIncome']
    other = income['otherIncome']
    direct_delivery = totals[DIRECT_DELIVERY]
    cogs = totals[COGS]
    parking_fee_labor = totals[PARKING_FEE_LABOR]

    if mode is SplitMode.MODE_70:
        part1 = miles + (smoking * config.SMOKING_FINES_OWNER_RATE)
        part2 = (rental - delivery - electric - smoking - gas - miles - ski_racks
                 - child_seat - coolers - insurance_wreck - other)
        calculation = (part1 - direct_delivery - cogs - parking_fee_labor
                       + prior_carry_over + (part2 * owner_percent))
    else:
        calculation = (rental - delivery - electric - gas - smoking - miles - ski_racks
                       - child_seat - coolers - insurance_wreck - other
                       - direct_delivery - cogs + prior_carry_over)
    return 0.0 if calculation > 0 else calculation


def carry_over(
    ledger: LedgerSnapshot,
    year: int,
    month: int,
    previous: Optional[LedgerSnapshot] = None,
    settings: Optional[FormulaSettings] = None,
) -> float:
    """Negative balance carried into ``month`` of ``year``.

    Recurses back through the year one month at a time and bottoms out at
    January.  January of any year after the first regime year depends on
    the prior December only under the ``prior_december_income`` policy
    (see ``config.JANUARY_CARRY_OVER``); by default it carries nothing.

    Args:
        ledger: Snapshot of the requested year
        year: Ledger year
        month: Month number (1-12)
        previous: Snapshot of ``year - 1``, consulted only for January
        settings: Formula settings; defaults to ``ledger.formula``

    Returns:
        A value <= 0

    Raises:
        ValueError: If ``month`` is outside 1-12
    """
    check_month(month)
    if settings is None:
        settings = ledger.formula

    if year == config.LEGACY_REGIME_START_YEAR:
        return 0.0

    mode = settings.mode_for(month)
    if month == 1:
        return _january_carry_over(year, mode, previous)

    prior_month = month - 1
    prior_carry_over = carry_over(ledger, year, prior_month, previous, settings)
    return carried_deficit(
        mode,
        ledger.income(prior_month),
        ledger.owner_percent(prior_month),
        category_totals(ledger, prior_month),
        prior_carry_over,
    )


def _january_carry_over(year: int, mode: SplitMode, previous: Optional[LedgerSnapshot]) -> float:
    # TODO: derive December's expenses and carry-over from the prior year once
    # the product owners confirm the cross-year rule.
    if (
        year > config.LEGACY_REGIME_START_YEAR
        and previous is not None
        and config.january_policy() == 'prior_december_income'
    ):
        december: Dict[str, float] = previous.income(12)
        return carried_deficit(mode, december, previous.owner_percent(12), _NO_EXPENSES, 0.0)
    return 0.0
