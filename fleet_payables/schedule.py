"""Full-year owner split breakdown as a DataFrame.

Walks the year once, threading each month's carry-over into the next, so a
twelve month table costs one pass instead of recomputing every prefix.  The
figures match per-month :func:`carry_over` / :func:`owner_split` calls.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd

from . import config
from .carry_over import carry_over, carried_deficit
from .categories import COGS, DIRECT_DELIVERY, PARKING_FEE_LABOR, category_totals, expense_attribution
from .ledger import LedgerSnapshot
from .split import split_with_carry_over

SCHEDULE_COLUMNS = [
    'mode',
    'owner_percent',
    'total_direct_delivery',
    'total_cogs',
    'total_parking_fee_labor',
    'management_expenses',
    'owner_expenses',
    'carry_over',
    'owner_split',
]


def owner_split_schedule(
    ledger: LedgerSnapshot,
    year: int,
    previous: Optional[LedgerSnapshot] = None,
) -> pd.DataFrame:
    """Return a month-indexed (1-12) table of the owner split inputs and results."""
    settings = ledger.formula
    rows: List[Dict[str, object]] = []
    prior_carry_over = 0.0
    prior_totals: Dict[str, float] = {}

    for month in range(1, 13):
        mode = settings.mode_for(month)
        if year == config.LEGACY_REGIME_START_YEAR:
            co = 0.0
        elif month == 1:
            co = carry_over(ledger, year, 1, previous, settings)
        else:
            co = carried_deficit(
                mode,
                ledger.income(month - 1),
                ledger.owner_percent(month - 1),
                prior_totals,
                prior_carry_over,
            )

        totals = category_totals(ledger, month)
        attribution = expense_attribution(ledger, month)
        rows.append({
            'month': month,
            'mode': mode.value,
            'owner_percent': ledger.owner_percent(month),
            'total_direct_delivery': totals[DIRECT_DELIVERY],
            'total_cogs': totals[COGS],
            'total_parking_fee_labor': totals[PARKING_FEE_LABOR],
            'management_expenses': attribution['management_expenses'],
            'owner_expenses': attribution['owner_expenses'],
            'carry_over': co,
            'owner_split': split_with_carry_over(ledger, settings, year, month, co),
        })
        prior_carry_over = co
        prior_totals = totals

    return pd.DataFrame(rows, columns=['month'] + SCHEDULE_COLUMNS).set_index('month')
