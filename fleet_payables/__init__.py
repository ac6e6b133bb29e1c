"""Top-level package for the owner revenue split and carry-over engine.

Given a car's monthly income/expense ledger, the engine computes how much
of a month's net rental revenue is owed to the vehicle's owner.  The
primary modules are:

* ``ledger`` – read-only access to a ledger snapshot for one car and year
* ``categories`` – monthly expense category totals
* ``carry_over`` – negative balance carried from month to month
* ``split`` – the owner split formulas for each regime and mode
* ``resolver`` – the ``(car, year, month) -> payable`` entry point
* ``schedule`` – a full-year breakdown as a pandas DataFrame

To print a payable from the command line you can execute:

```bash
python scripts/show_payables.py --car-id 42 --year 2026 --month 3
```
"""

from .carry_over import carry_over
from .categories import category_totals, expense_attribution, total_for_category
from .ledger import DynamicSubcategory, FormulaSettings, LedgerSnapshot, SplitMode
from .regimes import YearRegime, regime_for_year, split_percentages_for_mode
from .resolver import PayableResolver, PayableResult, resolve_payable
from .schedule import owner_split_schedule
from .split import owner_split
from .storage import InMemoryLedgerStore, LedgerStore, SqliteLedgerStore

__all__ = [
    "DynamicSubcategory",
    "FormulaSettings",
    "InMemoryLedgerStore",
    "LedgerSnapshot",
    "LedgerStore",
    "PayableResolver",
    "PayableResult",
    "SplitMode",
    "SqliteLedgerStore",
    "YearRegime",
    "carry_over",
    "category_totals",
    "expense_attribution",
    "owner_split",
    "owner_split_schedule",
    "regime_for_year",
    "resolve_payable",
    "split_percentages_for_mode",
    "total_for_category",
]
