"""Read-only access to a car's per-year income/expense ledger.

A ledger snapshot mirrors the payload served by the admin application for
one ``(carId, year)``: one row per month for income and for each expense
category, any user-defined ("dynamic") subcategories, and the per-year
formula settings.  Values are looked up leniently: a missing row, a missing
field, ``None`` or a non-numeric value all read as ``0``.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .config import DEFAULT_MODE, DEFAULT_SKI_RACKS_OWNER

INCOME_SECTION = "incomeExpenses"
EXPENSE_SECTIONS = ("directDelivery", "cogs", "parkingFeeLabor", "reimbursedBills")

INCOME_FIELDS = (
    "rentalIncome",
    "deliveryIncome",
    "electricPrepaidIncome",
    "smokingFines",
    "gasPrepaidIncome",
    "skiRacksIncome",
    "milesIncome",
    "childSeatIncome",
    "coolersIncome",
    "insuranceWreckIncome",
    "otherIncome",
)

OWNER_SPLIT_FIELD = "carOwnerSplit"
MANAGEMENT_SPLIT_FIELD = "carManagementSplit"

# Alternate spellings seen in exported payloads
FIELD_ALIASES = {
    OWNER_SPLIT_FIELD: ("carOwnerSplitPercent",),
    MANAGEMENT_SPLIT_FIELD: ("carManagementSplitPercent",),
}


def to_number(value: Any) -> float:
    """Coerce a stored ledger value to a float, treating anything unusable as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, Decimal):
        if value.is_nan():
            return 0.0
        number = float(value)
    elif isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        if not value.strip():
            return 0.0
        parsed = pd.to_numeric([value.strip()], errors='coerce')
        number = parsed[0]
        if pd.isna(number):
            return 0.0
        number = float(number)
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _to_int(value: Any) -> Optional[int]:
    """Parse an integral value (int, whole float or digit string) or return ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip('-').isdigit():
            return int(stripped)
    return None


def to_month(value: Any) -> Optional[int]:
    """Parse a month key (int or numeric string) or return ``None``."""
    return _to_int(value)


class SplitMode(Enum):
    """Owner/operator split convention selected per month."""

    MODE_50 = 50
    MODE_70 = 70

    @classmethod
    def parse(cls, value: Any) -> "SplitMode":
        number = _to_int(value)
        for mode in cls:
            if mode.value == number:
                return mode
        return cls(DEFAULT_MODE)


@dataclass
class DynamicSubcategory:
    """User-defined expense line item with one value per month."""

    name: str
    values: List[Dict[str, Any]] = field(default_factory=list)
    id: Optional[int] = None
    display_order: int = 0

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "DynamicSubcategory":
        values = data.get('values') or []
        if not isinstance(values, list):
            values = []
        return cls(
            name=str(data.get('name', '')),
            values=[v for v in values if isinstance(v, Mapping)],
            id=data.get('id'),
            display_order=int(to_number(data.get('displayOrder'))),
        )

    def value_for(self, month: int) -> float:
        for entry in self.values:
            if to_month(entry.get('month')) == month:
                return to_number(entry.get('value'))
        return 0.0

    def to_payload(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'displayOrder': self.display_order,
            'values': list(self.values),
        }


@dataclass
class FormulaSettings:
    month_modes: Dict[int, SplitMode] = field(default_factory=dict)
    ski_racks_owner: Dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Optional[Mapping[str, Any]]) -> "FormulaSettings":
        if not isinstance(data, Mapping):
            return cls()
        modes: Dict[int, SplitMode] = {}
        for key, value in _as_mapping(data.get('monthModes')).items():
            month = to_month(key)
            if month is not None:
                modes[month] = SplitMode.parse(value)
        owners: Dict[int, str] = {}
        for key, value in _as_mapping(data.get('skiRacksOwner')).items():
            month = to_month(key)
            if month is not None and value:
                owners[month] = str(value)
        return cls(month_modes=modes, ski_racks_owner=owners)

    def mode_for(self, month: int) -> SplitMode:
        return self.month_modes.get(month, SplitMode(DEFAULT_MODE))

    def ski_racks_owner_for(self, month: int) -> str:
        return self.ski_racks_owner.get(month) or DEFAULT_SKI_RACKS_OWNER

    def to_payload(self) -> Dict[str, Any]:
        return {
            'monthModes': {str(m): mode.value for m, mode in sorted(self.month_modes.items())},
            'skiRacksOwner': {str(m): owner for m, owner in sorted(self.ski_racks_owner.items())},
        }


def _as_mapping(value: Any) -> Mapping[Any, Any]:
    return value if isinstance(value, Mapping) else {}


def _parse_subcategories(data: Any) -> Dict[str, List[DynamicSubcategory]]:
    parsed: Dict[str, List[DynamicSubcategory]] = {}
    if not isinstance(data, Mapping):
        return parsed
    for category, items in data.items():
        if not isinstance(items, list):
            continue
        parsed[str(category)] = [
            DynamicSubcategory.from_payload(item) for item in items if isinstance(item, Mapping)
        ]
    return parsed


def _index_rows(rows: Iterable[Any]) -> Dict[int, Mapping[str, Any]]:
    index: Dict[int, Mapping[str, Any]] = {}
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        month = to_month(row.get('month'))
        # first row for a month wins
        if month is not None and month not in index:
            index[month] = row
    return index


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable view of one car's ledger for one year.

    Rows are copied and indexed by month on construction; build a new
    snapshot to see edited data.
    """

    sections: Dict[str, Sequence[Mapping[str, Any]]] = field(default_factory=dict)
    dynamic_subcategories: Dict[str, List[DynamicSubcategory]] = field(default_factory=dict)
    formula: FormulaSettings = field(default_factory=FormulaSettings)
    car_id: Optional[str] = None
    year: Optional[int] = None

    def __post_init__(self) -> None:
        sections = {name: tuple(rows) for name, rows in self.sections.items()}
        object.__setattr__(self, 'sections', sections)
        object.__setattr__(self, '_rows', {name: _index_rows(rows) for name, rows in sections.items()})

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        car_id: Optional[str] = None,
        year: Optional[int] = None,
        dynamic_subcategories: Optional[Mapping[str, Any]] = None,
    ) -> "LedgerSnapshot":
        sections: Dict[str, List[Mapping[str, Any]]] = {}
        for name in (INCOME_SECTION,) + EXPENSE_SECTIONS:
            rows = payload.get(name) or []
            sections[name] = list(rows) if isinstance(rows, list) else []

        subcategories = _parse_subcategories(payload.get('dynamicSubcategories'))
        subcategories.update(_parse_subcategories(dynamic_subcategories))

        return cls(
            sections=sections,
            dynamic_subcategories=subcategories,
            formula=FormulaSettings.from_payload(payload.get('formulaSetting')),
            car_id=car_id,
            year=year,
        )

    def row(self, section: str, month: int) -> Optional[Mapping[str, Any]]:
        return self._rows.get(section, {}).get(month)

    def month_value(self, section: str, month: int, field_name: str) -> float:
        row = self.row(section, month)
        if row is None:
            return 0.0
        value = row.get(field_name)
        if value is None:
            for alias in FIELD_ALIASES.get(field_name, ()):
                value = row.get(alias)
                if value is not None:
                    break
        return to_number(value)

    def income(self, month: int) -> Dict[str, float]:
        """Return every income field for ``month`` keyed by its payload name."""
        return {name: self.month_value(INCOME_SECTION, month, name) for name in INCOME_FIELDS}

    def owner_percent(self, month: int) -> float:
        """Owner share for ``month`` as a fraction (stored 0-100)."""
        return self.month_value(INCOME_SECTION, month, OWNER_SPLIT_FIELD) / 100

    def management_percent(self, month: int) -> float:
        return self.month_value(INCOME_SECTION, month, MANAGEMENT_SPLIT_FIELD) / 100

    def subcategories(self, category: str) -> List[DynamicSubcategory]:
        return self.dynamic_subcategories.get(category, [])

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {name: list(rows) for name, rows in self.sections.items()}
        payload['dynamicSubcategories'] = {
            name: [item.to_payload() for item in items]
            for name, items in self.dynamic_subcategories.items()
        }
        payload['formulaSetting'] = self.formula.to_payload()
        return payload
