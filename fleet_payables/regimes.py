"""Year-dependent formula regimes and mode defaults."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .config import CURRENT_REGIME_START_YEAR, LEGACY_REGIME_START_YEAR, MODE_SPLIT_PERCENTAGES
from .ledger import SplitMode


class YearRegime(Enum):
    NO_CALCULATION = 'no_calculation'
    LEGACY = 'legacy'
    CURRENT = 'current'


def regime_for_year(year: int) -> YearRegime:
    """Return the formula regime that applies to ``year``.

    Example:
        >>> regime_for_year(2018)
        <YearRegime.NO_CALCULATION: 'no_calculation'>
        >>> regime_for_year(2025)
        <YearRegime.LEGACY: 'legacy'>
        >>> regime_for_year(2026)
        <YearRegime.CURRENT: 'current'>
    """
    if year < LEGACY_REGIME_START_YEAR:
        return YearRegime.NO_CALCULATION
    if year < CURRENT_REGIME_START_YEAR:
        return YearRegime.LEGACY
    return YearRegime.CURRENT


def split_percentages_for_mode(mode: SplitMode) -> Tuple[int, int]:
    """Return the ``(management, owner)`` percentages stored when a month switches to ``mode``."""
    return MODE_SPLIT_PERCENTAGES[mode.value]
