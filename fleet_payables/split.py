"""Car owner split for a single month.

Every formula variant is spelled out here, dispatched on the year regime,
the month's mode and (from 2026) who owns the ski-rack income.  All
branches are floored at zero.
"""

from __future__ import annotations

from typing import Optional

from . import config
from .carry_over import carry_over, check_month
from .categories import COGS, DIRECT_DELIVERY, PARKING_FEE_LABOR, category_totals
from .ledger import FormulaSettings, LedgerSnapshot, SplitMode
from .regimes import YearRegime, regime_for_year


def _floor_at_zero(calculation: float) -> float:
    return calculation if calculation > 0 else 0.0


def owner_split(
    ledger: LedgerSnapshot,
    settings: Optional[FormulaSettings],
    year: int,
    month: int,
    previous: Optional[LedgerSnapshot] = None,
) -> float:
    """Amount payable to the car owner for ``month`` of ``year``.

    Args:
        ledger: Snapshot of the requested year
        settings: Formula settings; ``None`` uses ``ledger.formula``
        year: Ledger year
        month: Month number (1-12)
        previous: Snapshot of ``year - 1`` (only read for January carry-over)

    Returns:
        The unrounded payable amount, never negative

    Raises:
        ValueError: If ``month`` is outside 1-12
    """
    check_month(month)
    if regime_for_year(year) is YearRegime.NO_CALCULATION:
        return 0.0
    if settings is None:
        settings = ledger.formula
    co = carry_over(ledger, year, month, previous, settings)
    return split_with_carry_over(ledger, settings, year, month, co)


def split_with_carry_over(
    ledger: LedgerSnapshot,
    settings: FormulaSettings,
    year: int,
    month: int,
    co: float,
) -> float:
    """Owner split for ``month`` given an already computed carry-over ``co``."""
    regime = regime_for_year(year)
    if regime is YearRegime.NO_CALCULATION:
        return 0.0

    owner_percent = ledger.owner_percent(month)
    income = ledger.income(month)
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

    totals = category_totals(ledger, month)
    direct_delivery = totals[DIRECT_DELIVERY]
    cogs = totals[COGS]
    parking_fee_labor = totals[PARKING_FEE_LABOR]

    smoking_share = smoking * config.SMOKING_FINES_OWNER_RATE
    mode = settings.mode_for(month)

    # Owner share of rental after carry-over and shared expenses (50 mode)
    net_rental_50 = (rental + co - delivery - electric - gas - smoking - miles - ski_racks
                     - child_seat - coolers - insurance_wreck - other
                     - direct_delivery - cogs) * owner_percent
    # Owner share of rental net of ancillary income (70 mode)
    net_rental_70 = (rental - delivery - electric - gas - miles - ski_racks - child_seat
                     - coolers - insurance_wreck - smoking - other) * owner_percent

    if regime is YearRegime.CURRENT:
        gla_owns_ski_racks = settings.ski_racks_owner_for(month) == config.DEFAULT_SKI_RACKS_OWNER
        if mode is SplitMode.MODE_50:
            if ski_racks == 0:
                part1 = miles + (smoking_share + ski_racks * owner_percent)
            elif gla_owns_ski_racks:
                part1 = miles + smoking_share
            else:
                part1 = (miles + ski_racks) + smoking_share
            return _floor_at_zero(part1 + net_rental_50)

        if ski_racks == 0:
            part1 = ((ski_racks * owner_percent + miles) - direct_delivery - cogs
                     - parking_fee_labor + co + smoking_share)
        elif gla_owns_ski_racks:
            part1 = miles - direct_delivery - cogs - parking_fee_labor + co + smoking_share
        else:
            part1 = (ski_racks + miles - direct_delivery - cogs - parking_fee_labor
                     + co + smoking_share)
        return _floor_at_zero(part1 + net_rental_70)

    # Legacy regime
    if mode is SplitMode.MODE_50:
        part1 = miles + (ski_racks * owner_percent + child_seat * owner_percent
                         + coolers * owner_percent + insurance_wreck * owner_percent
                         + other * owner_percent)
        return _floor_at_zero(part1 + net_rental_50)

    part1 = miles - direct_delivery - cogs - parking_fee_labor + co + smoking_share
    return _floor_at_zero(part1 + net_rental_70)
