"""Monthly totals for the expense categories of a car ledger.

A category total is the sum of its fixed line items for the month plus the
month's value of every dynamic subcategory the user defined for it.
"""

from __future__ import annotations

from typing import Dict

from .ledger import LedgerSnapshot

DIRECT_DELIVERY = 'directDelivery'
COGS = 'cogs'
PARKING_FEE_LABOR = 'parkingFeeLabor'
REIMBURSED_BILLS = 'reimbursedBills'

CATEGORY_FIELDS: Dict[str, tuple] = {
    DIRECT_DELIVERY: (
        'laborCarCleaning',
        'laborDelivery',
        'parkingAirport',
        'parkingLot',
        'uberLyftLime',
    ),
    COGS: (
        'autoBodyShopWreck',
        'alignment',
        'battery',
        'brakes',
        'carPayment',
        'carInsurance',
        'carSeats',
        'cleaningSuppliesTools',
        'emissions',
        'gpsSystem',
        'keyFob',
        'laborCleaning',
        'licenseRegistration',
        'mechanic',
        'oilLube',
        'parts',
        'skiRacks',
        'tickets',
        'tiredAirStation',
        'tires',
        'towingImpoundFees',
        'uberLyftLime',
        'windshield',
        'wipers',
    ),
    PARKING_FEE_LABOR: (
        'glaParkingFee',
        'laborCleaning',
    ),
    REIMBURSED_BILLS: (
        'electricReimbursed',
        'electricNotReimbursed',
        'gasReimbursed',
        'gasNotReimbursed',
        'gasServiceRun',
        'parkingAirport',
        'uberLyftLimeNotReimbursed',
        'uberLyftLimeReimbursed',
    ),
}

# Categories that feed the owner split and carry-over formulas
SPLIT_CATEGORIES = (DIRECT_DELIVERY, COGS, PARKING_FEE_LABOR)


def total_for_category(ledger: LedgerSnapshot, category: str, month: int) -> float:
    """Sum a category's fixed fields and dynamic subcategories for ``month``.

    Args:
        ledger: Ledger snapshot for one car and year
        category: One of the keys of ``CATEGORY_FIELDS``
        month: Month number (1-12)

    Returns:
        The category total; absent data contributes 0

    Raises:
        ValueError: If ``category`` is not a known expense category

    Example:
        >>> ledger = LedgerSnapshot.from_payload({
        ...     'dynamicSubcategories': {'cogs': [{'name': 'Detailing', 'values': [{'month': 3, 'value': 50}]}]},
        ... })
        >>> total_for_category(ledger, 'cogs', 3)
        50.0
    """
    try:
        fields = CATEGORY_FIELDS[category]
    except KeyError:
        raise ValueError(f"Unknown expense category: {category}") from None

    fixed_total = 0.0
    for name in fields:
        fixed_total += ledger.month_value(category, month, name)

    dynamic_total = 0.0
    for subcategory in ledger.subcategories(category):
        dynamic_total += subcategory.value_for(month)

    return fixed_total + dynamic_total


def category_totals(ledger: LedgerSnapshot, month: int) -> Dict[str, float]:
    """Totals of the three split categories for ``month``."""
    return {category: total_for_category(ledger, category, month) for category in SPLIT_CATEGORIES}


def expense_attribution(ledger: LedgerSnapshot, month: int) -> Dict[str, float]:
    """Split a month's expenses between car management and the car owner.

    Reimbursed bills are borne by management in full; direct delivery and
    COGS are shared by the stored management and owner percentages.
    """
    mgmt_percent = ledger.management_percent(month)
    owner_percent = ledger.owner_percent(month)
    direct_delivery = total_for_category(ledger, DIRECT_DELIVERY, month)
    cogs = total_for_category(ledger, COGS, month)
    reimbursed = total_for_category(ledger, REIMBURSED_BILLS, month)

    management_expenses = reimbursed + (direct_delivery * mgmt_percent) + (cogs * mgmt_percent)
    owner_expenses = (direct_delivery * owner_percent) + (cogs * owner_percent)
    return {
        'management_expenses': management_expenses,
        'owner_expenses': owner_expenses,
        'total_expenses': management_expenses + owner_expenses,
    }
