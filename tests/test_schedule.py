import pytest

from fleet_payables.carry_over import carry_over
from fleet_payables.ledger import LedgerSnapshot
from fleet_payables.schedule import SCHEDULE_COLUMNS, owner_split_schedule
from fleet_payables.split import owner_split


def _busy_ledger():
    income = []
    for month in range(1, 13):
        income.append({
            'month': month,
            'rentalIncome': 250.25 * (month % 4),
            'deliveryIncome': 12.5,
            'smokingFines': 40 if month % 3 == 0 else 0,
            'milesIncome': 33.3,
            'skiRacksIncome': 20 if month in (1, 2, 12) else 0,
            'otherIncome': 7.77,
            'carOwnerSplit': 30 if month % 2 else 50,
            'carManagementSplit': 70 if month % 2 else 50,
        })
    return LedgerSnapshot.from_payload({
        'incomeExpenses': income,
        'directDelivery': [{'month': m, 'laborDelivery': 45.1} for m in range(1, 13)],
        'cogs': [{'month': m, 'carPayment': 410.0, 'tires': 99.99 if m == 5 else 0} for m in range(1, 13)],
        'parkingFeeLabor': [{'month': m, 'glaParkingFee': 60} for m in range(1, 13)],
        'dynamicSubcategories': {
            'cogs': [{'name': 'Detailing', 'values': [{'month': 6, 'value': 300}, {'month': 7, 'value': 15}]}],
        },
        'formulaSetting': {
            'monthModes': {'2': 70, '3': 70, '8': 70, '11': 70},
            'skiRacksOwner': {'12': 'Owner'},
        },
    })


def test_schedule_shape():
    schedule = owner_split_schedule(_busy_ledger(), 2026)
    assert list(schedule.index) == list(range(1, 13))
    assert list(schedule.columns) == SCHEDULE_COLUMNS
    assert schedule.loc[2, 'mode'] == 70
    assert schedule.loc[4, 'mode'] == 50


@pytest.mark.parametrize('year', [2018, 2019, 2023, 2026])
def test_schedule_matches_per_month_calculations(year):
    ledger = _busy_ledger()
    schedule = owner_split_schedule(ledger, year)

    for month in range(1, 13):
        assert schedule.loc[month, 'carry_over'] == carry_over(ledger, year, month)
        assert schedule.loc[month, 'owner_split'] == owner_split(ledger, None, year, month)


def test_schedule_carries_deficits_and_floors_splits():
    schedule = owner_split_schedule(_busy_ledger(), 2026)
    assert (schedule['carry_over'] <= 0).all()
    assert (schedule['owner_split'] >= 0).all()
    assert schedule['carry_over'].min() < 0


def test_first_regime_year_has_no_carry_over():
    schedule = owner_split_schedule(_busy_ledger(), 2019)
    assert (schedule['carry_over'] == 0).all()


def test_schedule_includes_expense_attribution():
    schedule = owner_split_schedule(_busy_ledger(), 2026)
    # month 6: direct delivery 45.1, cogs 410 + 300, owner share 50%
    assert schedule.loc[6, 'owner_expenses'] == pytest.approx((45.1 + 710.0) * 0.5)
    assert schedule.loc[6, 'total_cogs'] == pytest.approx(710.0)
    assert schedule.loc[6, 'total_parking_fee_labor'] == 60
