import pytest

from fleet_payables import config
from fleet_payables.carry_over import carry_over
from fleet_payables.ledger import LedgerSnapshot


def _ledger(income=None, modes=None, **sections):
    payload = {'incomeExpenses': income or [], 'formulaSetting': {'monthModes': modes or {}}}
    payload.update(sections)
    return LedgerSnapshot.from_payload(payload)


def test_first_regime_year_never_carries():
    ledger = _ledger(
        income=[{'month': 1, 'rentalIncome': 0}],
        cogs=[{'month': 1, 'carPayment': 5000}],
    )
    for month in range(1, 13):
        assert carry_over(ledger, 2019, month) == 0


def test_january_carries_nothing_by_default():
    ledger = _ledger(cogs=[{'month': 1, 'carPayment': 5000}])
    previous = _ledger(income=[{'month': 12, 'deliveryIncome': 900}])
    assert carry_over(ledger, 2026, 1) == 0
    assert carry_over(ledger, 2026, 1, previous=previous) == 0


def test_deficits_accumulate_across_months():
    ledger = _ledger(
        income=[
            {'month': 1, 'rentalIncome': 100, 'carOwnerSplit': 50},
            {'month': 2, 'rentalIncome': 0, 'carOwnerSplit': 50},
        ],
        cogs=[
            {'month': 1, 'carPayment': 500},
            {'month': 2, 'tires': 100},
        ],
    )
    assert carry_over(ledger, 2026, 2) == -400
    # month 2's own deficit stacks on the one it inherited
    assert carry_over(ledger, 2026, 3) == -500


def test_positive_month_clears_the_deficit():
    ledger = _ledger(
        income=[
            {'month': 1, 'rentalIncome': 100},
            {'month': 2, 'rentalIncome': 1000},
        ],
        cogs=[{'month': 1, 'carPayment': 500}],
    )
    assert carry_over(ledger, 2024, 2) == -400
    assert carry_over(ledger, 2024, 3) == 0


def test_current_month_mode_governs_previous_month():
    income = [{'month': 1, 'rentalIncome': 1000, 'carOwnerSplit': 30}]
    parking = [{'month': 1, 'glaParkingFee': 800}]

    seventy_in_february = _ledger(income=income, modes={'1': 50, '2': 70}, parkingFeeLabor=parking)
    # 70 mode: 0 - 800 + 1000 * 0.3
    assert carry_over(seventy_in_february, 2026, 2) == pytest.approx(-500)

    seventy_in_january = _ledger(income=income, modes={'1': 70, '2': 50}, parkingFeeLabor=parking)
    # 50 mode ignores parking fee labor and keeps the full rental income
    assert carry_over(seventy_in_january, 2026, 2) == 0


def test_seventy_mode_passes_smoking_fines_and_miles():
    ledger = _ledger(
        income=[{'month': 4, 'rentalIncome': 200, 'milesIncome': 100, 'smokingFines': 50, 'carOwnerSplit': 50}],
        modes={'5': 70},
        directDelivery=[{'month': 4, 'laborDelivery': 600}],
    )
    # part1 = 100 + 5; part2 = (200 - 50 - 100) * 0.5 = 25
    assert carry_over(ledger, 2026, 5) == pytest.approx(105 - 600 + 25)


def test_fifty_mode_subtracts_dynamic_subcategories():
    ledger = _ledger(
        income=[{'month': 6, 'rentalIncome': 100}],
        dynamicSubcategories={
            'directDelivery': [{'name': 'Valet', 'values': [{'month': 6, 'value': 150}]}],
            'parkingFeeLabor': [{'name': 'Garage', 'values': [{'month': 6, 'value': 1000}]}],
        },
    )
    assert carry_over(ledger, 2022, 7) == -50


def test_prior_december_policy_reads_previous_year_income(monkeypatch):
    monkeypatch.setattr(config, 'JANUARY_CARRY_OVER', 'prior_december_income')
    ledger = _ledger()
    previous = _ledger(
        income=[{'month': 12, 'rentalIncome': 100, 'deliveryIncome': 300}],
        cogs=[{'month': 12, 'carPayment': 10000}],
    )

    # December expenses are not carried, only its income fields
    assert carry_over(ledger, 2026, 1, previous=previous) == -200
    assert carry_over(ledger, 2026, 1) == 0
    assert carry_over(ledger, 2019, 1, previous=previous) == 0


def test_unknown_policy_falls_back_to_zero(monkeypatch):
    monkeypatch.setattr(config, 'JANUARY_CARRY_OVER', 'something-else')
    previous = _ledger(income=[{'month': 12, 'deliveryIncome': 300}])
    assert carry_over(_ledger(), 2026, 1, previous=previous) == 0


@pytest.mark.parametrize('month', [0, 13, -1, '3', 2.0])
def test_invalid_month_raises(month):
    with pytest.raises(ValueError):
        carry_over(_ledger(), 2026, month)
