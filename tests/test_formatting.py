from fleet_payables.formatting import format_currency, round_currency


def test_round_currency_half_up():
    assert round_currency(0.125) == 0.13
    assert round_currency(550) == 550.0
    assert round_currency(1234.5678) == 1234.57
    assert round_currency(-0.125) == -0.13


def test_round_currency_uses_the_stored_binary_value():
    # 1.005 and 2.675 are stored just below the half cent
    assert round_currency(1.005) == 1.0
    assert round_currency(2.675) == 2.67
    assert round_currency(10.005) == 10.0


def test_round_currency_never_returns_negative_zero():
    assert str(round_currency(-0.001)) == '0.0'
    assert str(round_currency(-0.0)) == '0.0'


def test_format_currency():
    assert format_currency(1234.56) == '$1,234.56'
    assert format_currency(1234.56, include_sign=False) == '1,234.56'
    assert format_currency(0) == '$0.00'
    assert format_currency(0.125) == '$0.13'
    assert format_currency(1.005) == '$1.00'
