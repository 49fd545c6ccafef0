import pytest

from services.balance import evaluate_balance


def test_shortfall_with_tank_endurance() -> None:
    balance = evaluate_balance(500, 300, 100, 1000)
    assert balance.q_supply == pytest.approx(400)
    assert balance.net == pytest.approx(100)
    assert balance.duration_min == pytest.approx(10)
    assert balance.coverage == pytest.approx(80)


def test_sufficient_supply_caps_coverage() -> None:
    balance = evaluate_balance(200, 300, 0, 5000)
    assert balance.net == 0
    assert balance.duration_min == 0
    assert balance.coverage == 100


def test_shortfall_without_tanks() -> None:
    balance = evaluate_balance(500, 0, 0, 0)
    assert balance.net == 500
    assert balance.duration_min == 0
    assert balance.coverage == 0


def test_no_demand() -> None:
    balance = evaluate_balance(0, 0, 0, 0)
    assert balance == (0, 0, 0, 0)
