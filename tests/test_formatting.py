import pytest

from utils.formatting import round_half_up, to_fixed


@pytest.mark.parametrize("value, expected", [(62.5, 63), (0.5, 1), (2.4, 2), (2.6, 3), (0, 0)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, digits, expected",
    [(62.5, 0, "63"), (26.4, 0, "26"), (2.25, 1, "2.3"), (400, 0, "400"), (1.005, 2, "1.00")],
)
def test_to_fixed(value: float, digits: int, expected: str) -> None:
    assert to_fixed(value, digits) == expected
