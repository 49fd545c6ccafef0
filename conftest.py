import pytest

from models import WaterState


@pytest.fixture
def zero_state() -> WaterState:
    return WaterState(**{name: 0 for name in WaterState.model_fields})


@pytest.fixture
def default_state() -> WaterState:
    return WaterState()
