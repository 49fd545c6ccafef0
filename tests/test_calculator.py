import math

import pytest

from config import Settings
from models import FillOutcome, WaterState
from services.calculator import calculate_all
from utils.hydraulics import outflow_gpm


def test_all_zero_state(zero_state: WaterState) -> None:
    res = calculate_all(zero_state)
    assert res.demand == 0
    assert res.net == 0
    assert res.coverage == 0
    assert res.total_tank_l == 0
    assert res.duration_min == 0
    assert res.overall_interval == 0
    assert all(m.fill_outcome is FillOutcome.INVALID_LINES for m in res.relay_modules)
    assert all(m.cycle_min == math.inf for m in res.relay_modules)
    assert res.bottleneck_msg == "水源與車隊尚未計算"
    assert res.two_phase_msg == "資料不足"


def test_single_hydrant_covers_two_small_lines(zero_state: WaterState) -> None:
    state = zero_state.model_copy(update={"n15": 2, "hydrant": 1, "hydrant_flow": 300})
    res = calculate_all(state)
    assert res.demand == 200
    assert res.q_frontline == 300
    assert res.q_supply == 300
    assert res.net == 0
    assert res.coverage == 100
    assert res.duration_min == 0


def test_single_two_ton_relay_truck(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"mod_n2": 1}))
    m2 = res.relay_modules[0]

    t_fill = 2 * 264 / outflow_gpm(3, 2, 1.0)
    assert m2.tons == 2
    assert m2.drive_min == pytest.approx(1.0)
    assert m2.fill_outcome is FillOutcome.FULL_BEFORE_DRAIN
    assert m2.fill_min == pytest.approx(t_fill)
    assert m2.cycle_min == pytest.approx(1.0 + 5 + t_fill)
    assert m2.base_gpm == pytest.approx(2000 / m2.cycle_min / 3.785)
    assert res.total_circ_demand == pytest.approx(m2.base_gpm * 1)
    assert res.compression == 1.0
    assert res.circ_eff == pytest.approx(m2.base_gpm)
    assert m2.effective_gpm == pytest.approx(m2.base_gpm)
    assert res.overall_interval == pytest.approx(m2.cycle_min)
    assert res.t_fill_source == pytest.approx(10000 / (300 * 3.785))
    assert res.hydrant_idle_min == 0


def test_zero_intake_compresses_fleet_to_nothing(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"src_qh": 0, "mod_n2": 1}))
    assert res.q_intake_eff == 0
    assert res.total_circ_demand > 0
    assert res.compression == 0
    assert res.circ_eff == 0
    assert res.bottleneck_msg == "折減後取水為 0，水源為瓶頸"
    assert res.hydrant_status_msg == "無法計算 (取水為0)"
    assert res.hydrant_util_frac == 0


def test_source_limited_fleet(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"mod_n2": 10, "mod_n12": 5, "src_qh": 100}))
    assert res.compression < 1
    assert res.circ_eff == pytest.approx(100)
    assert res.bottleneck_msg.startswith("水源為瓶頸")
    for m in res.relay_modules:
        assert m.effective_gpm == pytest.approx(m.base_gpm * res.compression)


def test_inactive_class_reports_only_theoretical_throughput(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"mod_n2": 1}))
    m4 = res.relay_modules[1]
    assert m4.active_count == 0
    assert m4.base_gpm > 0
    assert res.total_circ_demand == pytest.approx(res.relay_modules[0].base_gpm)


def test_total_rear_loss_stops_the_relay(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"mod_n4": 2, "rear_reduce_pct": 100}))
    assert res.q_intake_eff == 0
    assert all(m.fill_outcome is FillOutcome.NO_OUTFLOW for m in res.relay_modules)
    assert all(m.source_status_msg == "供水線流量為 0" for m in res.relay_modules)
    assert res.total_circ_demand == 0
    assert res.compression == 0


def test_tank_endurance(default_state: WaterState) -> None:
    res = calculate_all(default_state.model_copy(update={"n25": 5, "reservoir_truck": 1}))
    assert res.net == pytest.approx(1000)
    assert res.total_tank_gal == pytest.approx(10000 / 3.785)
    assert res.duration_min == pytest.approx(10000 / 3.785 / 1000)


@pytest.mark.parametrize(
    "update",
    [
        {},
        {"n25": 4, "mod_n2": 3, "mod_n10": 2},
        {"n15": 6, "mod_n12": 8, "src_qh": 50, "src_s": 2},
        {"n25": 10, "hydrant": 2, "front_reduce_pct": 40, "rear_reduce_pct": 30, "mod_n4": 4},
        {"robot_count": 2, "mod_n2": 1, "mod_lines": 0},
    ],
)
def test_bounded_ratios(default_state: WaterState, update: dict) -> None:
    res = calculate_all(default_state.model_copy(update=update))
    assert 0 <= res.compression <= 1
    assert 0 <= res.coverage <= 100
    assert res.net >= 0
    assert res.duration_min >= 0


@pytest.mark.parametrize(
    "field", ["hydrant", "b_hydrant", "small_pump", "normal_pump", "reservoir_pump", "portable_pump"]
)
def test_more_frontline_sources_never_hurt(default_state: WaterState, field: str) -> None:
    previous = None
    for count in range(6):
        res = calculate_all(default_state.model_copy(update={"n25": 5, field: count}))
        if previous is not None:
            assert res.q_frontline >= previous.q_frontline
            assert res.q_supply >= previous.q_supply
            assert res.coverage >= previous.coverage
            assert res.net <= previous.net
        previous = res


def test_recalculation_is_idempotent(default_state: WaterState) -> None:
    state = default_state.model_copy(update={"n25": 3, "mod_n2": 2, "mod_n10": 1})
    assert calculate_all(state) == calculate_all(state)


def test_custom_constants_change_line_flow(default_state: WaterState) -> None:
    state = default_state.model_copy(update={"mod_n2": 1})
    narrow = calculate_all(state, Settings(hose_diameter_in=1.5))
    standard = calculate_all(state)
    assert narrow.relay_modules[0].fill_min > standard.relay_modules[0].fill_min
