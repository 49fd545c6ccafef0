from typing import NamedTuple, Optional

from config import Settings, get_settings
from models import WaterState
from utils.hydraulics import litres_to_gal, reduction_factor


class SourceSupply(NamedTuple):
    q_frontline_nominal: float
    q_frontline: float
    q_intake_nominal: float
    q_intake_eff: float


def total_demand(state: WaterState, settings: Optional[Settings] = None) -> float:
    """Nozzle and robotic monitor demand in gpm."""
    settings = settings or get_settings()
    return (
        settings.nozzle_15_gpm * state.n15
        + settings.nozzle_25_gpm * state.n25
        + state.robot_flow * state.robot_count
    )


def source_supply(state: WaterState) -> SourceSupply:
    """
    Frontline supply after the front reduction, and the intake available to
    the relay fleet after the rear reduction.
    """
    q_frontline_nominal = sum(count * flow for count, flow in state.frontline_sources())
    q_frontline = q_frontline_nominal * reduction_factor(state.front_reduce_pct)

    q_intake_nominal = state.src_qh
    q_intake_eff = q_intake_nominal * reduction_factor(state.rear_reduce_pct)

    return SourceSupply(q_frontline_nominal, q_frontline, q_intake_nominal, q_intake_eff)


def tank_volume_l(state: WaterState, settings: Optional[Settings] = None) -> float:
    settings = settings or get_settings()
    return sum(count * cap for count, cap in zip(state.tank_counts(), settings.tank_capacities_l))


def tank_volume_gal(state: WaterState, settings: Optional[Settings] = None) -> float:
    return litres_to_gal(tank_volume_l(state, settings), settings)
