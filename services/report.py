import math
from typing import List, Tuple

from models import CalculationResults, CompositionDetail, CompositionSlice, WaterState
from utils.formatting import round_half_up
from utils.hydraulics import reduction_factor

FRONTLINE_LABELS = ["消防栓", "建築設備", "小型車抽水", "一般車抽水", "水庫車抽水", "移動幫浦"]


def duration_parts(duration_min: float) -> Tuple[int, int]:
    """Split minutes into whole minutes and seconds, rounding on total seconds so 60s never shows."""
    total_seconds = round_half_up(duration_min * 60)
    return total_seconds // 60, total_seconds % 60


def endurance_text(res: CalculationResults) -> str:
    if res.net <= 0:
        return "充足 ∞"
    if not math.isfinite(res.duration_min):
        return "-"
    minutes, seconds = duration_parts(res.duration_min)
    return f"{minutes}分{seconds}秒"


def build_report(res: CalculationResults) -> str:
    """Plain-text summary for pasting into radio logs or chat."""
    status = "不足" if res.net > 0 else "充足"
    return (
        "[水源計算機報表]\n"
        f"總需求: {round_half_up(res.demand)} gpm\n"
        f"總供給: {round_half_up(res.q_frontline + res.circ_eff)} gpm\n"
        f"淨需求: {round_half_up(res.net)} gpm ({status})\n"
        f"水箱撐時: {endurance_text(res)}\n"
        f"供需覆蓋率: {round_half_up(res.coverage)}%"
    )


def _frontline_details(state: WaterState) -> List[CompositionDetail]:
    front_factor = reduction_factor(state.front_reduce_pct)
    return [
        CompositionDetail(name=label, value=round_half_up(count * flow * front_factor))
        for label, (count, flow) in zip(FRONTLINE_LABELS, state.frontline_sources())
        if count * flow > 0
    ]


def _relay_details(res: CalculationResults) -> List[CompositionDetail]:
    return [
        CompositionDetail(
            name=f"{m.tons:g}噸車",
            value=round_half_up(m.active_count * m.effective_gpm),
            count=m.active_count,
        )
        for m in res.relay_modules
        if m.active_count > 0
    ]


def _shortfall_details(res: CalculationResults) -> List[CompositionDetail]:
    return [
        CompositionDetail(name="總需求", value=round_half_up(res.demand)),
        CompositionDetail(name="總供給 (現場+循環)", value=-round_half_up(res.q_frontline + res.circ_eff)),
        CompositionDetail(name="淨需求", value=round_half_up(res.net)),
    ]


def supply_composition(state: WaterState, res: CalculationResults) -> List[CompositionSlice]:
    """
    Frontline, relay and shortfall shares of the demand, each broken down
    into its contributors. Empty slices are dropped.
    """
    slices = [
        CompositionSlice(name="現場", value=round_half_up(res.q_frontline), details=_frontline_details(state)),
        CompositionSlice(name="循環", value=round_half_up(res.circ_eff), details=_relay_details(res)),
        CompositionSlice(name="淨需求", value=round_half_up(res.net), details=_shortfall_details(res)),
    ]
    return [s for s in slices if s.value > 0]
