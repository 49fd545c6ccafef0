from typing import NamedTuple, Optional

from config import Settings, get_settings
from models import FillOutcome
from utils.formatting import to_fixed
from utils.hydraulics import tons_to_gal


SOURCE_STATUS_MESSAGES = {
    FillOutcome.INVALID_LINES: "請設定供水線數與出水壓力",
    FillOutcome.NO_OUTFLOW: "供水線流量為 0",
    FillOutcome.SOURCE_REPLENISHED: "供水車不會被抽乾 (補水≥出水)",
    FillOutcome.FULL_BEFORE_DRAIN: "加滿循環車前不會抽乾",
    FillOutcome.DRAINED_NO_REFILL: "加滿前會被抽乾 (無法再補水)",
    FillOutcome.DRAINED_REFILLING: "加滿前會被抽乾 (依賴後段補水)",
}


class Rationales(NamedTuple):
    bottleneck_msg: str
    hydrant_status_msg: str
    two_phase_msg: str


def source_status_message(outcome: FillOutcome) -> str:
    return SOURCE_STATUS_MESSAGES[outcome]


def hydrant_utilization(total_circ_demand: float, q_intake_eff: float) -> float:
    """Fleet demand as a fraction of the reduced intake; 0 when either is not positive."""
    if q_intake_eff > 0 and total_circ_demand > 0:
        return total_circ_demand / q_intake_eff
    return 0.0


def bottleneck_message(total_circ_demand: float, q_intake_eff: float, compression: float) -> str:
    if total_circ_demand <= 0:
        return "水源與車隊尚未計算"
    if q_intake_eff <= 0:
        return "折減後取水為 0，水源為瓶頸"
    if compression >= 1:
        share = (total_circ_demand / q_intake_eff) * 100
        return f"水源充足，車隊為限制 (車隊佔水源 {to_fixed(share, 0)}%)"
    return f"水源為瓶頸 (車隊僅發揮 {to_fixed(compression * 100, 0)}% 效能)"


def hydrant_status_message(
    total_circ_demand: float,
    q_intake_eff: float,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    if total_circ_demand <= 0:
        return "未投入車隊"
    if q_intake_eff <= 0:
        return "無法計算 (取水為0)"

    util_pct = hydrant_utilization(total_circ_demand, q_intake_eff) * 100
    if util_pct >= settings.util_severe_pct:
        return f"嚴重不足 (>{to_fixed(settings.util_severe_pct, 0)}%)：需求遠大於水源，請立即增加水源或減線！"
    if util_pct >= settings.util_saturated_pct:
        return f"已成瓶頸 ({to_fixed(settings.util_saturated_pct, 0)}%)：水源極限，無法再加車"
    if util_pct >= settings.util_high_pct:
        return f"利用率偏高 ({to_fixed(settings.util_high_pct, 0)}%+)：水源接近滿載"
    return "利用率中低 (有餘裕)：可繼續增加循環車輛"


def two_phase_message(
    total_circ_demand: float,
    q_intake_eff: float,
    source_tons: float,
    settings: Optional[Settings] = None,
) -> str:
    """Short-term flow while the source truck holds water, long-term flow once it is drained."""
    if total_circ_demand <= 0 or q_intake_eff <= 0 or source_tons <= 0:
        return "資料不足"

    long_term = min(total_circ_demand, q_intake_eff)
    net_drain = total_circ_demand - q_intake_eff
    if net_drain <= 0:
        return f"供水穩定\n長期可維持 {to_fixed(long_term, 0)} gpm"

    drain_time = tons_to_gal(source_tons, settings) / net_drain
    return (
        f"短期 (約{to_fixed(drain_time, 0)}分內): 供水車有水，維持 {to_fixed(total_circ_demand, 0)} gpm\n"
        f"長期 (> {to_fixed(drain_time, 0)}分): 供水車抽乾，降至 {to_fixed(long_term, 0)} gpm"
    )


def generate_rationales(
    total_circ_demand: float,
    q_intake_eff: float,
    compression: float,
    source_tons: float,
    settings: Optional[Settings] = None,
) -> Rationales:
    """Human-readable diagnosis of the relay operation."""
    return Rationales(
        bottleneck_message(total_circ_demand, q_intake_eff, compression),
        hydrant_status_message(total_circ_demand, q_intake_eff, settings),
        two_phase_message(total_circ_demand, q_intake_eff, source_tons, settings),
    )
