import logging
import math
from typing import NamedTuple, Optional

from config import Settings, get_settings
from models import FillOutcome
from utils.hydraulics import drive_time_min, outflow_gpm, tons_to_gal

logger = logging.getLogger(__name__)


class FillResult(NamedTuple):
    outcome: FillOutcome
    minutes: float


class ModuleTiming(NamedTuple):
    drive_min: float
    fill_min: float
    cycle_min: float
    q_lpm: float
    q_gpm: float
    fill: FillResult


def classify_fill(
    source_tons: float,
    truck_tons: float,
    pressure_kg: float,
    lines: float,
    q_intake_eff: float,
    rear_factor: float,
    settings: Optional[Settings] = None,
) -> FillResult:
    """
    Two-phase drain model for filling one relay truck from the source truck.

    Phase 1 drains the source truck at the full line outflow while the source
    is replenished at q_intake_eff. If the source runs dry before the relay
    truck is full, phase 2 continues at the replenishment rate alone.
    Both the fill time and the source status message are derived from this.
    """
    settings = settings or get_settings()
    if pressure_kg <= 0 or lines <= 0:
        return FillResult(FillOutcome.INVALID_LINES, math.inf)

    vs = tons_to_gal(source_tons, settings)
    vt = tons_to_gal(truck_tons, settings)
    q_out = outflow_gpm(pressure_kg, lines, rear_factor, settings)
    if q_out <= 0:
        return FillResult(FillOutcome.NO_OUTFLOW, math.inf)

    q_net = q_out - q_intake_eff
    t_ideal = vt / q_out
    if q_net <= 0:
        return FillResult(FillOutcome.SOURCE_REPLENISHED, t_ideal)

    t_empty = vs / q_net
    if t_empty >= t_ideal:
        return FillResult(FillOutcome.FULL_BEFORE_DRAIN, t_ideal)
    if q_intake_eff <= 0:
        return FillResult(FillOutcome.DRAINED_NO_REFILL, math.inf)

    return FillResult(
        FillOutcome.DRAINED_REFILLING,
        t_empty + (vt - q_out * t_empty) / q_intake_eff,
    )


def relay_module(
    truck_tons: float,
    speed_kmph: float,
    pressure_kg: float,
    lines: float,
    distance_km: float,
    work_min: float,
    source_tons: float,
    q_intake_eff: float,
    rear_factor: float,
    settings: Optional[Settings] = None,
) -> ModuleTiming:
    """Cycle time and theoretical solo throughput of one relay truck class."""
    settings = settings or get_settings()
    fill = classify_fill(source_tons, truck_tons, pressure_kg, lines, q_intake_eff, rear_factor, settings)

    if fill.outcome is FillOutcome.INVALID_LINES:
        return ModuleTiming(0.0, 0.0, math.inf, 0.0, 0.0, fill)

    t_drive = drive_time_min(distance_km, speed_kmph)
    if not math.isfinite(fill.minutes):
        return ModuleTiming(t_drive, math.inf, math.inf, 0.0, 0.0, fill)

    tc = t_drive + work_min + fill.minutes
    q_l = (truck_tons * 1000) / tc if tc > 0 else 0.0
    q_g = q_l / settings.l_per_gal

    logger.debug(
        "RELAY truck=%.0ft drive=%.2f fill=%.2f cycle=%.2f q_gpm=%.1f outcome=%s",
        truck_tons,
        t_drive,
        fill.minutes,
        tc,
        q_g,
        fill.outcome.value,
    )
    return ModuleTiming(t_drive, fill.minutes, tc, q_l, q_g, fill)
