import math
from typing import Optional

from config import Settings, get_settings


def drive_time_min(distance_km: float, speed_kmph: float) -> float:
    """Round trip travel time in minutes; 0 when distance or speed is not positive."""
    if distance_km <= 0 or speed_kmph <= 0:
        return 0.0
    return (2 * distance_km / speed_kmph) * 60.0


def line_flow_gpm(pressure_kg: float, settings: Optional[Settings] = None) -> float:
    """Theoretical flow of one supply line at the given pressure (kg/cm2)."""
    settings = settings or get_settings()
    p_psi = pressure_kg * settings.psi_per_kg
    d = settings.hose_diameter_in
    return settings.line_flow_coeff * d * d * math.sqrt(p_psi)


def outflow_gpm(pressure_kg: float, lines: float, rear_factor: float, settings: Optional[Settings] = None) -> float:
    """Total flow the supply lines deliver into a relay truck."""
    return lines * line_flow_gpm(pressure_kg, settings) * rear_factor


def tons_to_gal(tons: float, settings: Optional[Settings] = None) -> float:
    settings = settings or get_settings()
    return tons * settings.gal_per_ton


def litres_to_gal(litres: float, settings: Optional[Settings] = None) -> float:
    settings = settings or get_settings()
    return litres / settings.l_per_gal


def reduction_factor(pct: float) -> float:
    return 1 - pct / 100
