from typing import NamedTuple, Optional, Sequence

import numpy as np

from config import Settings, get_settings


class FleetSupply(NamedTuple):
    total_circ_demand: float
    compression: float
    circ_eff: float


def aggregate_fleet(
    base_gpm: Sequence[float],
    counts: Sequence[float],
    q_intake_eff: float,
) -> FleetSupply:
    """
    Sum the theoretical throughput of every active truck, then cap it by the
    shared intake. Every class is scaled by the same compression factor.
    """
    total_circ_demand = float(np.dot(np.asarray(base_gpm, dtype=float), np.asarray(counts, dtype=float)))

    if total_circ_demand <= 0:
        compression = 0.0
    elif q_intake_eff <= 0:
        compression = 0.0
    else:
        compression = min(1.0, q_intake_eff / total_circ_demand)

    return FleetSupply(total_circ_demand, compression, total_circ_demand * compression)


def overall_interval(cycle_min: Sequence[float], counts: Sequence[float]) -> float:
    """Average minutes between relay truck arrivals; 0 when no active truck completes a cycle."""
    cycles = np.asarray(cycle_min, dtype=float)
    active = np.asarray(counts, dtype=float)
    mask = (active > 0) & np.isfinite(cycles) & (cycles > 0)
    if not mask.any():
        return 0.0
    trips_per_min = float(np.sum(active[mask] / cycles[mask]))
    return 1 / trips_per_min if trips_per_min > 0 else 0.0


def source_fill_time(source_tons: float, q_intake_eff: float, settings: Optional[Settings] = None) -> float:
    """Minutes the intake needs to refill the source truck once."""
    settings = settings or get_settings()
    if q_intake_eff <= 0 or source_tons <= 0:
        return 0.0
    return (source_tons * 1000) / (q_intake_eff * settings.l_per_gal)


def hydrant_idle_time(interval_min: float, t_fill_source: float) -> float:
    """Minutes per relay round the hydrant waits on trucks."""
    return max(0.0, interval_min - t_fill_source)
