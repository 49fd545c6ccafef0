import logging
from typing import List, Optional

from config import Settings, get_settings
from models import CalculationResults, RelayModule, WaterState
from services.aggregators import source_supply, tank_volume_gal, tank_volume_l, total_demand
from services.balance import evaluate_balance
from services.fleet import aggregate_fleet, hydrant_idle_time, overall_interval, source_fill_time
from services.rationals import generate_rationales, hydrant_utilization, source_status_message
from services.relay import ModuleTiming, relay_module
from utils.hydraulics import reduction_factor

logger = logging.getLogger(__name__)


def calculate_all(state: WaterState, settings: Optional[Settings] = None) -> CalculationResults:
    """
    Recompute every result from the full water state.

    Pipeline: demand -> frontline and intake supply -> per-class relay timing
    -> fleet compression -> balance -> diagnostics. Nothing is carried over
    between calls.
    """
    settings = settings or get_settings()
    rear_factor = reduction_factor(state.rear_reduce_pct)

    demand = total_demand(state, settings)
    supply = source_supply(state)

    counts = state.relay_counts()
    timings: List[ModuleTiming] = [
        relay_module(
            tons,
            speed,
            state.mod_p,
            state.mod_lines,
            state.mod_dist,
            state.mod_work,
            state.src_s,
            supply.q_intake_eff,
            rear_factor,
            settings,
        )
        for tons, speed in zip(settings.relay_truck_tons, state.relay_speeds())
    ]

    fleet = aggregate_fleet([t.q_gpm for t in timings], counts, supply.q_intake_eff)

    total_tank_l = tank_volume_l(state, settings)
    total_tank_gal = tank_volume_gal(state, settings)
    balance = evaluate_balance(demand, supply.q_frontline, fleet.circ_eff, total_tank_gal)

    interval = overall_interval([t.cycle_min for t in timings], counts)
    t_fill_source = source_fill_time(state.src_s, supply.q_intake_eff, settings)

    rationales = generate_rationales(
        fleet.total_circ_demand,
        supply.q_intake_eff,
        fleet.compression,
        state.src_s,
        settings,
    )

    relay_modules = [
        RelayModule(
            tons=tons,
            active_count=count,
            drive_min=t.drive_min,
            fill_min=t.fill_min,
            cycle_min=t.cycle_min,
            base_lpm=t.q_lpm,
            base_gpm=t.q_gpm,
            effective_gpm=t.q_gpm * fleet.compression,
            fill_outcome=t.fill.outcome,
            source_status_msg=source_status_message(t.fill.outcome),
        )
        for tons, count, t in zip(settings.relay_truck_tons, counts, timings)
    ]

    logger.info(
        "CALC demand=%.1f supply=%.1f net=%.1f coverage=%.1f compression=%.3f",
        demand,
        balance.q_supply,
        balance.net,
        balance.coverage,
        fleet.compression,
    )

    return CalculationResults(
        demand=demand,
        total_tank_l=total_tank_l,
        total_tank_gal=total_tank_gal,
        q_frontline_nominal=supply.q_frontline_nominal,
        q_frontline=supply.q_frontline,
        q_intake_nominal=supply.q_intake_nominal,
        q_intake_eff=supply.q_intake_eff,
        total_circ_demand=fleet.total_circ_demand,
        compression=fleet.compression,
        circ_eff=fleet.circ_eff,
        q_supply=balance.q_supply,
        net=balance.net,
        duration_min=balance.duration_min,
        coverage=balance.coverage,
        relay_modules=relay_modules,
        hydrant_util_frac=hydrant_utilization(fleet.total_circ_demand, supply.q_intake_eff),
        t_fill_source=t_fill_source,
        overall_interval=interval,
        hydrant_idle_min=hydrant_idle_time(interval, t_fill_source),
        bottleneck_msg=rationales.bottleneck_msg,
        hydrant_status_msg=rationales.hydrant_status_msg,
        two_phase_msg=rationales.two_phase_msg,
    )
