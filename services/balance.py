from typing import NamedTuple


class Balance(NamedTuple):
    q_supply: float
    net: float
    duration_min: float
    coverage: float


def evaluate_balance(demand: float, q_frontline: float, circ_eff: float, total_tank_gal: float) -> Balance:
    """
    Net shortfall, tank endurance and coverage.

    A duration of 0 with net == 0 means the supply is sufficient, not that
    the tanks are empty.
    """
    q_supply = q_frontline + circ_eff
    net = max(0.0, demand - q_supply)
    duration_min = total_tank_gal / net if (net > 0 and total_tank_gal > 0) else 0.0
    coverage = min(100.0, (q_supply / demand) * 100.0) if demand > 0 else 0.0
    return Balance(q_supply, net, duration_min, coverage)
