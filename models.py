import math
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class WaterState(BaseModel):
    """Operator-entered snapshot. Counts, flows, distances and times are non-negative."""

    model_config = ConfigDict(allow_inf_nan=False, extra="forbid")

    # Demand
    n15: float = Field(0, ge=0)  # 1.5" nozzles
    n25: float = Field(0, ge=0)  # 2.5" nozzles
    robot_flow: float = Field(250, ge=0)
    robot_count: float = Field(0, ge=0)

    # Tank trucks on scene
    small_truck: float = Field(0, ge=0)  # 2 ton
    normal_truck: float = Field(0, ge=0)  # 4 ton
    reservoir_truck: float = Field(0, ge=0)  # 10 ton
    truck12: float = Field(0, ge=0)  # 12 ton

    # Frontline sources
    hydrant: float = Field(0, ge=0)
    hydrant_flow: float = Field(300, ge=0)
    b_hydrant: float = Field(0, ge=0)
    b_hydrant_flow: float = Field(70, ge=0)
    small_pump: float = Field(0, ge=0)
    small_pump_flow: float = Field(317, ge=0)
    normal_pump: float = Field(0, ge=0)
    normal_flow: float = Field(661, ge=0)
    reservoir_pump: float = Field(0, ge=0)
    reservoir_pump_flow: float = Field(847, ge=0)
    portable_pump: float = Field(0, ge=0)
    portable_pump_flow: float = Field(132, ge=0)

    # Relay configuration
    mod_dist: float = Field(0.5, ge=0)  # km, one way
    mod_lines: float = Field(2, ge=0)
    mod_p: float = Field(3, ge=0)  # kg/cm2
    mod_work: float = Field(5, ge=0)  # minutes
    src_s: float = Field(10, ge=0)  # source truck size, tons
    src_qh: float = Field(300, ge=0)  # nominal source flow
    v2: float = Field(60, ge=0)  # km/h
    v4: float = Field(50, ge=0)
    v10: float = Field(40, ge=0)
    v12: float = Field(40, ge=0)

    # Relay trucks active
    mod_n2: float = Field(0, ge=0)
    mod_n4: float = Field(0, ge=0)
    mod_n10: float = Field(0, ge=0)
    mod_n12: float = Field(0, ge=0)

    # Loss sliders, percent
    front_reduce_pct: float = Field(0, ge=0, le=100)
    rear_reduce_pct: float = Field(0, ge=0, le=100)

    def tank_counts(self) -> Tuple[float, float, float, float]:
        return (self.small_truck, self.normal_truck, self.reservoir_truck, self.truck12)

    def frontline_sources(self) -> List[Tuple[float, float]]:
        return [
            (self.hydrant, self.hydrant_flow),
            (self.b_hydrant, self.b_hydrant_flow),
            (self.small_pump, self.small_pump_flow),
            (self.normal_pump, self.normal_flow),
            (self.reservoir_pump, self.reservoir_pump_flow),
            (self.portable_pump, self.portable_pump_flow),
        ]

    def relay_speeds(self) -> Tuple[float, float, float, float]:
        return (self.v2, self.v4, self.v10, self.v12)

    def relay_counts(self) -> Tuple[float, float, float, float]:
        return (self.mod_n2, self.mod_n4, self.mod_n10, self.mod_n12)


class FillOutcome(str, Enum):
    """How a relay truck fills at the water source truck."""

    INVALID_LINES = "invalid_lines"
    NO_OUTFLOW = "no_outflow"
    SOURCE_REPLENISHED = "source_replenished"
    FULL_BEFORE_DRAIN = "full_before_drain"
    DRAINED_NO_REFILL = "drained_no_refill"
    DRAINED_REFILLING = "drained_refilling"


class RelayModule(BaseModel):
    tons: float
    active_count: float
    drive_min: float
    fill_min: float
    cycle_min: float
    base_lpm: float
    base_gpm: float  # theoretical, running solo
    effective_gpm: float  # after source compression
    fill_outcome: FillOutcome
    source_status_msg: str

    @field_serializer("fill_min", "cycle_min", when_used="json")
    def serialize_time(self, value: float) -> Optional[float]:
        return value if math.isfinite(value) else None


class CalculationResults(BaseModel):
    demand: float
    total_tank_l: float
    total_tank_gal: float
    q_frontline_nominal: float
    q_frontline: float
    q_intake_nominal: float
    q_intake_eff: float
    total_circ_demand: float
    compression: float
    circ_eff: float
    q_supply: float
    net: float
    duration_min: float
    coverage: float

    relay_modules: List[RelayModule]

    hydrant_util_frac: float
    t_fill_source: float
    overall_interval: float
    hydrant_idle_min: float

    bottleneck_msg: str
    hydrant_status_msg: str
    two_phase_msg: str


class Event(BaseModel):
    type: str  # "set" or "reset"
    state: Optional[WaterState] = None  # falls back to the loaded defaults
    field: Optional[str] = None
    value: Optional[float] = None


class EventResult(BaseModel):
    state: WaterState
    results: CalculationResults


class CompositionDetail(BaseModel):
    name: str
    value: int
    count: Optional[float] = None


class CompositionSlice(BaseModel):
    name: str
    value: int
    details: List[CompositionDetail] = []
