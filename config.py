"""
Water supply relay calculator
Configuration Settings
"""

from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and physical constants, overridable from the environment."""

    # Application
    app_name: str = "Water Supply Relay Calculator"
    app_version: str = "0.1"
    log_level: str = "INFO"
    defaults_path: str = Field(
        default="database/defaults.json",
        description="Default water state, relative to the project root"
    )

    # Unit conversions
    gal_per_ton: float = 264.0
    l_per_gal: float = 3.785
    psi_per_kg: float = 14.223  # psi per kgf/cm2

    # Supply line hydraulics: Q = coeff * d^2 * sqrt(psi)
    hose_diameter_in: float = 2.3  # equivalent inner diameter
    line_flow_coeff: float = 29.7

    # Demand
    nozzle_15_gpm: float = 100.0
    nozzle_25_gpm: float = 200.0

    # Fleet
    tank_capacities_l: Tuple[float, float, float, float] = (2000.0, 4000.0, 10000.0, 12000.0)
    relay_truck_tons: Tuple[float, float, float, float] = (2.0, 4.0, 10.0, 12.0)

    # Hydrant utilization bands (percent)
    util_severe_pct: float = 120.0
    util_saturated_pct: float = 100.0
    util_high_pct: float = 70.0

    model_config = SettingsConfigDict(
        env_prefix="WATER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
