"""Backend configuration."""
from pydantic_settings import BaseSettings

from exit_engine.config import (
    CANOPY_STEP_M,
    FREEFALL_STEP_M,
    GROUND_WIND_MAX_AGL,
    PATTERN_OFFSET_ANGLE,
    PATTERN_OFFSET_DISTANCE,
    SPORT_WIND_LIMIT,
    STUDENT_WIND_LIMIT,
)


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    api_title: str = "Exit Point API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]

    # Integration resolution (meters)
    freefall_step: float = FREEFALL_STEP_M
    canopy_step: float = CANOPY_STEP_M

    # Jump run pattern when not flying over the landing zone
    pattern_offset_angle: float = PATTERN_OFFSET_ANGLE
    pattern_offset_distance: float = PATTERN_OFFSET_DISTANCE

    # Require wind samples spanning the whole descent
    strict_coverage: bool = False
    # Space groups by ground speed instead of aircraft speed
    wind_corrected_spacing: bool = False

    # Ground wind limits (m/s)
    student_wind_limit: float = STUDENT_WIND_LIMIT
    sport_wind_limit: float = SPORT_WIND_LIMIT
    ground_wind_height: float = GROUND_WIND_MAX_AGL

    # Number of calculation results kept in memory
    result_cache_size: int = 128

    class Config:
        env_prefix = "EXITPOINT_"


settings = Settings()
