"""Pydantic schemas for exit point calculations."""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from backend.schemas.wind import WindSampleSchema


class LatLonSchema(BaseModel):
    """Geographic position in degrees."""

    lat: float
    lon: float


class JumpParametersSchema(BaseModel):
    """Aircraft and canopy performance (altitudes AGL, speeds m/s)."""

    jump_altitude: float = Field(description="Exit altitude in meters AGL")
    aircraft_speed: float = Field(description="Aircraft speed in m/s")
    freefall_speed: float = Field(description="Freefall vertical speed in m/s")
    opening_altitude: float = Field(description="Canopy opening altitude in meters AGL")
    canopy_descent_rate: float = Field(description="Canopy descent rate in m/s")
    glide_ratio: float = Field(description="Canopy glide ratio")
    setup_altitude: float = Field(description="Landing pattern setup altitude in meters AGL")


class CommonParametersSchema(BaseModel):
    """Parameters shared by every profile on the load."""

    landing_zone: LatLonSchema
    flight_direction: Optional[float] = Field(
        default=None, description="Jump run heading in degrees, null for into the wind"
    )
    flight_over_landing_zone: bool = False
    jump_time: Optional[datetime] = None
    number_of_groups: int = 1
    time_between_groups: float = Field(default=0.0, description="Seconds between groups")


class ExitPointRequest(BaseModel):
    """Request schema for a single exit point calculation."""

    wind_profile: List[WindSampleSchema]
    jump: JumpParametersSchema
    common: CommonParametersSchema
    elevation: float = Field(default=0.0, description="Landing zone elevation in meters AMSL")


class JumpProfileSchema(BaseModel):
    """A named jump profile."""

    profile_id: str
    name: str
    enabled: bool = True
    parameters: JumpParametersSchema


class MultiProfileRequest(BaseModel):
    """Request schema for calculating several profiles on one load."""

    wind_profile: List[WindSampleSchema]
    common: CommonParametersSchema
    profiles: List[JumpProfileSchema]
    elevation: float = Field(default=0.0, description="Landing zone elevation in meters AMSL")


class ExitPointSchema(BaseModel):
    """Exit point of one group."""

    location: LatLonSchema
    group_number: int


class DriftSchema(BaseModel):
    """Drift over one descent phase."""

    east: float
    north: float
    distance: float
    elapsed: float


class ExitCalculationResponse(BaseModel):
    """Response schema for an exit point calculation."""

    optimal_exit_point: LatLonSchema
    exit_points: List[ExitPointSchema]
    aircraft_heading: float
    canopy_heading: Optional[float] = None
    freefall: DriftSchema
    canopy: DriftSchema
    opening_point: LatLonSchema
    freefall_path: List[LatLonSchema]
    canopy_path: List[LatLonSchema]
    ground_track: List[LatLonSchema]
    spacing_distance: float
    safety_radius: float


class ProfileResultResponse(BaseModel):
    """Calculation result (or error) for one profile."""

    profile_id: str
    name: str
    result: Optional[ExitCalculationResponse] = None
    error: Optional[str] = None
