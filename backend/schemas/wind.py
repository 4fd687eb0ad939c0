"""Pydantic schemas for wind data."""
from pydantic import BaseModel, Field
from typing import List, Optional


class WindSampleSchema(BaseModel):
    """A single wind sample."""

    altitude: float = Field(description="Altitude in meters AMSL")
    direction: float = Field(description="Direction the wind blows from, degrees")
    speed: float = Field(description="Wind speed in m/s")
    gust_speed: Optional[float] = Field(default=None, description="Gust speed in m/s")
    temperature: Optional[float] = Field(default=None, description="Temperature in celsius")


class InterpolateRequest(BaseModel):
    """Request schema for wind interpolation."""

    wind_profile: List[WindSampleSchema]
    altitudes: List[float] = Field(description="Altitudes in meters AMSL")


class InterpolateResponse(BaseModel):
    """Response schema for wind interpolation."""

    samples: List[WindSampleSchema]


class WindWarningsRequest(BaseModel):
    """Request schema for ground wind warnings."""

    wind_profile: List[WindSampleSchema]
    elevation: float = Field(default=0.0, description="Ground elevation in meters AMSL")
    student_limit: Optional[float] = Field(default=None, description="Student wind limit in m/s")
    sport_limit: Optional[float] = Field(default=None, description="Sport wind limit in m/s")


class WindWarning(BaseModel):
    """Warning level for one sample."""

    altitude: float
    speed: float
    gust_speed: Optional[float] = None
    level: str  # "success" | "warning" | "error" | "default"
    label: str


class WindWarningsResponse(BaseModel):
    """Response schema for ground wind warnings."""

    levels: List[WindWarning]
    has_high: bool
    has_moderate: bool
