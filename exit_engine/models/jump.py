"""Jump parameter models and exit points."""
import math
from datetime import datetime
from typing import Optional

from attrs import field, frozen

from exit_engine.exceptions import (
    InvalidAltitudeRangeError,
    InvalidParameterError,
)
from exit_engine.models.geo import LatLon


def _optional_heading(value) -> Optional[float]:
    if value is None:
        return None
    return float(value) % 360.0


@frozen
class JumpParameters:
    """Aircraft and canopy performance for one jump profile.

    Altitudes are meters above ground level (AGL); speeds are m/s.
    """

    jump_altitude: float = field(converter=float)
    aircraft_speed: float = field(converter=float)
    freefall_speed: float = field(converter=float)
    opening_altitude: float = field(converter=float)
    canopy_descent_rate: float = field(converter=float)
    glide_ratio: float = field(converter=float)
    setup_altitude: float = field(converter=float)

    def __attrs_post_init__(self):
        for name in (
            "jump_altitude",
            "aircraft_speed",
            "freefall_speed",
            "opening_altitude",
            "canopy_descent_rate",
            "glide_ratio",
            "setup_altitude",
        ):
            value = getattr(self, name)
            if not value > 0 or math.isinf(value):
                raise InvalidParameterError(
                    f"{name} must be a positive number, got {value}", parameter=name
                )
        if self.opening_altitude >= self.jump_altitude:
            raise InvalidAltitudeRangeError(
                f"Opening altitude {self.opening_altitude} m must be below "
                f"jump altitude {self.jump_altitude} m"
            )
        if self.setup_altitude >= self.opening_altitude:
            raise InvalidAltitudeRangeError(
                f"Setup altitude {self.setup_altitude} m must be below "
                f"opening altitude {self.opening_altitude} m"
            )

    @property
    def canopy_horizontal_speed(self) -> float:
        """Forward airspeed of the canopy (descent rate x glide ratio)."""
        return self.canopy_descent_rate * self.glide_ratio

    @property
    def canopy_air_speed(self) -> float:
        """Total airspeed along the canopy's flight path."""
        return math.hypot(self.canopy_descent_rate, self.canopy_horizontal_speed)


@frozen
class CommonParameters:
    """Parameters shared by every jump profile on a load."""

    landing_zone: LatLon
    # None means fly into the wind at opening altitude
    flight_direction: Optional[float] = field(default=None, converter=_optional_heading)
    flight_over_landing_zone: bool = False
    # Only used to pick the forecast; never read inside the math
    jump_time: Optional[datetime] = None
    number_of_groups: int = 1
    time_between_groups: float = field(default=0.0, converter=float)

    def __attrs_post_init__(self):
        if int(self.number_of_groups) != self.number_of_groups or self.number_of_groups < 1:
            raise InvalidParameterError(
                f"number_of_groups must be a positive integer, got {self.number_of_groups}",
                parameter="number_of_groups",
            )
        if not self.time_between_groups >= 0:
            raise InvalidParameterError(
                f"time_between_groups must be non-negative, got {self.time_between_groups}",
                parameter="time_between_groups",
            )


@frozen
class ExitPoint:
    """Where one group leaves the aircraft."""

    location: LatLon
    group_number: int

    def __attrs_post_init__(self):
        if self.group_number < 1:
            raise InvalidParameterError(
                f"group_number must be >= 1, got {self.group_number}",
                parameter="group_number",
            )

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {"location": self.location.to_dict(), "group_number": self.group_number}
