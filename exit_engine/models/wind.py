"""Wind profile models: altitude-indexed samples and forecast series."""
import math
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from attrs import define, field, frozen

from exit_engine.exceptions import (
    EmptyProfileError,
    InvalidParameterError,
    NoWindDataError,
    UnsortedProfileError,
)
from exit_engine.utils.vector_utils import interpolate_direction, wind_to_vector

OPTIONAL_COLUMNS = ("gust_speed", "temperature")


def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value


def _defined(directions, fallback):
    """Replace undefined (non-finite) directions with the fallback."""
    return np.where(np.isfinite(directions), directions, fallback)


@frozen
class WindSample:
    """Wind at one altitude. Direction is where the wind blows FROM."""

    altitude: float = field(converter=float)  # meters AMSL
    direction: float = field(converter=float)  # degrees
    speed: float = field(converter=float)  # m/s
    gust_speed: Optional[float] = field(default=None, converter=_optional_float)
    temperature: Optional[float] = field(default=None, converter=_optional_float)

    def __attrs_post_init__(self):
        if not math.isfinite(self.altitude):
            raise InvalidParameterError(
                f"Wind sample altitude must be finite, got {self.altitude}",
                parameter="altitude",
            )
        if not math.isfinite(self.speed) or self.speed < 0:
            raise InvalidParameterError(
                f"Wind speed must be non-negative, got {self.speed} at {self.altitude} m",
                parameter="speed",
            )
        # Calm samples may leave the direction undefined
        if not math.isfinite(self.direction) and self.speed > 0:
            raise InvalidParameterError(
                f"Wind direction must be finite, got {self.direction} at {self.altitude} m",
                parameter="direction",
            )

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "altitude": self.altitude,
            "direction": self.direction,
            "speed": self.speed,
            "gust_speed": self.gust_speed,
            "temperature": self.temperature,
        }


@frozen
class WindProfile:
    """
    Wind samples keyed by strictly increasing altitude (meters AMSL).

    Lookups interpolate linearly between the bracketing samples and clamp to
    the lowest/highest sample outside the sampled range.
    """

    samples: Tuple[WindSample, ...] = field(converter=tuple, factory=tuple)
    _altitudes: np.ndarray = field(init=False, repr=False, eq=False)
    _directions: np.ndarray = field(init=False, repr=False, eq=False)
    _speeds: np.ndarray = field(init=False, repr=False, eq=False)

    @samples.validator
    def _check_sorted(self, attribute, samples):
        for lower, upper in zip(samples, samples[1:]):
            if upper.altitude <= lower.altitude:
                raise UnsortedProfileError(
                    f"Wind samples must have strictly increasing altitude: "
                    f"{upper.altitude} m follows {lower.altitude} m"
                )

    @_altitudes.default
    def _altitudes_default(self):
        return np.array([s.altitude for s in self.samples], dtype=float)

    @_directions.default
    def _directions_default(self):
        return np.array([s.direction for s in self.samples], dtype=float)

    @_speeds.default
    def _speeds_default(self):
        return np.array([s.speed for s in self.samples], dtype=float)

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "WindProfile":
        """Create a profile from mappings with WindSample keys."""
        return cls(samples=[WindSample(**dict(record)) for record in records])

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "WindProfile":
        """Create a profile from a DataFrame with altitude/direction/speed columns."""
        samples = []
        for _, row in df.iterrows():
            samples.append(WindSample(
                altitude=row["altitude"],
                direction=row["direction"],
                speed=row["speed"],
                gust_speed=row.get("gust_speed"),
                temperature=row.get("temperature"),
            ))
        return cls(samples=samples)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def min_altitude(self) -> float:
        self._require_samples()
        return float(self._altitudes[0])

    @property
    def max_altitude(self) -> float:
        self._require_samples()
        return float(self._altitudes[-1])

    @property
    def is_calm(self) -> bool:
        """True when every sample has zero wind speed."""
        return bool(np.all(self._speeds == 0))

    def shifted(self, offset: float) -> "WindProfile":
        """Return a copy with every altitude moved by offset meters."""
        return WindProfile(samples=[
            WindSample(
                altitude=s.altitude + offset,
                direction=s.direction,
                speed=s.speed,
                gust_speed=s.gust_speed,
                temperature=s.temperature,
            )
            for s in self.samples
        ])

    def _require_samples(self) -> None:
        if not self.samples:
            raise EmptyProfileError("Wind profile has no samples")

    def _bracket(self, altitudes: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Lower sample index and interpolation ratio for each altitude."""
        if len(self._altitudes) == 1:
            zeros = np.zeros(altitudes.shape, dtype=int)
            return zeros, np.zeros(altitudes.shape)

        clamped = np.clip(altitudes, self._altitudes[0], self._altitudes[-1])
        lower = np.searchsorted(self._altitudes, clamped, side="right") - 1
        lower = np.clip(lower, 0, len(self._altitudes) - 2)
        span = self._altitudes[lower + 1] - self._altitudes[lower]
        ratio = (clamped - self._altitudes[lower]) / span
        return lower, ratio

    def _interpolate(self, altitudes: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        self._require_samples()
        lower, ratio = self._bracket(altitudes)
        if len(self._altitudes) == 1:
            return _defined(self._directions[lower], 0.0), self._speeds[lower]

        upper = lower + 1
        speeds = self._speeds[lower] + (self._speeds[upper] - self._speeds[lower]) * ratio
        # A calm sample without a direction takes its neighbour's direction
        low_dirs = self._directions[lower]
        high_dirs = self._directions[upper]
        low_dirs, high_dirs = (
            _defined(low_dirs, high_dirs),
            _defined(high_dirs, low_dirs),
        )
        directions = interpolate_direction(low_dirs, high_dirs, ratio)
        return _defined(directions, 0.0), speeds

    def wind_at(self, altitude: float) -> Tuple[float, float]:
        """
        Interpolated wind at an altitude.

        Args:
            altitude: Altitude in meters AMSL

        Returns:
            Tuple of (direction in degrees [0, 360), speed in m/s)
        """
        directions, speeds = self._interpolate(np.array([altitude], dtype=float))
        return float(directions[0]), float(speeds[0])

    def wind_vectors(self, altitudes) -> np.ndarray:
        """Push vectors (east, north) in m/s at each altitude, shape (n, 2)."""
        directions, speeds = self._interpolate(np.asarray(altitudes, dtype=float))
        return wind_to_vector(directions, speeds)

    def sample_at(self, altitude: float) -> WindSample:
        """
        Interpolated sample at an altitude, including gust speed and
        temperature when both bracketing samples carry them.
        """
        direction, speed = self.wind_at(altitude)
        lower_idx, ratio = self._bracket(np.array([altitude], dtype=float))
        lower = self.samples[int(lower_idx[0])]
        upper = self.samples[min(int(lower_idx[0]) + 1, len(self.samples) - 1)]
        ratio = float(ratio[0])

        extras = {}
        for name in OPTIONAL_COLUMNS:
            low_value = getattr(lower, name)
            high_value = getattr(upper, name)
            if low_value is not None and high_value is not None:
                extras[name] = low_value + (high_value - low_value) * ratio

        return WindSample(altitude=altitude, direction=direction, speed=speed, **extras)


@define
class ForecastSeries:
    """Wind profiles for several forecast instants."""

    profiles: Dict[datetime, WindProfile] = field(factory=dict)

    @property
    def times(self) -> List[datetime]:
        return sorted(self.profiles)

    def closest_time(self, jump_time: datetime) -> datetime:
        """Forecast instant closest to the jump time. Ties go to the earlier instant."""
        if not self.profiles:
            raise NoWindDataError("Forecast series has no wind profiles")
        return min(self.times, key=lambda t: (abs(t - jump_time), t))

    def select(self, jump_time: datetime) -> WindProfile:
        """Profile whose forecast instant is closest to the jump time."""
        return self.profiles[self.closest_time(jump_time)]
