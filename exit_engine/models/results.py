"""Calculation results."""
from typing import List, Optional

import numpy as np
from attrs import define

from exit_engine.models.geo import LatLon
from exit_engine.models.jump import ExitPoint


@define
class DriftResult:
    """Horizontal displacement accumulated over one descent phase."""

    drift: np.ndarray  # (east, north) meters
    elapsed: float  # seconds
    # Cumulative (east, north) displacement at every step boundary, shape (n+1, 2)
    path: np.ndarray

    @property
    def distance(self) -> float:
        """Length of the drift vector in meters."""
        return float(np.hypot(self.drift[0], self.drift[1]))

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "east": float(self.drift[0]),
            "north": float(self.drift[1]),
            "distance": self.distance,
            "elapsed": self.elapsed,
        }


@define
class SoloSolution:
    """Exit point for a single jumper, before group scheduling."""

    exit_point: LatLon
    heading: float  # aircraft jump run heading, degrees
    canopy_heading: Optional[float]  # None when no glide was applied
    freefall: DriftResult
    canopy: DriftResult


@define
class ExitCalculationResult:
    """Everything the rendering layer needs for one jump profile."""

    exit_points: List[ExitPoint]
    aircraft_heading: float
    canopy_heading: Optional[float]
    freefall: DriftResult
    canopy: DriftResult
    opening_point: LatLon
    freefall_path: List[LatLon]
    canopy_path: List[LatLon]
    ground_track: List[LatLon]
    spacing_distance: float  # meters between consecutive groups
    safety_radius: float  # meters

    @property
    def optimal_exit_point(self) -> LatLon:
        """Exit point of group 1."""
        return self.exit_points[0].location

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "optimal_exit_point": self.optimal_exit_point.to_dict(),
            "exit_points": [p.to_dict() for p in self.exit_points],
            "aircraft_heading": self.aircraft_heading,
            "canopy_heading": self.canopy_heading,
            "freefall": self.freefall.to_dict(),
            "canopy": self.canopy.to_dict(),
            "opening_point": self.opening_point.to_dict(),
            "freefall_path": [p.to_dict() for p in self.freefall_path],
            "canopy_path": [p.to_dict() for p in self.canopy_path],
            "ground_track": [p.to_dict() for p in self.ground_track],
            "spacing_distance": self.spacing_distance,
            "safety_radius": self.safety_radius,
        }
