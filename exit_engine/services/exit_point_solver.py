"""Service for solving the exit point that lands a jumper on the landing zone."""
import math
from typing import Optional, Tuple

import numpy as np

from exit_engine.config import PATTERN_OFFSET_ANGLE, PATTERN_OFFSET_DISTANCE
from exit_engine.exceptions import NoWindDataError
from exit_engine.models.geo import LatLon, TerrainData
from exit_engine.models.jump import CommonParameters, JumpParameters
from exit_engine.models.results import SoloSolution
from exit_engine.models.wind import WindProfile
from exit_engine.services.descent_integrator import DescentIntegrator
from exit_engine.utils.geo_utils import to_geodetic
from exit_engine.utils.vector_utils import heading_to_unit, normalize_angle


def solve_exit_point(
    landing_zone: LatLon,
    freefall_drift,
    canopy_drift,
    pattern_offset=(0.0, 0.0),
) -> LatLon:
    """
    Exit point that cancels the total drift.

    Drift does not depend on where the jumper exits (the wind field only
    varies with altitude), so the exit point is simply the landing zone moved
    by minus the total drift, plus any standard pattern offset.

    Args:
        landing_zone: Target landing position
        freefall_drift: (east, north) freefall drift in meters
        canopy_drift: (east, north) canopy drift in meters, glide included
        pattern_offset: (east, north) offset of the jump run in meters

    Returns:
        Exit point position
    """
    total = np.asarray(freefall_drift, dtype=float) + np.asarray(canopy_drift, dtype=float)
    offset = np.asarray(pattern_offset, dtype=float) - total
    return to_geodetic(landing_zone, float(offset[0]), float(offset[1]))


class ExitPointSolver:
    """Service for computing the single optimal exit point."""

    def __init__(
        self,
        integrator: DescentIntegrator = None,
        pattern_offset_angle: float = PATTERN_OFFSET_ANGLE,
        pattern_offset_distance: float = PATTERN_OFFSET_DISTANCE,
        strict_coverage: bool = False,
    ):
        """
        Initialize solver.

        Args:
            integrator: Descent integrator to use for both phases
            pattern_offset_angle: Degrees added to the jump run heading when
                the jump run does not pass over the landing zone
            pattern_offset_distance: Lateral shift of the jump run in meters
                (positive = right of heading) when it does not pass over the
                landing zone
            strict_coverage: Require the wind samples to span the whole
                descent instead of clamping to the nearest sample
        """
        self.integrator = integrator or DescentIntegrator()
        self.pattern_offset_angle = pattern_offset_angle
        self.pattern_offset_distance = pattern_offset_distance
        self.strict_coverage = strict_coverage

    def resolve_headings(
        self,
        profile: WindProfile,
        opening_altitude: float,
        flight_direction: Optional[float],
        flight_over_landing_zone: bool,
    ) -> Tuple[float, Optional[float]]:
        """
        Jump run heading and canopy glide heading.

        Without a flight direction the aircraft and canopy head into the wind
        at opening altitude. In calm air there is no direction to head into:
        the jump run defaults to 0° and the canopy applies no glide.

        Args:
            profile: Wind profile (altitudes AMSL)
            opening_altitude: Opening altitude in meters AMSL
            flight_direction: User-defined heading, or None for into the wind
            flight_over_landing_zone: Whether the jump run crosses the zone

        Returns:
            Tuple of (jump run heading, canopy heading or None)
        """
        base = flight_direction
        if base is None:
            direction, speed = profile.wind_at(opening_altitude)
            if speed > 0 and math.isfinite(direction):
                base = direction

        heading = 0.0 if base is None else float(base)
        if not flight_over_landing_zone:
            heading += self.pattern_offset_angle
        heading = float(normalize_angle(heading))

        canopy_heading = heading if base is not None else None
        return heading, canopy_heading

    def pattern_offset(self, heading: float, flight_over_landing_zone: bool) -> np.ndarray:
        """Lateral (east, north) shift of the jump run in meters."""
        if flight_over_landing_zone or self.pattern_offset_distance == 0:
            return np.zeros(2)
        return heading_to_unit(heading + 90.0) * self.pattern_offset_distance

    def check_coverage(self, profile: WindProfile, params: JumpParameters, elevation: float) -> None:
        """Raise NoWindDataError when the profile cannot supply the descent."""
        if len(profile) == 0:
            raise NoWindDataError("No wind data available for calculations")
        if not self.strict_coverage:
            return

        floor = params.setup_altitude + elevation
        ceiling = params.jump_altitude + elevation
        if profile.min_altitude > floor or profile.max_altitude < ceiling:
            raise NoWindDataError(
                f"Wind samples cover {profile.min_altitude:.0f}-{profile.max_altitude:.0f} m, "
                f"descent needs {floor:.0f}-{ceiling:.0f} m"
            )

    def solve(
        self,
        profile: WindProfile,
        params: JumpParameters,
        common: CommonParameters,
        terrain: TerrainData = None,
    ) -> SoloSolution:
        """
        Solve the exit point for one jumper.

        Args:
            profile: Wind profile (altitudes AMSL)
            params: Jump profile parameters (altitudes AGL)
            common: Landing zone, flight direction and group settings
            terrain: Ground elevation; sea level when omitted

        Returns:
            SoloSolution with exit point, headings and both drift results
        """
        elevation = terrain.elevation if terrain is not None else 0.0
        self.check_coverage(profile, params, elevation)

        heading, canopy_heading = self.resolve_headings(
            profile,
            params.opening_altitude + elevation,
            common.flight_direction,
            common.flight_over_landing_zone,
        )

        freefall = self.integrator.freefall(profile, params, elevation)
        canopy = self.integrator.canopy(profile, params, canopy_heading, elevation)

        exit_point = solve_exit_point(
            common.landing_zone,
            freefall.drift,
            canopy.drift,
            self.pattern_offset(heading, common.flight_over_landing_zone),
        )

        return SoloSolution(
            exit_point=exit_point,
            heading=heading,
            canopy_heading=canopy_heading,
            freefall=freefall,
            canopy=canopy,
        )
