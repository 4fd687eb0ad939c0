"""Service combining drift integration, exit point solving and group scheduling."""
import numpy as np

from exit_engine.config import REACHABILITY_MARGIN, SAFETY_RADIUS_MARGIN
from exit_engine.models.geo import LatLon, TerrainData
from exit_engine.models.jump import CommonParameters, JumpParameters
from exit_engine.models.results import ExitCalculationResult
from exit_engine.models.wind import WindProfile
from exit_engine.services.exit_point_solver import ExitPointSolver
from exit_engine.services.group_scheduler import ground_track, schedule_groups
from exit_engine.utils.geo_utils import distance_m, move_point, path_to_geodetic
from exit_engine.utils.vector_utils import heading_to_unit


class ExitCalculator:
    """Service for computing exit points for a whole load.

    Stateless: every call computes a fresh result from its inputs, so one
    instance can be shared between callers.
    """

    def __init__(
        self,
        solver: ExitPointSolver = None,
        safety_margin: float = SAFETY_RADIUS_MARGIN,
        reachability_margin: float = REACHABILITY_MARGIN,
        wind_corrected_spacing: bool = False,
    ):
        """
        Initialize exit calculator.

        Args:
            solver: Exit point solver (carries integrator and pattern settings)
            safety_margin: Fraction of canopy range used for the safety radius
            reachability_margin: Fraction of canopy range used by
                can_reach_landing_zone
            wind_corrected_spacing: Space groups by ground speed (airspeed plus
                the wind component along the heading at jump altitude) instead
                of the aircraft speed as given
        """
        self.solver = solver or ExitPointSolver()
        self.safety_margin = safety_margin
        self.reachability_margin = reachability_margin
        self.wind_corrected_spacing = wind_corrected_spacing

    def spacing_speed(
        self,
        profile: WindProfile,
        params: JumpParameters,
        heading: float,
        elevation: float = 0.0,
    ) -> float:
        """Speed used to space groups along the ground track (m/s)."""
        if not self.wind_corrected_spacing:
            return params.aircraft_speed

        wind = profile.wind_vectors([params.jump_altitude + elevation])[0]
        along_track = float(np.dot(wind, heading_to_unit(heading)))
        return max(0.0, params.aircraft_speed + along_track)

    def safety_radius(self, params: JumpParameters) -> float:
        """Radius around the landing zone reachable under canopy, in meters."""
        max_canopy_distance = params.canopy_air_speed * (
            params.opening_altitude / params.canopy_descent_rate
        )
        return max_canopy_distance * self.safety_margin

    def calculate(
        self,
        profile: WindProfile,
        params: JumpParameters,
        common: CommonParameters,
        terrain: TerrainData = None,
    ) -> ExitCalculationResult:
        """
        Calculate exit points and drift geometry for one jump profile.

        Args:
            profile: Wind profile (altitudes AMSL)
            params: Jump profile parameters (altitudes AGL)
            common: Landing zone, flight direction and group settings
            terrain: Ground elevation; sea level when omitted

        Returns:
            ExitCalculationResult for the rendering layer
        """
        elevation = terrain.elevation if terrain is not None else 0.0
        solution = self.solver.solve(profile, params, common, terrain)

        speed = self.spacing_speed(profile, params, solution.heading, elevation)
        exit_points = schedule_groups(
            solution.exit_point,
            solution.heading,
            speed,
            common.number_of_groups,
            common.time_between_groups,
        )
        spacing = speed * common.time_between_groups
        total_distance = spacing * (common.number_of_groups - 1)

        opening_point = move_point(solution.exit_point, solution.freefall.drift)

        return ExitCalculationResult(
            exit_points=exit_points,
            aircraft_heading=solution.heading,
            canopy_heading=solution.canopy_heading,
            freefall=solution.freefall,
            canopy=solution.canopy,
            opening_point=opening_point,
            freefall_path=path_to_geodetic(solution.exit_point, solution.freefall.path),
            canopy_path=path_to_geodetic(opening_point, solution.canopy.path),
            ground_track=ground_track(solution.exit_point, solution.heading, total_distance),
            spacing_distance=spacing,
            safety_radius=self.safety_radius(params),
        )

    def can_reach_landing_zone(
        self,
        exit_point: LatLon,
        landing_zone: LatLon,
        profile: WindProfile,
        params: JumpParameters,
        terrain: TerrainData = None,
    ) -> bool:
        """
        Check whether a jumper exiting at exit_point can still reach the zone.

        Simplified: compares the distance from the opening point to the zone
        with the canopy's still-air range, ignoring wind under canopy.
        """
        elevation = terrain.elevation if terrain is not None else 0.0
        freefall = self.solver.integrator.freefall(profile, params, elevation)
        opening_point = move_point(exit_point, freefall.drift)

        max_canopy_range = params.canopy_air_speed * (
            params.opening_altitude / params.canopy_descent_rate
        )
        return distance_m(opening_point, landing_zone) <= max_canopy_range * self.reachability_margin
