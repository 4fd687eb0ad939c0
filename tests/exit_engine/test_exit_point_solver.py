"""Tests for the exit point solver."""
import pytest

from exit_engine.exceptions import NoWindDataError
from exit_engine.models.geo import LatLon, TerrainData
from exit_engine.models.jump import CommonParameters, JumpParameters
from exit_engine.models.wind import WindProfile, WindSample
from exit_engine.services.exit_point_solver import ExitPointSolver, solve_exit_point
from exit_engine.utils.geo_utils import to_local

LANDING_ZONE = LatLon(lat=61.7807, lon=22.7221)


def make_profile(*rows):
    """Build a profile from (altitude, direction, speed) tuples."""
    return WindProfile(samples=[WindSample(a, d, s) for a, d, s in rows])


def make_params(**overrides):
    values = dict(
        jump_altitude=4000,
        aircraft_speed=36,
        freefall_speed=55.56,
        opening_altitude=800,
        canopy_descent_rate=6,
        glide_ratio=2.5,
        setup_altitude=100,
    )
    values.update(overrides)
    return JumpParameters(**values)


CALM = make_profile((0, 0, 0), (5000, 0, 0))


class TestSolveExitPoint:
    """Tests for the closed-form exit point."""

    def test_exit_cancels_total_drift(self):
        """Test that the exit is the landing zone minus freefall and canopy drift."""
        exit_point = solve_exit_point(LANDING_ZONE, (100.0, -200.0), (50.0, 0.0))
        east, north = to_local(LANDING_ZONE, exit_point)

        assert east == pytest.approx(-150.0, abs=1e-6)
        assert north == pytest.approx(200.0, abs=1e-6)

    def test_pattern_offset_added(self):
        """Test that the pattern offset shifts the exit point."""
        exit_point = solve_exit_point(LANDING_ZONE, (0, 0), (0, 0), pattern_offset=(30.0, -40.0))
        east, north = to_local(LANDING_ZONE, exit_point)

        assert east == pytest.approx(30.0, abs=1e-6)
        assert north == pytest.approx(-40.0, abs=1e-6)


class TestResolveHeadings:
    """Tests for jump run and canopy heading selection."""

    def test_flight_direction_wins(self):
        """Test that a user heading is used for both aircraft and canopy."""
        profile = make_profile((0, 270, 10))
        assert ExitPointSolver().resolve_headings(profile, 800, 45.0, False) == (45.0, 45.0)

    def test_into_wind_by_default(self):
        """Test that without a heading the aircraft flies into the wind."""
        profile = make_profile((0, 270, 10), (4000, 300, 20))
        heading, canopy_heading = ExitPointSolver().resolve_headings(profile, 0, None, False)

        assert heading == pytest.approx(270.0)
        assert canopy_heading == pytest.approx(270.0)

    def test_calm_air_defaults_to_north_without_glide(self):
        """Test that calm air gives heading 0 and no canopy glide."""
        assert ExitPointSolver().resolve_headings(CALM, 800, None, False) == (0.0, None)

    def test_pattern_angle_only_off_landing_zone(self):
        """Test that the pattern angle applies only when not over the zone."""
        solver = ExitPointSolver(pattern_offset_angle=30)

        assert solver.resolve_headings(CALM, 800, 350.0, False) == (pytest.approx(20.0), pytest.approx(20.0))
        assert solver.resolve_headings(CALM, 800, 350.0, True) == (350.0, 350.0)


class TestExitPointSolver:
    """Tests for ExitPointSolver.solve."""

    def test_zero_wind_exits_over_landing_zone(self):
        """Test that calm air puts the exit point on the landing zone."""
        solution = ExitPointSolver().solve(CALM, make_params(), CommonParameters(landing_zone=LANDING_ZONE))

        assert solution.exit_point.lat == pytest.approx(LANDING_ZONE.lat, abs=1e-6)
        assert solution.exit_point.lon == pytest.approx(LANDING_ZONE.lon, abs=1e-6)
        assert solution.heading == 0.0
        assert solution.canopy_heading is None

    def test_exit_is_upwind_of_landing_zone(self):
        """Test that a north wind puts the exit point north of the zone."""
        profile = make_profile((0, 0, 10), (5000, 0, 10))
        params = make_params(setup_altitude=400)
        solution = ExitPointSolver().solve(profile, params, CommonParameters(landing_zone=LANDING_ZONE))

        # Freefall pushes 10 m/s south; canopy nets 5 m/s north into the wind
        expected_north = 10 * 3200 / 55.56 - 5 * 400 / 6
        east, north = to_local(LANDING_ZONE, solution.exit_point)

        assert solution.heading == pytest.approx(0.0)
        assert north == pytest.approx(expected_north, rel=1e-6)
        assert north > 0
        assert east == pytest.approx(0.0, abs=1e-6)

    def test_north_wind_default_setup(self):
        """Test drift signs for a north wind with the default setup altitude."""
        profile = make_profile((0, 0, 10), (5000, 0, 10))
        solution = ExitPointSolver().solve(profile, make_params(), CommonParameters(landing_zone=LANDING_ZONE))

        # Freefall drifts south, so the exit lies north of the opening point
        assert solution.freefall.drift[1] == pytest.approx(-10 * 3200 / 55.56)
        exit_north = to_local(LANDING_ZONE, solution.exit_point)[1]
        opening_north = exit_north + solution.freefall.drift[1]
        assert exit_north > opening_north
        # Canopy flies into the wind faster than the wind blows
        assert solution.canopy_heading == pytest.approx(0.0)
        assert solution.canopy.drift[1] == pytest.approx(5 * 700 / 6)

    def test_pattern_offset_distance(self):
        """Test that the pattern distance shifts the exit right of the heading."""
        solver = ExitPointSolver(pattern_offset_distance=100)
        common = CommonParameters(landing_zone=LANDING_ZONE)
        solution = solver.solve(CALM, make_params(), common)
        east, north = to_local(LANDING_ZONE, solution.exit_point)

        assert east == pytest.approx(100.0, abs=1e-6)
        assert north == pytest.approx(0.0, abs=1e-6)

    def test_no_pattern_offset_over_landing_zone(self):
        """Test that flying over the zone ignores the pattern distance."""
        solver = ExitPointSolver(pattern_offset_distance=100)
        common = CommonParameters(landing_zone=LANDING_ZONE, flight_over_landing_zone=True)
        solution = solver.solve(CALM, make_params(), common)

        assert solution.exit_point.lon == pytest.approx(LANDING_ZONE.lon, abs=1e-9)

    def test_elevation_shifts_lookup(self):
        """Test that terrain elevation moves lookups to AMSL altitudes."""
        profile = make_profile((0, 270, 0), (6000, 270, 30))
        terrain = TerrainData(location=LANDING_ZONE, elevation=500)
        common = CommonParameters(landing_zone=LANDING_ZONE, flight_direction=0)
        solution = ExitPointSolver().solve(profile, make_params(), common, terrain)

        assert solution.freefall.drift[0] == pytest.approx(14.5 * 3200 / 55.56)

    def test_empty_profile_raises(self):
        """Test that a profile without samples cannot be solved."""
        with pytest.raises(NoWindDataError):
            ExitPointSolver().solve(WindProfile(), make_params(), CommonParameters(landing_zone=LANDING_ZONE))

    def test_strict_coverage(self):
        """Test that strict coverage rejects profiles not spanning the descent."""
        profile = make_profile((0, 270, 5), (3000, 270, 10))
        common = CommonParameters(landing_zone=LANDING_ZONE)

        with pytest.raises(NoWindDataError):
            ExitPointSolver(strict_coverage=True).solve(profile, make_params(), common)
        # Clamped to the top sample otherwise
        ExitPointSolver().solve(profile, make_params(), common)

    def test_deterministic(self):
        """Test that identical inputs give identical outputs."""
        profile = make_profile((0, 200, 4), (1500, 240, 9), (4500, 265, 18))
        common = CommonParameters(landing_zone=LANDING_ZONE)

        first = ExitPointSolver().solve(profile, make_params(), common)
        second = ExitPointSolver().solve(profile, make_params(), common)

        assert first.exit_point == second.exit_point
        assert first.heading == second.heading
