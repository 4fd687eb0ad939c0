"""Tests for jump parameter models."""
import math
from datetime import datetime, timezone

import pytest

from exit_engine.config import DEFAULT_PROFILES
from exit_engine.exceptions import InvalidAltitudeRangeError, InvalidParameterError
from exit_engine.models.geo import LatLon
from exit_engine.models.jump import CommonParameters, ExitPoint, JumpParameters

LANDING_ZONE = LatLon(lat=61.7807, lon=22.7221)


def make_params(**overrides):
    values = dict(DEFAULT_PROFILES["sport"])
    values.update(overrides)
    return JumpParameters(**values)


class TestJumpParameters:
    """Tests for JumpParameters validation and derived speeds."""

    def test_default_profiles_are_valid(self):
        """Test that every built-in profile passes validation."""
        for name, values in DEFAULT_PROFILES.items():
            assert JumpParameters(**values).jump_altitude == values["jump_altitude"], name

    @pytest.mark.parametrize(
        "name, value",
        [
            ("glide_ratio", 0),
            ("glide_ratio", -1.5),
            ("freefall_speed", 0),
            ("freefall_speed", -55.56),
            ("canopy_descent_rate", 0),
            ("canopy_descent_rate", math.inf),
            ("aircraft_speed", math.nan),
        ],
    )
    def test_non_positive_values_rejected(self, name, value):
        """Test that speeds and ratios must be positive finite numbers."""
        with pytest.raises(InvalidParameterError) as exc_info:
            make_params(**{name: value})
        assert exc_info.value.parameter == name

    @pytest.mark.parametrize("opening", [4000, 4500])
    def test_opening_at_or_above_jump_altitude(self, opening):
        """Test that the canopy must open below the exit altitude."""
        with pytest.raises(InvalidAltitudeRangeError):
            make_params(opening_altitude=opening)

    @pytest.mark.parametrize("setup", [800, 900])
    def test_setup_at_or_above_opening_altitude(self, setup):
        """Test that setup must be below opening altitude."""
        with pytest.raises(InvalidAltitudeRangeError):
            make_params(setup_altitude=setup)

    def test_canopy_speeds(self):
        """Test horizontal and total canopy airspeed."""
        params = make_params()
        assert params.canopy_horizontal_speed == pytest.approx(15.0)
        assert params.canopy_air_speed == pytest.approx(math.hypot(6, 15))


class TestCommonParameters:
    """Tests for CommonParameters validation."""

    def test_defaults(self):
        """Test default load settings."""
        common = CommonParameters(landing_zone=LANDING_ZONE)
        assert common.flight_direction is None
        assert common.flight_over_landing_zone is False
        assert common.number_of_groups == 1
        assert common.time_between_groups == 0.0

    def test_flight_direction_normalised(self):
        """Test that headings are wrapped to [0, 360)."""
        assert CommonParameters(landing_zone=LANDING_ZONE, flight_direction=-90).flight_direction == 270.0
        assert CommonParameters(landing_zone=LANDING_ZONE, flight_direction=360).flight_direction == 0.0

    def test_jump_time_kept(self):
        """Test that the jump time is carried unchanged."""
        jump_time = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)
        assert CommonParameters(landing_zone=LANDING_ZONE, jump_time=jump_time).jump_time == jump_time

    @pytest.mark.parametrize(
        "groups, interval, parameter",
        [
            (0, 10.0, "number_of_groups"),
            (2.5, 10.0, "number_of_groups"),
            (-1, 10.0, "number_of_groups"),
            (2, -1.0, "time_between_groups"),
        ],
    )
    def test_invalid_group_settings(self, groups, interval, parameter):
        """Test that group count and interval are validated."""
        with pytest.raises(InvalidParameterError) as exc_info:
            CommonParameters(
                landing_zone=LANDING_ZONE,
                number_of_groups=groups,
                time_between_groups=interval,
            )
        assert exc_info.value.parameter == parameter


class TestExitPoint:
    """Tests for ExitPoint."""

    def test_group_number_starts_at_one(self):
        """Test that group numbering is 1-based."""
        with pytest.raises(InvalidParameterError):
            ExitPoint(location=LANDING_ZONE, group_number=0)

    def test_to_dict(self):
        """Test conversion to a dictionary."""
        assert ExitPoint(location=LANDING_ZONE, group_number=2).to_dict() == {
            "location": {"lat": 61.7807, "lon": 22.7221},
            "group_number": 2,
        }
