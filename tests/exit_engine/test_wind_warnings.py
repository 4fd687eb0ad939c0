"""Tests for ground wind warnings."""
import pytest

from exit_engine.exceptions import InvalidParameterError
from exit_engine.models.wind import WindSample
from exit_engine.services.wind_warnings import (
    DEFAULT,
    ERROR,
    SUCCESS,
    WARNING,
    WindWarningService,
)


class TestWindWarningService:
    """Tests for WindWarningService."""

    @pytest.mark.parametrize(
        "speed, expected",
        [(3.0, SUCCESS), (7.9, SUCCESS), (8.0, WARNING), (10.9, WARNING), (11.0, ERROR), (20.0, ERROR)],
    )
    def test_levels(self, speed, expected):
        """Test classification against the student and sport limits."""
        assert WindWarningService().level(WindSample(10, 270, speed)) == expected

    def test_gusts_count(self):
        """Test that a gust above the mean speed raises the level."""
        service = WindWarningService()
        assert service.level(WindSample(10, 270, 5, gust_speed=12)) == ERROR
        assert service.level(WindSample(10, 270, 5, gust_speed=9)) == WARNING

    def test_high_samples_not_classified(self):
        """Test that samples above the ground wind height get the default level."""
        assert WindWarningService().level(WindSample(120, 270, 25)) == DEFAULT

    def test_elevation(self):
        """Test that sample altitudes are compared above ground level."""
        service = WindWarningService()
        sample = WindSample(520, 270, 25)

        assert service.level(sample, elevation=0) == DEFAULT
        assert service.level(sample, elevation=500) == ERROR

    def test_classify(self):
        """Test per-sample results carry level and label."""
        results = WindWarningService().classify([WindSample(10, 90, 9, gust_speed=10)])

        assert results == [{
            "altitude": 10.0,
            "speed": 9.0,
            "gust_speed": 10.0,
            "level": WARNING,
            "label": "Moderate",
        }]

    def test_summarize(self):
        """Test summary flags over several samples."""
        service = WindWarningService()
        calm = [WindSample(10, 90, 2), WindSample(30, 90, 3)]
        moderate = calm + [WindSample(40, 90, 9)]
        high = [WindSample(10, 90, 2), WindSample(30, 90, 14)]

        assert service.summarize(calm) == {"has_high": False, "has_moderate": False}
        assert service.summarize(moderate) == {"has_high": False, "has_moderate": True}
        assert service.summarize(high) == {"has_high": True, "has_moderate": True}

    def test_custom_limits(self):
        """Test that limits are configurable."""
        service = WindWarningService(student_limit=5, sport_limit=6)
        assert service.level(WindSample(10, 0, 5.5)) == WARNING

    @pytest.mark.parametrize("student, sport", [(0, 11), (12, 11), (-1, 5)])
    def test_invalid_limits(self, student, sport):
        """Test that inconsistent limits are rejected."""
        with pytest.raises(InvalidParameterError):
            WindWarningService(student_limit=student, sport_limit=sport)
