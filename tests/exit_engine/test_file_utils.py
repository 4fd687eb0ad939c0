"""Tests for forecast file loading."""
from datetime import datetime, timezone

import pytest

from exit_engine.utils.file_utils import (
    dataframe_to_series,
    load_forecast_dataframe,
    load_wind_profile,
)


def write_csv(path, lines):
    path.write_text("\n".join(lines) + "\n")
    return path


class TestFileUtils:
    """Tests for CSV forecast loading."""

    def test_load_wind_profile(self, tmp_path):
        """Test loading a single profile with optional columns."""
        csv = write_csv(tmp_path / "profile.csv", [
            "altitude,direction,speed,gust_speed,temperature",
            "10,250,4,7,12.5",
            "1000,260,9,,5.0",
            "3000,270,15,,-8.0",
        ])
        profile = load_wind_profile(csv)

        assert len(profile) == 3
        assert profile.samples[0].gust_speed == 7.0
        assert profile.samples[1].gust_speed is None
        assert profile.samples[2].temperature == -8.0

    def test_missing_column(self, tmp_path):
        """Test that a CSV without required columns is rejected."""
        csv = write_csv(tmp_path / "bad.csv", ["altitude,speed", "10,4"])
        with pytest.raises(ValueError, match="direction"):
            load_forecast_dataframe(csv)

    def test_series_grouped_by_time(self, tmp_path):
        """Test that rows are grouped into one profile per forecast time."""
        csv = write_csv(tmp_path / "forecast.csv", [
            "time,altitude,direction,speed",
            "2024-06-01T12:00:00Z,10,250,4",
            "2024-06-01T12:00:00Z,3000,270,15",
            "2024-06-01T13:00:00Z,10,180,2",
            "2024-06-01T13:00:00Z,3000,200,10",
        ])
        series = dataframe_to_series(load_forecast_dataframe(csv))
        noon = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)
        one = datetime(2024, 6, 1, 13, tzinfo=timezone.utc)

        assert series.times == [noon, one]
        assert series.select(datetime(2024, 6, 1, 12, 40, tzinfo=timezone.utc)).samples[0].direction == 180.0
        assert series.profiles[noon].max_altitude == 3000.0
