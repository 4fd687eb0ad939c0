"""File I/O utilities for wind forecast CSV files."""
from pathlib import Path

import pandas as pd

from exit_engine.models.wind import ForecastSeries, WindProfile

REQUIRED_COLUMNS = ("altitude", "direction", "speed")


def load_forecast_dataframe(file_path: Path) -> pd.DataFrame:
    """
    Load a forecast CSV.

    Expected columns: altitude, direction, speed, and optionally gust_speed,
    temperature and time (ISO 8601). Rows keep their file order.
    """
    df = pd.read_csv(file_path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{file_path} is missing columns: {', '.join(missing)}")
    if "time" in df.columns:
        df["time"] = pd.to_datetime(df["time"], utc=True)
    return df


def load_wind_profile(file_path: Path) -> WindProfile:
    """Load a single wind profile from a CSV without a time column."""
    return WindProfile.from_dataframe(load_forecast_dataframe(file_path))


def dataframe_to_series(df: pd.DataFrame) -> ForecastSeries:
    """Group a forecast DataFrame by its time column into a ForecastSeries."""
    profiles = {}
    for time, group in df.groupby("time", sort=True):
        profiles[time.to_pydatetime()] = WindProfile.from_dataframe(group)
    return ForecastSeries(profiles=profiles)
