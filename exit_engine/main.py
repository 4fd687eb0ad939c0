"""
Command-line exit point calculator.

Reads a wind forecast CSV (altitude, direction, speed, optional gust_speed,
temperature and time columns; altitudes in meters AMSL), computes the exit
points for one jump profile and prints them.

With a time column the forecast closest to --jump-time is used, or every
forecast hour with --all-times.
"""
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from tqdm import tqdm

from exit_engine.config import (
    DEFAULT_PROFILES,
    MS_TO_KNOTS,
    PATTERN_OFFSET_ANGLE,
    PATTERN_OFFSET_DISTANCE,
)
from exit_engine.exceptions import CalculationError
from exit_engine.models.geo import LatLon, TerrainData
from exit_engine.models.jump import CommonParameters, JumpParameters
from exit_engine.models.results import ExitCalculationResult
from exit_engine.models.wind import WindProfile
from exit_engine.services.exit_calculator import ExitCalculator
from exit_engine.services.exit_point_solver import ExitPointSolver
from exit_engine.utils.file_utils import dataframe_to_series, load_forecast_dataframe
from exit_engine.utils.vector_utils import vector_to_wind

PARAMETER_FLAGS = (
    "jump_altitude",
    "aircraft_speed",
    "freefall_speed",
    "opening_altitude",
    "canopy_descent_rate",
    "glide_ratio",
    "setup_altitude",
)


def build_jump_parameters(profile_name: str, overrides: Dict[str, Optional[float]]) -> JumpParameters:
    """Default profile parameters with command-line overrides applied."""
    values = dict(DEFAULT_PROFILES[profile_name])
    values.update({k: v for k, v in overrides.items() if v is not None})
    return JumpParameters(**values)


def print_result(result: ExitCalculationResult) -> None:
    """Print a human-readable summary of a calculation."""
    heading = f"{result.aircraft_heading:.0f}°"
    canopy = "no glide" if result.canopy_heading is None else f"{result.canopy_heading:.0f}°"
    print(f"Aircraft heading: {heading}, canopy heading: {canopy}")
    print(
        f"Freefall drift: {result.freefall.distance:.0f} m "
        f"in {result.freefall.elapsed:.0f} s"
    )
    print(
        f"Canopy drift:   {result.canopy.distance:.0f} m "
        f"in {result.canopy.elapsed:.0f} s"
    )
    direction, speed = vector_to_wind(result.freefall.drift / result.freefall.elapsed)
    print(f"Mean freefall wind: {direction:.0f}° {speed * MS_TO_KNOTS:.0f} kt")
    print(f"Group spacing:  {result.spacing_distance:.0f} m")
    print(f"Safety radius:  {result.safety_radius:.0f} m")
    for exit_point in result.exit_points:
        location = exit_point.location
        print(f"  Group {exit_point.group_number}: {location.lat:.6f}, {location.lon:.6f}")


def main():
    """Run the exit point calculator."""
    import argparse

    parser = argparse.ArgumentParser(description="Calculate skydiving exit points")
    parser.add_argument("forecast", type=Path, help="Wind forecast CSV file")
    parser.add_argument("--lat", type=float, required=True, help="Landing zone latitude")
    parser.add_argument("--lon", type=float, required=True, help="Landing zone longitude")
    parser.add_argument(
        "--elevation",
        type=float,
        default=0.0,
        help="Landing zone elevation in meters AMSL (jump altitudes are AGL)",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(DEFAULT_PROFILES),
        default="sport",
        help="Default jump profile to start from",
    )
    for name in PARAMETER_FLAGS:
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            type=float,
            default=None,
            help=f"Override {name.replace('_', ' ')} of the profile",
        )
    parser.add_argument(
        "--flight-direction",
        type=float,
        default=None,
        help="Jump run heading in degrees (default: into the wind)",
    )
    parser.add_argument(
        "--over-landing-zone",
        action="store_true",
        help="Jump run passes directly over the landing zone",
    )
    parser.add_argument("--groups", type=int, default=1, help="Number of groups")
    parser.add_argument(
        "--time-between-groups",
        type=float,
        default=0.0,
        help="Seconds between group exits",
    )
    parser.add_argument(
        "--jump-time",
        type=datetime.fromisoformat,
        default=None,
        help="Jump time (ISO 8601) used to pick the forecast hour",
    )
    parser.add_argument(
        "--all-times",
        action="store_true",
        help="Calculate for every forecast hour in the file",
    )
    parser.add_argument(
        "--wind-corrected-spacing",
        action="store_true",
        help="Space groups by ground speed instead of aircraft speed",
    )
    parser.add_argument("--pattern-angle", type=float, default=PATTERN_OFFSET_ANGLE)
    parser.add_argument("--pattern-distance", type=float, default=PATTERN_OFFSET_DISTANCE)
    parser.add_argument(
        "--strict-coverage",
        action="store_true",
        help="Fail when the forecast does not span the whole descent",
    )
    parser.add_argument(
        "--agl-forecast",
        action="store_true",
        help="Forecast altitudes are above ground level instead of sea level",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    args = parser.parse_args()

    try:
        params = build_jump_parameters(
            args.profile, {name: getattr(args, name) for name in PARAMETER_FLAGS}
        )
        landing_zone = LatLon(lat=args.lat, lon=args.lon)
        common = CommonParameters(
            landing_zone=landing_zone,
            flight_direction=args.flight_direction,
            flight_over_landing_zone=args.over_landing_zone,
            jump_time=args.jump_time,
            number_of_groups=args.groups,
            time_between_groups=args.time_between_groups,
        )
        terrain = TerrainData(location=landing_zone, elevation=args.elevation)
        calculator = ExitCalculator(
            solver=ExitPointSolver(
                pattern_offset_angle=args.pattern_angle,
                pattern_offset_distance=args.pattern_distance,
                strict_coverage=args.strict_coverage,
            ),
            wind_corrected_spacing=args.wind_corrected_spacing,
        )

        df = load_forecast_dataframe(args.forecast)
        if "time" not in df.columns:
            profiles = {None: WindProfile.from_dataframe(df)}
        else:
            series = dataframe_to_series(df)
            if not args.json:
                print(f"Loaded {len(series.profiles)} forecast hours from {args.forecast}")
            if args.all_times:
                profiles = dict(series.profiles)
            else:
                jump_time = args.jump_time or datetime.now(timezone.utc)
                if jump_time.tzinfo is None:
                    jump_time = jump_time.replace(tzinfo=timezone.utc)
                closest = series.closest_time(jump_time)
                profiles = {closest: series.profiles[closest]}

        if args.agl_forecast:
            profiles = {time: p.shifted(args.elevation) for time, p in profiles.items()}

        results = {}
        for time, profile in tqdm(profiles.items(), desc="Calculating", disable=len(profiles) < 2):
            results[time] = calculator.calculate(profile, params, common, terrain)
    except (CalculationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        payload = [
            {"time": time.isoformat() if time else None, **result.to_dict()}
            for time, result in results.items()
        ]
        print(json.dumps(payload if len(payload) > 1 else payload[0], indent=2))
        return

    for time, result in results.items():
        if time is not None:
            print(f"\nForecast {time.isoformat()}")
        print_result(result)


if __name__ == "__main__":
    main()
