"""Group exit scheduling along the aircraft ground track."""
from typing import List

from exit_engine.exceptions import InvalidParameterError
from exit_engine.models.geo import LatLon
from exit_engine.models.jump import ExitPoint
from exit_engine.utils.geo_utils import to_geodetic
from exit_engine.utils.vector_utils import heading_to_unit


def schedule_groups(
    solo_exit_point: LatLon,
    heading: float,
    aircraft_speed: float,
    number_of_groups: int,
    time_between_groups: float,
) -> List[ExitPoint]:
    """
    Exit points for every group, in exit order.

    Group 1 exits at the solo exit point. Each following group is placed
    aircraft_speed x time_between_groups meters further back along the
    ground track, opposite the heading.

    Args:
        solo_exit_point: Solved exit point for a single jumper
        heading: Aircraft ground track in degrees
        aircraft_speed: Ground speed in m/s (0 collapses all groups)
        number_of_groups: Number of groups on the load
        time_between_groups: Seconds between consecutive exits

    Returns:
        ExitPoints numbered 1..number_of_groups
    """
    if int(number_of_groups) != number_of_groups or number_of_groups < 1:
        raise InvalidParameterError(
            f"number_of_groups must be a positive integer, got {number_of_groups}",
            parameter="number_of_groups",
        )
    if not time_between_groups >= 0:
        raise InvalidParameterError(
            f"time_between_groups must be non-negative, got {time_between_groups}",
            parameter="time_between_groups",
        )
    if not aircraft_speed >= 0:
        raise InvalidParameterError(
            f"aircraft_speed must be non-negative, got {aircraft_speed}",
            parameter="aircraft_speed",
        )

    spacing = aircraft_speed * time_between_groups
    step = -heading_to_unit(heading) * spacing

    exit_points = []
    for index in range(int(number_of_groups)):
        if index == 0 or spacing == 0:
            location = solo_exit_point
        else:
            offset = step * index
            location = to_geodetic(solo_exit_point, float(offset[0]), float(offset[1]))
        exit_points.append(ExitPoint(location=location, group_number=index + 1))

    return exit_points


def ground_track(
    first_exit_point: LatLon,
    heading: float,
    total_distance: float,
) -> List[LatLon]:
    """
    Aircraft ground track line for display.

    Starts at group 1's exit point and extends opposite the heading by the
    total scheduling distance, ending on the last group's exit point.
    """
    offset = -heading_to_unit(heading) * total_distance
    return [
        first_exit_point,
        to_geodetic(first_exit_point, float(offset[0]), float(offset[1])),
    ]
