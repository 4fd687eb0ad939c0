"""2-D vector helpers in the local East-North frame.

Vectors are numpy arrays of shape (2,) or (n, 2) holding (east, north)
components in meters or m/s. Compass angles are degrees clockwise from north.
"""
import numpy as np


def heading_to_unit(heading: float) -> np.ndarray:
    """Unit vector pointing toward a compass heading."""
    radians = np.radians(heading)
    return np.array([np.sin(radians), np.cos(radians)])


def wind_to_vector(direction, speed) -> np.ndarray:
    """
    Convert meteorological wind to the vector it pushes along.

    Direction is where the wind comes FROM, so the push points toward
    direction + 180°. Accepts scalars or equal-length arrays; arrays give an
    (n, 2) result. Zero speed gives a zero vector whatever the direction.

    Args:
        direction: Wind "from" direction in degrees
        speed: Wind speed (m/s)

    Returns:
        (east, north) push vector
    """
    radians = np.radians(np.asarray(direction, dtype=float) + 180.0)
    speed = np.asarray(speed, dtype=float)
    vectors = np.stack([speed * np.sin(radians), speed * np.cos(radians)], axis=-1)
    # Calm air pushes nowhere, even with an undefined direction
    calm = np.expand_dims(speed == 0, axis=-1)
    return np.where(calm, 0.0, vectors)


def vector_to_wind(vector) -> tuple:
    """
    Convert a push vector back to (from-direction, speed).

    A zero vector has no direction and is reported as (0.0, 0.0).
    """
    east, north = float(vector[0]), float(vector[1])
    speed = float(np.hypot(east, north))
    if speed == 0:
        return 0.0, 0.0
    going_to = np.degrees(np.arctan2(east, north))
    return float((going_to + 180.0) % 360.0), speed


def normalize_angle(angle):
    """Wrap compass angles to [0, 360)."""
    return np.mod(angle, 360.0)


def interpolate_direction(lower, upper, ratio):
    """
    Interpolate compass directions along the shorter arc.

    350° to 10° at 0.5 gives 0°, not 180°.
    """
    lower = np.mod(lower, 360.0)
    upper = np.mod(upper, 360.0)
    diff = upper - lower
    diff = np.where(diff > 180.0, diff - 360.0, diff)
    diff = np.where(diff < -180.0, diff + 360.0, diff)
    return np.mod(lower + diff * ratio, 360.0)

