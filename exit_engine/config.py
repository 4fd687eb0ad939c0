"""Configuration constants for the exit point engine."""

# Earth radius in meters (WGS84 mean radius)
EARTH_RADIUS_M = 6371008.8

# Integration resolution: altitude step per phase (meters)
FREEFALL_STEP_M = 100.0
CANOPY_STEP_M = 50.0

# Safety margins on the canopy's still-air range
SAFETY_RADIUS_MARGIN = 0.7  # 70% of theoretical maximum distance
REACHABILITY_MARGIN = 0.9  # 90% of theoretical maximum distance

# Standard pattern offset applied when the jump run does not pass over the
# landing zone. Zero until a drop zone defines its own pattern.
PATTERN_OFFSET_ANGLE = 0.0  # degrees, added to the jump run heading
PATTERN_OFFSET_DISTANCE = 0.0  # meters, lateral (positive = right of heading)

# Ground wind warnings only consider samples below this height (meters AGL)
GROUND_WIND_MAX_AGL = 50.0
STUDENT_WIND_LIMIT = 8.0  # m/s
SPORT_WIND_LIMIT = 11.0  # m/s

# Unit conversion
MS_TO_KNOTS = 1.94384

# Default jump profiles (altitudes in meters AGL, speeds in m/s)
DEFAULT_PROFILES = {
    "sport": {
        "jump_altitude": 4000.0,
        "aircraft_speed": 36.0,  # 130 km/h
        "freefall_speed": 55.56,  # 200 km/h
        "opening_altitude": 800.0,
        "canopy_descent_rate": 6.0,
        "glide_ratio": 2.5,
        "setup_altitude": 100.0,
    },
    "tandem": {
        "jump_altitude": 4000.0,
        "aircraft_speed": 36.0,
        "freefall_speed": 50.0,
        "opening_altitude": 1200.0,
        "canopy_descent_rate": 4.0,
        "glide_ratio": 2.0,
        "setup_altitude": 100.0,
    },
    "student": {
        "jump_altitude": 4000.0,
        "aircraft_speed": 36.0,
        "freefall_speed": 55.56,
        "opening_altitude": 1400.0,
        "canopy_descent_rate": 5.0,
        "glide_ratio": 2.2,
        "setup_altitude": 100.0,
    },
}
