"""Errors raised by the exit point engine.

Every error is a local validation failure. Nothing is retried and no partial
result is ever returned: callers catch CalculationError (or a subclass) and
decide what to show.
"""


class CalculationError(Exception):
    """Base class for all exit point calculation errors."""
    pass


class InvalidCoordinateError(CalculationError):
    """Latitude/longitude outside the valid range, or an unusable frame origin."""
    pass


class UnsortedProfileError(CalculationError):
    """Wind samples are not keyed by strictly increasing altitude."""
    pass


class EmptyProfileError(CalculationError):
    """A wind lookup was attempted on a profile without samples."""
    pass


class InvalidAltitudeRangeError(CalculationError):
    """A descent that does not descend, or altitudes in the wrong order."""
    pass


class NoWindDataError(CalculationError):
    """The wind data cannot cover the requested descent."""
    pass


class InvalidParameterError(CalculationError):
    """Non-positive speed or ratio, zero groups, negative group spacing."""

    def __init__(self, message: str, parameter: str = None):
        """
        Args:
            parameter: Name of the offending parameter, when known
        """
        self.parameter = parameter
        super().__init__(message)
