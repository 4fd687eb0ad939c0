"""Geographic value types."""
from attrs import field, frozen

from exit_engine.exceptions import InvalidCoordinateError


@frozen
class LatLon:
    """A WGS84 position in degrees."""

    lat: float = field(converter=float)
    lon: float = field(converter=float)

    def __attrs_post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise InvalidCoordinateError(f"Longitude {self.lon} outside [-180, 180]")

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {"lat": self.lat, "lon": self.lon}


@frozen
class TerrainData:
    """Ground elevation at a location."""

    location: LatLon
    elevation: float = field(converter=float)  # meters AMSL
