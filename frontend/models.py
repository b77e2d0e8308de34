"""Client-side state types."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """A point on Earth in decimal degrees."""

    lat: float
    lon: float

    def normalized(self) -> "Coordinate":
        """Clamp latitude and wrap longitude into [-180, 180); map drags can leave the range."""
        lat = max(-90.0, min(90.0, self.lat))
        lon = self.lon
        if not -180.0 <= lon < 180.0:
            lon = (lon + 180.0) % 360.0 - 180.0
        return Coordinate(lat, lon)

    def describe(self) -> str:
        """Text sent to the lookup API."""
        return f"{self.lat:.4f}, {self.lon:.4f}"


class LookupState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class LookupResult:
    """What the popup shows under "your location has similar times to"."""

    state: LookupState
    text: str = ""
