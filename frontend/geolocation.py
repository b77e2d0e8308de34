import requests

from frontend.config import GEOLOCATION_URL
from frontend.models import Coordinate
from frontend.utils import get_logger

logger = get_logger("geolocation")


class GeolocationError(Exception):
    """Device location could not be determined."""


class IpGeolocator:
    """Approximate device location from the public IP address"""

    def __init__(self, url: str = GEOLOCATION_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def locate(self) -> Coordinate:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            coordinate = Coordinate(float(data["latitude"]), float(data["longitude"]))
        except (requests.RequestException, KeyError, TypeError, ValueError) as e:
            raise GeolocationError(f"Could not locate device via {self.url}: {e}") from e

        logger.info(f"Located device at {coordinate.describe()}")
        return coordinate
