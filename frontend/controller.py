"""
Interaction controller - owns the current coordinate and the latest lookup result
"""
import asyncio
from datetime import date
from typing import Callable, List, Optional, Protocol

from frontend.config import DEFAULT_LAT, DEFAULT_LON, ERROR_TEXT, LOADING_TEXT
from frontend.geolocation import GeolocationError
from frontend.lookup_client import LookupClientError
from frontend.models import Coordinate, LookupResult, LookupState
from frontend.solar import SunTimes, sun_times
from frontend.utils import get_logger

logger = get_logger("controller")

DEFAULT_COORDINATE = Coordinate(DEFAULT_LAT, DEFAULT_LON)


class SimilarPlaceLookup(Protocol):
    async def find_similar_place(self, user_location: str) -> str:
        ...


class Geolocator(Protocol):
    def locate(self) -> Coordinate:
        ...


Listener = Callable[[LookupResult], None]


class InteractionController:
    """
    Reacts to coordinate changes by issuing one lookup per change.

    Every lookup is tagged with a sequence number; a response that arrives after a
    newer lookup was issued is dropped, so the result always belongs to the most
    recently issued request. In-flight requests are never cancelled.
    """

    def __init__(
        self,
        lookup: SimilarPlaceLookup,
        geolocator: Optional[Geolocator] = None,
        default_coordinate: Coordinate = DEFAULT_COORDINATE
    ):
        self.lookup = lookup
        self.geolocator = geolocator
        self.current_coordinate = default_coordinate
        self.current_result = LookupResult(LookupState.UNINITIALIZED)
        self._issued = 0
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Call listener with every new result, Loading included"""
        self._listeners.append(listener)

    async def start(self) -> bool:
        """Take the first location fix and fire the initial lookup; a failed fix keeps the default"""
        coordinate = self.current_coordinate
        if self.geolocator is None:
            logger.warning("Geolocation is not available, using the default location")
        else:
            try:
                coordinate = await asyncio.to_thread(self.geolocator.locate)
            except GeolocationError as e:
                logger.warning(f"Error getting location: {e}")
        return await self._change_coordinate(coordinate)

    async def move_marker(self, lat: float, lon: float) -> bool:
        """Marker drag released at (lat, lon)"""
        return await self._change_coordinate(Coordinate(lat, lon))

    def sun_times(self, on: Optional[date] = None) -> SunTimes:
        """Sunrise and sunset at the current coordinate"""
        return sun_times(self.current_coordinate.lat, self.current_coordinate.lon, on)

    async def _change_coordinate(self, coordinate: Coordinate) -> bool:
        self.current_coordinate = coordinate.normalized()
        return await self._lookup(self.current_coordinate)

    async def _lookup(self, coordinate: Coordinate) -> bool:
        """Returns False when the response was superseded and discarded"""
        self._issued += 1
        token = self._issued
        self._set_result(LookupResult(LookupState.LOADING, LOADING_TEXT))

        try:
            text = await self.lookup.find_similar_place(coordinate.describe())
            result = LookupResult(LookupState.READY, text)
        except LookupClientError as e:
            logger.error(f"Error fetching similar place: {e}")
            result = LookupResult(LookupState.ERROR, ERROR_TEXT)

        if token != self._issued:
            logger.info(f"Discarding response {token} superseded by request {self._issued}")
            return False
        self._set_result(result)
        return True

    def _set_result(self, result: LookupResult) -> None:
        self.current_result = result
        for listener in self._listeners:
            listener(result)
