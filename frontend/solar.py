"""Sunrise and sunset times from the sunrise equation. No network access."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from pytz import timezone, utc
from timezonefinder import TimezoneFinder

# Official zenith: 90° plus refraction and the solar disc radius
ZENITH = 90.8333
DEGREES_PER_HOUR = 360 / 24

_tf = TimezoneFinder()


@dataclass(frozen=True)
class SunTimes:
    """Sunrise/sunset for one place and day. None when the sun never crosses the horizon."""

    sunrise: Optional[datetime]
    sunset: Optional[datetime]


def _sin(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cos(deg: float) -> float:
    return math.cos(math.radians(deg))


def _tan(deg: float) -> float:
    return math.tan(math.radians(deg))


def _event_utc(lat: float, lon: float, on: date, rising: bool, zenith: float = ZENITH) -> Optional[datetime]:
    """UTC instant of sunrise (rising=True) or sunset on the local solar day `on`."""
    day_of_year = on.timetuple().tm_yday
    hours_from_meridian = lon / DEGREES_PER_HOUR
    approx_days = day_of_year + ((6 if rising else 18) - hours_from_meridian) / 24

    mean_anomaly = 0.9856 * approx_days - 3.289
    true_longitude = (
        mean_anomaly
        + 1.916 * _sin(mean_anomaly)
        + 0.020 * _sin(2 * mean_anomaly)
        + 282.634
    ) % 360

    right_ascension = math.degrees(math.atan(0.91764 * _tan(true_longitude))) % 360
    # Same quadrant as the true longitude
    right_ascension += (true_longitude // 90) * 90 - (right_ascension // 90) * 90
    right_ascension /= DEGREES_PER_HOUR

    sin_dec = 0.39782 * _sin(true_longitude)
    cos_dec = math.cos(math.asin(sin_dec))
    cos_hour_angle = (_cos(zenith) - sin_dec * _sin(lat)) / (cos_dec * _cos(lat))
    if not -1.0 <= cos_hour_angle <= 1.0:
        return None  # polar day or polar night

    hour_angle = math.degrees(math.acos(cos_hour_angle))
    if rising:
        hour_angle = 360 - hour_angle

    local_mean_time = hour_angle / DEGREES_PER_HOUR + right_ascension - 0.06571 * approx_days - 6.622
    ut_hours = (local_mean_time - hours_from_meridian) % 24

    event = datetime(on.year, on.month, on.day, tzinfo=utc) + timedelta(hours=ut_hours)
    # Keep the event on the requested day in local solar time
    solar_day = (event + timedelta(hours=hours_from_meridian)).date()
    return event + timedelta(days=(on - solar_day).days)


def local_timezone(lat: float, lon: float) -> tzinfo:
    """IANA zone for the coordinate, UTC over open ocean."""
    name = _tf.timezone_at(lng=lon, lat=lat)
    return timezone(name) if name else utc


def sun_times(lat: float, lon: float, on: Optional[date] = None) -> SunTimes:
    """Sunrise and sunset at (lat, lon), expressed in the coordinate's own time zone.

    Args:
        lat: Latitude in degrees, [-90, 90].
        lon: Longitude in degrees, [-180, 180].
        on: Calendar day; defaults to today.

    `on` is the local solar day (UTC shifted by lon / 15 hours). Where the civil
    zone runs far ahead of solar time, as at UTC+13/+14 (Samoa, Kiritimati), the
    returned events carry the next civil date.
    """
    on = on or date.today()
    tz = local_timezone(lat, lon)
    sunrise = _event_utc(lat, lon, on, rising=True)
    sunset = _event_utc(lat, lon, on, rising=False)
    return SunTimes(
        sunrise=sunrise.astimezone(tz) if sunrise else None,
        sunset=sunset.astimezone(tz) if sunset else None,
    )
