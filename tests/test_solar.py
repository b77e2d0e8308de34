from datetime import date, datetime, timezone

import pytest

from frontend.solar import sun_times


def _utc_minutes(moment: datetime) -> float:
    moment = moment.astimezone(timezone.utc)
    return moment.hour * 60 + moment.minute + moment.second / 60


def test_london_summer_solstice():
    times = sun_times(51.5074, -0.1278, date(2024, 6, 21))

    # 03:43 and 20:21 UTC
    assert _utc_minutes(times.sunrise) == pytest.approx(3 * 60 + 43, abs=5)
    assert _utc_minutes(times.sunset) == pytest.approx(20 * 60 + 21, abs=5)
    assert times.sunrise.tzname() == "BST"
    assert times.sunrise.date() == date(2024, 6, 21)


def test_western_sunset_stays_on_the_local_day():
    times = sun_times(40.7128, -74.0060, date(2024, 6, 21))

    assert times.sunrise < times.sunset
    assert times.sunset.date() == date(2024, 6, 21)
    assert times.sunset.hour == 20
    assert times.sunrise.hour == 5


@pytest.mark.parametrize("day", [date(2024, 6, 21), date(2024, 12, 21)])
def test_polar_day_and_night_have_no_events(day):
    times = sun_times(69.65, 18.96, day)

    assert times.sunrise is None
    assert times.sunset is None


def test_same_input_gives_same_output():
    assert sun_times(-33.87, 151.21, date(2024, 3, 20)) == sun_times(-33.87, 151.21, date(2024, 3, 20))


def test_far_east_zones_report_the_next_civil_date():
    times = sun_times(1.87, -157.40, date(2024, 6, 21))

    assert times.sunrise.utcoffset().total_seconds() == 14 * 3600
    assert times.sunrise.date() == date(2024, 6, 22)
