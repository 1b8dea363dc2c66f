# ABOUTME: Assembles fog reports and multi-day outlooks from forecast data and the calculation core.
# ABOUTME: Fetches hourly weather and sun times, selects the hours around sunrise, and runs the models.

import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta

import httpx

from src.astronomy import compute_sunrise
from src.clouds import analyze_cloud_trend, normalize_cloud_layers
from src.fog import calculate_fog_probability, round_half_up
from src.models import DailyFogOutlook, FogReport, GeoPoint, HourlyOutlook, HourlyWeather, TimeOfDay
from src.photography import blue_hour, golden_hour
from src.weather_service import (
    SunTimesError,
    describe_weather_code,
    fetch_sun_times,
    get_forecast_days,
    get_hourly_forecast,
    parse_time_of_day,
    to_cloud_reading,
    to_weather_sample,
)

logger = logging.getLogger(__name__)

# Hours either side of sunrise that feed the fog model
SUNRISE_SPAN_HOURS = 2

# Rows used when nothing falls inside the sunrise window
FALLBACK_HOURS = 24

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class ForecastUnavailableError(Exception):
    """The weather provider returned no hourly data."""


def select_sunrise_window(
    hours: Sequence[HourlyWeather],
    day: date,
    sunrise: TimeOfDay,
    span_hours: int = SUNRISE_SPAN_HOURS,
) -> list[HourlyWeather]:
    """Return the hourly rows within span_hours of sunrise on the given day, in order."""
    center = datetime(day.year, day.month, day.day, sunrise.hour, sunrise.minute)
    start = center - timedelta(hours=span_hours)
    end = center + timedelta(hours=span_hours)
    return [h for h in hours if start <= h.time.replace(tzinfo=None) <= end]


async def resolve_sunrise(client: httpx.AsyncClient, point: GeoPoint, timezone: str, day: date) -> tuple[TimeOfDay, str]:
    """Sunrise from SunriseSunset.io, or the local calculation if the API cannot answer.

    Returns the time and its source, "api" or "calculated".
    """
    try:
        sun_times = await fetch_sun_times(client, point.latitude, point.longitude, day, timezone)
        if sun_times.sunrise:
            return parse_time_of_day(sun_times.sunrise), "api"
        logger.warning("No sunrise from sun-times API for %s, calculating locally", day)
    except (httpx.HTTPError, SunTimesError) as e:
        logger.warning("Sun-times API failed for %s (%s), calculating locally", day, e)
    except ValueError:
        logger.exception("Unparseable sunrise from sun-times API for %s, calculating locally", day)

    return compute_sunrise(point.latitude, point.longitude, day, point.utc_offset_hours), "calculated"


async def get_fog_report(client: httpx.AsyncClient, point: GeoPoint, timezone: str, day: date) -> FogReport:
    """Build the full fog and photography report for the morning of the given day.

    The last hour of the sunrise window is scored, with the hour before it providing the
    temperature trend. Cloud trend covers the whole window.
    """
    forecast = await get_hourly_forecast(client, point.latitude, point.longitude, timezone, day, day + timedelta(days=1))
    if not forecast.hourly:
        raise ForecastUnavailableError(f"No hourly forecast for {point.latitude}, {point.longitude} on {day}")

    if forecast.utc_offset_seconds is not None:
        point = point.model_copy(update={"utc_offset_hours": forecast.utc_offset_seconds / 3600})

    sunrise, source = await resolve_sunrise(client, point, timezone, day)

    window = select_sunrise_window(forecast.hourly, day, sunrise)
    if not window:
        logger.warning("No hourly data around sunrise %s on %s, using first %d hours", sunrise, day, FALLBACK_HOURS)
        window = list(forecast.hourly[:FALLBACK_HOURS])

    samples = [to_weather_sample(h) for h in window]
    previous = samples[-2] if len(samples) > 1 else None
    fog = calculate_fog_probability(samples[-1], previous)

    readings = [to_cloud_reading(h) for h in window]

    return FogReport(
        date=day,
        sunrise=sunrise,
        sunrise_source=source,
        blue_hour=blue_hour(sunrise),
        golden_hour=golden_hour(sunrise),
        fog=fog,
        cloud_layers=normalize_cloud_layers(readings[-1], point.altitude_meters),
        cloud_trend=analyze_cloud_trend(readings),
        hours=[
            HourlyOutlook(time=h.time, sample=s, description=describe_weather_code(h.weather_code))
            for h, s in zip(window, samples)
        ],
    )


async def get_fog_outlook(
    client: httpx.AsyncClient,
    point: GeoPoint,
    timezone: str,
    days: int = 7,
) -> list[DailyFogOutlook]:
    """Average morning fog probability for each of the next days, starting today.

    Sunrise is calculated locally for every day. Each hour in the window is scored on its own,
    without a temperature trend; days with no data in the window score zero.
    """
    forecast = await get_forecast_days(client, point.latitude, point.longitude, timezone, days)
    if forecast.utc_offset_seconds is not None:
        point = point.model_copy(update={"utc_offset_hours": forecast.utc_offset_seconds / 3600})

    by_day: dict[date, list[HourlyWeather]] = {}
    for h in forecast.hourly:
        by_day.setdefault(h.time.date(), []).append(h)

    outlook = []
    for day in sorted(by_day)[:days]:
        sunrise = compute_sunrise(point.latitude, point.longitude, day, point.utc_offset_hours)
        window = select_sunrise_window(by_day[day], day, sunrise)
        scores = [calculate_fog_probability(to_weather_sample(h)).overall_fog_pct for h in window]
        average = sum(scores) / len(scores) if scores else 0

        outlook.append(
            DailyFogOutlook(
                date=day,
                day_of_week=DAY_NAMES[day.weekday()],
                sunrise=sunrise,
                fog_probability_pct=int(min(100, max(0, round_half_up(average)))),
            )
        )
    return outlook
