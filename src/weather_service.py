# ABOUTME: Service layer for Open-Meteo and SunriseSunset.io API calls and response parsing.
# ABOUTME: Handles geocoding, hourly fog-relevant forecasts, sun times, and WMO code labels.

from datetime import date, datetime

import httpx

from src.models import CloudLayerReading, GeoLocation, HourlyWeather, SunTimes, TimeOfDay, WeatherResponse, WeatherSample

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
SUN_TIMES_URL = "https://api.sunrisesunset.io/json"

HOURLY_PARAMS = (
    "temperature_2m,relative_humidity_2m,dew_point_2m,wind_speed_10m,"
    "weather_code,cloud_cover,cloud_cover_low,cloud_cover_mid,cloud_cover_high"
)

# The fog model scores wind in m/s; Open-Meteo defaults to km/h
WIND_SPEED_UNIT = "ms"

WMO_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


class SunTimesError(Exception):
    """SunriseSunset.io returned a non-OK status."""


async def geocode(client: httpx.AsyncClient, city_name: str) -> GeoLocation | None:
    """Geocode a place name to coordinates using Open-Meteo geocoding API."""
    resp = await client.get(GEOCODING_URL, params={"name": city_name, "count": 1, "language": "en"})
    resp.raise_for_status()
    data = resp.json()

    results = data.get("results")
    if not results:
        return None

    r = results[0]
    return GeoLocation(
        latitude=r["latitude"],
        longitude=r["longitude"],
        timezone=r.get("timezone", "UTC"),
        name=r["name"],
        country=r.get("country"),
        elevation=r.get("elevation"),
    )


async def get_hourly_forecast(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    timezone: str,
    start_date: date,
    end_date: date,
) -> WeatherResponse:
    """Fetch hourly fog-relevant variables for an inclusive date range."""
    return await _fetch_forecast(
        client,
        {
            "latitude": latitude,
            "longitude": longitude,
            "timezone": timezone,
            "hourly": HOURLY_PARAMS,
            "wind_speed_unit": WIND_SPEED_UNIT,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        },
        timezone,
    )


async def get_forecast_days(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    timezone: str,
    forecast_days: int = 7,
) -> WeatherResponse:
    """Fetch hourly fog-relevant variables for the next forecast_days days, starting today."""
    return await _fetch_forecast(
        client,
        {
            "latitude": latitude,
            "longitude": longitude,
            "timezone": timezone,
            "hourly": HOURLY_PARAMS,
            "wind_speed_unit": WIND_SPEED_UNIT,
            "forecast_days": forecast_days,
        },
        timezone,
    )


async def _fetch_forecast(client: httpx.AsyncClient, params: dict, timezone: str) -> WeatherResponse:
    resp = await client.get(FORECAST_URL, params=params)
    resp.raise_for_status()
    data = resp.json()

    return WeatherResponse(
        latitude=data["latitude"],
        longitude=data["longitude"],
        timezone=data.get("timezone", timezone),
        utc_offset_seconds=data.get("utc_offset_seconds"),
        hourly=parse_hourly_data(data.get("hourly", {})),
    )


async def fetch_sun_times(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    day: date,
    timezone: str,
) -> SunTimes:
    """Fetch sunrise, sunset, and twilight times from SunriseSunset.io in 24-hour format."""
    resp = await client.get(
        SUN_TIMES_URL,
        params={
            "lat": latitude,
            "lng": longitude,
            "date": day.isoformat(),
            "timezone": timezone,
            "time_format": "24",
        },
    )
    resp.raise_for_status()
    data = resp.json()

    if data.get("status") != "OK" or not data.get("results"):
        raise SunTimesError(f"SunriseSunset.io error: {data.get('status', 'no status')}")
    return SunTimes.model_validate(data["results"])


def parse_hourly_data(raw: dict) -> list[HourlyWeather]:
    """Parse Open-Meteo column-oriented hourly data into row-oriented HourlyWeather objects."""
    times = raw.get("time", [])
    if not times:
        return []

    result = []
    for i, t in enumerate(times):
        result.append(
            HourlyWeather(
                time=datetime.fromisoformat(t),
                temperature_2m=_get_at(raw, "temperature_2m", i),
                relative_humidity_2m=_get_at(raw, "relative_humidity_2m", i),
                dew_point_2m=_get_at(raw, "dew_point_2m", i),
                wind_speed_10m=_get_at(raw, "wind_speed_10m", i),
                weather_code=_get_at(raw, "weather_code", i),
                cloud_cover=_get_at(raw, "cloud_cover", i),
                cloud_cover_low=_get_at(raw, "cloud_cover_low", i),
                cloud_cover_mid=_get_at(raw, "cloud_cover_mid", i),
                cloud_cover_high=_get_at(raw, "cloud_cover_high", i),
            )
        )
    return result


def to_weather_sample(hour: HourlyWeather) -> WeatherSample:
    """Convert an hourly row into a fog model sample. Missing values count as zero."""
    return WeatherSample(
        temperature_c=hour.temperature_2m or 0.0,
        relative_humidity_pct=hour.relative_humidity_2m or 0,
        dew_point_c=hour.dew_point_2m or 0.0,
        wind_speed_ms=hour.wind_speed_10m or 0.0,
        weather_code=hour.weather_code or 0,
        cloud_cover_pct=hour.cloud_cover or 0,
        low_cloud_cover_pct=hour.cloud_cover_low or 0,
        mid_cloud_cover_pct=hour.cloud_cover_mid or 0,
        high_cloud_cover_pct=hour.cloud_cover_high or 0,
    )


def to_cloud_reading(hour: HourlyWeather) -> CloudLayerReading:
    return CloudLayerReading(
        low_cloud=hour.cloud_cover_low or 0,
        mid_cloud=hour.cloud_cover_mid or 0,
        high_cloud=hour.cloud_cover_high or 0,
        total_cloud=hour.cloud_cover or 0,
        time=hour.time,
    )


def parse_time_of_day(value: str) -> TimeOfDay:
    """Parse "HH:MM" or "HH:MM:SS" into a TimeOfDay, dropping seconds."""
    hour, minute = value.split(":")[:2]
    return TimeOfDay(hour=int(hour), minute=int(minute))


def describe_weather_code(code: int | None) -> str:
    return WMO_DESCRIPTIONS.get(code, "Unknown")


def _get_at(data: dict, key: str, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if col is None or index >= len(col):
        return None
    return col[index]
