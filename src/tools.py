# ABOUTME: Agent tool definitions for geocoding, fog reports, and multi-day fog outlooks.
# ABOUTME: Registers the tools on the agent via decorators and adds alert recommendations.

from datetime import date

import httpx
from pydantic_ai import ModelRetry, RunContext

from src.agent import agent
from src.alerts import default_alert_config, should_send_alert
from src.clouds import CLOUD_HEIGHT_EXPLANATION
from src.deps import FogDeps
from src.forecast import ForecastUnavailableError, get_fog_outlook, get_fog_report
from src.models import GeoPoint
from src.weather_service import geocode


@agent.tool
async def get_location_coordinates(ctx: RunContext[FogDeps], place_name: str) -> dict:
    """Look up the latitude, longitude, timezone, and elevation for a place name.

    Always call this first before fetching fog data.

    Args:
        ctx: Agent run context with HTTP client.
        place_name: Name of the place to geocode (e.g. "Huangshan", "San Francisco").
    """
    try:
        result = await geocode(ctx.deps.http_client, place_name)
    except httpx.HTTPError as e:
        raise ModelRetry(f"Geocoding API failed for '{place_name}': {e}") from e
    if result is None:
        return {"error": f"Could not find location: {place_name}"}
    return result.model_dump()


@agent.tool
async def get_morning_fog_report(
    ctx: RunContext[FogDeps],
    latitude: float,
    longitude: float,
    timezone: str,
    date_str: str,
    altitude_meters: int = 0,
) -> dict:
    """Get the fog probability, cloud layers, sunrise, blue hour, and golden hour for one morning.

    Args:
        ctx: Agent run context with HTTP client.
        latitude: Location latitude from geocoding.
        longitude: Location longitude from geocoding.
        timezone: Location timezone from geocoding (e.g. "Asia/Shanghai").
        date_str: Morning to report on, in ISO format (YYYY-MM-DD).
        altitude_meters: Site elevation in meters, from geocoding.
    """
    try:
        day = date.fromisoformat(date_str)
    except ValueError as e:
        raise ModelRetry(f"Invalid date format, use YYYY-MM-DD: {e}") from e

    point = GeoPoint(latitude=latitude, longitude=longitude, altitude_meters=max(0, altitude_meters))
    try:
        report = await get_fog_report(ctx.deps.http_client, point, timezone, day)
    except httpx.HTTPError as e:
        raise ModelRetry(f"Forecast API failed: {e}") from e
    except ForecastUnavailableError as e:
        raise ModelRetry(f"No forecast data for that morning: {e}") from e

    result = report.model_dump(mode="json")
    result["alert_recommended"] = should_send_alert(default_alert_config(), report.fog.overall_fog_pct)
    result["cloud_height_note"] = CLOUD_HEIGHT_EXPLANATION
    return result


@agent.tool
async def get_fog_outlook_days(
    ctx: RunContext[FogDeps],
    latitude: float,
    longitude: float,
    timezone: str,
    days: int = 7,
) -> list[dict]:
    """Get the average morning fog probability and sunrise time for each of the coming days.

    Args:
        ctx: Agent run context with HTTP client.
        latitude: Location latitude from geocoding.
        longitude: Location longitude from geocoding.
        timezone: Location timezone from geocoding (e.g. "Asia/Shanghai").
        days: Number of days to cover (1-16, default 7).
    """
    point = GeoPoint(latitude=latitude, longitude=longitude)
    try:
        outlook = await get_fog_outlook(ctx.deps.http_client, point, timezone, min(16, max(1, days)))
    except httpx.HTTPError as e:
        raise ModelRetry(f"Forecast API failed: {e}") from e
    return [day.model_dump(mode="json") for day in outlook]
