# ABOUTME: Pydantic BaseModels for fog calculations, sun timings, and Open-Meteo data.
# ABOUTME: Defines the immutable value types passed between the service, core, and agent layers.

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

Trend = Literal["increasing", "decreasing", "stable"]
TemperatureTrend = Literal["decreasing", "stable", "increasing"]
RiskLevel = Literal["low", "medium", "high"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class GeoPoint(_Frozen):
    """Site coordinates. Range checks belong to the caller."""

    latitude: float
    longitude: float
    altitude_meters: int = 0
    utc_offset_hours: float = 0.0


class TimeOfDay(_Frozen):
    """Clock time without a date."""

    hour: int
    minute: int

    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class TimeWindow(_Frozen):
    """A start/end pair of clock times. end < start means the window crosses midnight."""

    start: TimeOfDay
    end: TimeOfDay

    @property
    def wraps_midnight(self) -> bool:
        return self.end.total_minutes() < self.start.total_minutes()

    @property
    def duration_minutes(self) -> int:
        return (self.end.total_minutes() - self.start.total_minutes()) % (24 * 60)


class WeatherSample(_Frozen):
    """One hourly observation used by the fog model."""

    temperature_c: float
    relative_humidity_pct: int
    dew_point_c: float
    wind_speed_ms: float
    weather_code: int = 0
    cloud_cover_pct: int = 0
    low_cloud_cover_pct: int = 0
    mid_cloud_cover_pct: int = 0
    high_cloud_cover_pct: int = 0


class FogFactors(_Frozen):
    """Human-readable drivers behind a fog score."""

    high_humidity: bool
    low_wind: bool
    temp_dew_point_gap_c: float
    temperature_trend: TemperatureTrend
    cloud_condition: str


class FogProbabilityResult(_Frozen):
    """Radiation, advection, and combined fog probabilities in percent."""

    radiation_fog_pct: int
    advection_fog_pct: int
    overall_fog_pct: int
    risk_level: RiskLevel
    factors: FogFactors


class CloudLayerReading(_Frozen):
    """Raw cloud cover by layer, optionally stamped with its observation time."""

    low_cloud: float
    mid_cloud: float
    high_cloud: float
    total_cloud: float
    time: datetime | None = None


class CloudLayerSnapshot(_Frozen):
    """Cloud cover after the site altitude correction."""

    low_cloud_pct: float
    mid_cloud_pct: float
    high_cloud_pct: float
    total_cloud_pct: float
    altitude_meters: int


class CloudLayerTrendResult(_Frozen):
    low_cloud_trend: Trend
    mid_cloud_trend: Trend
    high_cloud_trend: Trend
    total_cloud_trend: Trend


class GeoLocation(BaseModel):
    """Geocoded location with coordinates and metadata."""

    latitude: float
    longitude: float
    timezone: str
    name: str
    country: str | None = None
    elevation: float | None = None


class HourlyWeather(BaseModel):
    """One hour of fog-relevant data from the Open-Meteo hourly endpoint."""

    time: datetime
    temperature_2m: float | None = None
    relative_humidity_2m: int | None = None
    dew_point_2m: float | None = None
    wind_speed_10m: float | None = None
    weather_code: int | None = None
    cloud_cover: int | None = None
    cloud_cover_low: int | None = None
    cloud_cover_mid: int | None = None
    cloud_cover_high: int | None = None


class WeatherResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint."""

    latitude: float
    longitude: float
    timezone: str
    utc_offset_seconds: int | None = None
    hourly: list[HourlyWeather] = []


class SunTimes(BaseModel):
    """Sun event times from SunriseSunset.io, as 24-hour "HH:MM:SS" strings.

    Event fields are None where the sun never crosses the relevant altitude (polar day/night).
    """

    date: date
    sunrise: str | None = None
    sunset: str | None = None
    first_light: str | None = None
    last_light: str | None = None
    dawn: str | None = None
    dusk: str | None = None
    solar_noon: str | None = None
    golden_hour: str | None = None
    day_length: str | None = None
    timezone: str
    utc_offset: int = 0


class HourlyOutlook(BaseModel):
    """One hour of the sunrise window as shown in a report."""

    time: datetime
    sample: WeatherSample
    description: str


class FogReport(BaseModel):
    """Everything known about one morning at one site."""

    date: date
    sunrise: TimeOfDay
    sunrise_source: Literal["api", "calculated"]
    blue_hour: TimeWindow
    golden_hour: TimeWindow
    fog: FogProbabilityResult
    cloud_layers: CloudLayerSnapshot
    cloud_trend: CloudLayerTrendResult
    hours: list[HourlyOutlook] = []


class DailyFogOutlook(BaseModel):
    """Summary of one day in a multi-day outlook."""

    date: date
    day_of_week: str
    sunrise: TimeOfDay
    fog_probability_pct: int


class AlertConfig(BaseModel):
    """When a fog alert should fire for a subscriber."""

    enabled: bool = True
    threshold: int = 80
    frequency: Literal["daily", "always"] = "daily"
