# ABOUTME: Radiation and advection fog probability model built from weighted scoring bands.
# ABOUTME: Pure function of one hourly sample plus an optional previous hour for temperature trend.

import math

from src.models import FogFactors, FogProbabilityResult, WeatherSample

RADIATION_WEIGHT = 0.6
ADVECTION_WEIGHT = 0.4

HIGH_RISK_PCT = 70
MEDIUM_RISK_PCT = 40

# Temperature change (°C) beyond which the trend counts as rising or falling
TREND_DELTA_C = 0.5

# Each table is (threshold, points), checked top-down; the first match wins.
# "at least" tables match value >= threshold, "at most" tables match value <= threshold.
HUMIDITY_BANDS = ((90, 40), (80, 30), (70, 15))

RADIATION_WIND_BANDS = ((1, 30), (2, 25), (3, 15), (5, 5))
RADIATION_GAP_BANDS = ((1, 20), (2, 15), (3, 10), (5, 5))
RADIATION_FALLING_TEMP_POINTS = 10
RADIATION_CLEAR_SKY_MAX_PCT = 20
RADIATION_CLEAR_SKY_POINTS = 5

# (low, high, low_inclusive, points), also first-match; high=None means unbounded
ADVECTION_WIND_BANDS = (
    (2, 6, True, 35),
    (1, 2, True, 20),
    (6, 8, False, 20),
    (8, None, False, 5),
)
ADVECTION_GAP_BANDS = ((1, 15), (2, 12), (3, 8), (5, 3))
ADVECTION_CLOUD_BANDS = (
    (30, 70, True, 10),
    (70, None, False, 5),
)

CLOUD_CONDITIONS = (
    (10, "clear"),
    (25, "mostly clear"),
    (50, "partly cloudy"),
    (75, "cloudy"),
)
OVERCAST = "overcast"

HIGH_HUMIDITY_PCT = 80
LOW_WIND_MS = 3


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, so 2.5 -> 3 rather than Python's 2."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def _at_least(value: float, bands) -> int:
    for threshold, points in bands:
        if value >= threshold:
            return points
    return 0


def _at_most(value: float, bands) -> int:
    for threshold, points in bands:
        if value <= threshold:
            return points
    return 0


def _in_range(value: float, bands) -> int:
    """Score against (low, high, low_inclusive, points) ranges; upper bounds are inclusive."""
    for low, high, low_inclusive, points in bands:
        above_low = value >= low if low_inclusive else value > low
        below_high = high is None or value <= high
        if above_low and below_high:
            return points
    return 0


def temperature_trend(current: WeatherSample, previous: WeatherSample | None) -> str:
    if previous is None:
        return "stable"
    delta = current.temperature_c - previous.temperature_c
    if delta < -TREND_DELTA_C:
        return "decreasing"
    if delta > TREND_DELTA_C:
        return "increasing"
    return "stable"


def cloud_condition(cloud_cover_pct: float) -> str:
    for threshold, label in CLOUD_CONDITIONS:
        if cloud_cover_pct <= threshold:
            return label
    return OVERCAST


def radiation_fog_score(sample: WeatherSample, gap: float, trend: str) -> int:
    """Radiation fog favors saturated air, calm wind, a falling temperature, and clear skies."""
    score = _at_least(sample.relative_humidity_pct, HUMIDITY_BANDS)
    score += _at_most(sample.wind_speed_ms, RADIATION_WIND_BANDS)
    score += _at_most(gap, RADIATION_GAP_BANDS)
    if trend == "decreasing":
        score += RADIATION_FALLING_TEMP_POINTS
    if sample.cloud_cover_pct <= RADIATION_CLEAR_SKY_MAX_PCT:
        score += RADIATION_CLEAR_SKY_POINTS
    return min(100, score)


def advection_fog_score(sample: WeatherSample, gap: float) -> int:
    """Advection fog favors saturated air carried by a moderate breeze under some cloud."""
    score = _at_least(sample.relative_humidity_pct, HUMIDITY_BANDS)
    score += _in_range(sample.wind_speed_ms, ADVECTION_WIND_BANDS)
    score += _at_most(gap, ADVECTION_GAP_BANDS)
    score += _in_range(sample.cloud_cover_pct, ADVECTION_CLOUD_BANDS)
    return min(100, score)


def risk_level(overall_pct: float) -> str:
    if overall_pct >= HIGH_RISK_PCT:
        return "high"
    if overall_pct >= MEDIUM_RISK_PCT:
        return "medium"
    return "low"


def calculate_fog_probability(current: WeatherSample, previous: WeatherSample | None = None) -> FogProbabilityResult:
    """Estimate fog probability for an hour, optionally using the prior hour for temperature trend.

    Total over numeric input: out-of-range values are scored as-is rather than rejected.
    """
    gap = current.temperature_c - current.dew_point_c
    trend = temperature_trend(current, previous)

    radiation = radiation_fog_score(current, gap, trend)
    advection = advection_fog_score(current, gap)
    overall = int(round_half_up(radiation * RADIATION_WEIGHT + advection * ADVECTION_WEIGHT))

    return FogProbabilityResult(
        radiation_fog_pct=radiation,
        advection_fog_pct=advection,
        overall_fog_pct=overall,
        risk_level=risk_level(overall),
        factors=FogFactors(
            high_humidity=current.relative_humidity_pct >= HIGH_HUMIDITY_PCT,
            low_wind=current.wind_speed_ms <= LOW_WIND_MS,
            temp_dew_point_gap_c=round_half_up(gap, 1),
            temperature_trend=trend,
            cloud_condition=cloud_condition(current.cloud_cover_pct),
        ),
    )
