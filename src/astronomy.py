# ABOUTME: Closed-form sunrise calculation from latitude, longitude, date, and UTC offset.
# ABOUTME: Used as the local fallback when the sun-times API is unavailable.

import math
from datetime import date

from src.models import TimeOfDay

MINUTES_PER_DAY = 24 * 60

# Maximum solar declination (axial tilt) in degrees
AXIAL_TILT_DEG = 23.44


def day_of_year(day: date) -> int:
    """Ordinal day within the year, 1 for January 1st."""
    return day.timetuple().tm_yday


def solar_declination(n: int) -> float:
    """Solar declination in degrees for day-of-year n.

    Uses the simplified form δ = 23.44° × sin(360° × (284 + n) / 365).
    """
    return AXIAL_TILT_DEG * math.sin(2 * math.pi * (284 + n) / 365)


def hour_angle(latitude: float, declination: float) -> float:
    """Sunrise hour angle in degrees.

    cos(H) = -tan(φ) × tan(δ), clamped to [-1, 1]. Outside that range the sun never
    rises or never sets; clamping gives a degenerate but finite answer.
    """
    cos_h = -math.tan(math.radians(latitude)) * math.tan(math.radians(declination))
    cos_h = max(-1.0, min(1.0, cos_h))
    return math.degrees(math.acos(cos_h))


def equation_of_time(n: int) -> float:
    """Equation of time in minutes for day-of-year n."""
    b = 2 * math.pi * (n - 1) / 365
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(b)
        - 0.032077 * math.sin(b)
        - 0.014615 * math.cos(2 * b)
        - 0.040849 * math.sin(2 * b)
    )


def compute_sunrise(latitude: float, longitude: float, day: date, utc_offset_hours: float) -> TimeOfDay:
    """Compute local sunrise time.

    Accurate to a few minutes at non-polar latitudes. Ignores atmospheric refraction and
    terrain occlusion. Never raises for polar latitudes; see hour_angle().
    """
    n = day_of_year(day)
    h = hour_angle(latitude, solar_declination(n))

    utc_minutes = 720 - (longitude / 15) * 60 - (h / 15) * 60 + equation_of_time(n)
    local_minutes = utc_minutes + utc_offset_hours * 60

    # Round before splitting so a minute of 60 carries into the hour
    total = math.floor(local_minutes + 0.5) % MINUTES_PER_DAY
    hour, minute = divmod(total, 60)
    return TimeOfDay(hour=hour, minute=minute)
