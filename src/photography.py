# ABOUTME: Blue hour and golden hour windows derived from a sunrise time.
# ABOUTME: Fixed minute offsets with carry across hours and wrap across midnight.

from src.models import TimeOfDay, TimeWindow

MINUTES_PER_DAY = 24 * 60

BLUE_HOUR_BEFORE_MIN = 30
BLUE_HOUR_AFTER_MIN = 20
GOLDEN_HOUR_BEFORE_MIN = 10
GOLDEN_HOUR_AFTER_MIN = 60


def shift_time(t: TimeOfDay, minutes: int) -> TimeOfDay:
    """Move a clock time by a signed number of minutes, wrapping modulo 24 hours."""
    hour, minute = divmod((t.total_minutes() + minutes) % MINUTES_PER_DAY, 60)
    return TimeOfDay(hour=hour, minute=minute)


def blue_hour(sunrise: TimeOfDay) -> TimeWindow:
    """Blue hour: 30 minutes before to 20 minutes after sunrise."""
    return TimeWindow(
        start=shift_time(sunrise, -BLUE_HOUR_BEFORE_MIN),
        end=shift_time(sunrise, BLUE_HOUR_AFTER_MIN),
    )


def golden_hour(sunrise: TimeOfDay) -> TimeWindow:
    """Golden hour: 10 minutes before to 60 minutes after sunrise."""
    return TimeWindow(
        start=shift_time(sunrise, -GOLDEN_HOUR_BEFORE_MIN),
        end=shift_time(sunrise, GOLDEN_HOUR_AFTER_MIN),
    )
