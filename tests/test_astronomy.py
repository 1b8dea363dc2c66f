# ABOUTME: Contract tests for the closed-form sunrise calculation.
# ABOUTME: Checks output ranges, equinox behavior, a known almanac value, and polar clamping.

from datetime import date

import pytest

from src.astronomy import compute_sunrise, day_of_year, equation_of_time, hour_angle, solar_declination
from src.models import TimeOfDay


class TestDayOfYear:
    def test_first_and_last_day(self):
        """day_of_year counts from 1 and reaches 366 in leap years.

        Implementation: Checks Jan 1, Dec 31 of a common year and Dec 31 of a leap year.
        Passing implies: The ordinal matches the floor((date - Jan 0) / 1 day) definition.
        """
        assert day_of_year(date(2025, 1, 1)) == 1
        assert day_of_year(date(2025, 12, 31)) == 365
        assert day_of_year(date(2024, 12, 31)) == 366


class TestSolarGeometry:
    def test_declination_peaks_near_june_solstice(self):
        """Solar declination is close to +23.44° at the June solstice.

        Implementation: Evaluates the declination for day 172 (June 21).
        Passing implies: The sine formula is phased correctly.
        """
        assert solar_declination(172) == pytest.approx(23.44, abs=0.05)

    def test_hour_angle_is_90_at_equator(self):
        """At the equator the sunrise hour angle is exactly 90° for any declination.

        Implementation: Passes latitude 0 with a nonzero declination.
        Passing implies: -tan(0) × tan(δ) = 0 is handled without clamping artifacts.
        """
        assert hour_angle(0.0, 20.0) == pytest.approx(90.0)

    def test_hour_angle_clamps_for_polar_night(self):
        """Out-of-domain cosines clamp instead of raising.

        Implementation: Uses latitude 80° in midwinter, where cos(H) > 1.
        Passing implies: Polar night yields H = 0° rather than a math domain error.
        """
        assert hour_angle(80.0, -23.0) == pytest.approx(0.0)
        assert hour_angle(80.0, 23.0) == pytest.approx(180.0)

    def test_equation_of_time_is_bounded(self):
        """The equation of time stays within about ±17 minutes all year.

        Implementation: Evaluates every day of the year.
        Passing implies: The Fourier coefficients are transcribed correctly.
        """
        values = [equation_of_time(n) for n in range(1, 367)]
        assert max(values) < 17.5
        assert min(values) > -15.5


class TestComputeSunrise:
    def test_equator_equinox_is_near_six(self):
        """At the equator on an equinox, local solar sunrise is near 06:00 for any longitude.

        Implementation: Computes sunrise on 2025-03-20 at three longitudes with matching offsets.
        Passing implies: Longitude and UTC offset cancel, leaving only the equation of time.
        """
        results = [
            compute_sunrise(0.0, 0.0, date(2025, 3, 20), 0),
            compute_sunrise(0.0, 30.0, date(2025, 3, 20), 2),
            compute_sunrise(0.0, -75.0, date(2025, 3, 20), -5),
        ]
        assert results[0] == results[1] == results[2]
        minutes = results[0].total_minutes()
        assert abs(minutes - 6 * 60) <= 15

    def test_london_midsummer(self):
        """London sunrise at the June solstice is within a few minutes of 04:43 BST.

        Implementation: Computes sunrise at 51.5N, 0.13W on 2025-06-21 with UTC+1.
        Passing implies: The calculation is accurate enough for photography planning
        (refraction is ignored, so the result runs a few minutes late).
        """
        result = compute_sunrise(51.5, -0.13, date(2025, 6, 21), 1)
        assert 4 * 60 + 38 <= result.total_minutes() <= 4 * 60 + 55

    def test_always_in_range(self):
        """Hour and minute stay in range for every latitude, season, and offset.

        Implementation: Sweeps latitudes from pole to pole, several dates, and offsets.
        Passing implies: Modulo normalization and minute carry never produce 24:xx or xx:60.
        """
        for latitude in range(-90, 91, 5):
            for day in (date(2025, 1, 1), date(2025, 3, 20), date(2025, 6, 21), date(2024, 12, 31)):
                for offset in (-12, -5.5, 0, 5.75, 14):
                    result = compute_sunrise(float(latitude), 120.0, day, offset)
                    assert 0 <= result.hour <= 23
                    assert 0 <= result.minute <= 59

    def test_is_deterministic(self):
        """Identical inputs give identical outputs.

        Implementation: Calls compute_sunrise twice with the same arguments.
        Passing implies: No hidden state influences the result.
        """
        args = (30.1, 118.2, date(2025, 11, 2), 8)
        assert compute_sunrise(*args) == compute_sunrise(*args)

    @pytest.mark.parametrize(("lead_minutes", "expected"), [(0.4, TimeOfDay(hour=6, minute=0)), (0.6, TimeOfDay(hour=5, minute=59))])
    def test_minute_rounding_carries_into_hour(self, lead_minutes, expected):
        """A sunrise at 5:59.6 rounds to 06:00, while 5:59.4 stays 05:59.

        Implementation: At the equator the hour angle is exactly 90°, so choosing the
        longitude from the equation of time places sunrise lead_minutes before 06:00 UTC.
        Passing implies: Rounding happens on total minutes, so minute 60 never appears.
        """
        day = date(2025, 3, 20)
        longitude = (equation_of_time(day_of_year(day)) + lead_minutes) / 4
        assert compute_sunrise(0.0, longitude, day, 0) == expected
