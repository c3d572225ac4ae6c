"""Tests for calendar systems."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from datefmt.calendar import (
    BuddhistCalendar,
    GregorianCalendar,
    available_calendars,
    get_calendar,
    resolve_time_zone,
    to_millis,
    zone_id,
)
from datefmt.config import config_override
from datefmt.errors import IllegalFieldValueError, IllegalStyleError
from datefmt.fields import FIELD_COUNT, CalendarField
from datefmt.locales import LocaleKind
from datefmt.styles import FULL, LONG, NONE, SHORT

F = CalendarField


# =============================================================================
# Time Zones
# =============================================================================


class TestTimeZones:
    """Test zone helpers."""

    @pytest.mark.parametrize("name", ["UTC", "utc", "GMT", "Etc/UTC"])
    def test_utc_aliases(self, name: str):
        """Test that UTC spellings share one zone."""
        assert zone_id(resolve_time_zone(name)) == "UTC"

    def test_default_zone_from_config(self):
        """Test that None uses the configured zone."""
        with config_override(default_time_zone="Asia/Seoul"):
            assert zone_id(resolve_time_zone(None)) == "Asia/Seoul"

    def test_tzinfo_passthrough(self):
        """Test that tzinfo values are kept."""
        zone = ZoneInfo("Europe/Paris")
        assert resolve_time_zone(zone) is zone

    def test_to_millis(self):
        """Test epoch millisecond conversion."""
        assert to_millis(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0
        assert to_millis(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1704067200000


# =============================================================================
# Field Values
# =============================================================================


class TestFieldValues:
    """Test reading fields for an instant."""

    def test_basic_fields(self, utc_calendar: GregorianCalendar):
        """Test date and time fields of 2024-03-05 14:07:09.123 UTC."""
        cal = utc_calendar
        assert cal.get(F.ERA) == 1
        assert cal.get(F.YEAR) == 2024
        assert cal.get(F.MONTH) == 3
        assert cal.get(F.DATE) == 5
        assert cal.get(F.HOUR_OF_DAY0) == 14
        assert cal.get(F.HOUR0) == 2
        assert cal.get(F.HOUR1) == 2
        assert cal.get(F.AM_PM) == 1
        assert cal.get(F.MINUTE) == 7
        assert cal.get(F.SECOND) == 9
        assert cal.get(F.FRACTIONAL_SECOND) == 123

    def test_derived_fields(self, utc_calendar: GregorianCalendar):
        """Test weekday, day-of-year and other derived fields."""
        cal = utc_calendar
        assert cal.get(F.DAY_OF_WEEK) == 2
        assert cal.get(F.DOW_LOCAL) == 3
        assert cal.get(F.DAY_OF_YEAR) == 65
        assert cal.get(F.DAY_OF_WEEK_IN_MONTH) == 1
        assert cal.get(F.QUARTER) == 1
        assert cal.get(F.JULIAN_DAY) == 2460375
        assert cal.get(F.MILLISECONDS_IN_DAY) == 50829123
        assert cal.get(F.WEEK_OF_YEAR) == 10
        assert cal.get(F.WEEK_OF_MONTH) == 2
        assert cal.get(F.TIMEZONE) == 0

    def test_hour_edges(self):
        """Test one-based hours at midnight."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.set_time(datetime(2024, 1, 1, 0, 30, tzinfo=timezone.utc))
        assert cal.get(F.HOUR_OF_DAY1) == 24
        assert cal.get(F.HOUR1) == 12
        assert cal.get(F.AM_PM) == 0

    def test_zone_offset(self):
        """Test zone fields hold the offset in milliseconds."""
        cal = GregorianCalendar("Asia/Seoul", "ko_KR")
        cal.set_time(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert cal.get(F.TIMEZONE_ISO) == 9 * 3_600_000
        assert cal.get(F.HOUR_OF_DAY0) == 9

    def test_iso_weeks(self):
        """Test week numbering with Monday start and four minimal days."""
        cal = GregorianCalendar("UTC", "de_DE")
        cal.set_time(datetime(2021, 1, 1, tzinfo=timezone.utc))
        assert cal.get(F.WEEK_OF_YEAR) == 53
        assert cal.get(F.YEAR_WOY) == 2020
        cal.set_time(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert cal.get(F.WEEK_OF_YEAR) == 1
        assert cal.get(F.DOW_LOCAL) == 1

    def test_field_count(self, utc_calendar: GregorianCalendar):
        """Test the field number space."""
        assert utc_calendar.get_field_count() == FIELD_COUNT


# =============================================================================
# Setting Fields
# =============================================================================


class TestSetFields:
    """Test resolving set fields into an instant."""

    def test_clear_is_epoch_local(self):
        """Test that a cleared calendar stands for 1970-01-01 local."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        assert cal.time_in_millis == 0
        seoul = GregorianCalendar("Asia/Seoul", "ko_KR")
        seoul.clear()
        assert seoul.get_time() == datetime(1970, 1, 1, tzinfo=ZoneInfo("Asia/Seoul"))

    def test_set_date_fields(self):
        """Test year, month, day and time fields."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 3)
        cal.set(F.DATE, 5)
        cal.set(F.HOUR1, 2)
        cal.set(F.AM_PM, 1)
        cal.set(F.MINUTE, 7)
        assert cal.get_time() == datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc)

    def test_set_keeps_other_fields(self, utc_calendar: GregorianCalendar):
        """Test that setting one field keeps the rest of the instant."""
        utc_calendar.set(F.YEAR, 2000)
        assert utc_calendar.get_time() == datetime(
            2000, 3, 5, 14, 7, 9, 123000, tzinfo=timezone.utc
        )

    def test_most_recent_wins(self):
        """Test that the last set day field decides the date."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.DATE, 20)
        cal.set(F.DAY_OF_YEAR, 65)
        assert cal.get(F.MONTH) == 3
        assert cal.get(F.DATE) == 5

    def test_julian_day(self):
        """Test resolving a Julian day number."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        cal.set(F.JULIAN_DAY, 2460375)
        assert cal.get_time().date() == datetime(2024, 3, 5).date()

    def test_week_of_year(self):
        """Test resolving week and weekday."""
        cal = GregorianCalendar("UTC", "de_DE")
        cal.clear()
        cal.set(F.YEAR_WOY, 2020)
        cal.set(F.WEEK_OF_YEAR, 53)
        cal.set(F.DAY_OF_WEEK, 5)
        assert cal.get_time().date() == datetime(2021, 1, 1).date()

    def test_lenient_overflow(self):
        """Test that lenient calendars roll out-of-range values over."""
        cal = GregorianCalendar("UTC", "en_US", lenient=True)
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 2)
        cal.set(F.DATE, 30)
        cal.set(F.HOUR_OF_DAY0, 25)
        assert cal.get_time() == datetime(2024, 3, 2, 1, tzinfo=timezone.utc)

    def test_month_overflow_into_year(self):
        """Test that month 13 is January of the next year."""
        cal = GregorianCalendar("UTC", "en_US", lenient=True)
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 13)
        cal.set(F.DATE, 1)
        assert cal.get(F.YEAR) == 2025
        assert cal.get(F.MONTH) == 1

    @pytest.mark.parametrize("field, value", [
        (F.MONTH, 13),
        (F.DATE, 30),
        (F.HOUR_OF_DAY0, 24),
        (F.MINUTE, 60),
    ])
    def test_strict_rejects(self, field: CalendarField, value: int):
        """Test that strict calendars reject out-of-range values."""
        cal = GregorianCalendar("UTC", "en_US", lenient=False)
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 2)
        cal.set(F.DATE, 1)
        cal.set(field, value)
        with pytest.raises(IllegalFieldValueError):
            cal.get_time()

    def test_leniency_from_config(self):
        """Test that new calendars take the configured leniency."""
        with config_override(lenient=False):
            assert not GregorianCalendar("UTC", "en_US").is_lenient()

    def test_naive_datetime_in_calendar_zone(self):
        """Test that naive datetimes are local wall time."""
        cal = GregorianCalendar("Asia/Seoul", "ko_KR")
        cal.set_time(datetime(2024, 1, 1, 9, 0))
        assert cal.time_in_millis == 1704067200000

    def test_set_time_millis(self):
        """Test numeric instants."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.set_time(0)
        assert cal.get(F.YEAR) == 1970

    def test_reading_keeps_set_fields(self):
        """Test that resolving the instant leaves set fields set."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 3)
        cal.set(F.DATE, 5)
        assert cal.get(F.DAY_OF_YEAR) == 65
        assert cal.is_set(F.YEAR)
        assert cal.is_set(F.DATE)
        assert not cal.is_set(F.HOUR_OF_DAY0)

    def test_set_after_read(self):
        """Test that a field set after reading builds on the resolved instant."""
        cal = GregorianCalendar("UTC", "en_US", lenient=True)
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 4)
        cal.set(F.DATE, 31)
        assert cal.get_time() == datetime(2024, 5, 1, tzinfo=timezone.utc)
        cal.set(F.HOUR_OF_DAY0, 6)
        assert cal.get_time() == datetime(2024, 5, 1, 6, tzinfo=timezone.utc)
        assert cal.is_set(F.YEAR)

    def test_zone_offset_pins_wall_time(self):
        """Test that a set zone offset picks the instant of an ambiguous wall time."""
        cal = GregorianCalendar("America/New_York", "en_US")
        cal.clear()
        cal.set(F.YEAR, 2024)
        cal.set(F.MONTH, 11)
        cal.set(F.DATE, 3)
        cal.set(F.HOUR_OF_DAY0, 1)
        cal.set(F.MINUTE, 30)
        assert cal.get_time() == datetime(2024, 11, 3, 5, 30, tzinfo=timezone.utc)
        cal.set(F.TIMEZONE, -5 * 3_600_000)
        assert cal.get_time() == datetime(2024, 11, 3, 6, 30, tzinfo=timezone.utc)


# =============================================================================
# Identity
# =============================================================================


class TestCalendarIdentity:
    """Test equivalence, equality and cloning."""

    def test_clone_is_independent(self, utc_calendar: GregorianCalendar):
        """Test that clones do not share state."""
        clone = utc_calendar.clone()
        assert clone == utc_calendar
        clone.set_time_zone("Asia/Tokyo")
        clone.set(F.YEAR, 1999)
        assert zone_id(utc_calendar.time_zone) == "UTC"
        assert utc_calendar.get(F.YEAR) == 2024

    def test_equivalence_ignores_instant(self, utc_calendar: GregorianCalendar):
        """Test that equivalence compares configuration only."""
        other = GregorianCalendar("UTC", "en_US")
        other.set_time(0)
        assert utc_calendar.is_equivalent_to(other)
        assert utc_calendar != other
        assert hash(utc_calendar) == hash(other)

    def test_equivalence_differences(self, utc_calendar: GregorianCalendar):
        """Test configuration differences break equivalence."""
        assert not utc_calendar.is_equivalent_to(GregorianCalendar("UTC", "en_US", lenient=False))
        assert not utc_calendar.is_equivalent_to(GregorianCalendar("Asia/Seoul", "en_US"))
        assert not utc_calendar.is_equivalent_to(GregorianCalendar("UTC", "de_DE"))
        assert not utc_calendar.is_equivalent_to(BuddhistCalendar("UTC", "en_US"))

    def test_locale(self, utc_calendar: GregorianCalendar):
        """Test locale provenance of the calendar data."""
        assert utc_calendar.get_locale(LocaleKind.VALID).identifier == "en_US"


# =============================================================================
# Calendar Systems and Patterns
# =============================================================================


class TestCalendarSystems:
    """Test the calendar registry and per-system behavior."""

    def test_registry(self):
        """Test registered systems."""
        assert {"gregorian", "buddhist"} <= set(available_calendars())
        assert GregorianCalendar.calendar_type == "gregorian"

    def test_locale_keyword_selects_system(self):
        """Test the calendar keyword."""
        cal = get_calendar("th_TH@calendar=buddhist", "Asia/Bangkok")
        assert isinstance(cal, BuddhistCalendar)
        assert isinstance(get_calendar("th_TH", "Asia/Bangkok"), GregorianCalendar)

    def test_unsupported_system_falls_back(self):
        """Test that unknown systems use Gregorian."""
        cal = get_calendar("ja_JP@calendar=japanese", "Asia/Tokyo")
        assert type(cal) is GregorianCalendar

    def test_buddhist_years(self):
        """Test the Buddhist era year offset."""
        cal = BuddhistCalendar("Asia/Bangkok", "th_TH")
        cal.set_time(datetime(2024, 6, 1, 12, tzinfo=timezone.utc))
        assert cal.get(F.YEAR) == 2567
        assert cal.get(F.ERA) == 0
        assert cal.era_names("abbreviated") == {0: "BE"}
        cal.clear()
        cal.set(F.YEAR, 2567)
        cal.set(F.MONTH, 6)
        cal.set(F.DATE, 1)
        assert cal.get_time().year == 2024

    def test_year_zero_rejected(self):
        """Test that proleptic years before 1 AD cannot be resolved."""
        cal = GregorianCalendar("UTC", "en_US")
        cal.clear()
        cal.set(F.ERA, 0)
        cal.set(F.YEAR, 1)
        cal.set(F.MONTH, 1)
        cal.set(F.DATE, 1)
        with pytest.raises(IllegalFieldValueError):
            cal.get_time()

    def test_style_patterns(self):
        """Test style-to-pattern dispatch."""
        cal = GregorianCalendar("UTC", "en_US")
        assert cal.get_date_time_pattern(SHORT, NONE) == "M/d/yy"
        assert cal.get_date_time_pattern(NONE, SHORT).startswith("h:mm")
        combined = cal.get_date_time_pattern(SHORT, SHORT)
        assert combined.startswith("M/d/yy")
        assert "mm" in combined

    def test_style_errors(self):
        """Test invalid style pairs."""
        cal = GregorianCalendar("UTC", "en_US")
        with pytest.raises(IllegalStyleError):
            cal.get_date_time_pattern(NONE, NONE)
        with pytest.raises(IllegalStyleError) as exc_info:
            cal.get_date_time_pattern(4, NONE)
        assert exc_info.value.kind == "date"
        with pytest.raises(IllegalStyleError) as exc_info:
            cal.get_date_time_pattern(4, 9)
        assert exc_info.value.kind == "time"

    def test_buddhist_long_pattern_names_era(self):
        """Test that long Buddhist dates carry the era."""
        cal = BuddhistCalendar("UTC", "en_US")
        assert "G" in cal.get_date_time_pattern(LONG, NONE)
        assert "G" not in cal.get_date_time_pattern(SHORT, NONE)

    def test_date_time_format(self, utc_calendar: GregorianCalendar):
        """Test that formatters get their own calendar copy."""
        fmt = utc_calendar.get_date_time_format(FULL, NONE)
        assert fmt.to_pattern() == "EEEE, MMMM d, y"
        assert fmt.calendar is not utc_calendar
        assert fmt.calendar.is_equivalent_to(utc_calendar)
