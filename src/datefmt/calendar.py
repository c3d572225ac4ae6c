"""Calendar Systems.

A Calendar holds one instant (epoch milliseconds) in a time zone and
converts between that instant and calendar field values. Formatters read
field values through ``get``; parsers write them through ``set`` and read
the resulting instant back through ``get_time``.

Field values:
    MONTH              1..12
    DAY_OF_WEEK        1 (Monday) .. 7 (Sunday)
    DOW_LOCAL          1..7 counted from the locale's first weekday
    AM_PM              0 (am) or 1 (pm)
    FRACTIONAL_SECOND  milliseconds 0..999
    zone fields        UTC offset in milliseconds

Each calendar system owns its style-to-pattern table
(``get_date_time_pattern``) and is registered under its CLDR type name:

    @register_calendar("gregorian")
    class GregorianCalendar(Calendar):
        ...

    cal = get_calendar("th_TH@calendar=buddhist", "Asia/Bangkok")
"""

from __future__ import annotations

import calendar as _stdlib_calendar
import copy
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING, Callable, ClassVar, TypeVar
from zoneinfo import ZoneInfo

from datefmt.config import get_config
from datefmt.errors import IllegalFieldValueError, IllegalStyleError
from datefmt.fields import FIELD_COUNT, TIMEZONE_FIELDS, CalendarField
from datefmt.locales import (
    LocaleData,
    LocaleInfo,
    LocaleKind,
    load_locale_data,
)
from datefmt.styles import NONE, is_valid_style, style_name

if TYPE_CHECKING:
    from datefmt.simple import SimpleDateFormat


logger = logging.getLogger(__name__)

F = CalendarField

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Julian day number of 0001-01-01 minus its proleptic ordinal
_JULIAN_DAY_OFFSET = 1721425

_MILLIS_PER_DAY = 86_400_000

# Inclusive ranges checked when the calendar is not lenient
_FIELD_RANGES: dict[CalendarField, tuple[int, int]] = {
    F.ERA: (0, 1),
    F.MONTH: (1, 12),
    F.STANDALONE_MONTH: (1, 12),
    F.DATE: (1, 31),
    F.HOUR_OF_DAY1: (1, 24),
    F.HOUR_OF_DAY0: (0, 23),
    F.MINUTE: (0, 59),
    F.SECOND: (0, 59),
    F.FRACTIONAL_SECOND: (0, 999),
    F.DAY_OF_WEEK: (1, 7),
    F.DAY_OF_YEAR: (1, 366),
    F.DAY_OF_WEEK_IN_MONTH: (1, 5),
    F.WEEK_OF_YEAR: (1, 53),
    F.WEEK_OF_MONTH: (0, 6),
    F.AM_PM: (0, 1),
    F.HOUR1: (1, 12),
    F.HOUR0: (0, 11),
    F.DOW_LOCAL: (1, 7),
    F.STANDALONE_DAY: (1, 7),
    F.MILLISECONDS_IN_DAY: (0, _MILLIS_PER_DAY - 1),
    F.QUARTER: (1, 4),
    F.STANDALONE_QUARTER: (1, 4),
}


def resolve_time_zone(zone: "str | tzinfo | None") -> tzinfo:
    """Turn a zone name into a tzinfo.

    Args:
        zone: IANA name, tzinfo, or None for the configured default

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the name is unknown
    """
    if zone is None:
        zone = get_config().default_time_zone
    if isinstance(zone, tzinfo):
        return zone
    name = zone.strip()
    if name.upper() in ("UTC", "GMT", "Z", "ETC/UTC", "ETC/GMT"):
        return ZoneInfo("UTC")
    return ZoneInfo(name)


def zone_id(zone: tzinfo) -> str:
    """Stable identifier of a tzinfo (IANA key where available)."""
    key = getattr(zone, "key", None)
    if key:
        return key
    return str(zone)


def to_millis(value: datetime) -> int:
    """Epoch milliseconds of an aware datetime."""
    delta = value - _EPOCH
    return delta.days * _MILLIS_PER_DAY + delta.seconds * 1000 + delta.microseconds // 1000


# ==============================================================================
# Calendar
# ==============================================================================

class Calendar(ABC):
    """Base class for calendar systems.

    Attributes:
        calendar_type: CLDR calendar type ("gregorian", "buddhist", ...)
    """

    calendar_type: ClassVar[str] = ""

    def __init__(
        self,
        time_zone: "str | tzinfo | None" = None,
        locale: "str | LocaleInfo | LocaleData | None" = None,
        lenient: bool | None = None,
    ) -> None:
        if isinstance(locale, LocaleData):
            self._locale_data = locale
        else:
            self._locale_data = load_locale_data(
                locale if locale is not None else get_config().default_locale
            )
        self._time_zone = resolve_time_zone(time_zone)
        self._lenient = get_config().lenient if lenient is None else lenient
        self._fields: dict[CalendarField, int] = {}
        self._pending = False
        self._millis = to_millis(datetime.now(timezone.utc))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def time_zone(self) -> tzinfo:
        return self._time_zone

    def get_time_zone(self) -> tzinfo:
        return self._time_zone

    def set_time_zone(self, zone: "str | tzinfo") -> None:
        # Keep the instant; pending fields are interpreted in the new zone.
        self._time_zone = resolve_time_zone(zone)
        if not self._pending:
            self._fields.clear()

    def is_lenient(self) -> bool:
        return self._lenient

    def set_lenient(self, lenient: bool) -> None:
        self._lenient = bool(lenient)

    @property
    def locale_data(self) -> LocaleData:
        return self._locale_data

    def get_locale(self, kind: LocaleKind = LocaleKind.ACTUAL) -> LocaleInfo:
        """Locale of the calendar's data (see LocaleKind)."""
        return self._locale_data.get_locale(kind)

    @property
    def first_week_day(self) -> int:
        """First day of the week, 0 = Monday."""
        return self._locale_data.first_week_day

    @property
    def min_week_days(self) -> int:
        return self._locale_data.min_week_days

    def get_field_count(self) -> int:
        """Size of this calendar system's field-number space."""
        return FIELD_COUNT

    # ------------------------------------------------------------------
    # Instant
    # ------------------------------------------------------------------

    @property
    def time_in_millis(self) -> int:
        """Epoch milliseconds, resolving pending fields first.

        Set fields stay set after resolution; reading never changes them.

        Raises:
            IllegalFieldValueError: If a set field is out of range and the
                calendar is not lenient
        """
        if self._pending:
            self._millis = self._compute_time()
            self._pending = False
        return self._millis

    @time_in_millis.setter
    def time_in_millis(self, millis: int) -> None:
        self._millis = int(millis)
        self._fields.clear()
        self._pending = False

    def get_time(self) -> datetime:
        """Current instant as an aware datetime in the calendar's zone."""
        return self._to_local(self.time_in_millis)

    def set_time(self, value: "datetime | int | float") -> None:
        """Set the instant.

        Naive datetimes are read as wall time in the calendar's zone;
        numbers are epoch milliseconds.
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=self._time_zone)
            self.time_in_millis = to_millis(value)
        else:
            self.time_in_millis = int(value)

    def clear(self) -> None:
        """Unset every field; the time zone is kept.

        Until fields are set, the calendar stands for 1970-01-01 00:00
        local time.
        """
        self._fields = {}
        self._pending = True

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def is_set(self, field: int) -> bool:
        return CalendarField(field) in self._fields

    def set(self, field: int, value: int) -> None:
        """Set a field value; the most recently set field wins conflicts."""
        key = CalendarField(field)
        if not self._pending:
            self._seed_fields()
        self._fields.pop(key, None)
        self._fields[key] = int(value)
        self._pending = True

    def get(self, field: int) -> int:
        """Value of a field for the current instant."""
        key = CalendarField(field)
        local = self._to_local(self.time_in_millis)
        return self._field_value(key, local)

    def _seed_fields(self) -> None:
        local = self._to_local(self._millis)
        fields = self._fields
        self._fields = {
            F.EXTENDED_YEAR: self._to_calendar_year(local.year),
            F.MONTH: local.month,
            F.DATE: local.day,
            F.HOUR_OF_DAY0: local.hour,
            F.MINUTE: local.minute,
            F.SECOND: local.second,
            F.FRACTIONAL_SECOND: local.microsecond // 1000,
        }
        self._fields.update(fields)

    def _to_local(self, millis: int) -> datetime:
        return (_EPOCH + timedelta(milliseconds=millis)).astimezone(self._time_zone)

    def _field_value(self, field: CalendarField, local: datetime) -> int:
        if field == F.ERA:
            return self._era(local.year)
        if field in (F.YEAR, F.EXTENDED_YEAR, F.YEAR_NAME):
            return self._to_calendar_year(local.year)
        if field in (F.MONTH, F.STANDALONE_MONTH):
            return local.month
        if field == F.DATE:
            return local.day
        if field == F.HOUR_OF_DAY0:
            return local.hour
        if field == F.HOUR_OF_DAY1:
            return local.hour or 24
        if field == F.HOUR0:
            return local.hour % 12
        if field == F.HOUR1:
            return local.hour % 12 or 12
        if field == F.AM_PM:
            return 1 if local.hour >= 12 else 0
        if field == F.MINUTE:
            return local.minute
        if field == F.SECOND:
            return local.second
        if field == F.FRACTIONAL_SECOND:
            return local.microsecond // 1000
        if field == F.DAY_OF_WEEK:
            return local.isoweekday()
        if field in (F.DOW_LOCAL, F.STANDALONE_DAY):
            return (local.weekday() - self.first_week_day) % 7 + 1
        if field == F.DAY_OF_YEAR:
            return local.timetuple().tm_yday
        if field == F.DAY_OF_WEEK_IN_MONTH:
            return (local.day - 1) // 7 + 1
        if field == F.WEEK_OF_YEAR:
            return self._week_of_year(local.date())[1]
        if field == F.YEAR_WOY:
            return self._to_calendar_year(self._week_of_year(local.date())[0])
        if field == F.WEEK_OF_MONTH:
            return self._week_of_month(local.date())
        if field in (F.QUARTER, F.STANDALONE_QUARTER):
            return (local.month - 1) // 3 + 1
        if field == F.JULIAN_DAY:
            return local.toordinal() + _JULIAN_DAY_OFFSET
        if field == F.MILLISECONDS_IN_DAY:
            return (
                ((local.hour * 60 + local.minute) * 60 + local.second) * 1000
                + local.microsecond // 1000
            )
        if field in TIMEZONE_FIELDS:
            offset = local.utcoffset() or timedelta(0)
            return int(offset.total_seconds() * 1000)
        raise ValueError(f"Unsupported calendar field {field!r}")

    # ------------------------------------------------------------------
    # Weeks
    # ------------------------------------------------------------------

    def _week_one_start(self, year: int) -> date:
        jan1 = date(year, 1, 1)
        offset = (jan1.weekday() - self.first_week_day) % 7
        if 7 - offset >= self.min_week_days:
            return jan1 - timedelta(days=offset)
        return jan1 + timedelta(days=7 - offset)

    def _week_of_year(self, day: date) -> tuple[int, int]:
        year = day.year
        start = self._week_one_start(year)
        if day < start:
            year -= 1
            start = self._week_one_start(year)
        elif year < 9999 and day >= self._week_one_start(year + 1):
            year += 1
            start = self._week_one_start(year)
        return year, (day - start).days // 7 + 1

    def _week_of_month(self, day: date) -> int:
        offset = (day.replace(day=1).weekday() - self.first_week_day) % 7
        first_week = 1 if 7 - offset >= self.min_week_days else 0
        return (day.day - 1 + offset) // 7 + first_week

    # ------------------------------------------------------------------
    # Field resolution
    # ------------------------------------------------------------------

    def _latest(self, *candidates: CalendarField) -> CalendarField | None:
        latest = None
        for key in self._fields:
            if key in candidates:
                latest = key
        return latest

    def _validate(self) -> None:
        for key, value in self._fields.items():
            bounds = _FIELD_RANGES.get(key)
            if key == F.ERA:
                bounds = (0, self.max_era)
            if bounds and not bounds[0] <= value <= bounds[1]:
                raise IllegalFieldValueError(key.name, value)

    def _resolve_year(self) -> int:
        fields = self._fields
        key = self._latest(F.EXTENDED_YEAR, F.YEAR, F.YEAR_NAME)
        if key == F.EXTENDED_YEAR:
            return self._from_extended_year(fields[key])
        if key is not None:
            return self._from_calendar_year(fields[key], fields.get(F.ERA))
        if F.YEAR_WOY in fields:
            return self._from_extended_year(fields[F.YEAR_WOY])
        return 1970

    def _resolve_weekday(self) -> int | None:
        """Requested weekday, 0 = Monday."""
        key = self._latest(F.DAY_OF_WEEK, F.DOW_LOCAL, F.STANDALONE_DAY)
        if key is None:
            return None
        value = self._fields[key]
        if key == F.DAY_OF_WEEK:
            return (value - 1) % 7
        return (self.first_week_day + value - 1) % 7

    def _resolve_date(self, year: int) -> date:
        fields = self._fields
        mode = self._latest(
            F.DATE, F.DAY_OF_YEAR, F.JULIAN_DAY, F.WEEK_OF_YEAR, F.DAY_OF_WEEK_IN_MONTH
        )

        if mode == F.JULIAN_DAY:
            return date.fromordinal(fields[F.JULIAN_DAY] - _JULIAN_DAY_OFFSET)
        if mode == F.DAY_OF_YEAR:
            return date(year, 1, 1) + timedelta(days=fields[F.DAY_OF_YEAR] - 1)
        if mode == F.WEEK_OF_YEAR:
            if F.YEAR_WOY in fields:
                year = self._from_extended_year(fields[F.YEAR_WOY])
            weekday = self._resolve_weekday()
            if weekday is None:
                weekday = self.first_week_day
            start = self._week_one_start(year)
            return start + timedelta(
                days=(fields[F.WEEK_OF_YEAR] - 1) * 7
                + (weekday - self.first_week_day) % 7
            )

        month_key = self._latest(F.MONTH, F.STANDALONE_MONTH)
        if month_key is not None:
            month = fields[month_key]
        else:
            quarter_key = self._latest(F.QUARTER, F.STANDALONE_QUARTER)
            month = (fields[quarter_key] - 1) * 3 + 1 if quarter_key else 1

        # Lenient month overflow carries into the year
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        first = date(year, month, 1)

        if mode == F.DAY_OF_WEEK_IN_MONTH:
            weekday = self._resolve_weekday()
            if weekday is None:
                weekday = first.weekday()
            first_match = first + timedelta(days=(weekday - first.weekday()) % 7)
            return first_match + timedelta(days=(fields[mode] - 1) * 7)

        day = fields.get(F.DATE, 1)
        if not self._lenient:
            last = _stdlib_calendar.monthrange(year, month)[1]
            if day > last:
                raise IllegalFieldValueError(F.DATE.name, day)
        return first + timedelta(days=day - 1)

    def _resolve_millis_in_day(self) -> int:
        fields = self._fields
        if self._latest(F.MILLISECONDS_IN_DAY) is not None:
            return fields[F.MILLISECONDS_IN_DAY]

        hour_key = self._latest(F.HOUR_OF_DAY0, F.HOUR_OF_DAY1, F.HOUR0, F.HOUR1)
        if hour_key == F.HOUR_OF_DAY0:
            hour = fields[hour_key]
        elif hour_key == F.HOUR_OF_DAY1:
            hour = fields[hour_key] % 24
        elif hour_key in (F.HOUR0, F.HOUR1):
            hour = fields[hour_key] % 12 + 12 * fields.get(F.AM_PM, 0)
        else:
            hour = 12 * fields.get(F.AM_PM, 0)

        return (
            ((hour * 60 + fields.get(F.MINUTE, 0)) * 60 + fields.get(F.SECOND, 0)) * 1000
            + fields.get(F.FRACTIONAL_SECOND, 0)
        )

    def _compute_time(self) -> int:
        if not self._lenient:
            self._validate()
        try:
            day = self._resolve_date(self._resolve_year())
            local = datetime.combine(day, time()) + timedelta(
                milliseconds=self._resolve_millis_in_day()
            )
        except IllegalFieldValueError:
            raise
        except (ValueError, OverflowError) as e:
            raise IllegalFieldValueError(F.YEAR.name, self._fields.get(F.YEAR, 0)) from e
        offset = self._fields.get(F.TIMEZONE)
        if offset is not None:
            return to_millis(local.replace(tzinfo=timezone(timedelta(milliseconds=offset))))
        return to_millis(local.replace(tzinfo=self._time_zone))

    # ------------------------------------------------------------------
    # Calendar system hooks
    # ------------------------------------------------------------------

    max_era: ClassVar[int] = 1

    @abstractmethod
    def _era(self, gregorian_year: int) -> int:
        """Era of a Gregorian year."""

    @abstractmethod
    def _to_calendar_year(self, gregorian_year: int) -> int:
        """Year number shown for a Gregorian year."""

    @abstractmethod
    def _from_calendar_year(self, year: int, era: int | None) -> int:
        """Gregorian year for a year number within an era."""

    def _from_extended_year(self, year: int) -> int:
        return self._from_calendar_year(year, None)

    @abstractmethod
    def era_names(self, width: str) -> dict[int, str]:
        """Era names keyed by era value."""

    def get_date_time_pattern(
        self,
        date_style: int,
        time_style: int,
        locale_data: LocaleData | None = None,
    ) -> str:
        """Literal pattern for a style pair.

        Args:
            date_style: NONE or FULL..SHORT
            time_style: NONE or FULL..SHORT
            locale_data: Locale data, defaults to the calendar's own

        Raises:
            IllegalStyleError: If a style is invalid or both are NONE
            MissingResourceError: If the locale lacks a required pattern
        """
        if not is_valid_style(time_style):
            raise IllegalStyleError(time_style, "time")
        if not is_valid_style(date_style):
            raise IllegalStyleError(date_style, "date")

        data = locale_data or self._locale_data
        if time_style != NONE:
            time_pattern = data.time_pattern(style_name(time_style))
            if date_style != NONE:
                glue = data.datetime_glue(style_name(date_style))
                return (
                    glue.replace("{1}", self._date_pattern(data, date_style))
                    .replace("{0}", time_pattern)
                )
            return time_pattern
        if date_style != NONE:
            return self._date_pattern(data, date_style)
        raise IllegalStyleError(NONE, "date", "No date or time style specified")

    def _date_pattern(self, data: LocaleData, date_style: int) -> str:
        return data.date_pattern(style_name(date_style))

    def get_date_time_format(
        self,
        date_style: int,
        time_style: int,
        locale: "str | LocaleInfo | None" = None,
    ) -> "SimpleDateFormat":
        """Formatter for a style pair, bound to a copy of this calendar."""
        from datefmt.simple import SimpleDateFormat

        data = load_locale_data(locale) if locale is not None else self._locale_data
        pattern = self.get_date_time_pattern(date_style, time_style, data)
        return SimpleDateFormat(pattern, data, calendar=self.clone())

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def is_equivalent_to(self, other: object) -> bool:
        """Same system and configuration, regardless of the current instant."""
        return (
            type(other) is type(self)
            and isinstance(other, Calendar)
            and self._lenient == other._lenient
            and zone_id(self._time_zone) == zone_id(other._time_zone)
            and self.first_week_day == other.first_week_day
            and self.min_week_days == other.min_week_days
        )

    def clone(self) -> "Calendar":
        other = copy.copy(self)
        other._fields = dict(self._fields)
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self.is_equivalent_to(other) and self.time_in_millis == other.time_in_millis

    def __hash__(self) -> int:
        return hash((type(self).__name__, zone_id(self._time_zone), self._lenient))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(time={self.get_time().isoformat()}, "
            f"zone={zone_id(self._time_zone)!r}, lenient={self._lenient})"
        )


# ==============================================================================
# Registry
# ==============================================================================

C = TypeVar("C", bound=type[Calendar])

_calendar_registry: dict[str, type[Calendar]] = {}


def register_calendar(name: str) -> Callable[[C], C]:
    """Decorator to register a calendar system under its CLDR type name.

    Example:
        >>> @register_calendar("buddhist")
        ... class BuddhistCalendar(Calendar):
        ...     pass
    """

    def decorator(cls: C) -> C:
        cls.calendar_type = name
        _calendar_registry[name] = cls
        return cls

    return decorator


def available_calendars() -> list[str]:
    return sorted(_calendar_registry)


def get_calendar(
    locale: "str | LocaleInfo | None" = None,
    time_zone: "str | tzinfo | None" = None,
    calendar_type: str | None = None,
    lenient: bool | None = None,
) -> Calendar:
    """Create the calendar system for a locale.

    The system is ``calendar_type`` if given, else the locale's
    ``calendar`` keyword, else Gregorian.

    Raises:
        MissingResourceError: If no locale data exists for ``locale``
    """
    info = LocaleInfo.parse(locale if locale is not None else get_config().default_locale)
    requested = calendar_type or info.calendar_type or "gregorian"
    cls = _calendar_registry.get(requested)
    if cls is None:
        logger.debug("Calendar %r not supported, using gregorian", requested)
        cls = _calendar_registry["gregorian"]
    return cls(time_zone=time_zone, locale=info, lenient=lenient)


# ==============================================================================
# Calendar Systems
# ==============================================================================

@register_calendar("gregorian")
class GregorianCalendar(Calendar):
    """Proleptic Gregorian calendar with eras BC (0) and AD (1)."""

    def _era(self, gregorian_year: int) -> int:
        return 1 if gregorian_year > 0 else 0

    def _to_calendar_year(self, gregorian_year: int) -> int:
        return gregorian_year if gregorian_year > 0 else 1 - gregorian_year

    def _from_calendar_year(self, year: int, era: int | None) -> int:
        if era == 0:
            return 1 - year
        return year

    def era_names(self, width: str) -> dict[int, str]:
        return self._locale_data.era_names(width)


@register_calendar("buddhist")
class BuddhistCalendar(GregorianCalendar):
    """Thai solar calendar: Gregorian arithmetic, a single era, year + 543."""

    YEAR_OFFSET = 543
    max_era: ClassVar[int] = 0

    def _era(self, gregorian_year: int) -> int:
        return 0

    def _to_calendar_year(self, gregorian_year: int) -> int:
        return gregorian_year + self.YEAR_OFFSET

    def _from_calendar_year(self, year: int, era: int | None) -> int:
        return year - self.YEAR_OFFSET

    def era_names(self, width: str) -> dict[int, str]:
        return {0: "BE"}

    def _date_pattern(self, data: LocaleData, date_style: int) -> str:
        # Long forms name the era so the year is not read as Gregorian
        pattern = super()._date_pattern(data, date_style)
        if date_style <= 1 and "G" not in pattern:
            return _insert_era(pattern)
        return pattern


def _insert_era(pattern: str) -> str:
    """Put "G " before the first unquoted year field of a pattern."""
    quoted = False
    for index, char in enumerate(pattern):
        if char == "'":
            quoted = not quoted
        elif char == "y" and not quoted:
            return f"{pattern[:index]}G {pattern[index:]}"
    return pattern


__all__ = [
    "Calendar",
    "GregorianCalendar",
    "BuddhistCalendar",
    "register_calendar",
    "available_calendars",
    "get_calendar",
    "resolve_time_zone",
    "zone_id",
    "to_millis",
]
