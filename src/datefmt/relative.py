"""RelativeDateFormat: dates near today as phrases.

Dates within ``relative_day_range`` days of today (in the calendar's time
zone) render as "yesterday", "today" or "tomorrow" in the formatter's
language; other dates, and languages without phrase data, render with the
absolute pattern of the same style.

Usage:
    fmt = RelativeDateFormat(NONE, RELATIVE_MEDIUM, "de")
    fmt.format(datetime.now())        # "heute"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from datefmt.base import DateFormat, FormattedPart
from datefmt.calendar import Calendar, get_calendar
from datefmt.config import get_config
from datefmt.errors import IllegalStyleError
from datefmt.locales import LocaleData, LocaleInfo, load_locale_data
from datefmt.numbers import NumberFormat
from datefmt.positions import FieldPosition, ParsePosition
from datefmt.simple import SimpleDateFormat
from datefmt.styles import NONE, base_style, is_valid_style, style_name


logger = logging.getLogger(__name__)


# ==============================================================================
# Relative Day Data
# ==============================================================================

@dataclass(frozen=True)
class RelativeDayData:
    """Locale-specific names of days near today, keyed by day offset."""
    phrases: dict[int, str]

    def phrase(self, offset: int, day_range: int) -> str | None:
        if abs(offset) > day_range:
            return None
        return self.phrases.get(offset)


_RELATIVE_DAYS: dict[str, RelativeDayData] = {
    "en": RelativeDayData({-1: "yesterday", 0: "today", 1: "tomorrow"}),
    "ko": RelativeDayData({-2: "그저께", -1: "어제", 0: "오늘", 1: "내일", 2: "모레"}),
    "ja": RelativeDayData({-2: "一昨日", -1: "昨日", 0: "今日", 1: "明日", 2: "明後日"}),
    "zh": RelativeDayData({-2: "前天", -1: "昨天", 0: "今天", 1: "明天", 2: "后天"}),
    "de": RelativeDayData({-2: "vorgestern", -1: "gestern", 0: "heute", 1: "morgen", 2: "übermorgen"}),
    "fr": RelativeDayData({-2: "avant-hier", -1: "hier", 0: "aujourd'hui", 1: "demain", 2: "après-demain"}),
    "es": RelativeDayData({-2: "anteayer", -1: "ayer", 0: "hoy", 1: "mañana", 2: "pasado mañana"}),
    "ru": RelativeDayData({-2: "позавчера", -1: "вчера", 0: "сегодня", 1: "завтра", 2: "послезавтра"}),
    "ar": RelativeDayData({-1: "أمس", 0: "اليوم", 1: "غدًا"}),
}


def get_relative_day_data(locale: LocaleInfo) -> RelativeDayData | None:
    """Get relative day phrases for a locale, or None if unavailable."""
    key = f"{locale.language}_{locale.region}" if locale.region else locale.language
    if key in _RELATIVE_DAYS:
        return _RELATIVE_DAYS[key]

    return _RELATIVE_DAYS.get(locale.language)


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


# ==============================================================================
# RelativeDateFormat
# ==============================================================================

class RelativeDateFormat(DateFormat):
    """Style-based formatter that names days near today.

    Args:
        time_style: Time style, with or without the RELATIVE bit
        date_style: Date style, with or without the RELATIVE bit
        locale: Locale tag, LocaleInfo or LocaleData
        calendar: Calendar to own; defaults to the locale's calendar system

    Raises:
        IllegalStyleError: If a style is invalid or both are NONE
        MissingResourceError: If no locale data exists for ``locale``
    """

    def __init__(
        self,
        time_style: int,
        date_style: int,
        locale: "str | LocaleInfo | LocaleData | None" = None,
        calendar: Calendar | None = None,
    ) -> None:
        time_style = base_style(time_style)
        date_style = base_style(date_style)
        if not is_valid_style(time_style):
            raise IllegalStyleError(time_style, "time")
        if not is_valid_style(date_style):
            raise IllegalStyleError(date_style, "date")
        if time_style == NONE and date_style == NONE:
            raise IllegalStyleError(NONE, "date", "No date or time style specified")

        if isinstance(locale, LocaleData):
            data = locale
        else:
            data = load_locale_data(
                locale if locale is not None else get_config().default_locale
            )
        if calendar is None:
            calendar = get_calendar(data.requested)

        super().__init__(calendar, NumberFormat(data))
        self._locale_data = data
        self._time_style = time_style
        self._date_style = date_style
        self._date_pattern = (
            calendar.get_date_time_pattern(date_style, NONE, data)
            if date_style != NONE else None
        )
        self._time_pattern = (
            calendar.get_date_time_pattern(NONE, time_style, data)
            if time_style != NONE else None
        )
        self._glue = (
            data.datetime_glue(style_name(date_style))
            if date_style != NONE and time_style != NONE else None
        )
        self._day_data = get_relative_day_data(data.requested)
        if self._day_data is None:
            logger.debug("No relative day phrases for %s", data.requested)
        self.set_locale(data.valid, data.actual)

    @property
    def date_style(self) -> int:
        return self._date_style

    @property
    def time_style(self) -> int:
        return self._time_style

    def to_pattern(self) -> str:
        """Absolute pattern used outside the relative day range."""
        return self._combine(self._date_pattern)

    def _combine(self, date_pattern: str | None) -> str:
        if date_pattern is None:
            return self._time_pattern or ""
        if self._time_pattern is None:
            return date_pattern
        return self._glue.replace("{1}", date_pattern).replace("{0}", self._time_pattern)

    def _formatter(self, pattern: str) -> SimpleDateFormat:
        fmt = SimpleDateFormat(
            pattern,
            self._locale_data,
            calendar=self._calendar,
            number_format=self._number_format,
        )
        fmt.boolean_attributes = self.boolean_attributes
        return fmt

    def _day_offset(self, calendar: Calendar) -> int:
        moment = calendar.get_time()
        today = datetime.now(moment.tzinfo).date()
        return (moment.date() - today).days

    def _phrase_for(self, calendar: Calendar) -> str | None:
        if self._date_pattern is None or self._day_data is None:
            return None
        return self._day_data.phrase(
            self._day_offset(calendar), get_config().relative_day_range
        )

    def _pattern_for(self, calendar: Calendar) -> str:
        phrase = self._phrase_for(calendar)
        if phrase is None:
            return self.to_pattern()
        return self._combine(_quote(phrase))

    # ==========================================================================
    # Formatting
    # ==========================================================================

    def format_calendar(
        self,
        calendar: Calendar,
        position: FieldPosition | None = None,
    ) -> str:
        return self._formatter(self._pattern_for(calendar)).format_calendar(calendar, position)

    def format_calendar_to_parts(self, calendar: Calendar) -> list[FormattedPart]:
        return self._formatter(self._pattern_for(calendar)).format_calendar_to_parts(calendar)

    # ==========================================================================
    # Parsing
    # ==========================================================================

    def parse_into(self, text: str, calendar: Calendar, position: ParsePosition) -> None:
        absolute = self._formatter(self.to_pattern())
        start = position.index

        if self._date_pattern is not None and self._day_data is not None:
            day_range = get_config().relative_day_range
            lowered = text.lower()
            phrases = sorted(
                self._day_data.phrases.items(), key=lambda item: -len(item[1])
            )
            for offset, phrase in phrases:
                if abs(offset) > day_range:
                    continue
                found = lowered.find(phrase.lower(), start)
                if found < 0:
                    continue

                rendered = self._render_day(calendar, offset)
                substituted = text[:found] + rendered + text[found + len(phrase):]
                inner = ParsePosition(start)
                absolute.parse_into(substituted, calendar, inner)
                if inner.index > start:
                    shift = len(rendered) - len(phrase)
                    if inner.index >= found + len(rendered):
                        position.index = inner.index - shift
                    else:
                        position.index = min(inner.index, found + len(phrase))
                    return
                calendar.clear()

        absolute.parse_into(text, calendar, position)

    def _render_day(self, calendar: Calendar, offset: int) -> str:
        """Absolute date text of today + ``offset`` days."""
        probe = calendar.clone()
        zone = probe.get_time_zone()
        day = datetime.now(zone).date() + timedelta(days=offset)
        probe.set_time(datetime.combine(day, time(12)))
        return self._formatter(self._date_pattern).format_calendar(probe)

    # ==========================================================================
    # Identity
    # ==========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelativeDateFormat):
            return NotImplemented
        return (
            super().__eq__(other)
            and self._date_style == other._date_style
            and self._time_style == other._time_style
            and self._locale_data.valid == other._locale_data.valid
        )

    __hash__ = DateFormat.__hash__

    def __repr__(self) -> str:
        return (
            f"RelativeDateFormat(date_style={self._date_style}, "
            f"time_style={self._time_style}, locale={self._locale_data.requested})"
        )


__all__ = ["RelativeDateFormat", "RelativeDayData", "get_relative_day_data"]
