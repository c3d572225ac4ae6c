"""SimpleDateFormat: pattern-driven formatting and parsing.

Patterns use the CLDR date field symbols, one letter per calendar field
(see ``datefmt.fields.PATTERN_CHARS``); repeating a letter selects the
width. Text between single quotes is literal, and ``''`` is a quote.
Other non-letter characters are literal as well.

Examples:
    >>> fmt = SimpleDateFormat("yyyy-MM-dd HH:mm:ss", "en_US")
    >>> fmt.format(datetime(2024, 3, 5, 14, 7, 9))
    '2024-03-05 14:07:09'
    >>> SimpleDateFormat("EEEE, MMMM d", "de").format(datetime(2024, 3, 5))
    'Dienstag, März 5'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Iterable

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from datefmt.base import DateFormat, FormattedPart
from datefmt.calendar import Calendar, get_calendar, resolve_time_zone
from datefmt.config import get_config
from datefmt.errors import IllegalPatternError
from datefmt.fields import (
    PATTERN_CHARS,
    TIMEZONE_FIELDS,
    CalendarField,
    attribute_for_pattern_field,
    is_numeric_token,
)
from datefmt.locales import LocaleData, LocaleInfo, load_locale_data
from datefmt.numbers import NumberFormat
from datefmt.positions import FieldPosition, ParsePosition
from datefmt.styles import SHORT, BooleanAttribute


logger = logging.getLogger(__name__)

F = CalendarField


# ==============================================================================
# Pattern Compilation
# ==============================================================================

@dataclass(frozen=True)
class PatternToken:
    """One pattern element: a field run or literal text.

    Attributes:
        field: Calendar field, or None for a literal
        count: Number of repeated letters (0 for literals)
        text: The letter run or the literal text
    """
    field: CalendarField | None
    count: int
    text: str

    @property
    def is_literal(self) -> bool:
        return self.field is None

    @property
    def is_numeric(self) -> bool:
        return self.field is not None and is_numeric_token(self.field, self.count)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> tuple[PatternToken, ...]:
    """Split a pattern into field and literal tokens.

    Raises:
        IllegalPatternError: For an unknown letter or an unterminated quote
    """
    tokens: list[PatternToken] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            tokens.append(PatternToken(None, 0, "".join(literal)))
            literal.clear()

    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]

        if char == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            end = i + 1
            while True:
                if end >= n:
                    raise IllegalPatternError("Unterminated quote", pattern, i)
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            i = end + 1
            continue

        if ("a" <= char <= "z") or ("A" <= char <= "Z"):
            if char not in PATTERN_CHARS:
                raise IllegalPatternError(
                    f"Illegal pattern character {char!r}", pattern, i
                )
            flush()
            end = i
            while end < n and pattern[end] == char:
                end += 1
            tokens.append(
                PatternToken(F.from_pattern_char(char), end - i, pattern[i:end])
            )
            i = end
            continue

        literal.append(char)
        i += 1

    flush()
    return tuple(tokens)


def _name_width(count: int) -> str:
    if count <= 3:
        return "abbreviated"
    return {4: "wide", 5: "narrow", 6: "short"}.get(count, "wide")


def _gmt_offset(offset: timedelta, short: bool = False) -> str:
    total = int(offset.total_seconds())
    if total == 0:
        return "GMT"
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    minutes = rest // 60
    if short:
        return f"GMT{sign}{hours}" + (f":{minutes:02d}" if minutes else "")
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


_ISO_OFFSET = re.compile(r"([+-])(\d{2}):?(\d{2})?(?::?(\d{2}))?")
_GMT_OFFSET = re.compile(r"(?:GMT|UTC|UT)([+-])(\d{1,2})(?::?(\d{2}))?(?::?(\d{2}))?")
_GMT_BARE = re.compile(r"GMT|UTC|UT")
_ZONE_ID = re.compile(r"[A-Za-z][A-Za-z_]*(?:/[A-Za-z0-9_+\-]+)+")


def _offset_zone(sign: str, hours: str, minutes: str | None, seconds: str | None) -> tzinfo:
    delta = timedelta(
        hours=int(hours), minutes=int(minutes or 0), seconds=int(seconds or 0)
    )
    if sign == "-":
        delta = -delta
    if not delta:
        return ZoneInfo("UTC")
    return timezone(delta)


# ==============================================================================
# SimpleDateFormat
# ==============================================================================

class SimpleDateFormat(DateFormat):
    """Formatter driven by a literal date/time pattern.

    Args:
        pattern: Date/time pattern; defaults to the locale's SHORT/SHORT
        locale: Locale tag, LocaleInfo or LocaleData; defaults to config
        calendar: Calendar to own; defaults to the locale's calendar system
        number_format: NumberFormat to own

    Raises:
        IllegalPatternError: If the pattern is malformed
        MissingResourceError: If no locale data exists for ``locale``
    """

    def __init__(
        self,
        pattern: str | None = None,
        locale: "str | LocaleInfo | LocaleData | None" = None,
        calendar: Calendar | None = None,
        number_format: NumberFormat | None = None,
    ) -> None:
        if isinstance(locale, LocaleData):
            data = locale
        else:
            data = load_locale_data(
                locale if locale is not None else get_config().default_locale
            )
        if calendar is None:
            calendar = get_calendar(data.requested)
        if number_format is None:
            number_format = NumberFormat(data)

        super().__init__(calendar, number_format)
        self._locale_data = data
        if pattern is None:
            pattern = calendar.get_date_time_pattern(SHORT, SHORT, data)
        self._pattern = pattern
        self._tokens = compile_pattern(pattern)
        self.set_locale(data.valid, data.actual)

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def tokens(self) -> tuple[PatternToken, ...]:
        return self._tokens

    @property
    def locale_data(self) -> LocaleData:
        return self._locale_data

    def to_pattern(self) -> str:
        return self._pattern

    def apply_pattern(self, pattern: str) -> None:
        """Replace the pattern.

        Raises:
            IllegalPatternError: If the pattern is malformed
        """
        self._tokens = compile_pattern(pattern)
        self._pattern = pattern

    # ==========================================================================
    # Formatting
    # ==========================================================================

    def format_calendar(
        self,
        calendar: Calendar,
        position: FieldPosition | None = None,
    ) -> str:
        out: list[str] = []
        length = 0
        found = False
        for token, text in self._render(calendar):
            if (
                position is not None
                and not found
                and token.field is not None
                and position.matches(token.field, attribute_for_pattern_field(token.field))
            ):
                position.begin_index = length
                position.end_index = length + len(text)
                found = True
            out.append(text)
            length += len(text)
        return "".join(out)

    def format_calendar_to_parts(self, calendar: Calendar) -> list[FormattedPart]:
        parts: list[FormattedPart] = []
        for token, text in self._render(calendar):
            if token.field is None:
                if parts and parts[-1].field is None:
                    parts[-1] = FormattedPart(parts[-1].text + text)
                else:
                    parts.append(FormattedPart(text))
            else:
                parts.append(FormattedPart(text, attribute_for_pattern_field(token.field)))
        return parts

    def _render(self, calendar: Calendar) -> Iterable[tuple[PatternToken, str]]:
        for token in self._tokens:
            if token.field is None:
                yield token, token.text
            else:
                yield token, self._format_field(token, calendar)

    def _format_field(self, token: PatternToken, calendar: Calendar) -> str:
        field = token.field
        count = token.count
        data = self._locale_data
        numbers = self._number_format

        if field in TIMEZONE_FIELDS:
            return self._format_zone(token, calendar)

        if field == F.ERA:
            era = calendar.get(F.ERA)
            return calendar.era_names(_name_width(count)).get(era, str(era))

        if field in (F.YEAR, F.YEAR_WOY):
            year = calendar.get(field)
            if count == 2:
                return numbers.format(year, 2, 2)
            return numbers.format(year, count)

        if field == F.YEAR_NAME:
            return numbers.format(calendar.get(F.YEAR_NAME), count)

        if field in (F.MONTH, F.STANDALONE_MONTH):
            month = calendar.get(F.MONTH)
            if count < 3:
                return numbers.format(month, count)
            context = "format" if field == F.MONTH else "stand-alone"
            return data.month_names(_name_width(count), context)[month]

        if field == F.DAY_OF_WEEK:
            weekday = calendar.get(F.DAY_OF_WEEK) - 1
            return data.day_names(_name_width(count), "format")[weekday]

        if field in (F.DOW_LOCAL, F.STANDALONE_DAY):
            if count < 3:
                return numbers.format(calendar.get(F.DOW_LOCAL), count)
            weekday = calendar.get(F.DAY_OF_WEEK) - 1
            context = "format" if field == F.DOW_LOCAL else "stand-alone"
            return data.day_names(_name_width(count), context)[weekday]

        if field in (F.QUARTER, F.STANDALONE_QUARTER):
            quarter = calendar.get(F.QUARTER)
            if count < 3:
                return numbers.format(quarter, count)
            context = "format" if field == F.QUARTER else "stand-alone"
            return data.quarter_names(_name_width(count), context)[quarter]

        if field == F.AM_PM:
            key = "pm" if calendar.get(F.AM_PM) else "am"
            return data.period_names(_name_width(count))[key]

        if field == F.FRACTIONAL_SECOND:
            fraction = f"{calendar.get(F.FRACTIONAL_SECOND):03d}"
            if count <= 3:
                return numbers.format(int(fraction[:count]), count)
            return numbers.format(int(fraction), 3) + "0" * (count - 3)

        return numbers.format(calendar.get(field), count)

    def _format_zone(self, token: PatternToken, calendar: Calendar) -> str:
        moment = calendar.get_time()
        try:
            text = self._locale_data.format_zone(moment, token.text)
        except (KeyError, LookupError, ValueError, AttributeError, NotImplementedError) as e:
            logger.debug("Zone token %r not rendered by locale data: %s", token.text, e)
            text = None
        if text:
            return text
        # Short localized GMT ("O") has no CLDR rendering in Babel
        return _gmt_offset(moment.utcoffset() or timedelta(0), short=token.count < 4)

    # ==========================================================================
    # Parsing
    # ==========================================================================

    def parse_into(self, text: str, calendar: Calendar, position: ParsePosition) -> None:
        index = position.index
        tokens = self._tokens

        for i, token in enumerate(tokens):
            if token.field is None:
                end = self._match_literal(text, index, token.text)
            else:
                if self.get_boolean_attribute(BooleanAttribute.PARSE_ALLOW_WHITESPACE):
                    while index < len(text) and text[index].isspace():
                        index += 1
                abutting = (
                    token.is_numeric
                    and i + 1 < len(tokens)
                    and tokens[i + 1].is_numeric
                )
                end = self._parse_field(text, index, token, calendar, abutting)

            if end < 0:
                position.error_index = index
                return
            index = end

        position.index = index

    def _match_literal(self, text: str, index: int, literal: str) -> int:
        if text.startswith(literal, index):
            return index + len(literal)
        if not self.get_boolean_attribute(BooleanAttribute.PARSE_ALLOW_WHITESPACE):
            return -1

        pos = index
        i = 0
        while i < len(literal):
            char = literal[i]
            if char.isspace():
                while i < len(literal) and literal[i].isspace():
                    i += 1
                while pos < len(text) and text[pos].isspace():
                    pos += 1
                continue
            if pos < len(text) and text[pos] == char:
                i += 1
                pos += 1
                continue
            return -1
        return pos

    def _parse_number(
        self, text: str, index: int, max_digits: int | None
    ) -> tuple[int, int] | None:
        position = ParsePosition(index)
        value = self._number_format.parse(text, position, max_digits)
        if value is None:
            return None
        return int(value), position.index

    def _parse_field(
        self,
        text: str,
        index: int,
        token: PatternToken,
        calendar: Calendar,
        abutting: bool,
    ) -> int:
        """Parse one field token; returns the end offset or -1."""
        field = token.field
        count = token.count

        if field in TIMEZONE_FIELDS:
            return self._parse_zone(text, index, calendar)

        if not token.is_numeric and field != F.YEAR_NAME:
            end = self._parse_text_field(text, index, token, calendar)
            if end >= 0 or not self.get_boolean_attribute(BooleanAttribute.PARSE_ALLOW_NUMERIC):
                return end
            if field in (F.ERA, F.AM_PM):
                return -1

        parsed = self._parse_number(text, index, count if abutting else None)
        if parsed is None:
            return -1
        value, end = parsed

        if field == F.YEAR:
            if count <= 2 and end - index == 2 and value >= 0:
                value = self._resolve_two_digit_year(value, calendar)
            calendar.set(F.YEAR, value)
        elif field == F.YEAR_NAME:
            calendar.set(F.YEAR, value)
        elif field in (F.MONTH, F.STANDALONE_MONTH):
            calendar.set(F.MONTH, value)
        elif field == F.HOUR_OF_DAY1:
            calendar.set(F.HOUR_OF_DAY0, 0 if value == 24 else value)
        elif field == F.HOUR1:
            calendar.set(F.HOUR0, 0 if value == 12 else value)
        elif field == F.FRACTIONAL_SECOND:
            digits = end - index
            if digits < 3:
                value *= 10 ** (3 - digits)
            elif digits > 3:
                value //= 10 ** (digits - 3)
            calendar.set(F.FRACTIONAL_SECOND, value)
        elif field in (F.STANDALONE_DAY, F.DOW_LOCAL):
            calendar.set(F.DOW_LOCAL, value)
        elif field == F.STANDALONE_QUARTER:
            calendar.set(F.QUARTER, value)
        else:
            calendar.set(field, value)
        return end

    def _resolve_two_digit_year(self, value: int, calendar: Calendar) -> int:
        probe = calendar.clone()
        probe.time_in_millis = int(datetime.now(timezone.utc).timestamp() * 1000)
        start_year = probe.get(F.YEAR) - get_config().two_digit_year_window
        year = start_year // 100 * 100 + value
        if year < start_year:
            year += 100
        return year

    # ------------------------------------------------------------------
    # Text fields
    # ------------------------------------------------------------------

    def _widths(self, count: int) -> list[str]:
        width = _name_width(count)
        if not self.get_boolean_attribute(BooleanAttribute.PARSE_PARTIAL_MATCH):
            return [width]
        widths = ["wide", "abbreviated", "short"]
        if width not in widths:
            widths.append(width)
        return widths

    def _text_candidates(self, token: PatternToken, calendar: Calendar) -> list[tuple[int, str]]:
        data = self._locale_data
        field = token.field
        partial = self.get_boolean_attribute(BooleanAttribute.PARSE_PARTIAL_MATCH)
        contexts = ["format", "stand-alone"] if partial else [
            "stand-alone" if field in (F.STANDALONE_MONTH, F.STANDALONE_DAY, F.STANDALONE_QUARTER)
            else "format"
        ]

        candidates: list[tuple[int, str]] = []
        for width in self._widths(token.count):
            if field == F.ERA:
                candidates.extend(calendar.era_names(width).items())
            elif field == F.AM_PM:
                periods = data.period_names(width)
                candidates.extend([(0, periods["am"]), (1, periods["pm"])])
            else:
                for context in contexts:
                    if field in (F.MONTH, F.STANDALONE_MONTH):
                        names = data.month_names(width, context)
                    elif field in (F.QUARTER, F.STANDALONE_QUARTER):
                        names = data.quarter_names(width, context)
                    else:
                        names = data.day_names(width, context)
                    candidates.extend(names.items())
        return candidates

    def _parse_text_field(
        self, text: str, index: int, token: PatternToken, calendar: Calendar
    ) -> int:
        match = _match_longest(text, index, self._text_candidates(token, calendar))
        if match is None:
            return -1
        value, end = match
        field = token.field

        if field in (F.MONTH, F.STANDALONE_MONTH):
            calendar.set(F.MONTH, value)
        elif field in (F.QUARTER, F.STANDALONE_QUARTER):
            calendar.set(F.QUARTER, value)
        elif field in (F.DAY_OF_WEEK, F.DOW_LOCAL, F.STANDALONE_DAY):
            # Day names are keyed 0 = Monday
            calendar.set(F.DAY_OF_WEEK, value + 1)
        else:
            calendar.set(field, value)
        return end

    # ------------------------------------------------------------------
    # Time zones
    # ------------------------------------------------------------------

    def _parse_zone(self, text: str, index: int, calendar: Calendar) -> int:
        zone: tzinfo | None = None
        end = -1

        match = _GMT_OFFSET.match(text, index) or self._localized_gmt_match(text, index)
        if match:
            zone = _offset_zone(*match.groups())
            end = match.end()
        elif text.startswith("Z", index) and not text[index + 1:index + 2].isalpha():
            zone, end = ZoneInfo("UTC"), index + 1
        elif (match := _ISO_OFFSET.match(text, index)):
            zone = _offset_zone(*match.groups())
            end = match.end()
        elif (match := _ZONE_ID.match(text, index)):
            try:
                zone = resolve_time_zone(match.group(0))
                end = match.end()
            except (ZoneInfoNotFoundError, ValueError):
                zone = None

        offset: timedelta | None = None
        if zone is None:
            named = self._match_zone_name(text, index, calendar)
            if named is not None:
                (zone, offset), end = named

        if zone is None:
            match = _GMT_BARE.match(text, index)
            if not match:
                return -1
            zone, end = ZoneInfo("UTC"), match.end()

        calendar.set_time_zone(zone)
        if offset is not None:
            # Standard and daylight names pin the offset of the wall time
            calendar.set(F.TIMEZONE, int(offset.total_seconds() * 1000))
        return end

    def _localized_gmt_match(self, text: str, index: int) -> "re.Match[str] | None":
        try:
            gmt_format = self._locale_data.babel_locale.zone_formats["gmt"]
        except KeyError:
            return None
        prefix = gmt_format.split("%s")[0]
        if not prefix or prefix in ("GMT", "UTC") or not text.startswith(prefix, index):
            return None
        return _ISO_OFFSET.match(text, index + len(prefix))

    def _match_zone_name(
        self, text: str, index: int, calendar: Calendar
    ) -> tuple[tuple[tzinfo, timedelta | None], int] | None:
        year = datetime.now(timezone.utc).year
        candidates: list[tuple[tuple[tzinfo, timedelta | None], str]] = []
        for zone in (calendar.get_time_zone(), ZoneInfo("UTC")):
            for name, offset in self._locale_data.zone_display_names(zone, year):
                candidates.append(((zone, offset), name))
        return _match_longest(text, index, candidates)

    # ==========================================================================
    # Identity
    # ==========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleDateFormat):
            return NotImplemented
        return (
            super().__eq__(other)
            and self._pattern == other._pattern
            and self._locale_data.valid == other._locale_data.valid
        )

    __hash__ = DateFormat.__hash__

    def __repr__(self) -> str:
        return f"SimpleDateFormat({self._pattern!r}, locale={self._locale_data.requested})"


def _match_longest(text: str, index: int, candidates: Iterable[tuple]) -> tuple | None:
    """Case-insensitive longest match of candidate names at ``index``.

    Args:
        candidates: (value, name) pairs

    Returns:
        (value, end offset) of the longest matching name, or None
    """
    best = None
    best_length = 0
    for value, name in candidates:
        length = len(name)
        if length > best_length and text[index:index + length].lower() == name.lower():
            best = value
            best_length = length
    if best is None:
        return None
    return best, index + best_length


__all__ = ["SimpleDateFormat", "PatternToken", "compile_pattern"]
