"""DateFormat: the contract every concrete date formatter honors.

A DateFormat owns exactly one Calendar (scratch state for format and parse,
and the source of time zone and leniency) and one NumberFormat (numeric
field values, always parse-integer-only). Concrete formatters implement
``format_calendar``, ``format_calendar_to_parts`` and ``parse_into``; this
class turns those into the convenience entry points.

Instances are not thread-safe: format and parse use the owned calendar as
scratch space. Use ``clone()`` to get an independent formatter per thread.
"""

from __future__ import annotations

import copy
import logging
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any

from datefmt.calendar import Calendar
from datefmt.errors import IllegalFieldValueError, ParseError, UnsupportedInputError
from datefmt.fields import Field
from datefmt.locales import LocaleInfo, LocaleKind
from datefmt.numbers import NumberFormat
from datefmt.positions import FieldPosition, ParsePosition
from datefmt.styles import BooleanAttribute


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormattedPart:
    """One run of formatted output.

    Attributes:
        text: Rendered text
        field: Field attribute of the run, or None for literal text
    """
    text: str
    field: Field | None = None


class DateFormat(ABC):
    """Abstract date formatter.

    Args:
        calendar: Calendar owned by this formatter
        number_format: NumberFormat owned by this formatter
    """

    def __init__(self, calendar: Calendar, number_format: NumberFormat) -> None:
        self._calendar = calendar
        self._number_format = number_format
        self._number_format.set_parse_integer_only(True)
        self._boolean_attributes = BooleanAttribute.ALL
        self._valid_locale: LocaleInfo | None = None
        self._actual_locale: LocaleInfo | None = None

    # ==========================================================================
    # Formatting
    # ==========================================================================

    def format(self, value: Any, position: FieldPosition | None = None) -> str:
        """Format a Calendar, datetime or epoch milliseconds.

        Datetimes and numbers are copied into the owned calendar's instant;
        naive datetimes are read in the calendar's time zone.

        Args:
            value: Calendar, datetime, or number of epoch milliseconds
            position: Optional field position to fill in

        Returns:
            Formatted text

        Raises:
            UnsupportedInputError: If ``value`` is of any other type
        """
        return self.format_calendar(self._calendar_for(value), position)

    def format_to_parts(self, value: Any) -> list[FormattedPart]:
        """Format a value into runs annotated with their Field attribute."""
        return self.format_calendar_to_parts(self._calendar_for(value))

    def _calendar_for(self, value: Any) -> Calendar:
        if isinstance(value, Calendar):
            return value
        if isinstance(value, datetime):
            self._calendar.set_time(value)
        elif isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool):
            self._calendar.time_in_millis = int(value)
        else:
            raise UnsupportedInputError(value)
        return self._calendar

    @abstractmethod
    def format_calendar(
        self,
        calendar: Calendar,
        position: FieldPosition | None = None,
    ) -> str:
        """Render the fields of ``calendar``; the calendar is only read."""

    @abstractmethod
    def format_calendar_to_parts(self, calendar: Calendar) -> list[FormattedPart]:
        """Render the fields of ``calendar`` as annotated runs."""

    # ==========================================================================
    # Parsing
    # ==========================================================================

    @abstractmethod
    def parse_into(self, text: str, calendar: Calendar, position: ParsePosition) -> None:
        """Parse text into calendar fields.

        On success ``position.index`` is advanced past the consumed text. On
        failure ``position.error_index`` is set and ``position.index`` is
        left unchanged; the calendar may hold partial updates.
        """

    def parse(self, text: str, position: ParsePosition | None = None) -> datetime | None:
        """Parse text into a timestamp.

        With a position, failure is reported through the position and a
        None result. Without one, the whole call fails unless at least one
        character was consumed.

        Args:
            text: Input text
            position: Start offset, advanced on success

        Returns:
            Aware datetime, or None on failure when a position is given

        Raises:
            ParseError: Without a position, if nothing could be parsed
        """
        if position is not None:
            return self._parse_at(text, position)

        position = ParsePosition(0)
        result = self._parse_at(text, position)
        if position.index == 0:
            raise ParseError(
                f'Unparseable date: "{text}"', text, max(position.error_index, 0)
            )
        return result

    def parse_object(self, text: str, position: ParsePosition) -> datetime | None:
        """Same as ``parse(text, position)``."""
        return self.parse(text, position)

    def _parse_at(self, text: str, position: ParsePosition) -> datetime | None:
        start = position.index
        saved_zone = self._calendar.get_time_zone()
        self._calendar.clear()
        try:
            self.parse_into(text, self._calendar, position)
            if position.index == start:
                return None
            try:
                return self._calendar.get_time()
            except IllegalFieldValueError as e:
                logger.debug("Rejected parsed fields of %r: %s", text, e)
                position.index = start
                position.error_index = start
                return None
        finally:
            self._calendar.set_time_zone(saved_zone)

    # ==========================================================================
    # Boolean Attributes
    # ==========================================================================

    def set_boolean_attribute(self, key: BooleanAttribute, value: bool) -> "DateFormat":
        """Turn a parse attribute on or off; returns self for chaining."""
        if value:
            self._boolean_attributes |= key
        else:
            self._boolean_attributes &= ~key
        return self

    def get_boolean_attribute(self, key: BooleanAttribute) -> bool:
        return (self._boolean_attributes & key) == key and bool(key)

    @property
    def boolean_attributes(self) -> BooleanAttribute:
        return self._boolean_attributes

    @boolean_attributes.setter
    def boolean_attributes(self, value: BooleanAttribute) -> None:
        self._boolean_attributes = BooleanAttribute(value)

    # ==========================================================================
    # Accessors
    # ==========================================================================

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    def get_calendar(self) -> Calendar:
        return self._calendar

    def set_calendar(self, calendar: Calendar) -> None:
        self._calendar = calendar

    @property
    def number_format(self) -> NumberFormat:
        return self._number_format

    def get_number_format(self) -> NumberFormat:
        return self._number_format

    def set_number_format(self, number_format: NumberFormat) -> None:
        self._number_format = number_format
        self._number_format.set_parse_integer_only(True)

    @property
    def time_zone(self) -> tzinfo:
        return self._calendar.get_time_zone()

    def get_time_zone(self) -> tzinfo:
        return self._calendar.get_time_zone()

    def set_time_zone(self, zone: "str | tzinfo") -> None:
        self._calendar.set_time_zone(zone)

    def is_lenient(self) -> bool:
        return self._calendar.is_lenient()

    def set_lenient(self, lenient: bool) -> None:
        self._calendar.set_lenient(lenient)

    def get_locale(self, kind: LocaleKind = LocaleKind.ACTUAL) -> LocaleInfo | None:
        """Locale that supplied this formatter's data (see LocaleKind)."""
        if kind == LocaleKind.VALID:
            return self._valid_locale
        if kind == LocaleKind.ACTUAL:
            return self._actual_locale
        return self._calendar.get_locale(LocaleKind.REQUESTED)

    def set_locale(self, valid: LocaleInfo | None, actual: LocaleInfo | None) -> None:
        """Record locale provenance; both are set or neither."""
        if (valid is None) != (actual is None):
            raise ValueError("Valid and actual locales must both be set or unset")
        self._valid_locale = valid
        self._actual_locale = actual

    # ==========================================================================
    # Identity
    # ==========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateFormat):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._calendar.is_equivalent_to(other._calendar)
            and self._number_format == other._number_format
        )

    def __hash__(self) -> int:
        return hash(self._number_format)

    def __copy__(self) -> "DateFormat":
        cls = type(self)
        other = cls.__new__(cls)
        other.__dict__.update(self.__dict__)
        other._calendar = self._calendar.clone()
        other._number_format = self._number_format.clone()
        return other

    def clone(self) -> "DateFormat":
        """Independent copy with its own calendar and number format."""
        return copy.copy(self)


__all__ = ["DateFormat", "FormattedPart"]
