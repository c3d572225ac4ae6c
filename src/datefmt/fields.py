"""Calendar Field Identities and the Field Attribute Registry.

This module defines the stable numeric vocabulary of calendar fields used by
patterns, calendars and formatted output, and the registry of named ``Field``
attributes that annotate rich-text output.

- CalendarField: the 34 stable field ids, one per pattern letter
- Field: named attribute, exactly one instance per name
- FieldRegistry: bidirectional id <-> Field lookup

Usage:
    from datefmt.fields import CalendarField, Field, field_by_name

    Field.YEAR.calendar_field            # 1
    field_of_calendar_field(1) is Field.YEAR
    field_by_name("year") is Field.YEAR

Field ids are persisted by callers and must never be renumbered.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Iterator

from datefmt.errors import (
    DuplicateFieldError,
    FieldOutOfRangeError,
    UnknownAttributeError,
)


logger = logging.getLogger(__name__)


# ==============================================================================
# Calendar Field Ids
# ==============================================================================

class CalendarField(IntEnum):
    """Stable calendar field ids.

    The id of each member is the index of its pattern letter in
    ``PATTERN_CHARS``.
    """
    ERA = 0                              # G
    YEAR = 1                             # y
    MONTH = 2                            # M
    DATE = 3                             # d
    HOUR_OF_DAY1 = 4                     # k (1-24)
    HOUR_OF_DAY0 = 5                     # H (0-23)
    MINUTE = 6                           # m
    SECOND = 7                           # s
    FRACTIONAL_SECOND = 8                # S
    MILLISECOND = 8                      # alias of FRACTIONAL_SECOND
    DAY_OF_WEEK = 9                      # E
    DAY_OF_YEAR = 10                     # D
    DAY_OF_WEEK_IN_MONTH = 11            # F
    WEEK_OF_YEAR = 12                    # w
    WEEK_OF_MONTH = 13                   # W
    AM_PM = 14                           # a
    HOUR1 = 15                           # h (1-12)
    HOUR0 = 16                           # K (0-11)
    TIMEZONE = 17                        # z
    YEAR_WOY = 18                        # Y
    DOW_LOCAL = 19                       # e
    EXTENDED_YEAR = 20                   # u
    JULIAN_DAY = 21                      # g
    MILLISECONDS_IN_DAY = 22             # A
    TIMEZONE_RFC = 23                    # Z
    TIMEZONE_GENERIC = 24                # v
    STANDALONE_DAY = 25                  # c
    STANDALONE_MONTH = 26                # L
    QUARTER = 27                         # Q
    STANDALONE_QUARTER = 28              # q
    TIMEZONE_SPECIAL = 29                # V
    YEAR_NAME = 30                       # U
    TIMEZONE_LOCALIZED_GMT_OFFSET = 31   # O
    TIMEZONE_ISO = 32                    # X
    TIMEZONE_ISO_LOCAL = 33              # x

    @property
    def pattern_char(self) -> str:
        """Pattern letter for this field."""
        return PATTERN_CHARS[self.value]

    @classmethod
    def from_pattern_char(cls, char: str) -> "CalendarField":
        """Look up a field by its pattern letter.

        Raises:
            KeyError: If ``char`` is not a pattern letter
        """
        index = PATTERN_CHARS.find(char)
        if index < 0 or len(char) != 1:
            raise KeyError(char)
        return cls(index)


PATTERN_CHARS = "GyMdkHmsSEDFwWahKzYeugAZvcLQqVUOXx"

FIELD_COUNT = 34

if len(PATTERN_CHARS) != FIELD_COUNT or len(set(CalendarField)) != FIELD_COUNT:
    raise RuntimeError("FIELD_COUNT must equal the number of pattern letters")

# Fields whose value is rendered as text once the letter count reaches 3.
TEXT_CAPABLE_FIELDS = frozenset({
    CalendarField.MONTH,
    CalendarField.STANDALONE_MONTH,
    CalendarField.DOW_LOCAL,
    CalendarField.STANDALONE_DAY,
    CalendarField.QUARTER,
    CalendarField.STANDALONE_QUARTER,
})

# Fields that are always text.
TEXT_FIELDS = frozenset({
    CalendarField.ERA,
    CalendarField.DAY_OF_WEEK,
    CalendarField.AM_PM,
    CalendarField.YEAR_NAME,
})

TIMEZONE_FIELDS = frozenset({
    CalendarField.TIMEZONE,
    CalendarField.TIMEZONE_RFC,
    CalendarField.TIMEZONE_GENERIC,
    CalendarField.TIMEZONE_SPECIAL,
    CalendarField.TIMEZONE_LOCALIZED_GMT_OFFSET,
    CalendarField.TIMEZONE_ISO,
    CalendarField.TIMEZONE_ISO_LOCAL,
})


def is_numeric_token(field: CalendarField, count: int) -> bool:
    """Whether a pattern token renders as a number."""
    if field in TEXT_FIELDS or field in TIMEZONE_FIELDS:
        return False
    if field in TEXT_CAPABLE_FIELDS:
        return count < 3
    return True


# ==============================================================================
# Field Attributes
# ==============================================================================

class Field:
    """Named calendar field attribute.

    Field instances identify the parts of a formatted string (see
    ``DateFormat.format_to_parts``). Exactly one instance exists per name;
    copies and unpickled values resolve back to the registered instance.

    Attributes:
        name: Attribute name (e.g. "day of month")
        calendar_field: Corresponding CalendarField id, or -1 if none
    """

    __slots__ = ("_name", "_calendar_field")

    # Standard instances, bound by initialize()
    AM_PM: "Field"
    DAY_OF_MONTH: "Field"
    DAY_OF_WEEK: "Field"
    DAY_OF_WEEK_IN_MONTH: "Field"
    DAY_OF_YEAR: "Field"
    ERA: "Field"
    HOUR_OF_DAY0: "Field"
    HOUR_OF_DAY1: "Field"
    HOUR0: "Field"
    HOUR1: "Field"
    MILLISECOND: "Field"
    MINUTE: "Field"
    MONTH: "Field"
    SECOND: "Field"
    TIME_ZONE: "Field"
    WEEK_OF_MONTH: "Field"
    WEEK_OF_YEAR: "Field"
    YEAR: "Field"
    DOW_LOCAL: "Field"
    EXTENDED_YEAR: "Field"
    JULIAN_DAY: "Field"
    MILLISECONDS_IN_DAY: "Field"
    YEAR_WOY: "Field"
    QUARTER: "Field"

    def __init__(self, name: str, calendar_field: int = -1) -> None:
        self._name = name
        self._calendar_field = int(calendar_field)

    @property
    def name(self) -> str:
        return self._name

    @property
    def calendar_field(self) -> int:
        return self._calendar_field

    def resolve(self) -> "Field":
        """Return the registered instance carrying this field's name.

        Raises:
            UnknownAttributeError: If the name is not registered
        """
        return field_by_name(self._name)

    def __reduce__(self) -> tuple:
        return (field_by_name, (self._name,))

    def __copy__(self) -> "Field":
        return self.resolve()

    def __deepcopy__(self, memo: dict) -> "Field":
        return self.resolve()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Field):
            return NotImplemented
        return (
            self._name == other._name
            and self._calendar_field == other._calendar_field
        )

    def __hash__(self) -> int:
        return hash(("Field", self._name))

    def __repr__(self) -> str:
        return f"Field({self._name!r}, {self._calendar_field})"


# ==============================================================================
# Registry
# ==============================================================================

class FieldRegistry:
    """Bidirectional mapping between calendar field ids and Field attributes.

    The id table is sized to the field count of the calendar system and
    holds at most one Field per slot; the name map holds every registered
    Field, including those without a calendar counterpart.
    """

    def __init__(self, field_count: int = FIELD_COUNT) -> None:
        self._field_count = field_count
        self._by_id: list[Field | None] = [None] * field_count
        self._by_name: dict[str, Field] = {}

    @property
    def field_count(self) -> int:
        return self._field_count

    def register_standard_field(self, name: str, calendar_field: int) -> Field:
        """Create and register a standard Field.

        Args:
            name: Attribute name, unique across the registry
            calendar_field: CalendarField id, or -1 for none

        Returns:
            The registered Field

        Raises:
            DuplicateFieldError: If ``name`` is already registered
        """
        if name in self._by_name:
            raise DuplicateFieldError(name)

        field = Field(name, calendar_field)
        self._by_name[name] = field
        if 0 <= calendar_field < self._field_count:
            self._by_id[calendar_field] = field
        return field

    def by_calendar_field(self, calendar_field: int) -> Field | None:
        """Field for a calendar field id, or None if the slot is empty.

        Raises:
            FieldOutOfRangeError: If the id is negative or >= field count
        """
        if calendar_field < 0 or calendar_field >= self._field_count:
            raise FieldOutOfRangeError(calendar_field)
        return self._by_id[calendar_field]

    def by_name(self, name: str) -> Field:
        """Registered Field for a name.

        Raises:
            UnknownAttributeError: If no Field has this name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownAttributeError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Field]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)


# (attribute name on Field, registered name, calendar field id)
_STANDARD_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("AM_PM", "am pm", CalendarField.AM_PM),
    ("DAY_OF_MONTH", "day of month", CalendarField.DATE),
    ("DAY_OF_WEEK", "day of week", CalendarField.DAY_OF_WEEK),
    ("DAY_OF_WEEK_IN_MONTH", "day of week in month", CalendarField.DAY_OF_WEEK_IN_MONTH),
    ("DAY_OF_YEAR", "day of year", CalendarField.DAY_OF_YEAR),
    ("ERA", "era", CalendarField.ERA),
    ("HOUR_OF_DAY0", "hour of day", CalendarField.HOUR_OF_DAY0),
    ("HOUR_OF_DAY1", "hour of day 1", -1),
    ("HOUR0", "hour", CalendarField.HOUR0),
    ("HOUR1", "hour 1", -1),
    ("MILLISECOND", "millisecond", CalendarField.MILLISECOND),
    ("MINUTE", "minute", CalendarField.MINUTE),
    ("MONTH", "month", CalendarField.MONTH),
    ("SECOND", "second", CalendarField.SECOND),
    ("TIME_ZONE", "time zone", -1),
    ("WEEK_OF_MONTH", "week of month", CalendarField.WEEK_OF_MONTH),
    ("WEEK_OF_YEAR", "week of year", CalendarField.WEEK_OF_YEAR),
    ("YEAR", "year", CalendarField.YEAR),
    ("DOW_LOCAL", "local day of week", CalendarField.DOW_LOCAL),
    ("EXTENDED_YEAR", "extended year", CalendarField.EXTENDED_YEAR),
    ("JULIAN_DAY", "Julian day", CalendarField.JULIAN_DAY),
    ("MILLISECONDS_IN_DAY", "milliseconds in day", CalendarField.MILLISECONDS_IN_DAY),
    ("YEAR_WOY", "year for week of year", CalendarField.YEAR_WOY),
    ("QUARTER", "quarter", -1),
)

# Pattern field -> name of the Field attribute annotating its output.
_PATTERN_ATTRIBUTES: dict[CalendarField, str] = {
    CalendarField.ERA: "era",
    CalendarField.YEAR: "year",
    CalendarField.MONTH: "month",
    CalendarField.DATE: "day of month",
    CalendarField.HOUR_OF_DAY1: "hour of day 1",
    CalendarField.HOUR_OF_DAY0: "hour of day",
    CalendarField.MINUTE: "minute",
    CalendarField.SECOND: "second",
    CalendarField.FRACTIONAL_SECOND: "millisecond",
    CalendarField.DAY_OF_WEEK: "day of week",
    CalendarField.DAY_OF_YEAR: "day of year",
    CalendarField.DAY_OF_WEEK_IN_MONTH: "day of week in month",
    CalendarField.WEEK_OF_YEAR: "week of year",
    CalendarField.WEEK_OF_MONTH: "week of month",
    CalendarField.AM_PM: "am pm",
    CalendarField.HOUR1: "hour 1",
    CalendarField.HOUR0: "hour",
    CalendarField.TIMEZONE: "time zone",
    CalendarField.YEAR_WOY: "year for week of year",
    CalendarField.DOW_LOCAL: "local day of week",
    CalendarField.EXTENDED_YEAR: "extended year",
    CalendarField.JULIAN_DAY: "Julian day",
    CalendarField.MILLISECONDS_IN_DAY: "milliseconds in day",
    CalendarField.TIMEZONE_RFC: "time zone",
    CalendarField.TIMEZONE_GENERIC: "time zone",
    # Stand-alone variants annotate as their base field
    CalendarField.STANDALONE_DAY: "day of week",
    CalendarField.STANDALONE_MONTH: "month",
    CalendarField.QUARTER: "quarter",
    CalendarField.STANDALONE_QUARTER: "quarter",
    CalendarField.TIMEZONE_SPECIAL: "time zone",
    CalendarField.YEAR_NAME: "year",
    CalendarField.TIMEZONE_LOCALIZED_GMT_OFFSET: "time zone",
    CalendarField.TIMEZONE_ISO: "time zone",
    CalendarField.TIMEZONE_ISO_LOCAL: "time zone",
}

_registry: FieldRegistry | None = None


def initialize() -> FieldRegistry:
    """Build the process-wide registry of standard fields.

    Runs once at import time; later calls return the existing registry.
    """
    global _registry
    if _registry is not None:
        return _registry

    registry = FieldRegistry(FIELD_COUNT)
    for attr, name, calendar_field in _STANDARD_FIELDS:
        setattr(Field, attr, registry.register_standard_field(name, int(calendar_field)))
    _registry = registry
    logger.debug("Registered %d standard date format fields", len(registry))
    return registry


def get_field_registry() -> FieldRegistry:
    """Return the process-wide field registry."""
    return initialize()


def field_of_calendar_field(calendar_field: int) -> Field | None:
    """Field for a calendar field id (see FieldRegistry.by_calendar_field)."""
    return get_field_registry().by_calendar_field(calendar_field)


def field_by_name(name: str) -> Field:
    """Registered Field for a name (see FieldRegistry.by_name)."""
    return get_field_registry().by_name(name)


def attribute_for_pattern_field(field: CalendarField) -> Field:
    """Field attribute that annotates output of a pattern field."""
    return field_by_name(_PATTERN_ATTRIBUTES[field])


initialize()


__all__ = [
    "CalendarField",
    "PATTERN_CHARS",
    "FIELD_COUNT",
    "TEXT_FIELDS",
    "TEXT_CAPABLE_FIELDS",
    "TIMEZONE_FIELDS",
    "is_numeric_token",
    "Field",
    "FieldRegistry",
    "initialize",
    "get_field_registry",
    "field_of_calendar_field",
    "field_by_name",
    "attribute_for_pattern_field",
]
