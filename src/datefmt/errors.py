"""Exception hierarchy for datefmt.

All datefmt-specific exceptions inherit from DateFormatError. Each concrete
error also derives from the closest built-in exception so callers that only
know the standard library (``ValueError``, ``TypeError``, ...) keep working.
"""

from __future__ import annotations

from typing import Any


class DateFormatError(Exception):
    """Base exception for all datefmt errors."""

    pass


class IllegalStyleError(DateFormatError, ValueError):
    """A date or time style outside NONE, FULL, LONG, MEDIUM, SHORT.

    Attributes:
        style: The offending style value
        kind: "date" or "time"
    """

    def __init__(self, style: int, kind: str, message: str | None = None) -> None:
        self.style = style
        self.kind = kind
        super().__init__(message or f"Illegal {kind} style {style}")


class UnsupportedInputError(DateFormatError, TypeError):
    """A value that cannot be formatted as a date.

    Raised by ``DateFormat.format`` for anything that is not a Calendar,
    a datetime or a number of epoch milliseconds.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Cannot format given Object ({type(value).__name__}) as a Date"
        )


class FieldOutOfRangeError(DateFormatError, IndexError):
    """A calendar field number outside ``[0, FIELD_COUNT)``."""

    def __init__(self, calendar_field: int) -> None:
        self.calendar_field = calendar_field
        super().__init__(
            f"Calendar field number is out of range: {calendar_field}"
        )


class UnknownAttributeError(DateFormatError, KeyError):
    """No Field attribute is registered under the given name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown attribute name: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateFieldError(DateFormatError, RuntimeError):
    """A standard Field name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Field already registered: {name!r}")


class IllegalPatternError(DateFormatError, ValueError):
    """A pattern containing an unknown letter or an unterminated quote.

    Attributes:
        pattern: The rejected pattern
        index: Offset of the offending character
    """

    def __init__(self, message: str, pattern: str, index: int) -> None:
        self.pattern = pattern
        self.index = index
        super().__init__(f"{message} at index {index} in pattern {pattern!r}")


class IllegalFieldValueError(DateFormatError, ValueError):
    """A calendar field out of range while the calendar is not lenient."""

    def __init__(self, field_name: str, value: int) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"Field {field_name} out of range: {value}")


class ParseError(DateFormatError, ValueError):
    """Text could not be parsed.

    Attributes:
        text: Input text
        error_offset: Offset at which parsing failed
    """

    def __init__(self, message: str, text: str, error_offset: int) -> None:
        self.text = text
        self.error_offset = error_offset
        super().__init__(message)


class MissingResourceError(DateFormatError, LookupError):
    """Locale data required to answer a request does not exist at all.

    Raised when neither the requested locale nor any of its truncated
    parents has data. Falling back to a parent locale is not an error.
    """

    def __init__(self, locale: str, key: str | None = None) -> None:
        self.locale = locale
        self.key = key
        detail = f" (missing {key})" if key else ""
        super().__init__(f"No locale data for {locale!r}{detail}")


__all__ = [
    "DateFormatError",
    "IllegalStyleError",
    "UnsupportedInputError",
    "FieldOutOfRangeError",
    "UnknownAttributeError",
    "DuplicateFieldError",
    "IllegalPatternError",
    "IllegalFieldValueError",
    "ParseError",
    "MissingResourceError",
]
