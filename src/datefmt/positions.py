"""Mutable cursors used by format and parse calls."""

from __future__ import annotations

from datefmt.fields import CalendarField, Field


class ParsePosition:
    """Parse cursor.

    Attributes:
        index: Next character to read; advanced on success
        error_index: Offset of the failure, or -1
    """

    __slots__ = ("index", "error_index")

    def __init__(self, index: int = 0, error_index: int = -1) -> None:
        self.index = index
        self.error_index = error_index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsePosition):
            return NotImplemented
        return self.index == other.index and self.error_index == other.error_index

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParsePosition(index={self.index}, error_index={self.error_index})"


class FieldPosition:
    """Request for, and result of, the location of one field in output.

    ``field`` selects the field by CalendarField id or by Field attribute.
    After formatting, ``begin_index`` and ``end_index`` delimit its first
    occurrence; both stay 0 if the field does not occur.
    """

    __slots__ = ("field", "begin_index", "end_index")

    def __init__(
        self,
        field: "int | Field",
        begin_index: int = 0,
        end_index: int = 0,
    ) -> None:
        self.field = field
        self.begin_index = begin_index
        self.end_index = end_index

    def matches(self, pattern_field: CalendarField, attribute: Field) -> bool:
        """Whether output of ``pattern_field`` is what this position asks for."""
        if isinstance(self.field, Field):
            return self.field == attribute
        return int(self.field) == int(pattern_field)

    def __repr__(self) -> str:
        return (
            f"FieldPosition(field={self.field!r}, begin_index={self.begin_index}, "
            f"end_index={self.end_index})"
        )


__all__ = ["ParsePosition", "FieldPosition"]
