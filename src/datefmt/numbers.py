"""Integer rendering and parsing of calendar field values.

NumberFormat renders field values with ASCII digits, a minimum number of
digits (zero padded) and an optional maximum (leading digits truncated, as
for two-digit years). Parsing reads a run of digits, optionally bounded.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from babel.numbers import get_decimal_symbol, get_minus_sign_symbol

if TYPE_CHECKING:
    from datefmt.locales import LocaleData
    from datefmt.positions import ParsePosition


class NumberFormat:
    """Locale-aware integer format.

    Args:
        locale_data: Locale supplying the minus sign and decimal symbol
        minimum_integer_digits: Default zero padding
    """

    def __init__(
        self,
        locale_data: "LocaleData | None" = None,
        minimum_integer_digits: int = 1,
    ) -> None:
        if locale_data is not None:
            babel_locale = locale_data.babel_locale
            self.minus_sign = get_minus_sign_symbol(babel_locale)
            self.decimal_symbol = get_decimal_symbol(babel_locale)
        else:
            self.minus_sign = "-"
            self.decimal_symbol = "."
        self.minimum_integer_digits = minimum_integer_digits
        self.maximum_integer_digits: int | None = None
        self._parse_integer_only = False

    def is_parse_integer_only(self) -> bool:
        return self._parse_integer_only

    def set_parse_integer_only(self, value: bool) -> None:
        self._parse_integer_only = bool(value)

    def format(
        self,
        value: int,
        minimum_digits: int | None = None,
        maximum_digits: int | None = None,
    ) -> str:
        """Render an integer.

        Args:
            value: Value to render
            minimum_digits: Zero-pad to this many digits
            maximum_digits: Keep only this many trailing digits

        Returns:
            Rendered digits, prefixed with the locale minus sign if negative
        """
        minimum = self.minimum_integer_digits if minimum_digits is None else minimum_digits
        maximum = self.maximum_integer_digits if maximum_digits is None else maximum_digits

        digits = str(abs(int(value)))
        if maximum is not None and len(digits) > maximum:
            digits = digits[-maximum:]
        digits = digits.zfill(minimum)
        return f"{self.minus_sign}{digits}" if value < 0 else digits

    def parse(
        self,
        text: str,
        position: "ParsePosition",
        max_digits: int | None = None,
    ) -> int | float | None:
        """Parse a number at ``position.index``.

        Args:
            text: Input text
            position: Start offset; advanced past the number on success
            max_digits: Read at most this many digits

        Returns:
            Parsed number, or None (with ``position.error_index`` set)
        """
        start = position.index
        index = start
        negative = False
        if text.startswith(self.minus_sign, index):
            negative = True
            index += len(self.minus_sign)
        elif text.startswith("-", index):
            negative = True
            index += 1

        digits_start = index
        limit = len(text) if max_digits is None else min(len(text), index + max_digits)
        while index < limit and "0" <= text[index] <= "9":
            index += 1

        if index == digits_start:
            position.error_index = start
            return None

        value: int | float = int(text[digits_start:index])

        if (
            not self._parse_integer_only
            and max_digits is None
            and text.startswith(self.decimal_symbol, index)
        ):
            fraction_start = index + len(self.decimal_symbol)
            fraction_end = fraction_start
            while fraction_end < len(text) and "0" <= text[fraction_end] <= "9":
                fraction_end += 1
            if fraction_end > fraction_start:
                value = float(f"{value}.{text[fraction_start:fraction_end]}")
                index = fraction_end

        position.index = index
        return -value if negative else value

    def clone(self) -> "NumberFormat":
        return copy.copy(self)

    def _key(self) -> tuple:
        return (
            self.minus_sign,
            self.decimal_symbol,
            self.minimum_integer_digits,
            self.maximum_integer_digits,
            self._parse_integer_only,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumberFormat):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"NumberFormat(minus_sign={self.minus_sign!r}, "
            f"parse_integer_only={self._parse_integer_only})"
        )


__all__ = ["NumberFormat"]
