"""Style and skeleton resolution, and the public factory functions.

StyleResolver turns an abstract request into a formatter bound to a locale
and a calendar system:

- a style pair carrying the RELATIVE bit -> RelativeDateFormat
- a plain style pair -> the calendar system's own pattern for the styles
- a skeleton -> the locale's best pattern for the requested fields

Missing locale data never escapes ``resolve``: a formatter with the
configured fallback pattern is returned and a warning is logged.

Usage:
    from datefmt import get_date_time_instance, FULL, SHORT

    fmt = get_date_time_instance(FULL, SHORT, "fr_FR")
    fmt.format(datetime(2024, 3, 5, 14, 7))
"""

from __future__ import annotations

import logging

from datefmt.base import DateFormat
from datefmt.calendar import Calendar, get_calendar
from datefmt.config import DateFormatConfig, get_config
from datefmt.errors import IllegalStyleError, MissingResourceError
from datefmt.generator import PatternGenerator
from datefmt.locales import ROOT, LocaleInfo, LocaleKind, available_locales
from datefmt.relative import RelativeDateFormat
from datefmt.simple import SimpleDateFormat
from datefmt.styles import DEFAULT, NONE, SHORT, is_relative, is_valid_style


logger = logging.getLogger(__name__)


class StyleResolver:
    """Selects, validates and constructs formatters.

    Args:
        config: Configuration to use instead of the global one
    """

    def __init__(self, config: DateFormatConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> DateFormatConfig:
        return self._config or get_config()

    def resolve(
        self,
        date_style: int,
        time_style: int,
        locale: "str | LocaleInfo | None" = None,
        calendar: Calendar | None = None,
    ) -> DateFormat:
        """Formatter for a (date style, time style) pair.

        Args:
            date_style: NONE, FULL..SHORT, optionally OR-ed with RELATIVE
            time_style: NONE, FULL..SHORT, optionally OR-ed with RELATIVE
            locale: Locale; defaults to the configured locale
            calendar: Calendar system to use instead of the locale's

        Returns:
            RelativeDateFormat for relative requests, else SimpleDateFormat

        Raises:
            IllegalStyleError: If a non-relative style is out of range
        """
        if locale is None:
            locale = self.config.default_locale

        if is_relative(time_style) or is_relative(date_style):
            try:
                return RelativeDateFormat(
                    time_style,
                    date_style,
                    locale,
                    calendar=calendar.clone() if calendar is not None else None,
                )
            except MissingResourceError as e:
                return self._fallback(locale, e)

        if not is_valid_style(time_style):
            raise IllegalStyleError(time_style, "time")
        if not is_valid_style(date_style):
            raise IllegalStyleError(date_style, "date")

        try:
            cal = calendar if calendar is not None else get_calendar(
                locale, lenient=self.config.lenient
            )
            result = cal.get_date_time_format(date_style, time_style, locale)
            result.set_locale(cal.get_locale(LocaleKind.VALID), cal.get_locale(LocaleKind.ACTUAL))
        except MissingResourceError as e:
            return self._fallback(locale, e)

        logger.debug(
            "Resolved styles (%d, %d) for %s to %r", date_style, time_style, locale, result
        )
        return result

    def resolve_skeleton(
        self,
        skeleton: str,
        locale: "str | LocaleInfo | None" = None,
        calendar: Calendar | None = None,
    ) -> SimpleDateFormat:
        """Formatter for the locale's best pattern for a skeleton.

        The skeleton is not validated; letters the pattern syntax does not
        know raise IllegalPatternError when the formatter is built.

        Raises:
            MissingResourceError: If no locale data exists for ``locale``
            IllegalPatternError: If the resulting pattern is malformed
        """
        if locale is None:
            locale = self.config.default_locale

        pattern = PatternGenerator.get_instance(locale).get_best_pattern(skeleton)
        result = SimpleDateFormat(pattern, locale)
        if calendar is not None:
            result.set_calendar(calendar)
        return result

    def _fallback(self, locale: "str | LocaleInfo", error: MissingResourceError) -> DateFormat:
        pattern = self.config.fallback_pattern
        logger.warning(
            "No locale data for %s (%s); using fallback pattern %r", locale, error, pattern
        )
        return SimpleDateFormat(pattern, ROOT)


_resolver = StyleResolver()


def get_style_resolver() -> StyleResolver:
    """Return the module-level resolver."""
    return _resolver


# ==============================================================================
# Factory Functions
# ==============================================================================

def get_instance() -> DateFormat:
    """SHORT date and time formatter for the default locale."""
    return get_date_time_instance(SHORT, SHORT)


def get_date_instance(
    style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Date formatter for a style (may carry RELATIVE)."""
    return _resolver.resolve(style, NONE, locale)


def get_time_instance(
    style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Time formatter for a style (may carry RELATIVE)."""
    return _resolver.resolve(NONE, style, locale)


def get_date_time_instance(
    date_style: int = DEFAULT,
    time_style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Date and time formatter for a style pair."""
    return _resolver.resolve(date_style, time_style, locale)


def get_date_instance_for_calendar(
    calendar: Calendar,
    style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Date formatter from a calendar system's own pattern table."""
    return calendar.get_date_time_format(style, NONE, locale)


def get_time_instance_for_calendar(
    calendar: Calendar,
    style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Time formatter from a calendar system's own pattern table."""
    return calendar.get_date_time_format(NONE, style, locale)


def get_date_time_instance_for_calendar(
    calendar: Calendar,
    date_style: int = DEFAULT,
    time_style: int = DEFAULT,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """Date and time formatter from a calendar system's own pattern table."""
    return calendar.get_date_time_format(date_style, time_style, locale)


def get_instance_for_calendar(
    calendar: Calendar,
    locale: "str | LocaleInfo | None" = None,
) -> DateFormat:
    """SHORT date and time formatter from a calendar system."""
    return get_date_time_instance_for_calendar(calendar, SHORT, SHORT, locale)


def get_pattern_instance(
    skeleton: str,
    locale: "str | LocaleInfo | None" = None,
    calendar: Calendar | None = None,
) -> SimpleDateFormat:
    """Formatter for the locale's best pattern for a skeleton."""
    return _resolver.resolve_skeleton(skeleton, locale, calendar)


def get_available_locales() -> list[LocaleInfo]:
    """Locales with date format data."""
    return available_locales()


__all__ = [
    "StyleResolver",
    "get_style_resolver",
    "get_instance",
    "get_date_instance",
    "get_time_instance",
    "get_date_time_instance",
    "get_date_instance_for_calendar",
    "get_time_instance_for_calendar",
    "get_date_time_instance_for_calendar",
    "get_instance_for_calendar",
    "get_pattern_instance",
    "get_available_locales",
]
