"""Format styles, boolean parse attributes and skeleton constants.

Styles are small integers so they can be combined with the RELATIVE bit:

    get_date_instance(Style.FULL | RELATIVE)

Skeleton constants are opaque tokens handed unmodified to the pattern
generator.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag


# ==============================================================================
# Styles
# ==============================================================================

class Style(IntEnum):
    """Formality level of a date or time."""
    NONE = -1    # omit this part
    FULL = 0     # Tuesday, April 12, 1952 AD
    LONG = 1     # January 12, 1952
    MEDIUM = 2   # Jan 12, 1952
    SHORT = 3    # 12/13/52


NONE = Style.NONE
FULL = Style.FULL
LONG = Style.LONG
MEDIUM = Style.MEDIUM
SHORT = Style.SHORT
DEFAULT = Style.MEDIUM

RELATIVE = 1 << 7

RELATIVE_FULL = RELATIVE | FULL
RELATIVE_LONG = RELATIVE | LONG
RELATIVE_MEDIUM = RELATIVE | MEDIUM
RELATIVE_SHORT = RELATIVE | SHORT
RELATIVE_DEFAULT = RELATIVE | DEFAULT

# CLDR names of the style levels, indexed by style value
STYLE_NAMES: tuple[str, ...] = ("full", "long", "medium", "short")


def is_relative(style: int) -> bool:
    """Whether a non-negative style carries the RELATIVE bit."""
    return style >= 0 and (style & RELATIVE) > 0


def base_style(style: int) -> int:
    """Style with the RELATIVE bit removed; NONE stays NONE."""
    if style == NONE:
        return NONE
    return style & ~RELATIVE


def is_valid_style(style: int) -> bool:
    """Whether a style is NONE or one of the four levels."""
    return NONE <= style <= SHORT


def style_name(style: int) -> str:
    """CLDR name for a valid non-NONE style ("full", "long", ...)."""
    return STYLE_NAMES[style]


# ==============================================================================
# Boolean Attributes
# ==============================================================================

class BooleanAttribute(IntFlag):
    """Parse leniency toggles carried by each formatter instance."""
    PARSE_ALLOW_WHITESPACE = 1
    PARSE_ALLOW_NUMERIC = 2
    PARSE_PARTIAL_MATCH = 4

    ALL = PARSE_ALLOW_WHITESPACE | PARSE_ALLOW_NUMERIC | PARSE_PARTIAL_MATCH


# ==============================================================================
# Skeletons
# ==============================================================================

YEAR = "y"
QUARTER = "QQQQ"
ABBR_QUARTER = "QQQ"
YEAR_QUARTER = "yQQQQ"
YEAR_ABBR_QUARTER = "yQQQ"
MONTH = "MMMM"
ABBR_MONTH = "MMM"
NUM_MONTH = "M"
YEAR_MONTH = "yMMMM"
YEAR_ABBR_MONTH = "yMMM"
YEAR_NUM_MONTH = "yM"
DAY = "d"
YEAR_MONTH_DAY = "yMMMMd"
YEAR_ABBR_MONTH_DAY = "yMMMd"
YEAR_NUM_MONTH_DAY = "yMd"
WEEKDAY = "EEEE"
ABBR_WEEKDAY = "E"
YEAR_MONTH_WEEKDAY_DAY = "yMMMMEEEEd"
YEAR_ABBR_MONTH_WEEKDAY_DAY = "yMMMEd"
YEAR_NUM_MONTH_WEEKDAY_DAY = "yMEd"
MONTH_DAY = "MMMMd"
ABBR_MONTH_DAY = "MMMd"
NUM_MONTH_DAY = "Md"
MONTH_WEEKDAY_DAY = "MMMMEEEEd"
ABBR_MONTH_WEEKDAY_DAY = "MMMEd"
NUM_MONTH_WEEKDAY_DAY = "MEd"

HOUR = "j"
HOUR24 = "H"
MINUTE = "m"
HOUR_MINUTE = "jm"
HOUR24_MINUTE = "Hm"
SECOND = "s"
HOUR_MINUTE_SECOND = "jms"
HOUR24_MINUTE_SECOND = "Hms"
MINUTE_SECOND = "ms"

LOCATION_TZ = "VVVV"
GENERIC_TZ = "vvvv"
ABBR_GENERIC_TZ = "v"
SPECIFIC_TZ = "zzzz"
ABBR_SPECIFIC_TZ = "z"
ABBR_UTC_TZ = "ZZZZ"

STANDALONE_MONTH = "LLLL"
ABBR_STANDALONE_MONTH = "LLL"
HOUR_MINUTE_GENERIC_TZ = "jmv"
HOUR_MINUTE_TZ = "jmz"
HOUR_GENERIC_TZ = "jv"
HOUR_TZ = "jz"


__all__ = [
    "Style",
    "NONE",
    "FULL",
    "LONG",
    "MEDIUM",
    "SHORT",
    "DEFAULT",
    "RELATIVE",
    "RELATIVE_FULL",
    "RELATIVE_LONG",
    "RELATIVE_MEDIUM",
    "RELATIVE_SHORT",
    "RELATIVE_DEFAULT",
    "STYLE_NAMES",
    "is_relative",
    "base_style",
    "is_valid_style",
    "style_name",
    "BooleanAttribute",
    # Skeletons
    "YEAR",
    "QUARTER",
    "ABBR_QUARTER",
    "YEAR_QUARTER",
    "YEAR_ABBR_QUARTER",
    "MONTH",
    "ABBR_MONTH",
    "NUM_MONTH",
    "YEAR_MONTH",
    "YEAR_ABBR_MONTH",
    "YEAR_NUM_MONTH",
    "DAY",
    "YEAR_MONTH_DAY",
    "YEAR_ABBR_MONTH_DAY",
    "YEAR_NUM_MONTH_DAY",
    "WEEKDAY",
    "ABBR_WEEKDAY",
    "YEAR_MONTH_WEEKDAY_DAY",
    "YEAR_ABBR_MONTH_WEEKDAY_DAY",
    "YEAR_NUM_MONTH_WEEKDAY_DAY",
    "MONTH_DAY",
    "ABBR_MONTH_DAY",
    "NUM_MONTH_DAY",
    "MONTH_WEEKDAY_DAY",
    "ABBR_MONTH_WEEKDAY_DAY",
    "NUM_MONTH_WEEKDAY_DAY",
    "HOUR",
    "HOUR24",
    "MINUTE",
    "HOUR_MINUTE",
    "HOUR24_MINUTE",
    "SECOND",
    "HOUR_MINUTE_SECOND",
    "HOUR24_MINUTE_SECOND",
    "MINUTE_SECOND",
    "LOCATION_TZ",
    "GENERIC_TZ",
    "ABBR_GENERIC_TZ",
    "SPECIFIC_TZ",
    "ABBR_SPECIFIC_TZ",
    "ABBR_UTC_TZ",
    "STANDALONE_MONTH",
    "ABBR_STANDALONE_MONTH",
    "HOUR_MINUTE_GENERIC_TZ",
    "HOUR_MINUTE_TZ",
    "HOUR_GENERIC_TZ",
    "HOUR_TZ",
]
