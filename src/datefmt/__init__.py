"""datefmt - Locale-Aware Date Formatting and Parsing on CLDR Data."""

from datefmt.base import DateFormat, FormattedPart
from datefmt.calendar import (
    BuddhistCalendar,
    Calendar,
    GregorianCalendar,
    get_calendar,
    register_calendar,
)
from datefmt.config import DateFormatConfig, config_override, get_config, set_config
from datefmt.errors import (
    DateFormatError,
    DuplicateFieldError,
    FieldOutOfRangeError,
    IllegalFieldValueError,
    IllegalPatternError,
    IllegalStyleError,
    MissingResourceError,
    ParseError,
    UnknownAttributeError,
    UnsupportedInputError,
)
from datefmt.fields import (
    FIELD_COUNT,
    PATTERN_CHARS,
    CalendarField,
    Field,
    FieldRegistry,
    field_by_name,
    field_of_calendar_field,
    get_field_registry,
)
from datefmt.generator import PatternGenerator
from datefmt.locales import LocaleInfo, LocaleKind
from datefmt.numbers import NumberFormat
from datefmt.positions import FieldPosition, ParsePosition
from datefmt.relative import RelativeDateFormat
from datefmt.resolver import (
    StyleResolver,
    get_available_locales,
    get_date_instance,
    get_date_instance_for_calendar,
    get_date_time_instance,
    get_date_time_instance_for_calendar,
    get_instance,
    get_instance_for_calendar,
    get_pattern_instance,
    get_time_instance,
    get_time_instance_for_calendar,
)
from datefmt.simple import SimpleDateFormat
from datefmt.styles import (
    DEFAULT,
    FULL,
    LONG,
    MEDIUM,
    NONE,
    RELATIVE,
    RELATIVE_DEFAULT,
    RELATIVE_FULL,
    RELATIVE_LONG,
    RELATIVE_MEDIUM,
    RELATIVE_SHORT,
    SHORT,
    BooleanAttribute,
    Style,
    YEAR,
    QUARTER,
    ABBR_QUARTER,
    YEAR_QUARTER,
    YEAR_ABBR_QUARTER,
    MONTH,
    ABBR_MONTH,
    NUM_MONTH,
    YEAR_MONTH,
    YEAR_ABBR_MONTH,
    YEAR_NUM_MONTH,
    DAY,
    YEAR_MONTH_DAY,
    YEAR_ABBR_MONTH_DAY,
    YEAR_NUM_MONTH_DAY,
    WEEKDAY,
    ABBR_WEEKDAY,
    YEAR_MONTH_WEEKDAY_DAY,
    YEAR_ABBR_MONTH_WEEKDAY_DAY,
    YEAR_NUM_MONTH_WEEKDAY_DAY,
    MONTH_DAY,
    ABBR_MONTH_DAY,
    NUM_MONTH_DAY,
    MONTH_WEEKDAY_DAY,
    ABBR_MONTH_WEEKDAY_DAY,
    NUM_MONTH_WEEKDAY_DAY,
    HOUR,
    HOUR24,
    MINUTE,
    HOUR_MINUTE,
    HOUR24_MINUTE,
    SECOND,
    HOUR_MINUTE_SECOND,
    HOUR24_MINUTE_SECOND,
    MINUTE_SECOND,
    LOCATION_TZ,
    GENERIC_TZ,
    ABBR_GENERIC_TZ,
    SPECIFIC_TZ,
    ABBR_SPECIFIC_TZ,
    ABBR_UTC_TZ,
    STANDALONE_MONTH,
    ABBR_STANDALONE_MONTH,
    HOUR_MINUTE_GENERIC_TZ,
    HOUR_MINUTE_TZ,
    HOUR_GENERIC_TZ,
    HOUR_TZ,
)

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("datefmt")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Factories
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
    "StyleResolver",
    # Formatters
    "DateFormat",
    "FormattedPart",
    "SimpleDateFormat",
    "RelativeDateFormat",
    "PatternGenerator",
    "NumberFormat",
    "ParsePosition",
    "FieldPosition",
    # Fields
    "CalendarField",
    "Field",
    "FieldRegistry",
    "FIELD_COUNT",
    "PATTERN_CHARS",
    "field_by_name",
    "field_of_calendar_field",
    "get_field_registry",
    # Styles
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
    # Calendars and locales
    "Calendar",
    "GregorianCalendar",
    "BuddhistCalendar",
    "get_calendar",
    "register_calendar",
    "LocaleInfo",
    "LocaleKind",
    # Configuration
    "DateFormatConfig",
    "get_config",
    "set_config",
    "config_override",
    # Errors
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
    "__version__",
]
