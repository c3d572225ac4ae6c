"""Locale Identification and CLDR Locale Data.

This module parses locale tags and loads the CLDR data (through Babel) that
calendars, pattern generators and formatters consume. It tracks locale
provenance:

- REQUESTED: the locale the caller asked for
- VALID: the most specific locale for which any data exists
- ACTUAL: the locale whose own data supplied the date/time patterns

A request whose whole fallback chain is unknown raises MissingResourceError;
falling back to a parent locale is not an error.

Usage:
    from datefmt.locales import LocaleInfo, load_locale_data

    data = load_locale_data(LocaleInfo.parse("de-AT"))
    data.date_pattern("short")        # "dd.MM.yy"
    data.month_names("wide")[1]       # "Jänner"
"""

from __future__ import annotations

import logging
import pickle
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from functools import lru_cache
from typing import Any, Mapping

from babel import Locale, UnknownLocaleError, localedata
from babel import dates as babel_dates

from datefmt.errors import MissingResourceError


logger = logging.getLogger(__name__)


# ==============================================================================
# Locale Identification
# ==============================================================================

class LocaleKind(str, Enum):
    """Which locale of a resolution chain to report."""
    REQUESTED = "requested"
    VALID = "valid"
    ACTUAL = "actual"


@dataclass(frozen=True)
class LocaleInfo:
    """Locale identity.

    Attributes:
        language: ISO 639 language code (e.g., "en", "ko"), or "root"
        region: ISO 3166-1 region code (e.g., "US", "GB")
        script: ISO 15924 script code (e.g., "Latn", "Hant")
        variant: Locale variant (e.g., "POSIX")
        keywords: Sorted (key, value) pairs such as ("calendar", "buddhist")
    """
    language: str
    region: str | None = None
    script: str | None = None
    variant: str | None = None
    keywords: tuple[tuple[str, str], ...] = field(default=())

    @property
    def identifier(self) -> str:
        """Babel/CLDR identifier without keywords (e.g. "zh_Hant_TW")."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        if self.variant:
            parts.append(self.variant)
        return "_".join(parts)

    @property
    def tag(self) -> str:
        """Get BCP 47 language tag."""
        return self.identifier.replace("_", "-")

    def keyword(self, key: str) -> str | None:
        """Value of a locale keyword, or None."""
        for name, value in self.keywords:
            if name == key:
                return value
        return None

    @property
    def calendar_type(self) -> str | None:
        """CLDR calendar type requested through the locale, if any."""
        return self.keyword("calendar")

    def without_keywords(self) -> "LocaleInfo":
        return LocaleInfo(self.language, self.region, self.script, self.variant)

    def fallback_chain(self) -> list[str]:
        """Identifiers from most to least specific (keywords excluded)."""
        chain = [self.identifier]
        candidates = [
            (self.language, self.script, self.region),
            (self.language, self.script, None),
            (self.language, None, self.region),
            (self.language, None, None),
        ]
        for language, script, region in candidates:
            ident = "_".join(p for p in (language, script, region) if p)
            if ident not in chain:
                chain.append(ident)
        return chain

    @classmethod
    def parse(cls, tag: "str | LocaleInfo") -> "LocaleInfo":
        """Parse a locale tag.

        Supports formats:
        - Simple: "en", "ko", "root"
        - With region: "en-US", "ko-KR", "en_US", "ko_KR"
        - With script: "zh-Hans", "zh-Hant-TW"
        - ICU keywords: "th_TH@calendar=buddhist"
        - BCP 47 extension: "ja-JP-u-ca-japanese"

        Args:
            tag: Locale tag string

        Returns:
            Parsed LocaleInfo

        Raises:
            ValueError: If the tag is empty
        """
        if isinstance(tag, LocaleInfo):
            return tag

        text = tag.strip()
        if not text:
            raise ValueError("Empty locale tag")

        keywords: dict[str, str] = {}
        if "@" in text:
            text, _, keyword_text = text.partition("@")
            for item in keyword_text.split(";"):
                key, _, value = item.partition("=")
                if key and value:
                    keywords[key.strip().lower()] = value.strip().lower()

        # Normalize separator
        parts = text.replace("_", "-").split("-")

        # Unicode extension: -u-ca-buddhist
        lowered = [p.lower() for p in parts]
        if "u" in lowered[1:]:
            index = lowered.index("u", 1)
            extension = lowered[index + 1:]
            parts = parts[:index]
            for i in range(0, len(extension) - 1, 2):
                if extension[i] == "ca":
                    keywords["calendar"] = extension[i + 1]

        language = parts[0].lower()
        region = None
        script = None
        variant = None

        for part in parts[1:]:
            if not part:
                continue
            if len(part) == 4 and part.isalpha():
                # Script code (4 letters)
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha():
                # Region code (2 letters)
                region = part.upper()
            elif len(part) == 3 and part.isdigit():
                # UN M.49 region code (3 digits)
                region = part
            else:
                # Variant
                variant = part.upper()

        return cls(
            language=language,
            region=region,
            script=script,
            variant=variant,
            keywords=tuple(sorted(keywords.items())),
        )

    def __str__(self) -> str:
        if not self.keywords:
            return self.identifier
        extra = ";".join(f"{k}={v}" for k, v in self.keywords)
        return f"{self.identifier}@{extra}"


ROOT = LocaleInfo("root")


# ==============================================================================
# Locale Data
# ==============================================================================

_WIDTH_FALLBACKS: dict[str, tuple[str, ...]] = {
    "wide": ("wide", "abbreviated", "narrow"),
    "abbreviated": ("abbreviated", "wide", "narrow"),
    "short": ("short", "abbreviated", "wide"),
    "narrow": ("narrow", "abbreviated", "wide"),
}


class LocaleData:
    """CLDR date/time data for one resolved locale.

    Instances are created by ``load_locale_data`` and cached; they are
    read-only and safe to share.
    """

    def __init__(
        self,
        requested: LocaleInfo,
        valid: LocaleInfo,
        actual: LocaleInfo,
        babel_locale: Locale,
    ) -> None:
        self.requested = requested
        self.valid = valid
        self.actual = actual
        self.babel_locale = babel_locale

    def get_locale(self, kind: LocaleKind) -> LocaleInfo:
        if kind == LocaleKind.REQUESTED:
            return self.requested
        if kind == LocaleKind.VALID:
            return self.valid
        return self.actual

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def date_pattern(self, style: str) -> str:
        """CLDR date pattern for "full", "long", "medium" or "short"."""
        return self._pattern(self.babel_locale.date_formats, style, "date_formats")

    def time_pattern(self, style: str) -> str:
        """CLDR time pattern for "full", "long", "medium" or "short"."""
        return self._pattern(self.babel_locale.time_formats, style, "time_formats")

    def datetime_glue(self, style: str) -> str:
        """Pattern joining a time ({0}) and a date ({1})."""
        return self._pattern(
            self.babel_locale.datetime_formats, style, "datetime_formats"
        )

    def skeletons(self) -> dict[str, str]:
        """CLDR availableFormats: skeleton -> pattern."""
        return {
            key: _pattern_text(value)
            for key, value in self.babel_locale.datetime_skeletons.items()
        }

    def _pattern(self, table: Mapping[str, Any], style: str, key: str) -> str:
        try:
            return _pattern_text(table[style])
        except KeyError:
            raise MissingResourceError(self.valid.identifier, f"{key}.{style}") from None

    @property
    def preferred_hour_char(self) -> str:
        """Hour letter ("h", "H", "k" or "K") of the short time pattern."""
        for char in self.time_pattern("short"):
            if char in "hHkK":
                return char
        return "H"

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def month_names(self, width: str, context: str = "format") -> dict[int, str]:
        """Month names keyed 1..12."""
        return self._names(babel_dates.get_month_names, width, context)

    def day_names(self, width: str, context: str = "format") -> dict[int, str]:
        """Weekday names keyed 0 (Monday) .. 6 (Sunday)."""
        return self._names(babel_dates.get_day_names, width, context)

    def quarter_names(self, width: str, context: str = "format") -> dict[int, str]:
        """Quarter names keyed 1..4."""
        return self._names(babel_dates.get_quarter_names, width, context)

    def era_names(self, width: str) -> dict[int, str]:
        """Era names keyed 0 (BC) and 1 (AD)."""
        for candidate in _WIDTH_FALLBACKS.get(width, (width,)):
            try:
                names = babel_dates.get_era_names(candidate, locale=self.babel_locale)
            except KeyError:
                continue
            if names:
                return dict(names)
        return {0: "BC", 1: "AD"}

    def period_names(self, width: str = "abbreviated") -> dict[str, str]:
        """Day period names with at least the "am" and "pm" keys."""
        for context in ("format", "stand-alone"):
            for candidate in _WIDTH_FALLBACKS.get(width, (width,)):
                try:
                    names = babel_dates.get_period_names(
                        candidate, context, locale=self.babel_locale
                    )
                except KeyError:
                    continue
                if names and "am" in names and "pm" in names:
                    return {"am": names["am"], "pm": names["pm"]}
        return {"am": "AM", "pm": "PM"}

    def _names(self, getter: Any, width: str, context: str) -> dict[Any, str]:
        for ctx in (context, "format", "stand-alone"):
            for candidate in _WIDTH_FALLBACKS.get(width, (width,)):
                try:
                    names = getter(candidate, ctx, locale=self.babel_locale)
                except KeyError:
                    continue
                if names:
                    return dict(names)
        raise MissingResourceError(self.valid.identifier, f"names.{width}")

    # ------------------------------------------------------------------
    # Week data
    # ------------------------------------------------------------------

    @property
    def first_week_day(self) -> int:
        """First day of the week, 0 = Monday."""
        return int(self.babel_locale.first_week_day)

    @property
    def min_week_days(self) -> int:
        """Minimal days in the first week of a year."""
        return int(self.babel_locale.min_week_days)

    # ------------------------------------------------------------------
    # Time zones
    # ------------------------------------------------------------------

    def format_zone(self, value: datetime, token: str) -> str:
        """Render a zone pattern token ("zzzz", "ZZZZZ", ...) for ``value``."""
        return babel_dates.DateTimeFormat(value, self.babel_locale)[token]

    def zone_display_names(self, zone: tzinfo, year: int) -> list[tuple[str, timedelta | None]]:
        """Every CLDR display name of ``zone`` around ``year``.

        Both January and July are sampled so standard and daylight names
        are included. Each name comes with the UTC offset it stands for, or
        None for generic names and names shared by both offsets.
        """
        offsets: dict[str, set[timedelta]] = {}
        generic: set[str] = set()
        for month in (1, 7):
            moment = datetime(year, month, 1, 12, tzinfo=zone)
            offset = moment.utcoffset() or timedelta(0)
            for token in ("zzzz", "z", "vvvv", "v", "VVVV", "OOOO", "O"):
                try:
                    name = self.format_zone(moment, token)
                except (KeyError, LookupError, ValueError, AttributeError):
                    logger.debug("No %s name for zone %r", token, zone)
                    continue
                if not name:
                    continue
                offsets.setdefault(name, set()).add(offset)
                if token[0] in "vV":
                    generic.add(name)

        return [
            (name, None if name in generic or len(seen) > 1 else next(iter(seen)))
            for name, seen in offsets.items()
        ]

    def __repr__(self) -> str:
        return (
            f"LocaleData(requested={self.requested}, valid={self.valid}, "
            f"actual={self.actual})"
        )


def _pattern_text(value: Any) -> str:
    return _plain_day_periods(getattr(value, "pattern", None) or str(value))


def _plain_day_periods(pattern: str) -> str:
    """Rewrite flexible day periods ("b", "B") as AM/PM ("a") of the same width."""
    out: list[str] = []
    quoted = False
    for char in pattern:
        if char == "'":
            quoted = not quoted
        elif not quoted and char in "bB":
            char = "a"
        out.append(char)
    return "".join(out)


def _has_own_date_data(identifier: str) -> bool:
    """Whether the locale's own data file, without inheritance, has date patterns."""
    # Bypasses localedata.load, which would cache the unmerged data
    try:
        with open(localedata.resolve_locale_filename(identifier), "rb") as fileobj:
            data = pickle.load(fileobj)
    except (OSError, ValueError):
        return False
    return bool(data.get("date_formats"))


@lru_cache(maxsize=128)
def _load(locale: LocaleInfo) -> LocaleData:
    valid_id = None
    chain = locale.fallback_chain()
    for candidate in chain:
        if localedata.exists(candidate):
            valid_id = candidate
            break

    if valid_id is None:
        raise MissingResourceError(locale.identifier)

    try:
        babel_locale = Locale.parse(valid_id)
    except (UnknownLocaleError, ValueError) as e:
        raise MissingResourceError(locale.identifier) from e

    actual_id = "root"
    for candidate in chain[chain.index(valid_id):]:
        if _has_own_date_data(candidate):
            actual_id = candidate
            break

    if valid_id != locale.identifier:
        logger.debug("Locale %s falls back to %s", locale, valid_id)

    return LocaleData(
        requested=locale,
        valid=LocaleInfo.parse(valid_id),
        actual=LocaleInfo.parse(actual_id),
        babel_locale=babel_locale,
    )


def load_locale_data(locale: "str | LocaleInfo") -> LocaleData:
    """Load CLDR data for a locale.

    Args:
        locale: Locale tag or LocaleInfo

    Returns:
        LocaleData for the most specific locale with data

    Raises:
        MissingResourceError: If no locale of the fallback chain has data
    """
    info = LocaleInfo.parse(locale)
    data = _load(info.without_keywords())
    if info == data.requested:
        return data
    return LocaleData(info, data.valid, data.actual, data.babel_locale)


def available_locales() -> list[LocaleInfo]:
    """All locales with CLDR data."""
    return [
        LocaleInfo.parse(identifier)
        for identifier in sorted(localedata.locale_identifiers())
    ]


__all__ = [
    "LocaleKind",
    "LocaleInfo",
    "ROOT",
    "LocaleData",
    "load_locale_data",
    "available_locales",
]
