"""Skeleton to pattern matching.

A skeleton lists the fields a caller wants ("yMMMd", "jms") without order,
punctuation or literals. PatternGenerator turns it into the locale's
preferred pattern for those fields, using the CLDR ``availableFormats``
data shipped with Babel.

Usage:
    gen = PatternGenerator.get_instance("en_US")
    gen.get_best_pattern("yMMMd")    # "MMM d, y"
    gen.get_best_pattern("jm")       # "h:mm a"
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache

from babel.dates import match_skeleton

from datefmt.config import get_config
from datefmt.locales import LocaleData, LocaleInfo, load_locale_data


logger = logging.getLogger(__name__)


# Letters that belong to the date half of a skeleton
_DATE_LETTERS = frozenset("GyYuUrQqMLlwWdDFgEec")

# Letters of a field family share one width request
_FAMILIES: dict[str, str] = {
    "L": "M",
    "c": "E",
    "e": "E",
    "q": "Q",
    "H": "h",
    "k": "h",
    "K": "h",
    "Y": "y",
    "u": "y",
    "U": "y",
}

# Families rendered as text from three letters on
_TEXT_FAMILIES = frozenset("MEQG")


def _family(letter: str) -> str:
    return _FAMILIES.get(letter, letter)


def _field_runs(text: str) -> list[tuple[str, int]]:
    """(letter, count) runs of the unquoted letters in a pattern."""
    runs: list[tuple[str, int]] = []
    quoted = False
    for char in text:
        if char == "'":
            quoted = not quoted
            continue
        if quoted or not char.isalpha():
            continue
        if runs and runs[-1][0] == char:
            runs[-1] = (char, runs[-1][1] + 1)
        else:
            runs.append((char, 1))
    return runs


def _strip_day_period(pattern: str) -> str:
    """Remove unquoted day period fields and the space joining them."""
    out: list[str] = []
    quoted = False
    skip_space = False
    for char in pattern:
        if char == "'":
            quoted = not quoted
        elif not quoted and char in "abB":
            if out and out[-1].isspace():
                out.pop()
            else:
                skip_space = True
            continue
        elif skip_space and char.isspace():
            skip_space = False
            continue
        skip_space = False
        out.append(char)
    return "".join(out)


class PatternGenerator:
    """Locale-specific skeleton matcher.

    Use ``get_instance`` rather than the constructor; instances are cached
    per locale and safe to share between threads.
    """

    def __init__(self, locale_data: LocaleData) -> None:
        self._locale_data = locale_data
        self._skeletons = locale_data.skeletons()
        self._hour_char = locale_data.preferred_hour_char
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls, locale: "str | LocaleInfo | None" = None) -> "PatternGenerator":
        """Cached generator for a locale (the configured default if None).

        Raises:
            MissingResourceError: If no locale data exists for ``locale``
        """
        info = LocaleInfo.parse(locale if locale is not None else get_config().default_locale)
        return _generator_for(info.without_keywords())

    @property
    def locale_data(self) -> LocaleData:
        return self._locale_data

    def get_skeletons(self) -> dict[str, str]:
        """CLDR skeleton -> pattern table of the locale."""
        return dict(self._skeletons)

    def get_best_pattern(self, skeleton: str) -> str:
        """Best literal pattern for a skeleton.

        Args:
            skeleton: Requested fields, e.g. "yMMMEd" or "jmz"

        Returns:
            Pattern; the skeleton itself if nothing in the locale matches
        """
        with self._lock:
            cached = self._cache.get(skeleton)
        if cached is not None:
            return cached

        pattern = self._best_pattern(skeleton)
        if "J" in skeleton:
            pattern = _strip_day_period(pattern)
        logger.debug("Skeleton %r -> pattern %r", skeleton, pattern)
        with self._lock:
            self._cache[skeleton] = pattern
        return pattern

    def _map_hour_chars(self, skeleton: str) -> str:
        hour = self._hour_char
        return skeleton.replace("j", hour).replace("C", hour).replace("J", hour)

    def _best_pattern(self, skeleton: str) -> str:
        skeleton = self._map_hour_chars(skeleton)
        if not skeleton:
            return skeleton
        if skeleton in self._skeletons:
            return self._skeletons[skeleton]

        date_part = "".join(c for c in skeleton if c in _DATE_LETTERS)
        time_part = "".join(c for c in skeleton if c not in _DATE_LETTERS)

        date_pattern = self._match_part(date_part) if date_part else ""
        time_pattern = self._match_part(time_part) if time_part else ""
        if not date_pattern or not time_pattern:
            return date_pattern or time_pattern

        glue = self._locale_data.datetime_glue(self._glue_style(date_part))
        return glue.replace("{1}", date_pattern).replace("{0}", time_pattern)

    def _match_part(self, part: str) -> str:
        if part in self._skeletons:
            return self._skeletons[part]
        key = match_skeleton(part, self._skeletons)
        if key is None:
            return part
        return self._adjust_widths(self._skeletons[key], part)

    def _adjust_widths(self, pattern: str, requested: str) -> str:
        """Stretch pattern fields to the widths the skeleton asks for."""
        wanted = {_family(letter): count for letter, count in _field_runs(requested)}
        # Babel matches "z" against "v" patterns; keep the specific zone
        if "z" in wanted and "v" not in wanted:
            wanted["v"] = wanted["z"]
        out: list[str] = []
        quoted = False
        i = 0
        while i < len(pattern):
            char = pattern[i]
            if char == "'":
                quoted = not quoted
                out.append(char)
                i += 1
                continue
            if quoted or not char.isalpha():
                out.append(char)
                i += 1
                continue
            end = i
            while end < len(pattern) and pattern[end] == char:
                end += 1
            count = end - i
            family = _family(char)
            request = wanted.get(family)
            if request is not None:
                if family in _TEXT_FAMILIES and (request >= 3 or count >= 3):
                    count = request
                elif request > count:
                    count = request
            if char == "v" and "z" in requested:
                char = "z"
            out.append(char * count)
            i = end
        return "".join(out)

    @staticmethod
    def _glue_style(date_part: str) -> str:
        runs = {_family(letter): count for letter, count in _field_runs(date_part)}
        month = runs.get("M", 0)
        if month >= 4 and runs.get("E", 0) >= 4:
            return "full"
        if month >= 4:
            return "long"
        if month == 3:
            return "medium"
        return "short"

    def __repr__(self) -> str:
        return f"PatternGenerator(locale={self._locale_data.valid})"


@lru_cache(maxsize=64)
def _generator_for(locale: LocaleInfo) -> PatternGenerator:
    return PatternGenerator(load_locale_data(locale))


__all__ = ["PatternGenerator"]
