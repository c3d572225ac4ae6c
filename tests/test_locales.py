"""Tests for locale parsing and CLDR locale data loading."""

from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from datefmt.errors import MissingResourceError
from datefmt.locales import (
    ROOT,
    LocaleInfo,
    LocaleKind,
    available_locales,
    load_locale_data,
)


# =============================================================================
# LocaleInfo
# =============================================================================


class TestLocaleInfoParse:
    """Test LocaleInfo.parse across tag formats."""

    def test_simple(self):
        """Test a bare language."""
        info = LocaleInfo.parse("en")
        assert info.language == "en"
        assert info.region is None
        assert info.identifier == "en"

    @pytest.mark.parametrize("tag", ["en_US", "en-US", "EN-us", " en_US "])
    def test_region(self, tag: str):
        """Test region parsing with both separators."""
        info = LocaleInfo.parse(tag)
        assert info.language == "en"
        assert info.region == "US"
        assert info.identifier == "en_US"
        assert info.tag == "en-US"

    def test_script(self):
        """Test script parsing."""
        info = LocaleInfo.parse("zh-Hant-TW")
        assert info.script == "Hant"
        assert info.region == "TW"
        assert info.identifier == "zh_Hant_TW"

    def test_numeric_region_and_variant(self):
        """Test UN M.49 regions and variants."""
        assert LocaleInfo.parse("es-419").region == "419"
        assert LocaleInfo.parse("en_US_POSIX").variant == "POSIX"

    def test_icu_keywords(self):
        """Test @calendar= keywords."""
        info = LocaleInfo.parse("th_TH@calendar=buddhist")
        assert info.identifier == "th_TH"
        assert info.calendar_type == "buddhist"
        assert str(info) == "th_TH@calendar=buddhist"

    def test_unicode_extension(self):
        """Test -u-ca- extensions."""
        info = LocaleInfo.parse("th-TH-u-ca-buddhist")
        assert info.identifier == "th_TH"
        assert info.calendar_type == "buddhist"

    def test_without_keywords(self):
        """Test stripping keywords."""
        info = LocaleInfo.parse("th_TH@calendar=buddhist")
        assert info.without_keywords() == LocaleInfo.parse("th_TH")
        assert info.without_keywords().calendar_type is None

    def test_parse_is_idempotent(self):
        """Test that LocaleInfo input is returned unchanged."""
        info = LocaleInfo.parse("de_DE")
        assert LocaleInfo.parse(info) is info

    def test_empty(self):
        """Test that empty tags are rejected."""
        with pytest.raises(ValueError):
            LocaleInfo.parse("  ")

    def test_fallback_chain(self):
        """Test the most to least specific chain."""
        chain = LocaleInfo.parse("zh_Hant_TW").fallback_chain()
        assert chain == ["zh_Hant_TW", "zh_Hant", "zh_TW", "zh"]
        assert LocaleInfo.parse("en").fallback_chain() == ["en"]

    def test_root(self):
        """Test the root locale constant."""
        assert ROOT.identifier == "root"


# =============================================================================
# Locale Data
# =============================================================================


class TestLoadLocaleData:
    """Test CLDR data loading and provenance."""

    def test_exact_locale(self):
        """Test a locale with its own data."""
        data = load_locale_data("en_US")
        assert data.get_locale(LocaleKind.REQUESTED).identifier == "en_US"
        assert data.get_locale(LocaleKind.VALID).identifier == "en_US"
        assert data.get_locale(LocaleKind.ACTUAL).identifier in ("en_US", "en")

    def test_unknown_region_falls_back(self):
        """Test that an unknown region resolves to its language."""
        data = load_locale_data("en_ZZ")
        assert data.requested.identifier == "en_ZZ"
        assert data.valid.identifier == "en"
        assert data.actual.identifier == "en"

    def test_keywords_kept_in_requested(self):
        """Test that the requested locale keeps its keywords."""
        data = load_locale_data("th_TH@calendar=buddhist")
        assert data.requested.calendar_type == "buddhist"
        assert data.valid.identifier == "th_TH"

    @pytest.mark.parametrize("tag", ["xx", "zz_ZZ"])
    def test_missing(self, tag: str):
        """Test that an entirely unknown chain raises."""
        with pytest.raises(MissingResourceError) as exc_info:
            load_locale_data(tag)
        assert isinstance(exc_info.value, LookupError)

    def test_cached(self):
        """Test that identical requests share data."""
        assert load_locale_data("de_DE") is load_locale_data("de_DE")

    def test_parent_data_not_truncated(self):
        """Test that provenance lookups leave inherited data intact."""
        load_locale_data("en_GB")
        data = load_locale_data("en_US")
        assert data.month_names("wide")[1] == "January"
        assert data.date_pattern("short") == "M/d/yy"


class TestLocaleDataContent:
    """Test patterns and names exposed by LocaleData."""

    def test_patterns(self):
        """Test style patterns."""
        data = load_locale_data("en_US")
        assert data.date_pattern("short") == "M/d/yy"
        assert data.date_pattern("full") == "EEEE, MMMM d, y"
        assert "{0}" in data.datetime_glue("short")
        assert "{1}" in data.datetime_glue("short")

    def test_missing_style(self):
        """Test that unknown style keys raise."""
        with pytest.raises(MissingResourceError):
            load_locale_data("en_US").date_pattern("tiny")

    def test_names(self):
        """Test month, day, era and period names."""
        data = load_locale_data("en_US")
        assert data.month_names("wide")[1] == "January"
        assert data.month_names("abbreviated")[12] == "Dec"
        assert data.day_names("wide")[0] == "Monday"
        assert data.day_names("wide")[6] == "Sunday"
        assert data.quarter_names("abbreviated")[1] == "Q1"
        assert data.era_names("abbreviated") == {0: "BC", 1: "AD"}
        assert data.period_names() == {"am": "AM", "pm": "PM"}

    def test_localized_names(self):
        """Test names of other locales."""
        assert load_locale_data("de_DE").month_names("wide")[3] == "März"
        assert load_locale_data("ko_KR").month_names("wide")[1] == "1월"

    def test_week_data(self):
        """Test first weekday and minimal days."""
        assert load_locale_data("en_US").first_week_day == 6
        assert load_locale_data("de_DE").first_week_day == 0
        assert load_locale_data("de_DE").min_week_days == 4

    def test_preferred_hour(self):
        """Test the locale's hour letter."""
        assert load_locale_data("en_US").preferred_hour_char == "h"
        assert load_locale_data("de_DE").preferred_hour_char == "H"

    def test_skeletons(self):
        """Test the availableFormats table."""
        skeletons = load_locale_data("en_US").skeletons()
        assert skeletons["yMMMd"] == "MMM d, y"
        assert all(isinstance(v, str) for v in skeletons.values())

    def test_zone_names(self):
        """Test display names used to parse zones, with their offsets."""
        names = dict(load_locale_data("en_US").zone_display_names(
            ZoneInfo("America/New_York"), 2024
        ))
        assert names["Eastern Standard Time"] == timedelta(hours=-5)
        assert names["Eastern Daylight Time"] == timedelta(hours=-4)
        assert names["Eastern Time"] is None

    def test_flexible_day_periods(self):
        """Test that b/B day periods in locale patterns become AM/PM."""
        data = load_locale_data("zh_Hant_TW")
        assert "B" not in data.time_pattern("short")
        assert "a" in data.time_pattern("short")
        assert "B" not in data.skeletons()["hm"]


class TestAvailableLocales:
    """Test locale enumeration."""

    def test_contains_common_locales(self):
        """Test that common locales are listed."""
        identifiers = {info.identifier for info in available_locales()}
        assert {"en", "en_US", "de_DE", "ko_KR"} <= identifiers
