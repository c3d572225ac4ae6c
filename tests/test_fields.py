"""Tests for calendar field ids and the Field attribute registry."""

from __future__ import annotations

import copy
import pickle

import pytest

from datefmt.errors import (
    DuplicateFieldError,
    FieldOutOfRangeError,
    UnknownAttributeError,
)
from datefmt.fields import (
    FIELD_COUNT,
    PATTERN_CHARS,
    CalendarField,
    Field,
    FieldRegistry,
    attribute_for_pattern_field,
    field_by_name,
    field_of_calendar_field,
    get_field_registry,
    initialize,
    is_numeric_token,
)


# =============================================================================
# Calendar Field Ids
# =============================================================================


class TestCalendarField:
    """Test the stable calendar field enumeration."""

    def test_field_count_matches_pattern_letters(self):
        """Test that there is one field per pattern letter."""
        assert FIELD_COUNT == 34
        assert len(PATTERN_CHARS) == FIELD_COUNT
        assert len(set(CalendarField)) == FIELD_COUNT

    def test_stable_ids(self):
        """Test persisted ids of a few fields."""
        assert CalendarField.ERA == 0
        assert CalendarField.YEAR == 1
        assert CalendarField.FRACTIONAL_SECOND == 8
        assert CalendarField.MILLISECOND is CalendarField.FRACTIONAL_SECOND
        assert CalendarField.TIMEZONE == 17
        assert CalendarField.QUARTER == 27
        assert CalendarField.TIMEZONE_ISO_LOCAL == 33

    def test_pattern_char(self):
        """Test field to letter mapping in both directions."""
        assert CalendarField.YEAR.pattern_char == "y"
        assert CalendarField.STANDALONE_MONTH.pattern_char == "L"
        assert CalendarField.from_pattern_char("x") is CalendarField.TIMEZONE_ISO_LOCAL
        for index, char in enumerate(PATTERN_CHARS):
            assert CalendarField.from_pattern_char(char) == index

    def test_unknown_pattern_char(self):
        """Test that non-pattern letters are rejected."""
        with pytest.raises(KeyError):
            CalendarField.from_pattern_char("b")
        with pytest.raises(KeyError):
            CalendarField.from_pattern_char("yy")

    def test_numeric_tokens(self):
        """Test which tokens render as numbers."""
        assert is_numeric_token(CalendarField.YEAR, 4)
        assert is_numeric_token(CalendarField.MONTH, 2)
        assert not is_numeric_token(CalendarField.MONTH, 3)
        assert not is_numeric_token(CalendarField.DAY_OF_WEEK, 1)
        assert not is_numeric_token(CalendarField.TIMEZONE, 1)


# =============================================================================
# Field Registry
# =============================================================================


class TestFieldRegistry:
    """Test lookups between calendar field ids and Field attributes."""

    def test_singleton_round_trip(self):
        """Test that by-name lookup returns the by-id instance."""
        for calendar_field in range(FIELD_COUNT):
            field = field_of_calendar_field(calendar_field)
            if field is None:
                continue
            assert field_by_name(field.name) is field
            assert field.calendar_field == calendar_field

    @pytest.mark.parametrize("calendar_field", [-1, 34, 100])
    def test_out_of_range(self, calendar_field: int):
        """Test that ids outside [0, 34) fail."""
        with pytest.raises(FieldOutOfRangeError):
            field_of_calendar_field(calendar_field)

    def test_out_of_range_is_index_error(self):
        """Test that range errors are IndexErrors."""
        with pytest.raises(IndexError):
            field_of_calendar_field(-1)

    @pytest.mark.parametrize("calendar_field", [
        CalendarField.HOUR_OF_DAY1,
        CalendarField.HOUR1,
        CalendarField.TIMEZONE,
        CalendarField.QUARTER,
    ])
    def test_unoccupied_slot(self, calendar_field: CalendarField):
        """Test that fields without an attribute map to None."""
        assert field_of_calendar_field(calendar_field) is None

    def test_indexes_agree(self):
        """Test that the id and name indexes never disagree."""
        registry = get_field_registry()
        for field in registry:
            assert registry.by_name(field.name) is field
            if field.calendar_field >= 0:
                assert registry.by_calendar_field(field.calendar_field) is field

    def test_standard_fields(self):
        """Test the registered standard fields."""
        registry = get_field_registry()
        assert len(registry) == 24
        assert Field.YEAR.calendar_field == CalendarField.YEAR
        assert Field.DAY_OF_MONTH.calendar_field == CalendarField.DATE
        assert Field.MILLISECOND.calendar_field == CalendarField.MILLISECOND
        assert Field.HOUR_OF_DAY1.calendar_field == -1
        assert Field.HOUR1.calendar_field == -1
        assert Field.TIME_ZONE.calendar_field == -1
        assert Field.QUARTER.calendar_field == -1
        assert "Julian day" in registry

    def test_unknown_name(self):
        """Test that unknown names fail with UnknownAttributeError."""
        with pytest.raises(UnknownAttributeError) as exc_info:
            field_by_name("fortnight")
        assert isinstance(exc_info.value, KeyError)
        assert "fortnight" in str(exc_info.value)

    def test_duplicate_registration(self):
        """Test that registering a name twice fails."""
        registry = FieldRegistry()
        registry.register_standard_field("year", 1)
        with pytest.raises(DuplicateFieldError):
            registry.register_standard_field("year", 1)

    def test_initialize_is_idempotent(self):
        """Test that initialization runs once."""
        assert initialize() is get_field_registry()
        assert Field.YEAR is field_by_name("year")

    def test_small_registry(self):
        """Test a registry sized for a smaller calendar system."""
        registry = FieldRegistry(field_count=4)
        era = registry.register_standard_field("era", 0)
        registry.register_standard_field("quarter", 27)
        assert registry.by_calendar_field(0) is era
        assert registry.by_name("quarter").calendar_field == 27
        with pytest.raises(FieldOutOfRangeError):
            registry.by_calendar_field(4)


# =============================================================================
# Field Identity
# =============================================================================


class TestFieldIdentity:
    """Test that duplicated Field values resolve to the registered instance."""

    def test_copy(self):
        """Test shallow and deep copies."""
        assert copy.copy(Field.YEAR) is Field.YEAR
        assert copy.deepcopy(Field.MONTH) is Field.MONTH
        assert copy.deepcopy({"f": Field.ERA})["f"] is Field.ERA

    def test_pickle(self):
        """Test that unpickling restores the singleton."""
        for field in get_field_registry():
            assert pickle.loads(pickle.dumps(field)) is field

    def test_value_equality_and_resolve(self):
        """Test that a detached value equals and resolves to the instance."""
        detached = Field("day of week", CalendarField.DAY_OF_WEEK)
        assert detached is not Field.DAY_OF_WEEK
        assert detached == Field.DAY_OF_WEEK
        assert hash(detached) == hash(Field.DAY_OF_WEEK)
        assert detached.resolve() is Field.DAY_OF_WEEK

    def test_resolve_unknown(self):
        """Test that resolving an unregistered value fails."""
        with pytest.raises(UnknownAttributeError):
            Field("lunar phase").resolve()

    def test_pattern_attributes(self):
        """Test the attribute annotating each pattern letter."""
        assert attribute_for_pattern_field(CalendarField.YEAR) is Field.YEAR
        assert attribute_for_pattern_field(CalendarField.STANDALONE_MONTH) is Field.MONTH
        assert attribute_for_pattern_field(CalendarField.HOUR_OF_DAY1) is Field.HOUR_OF_DAY1
        assert attribute_for_pattern_field(CalendarField.TIMEZONE_ISO) is Field.TIME_ZONE
        for char in PATTERN_CHARS:
            assert attribute_for_pattern_field(CalendarField.from_pattern_char(char))
