"""Shared fixtures for datefmt tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from datefmt.calendar import GregorianCalendar
from datefmt.config import DateFormatConfig, reset_config, set_config


@pytest.fixture(autouse=True)
def fixed_config():
    """Pin configuration so tests do not depend on the host environment."""
    config = DateFormatConfig(default_locale="en_US", default_time_zone="UTC")
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def moment() -> datetime:
    """Tuesday, 2024-03-05 14:07:09.123 UTC."""
    return datetime(2024, 3, 5, 14, 7, 9, 123000, tzinfo=timezone.utc)


@pytest.fixture
def utc_calendar(moment: datetime) -> GregorianCalendar:
    """en_US Gregorian calendar in UTC set to ``moment``."""
    cal = GregorianCalendar("UTC", "en_US")
    cal.set_time(moment)
    return cal
