"""Test fixtures."""

from collections.abc import Generator
import datetime
from unittest.mock import patch

import pytest

from icalgen.calendar import Calendar
from icalgen.event import Event

PRODID = "-//example//1.2.3"


@pytest.fixture(autouse=True)
def mock_prodid() -> Generator[None, None, None]:
    """Mock out the prodid used in tests."""
    with patch("icalgen.calendar.prodid_factory", return_value=PRODID):
        yield


@pytest.fixture(name="calendar")
def mock_calendar() -> Calendar:
    """Fixture calendar without a timezone."""
    return Calendar()


@pytest.fixture(name="event")
def mock_event(calendar: Calendar) -> Event:
    """Fixture event used as the parent of sub-entities."""
    return calendar.create_event(
        {
            "id": "event-uid",
            "summary": "Event summary",
            "start": datetime.datetime(2022, 8, 29, 9, 0, tzinfo=datetime.UTC),
            "stamp": datetime.datetime(2022, 8, 29, 8, 0, tzinfo=datetime.UTC),
        }
    )
