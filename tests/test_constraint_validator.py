# tests/test_constraint_validator.py

import itertools

import pytest

from itinerary_editor.models.itinerary_models import Event
from itinerary_editor.models.session_models import POOL_SLOT
from itinerary_editor.services.constraint_validator import can_drop, drop_error_message
from itinerary_editor.utils.time_utils import BLOCK_NAMES, block_of, date_of

HARD_STARTS = [
    "2025-01-01T08:00:00",
    "2025-01-01T12:00:00+01:00",
    "2025-01-01T19:00:00Z",
    "2025-01-02T02:15:00",
]
DATES = ["2025-01-01", "2025-01-02"]


@pytest.mark.parametrize("hard_start, block, date", list(itertools.product(HARD_STARTS, BLOCK_NAMES, DATES)))
def test_hard_start_event_fits_only_its_own_block_and_date(hard_start, block, date):
    event = Event(id=1, event_name="Fixed", hard_start=hard_start)
    slot = BLOCK_NAMES.index(block)
    expected = block_of(hard_start) == block and date_of(hard_start) == date
    assert can_drop(event, block, date, slot) is expected


@pytest.mark.parametrize("hard_start", HARD_STARTS + [None, "garbage"])
def test_anything_can_go_back_to_the_pool(hard_start):
    event = Event(id=1, event_name="Any", hard_start=hard_start)
    for block, date in itertools.product(BLOCK_NAMES, DATES):
        assert can_drop(event, block, date, POOL_SLOT)


def test_flexible_event_goes_anywhere():
    event = Event(id=1, event_name="Walk")
    for slot, block in enumerate(BLOCK_NAMES):
        assert can_drop(event, block, "2030-06-06", slot)


def test_unreadable_hard_start_is_not_placeable_in_a_block():
    event = Event(id=1, event_name="Odd", hard_start="sometime")
    assert not can_drop(event, "Morning", "2025-01-01", 0)


def test_drop_error_message_names_block_and_date():
    event = Event(id=3, event_name="Concert", hard_start="2025-01-01T19:00:00Z")
    assert drop_error_message(event) == (
        '"Concert" has a fixed start time and must be placed in the Evening block on 2025-01-01.'
    )


def test_drop_error_message_is_none_for_flexible_events():
    assert drop_error_message(Event(id=1, event_name="Walk")) is None


def test_drop_error_message_for_unreadable_hard_start():
    message = drop_error_message(Event(id=1, event_name="Odd", hard_start="sometime"))
    assert message.startswith('"Odd" has a fixed start time')
