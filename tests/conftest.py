# tests/conftest.py

import os
import tempfile

# Settings are read on first import; keep test logs out of the source tree.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="itinerary-editor-logs-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("AUTH_TOKEN", None)

import pytest

from itinerary_editor.core.errors import BackendError
from itinerary_editor.models.itinerary_models import (
    Event,
    EventDay,
    Itinerary,
    SaveResponse,
    UserEventResponse,
)
from itinerary_editor.services.edit_session import EditSession
from itinerary_editor.services.notifier import BufferedNavigator, BufferedNotifier


class FakeBackend:
    """In-memory stand-in for BackendClient with per-call failure injection."""

    def __init__(self, itineraries=None, catalog=None):
        self.itineraries = {it.id: it for it in (itineraries or [])}
        self.catalog = list(catalog or [])
        self.failures = {}
        self.calls = []
        self.next_event_id = 500
        self.next_itinerary_id = 900

    def fail(self, method, status, body="boom"):
        self.failures[method] = (status, body)

    def _check(self, method, *args):
        self.calls.append((method, args))
        if method in self.failures:
            status, body = self.failures[method]
            raise BackendError(status, body, method)

    def fetch_itinerary(self, itinerary_id):
        self._check("fetch_itinerary", itinerary_id)
        if itinerary_id not in self.itineraries:
            raise BackendError(404, "not found", "fetch itinerary")
        return self.itineraries[itinerary_id].model_copy(deep=True)

    def save_itinerary(self, itinerary):
        self._check("save_itinerary", itinerary)
        new_id = itinerary.id
        if new_id == 0:
            new_id = self.next_itinerary_id
            self.next_itinerary_id += 1
        self.itineraries[new_id] = itinerary.model_copy(update={"id": new_id}, deep=True)
        return SaveResponse(id=new_id)

    def saved_itineraries(self):
        self._check("saved_itineraries")
        return list(self.itineraries.values())

    def unsave_itinerary(self, itinerary_id):
        self._check("unsave_itinerary", itinerary_id)
        self.itineraries.pop(itinerary_id, None)

    def upsert_user_event(self, request):
        self._check("upsert_user_event", request)
        if request.id is not None:
            return UserEventResponse(id=request.id)
        new_id = self.next_event_id
        self.next_event_id += 1
        return UserEventResponse(id=new_id)

    def search_events(self, query):
        self._check("search_events", query)
        return [e.model_copy() for e in self.catalog]

    def delete_user_event(self, event_id):
        self._check("delete_user_event", event_id)


def make_event(event_id, name, **kwargs):
    return Event(id=event_id, event_name=name, **kwargs)


@pytest.fixture
def concert():
    return make_event(3, "Concert", hard_start="2025-01-01T19:00:00Z", event_type="music")


@pytest.fixture
def itinerary(concert):
    return Itinerary(
        id=42,
        title="Lisbon, Jan 1 - Jan 2",
        start_date="2025-01-01",
        end_date="2025-01-02",
        chat_session_id=7,
        event_days=[
            EventDay(
                date="2025-01-01",
                morning_events=[make_event(1, "Breakfast")],
                afternoon_events=[make_event(2, "Museum", city="Lisbon")],
                evening_events=[],
            ),
            EventDay(
                date="2025-01-02",
                morning_events=[make_event(4, "Market")],
            ),
        ],
        unassigned_events=[
            concert,
            make_event(5, "My picnic", user_created=True),
        ],
    )


@pytest.fixture
def backend(itinerary):
    return FakeBackend(itineraries=[itinerary])


@pytest.fixture
def notifier():
    return BufferedNotifier()


@pytest.fixture
def navigator():
    return BufferedNavigator()


@pytest.fixture
def session(itinerary, backend, notifier, navigator):
    return EditSession.from_itinerary(itinerary, backend, notifier, navigator)


def slot_ids(schedule, day_index, slot):
    if slot == -1:
        return [e.id for e in schedule.unassigned]
    return [e.id for e in schedule.days[day_index].blocks[slot].events]
