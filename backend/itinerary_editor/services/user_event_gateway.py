# backend/itinerary_editor/services/user_event_gateway.py

from typing import Any, Dict, Optional

from pydantic import ValidationError

from itinerary_editor.core.errors import BackendError
from itinerary_editor.core.logger import logger
from itinerary_editor.models.itinerary_models import Event, SearchEventRequest, UserEventRequest
from itinerary_editor.models.session_models import POOL_SLOT, SearchOutcome, SearchResult
from itinerary_editor.services.notifier import report_failure


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "form"
    if first.get("type") == "missing":
        return f"{field.replace('_', ' ').capitalize()} is required."
    return f"Invalid {field.replace('_', ' ')}: {first.get('msg')}"


def search_caption(outcome: SearchOutcome, available: int) -> str:
    if outcome == SearchOutcome.NO_MATCHES:
        return "No events matched your search."
    if outcome == SearchOutcome.ALL_PRESENT:
        return "All matching events are already in your unassigned events."
    return f"{available} event{'s' if available != 1 else ''} found. Select events to add."


class UserEventGateway:
    """
    Create / update / search / delete for user-authored events.
    New and found events only ever enter the pool, never a block.
    """

    def __init__(self, session, client, notifier, navigator):
        self.session = session
        self.client = client
        self.notifier = notifier
        self.navigator = navigator
        self.search_hits: Dict[int, Event] = {}

    # -------------------------------------------------------
    # CREATE
    # -------------------------------------------------------
    def create(self, fields: Dict[str, Any]) -> Optional[Event]:
        fields = {k: v for k, v in fields.items() if k != "id"}
        try:
            request = UserEventRequest.model_validate(fields)
        except ValidationError as e:
            self.notifier.error(_validation_message(e))
            return None

        try:
            response = self.client.upsert_user_event(request)
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to create event")
            return None

        event = Event(**request.to_payload(), id=response.id, user_created=True)

        working = self.session.working
        working.insert_into_slot(working.selected_day, POOL_SLOT, event)
        self.session.mark_dirty()
        logger.info(f"Created user event {event.id} '{event.event_name}'")
        return event

    # -------------------------------------------------------
    # UPDATE
    # -------------------------------------------------------
    def update(self, event: Event, fields: Dict[str, Any]) -> Optional[Event]:
        if not event.user_created:
            self.notifier.error("Only events you created can be edited.")
            return None

        try:
            request = UserEventRequest.model_validate({**fields, "id": event.id})
        except ValidationError as e:
            self.notifier.error(_validation_message(e))
            return None

        try:
            self.client.upsert_user_event(request)
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to update event")
            return None

        updated = Event(**request.to_payload(), user_created=True)
        if self.session.working.replace_event(updated):
            self.session.mark_dirty()
        logger.info(f"Updated user event {updated.id}")
        return updated

    # -------------------------------------------------------
    # SEARCH
    # -------------------------------------------------------
    def search(self, filters: Dict[str, Any]) -> Optional[SearchResult]:
        try:
            query = SearchEventRequest.model_validate(filters)
        except ValidationError as e:
            self.notifier.error(_validation_message(e))
            return None

        try:
            found = self.client.search_events(query)
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to search events")
            return None

        pooled = {e.id for e in self.session.working.unassigned}
        candidates = [e for e in found if e.id not in pooled]
        self.search_hits = {e.id: e for e in candidates if e.id is not None}

        if not found:
            outcome = SearchOutcome.NO_MATCHES
        elif not candidates:
            outcome = SearchOutcome.ALL_PRESENT
        else:
            outcome = SearchOutcome.AVAILABLE

        logger.debug(f"Search matched {len(found)} events, {len(candidates)} not pooled")
        return SearchResult(
            outcome=outcome,
            caption=search_caption(outcome, len(candidates)),
            events=candidates,
            total_matches=len(found),
        )

    def add_to_pool(self, event_id: int) -> bool:
        """
        Adds a hit from the last search to the pool, as the backend returned it.
        Ids not in that result, or already scheduled somewhere, are refused.
        """
        hit = self.search_hits.get(event_id)
        if hit is None:
            self.notifier.error("That event is not among the current search results.")
            return False

        working = self.session.working
        if working.locate(event_id):
            self.notifier.error(f'"{hit.event_name}" is already in this itinerary.')
            return False

        working.insert_into_slot(working.selected_day, POOL_SLOT, hit.model_copy())
        self.session.mark_dirty()
        return True

    # -------------------------------------------------------
    # DELETE
    # -------------------------------------------------------
    def delete(self, event: Event) -> bool:
        if not event.user_created:
            self.notifier.error("Only events you created can be deleted.")
            return False

        try:
            self.client.delete_user_event(event.id)
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to delete event")
            return False

        if self.session.working.remove_everywhere(event.id):
            self.session.mark_dirty()
        logger.info(f"Deleted user event {event.id}")
        return True
