# backend/itinerary_editor/services/drag_move_engine.py

from typing import Optional

from itinerary_editor.core.logger import logger
from itinerary_editor.models.itinerary_models import Event
from itinerary_editor.models.session_models import MoveCommand, MoveResult, MoveState, POOL_SLOT
from itinerary_editor.services.constraint_validator import can_drop, drop_error_message
from itinerary_editor.utils.time_utils import BLOCK_NAMES


class DragMoveEngine:
    """
    Runs one drag-and-drop at a time against the session's working schedule:

        Idle -> PayloadReceived -> Validated -> Applied
                                 \\-> Rejected (no mutation)

    Only the selected day and the pool are addressable. Moving an event to
    another day means unassigning it, switching day, then assigning it.
    """

    def __init__(self, session, notifier):
        self.session = session
        self.notifier = notifier
        self.state = MoveState.IDLE

    # -----------------------------------------------------------
    # Drag start
    # -----------------------------------------------------------
    @staticmethod
    def begin_drag(event: Event, source_slot: int) -> MoveCommand:
        return MoveCommand(
            event_id=event.id,
            event_name=event.event_name,
            event_description=event.event_description,
            source_slot=source_slot,
        )

    # -----------------------------------------------------------
    # Drop
    # -----------------------------------------------------------
    def _resolve(self, command: MoveCommand):
        event = self.session.working.find_event(command.event_id)
        if event is not None:
            return event, False

        logger.warning(f"Event {command.event_id} not found for drop, using payload fallback")
        fallback = Event(
            id=command.event_id,
            event_name=command.event_name,
            event_description=command.event_description,
        )
        return fallback, True

    def drop(self, command: MoveCommand, target_slot: int,
             target_position: Optional[int] = None) -> MoveResult:
        working = self.session.working
        day = working.current_day

        self.state = MoveState.PAYLOAD_RECEIVED
        event, used_fallback = self._resolve(command)

        for slot in (command.source_slot, target_slot):
            if slot != POOL_SLOT and not 0 <= slot < len(BLOCK_NAMES):
                return self._reject(event, f"Unknown slot {slot}.", used_fallback)
        if day is None:
            return self._reject(event, "There is no day to place events in.", used_fallback)

        target_block = None if target_slot == POOL_SLOT else BLOCK_NAMES[target_slot]
        if not can_drop(event, target_block, day.date, target_slot):
            return self._reject(event, drop_error_message(event), used_fallback)
        self.state = MoveState.VALIDATED

        day_index = working.selected_day
        if working.remove_from_slot(day_index, command.source_slot, command.event_id) is None:
            self._detach(day_index, command.event_id)
        working.insert_into_slot(day_index, target_slot, event, target_position)

        self.session.mark_dirty()
        self.state = MoveState.APPLIED
        logger.info(
            f"Moved event {command.event_id} on {day.date}: "
            f"slot {command.source_slot} -> {target_slot}"
        )
        return MoveResult(state=self.state, event=event, used_fallback=used_fallback)

    def _detach(self, day_index: int, event_id: int) -> None:
        # Payload named the wrong source slot; pull the event from wherever it is today.
        working = self.session.working
        for slot in (*range(len(BLOCK_NAMES)), POOL_SLOT):
            if working.remove_from_slot(day_index, slot, event_id) is not None:
                logger.debug(f"Event {event_id} detached from slot {slot} instead of payload source")
                return

    def _reject(self, event: Event, message: str, used_fallback: bool) -> MoveResult:
        self.state = MoveState.REJECTED
        logger.info(f"Drop rejected for event {event.id}: {message}")
        self.notifier.error(message)
        return MoveResult(state=self.state, event=event, message=message, used_fallback=used_fallback)
