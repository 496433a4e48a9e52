# backend/itinerary_editor/services/schedule_model.py

from typing import List, Optional, Tuple

from itinerary_editor.models.itinerary_models import Event, EventDay, Itinerary
from itinerary_editor.models.session_models import POOL_SLOT, Day, ItineraryMeta, TimeBlock
from itinerary_editor.utils.time_utils import AFTERNOON, BLOCK_NAMES, EVENING, MORNING, dates_between


class ScheduleModel:
    """
    Days (each with Morning/Afternoon/Evening) plus the itinerary-wide
    unassigned pool. Slots are addressed as (day_index, slot) where slot is a
    block index or POOL_SLOT.
    """

    def __init__(self, days: List[Day], unassigned: List[Event], selected_day: int = 0):
        self.days = days
        self.unassigned = unassigned
        self.selected_day = selected_day

    # -----------------------------------------------------------
    # Wire conversion
    # -----------------------------------------------------------
    @classmethod
    def from_itinerary(cls, itinerary: Itinerary) -> "ScheduleModel":
        if itinerary.event_days:
            days = [
                Day(date=d.date, blocks=[
                    TimeBlock(name=MORNING, events=list(d.morning_events)),
                    TimeBlock(name=AFTERNOON, events=list(d.afternoon_events)),
                    TimeBlock(name=EVENING, events=list(d.evening_events)),
                ])
                for d in itinerary.event_days
            ]
        else:
            days = [Day(date=d) for d in dates_between(itinerary.start_date, itinerary.end_date)]

        model = cls(days=days, unassigned=list(itinerary.unassigned_events))
        return model.clone()

    def to_itinerary(self, meta: ItineraryMeta) -> Itinerary:
        event_days = []
        for day in self.days:
            by_name = {block.name: block.events for block in day.blocks}
            event_days.append(EventDay(
                date=day.date,
                morning_events=[e.model_copy() for e in by_name.get(MORNING, [])],
                afternoon_events=[e.model_copy() for e in by_name.get(AFTERNOON, [])],
                evening_events=[e.model_copy() for e in by_name.get(EVENING, [])],
            ))

        return Itinerary(
            id=meta.id,
            title=meta.title,
            start_date=meta.start_date,
            end_date=meta.end_date,
            chat_session_id=meta.chat_session_id,
            event_days=event_days,
            unassigned_events=[e.model_copy() for e in self.unassigned],
        )

    def clone(self) -> "ScheduleModel":
        """Structural copy; nothing is shared with the source."""
        return ScheduleModel(
            days=[day.model_copy(deep=True) for day in self.days],
            unassigned=[e.model_copy(deep=True) for e in self.unassigned],
            selected_day=self.selected_day,
        )

    # -----------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------
    @property
    def current_day(self) -> Optional[Day]:
        if 0 <= self.selected_day < len(self.days):
            return self.days[self.selected_day]
        return None

    def select_day(self, index: int) -> bool:
        if not 0 <= index < len(self.days):
            return False
        self.selected_day = index
        return True

    def _slot(self, day_index: int, slot: int) -> List[Event]:
        if slot == POOL_SLOT:
            return self.unassigned
        if not 0 <= slot < len(BLOCK_NAMES):
            raise IndexError(f"Invalid slot {slot}")
        return self.days[day_index].blocks[slot].events

    # -----------------------------------------------------------
    # Primitive mutations
    # -----------------------------------------------------------
    def remove_from_slot(self, day_index: int, slot: int, event_id: int) -> Optional[Event]:
        events = self._slot(day_index, slot)
        for i, event in enumerate(events):
            if event.id == event_id:
                return events.pop(i)
        return None

    def insert_into_slot(self, day_index: int, slot: int, event: Event,
                         position: Optional[int] = None) -> bool:
        events = self._slot(day_index, slot)
        if any(e.id == event.id for e in events):
            return False

        if position is None or position >= len(events):
            events.append(event)
        else:
            events.insert(max(position, 0), event)
        return True

    # -----------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------
    def find_event(self, event_id: int) -> Optional[Event]:
        """Selected day's blocks first, then the pool."""
        day = self.current_day
        if day is not None:
            for block in day.blocks:
                for event in block.events:
                    if event.id == event_id:
                        return event

        for event in self.unassigned:
            if event.id == event_id:
                return event
        return None

    def locate(self, event_id: int) -> List[Tuple[int, int]]:
        """Every (day_index, slot) holding the id, across all days and the pool."""
        found = []
        for day_index, day in enumerate(self.days):
            for slot, block in enumerate(day.blocks):
                if any(e.id == event_id for e in block.events):
                    found.append((day_index, slot))
        if any(e.id == event_id for e in self.unassigned):
            found.append((self.selected_day, POOL_SLOT))
        return found

    def remove_everywhere(self, event_id: int) -> int:
        removed = 0
        for day_index, slot in self.locate(event_id):
            if self.remove_from_slot(day_index, slot, event_id) is not None:
                removed += 1
        return removed

    def replace_event(self, event: Event) -> int:
        """Swap in an updated copy wherever the id currently sits."""
        replaced = 0
        slots = [block.events for day in self.days for block in day.blocks] + [self.unassigned]
        for events in slots:
            for i, existing in enumerate(events):
                if existing.id == event.id:
                    events[i] = event.model_copy()
                    replaced += 1
        return replaced

    def snapshot_view(self) -> dict:
        """Plain structure used for equality checks and logging."""
        return {
            "days": [day.model_dump() for day in self.days],
            "unassigned": [e.model_dump() for e in self.unassigned],
        }
