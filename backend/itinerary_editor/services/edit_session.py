# backend/itinerary_editor/services/edit_session.py

import threading
from typing import Optional

from itinerary_editor.core.errors import BackendError
from itinerary_editor.core.logger import logger
from itinerary_editor.models.itinerary_models import Itinerary
from itinerary_editor.models.session_models import ItineraryMeta, SessionState
from itinerary_editor.services.notifier import report_failure
from itinerary_editor.services.schedule_model import ScheduleModel


class EditSession:
    """
    Last-saved snapshot + the working copy the user edits.

    Clean -> Dirty -> Saving -> Clean      (save ok)
                      Saving -> Dirty      (save failed, working copy kept for retry)
             Dirty -> Clean                (cancel)
                      Saving -> Dirty      (saved, but edited while the request was out)

    A failed save never rolls the working copy back: the user either retries
    or cancels explicitly.
    """

    def __init__(self, meta: ItineraryMeta, schedule: ScheduleModel, client, notifier, navigator):
        self.meta = meta
        self.client = client
        self.notifier = notifier
        self.navigator = navigator

        self.snapshot = schedule.clone()
        self.working = schedule.clone()
        self.state = SessionState.CLEAN
        self._state_lock = threading.Lock()

    # -----------------------------------------------------------
    # Loading
    # -----------------------------------------------------------
    @classmethod
    def from_itinerary(cls, itinerary: Itinerary, client, notifier, navigator) -> "EditSession":
        meta = ItineraryMeta(
            id=itinerary.id,
            title=itinerary.title,
            start_date=itinerary.start_date,
            end_date=itinerary.end_date,
            chat_session_id=itinerary.chat_session_id,
        )
        return cls(meta, ScheduleModel.from_itinerary(itinerary), client, notifier, navigator)

    @classmethod
    def load(cls, itinerary_id: int, client, notifier, navigator) -> Optional["EditSession"]:
        try:
            itinerary = client.fetch_itinerary(itinerary_id)
        except BackendError as e:
            report_failure(e, notifier, navigator, "Failed to load itinerary")
            return None

        logger.info(f"Loaded itinerary {itinerary_id} with {len(itinerary.event_days)} days")
        return cls.from_itinerary(itinerary, client, notifier, navigator)

    # -----------------------------------------------------------
    # State
    # -----------------------------------------------------------
    @property
    def dirty(self) -> bool:
        return self.state != SessionState.CLEAN

    @property
    def saving(self) -> bool:
        return self.state == SessionState.SAVING

    def mark_dirty(self) -> None:
        # While saving, the post-save comparison decides.
        with self._state_lock:
            if self.state == SessionState.CLEAN:
                self.state = SessionState.DIRTY

    def select_day(self, index: int) -> bool:
        if not self.working.select_day(index):
            self.notifier.error(f"Day {index + 1} does not exist in this itinerary.")
            return False
        return True

    # -----------------------------------------------------------
    # Save / Cancel
    # -----------------------------------------------------------
    def save(self) -> bool:
        with self._state_lock:
            if self.saving:
                logger.warning(f"Save for itinerary {self.meta.id} ignored, one is already in flight")
                return False
            previous = self.state
            self.state = SessionState.SAVING
            sent = self.working.clone()

        try:
            result = self.client.save_itinerary(sent.to_itinerary(self.meta))
        except BackendError as e:
            self._settle(previous)
            report_failure(e, self.notifier, self.navigator, "Failed to save changes")
            return False
        except Exception:
            self._settle(previous)
            raise

        if result.id != self.meta.id:
            logger.info(f"Itinerary {self.meta.id} saved as {result.id}")
            self.meta = self.meta.model_copy(update={"id": result.id})

        # Only what was sent becomes the snapshot; edits made meanwhile stay pending.
        self.snapshot = sent
        self._settle(SessionState.CLEAN)
        if self.dirty:
            logger.info(f"Itinerary {self.meta.id} changed while saving, still has unsaved edits")
        self.notifier.success("Itinerary saved successfully!")
        return True

    def _settle(self, fallback: SessionState) -> None:
        with self._state_lock:
            if self.working.snapshot_view() != self.snapshot.snapshot_view():
                self.state = SessionState.DIRTY
            else:
                self.state = fallback

    def cancel(self) -> None:
        selected = self.working.selected_day
        self.working = self.snapshot.clone()
        self.working.select_day(selected)
        with self._state_lock:
            if not self.saving:
                self.state = SessionState.CLEAN
        logger.info(f"Discarded unsaved edits for itinerary {self.meta.id}")
