# backend/itinerary_editor/db/session_store.py

import threading
from typing import Callable, Dict, List, Optional

from itinerary_editor.core.logger import logger
from itinerary_editor.services.backend_client import BackendClient
from itinerary_editor.services.drag_move_engine import DragMoveEngine
from itinerary_editor.services.edit_session import EditSession
from itinerary_editor.services.notifier import BufferedNavigator, BufferedNotifier
from itinerary_editor.services.user_event_gateway import UserEventGateway


class EditorHandle:
    """Everything one open itinerary needs, wired to the same notifier/navigator."""

    def __init__(self, session: EditSession, notifier: BufferedNotifier, navigator: BufferedNavigator):
        self.session = session
        self.notifier = notifier
        self.navigator = navigator
        # Requests for one itinerary run one at a time; the notifier buffer is shared.
        self.lock = threading.RLock()
        self.engine = DragMoveEngine(session, notifier)
        self.gateway = UserEventGateway(session, session.client, notifier, navigator)


class SessionStore:
    """
    In-process registry of live edit sessions, one per itinerary.
    Opening an itinerary again replaces its previous session.
    """

    def __init__(self, client_factory: Callable[[], object] = BackendClient):
        self.client_factory = client_factory
        self._handles: Dict[int, EditorHandle] = {}
        self._lock = threading.Lock()

    def client(self):
        return self.client_factory()

    def open(self, itinerary_id: int, notifier: BufferedNotifier,
             navigator: BufferedNavigator) -> Optional[EditorHandle]:
        session = EditSession.load(itinerary_id, self.client(), notifier, navigator)
        if session is None:
            return None

        handle = EditorHandle(session, notifier, navigator)
        with self._lock:
            if itinerary_id in self._handles:
                logger.info(f"Replacing open session for itinerary {itinerary_id}")
            self._handles[itinerary_id] = handle
        return handle

    def get(self, itinerary_id: int) -> Optional[EditorHandle]:
        with self._lock:
            return self._handles.get(itinerary_id)

    def close(self, itinerary_id: int) -> bool:
        with self._lock:
            return self._handles.pop(itinerary_id, None) is not None

    def rekey(self, old_id: int, new_id: int) -> None:
        if old_id == new_id:
            return
        with self._lock:
            handle = self._handles.pop(old_id, None)
            if handle is not None:
                self._handles[new_id] = handle

    def open_ids(self) -> List[int]:
        with self._lock:
            return sorted(self._handles)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()


store = SessionStore()
