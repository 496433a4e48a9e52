# backend/itinerary_editor/services/itinerary_catalog.py

from typing import List, Optional

from itinerary_editor.core.errors import BackendError
from itinerary_editor.core.logger import logger
from itinerary_editor.models.itinerary_models import Itinerary
from itinerary_editor.services.notifier import report_failure


class ItineraryCatalog:
    """The user's saved itineraries, outside of any edit session."""

    def __init__(self, client, notifier, navigator):
        self.client = client
        self.notifier = notifier
        self.navigator = navigator

    def list_saved(self) -> Optional[List[Itinerary]]:
        try:
            itineraries = self.client.saved_itineraries()
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to load saved itineraries")
            return None
        logger.info(f"Loaded {len(itineraries)} saved itineraries")
        return itineraries

    def unsave(self, itinerary_id: int) -> bool:
        try:
            self.client.unsave_itinerary(itinerary_id)
        except BackendError as e:
            report_failure(e, self.notifier, self.navigator, "Failed to remove itinerary")
            return False
        self.notifier.success("Itinerary removed from your saved list.")
        return True
