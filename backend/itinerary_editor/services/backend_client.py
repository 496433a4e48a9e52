# backend/itinerary_editor/services/backend_client.py

import requests
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from itinerary_editor.core.config_loader import settings
from itinerary_editor.core.errors import BackendError, NETWORK_ERROR_STATUS
from itinerary_editor.core.logger import logger
from itinerary_editor.models.itinerary_models import (
    Event,
    Itinerary,
    SavedItinerariesResponse,
    SaveResponse,
    SearchEventRequest,
    SearchEventResponse,
    UnsaveRequest,
    UserEventRequest,
    UserEventResponse,
)

M = TypeVar("M", bound=BaseModel)


class BackendClient:
    """
    Request/response calls against the itinerary Backend API.

    Every method either returns the parsed body or raises BackendError;
    transport failures come back as status -1.
    """

    def __init__(self, base_url: Optional[str] = None, auth_token: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.http = requests.Session()

        token = auth_token if auth_token is not None else settings.AUTH_TOKEN
        if token:
            self.http.cookies.set("auth-token", token)

    # -------------------------------------------------------
    # LOW LEVEL
    # -------------------------------------------------------
    def _request(self, method: str, path: str, action: str,
                 payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url} ({action})")

        try:
            resp = self.http.request(method, url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error during {action}: {e}")
            raise BackendError(NETWORK_ERROR_STATUS, str(e), action) from e

        if not resp.ok:
            logger.error(f"HTTP {resp.status_code} during {action}: {resp.text}")
            raise BackendError(resp.status_code, resp.text, action)

        logger.info(f"{action} -> {resp.status_code}")
        return resp

    @staticmethod
    def _parse(resp: requests.Response, model: Type[M], action: str) -> M:
        # A 2xx with an unreadable body is still a failed call for the caller.
        try:
            return model.model_validate(resp.json())
        except ValueError as e:
            logger.error(f"Unreadable response during {action}: {e}")
            raise BackendError(resp.status_code, resp.text, action) from e

    # -------------------------------------------------------
    # ITINERARIES
    # -------------------------------------------------------
    def fetch_itinerary(self, itinerary_id: int) -> Itinerary:
        resp = self._request("GET", f"/api/itinerary/{itinerary_id}", "fetch itinerary")
        return self._parse(resp, Itinerary, "fetch itinerary")

    def save_itinerary(self, itinerary: Itinerary) -> SaveResponse:
        resp = self._request(
            "POST", "/api/itinerary/save", "save itinerary",
            payload=itinerary.model_dump(mode="json"),
        )
        return self._parse(resp, SaveResponse, "save itinerary")

    def saved_itineraries(self) -> List[Itinerary]:
        resp = self._request("GET", "/api/itinerary/saved", "list saved itineraries")
        return self._parse(resp, SavedItinerariesResponse, "list saved itineraries").itineraries

    def unsave_itinerary(self, itinerary_id: int) -> None:
        self._request(
            "POST", "/api/itinerary/unsave", "unsave itinerary",
            payload=UnsaveRequest(id=itinerary_id).model_dump(),
        )

    # -------------------------------------------------------
    # USER EVENTS
    # -------------------------------------------------------
    def upsert_user_event(self, request: UserEventRequest) -> UserEventResponse:
        """Inserts when request.id is None, otherwise updates that event."""
        resp = self._request(
            "POST", "/api/itinerary/userEvent", "save user event",
            payload=request.to_payload(),
        )
        return self._parse(resp, UserEventResponse, "save user event")

    def search_events(self, query: SearchEventRequest) -> List[Event]:
        resp = self._request(
            "POST", "/api/itinerary/searchEvent", "search events",
            payload=query.to_payload(),
        )
        return self._parse(resp, SearchEventResponse, "search events").events

    def delete_user_event(self, event_id: int) -> None:
        self._request("DELETE", f"/api/itinerary/userEvent/{event_id}", "delete user event")
