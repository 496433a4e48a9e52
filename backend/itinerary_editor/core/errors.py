# backend/itinerary_editor/core/errors.py

from typing import Optional


# Status used when the request never produced an HTTP response
NETWORK_ERROR_STATUS = -1


class BackendError(Exception):
    """A Backend API call failed with a non-success status (or never got one)."""

    def __init__(self, status: int, body: Optional[str] = None, action: str = ""):
        self.status = status
        self.body = body
        self.action = action
        super().__init__(f"{action or 'request'} failed with status {status}")

    @property
    def unauthorized(self) -> bool:
        return self.status == 401

    @property
    def network(self) -> bool:
        return self.status == NETWORK_ERROR_STATUS
