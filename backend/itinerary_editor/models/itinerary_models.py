# backend/itinerary_editor/models/itinerary_models.py

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from itinerary_editor.utils.time_utils import parse_timestamp


# ----------------------------------------------------------
# EVENT (wire shape shared by fetch / save / search)
# ----------------------------------------------------------
class Event(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None               # None until the server assigns one
    event_name: str = ""
    event_description: Optional[str] = None
    event_type: Optional[str] = None

    street_address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[int] = None

    user_created: bool = False

    hard_start: Optional[str] = None       # ISO-8601, offset optional
    hard_end: Optional[str] = None
    timezone: Optional[str] = None         # display hint only


# ----------------------------------------------------------
# ONE DAY OF THE ITINERARY
# ----------------------------------------------------------
class EventDay(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: str
    morning_events: List[Event] = Field(default_factory=list)
    afternoon_events: List[Event] = Field(default_factory=list)
    evening_events: List[Event] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fold_noon_events(cls, data: Any) -> Any:
        # Older payloads carry a fourth bucket; noon sits inside the afternoon window.
        if isinstance(data, dict) and data.get("noon_events"):
            data = dict(data)
            noon = data.pop("noon_events")
            data["afternoon_events"] = list(noon) + list(data.get("afternoon_events") or [])
        return data


# ----------------------------------------------------------
# ITINERARY
# ----------------------------------------------------------
class Itinerary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    start_date: str
    end_date: str
    chat_session_id: Optional[int] = None
    event_days: List[EventDay] = Field(default_factory=list)
    unassigned_events: List[Event] = Field(default_factory=list)


class SaveResponse(BaseModel):
    id: int


class UnsaveRequest(BaseModel):
    id: int


class SavedItinerariesResponse(BaseModel):
    itineraries: List[Itinerary] = Field(default_factory=list)


# ----------------------------------------------------------
# FORM INPUT (blank strings never reach the backend)
# ----------------------------------------------------------
class _FormModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_blank_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
            if value == "" or value is None:
                continue
            cleaned[key] = value
        return cleaned

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _check_timestamp(value: Optional[str]) -> Optional[str]:
    if value is not None and parse_timestamp(value) is None:
        raise ValueError("must be an ISO-8601 timestamp")
    return value


class UserEventRequest(_FormModel):
    """
    Insert (no id) or update (id set) a user-created event.
    Event name is always required.
    """
    id: Optional[int] = None
    event_name: str
    event_description: Optional[str] = None
    event_type: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[int] = None
    hard_start: Optional[str] = None
    hard_end: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("hard_start", "hard_end")
    @classmethod
    def timestamps_parse(cls, value: Optional[str]) -> Optional[str]:
        return _check_timestamp(value)


class UserEventResponse(BaseModel):
    id: int


class SearchEventRequest(_FormModel):
    id: Optional[int] = None
    event_name: Optional[str] = None
    event_description: Optional[str] = None
    event_type: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[int] = None
    hard_start_before: Optional[str] = None
    hard_start_after: Optional[str] = None
    hard_end_before: Optional[str] = None
    hard_end_after: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("hard_start_before", "hard_start_after", "hard_end_before", "hard_end_after")
    @classmethod
    def bounds_parse(cls, value: Optional[str]) -> Optional[str]:
        return _check_timestamp(value)


class SearchEventResponse(BaseModel):
    events: List[Event] = Field(default_factory=list)
