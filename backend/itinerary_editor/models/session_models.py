# backend/itinerary_editor/models/session_models.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from itinerary_editor.models.itinerary_models import Event
from itinerary_editor.utils.time_utils import BLOCK_NAMES


# Slot index of the unassigned pool; 0..2 address the blocks of the selected day.
POOL_SLOT = -1


# ----------------------------------------------------------
# SCHEDULE STRUCTURE
# ----------------------------------------------------------
class TimeBlock(BaseModel):
    name: str
    events: List[Event] = Field(default_factory=list)


def _empty_blocks() -> List[TimeBlock]:
    return [TimeBlock(name=name) for name in BLOCK_NAMES]


class Day(BaseModel):
    date: str                                           # YYYY-MM-DD, destination-local
    blocks: List[TimeBlock] = Field(default_factory=_empty_blocks)


class ItineraryMeta(BaseModel):
    """Identity carried through a save untouched by editing."""
    id: int
    title: str = ""
    start_date: str
    end_date: str
    chat_session_id: Optional[int] = None


# ----------------------------------------------------------
# DRAG & DROP
# ----------------------------------------------------------
class MoveCommand(BaseModel):
    """Captured at drag start; the name/description let a stale drop still land."""
    model_config = ConfigDict(frozen=True)

    event_id: int
    event_name: str = ""
    event_description: Optional[str] = None
    source_slot: int = POOL_SLOT


class MoveState(str, Enum):
    IDLE = "idle"
    PAYLOAD_RECEIVED = "payload_received"
    VALIDATED = "validated"
    APPLIED = "applied"
    REJECTED = "rejected"


class MoveResult(BaseModel):
    state: MoveState
    event: Optional[Event] = None
    message: Optional[str] = None
    used_fallback: bool = False

    @property
    def applied(self) -> bool:
        return self.state == MoveState.APPLIED


# ----------------------------------------------------------
# SESSION
# ----------------------------------------------------------
class SessionState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"


# ----------------------------------------------------------
# SEARCH
# ----------------------------------------------------------
class SearchOutcome(str, Enum):
    NO_MATCHES = "no_matches"
    ALL_PRESENT = "all_present"
    AVAILABLE = "available"


class SearchResult(BaseModel):
    outcome: SearchOutcome
    caption: str
    events: List[Event] = Field(default_factory=list)   # only the ones not already pooled
    total_matches: int = 0


# ----------------------------------------------------------
# NOTIFICATIONS
# ----------------------------------------------------------
class Notification(BaseModel):
    level: str            # error | success
    message: str
