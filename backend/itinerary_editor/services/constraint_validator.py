# backend/itinerary_editor/services/constraint_validator.py

from typing import Optional

from itinerary_editor.models.itinerary_models import Event
from itinerary_editor.models.session_models import POOL_SLOT
from itinerary_editor.utils.time_utils import block_of, date_of


def can_drop(event: Event, target_block: Optional[str], target_date: str, target_slot: int) -> bool:
    """
    Whether `event` may land in (target_date, target_block).

    Events without a hard start go anywhere, and anything may go back to the
    pool. A hard-start event only fits the block and date its start falls in.
    """
    if not event.hard_start:
        return True
    if target_slot == POOL_SLOT:
        return True
    return block_of(event.hard_start) == target_block and date_of(event.hard_start) == target_date


def drop_error_message(event: Event) -> Optional[str]:
    if not event.hard_start:
        return None

    block = block_of(event.hard_start)
    if block is None:
        return (f'"{event.event_name}" has a fixed start time that could not be read, '
                f'so it can only stay in the unassigned events.')

    return (f'"{event.event_name}" has a fixed start time and must be placed in the '
            f'{block} block on {date_of(event.hard_start)}.')
