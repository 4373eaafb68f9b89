from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class Event:
    """Domain entity: Event.

    ``maximum_capacity`` of None means any number of employees can attend.
    Start and end are None only on form-built candidates whose value was
    missing; stored events always have both.
    """

    event_id: Optional[int]
    description: str
    start_datetime: Optional[datetime]
    end_datetime: Optional[datetime]
    maximum_capacity: Optional[int] = None


@dataclass(frozen=True)
class EventList:
    """Read-model for the event list page."""

    events: Sequence[Event]
    is_showing_historic_events: bool


EVENT_LABELS = {
    "description": "Description",
    "start_datetime": "Event Start",
    "end_datetime": "Event Finish",
    "maximum_capacity": "Maximum Capacity",
}
