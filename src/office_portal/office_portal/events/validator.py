from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import ValidationResult, check_text, require_present
from ..core.constants import MAX_SQLITE_INTEGER, MAX_TEXT_LENGTH
from .model import EVENT_LABELS, Event


def validate_event(event: Event, *, now: Optional[datetime] = None) -> ValidationResult:
    now = now or now_local()
    result = ValidationResult()

    result.add("description", check_text(event.description, EVENT_LABELS["description"], MAX_TEXT_LENGTH))

    missing = require_present(event.start_datetime, EVENT_LABELS["start_datetime"])
    if missing:
        result.add("start_datetime", missing)
    elif not event.start_datetime > now:
        result.add("start_datetime", "The Event start date must be in the future.")

    missing = require_present(event.end_datetime, EVENT_LABELS["end_datetime"])
    if missing:
        result.add("end_datetime", missing)
    elif event.start_datetime is not None and not event.end_datetime > event.start_datetime:
        result.add("end_datetime", "The Event end date must be after the start date.")

    if event.maximum_capacity is not None and not event.maximum_capacity > 0:
        result.add(
            "maximum_capacity",
            "The maximum capacity must be greater than 0. Leave this empty if there is no limit.",
        )
    elif event.maximum_capacity is not None and event.maximum_capacity > MAX_SQLITE_INTEGER:
        result.add(
            "maximum_capacity",
            f"The maximum capacity must be {MAX_SQLITE_INTEGER} or less. Leave this empty if there is no limit.",
        )

    return result
