from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.cancellation import CancellationToken
from ..common.datetime_utils import now_local
from ..common.validators import FieldError, merge_errors
from ..core.constants import UPCOMING_EVENT_DAYS
from ..core.exceptions import NotFoundError, ValidationError
from .model import Event, EventList
from .repository import EventRepository
from .validator import validate_event

logger = logging.getLogger(__name__)


class EventService:
    """Use cases: list, view, create, edit and delete events."""

    def __init__(self, events: EventRepository):
        self._events = events

    def list(
        self,
        *,
        include_historic: bool = False,
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> EventList:
        events = self._events.list_all(include_historic, now=now, cancellation=cancellation)
        return EventList(events=events, is_showing_historic_events=include_historic)

    def list_upcoming(
        self,
        *,
        now: Optional[datetime] = None,
        days: int = UPCOMING_EVENT_DAYS,
        cancellation: Optional[CancellationToken] = None,
    ) -> Sequence[Event]:
        """Events starting between ``now`` and ``now + days`` (both inclusive)."""

        now = now or now_local()
        horizon = now + timedelta(days=days)
        events = self._events.list_all(False, now=now, cancellation=cancellation)
        return [e for e in events if now <= e.start_datetime <= horizon]

    def get(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> Event:
        if not self._events.exists(event_id, cancellation=cancellation):
            raise NotFoundError(f"Event {event_id} not found")

        event = self._events.get_by_id(event_id, cancellation=cancellation)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event

    def _check(self, candidate: Event, now: Optional[datetime], parse_errors: Sequence[FieldError]) -> None:
        result = validate_event(candidate, now=now)
        errors = merge_errors(parse_errors, result.errors)
        if errors:
            raise ValidationError(errors)

    def create(
        self,
        candidate: Event,
        *,
        parse_errors: Sequence[FieldError] = (),
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Event:
        self._check(candidate, now, parse_errors)

        created = self._events.create(replace(candidate, event_id=None), cancellation=cancellation)
        logger.info("Event %s created", created.event_id)
        return created

    def update(
        self,
        event_id: int,
        candidate: Event,
        *,
        parse_errors: Sequence[FieldError] = (),
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Event:
        self._check(candidate, now, parse_errors)

        if not self._events.exists(event_id, cancellation=cancellation):
            raise NotFoundError(f"Event {event_id} not found")

        updated = self._events.update(replace(candidate, event_id=int(event_id)), cancellation=cancellation)
        logger.info("Event %s updated", updated.event_id)
        return updated

    def delete(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        if not self._events.exists(event_id, cancellation=cancellation):
            raise NotFoundError(f"Event {event_id} not found")

        self._events.delete(event_id, cancellation=cancellation)
        logger.info("Event %s deleted", event_id)
