from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.cancellation import CancellationToken
from .model import Event


class EventRepository(Protocol):
    def create_table_if_not_exists(self, *, cancellation: Optional[CancellationToken] = None) -> None:
        raise NotImplementedError

    def list_all(
        self,
        include_historic: bool = False,
        *,
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Sequence[Event]:
        """Events ordered by start.

        Unless ``include_historic`` is set, events whose end is at or before
        the start of ``now``'s date are left out.
        """

        raise NotImplementedError

    def get_by_id(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> Optional[Event]:
        raise NotImplementedError

    def exists(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def create(self, event: Event, *, cancellation: Optional[CancellationToken] = None) -> Event:
        raise NotImplementedError

    def update(self, event: Event, *, cancellation: Optional[CancellationToken] = None) -> Event:
        raise NotImplementedError

    def delete(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        raise NotImplementedError
