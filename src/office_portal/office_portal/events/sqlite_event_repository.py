from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.cancellation import CancellationToken
from ..common.datetime_utils import from_db_datetime, now_local, start_of_day, to_db_datetime
from ..core.exceptions import NotFoundError
from ..database.connection import ConnectionProvider
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "event_id, description, start_datetime, end_datetime, maximum_capacity"


def _to_event(row: Dict[str, Any]) -> Event:
    capacity = row.get("maximum_capacity")
    return Event(
        event_id=int(row["event_id"]),
        description=row["description"],
        start_datetime=from_db_datetime(row["start_datetime"]),
        end_datetime=from_db_datetime(row["end_datetime"]),
        maximum_capacity=int(capacity) if capacity is not None else None,
    )


def _params(event: Event) -> tuple:
    return (
        event.description,
        to_db_datetime(event.start_datetime),
        to_db_datetime(event.end_datetime),
        int(event.maximum_capacity) if event.maximum_capacity is not None else None,
    )


class SQLiteEventRepository(EventRepository):
    def __init__(self, provider: ConnectionProvider):
        self._provider = provider

    def create_table_if_not_exists(self, *, cancellation: Optional[CancellationToken] = None) -> None:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS events (
                    event_id         INTEGER PRIMARY KEY,
                    description      TEXT NOT NULL COLLATE NOCASE,
                    start_datetime   DATETIME NOT NULL,
                    end_datetime     DATETIME NOT NULL,
                    maximum_capacity INTEGER NULL
                )
                """
            )

    def list_all(
        self,
        include_historic: bool = False,
        *,
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Sequence[Event]:
        # Cut-off is midnight of the current date, taken from the application clock.
        cutoff = to_db_datetime(start_of_day(now or now_local()))

        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SELECT_COLUMNS}
                FROM events
                WHERE (? = 1 OR end_datetime > ?)
                ORDER BY start_datetime ASC, event_id ASC
                """,
                (1 if include_historic else 0, cutoff),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def get_by_id(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> Optional[Event]:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM events WHERE event_id=?", (int(event_id),))
            row = fetchone(cur)
            return _to_event(row) if row else None

    def exists(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute("SELECT EXISTS(SELECT 1 FROM events WHERE event_id=?) AS found", (int(event_id),))
            row = fetchone(cur)
            return bool(row and row["found"])

    def create(self, event: Event, *, cancellation: Optional[CancellationToken] = None) -> Event:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(description, start_datetime, end_datetime, maximum_capacity)
                VALUES(?,?,?,?)
                """,
                _params(event),
            )
            new_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM events WHERE event_id=?", (new_id,))
            created = _to_event(fetchone(cur))
        logger.debug("Created event %s", created.event_id)
        return created

    def update(self, event: Event, *, cancellation: Optional[CancellationToken] = None) -> Event:
        if event.event_id is None:
            raise ValueError("Cannot update an event without an id")

        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET description=?, start_datetime=?, end_datetime=?, maximum_capacity=?
                WHERE event_id=?
                """,
                _params(event) + (int(event.event_id),),
            )
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM events WHERE event_id=?", (int(event.event_id),))
            row = fetchone(cur)
            if not row:
                raise NotFoundError(f"Event {event.event_id} does not exist")
            updated = _to_event(row)
        logger.debug("Updated event %s", updated.event_id)
        return updated

    def delete(self, event_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=?", (int(event_id),))
            if cur.rowcount:
                logger.debug("Deleted event %s", event_id)
