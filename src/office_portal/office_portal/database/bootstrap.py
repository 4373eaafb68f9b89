from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional

from ..common.datetime_utils import now_local
from ..employees.model import Employee
from ..events.model import Event
from .connection import ConnectionProvider
from .sqlite_base import db_cursor

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)


def ensure_tables_exist(container: "Container") -> None:
    """Create every entity table that is missing. Safe to run on each startup."""

    container.employees_repo.create_table_if_not_exists()
    container.events_repo.create_table_if_not_exists()
    logger.debug("Schema ready")


def list_tables(provider: ConnectionProvider) -> list[str]:
    with db_cursor(provider) as (_, cur):
        cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
        return [row[0] for row in cur.fetchall()]


def seed_demo_data(container: "Container", *, now: Optional[datetime] = None) -> int:
    """Insert a few sample rows into tables that are still empty.

    Returns the number of rows inserted.
    """

    now = now or now_local()
    inserted = 0

    if not container.employees_repo.list_all():
        for first, last, dob in (
            ("Ada", "Lovelace", date(1990, 12, 10)),
            ("Alan", "Turing", date(1985, 6, 23)),
            ("grace", "hopper", date(1992, 12, 9)),
        ):
            container.employees_repo.create(Employee(None, first, last, dob))
            inserted += 1

    if not container.events_repo.list_all(True, now=now):
        tomorrow = (now + timedelta(days=1)).replace(hour=9, minute=0, second=0, microsecond=0)
        for description, start, hours, capacity in (
            ("Team breakfast", tomorrow, 2, 20),
            ("Quarterly planning", tomorrow + timedelta(days=3), 4, None),
            ("Summer party", tomorrow + timedelta(days=30), 6, 120),
        ):
            container.events_repo.create(Event(None, description, start, start + timedelta(hours=hours), capacity))
            inserted += 1

    if inserted:
        logger.info("Seeded %s demo rows", inserted)
    return inserted
