from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..common.cancellation import CancellationToken
from ..core.exceptions import OperationCancelled
from .connection import ConnectionProvider

# Number of SQLite VM instructions between cancellation checks.
_PROGRESS_STEPS = 1000


@contextmanager
def db_cursor(
    provider: ConnectionProvider,
    *,
    cancellation: Optional[CancellationToken] = None,
) -> Iterator[Tuple[sqlite3.Connection, sqlite3.Cursor]]:
    """One unit of work: statements run on one connection and commit together.

    A cancelled token aborts the running statement through SQLite's progress
    handler; the resulting "interrupted" error is re-raised as OperationCancelled.
    """

    if cancellation is not None:
        cancellation.raise_if_cancelled()

    conn = provider.get_connection()
    if cancellation is not None:
        conn.set_progress_handler(lambda: 1 if cancellation.cancelled else 0, _PROGRESS_STEPS)
    try:
        cur = conn.cursor()
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except sqlite3.OperationalError as e:
        conn.rollback()
        if cancellation is not None and cancellation.cancelled:
            raise OperationCancelled("Store operation was cancelled") from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        if cancellation is not None:
            conn.set_progress_handler(None, 0)
        if not provider.shared:
            conn.close()


def fetchone(cur: sqlite3.Cursor) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur: sqlite3.Cursor) -> List[Dict[str, Any]]:
    return [dict(r) for r in cur.fetchall() or []]
