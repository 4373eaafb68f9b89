from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol


@dataclass
class DBConfig:
    path: str
    timeout: float = 5.0

    @property
    def is_memory(self) -> bool:
        return self.path == ":memory:" or self.path.startswith("file::memory:")


class SQLiteConnectionFactory:
    """Creates new SQLite connections for one database file."""

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self) -> sqlite3.Connection:
        if not self._config.is_memory:
            Path(self._config.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(
            self._config.path,
            timeout=self._config.timeout,
            check_same_thread=False,
            uri=self._config.path.startswith("file:"),
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class ConnectionProvider(Protocol):
    """Hands out connections to repositories.

    When ``shared`` is False every call returns a new connection that the caller
    must close after its unit of work. When ``shared`` is True the same open
    connection is returned each time and callers must leave it open.
    """

    shared: bool

    def get_connection(self) -> sqlite3.Connection:
        raise NotImplementedError


class DbConnectionProvider:
    """Returns a fresh connection per call (safe for simple Flask apps)."""

    shared = False

    def __init__(self, factory: SQLiteConnectionFactory):
        self._factory = factory

    def get_connection(self) -> sqlite3.Connection:
        return self._factory.connect()


class SharedConnectionProvider:
    """Keeps one open connection for the process lifetime.

    Needed for in-memory databases, which vanish once their only connection closes.
    """

    shared = True

    def __init__(self, factory: SQLiteConnectionFactory):
        self._factory = factory
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is None:
                self._conn = self._factory.connect()
            return self._conn


def build_provider(config: DBConfig) -> ConnectionProvider:
    factory = SQLiteConnectionFactory(config)
    if config.is_memory:
        return SharedConnectionProvider(factory)
    return DbConnectionProvider(factory)
