from __future__ import annotations

from dataclasses import dataclass

from .database.connection import ConnectionProvider, DBConfig, build_provider
from .employees.service import EmployeeService
from .employees.sqlite_employee_repository import SQLiteEmployeeRepository
from .events.service import EventService
from .events.sqlite_event_repository import SQLiteEventRepository


@dataclass(frozen=True)
class Container:
    provider: ConnectionProvider

    employees_repo: SQLiteEmployeeRepository
    events_repo: SQLiteEventRepository

    employee_service: EmployeeService
    event_service: EventService


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        path=str(db_config["path"]),
        timeout=float(db_config.get("timeout", 5.0)),
    )
    provider = build_provider(config)

    employees_repo = SQLiteEmployeeRepository(provider)
    events_repo = SQLiteEventRepository(provider)

    return Container(
        provider=provider,
        employees_repo=employees_repo,
        events_repo=events_repo,
        employee_service=EmployeeService(employees_repo),
        event_service=EventService(events_repo),
    )
