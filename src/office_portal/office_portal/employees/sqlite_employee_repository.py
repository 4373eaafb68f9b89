from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..common.cancellation import CancellationToken
from ..common.datetime_utils import from_db_date, to_db_date
from ..core.exceptions import NotFoundError
from ..database.connection import ConnectionProvider
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "employee_id, first_name, last_name, date_of_birth"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        date_of_birth=from_db_date(row["date_of_birth"]),
    )


class SQLiteEmployeeRepository(EmployeeRepository):
    def __init__(self, provider: ConnectionProvider):
        self._provider = provider

    def create_table_if_not_exists(self, *, cancellation: Optional[CancellationToken] = None) -> None:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS employees (
                    employee_id   INTEGER PRIMARY KEY,
                    first_name    TEXT NOT NULL COLLATE NOCASE,
                    last_name     TEXT NOT NULL COLLATE NOCASE,
                    date_of_birth DATE NOT NULL
                )
                """
            )

    def list_all(self, *, cancellation: Optional[CancellationToken] = None) -> Sequence[Employee]:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SELECT_COLUMNS}
                FROM employees
                ORDER BY last_name COLLATE NOCASE ASC, employee_id ASC
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> Optional[Employee]:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM employees WHERE employee_id=?", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def exists(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> bool:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                "SELECT EXISTS(SELECT 1 FROM employees WHERE employee_id=?) AS found",
                (int(employee_id),),
            )
            row = fetchone(cur)
            return bool(row and row["found"])

    def create(self, employee: Employee, *, cancellation: Optional[CancellationToken] = None) -> Employee:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(first_name, last_name, date_of_birth)
                VALUES(?,?,?)
                """,
                (employee.first_name, employee.last_name, to_db_date(employee.date_of_birth)),
            )
            new_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM employees WHERE employee_id=?", (new_id,))
            created = _to_employee(fetchone(cur))
        logger.debug("Created employee %s", created.employee_id)
        return created

    def update(self, employee: Employee, *, cancellation: Optional[CancellationToken] = None) -> Employee:
        if employee.employee_id is None:
            raise ValueError("Cannot update an employee without an id")

        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=?, last_name=?, date_of_birth=?
                WHERE employee_id=?
                """,
                (
                    employee.first_name,
                    employee.last_name,
                    to_db_date(employee.date_of_birth),
                    int(employee.employee_id),
                ),
            )
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM employees WHERE employee_id=?", (int(employee.employee_id),))
            row = fetchone(cur)
            if not row:
                raise NotFoundError(f"Employee {employee.employee_id} does not exist")
            updated = _to_employee(row)
        logger.debug("Updated employee %s", updated.employee_id)
        return updated

    def delete(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        with db_cursor(self._provider, cancellation=cancellation) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=?", (int(employee_id),))
            if cur.rowcount:
                logger.debug("Deleted employee %s", employee_id)
