from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.cancellation import CancellationToken
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this protocol, never on a concrete store.
    """

    def create_table_if_not_exists(self, *, cancellation: Optional[CancellationToken] = None) -> None:
        raise NotImplementedError

    def list_all(self, *, cancellation: Optional[CancellationToken] = None) -> Sequence[Employee]:
        """All employees ordered by last name (case-insensitive)."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> Optional[Employee]:
        raise NotImplementedError

    def exists(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> bool:
        raise NotImplementedError

    def create(self, employee: Employee, *, cancellation: Optional[CancellationToken] = None) -> Employee:
        """Insert ``employee`` (its id is ignored) and return the stored row."""

        raise NotImplementedError

    def update(self, employee: Employee, *, cancellation: Optional[CancellationToken] = None) -> Employee:
        raise NotImplementedError

    def delete(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        """Delete by id; unknown ids are a no-op."""

        raise NotImplementedError
