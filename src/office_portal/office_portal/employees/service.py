from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.cancellation import CancellationToken
from ..common.validators import FieldError, merge_errors
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository
from .validator import validate_employee

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use cases: list, view, create, edit and delete employees."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list(self, *, cancellation: Optional[CancellationToken] = None) -> Sequence[Employee]:
        return self._employees.list_all(cancellation=cancellation)

    def get(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> Employee:
        if not self._employees.exists(employee_id, cancellation=cancellation):
            raise NotFoundError(f"Employee {employee_id} not found")

        employee = self._employees.get_by_id(employee_id, cancellation=cancellation)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _check(self, candidate: Employee, now: Optional[datetime], parse_errors: Sequence[FieldError]) -> None:
        result = validate_employee(candidate, now=now)
        errors = merge_errors(parse_errors, result.errors)
        if errors:
            raise ValidationError(errors)

    def create(
        self,
        candidate: Employee,
        *,
        parse_errors: Sequence[FieldError] = (),
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Employee:
        self._check(candidate, now, parse_errors)

        created = self._employees.create(replace(candidate, employee_id=None), cancellation=cancellation)
        logger.info("Employee %s created", created.employee_id)
        return created

    def update(
        self,
        employee_id: int,
        candidate: Employee,
        *,
        parse_errors: Sequence[FieldError] = (),
        now: Optional[datetime] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> Employee:
        self._check(candidate, now, parse_errors)

        if not self._employees.exists(employee_id, cancellation=cancellation):
            raise NotFoundError(f"Employee {employee_id} not found")

        updated = self._employees.update(replace(candidate, employee_id=int(employee_id)), cancellation=cancellation)
        logger.info("Employee %s updated", updated.employee_id)
        return updated

    def delete(self, employee_id: int, *, cancellation: Optional[CancellationToken] = None) -> None:
        if not self._employees.exists(employee_id, cancellation=cancellation):
            raise NotFoundError(f"Employee {employee_id} not found")

        self._employees.delete(employee_id, cancellation=cancellation)
        logger.info("Employee %s deleted", employee_id)
