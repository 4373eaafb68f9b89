from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``employee_id`` is None for a candidate that has not been stored yet.
    ``date_of_birth`` is None only on form-built candidates whose value was
    missing or unparsable; the validator reports those.
    """

    employee_id: Optional[int]
    first_name: str
    last_name: str
    date_of_birth: Optional[date]


EMPLOYEE_LABELS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "date_of_birth": "Date of Birth",
}
