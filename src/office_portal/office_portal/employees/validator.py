from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import ValidationResult, check_text, require_present
from ..core.constants import MAX_TEXT_LENGTH
from .model import EMPLOYEE_LABELS, Employee


def validate_employee(employee: Employee, *, now: Optional[datetime] = None) -> ValidationResult:
    """Check an Employee candidate before it is written.

    The date of birth is compared as a calendar date and must be strictly
    before today.
    """

    today = (now or now_local()).date()
    result = ValidationResult()

    result.add("first_name", check_text(employee.first_name, EMPLOYEE_LABELS["first_name"], MAX_TEXT_LENGTH))
    result.add("last_name", check_text(employee.last_name, EMPLOYEE_LABELS["last_name"], MAX_TEXT_LENGTH))

    missing = require_present(employee.date_of_birth, EMPLOYEE_LABELS["date_of_birth"])
    if missing:
        result.add("date_of_birth", missing)
    elif not employee.date_of_birth < today:
        result.add("date_of_birth", f"The Date of Birth must be less than '{today:%d/%m/%Y}'.")

    return result
