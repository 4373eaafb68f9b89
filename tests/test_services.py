from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from office_portal.common.validators import FieldError
from office_portal.core.exceptions import NotFoundError, ValidationError
from office_portal.employees.model import Employee
from office_portal.employees.service import EmployeeService
from office_portal.events.model import Event
from office_portal.events.service import EventService


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[int, Employee] = {}
        self._id = 0
        self.writes = 0

    def list_all(self, *, cancellation=None):
        return sorted(self._rows.values(), key=lambda e: e.last_name.lower())

    def get_by_id(self, employee_id: int, *, cancellation=None) -> Optional[Employee]:
        return self._rows.get(employee_id)

    def exists(self, employee_id: int, *, cancellation=None) -> bool:
        return employee_id in self._rows

    def create(self, employee: Employee, *, cancellation=None) -> Employee:
        self.writes += 1
        self._id += 1
        self._rows[self._id] = replace(employee, employee_id=self._id)
        return self._rows[self._id]

    def update(self, employee: Employee, *, cancellation=None) -> Employee:
        self.writes += 1
        self._rows[employee.employee_id] = employee
        return employee

    def delete(self, employee_id: int, *, cancellation=None) -> None:
        self.writes += 1
        self._rows.pop(employee_id, None)


class InMemoryEvents:
    def __init__(self, events=()):
        self._rows: dict[int, Event] = {}
        self.writes = 0
        for e in events:
            self._rows[e.event_id] = e

    def list_all(self, include_historic: bool = False, *, now=None, cancellation=None):
        cutoff = datetime.combine(now.date(), datetime.min.time())
        rows = [e for e in self._rows.values() if include_historic or e.end_datetime > cutoff]
        return sorted(rows, key=lambda e: e.start_datetime)

    def get_by_id(self, event_id: int, *, cancellation=None):
        return self._rows.get(event_id)

    def exists(self, event_id: int, *, cancellation=None) -> bool:
        return event_id in self._rows

    def create(self, event: Event, *, cancellation=None) -> Event:
        self.writes += 1
        new_id = max(self._rows, default=0) + 1
        self._rows[new_id] = replace(event, event_id=new_id)
        return self._rows[new_id]

    def update(self, event: Event, *, cancellation=None) -> Event:
        self.writes += 1
        self._rows[event.event_id] = event
        return event

    def delete(self, event_id: int, *, cancellation=None) -> None:
        self.writes += 1
        self._rows.pop(event_id, None)


def _employee(**kw) -> Employee:
    data = dict(employee_id=None, first_name="Ada", last_name="Lovelace", date_of_birth=date(1990, 12, 10))
    data.update(kw)
    return Employee(**data)


def test_invalid_employee_never_reaches_repository(fixed_now):
    repo = InMemoryEmployees()
    svc = EmployeeService(repo)

    with pytest.raises(ValidationError) as exc:
        svc.create(_employee(first_name=""), now=fixed_now)

    assert [e.field for e in exc.value.errors] == ["first_name"]
    assert repo.writes == 0


def test_parse_errors_replace_rule_errors_for_same_field(fixed_now):
    repo = InMemoryEmployees()
    svc = EmployeeService(repo)
    parse_error = FieldError("date_of_birth", "'Date of Birth' is not a valid date.")

    with pytest.raises(ValidationError) as exc:
        svc.create(_employee(date_of_birth=None), parse_errors=[parse_error], now=fixed_now)

    assert exc.value.errors == [parse_error]
    assert repo.writes == 0


def test_create_and_update_employee(fixed_now):
    repo = InMemoryEmployees()
    svc = EmployeeService(repo)

    created = svc.create(_employee(), now=fixed_now)
    updated = svc.update(created.employee_id, _employee(last_name="King"), now=fixed_now)

    assert updated.employee_id == created.employee_id
    assert svc.get(created.employee_id).last_name == "King"


def test_get_update_delete_unknown_employee_raise_not_found(fixed_now):
    svc = EmployeeService(InMemoryEmployees())

    with pytest.raises(NotFoundError):
        svc.get(42)
    with pytest.raises(NotFoundError):
        svc.update(42, _employee(), now=fixed_now)
    with pytest.raises(NotFoundError):
        svc.delete(42)


def test_event_list_carries_historic_flag(fixed_now):
    past = Event(1, "Old", fixed_now - timedelta(days=3), fixed_now - timedelta(days=2))
    svc = EventService(InMemoryEvents([past]))

    assert svc.list(now=fixed_now).events == []
    model = svc.list(include_historic=True, now=fixed_now)
    assert model.is_showing_historic_events is True
    assert [e.description for e in model.events] == ["Old"]


def test_list_upcoming_keeps_next_seven_days(fixed_now):
    def ev(event_id: int, start: datetime) -> Event:
        return Event(event_id, f"e{event_id}", start, start + timedelta(hours=1))

    events = [
        ev(1, fixed_now - timedelta(hours=2)),
        ev(2, fixed_now),
        ev(3, fixed_now + timedelta(days=3)),
        ev(4, fixed_now + timedelta(days=7)),
        ev(5, fixed_now + timedelta(days=7, minutes=1)),
    ]
    svc = EventService(InMemoryEvents(events))

    assert [e.event_id for e in svc.list_upcoming(now=fixed_now)] == [2, 3, 4]


def test_past_event_start_is_rejected_before_storage(fixed_now):
    repo = InMemoryEvents()
    svc = EventService(repo)
    candidate = Event(None, "Retro", datetime(2020, 1, 1), datetime(2020, 1, 1, 2), None)

    with pytest.raises(ValidationError) as exc:
        svc.create(candidate, now=fixed_now)

    assert "The Event start date must be in the future." in [e.message for e in exc.value.errors]
    assert repo.writes == 0
