from __future__ import annotations

from datetime import date, datetime, timedelta

from flask import g

from office_portal.common.datetime_utils import now_local
from office_portal.database.sqlite_base import db_cursor
from office_portal.employees.model import Employee
from office_portal.events.model import Event


def _fmt(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M")


def test_create_event_in_the_past_rerenders_form(client, app_container, csrf_token):
    resp = client.post(
        "/Event/Create",
        data={
            "csrf_token": csrf_token,
            "description": "Retro",
            "start_datetime": "2020-01-01T00:00",
            "end_datetime": "2020-01-01T02:00",
            "maximum_capacity": "",
        },
    )

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "The Event start date must be in the future." in body
    assert 'value="Retro"' in body
    assert app_container.events_repo.list_all(True) == []


def test_create_event_redirects_to_details(client, app_container, csrf_token):
    start = now_local() + timedelta(days=2)
    resp = client.post(
        "/Event/Create",
        data={
            "csrf_token": csrf_token,
            "description": "Planning",
            "start_datetime": _fmt(start),
            "end_datetime": _fmt(start + timedelta(hours=2)),
            "maximum_capacity": "15",
        },
    )

    assert resp.status_code == 302
    (created,) = app_container.events_repo.list_all(True)
    assert resp.headers["Location"].endswith(f"/Event/Details/{created.event_id}")
    assert created.maximum_capacity == 15


def test_non_numeric_capacity_is_a_field_error(client, app_container, csrf_token):
    start = now_local() + timedelta(days=2)
    resp = client.post(
        "/Event/Create",
        data={
            "csrf_token": csrf_token,
            "description": "Planning",
            "start_datetime": _fmt(start),
            "end_datetime": _fmt(start + timedelta(hours=2)),
            "maximum_capacity": "lots",
        },
    )

    assert resp.status_code == 200
    assert "must be a whole number" in resp.get_data(as_text=True)
    assert app_container.events_repo.list_all(True) == []


def test_details_for_unknown_ids_return_404(client):
    assert client.get("/Employee/Details/12345").status_code == 404
    assert client.get("/Event/Details/12345").status_code == 404
    assert client.get("/Employee/Edit/12345").status_code == 404
    assert client.get("/Event/Delete/12345").status_code == 404


def test_employee_create_edit_delete_flow(client, app_container, csrf_token):
    resp = client.post(
        "/Employee/Create",
        data={"csrf_token": csrf_token, "first_name": "Ada", "last_name": "Lovelace", "date_of_birth": "1990-12-10"},
    )
    assert resp.status_code == 302
    (ada,) = app_container.employees_repo.list_all()
    assert ada.date_of_birth == date(1990, 12, 10)

    page = client.get(f"/Employee/Details/{ada.employee_id}")
    assert page.status_code == 200
    assert "Lovelace" in page.get_data(as_text=True)

    resp = client.post(
        f"/Employee/Edit/{ada.employee_id}",
        data={"csrf_token": csrf_token, "first_name": "Augusta", "last_name": "Lovelace", "date_of_birth": "1990-12-10"},
    )
    assert resp.status_code == 302
    assert app_container.employees_repo.get_by_id(ada.employee_id).first_name == "Augusta"

    resp = client.get(f"/Employee/Delete/{ada.employee_id}")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/Employee")
    assert app_container.employees_repo.list_all() == []


def test_employee_edit_with_errors_keeps_submitted_values(client, app_container, csrf_token):
    ada = app_container.employees_repo.create(Employee(None, "Ada", "Lovelace", date(1990, 12, 10)))

    resp = client.post(
        f"/Employee/Edit/{ada.employee_id}",
        data={"csrf_token": csrf_token, "first_name": "", "last_name": "King", "date_of_birth": "1990-12-10"},
    )

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "&#39;First Name&#39; must not be empty." in body
    assert 'value="King"' in body
    assert app_container.employees_repo.get_by_id(ada.employee_id) == ada


def test_post_without_csrf_token_is_rejected(client, app_container):
    resp = client.post(
        "/Employee/Create",
        data={"first_name": "Ada", "last_name": "Lovelace", "date_of_birth": "1990-12-10"},
    )

    assert resp.status_code == 400
    assert app_container.employees_repo.list_all() == []


def test_event_list_historic_toggle(client, app_container):
    now = now_local()
    app_container.events_repo.create(Event(None, "Old party", now - timedelta(days=10), now - timedelta(days=9)))
    app_container.events_repo.create(Event(None, "Next party", now + timedelta(days=10), now + timedelta(days=11)))

    default = client.get("/Event").get_data(as_text=True)
    historic = client.get("/Event?showHistoricEvents=true").get_data(as_text=True)

    assert "Next party" in default and "Old party" not in default
    assert "Next party" in historic and "Old party" in historic


def test_home_lists_events_starting_within_a_week(client, app_container):
    now = now_local()
    app_container.events_repo.create(Event(None, "Soon", now + timedelta(days=2), now + timedelta(days=2, hours=1)))
    app_container.events_repo.create(Event(None, "Much later", now + timedelta(days=20), now + timedelta(days=21)))

    body = client.get("/").get_data(as_text=True)

    assert "Soon" in body
    assert "Much later" not in body


def test_capacity_beyond_integer_column_is_a_field_error(client, app_container, csrf_token):
    start = now_local() + timedelta(days=2)
    resp = client.post(
        "/Event/Create",
        data={
            "csrf_token": csrf_token,
            "description": "Stadium tour",
            "start_datetime": _fmt(start),
            "end_datetime": _fmt(start + timedelta(hours=2)),
            "maximum_capacity": "100000000000000000000",
        },
    )

    assert resp.status_code == 200
    assert "The maximum capacity must be 9223372036854775807 or less." in resp.get_data(as_text=True)
    assert app_container.events_repo.list_all(True) == []


def test_employee_born_before_year_1000_is_stored(client, app_container, csrf_token):
    resp = client.post(
        "/Employee/Create",
        data={"csrf_token": csrf_token, "first_name": "Old", "last_name": "Timer", "date_of_birth": "0999-05-01"},
    )

    assert resp.status_code == 302
    (employee,) = app_container.employees_repo.list_all()
    assert employee.date_of_birth == date(999, 5, 1)

    edit_page = client.get(f"/Employee/Edit/{employee.employee_id}").get_data(as_text=True)
    assert 'value="0999-05-01"' in edit_page


def test_storage_failure_renders_generic_error_page(client, app_container):
    with db_cursor(app_container.provider) as (_, cur):
        cur.execute("DROP TABLE events")

    resp = client.get("/Event")

    assert resp.status_code == 500
    assert "An error occurred while processing your request." in resp.get_data(as_text=True)


def test_cancelled_request_returns_empty_499(app, client):
    @app.before_request
    def _cancel_immediately():
        g.cancellation.cancel()

    resp = client.get("/Employee")

    assert resp.status_code == 499
    assert resp.get_data(as_text=True) == ""
