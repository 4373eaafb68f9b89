from __future__ import annotations

from typing import List, Tuple

from flask import Flask, abort, g, redirect, render_template, request, url_for

from ..common.datetime_utils import format_form_date, parse_form_date
from ..common.validators import FieldError, group_errors
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import EMPLOYEE_LABELS, Employee


def _form_values(employee: Employee) -> dict:
    return {
        "first_name": employee.first_name,
        "last_name": employee.last_name,
        "date_of_birth": format_form_date(employee.date_of_birth),
    }


def employee_from_form(form) -> Tuple[Employee, List[FieldError]]:
    """Build a candidate from submitted form fields, collecting unparsable values."""

    errors: List[FieldError] = []
    raw_dob = (form.get("date_of_birth") or "").strip()
    dob = parse_form_date(raw_dob)
    if raw_dob and dob is None:
        errors.append(FieldError("date_of_birth", f"'{EMPLOYEE_LABELS['date_of_birth']}' is not a valid date."))

    candidate = Employee(
        employee_id=None,
        first_name=(form.get("first_name") or "").strip(),
        last_name=(form.get("last_name") or "").strip(),
        date_of_birth=dob,
    )
    return candidate, errors


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    def _render_form(template: str, *, form: dict, errors: dict, employee_id=None):
        return render_template(
            template,
            form=form,
            errors=errors,
            labels=EMPLOYEE_LABELS,
            employee_id=employee_id,
            active_page="employees",
        )

    @app.route("/Employee", endpoint="employee_index")
    @app.route("/Employee/Index", endpoint="employee_index_alias")
    def employee_index():
        employees = service.list(cancellation=g.cancellation)
        return render_template("employee/index.html", employees=employees, active_page="employees")

    @app.route("/Employee/Details/<int:employee_id>", endpoint="employee_details")
    def employee_details(employee_id: int):
        try:
            employee = service.get(employee_id, cancellation=g.cancellation)
        except NotFoundError:
            abort(404)
        return render_template("employee/details.html", employee=employee, labels=EMPLOYEE_LABELS, active_page="employees")

    @app.route("/Employee/Create", methods=["GET", "POST"], endpoint="employee_create")
    def employee_create():
        if request.method == "GET":
            return _render_form("employee/create.html", form={}, errors={})

        candidate, parse_errors = employee_from_form(request.form)
        try:
            created = service.create(candidate, parse_errors=parse_errors, cancellation=g.cancellation)
        except ValidationError as e:
            return _render_form("employee/create.html", form=request.form.to_dict(), errors=group_errors(e.errors))

        return redirect(url_for("employee_details", employee_id=created.employee_id))

    @app.route("/Employee/Edit/<int:employee_id>", methods=["GET", "POST"], endpoint="employee_edit")
    def employee_edit(employee_id: int):
        if request.method == "GET":
            try:
                employee = service.get(employee_id, cancellation=g.cancellation)
            except NotFoundError:
                abort(404)
            return _render_form("employee/edit.html", form=_form_values(employee), errors={}, employee_id=employee_id)

        candidate, parse_errors = employee_from_form(request.form)
        try:
            updated = service.update(employee_id, candidate, parse_errors=parse_errors, cancellation=g.cancellation)
        except ValidationError as e:
            return _render_form(
                "employee/edit.html",
                form=request.form.to_dict(),
                errors=group_errors(e.errors),
                employee_id=employee_id,
            )
        except NotFoundError:
            abort(404)

        return redirect(url_for("employee_details", employee_id=updated.employee_id))

    @app.route("/Employee/Delete/<int:employee_id>", endpoint="employee_delete")
    def employee_delete(employee_id: int):
        try:
            service.delete(employee_id, cancellation=g.cancellation)
        except NotFoundError:
            abort(404)
        return redirect(url_for("employee_index"))

