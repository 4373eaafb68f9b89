from __future__ import annotations

from typing import List, Optional, Tuple

from flask import Flask, abort, g, redirect, render_template, request, url_for

from ..common.datetime_utils import format_form_datetime, parse_form_datetime
from ..common.validators import FieldError, group_errors
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import EVENT_LABELS, Event


def _form_values(event: Event) -> dict:
    return {
        "description": event.description,
        "start_datetime": format_form_datetime(event.start_datetime),
        "end_datetime": format_form_datetime(event.end_datetime),
        "maximum_capacity": "" if event.maximum_capacity is None else str(event.maximum_capacity),
    }


def _parse_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def event_from_form(form) -> Tuple[Event, List[FieldError]]:
    """Build a candidate from submitted form fields, collecting unparsable values."""

    errors: List[FieldError] = []

    def _datetime(name: str):
        raw = (form.get(name) or "").strip()
        value = parse_form_datetime(raw)
        if raw and value is None:
            errors.append(FieldError(name, f"'{EVENT_LABELS[name]}' is not a valid date and time."))
        return value

    start = _datetime("start_datetime")
    end = _datetime("end_datetime")

    capacity = None
    raw_capacity = (form.get("maximum_capacity") or "").strip()
    if raw_capacity:
        try:
            capacity = int(raw_capacity)
        except ValueError:
            errors.append(FieldError("maximum_capacity", f"'{EVENT_LABELS['maximum_capacity']}' must be a whole number."))

    candidate = Event(
        event_id=None,
        description=(form.get("description") or "").strip(),
        start_datetime=start,
        end_datetime=end,
        maximum_capacity=capacity,
    )
    return candidate, errors


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    def _render_form(template: str, *, form: dict, errors: dict, event_id=None):
        return render_template(
            template,
            form=form,
            errors=errors,
            labels=EVENT_LABELS,
            event_id=event_id,
            active_page="events",
        )

    @app.route("/Event", endpoint="event_index")
    @app.route("/Event/Index", endpoint="event_index_alias")
    def event_index():
        show_historic = _parse_flag(request.args.get("showHistoricEvents"))
        model = service.list(include_historic=show_historic, cancellation=g.cancellation)
        return render_template("event/index.html", model=model, active_page="events")

    @app.route("/Event/Details/<int:event_id>", endpoint="event_details")
    def event_details(event_id: int):
        try:
            event = service.get(event_id, cancellation=g.cancellation)
        except NotFoundError:
            abort(404)
        return render_template("event/details.html", event=event, labels=EVENT_LABELS, active_page="events")

    @app.route("/Event/Create", methods=["GET", "POST"], endpoint="event_create")
    def event_create():
        if request.method == "GET":
            return _render_form("event/create.html", form={}, errors={})

        candidate, parse_errors = event_from_form(request.form)
        try:
            created = service.create(candidate, parse_errors=parse_errors, cancellation=g.cancellation)
        except ValidationError as e:
            return _render_form("event/create.html", form=request.form.to_dict(), errors=group_errors(e.errors))

        return redirect(url_for("event_details", event_id=created.event_id))

    @app.route("/Event/Edit/<int:event_id>", methods=["GET", "POST"], endpoint="event_edit")
    def event_edit(event_id: int):
        if request.method == "GET":
            try:
                event = service.get(event_id, cancellation=g.cancellation)
            except NotFoundError:
                abort(404)
            return _render_form("event/edit.html", form=_form_values(event), errors={}, event_id=event_id)

        candidate, parse_errors = event_from_form(request.form)
        try:
            updated = service.update(event_id, candidate, parse_errors=parse_errors, cancellation=g.cancellation)
        except ValidationError as e:
            return _render_form(
                "event/edit.html",
                form=request.form.to_dict(),
                errors=group_errors(e.errors),
                event_id=event_id,
            )
        except NotFoundError:
            abort(404)

        return redirect(url_for("event_details", event_id=updated.event_id))

    @app.route("/Event/Delete/<int:event_id>", endpoint="event_delete")
    def event_delete(event_id: int):
        try:
            service.delete(event_id, cancellation=g.cancellation)
        except NotFoundError:
            abort(404)
        return redirect(url_for("event_index"))
