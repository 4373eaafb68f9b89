from __future__ import annotations

from flask import Flask, g, render_template

from ..core.constants import UPCOMING_EVENT_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="home")
    @app.route("/Home", endpoint="home_alias")
    def home():
        events = container.event_service.list_upcoming(cancellation=g.cancellation)
        return render_template("home/index.html", events=events, days=UPCOMING_EVENT_DAYS, active_page="home")
