from __future__ import annotations

import hmac
import logging
import secrets

from flask import Flask, abort, request, session

logger = logging.getLogger(__name__)

CSRF_SESSION_KEY = "_csrf_token"
CSRF_FORM_FIELD = "csrf_token"


def get_csrf_token() -> str:
    token = session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(24)
        session[CSRF_SESSION_KEY] = token
    return token


def install_csrf(app: Flask) -> None:
    """Expose ``csrf_token()`` to templates and reject POSTs without a matching token."""

    app.jinja_env.globals["csrf_token"] = get_csrf_token

    @app.before_request
    def _check_csrf():
        if request.method != "POST" or not app.config.get("CSRF_ENABLED", True):
            return None
        expected = session.get(CSRF_SESSION_KEY)
        submitted = request.form.get(CSRF_FORM_FIELD, "")
        if not expected or not hmac.compare_digest(str(expected), str(submitted)):
            logger.warning("Rejected %s %s: missing or invalid anti-forgery token", request.method, request.path)
            abort(400)
        return None
