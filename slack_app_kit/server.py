"""Flask routes exposing a Slack app over HTTP."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from flask import Flask, Response, jsonify, request
from structlog.contextvars import bind_contextvars, get_contextvars, unbind_contextvars
from werkzeug.exceptions import HTTPException

from .dispatcher import dispatch_command, dispatch_interaction
from .install import handle_install

if TYPE_CHECKING:  # pragma: no cover
    from .application import SlackApp


def _register_trace_context(flask_app: Flask) -> None:
    """Bind a trace identifier to every log line emitted while serving a request."""

    @flask_app.before_request
    def bind_trace_id():
        bind_contextvars(trace_id=str(uuid4()))

    @flask_app.teardown_request
    def unbind_trace_id(_error=None):
        unbind_contextvars("trace_id")


def _register_error_handlers(flask_app: Flask) -> None:
    """Register a JSON error handler that attaches a trace identifier."""

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        if isinstance(error, HTTPException):
            return error
        trace_id = get_contextvars().get("trace_id") or str(uuid4())
        structlog.get_logger().error("unhandled_application_error", trace_id=trace_id, exc_info=error)
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def build_flask_app(slack_app: "SlackApp", *, import_name: str = __name__) -> Flask:
    """Create the Flask application serving *slack_app* under its route prefix."""

    prefix = slack_app.route_prefix
    flask_app = Flask(import_name)
    flask_app.extensions["slack_app"] = slack_app

    _register_trace_context(flask_app)
    _register_error_handlers(flask_app)

    @flask_app.route("/", methods=["GET"])
    def index():
        return Response(status=200)

    @flask_app.route(f"/{prefix}/install", methods=["GET"])
    def install():
        return handle_install(slack_app, request)

    @flask_app.route(f"/{prefix}/commands", methods=["POST"])
    def commands():
        return dispatch_command(slack_app, request)

    @flask_app.route(f"/{prefix}/", methods=["POST"])
    def interactions():
        return dispatch_interaction(slack_app, request)

    return flask_app
