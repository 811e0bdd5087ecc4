"""Application entry point for a Slack app served by Slack App Kit."""

from __future__ import annotations

from typing import Callable

from flask import Flask

from slack_app_kit import SlackApp, configure_logging, get_settings

_LOGGING_CONFIGURED = False


def create_app(setup: Callable[[SlackApp], None] | None = None) -> Flask:
    """Create the Flask application from environment settings.

    *setup* receives the ``SlackApp`` before serving starts and is where
    command, shortcut, action and view handlers get registered.
    """

    global _LOGGING_CONFIGURED
    settings = get_settings()
    if not _LOGGING_CONFIGURED:
        configure_logging(settings.log_level, json_logs=settings.log_json)
        _LOGGING_CONFIGURED = True

    slack_app = SlackApp(settings)
    if setup is not None:
        setup(slack_app)
    return slack_app.create_flask_app(__name__)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=3000)
