"""Tests for the Flask application built around a Slack app."""

from pathlib import Path
import sys

import pytest
from structlog.contextvars import get_contextvars
from structlog.testing import capture_logs

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

from slack_app_kit import AppSettings, SlackApp, WorkspaceToken, security  # noqa: E402

BODY = "team_id=T1&command=%2Fboom"


def _signed_headers(body: str, timestamp: str = "1000") -> dict[str, str]:
    signature = security.compute_signature("secret", timestamp, body)
    return {
        security.SLACK_SIGNATURE_HEADER: signature,
        security.SLACK_TIMESTAMP_HEADER: timestamp,
    }


@pytest.fixture
def slack_app():
    settings = AppSettings(
        name="Dev Bot",
        route_prefix="/apps/dev/",
        client_id="cid",
        client_secret="csecret",
        signing_secret="secret",
        workspace_tokens=[WorkspaceToken("T1", "xoxb-t1")],
    )
    return SlackApp(settings, oauth_client=object())


def test_routes_use_normalised_prefix(slack_app):
    flask_app = slack_app.create_flask_app()

    rules = {rule.rule for rule in flask_app.url_map.iter_rules()}

    assert {"/", "/apps/dev/install", "/apps/dev/commands", "/apps/dev/"} <= rules
    assert flask_app.extensions["slack_app"] is slack_app


def test_handler_exception_returns_json_error_with_trace_id(slack_app):
    @slack_app.on_command("/boom")
    def boom(_ctx):
        raise RuntimeError("handler failed")

    client = slack_app.create_flask_app().test_client()

    with capture_logs() as logs:
        response = client.post(
            "/apps/dev/commands",
            data=BODY,
            content_type="application/x-www-form-urlencoded",
            headers=_signed_headers(BODY),
        )

    assert response.status_code == 500
    data = response.get_json()
    assert data["error"] == "internal_server_error"
    assert data["trace_id"]
    error_logs = [entry for entry in logs if entry["event"] == "unhandled_application_error"]
    assert error_logs[0]["trace_id"] == data["trace_id"]


def test_trace_id_is_bound_only_while_handling(slack_app):
    seen = []
    slack_app.on_command("/boom", lambda ctx: seen.append(get_contextvars().get("trace_id")))
    client = slack_app.create_flask_app().test_client()

    client.post(
        "/apps/dev/commands",
        data=BODY,
        content_type="application/x-www-form-urlencoded",
        headers=_signed_headers(BODY),
    )

    assert seen[0]
    assert "trace_id" not in get_contextvars()


def test_unknown_route_returns_not_found(slack_app):
    client = slack_app.create_flask_app().test_client()

    assert client.post("/other/").status_code == 404


def test_interaction_route_rejects_get(slack_app):
    client = slack_app.create_flask_app().test_client()

    assert client.get("/apps/dev/").status_code == 405
