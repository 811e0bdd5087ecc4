"""Tests for slash command dispatch."""

from pathlib import Path
import sys

import pytest
from structlog.testing import capture_logs

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

from slack_app_kit import AppSettings, SlackApp, WorkspaceToken, security  # noqa: E402

SECRET = "s"
TIMESTAMP = "1000"
PING_BODY = "team_id=T1&command=%2Fping"


def _signed_headers(body, *, timestamp=TIMESTAMP):
    return {
        security.SLACK_SIGNATURE_HEADER: security.compute_signature(SECRET, timestamp, body),
        security.SLACK_TIMESTAMP_HEADER: timestamp,
    }


def _post_command(client, body, headers=None):
    return client.post(
        "/dev/commands",
        data=body,
        content_type="application/x-www-form-urlencoded",
        headers=_signed_headers(body) if headers is None else headers,
    )


@pytest.fixture
def slack_app():
    settings = AppSettings(
        name="Dev Bot",
        route_prefix="dev",
        client_id="cid",
        client_secret="csecret",
        signing_secret=SECRET,
        workspace_tokens=[WorkspaceToken("T1", "xoxb-t1")],
    )
    return SlackApp(settings, oauth_client=object())


@pytest.fixture
def client(slack_app):
    return slack_app.create_flask_app().test_client()


def test_registered_command_receives_form_and_token(slack_app, client):
    seen = []

    @slack_app.on_command("/ping")
    def ping(ctx):
        seen.append(ctx)
        ctx.json({"response_type": "ephemeral", "text": "pong"})

    response = _post_command(client, PING_BODY)

    assert response.status_code == 200
    assert response.get_json() == {"response_type": "ephemeral", "text": "pong"}
    assert len(seen) == 1
    ctx = seen[0]
    assert ctx.token == "xoxb-t1"
    assert ctx.body == PING_BODY.encode()
    assert ctx.form["command"] == "/ping"
    assert ctx.event is None


def test_handler_without_output_returns_empty_ok(slack_app, client):
    slack_app.on_command("/ping", lambda ctx: None)

    response = _post_command(client, PING_BODY)

    assert response.status_code == 200
    assert response.data == b""


def test_unknown_workspace_is_rejected(slack_app, client):
    calls = []
    slack_app.on_command("/ping", calls.append)
    body = "team_id=T2&command=%2Fping"

    with capture_logs() as logs:
        response = _post_command(client, body)

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "App not installed for workspace"
    assert calls == []
    assert any(entry["event"] == "workspace_not_installed" for entry in logs)


def test_missing_team_id_is_rejected(slack_app, client):
    slack_app.on_command("/ping", lambda ctx: None)

    response = _post_command(client, "command=%2Fping")

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "App not installed for workspace"


def test_unregistered_command(client):
    with capture_logs() as logs:
        response = _post_command(client, PING_BODY)

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Unrecognized command"
    assert {"event": "unrecognized_command", "command": "/ping", "log_level": "warning"} in logs


def test_removed_command_is_no_longer_served(slack_app, client):
    slack_app.on_command("/ping", lambda ctx: None)
    slack_app.remove_command("/ping")

    response = _post_command(client, PING_BODY)

    assert response.get_data(as_text=True) == "Unrecognized command"


def test_bad_signature_is_unauthorised(slack_app, client):
    calls = []
    slack_app.on_command("/ping", calls.append)
    headers = {security.SLACK_SIGNATURE_HEADER: "v0=deadbeef", security.SLACK_TIMESTAMP_HEADER: TIMESTAMP}

    with capture_logs() as logs:
        response = _post_command(client, PING_BODY, headers=headers)

    assert response.status_code == 401
    assert response.get_data(as_text=True) == "Unauthorized"
    assert calls == []
    assert any(entry["event"] == "invalid_signature" for entry in logs)


@pytest.mark.parametrize("body", [b"team_id=T1&command=%2", b"team_id=T1&command=\xc3\x28"])
def test_malformed_form_body(slack_app, client, body):
    calls = []
    slack_app.on_command("/ping", calls.append)

    response = _post_command(client, body)

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Invalid Form Body"
    assert calls == []


@pytest.mark.parametrize("body", [PING_BODY + "&", PING_BODY + "&flag", "&" + PING_BODY])
def test_empty_and_valueless_fields_are_accepted(slack_app, client, body):
    seen = []
    slack_app.on_command("/ping", seen.append)

    response = _post_command(client, body)

    assert response.status_code == 200
    assert len(seen) == 1
    assert seen[0].form["command"] == "/ping"
    assert seen[0].body == body.encode()


def test_field_without_value_is_blank(slack_app, client):
    seen = []
    slack_app.on_command("/ping", seen.append)

    _post_command(client, PING_BODY + "&flag")

    assert seen[0].form["flag"] == ""


def test_context_client_uses_configured_api_url():
    settings = AppSettings(
        name="Dev Bot",
        route_prefix="dev",
        client_id="cid",
        client_secret="csecret",
        signing_secret=SECRET,
        workspace_tokens=[WorkspaceToken("T1", "xoxb-t1")],
        slack_api_url="https://slack.test/api/",
    )
    slack_app = SlackApp(settings, oauth_client=object())
    seen = []
    slack_app.on_command("/ping", seen.append)

    _post_command(slack_app.create_flask_app().test_client(), PING_BODY)

    assert seen[0].api_url == "https://slack.test/api/"
    assert seen[0].client.client.base_url == "https://slack.test/api/"


def test_first_value_of_repeated_field_wins(slack_app, client):
    seen = []
    slack_app.on_command("/ping", seen.append)

    response = _post_command(client, PING_BODY + "&team_id=T2")

    assert response.status_code == 200
    assert seen[0].form["team_id"] == "T1"


def test_get_is_not_allowed(client):
    response = client.get("/dev/commands")

    assert response.status_code == 405
