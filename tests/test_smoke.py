"""Smoke tests for the application entry point."""

from importlib import reload
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover - import-time guard
    sys.path.insert(0, str(ROOT))

import app as app_module  # noqa: E402  (import after path adjustment)
from slack_app_kit import config, security  # noqa: E402


def _seed_env(monkeypatch):
    monkeypatch.setenv("SLACK_APP_NAME", "Dev Bot")
    monkeypatch.setenv("SLACK_ROUTE_PREFIX", "dev")
    monkeypatch.setenv("SLACK_CLIENT_ID", "cid")
    monkeypatch.setenv("SLACK_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("SLACK_SIGNING_SECRET", "s")
    monkeypatch.setenv("SLACK_WORKSPACE_TOKENS", "T1=xoxb-t1")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    config.get_settings.cache_clear()


def test_root_endpoint_returns_empty_ok(monkeypatch):
    _seed_env(monkeypatch)

    reload(app_module)
    flask_app = app_module.create_app()

    with flask_app.test_client() as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.data == b""
    config.get_settings.cache_clear()


def test_setup_hook_registers_handlers(monkeypatch):
    _seed_env(monkeypatch)

    def setup(slack_app):
        slack_app.on_command("/ping", lambda ctx: ctx.json({"text": "pong"}))

    reload(app_module)
    flask_app = app_module.create_app(setup=setup)
    body = "team_id=T1&command=%2Fping"
    headers = {
        security.SLACK_SIGNATURE_HEADER: security.compute_signature("s", "1000", body),
        security.SLACK_TIMESTAMP_HEADER: "1000",
    }

    with flask_app.test_client() as client:
        response = client.post(
            "/dev/commands",
            data=body,
            content_type="application/x-www-form-urlencoded",
            headers=headers,
        )
        assert response.status_code == 200
        assert response.get_json() == {"text": "pong"}
    assert flask_app.extensions["slack_app"].commands.keys() == ["/ping"]
    config.get_settings.cache_clear()
