"""OAuth2 install exchange that onboards a new workspace."""

from __future__ import annotations

from http.client import HTTPException
from typing import TYPE_CHECKING, Callable

import structlog
from flask import Request, Response
from pydantic import ValidationError

from .context import new_response
from .dispatcher import plain_response
from .events import InstallResult
from .tokens import WorkspaceToken

if TYPE_CHECKING:  # pragma: no cover
    from .application import SlackApp

InstallCallback = Callable[[InstallResult, Response, Request], bool]

AUTHORIZATION_FAILED = "Unable to authorize Slack App for workspace"
UNREADABLE_ACCESS_RESPONSE = "Unable to get Slack OAuth2 Access Response for workspace"
ACCESS_NOT_OK = "Slack App Access Request is not Ok"

APP_NAME_PLACEHOLDER = "{{APP_NAME}}"

INSTALL_SUCCESS_PAGE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>{{APP_NAME}} installed</title>
    <style>
      body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
             background: #f8f8f8; color: #1d1c1d; display: flex; align-items: center;
             justify-content: center; height: 100vh; margin: 0; }
      main { background: #fff; border-radius: 8px; padding: 2.5rem 3rem; text-align: center;
             box-shadow: 0 1px 3px rgba(0, 0, 0, 0.12); }
      h1 { font-size: 1.5rem; margin-bottom: 0.5rem; }
    </style>
  </head>
  <body>
    <main>
      <h1>{{APP_NAME}} was installed successfully</h1>
      <p>You can close this window and head back to Slack.</p>
    </main>
  </body>
</html>
"""


def render_success_page(app_name: str) -> str:
    return INSTALL_SUCCESS_PAGE.replace(APP_NAME_PLACEHOLDER, app_name)


def handle_install(slack_app: "SlackApp", request: Request) -> Response:
    """Exchange the ``code`` query parameter for a workspace access token.

    The authorization code is single-use and issued by Slack, so this path
    is not signature-verified.
    """

    settings = slack_app.settings
    code = request.args.get("code", "")
    log = structlog.get_logger()

    try:
        data = slack_app.oauth_client.exchange_code(
            code=code,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
        )
    except (OSError, HTTPException) as exc:
        log.error("install_exchange_failed", error=str(exc))
        return plain_response(500, AUTHORIZATION_FAILED)
    except ValueError as exc:
        log.error("install_response_unreadable", error=str(exc))
        return plain_response(500, UNREADABLE_ACCESS_RESPONSE)

    try:
        result = InstallResult.model_validate(data)
    except ValidationError:
        log.error("install_response_unreadable", error="invalid_schema")
        return plain_response(500, UNREADABLE_ACCESS_RESPONSE)

    if not result.ok:
        log.warning("install_not_ok", error=result.error)
        return plain_response(500, ACCESS_NOT_OK)

    team_id = result.team.id if result.team is not None else ""
    if team_id:
        slack_app.add_token(WorkspaceToken(workspace_id=team_id, token=result.access_token))
        log.info("workspace_installed", team_id=team_id, app_id=result.app_id)
    else:
        log.warning("install_missing_team", enterprise_id=result.enterprise.id if result.enterprise else None)

    response = new_response()
    suppress_default_page = False
    callback = slack_app.install_callback
    if callback is not None:
        suppress_default_page = bool(callback(result, response, request))

    if suppress_default_page:
        return response

    response.status_code = 200
    response.headers["Content-Type"] = "text/html; charset=utf-8"
    response.set_data(render_success_page(settings.name))
    return response
