"""Authenticate signed Slack requests and route them to registered handlers.

Every inbound request moves through the same ordered checks: the body is
read and its signature verified, the form (and for interactions the JSON
``payload``) is parsed, the workspace token is resolved, and only then is a
handler looked up. The first failing check rejects the request with a fixed
plain-text message and no handler runs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING, Callable, Dict, Mapping
from urllib.parse import parse_qsl

import structlog
from flask import Request, Response
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from .context import RequestContext
from .events import BLOCK_ACTIONS, SHORTCUT, VIEW_CLOSED, VIEW_SUBMISSION, InteractionPayload
from .registry import Handler, HandlerRegistry
from .security import (
    SLACK_SIGNATURE_HEADER,
    SLACK_TIMESTAMP_HEADER,
    is_fresh_timestamp,
    verify_signature,
)
from .tokens import WorkspaceToken

if TYPE_CHECKING:  # pragma: no cover
    from .application import SlackApp

UNAUTHORIZED = "Unauthorized"
INVALID_BODY = "Invalid Body"
INVALID_FORM_BODY = "Invalid Form Body"
INVALID_JSON = "Invalid JSON format"
NOT_INSTALLED = "App not installed for workspace"
UNRECOGNIZED_COMMAND = "Unrecognized command"
UNRECOGNIZED_INTERACTION = "Unrecognized interaction type"

_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class RejectedRequest(Exception):
    """Raised when a request fails a check and must be answered with *status_code*."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class InteractionRoute:
    registry: Callable[["SlackApp"], HandlerRegistry]
    key: Callable[[InteractionPayload], str | None]
    unrecognized_message: str


def _first_action_id(event: InteractionPayload) -> str | None:
    if not event.actions:
        return None
    return event.actions[0].action_id


def _view_callback_id(event: InteractionPayload) -> str | None:
    if event.view is None:
        return None
    return event.view.callback_id


INTERACTION_ROUTES: Dict[str, InteractionRoute] = {
    SHORTCUT: InteractionRoute(
        attrgetter("shortcuts"), attrgetter("callback_id"), "Unrecognized shortcut callback_id"
    ),
    BLOCK_ACTIONS: InteractionRoute(
        attrgetter("actions"), _first_action_id, "Unrecognized action action_id"
    ),
    VIEW_SUBMISSION: InteractionRoute(
        attrgetter("view_submissions"), _view_callback_id, "Unrecognized view submission callback_id"
    ),
    VIEW_CLOSED: InteractionRoute(
        attrgetter("view_closes"), _view_callback_id, "Unrecognized view closed callback_id"
    ),
}


def plain_response(status_code: int, message: str) -> Response:
    return Response(message, status=status_code, mimetype="text/plain")


def read_body(request: Request) -> bytes:
    try:
        return request.get_data(cache=True)
    except (BadRequest, OSError) as exc:
        raise RejectedRequest(400, INVALID_BODY) from exc


def authenticate(slack_app: "SlackApp", request: Request, body: bytes) -> None:
    """Reject the request unless it carries a valid Slack signature."""

    settings = slack_app.settings
    timestamp = request.headers.get(SLACK_TIMESTAMP_HEADER, "")
    signature = request.headers.get(SLACK_SIGNATURE_HEADER, "")
    if not verify_signature(settings.signing_secret, timestamp, body, signature):
        structlog.get_logger().warning("invalid_signature")
        raise RejectedRequest(401, UNAUTHORIZED)
    if settings.request_max_age is not None and not is_fresh_timestamp(timestamp, settings.request_max_age):
        structlog.get_logger().warning("stale_request_timestamp", timestamp=timestamp)
        raise RejectedRequest(401, UNAUTHORIZED)


def parse_form(body: bytes) -> Dict[str, str]:
    """Decode a form-encoded body; the first value of a repeated field wins.

    Empty fields and fields without ``=`` are accepted. Only bodies that are
    not UTF-8 or carry a malformed percent escape are rejected.
    """

    if not body:
        return {}
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RejectedRequest(400, INVALID_FORM_BODY) from exc
    if _BAD_PERCENT_ESCAPE.search(text):
        raise RejectedRequest(400, INVALID_FORM_BODY)
    form: Dict[str, str] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        form.setdefault(key, value)
    return form


def parse_interaction(form: Mapping[str, str]) -> InteractionPayload:
    try:
        return InteractionPayload.model_validate_json(form.get("payload", ""))
    except ValidationError as exc:
        raise RejectedRequest(400, INVALID_JSON) from exc


def resolve_token(slack_app: "SlackApp", workspace_id: str | None) -> WorkspaceToken:
    token = slack_app.find_token(workspace_id)
    if token is None:
        structlog.get_logger().warning("workspace_not_installed", team_id=workspace_id)
        raise RejectedRequest(400, NOT_INSTALLED)
    return token


def route_interaction(slack_app: "SlackApp", event: InteractionPayload) -> Handler:
    """Return the handler registered for *event*'s category and routing key."""

    log = structlog.get_logger().bind(interaction_type=event.type)
    route = INTERACTION_ROUTES.get(event.type)
    if route is None:
        log.warning("unrecognized_interaction_type")
        raise RejectedRequest(400, UNRECOGNIZED_INTERACTION)

    if event.type == BLOCK_ACTIONS and len(event.actions) > 1:
        # Only the first action of a block_actions payload is dispatched.
        log.debug("additional_actions_ignored", ignored=len(event.actions) - 1)

    key = route.key(event)
    handler = route.registry(slack_app).get(key)
    if handler is None:
        log.warning("unrecognized_routing_key", key=key)
        raise RejectedRequest(400, route.unrecognized_message)
    return handler


def dispatch_interaction(slack_app: "SlackApp", request: Request) -> Response:
    """Handle a ``POST /<prefix>/`` interactive payload."""

    try:
        body = read_body(request)
        authenticate(slack_app, request, body)
        form = parse_form(body)
        event = parse_interaction(form)
        token = resolve_token(slack_app, event.team_id)
        handler = route_interaction(slack_app, event)
    except RejectedRequest as exc:
        return plain_response(exc.status_code, exc.message)

    ctx = RequestContext(
        body=body,
        token=token.token,
        request=request,
        form=form,
        event=event,
        api_url=slack_app.settings.slack_api_url,
    )
    structlog.get_logger().info("interaction_dispatched", interaction_type=event.type, team_id=event.team_id)
    handler(ctx)
    return ctx.response


def dispatch_command(slack_app: "SlackApp", request: Request) -> Response:
    """Handle a ``POST /<prefix>/commands`` slash command."""

    try:
        body = read_body(request)
        authenticate(slack_app, request, body)
        form = parse_form(body)
        token = resolve_token(slack_app, form.get("team_id"))
        command = form.get("command", "")
        handler = slack_app.commands.get(command)
        if handler is None:
            structlog.get_logger().warning("unrecognized_command", command=command)
            raise RejectedRequest(400, UNRECOGNIZED_COMMAND)
    except RejectedRequest as exc:
        return plain_response(exc.status_code, exc.message)

    ctx = RequestContext(
        body=body,
        token=token.token,
        request=request,
        form=form,
        api_url=slack_app.settings.slack_api_url,
    )
    structlog.get_logger().info("command_dispatched", command=command, team_id=form.get("team_id"))
    handler(ctx)
    return ctx.response
