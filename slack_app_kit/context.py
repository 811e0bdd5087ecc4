"""Per-request context handed to application handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Mapping

from flask import Request, Response

from .blocks import to_payload
from .config import DEFAULT_SLACK_API_URL
from .events import InteractionPayload
from .slack_client import SlackClient


def new_response() -> Response:
    """Return the blank response a handler writes into (200, empty body)."""
    return Response(status=200)


@dataclass
class RequestContext:
    """Everything a handler needs to answer one Slack request.

    ``body`` is the raw request body exactly as Slack signed it and ``token``
    the access token of the workspace the request came from, which ``client``
    uses against ``api_url``. Handlers write their reply into ``response``;
    the dispatcher returns it untouched.
    """

    body: bytes
    token: str
    request: Request
    response: Response = field(default_factory=new_response)
    form: Mapping[str, str] = field(default_factory=dict)
    event: InteractionPayload | None = None
    api_url: str = DEFAULT_SLACK_API_URL

    @cached_property
    def client(self) -> SlackClient:
        """Web API client authenticated as the requesting workspace."""
        return SlackClient(token=self.token, base_url=self.api_url)

    def json(self, payload: Any, status: int = 200) -> None:
        """Write *payload* (a mapping or Block Kit model) as a JSON reply."""
        respond(self, status, json.dumps(to_payload(payload)), {"Content-Type": "application/json"})


def respond(
    ctx: RequestContext,
    status: int,
    body: bytes | str | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Write *status*, then *headers*, then *body* into the context's response."""

    response = ctx.response
    for key, value in (headers or {}).items():
        response.headers[key] = value
    response.status_code = status
    response.set_data(body or b"")
    return response
