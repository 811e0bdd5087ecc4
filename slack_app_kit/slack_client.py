"""Thin wrapper utilities around the Slack WebClient."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from slack_sdk.web import SlackResponse

from .blocks import to_payload
from .config import DEFAULT_SLACK_API_URL

OAUTH_ACCESS_METHOD = "oauth.v2.access"


class SlackClient:
    """Encapsulate Slack WebClient interactions for easier testing."""

    def __init__(
        self,
        *,
        token: str | None = None,
        client: WebClient | None = None,
        base_url: str = DEFAULT_SLACK_API_URL,
    ) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")
        self._client = client or WebClient(token=token, base_url=base_url)

    @classmethod
    def for_oauth(cls, *, base_url: str = DEFAULT_SLACK_API_URL, timeout: float = 10.0) -> "SlackClient":
        """Build a token-less client for the install exchange; failed calls are never retried."""
        return cls(client=WebClient(base_url=base_url, timeout=timeout, retry_handlers=[]))

    @property
    def client(self) -> WebClient:
        """Expose the underlying WebClient for advanced use cases."""
        return self._client

    def exchange_code(self, *, code: str, client_id: str, client_secret: str) -> dict[str, Any]:
        """Trade an OAuth authorization *code* for the workspace access response.

        A response with ``ok`` set to false is returned as-is. Transport
        failures surface as ``OSError``; a body that is not a JSON object
        raises ``ValueError``.
        """

        form = {"code": code, "client_id": client_id, "client_secret": client_secret}
        try:
            response = self._client.api_call(OAUTH_ACCESS_METHOD, data=form)
        except SlackApiError as exc:
            if isinstance(exc.response, SlackResponse) and isinstance(exc.response.data, dict):
                return dict(exc.response.data)
            raise ValueError("Slack returned a non-JSON OAuth access response.") from exc
        if not isinstance(response.data, dict):
            raise ValueError("Slack returned a non-JSON OAuth access response.")
        return dict(response.data)

    def post_message(
        self,
        *,
        channel: str,
        text: str,
        blocks: Sequence[Any] = (),
    ) -> Mapping[str, Any]:
        """Post a message with Block Kit content to a Slack channel."""

        return self._client.chat_postMessage(channel=channel, text=text, blocks=to_payload(list(blocks)))

    def update_message(
        self,
        *,
        channel: str,
        ts: str,
        text: str,
        blocks: Sequence[Any] = (),
    ) -> Mapping[str, Any]:
        """Update an existing Slack message."""

        return self._client.chat_update(channel=channel, ts=ts, text=text, blocks=to_payload(list(blocks)))

    def open_view(self, *, trigger_id: str, view: Any) -> Mapping[str, Any]:
        """Open a modal in response to an interaction's trigger id."""

        return self._client.views_open(trigger_id=trigger_id, view=to_payload(view))
