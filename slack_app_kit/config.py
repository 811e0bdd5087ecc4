"""Pydantic-based configuration helpers for Slack App Kit."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .tokens import WorkspaceToken

DEFAULT_SLACK_API_URL = "https://slack.com/api/"


class AppSettings(BaseModel):
    """Settings identifying the Slack app and how its endpoints are exposed."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., alias="SLACK_APP_NAME")
    route_prefix: str = Field(..., alias="SLACK_ROUTE_PREFIX")
    client_id: str = Field(..., alias="SLACK_CLIENT_ID")
    client_secret: str = Field(..., alias="SLACK_CLIENT_SECRET")
    signing_secret: str = Field(..., alias="SLACK_SIGNING_SECRET")
    workspace_tokens: List[WorkspaceToken] = Field(default_factory=list, alias="SLACK_WORKSPACE_TOKENS")
    oauth_timeout: float = Field(10.0, alias="SLACK_OAUTH_TIMEOUT")
    slack_api_url: str = Field(DEFAULT_SLACK_API_URL, alias="SLACK_API_URL")
    request_max_age: int | None = Field(None, alias="SLACK_REQUEST_MAX_AGE")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(True, alias="LOG_JSON")

    @field_validator("route_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        prefix = value.strip().strip("/")
        if not prefix:
            raise ValueError("Slack App route prefix cannot be empty")
        return prefix

    @field_validator("signing_secret")
    @classmethod
    def _require_secret(cls, value: str) -> str:
        if not value:
            raise ValueError("Slack signing secret cannot be empty")
        return value

    @field_validator("workspace_tokens", mode="before")
    @classmethod
    def _split_tokens(cls, value):
        """Accept ``T1=xoxb-1,T2=xoxb-2`` as well as already structured tokens."""
        if not isinstance(value, str):
            return value
        tokens: list[dict[str, str]] = []
        for item in value.split(","):
            item = item.strip()
            if not item:
                continue
            workspace_id, sep, token = item.partition("=")
            if not sep or not workspace_id.strip() or not token.strip():
                raise ValueError(f"Malformed workspace token entry '{item}'")
            tokens.append({"workspace_id": workspace_id.strip(), "token": token.strip()})
        return tokens

    @field_validator("oauth_timeout")
    @classmethod
    def _ensure_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("OAuth timeout must be greater than zero")
        return value

    @field_validator("request_max_age", mode="before")
    @classmethod
    def _blank_max_age(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _format_missing(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of missing env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    try:
        return AppSettings.model_validate(os.environ)
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors() if error["type"] == "missing"]
        if missing:
            message = f"Missing required environment variables: {_format_missing(missing)}"
        else:
            message = f"Invalid Slack App configuration: {exc}"
        raise RuntimeError(message) from exc
