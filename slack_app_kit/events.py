"""Pydantic models for payloads Slack sends to the app."""

from __future__ import annotations

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ModelT = TypeVar("ModelT", bound=BaseModel)

SHORTCUT = "shortcut"
BLOCK_ACTIONS = "block_actions"
VIEW_SUBMISSION = "view_submission"
VIEW_CLOSED = "view_closed"


class SlackPayloadModel(BaseModel):
    """Base for inbound payloads; unknown fields are kept rather than rejected."""

    model_config = ConfigDict(extra="allow")


class InteractionUser(SlackPayloadModel):
    id: str = ""
    username: str = ""
    name: str = ""
    team_id: str = ""


class InteractionTeam(SlackPayloadModel):
    id: str = ""
    domain: str = ""


class InteractionChannel(SlackPayloadModel):
    id: str = ""
    name: str = ""


class InteractionContainer(SlackPayloadModel):
    type: str = ""
    message_ts: str = ""
    channel_id: str = ""
    is_ephemeral: bool = False


class InteractionAction(SlackPayloadModel):
    action_id: str = ""
    block_id: str = ""
    type: str = ""
    value: str | None = None
    action_ts: str = ""
    text: Dict[str, Any] | None = None
    selected_option: Dict[str, Any] | None = None


class ViewState(SlackPayloadModel):
    """Input values keyed by block id, then action id."""

    values: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict)


class InteractionView(SlackPayloadModel):
    id: str = ""
    team_id: str = ""
    type: str = ""
    callback_id: str = ""
    private_metadata: str = ""
    # Blocks echoed back by Slack may use any Block Kit type, so they stay raw.
    blocks: List[Dict[str, Any]] = Field(default_factory=list)
    state: ViewState | None = None
    hash: str = ""
    title: Dict[str, Any] | None = None
    close: Dict[str, Any] | None = None
    submit: Dict[str, Any] | None = None
    clear_on_close: bool = False
    notify_on_close: bool = False
    previous_view_id: str | None = None
    root_view_id: str | None = None
    app_id: str = ""
    external_id: str = ""
    app_installed_team_id: str = ""
    bot_id: str = ""


class InteractionPayload(SlackPayloadModel):
    """The JSON document carried in the ``payload`` form field of an interaction."""

    type: str = ""
    user: InteractionUser | None = None
    api_app_id: str = ""
    token: str = ""
    container: InteractionContainer | None = None
    trigger_id: str = ""
    team: InteractionTeam | None = None
    channel: InteractionChannel | None = None
    response_url: str = ""
    actions: List[InteractionAction] = Field(default_factory=list)
    view: InteractionView | None = None
    callback_id: str = ""
    action_ts: str = ""

    @property
    def team_id(self) -> str | None:
        if self.team is not None and self.team.id:
            return self.team.id
        return None


class OAuthTeam(SlackPayloadModel):
    id: str = ""
    name: str = ""


class OAuthAuthedUser(SlackPayloadModel):
    id: str = ""
    scope: str = ""
    access_token: str = ""
    token_type: str = ""


class InstallResult(SlackPayloadModel):
    """Response of ``oauth.v2.access`` for a completed install."""

    ok: bool
    error: str | None = None
    access_token: str = ""
    token_type: str = ""
    scope: str = ""
    bot_user_id: str = ""
    app_id: str = ""
    team: OAuthTeam | None = None
    enterprise: OAuthTeam | None = None
    authed_user: OAuthAuthedUser | None = None


def convert_state(state: ViewState | Dict[str, Any], model: Type[ModelT]) -> ModelT:
    """Re-validate a view state into an application-defined pydantic *model*."""

    if isinstance(state, BaseModel):
        data = state.model_dump()
    else:
        data = dict(state)
    return model.model_validate(data)
