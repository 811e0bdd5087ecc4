"""The Slack app object: settings, workspace tokens and handler tables."""

from __future__ import annotations

from typing import Iterable

from flask import Flask

from .config import AppSettings
from .install import InstallCallback
from .registry import Handler, HandlerRegistry
from .server import build_flask_app
from .slack_client import SlackClient
from .tokens import TokenRegistry, WorkspaceToken


def _register(registry: HandlerRegistry, key: str, handler: Handler | None):
    if handler is not None:
        return registry.register(key, handler)

    def decorator(func: Handler) -> Handler:
        return registry.register(key, func)

    return decorator


class SlackApp:
    """Own everything a running Slack app shares between requests.

    Handlers can be registered directly or as decorators::

        app = SlackApp(settings)

        @app.on_command("/ping")
        def ping(ctx):
            ctx.json({"text": "pong"})

    All tables are safe to modify after serving has started.
    """

    def __init__(self, settings: AppSettings, *, oauth_client: SlackClient | None = None) -> None:
        self.settings = settings
        self.tokens = TokenRegistry(settings.workspace_tokens)
        self.commands = HandlerRegistry("command")
        self.shortcuts = HandlerRegistry("shortcut")
        self.actions = HandlerRegistry("action")
        self.view_submissions = HandlerRegistry("view submission")
        self.view_closes = HandlerRegistry("view close")
        self.oauth_client = oauth_client or SlackClient.for_oauth(
            base_url=settings.slack_api_url,
            timeout=settings.oauth_timeout,
        )
        self._install_callback: InstallCallback | None = None

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def route_prefix(self) -> str:
        return self.settings.route_prefix

    # Workspace tokens

    def set_tokens(self, tokens: Iterable[WorkspaceToken]) -> None:
        self.tokens.set_tokens(tokens)

    def add_token(self, token: WorkspaceToken) -> None:
        self.tokens.add_token(token)

    def find_token(self, workspace_id: str | None) -> WorkspaceToken | None:
        return self.tokens.find(workspace_id)

    # Handler registration

    def on_command(self, command: str, handler: Handler | None = None):
        return _register(self.commands, command, handler)

    def remove_command(self, command: str) -> None:
        self.commands.unregister(command)

    def on_shortcut(self, callback_id: str, handler: Handler | None = None):
        return _register(self.shortcuts, callback_id, handler)

    def on_action(self, action_id: str, handler: Handler | None = None):
        return _register(self.actions, action_id, handler)

    def on_view_submission(self, callback_id: str, handler: Handler | None = None):
        return _register(self.view_submissions, callback_id, handler)

    def on_view_close(self, callback_id: str, handler: Handler | None = None):
        return _register(self.view_closes, callback_id, handler)

    def on_app_install(self, callback: InstallCallback | None) -> InstallCallback | None:
        """Run *callback* after each successful install.

        It receives the install result, the response and the request, and
        returns True when it wrote its own page instead of the default one.
        """
        self._install_callback = callback
        return callback

    @property
    def install_callback(self) -> InstallCallback | None:
        return self._install_callback

    def create_flask_app(self, import_name: str = __name__) -> Flask:
        return build_flask_app(self, import_name=import_name)

