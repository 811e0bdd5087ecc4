"""Slack App Kit package initialisation."""

from .application import SlackApp  # noqa: F401
from .config import AppSettings, get_settings  # noqa: F401
from .context import RequestContext, respond  # noqa: F401
from .events import InstallResult, InteractionPayload, convert_state  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .security import compute_signature, verify_signature  # noqa: F401
from .slack_client import SlackClient  # noqa: F401
from .tokens import TokenRegistry, WorkspaceToken  # noqa: F401

__all__ = [
    "SlackApp",
    "AppSettings",
    "get_settings",
    "RequestContext",
    "respond",
    "InstallResult",
    "InteractionPayload",
    "convert_state",
    "configure_logging",
    "compute_signature",
    "verify_signature",
    "SlackClient",
    "TokenRegistry",
    "WorkspaceToken",
]
