"""In-memory registry of workspace access tokens."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class WorkspaceToken:
    """Access token issued to the app for a single Slack workspace."""

    workspace_id: str
    token: str


class TokenRegistry:
    """Thread-safe ordered collection of workspace tokens.

    A workspace holds at most one entry: adding a token for a workspace that
    is already registered replaces the existing entry in place, so a
    re-installed workspace resolves to its newest token.
    """

    def __init__(self, tokens: Iterable[WorkspaceToken] = ()) -> None:
        self._lock = threading.RLock()
        self._tokens: List[WorkspaceToken] = []
        self.set_tokens(tokens)

    @property
    def tokens(self) -> list[WorkspaceToken]:
        """Return a snapshot of the registered tokens in insertion order."""
        with self._lock:
            return list(self._tokens)

    def set_tokens(self, tokens: Iterable[WorkspaceToken]) -> None:
        """Replace the whole collection."""
        fresh: List[WorkspaceToken] = []
        for token in tokens:
            _upsert(fresh, token)
        with self._lock:
            self._tokens = fresh

    def add_token(self, token: WorkspaceToken) -> None:
        with self._lock:
            _upsert(self._tokens, token)

    def find(self, workspace_id: str | None) -> WorkspaceToken | None:
        """Return the token registered for *workspace_id*, or None if not installed."""
        if not workspace_id:
            return None
        with self._lock:
            for token in self._tokens:
                if token.workspace_id == workspace_id:
                    return token
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


def _upsert(tokens: List[WorkspaceToken], token: WorkspaceToken) -> None:
    for index, existing in enumerate(tokens):
        if existing.workspace_id == token.workspace_id:
            tokens[index] = token
            return
    tokens.append(token)
