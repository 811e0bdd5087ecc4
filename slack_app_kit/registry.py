"""Thread-safe lookup tables mapping routing keys to handlers."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Dict

if TYPE_CHECKING:  # pragma: no cover
    from .context import RequestContext

Handler = Callable[["RequestContext"], None]


class HandlerRegistry:
    """Map a routing key (command, callback_id or action_id) to one handler.

    Registering a key twice keeps only the latest handler.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._lock = threading.Lock()
        self._handlers: Dict[str, Handler] = {}

    def register(self, key: str, handler: Handler) -> Handler:
        if not key:
            raise ValueError(f"A {self.kind} handler requires a non-empty key.")
        if not callable(handler):
            raise TypeError(f"The {self.kind} handler for '{key}' is not callable.")
        with self._lock:
            self._handlers[key] = handler
        return handler

    def unregister(self, key: str) -> None:
        """Remove the handler for *key*; unknown keys are ignored."""
        with self._lock:
            self._handlers.pop(key, None)

    def get(self, key: str | None) -> Handler | None:
        if key is None:
            return None
        with self._lock:
            return self._handlers.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._handlers)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)
