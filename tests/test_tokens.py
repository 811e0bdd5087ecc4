"""Tests for the workspace token registry."""

from pathlib import Path
import sys
import threading

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

from slack_app_kit.tokens import TokenRegistry, WorkspaceToken  # noqa: E402


def test_find_returns_registered_token():
    registry = TokenRegistry()
    registry.add_token(WorkspaceToken(workspace_id="T1", token="xoxb-1"))

    assert registry.find("T1") == WorkspaceToken(workspace_id="T1", token="xoxb-1")


def test_find_unknown_workspace_returns_none():
    registry = TokenRegistry([WorkspaceToken("T1", "xoxb-1")])

    assert registry.find("T2") is None
    assert registry.find("") is None
    assert registry.find(None) is None


def test_add_token_replaces_existing_workspace_entry():
    registry = TokenRegistry([WorkspaceToken("T1", "old"), WorkspaceToken("T2", "other")])

    registry.add_token(WorkspaceToken("T1", "new"))

    assert registry.find("T1").token == "new"
    assert registry.tokens == [WorkspaceToken("T1", "new"), WorkspaceToken("T2", "other")]


def test_set_tokens_replaces_whole_collection():
    registry = TokenRegistry([WorkspaceToken("T1", "xoxb-1")])

    registry.set_tokens([WorkspaceToken("T2", "xoxb-2"), WorkspaceToken("T3", "xoxb-3")])

    assert registry.find("T1") is None
    assert registry.find("T3").token == "xoxb-3"
    assert len(registry) == 2


def test_set_tokens_keeps_one_entry_per_workspace():
    registry = TokenRegistry()

    registry.set_tokens([WorkspaceToken("T1", "first"), WorkspaceToken("T1", "second")])

    assert registry.tokens == [WorkspaceToken("T1", "second")]


def test_tokens_snapshot_is_detached():
    registry = TokenRegistry([WorkspaceToken("T1", "xoxb-1")])

    snapshot = registry.tokens
    snapshot.clear()

    assert registry.find("T1") is not None


def test_concurrent_adds_are_all_recorded():
    registry = TokenRegistry()

    def add_many(offset: int) -> None:
        for index in range(50):
            registry.add_token(WorkspaceToken(f"T{offset + index}", "tok"))

    threads = [threading.Thread(target=add_many, args=(base,)) for base in (0, 50, 100, 150)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 200
