"""Unit tests for workspace registry operations."""

from __future__ import annotations

from pathlib import Path

import pytest

from tfcstate.errors import DuplicateWorkspaceError, WorkspaceNotFoundError
from tfcstate.managers.workspaces import (
    find_workspace_id,
    list_workspaces,
    register_workspace,
    resolve_workspace_id,
)
from tfcstate.models.workspace import WorkspaceEntry
from tfcstate.store.local import LocalWorkspaceStore


def test_find_workspace_id_match() -> None:
    entries = [WorkspaceEntry(name="prod", workspace_id="ws-123")]
    assert find_workspace_id(entries, "prod") == "ws-123"


def test_find_workspace_id_first_match_wins() -> None:
    entries = [
        WorkspaceEntry(name="prod", workspace_id="ws-first"),
        WorkspaceEntry(name="prod", workspace_id="ws-second"),
    ]
    assert find_workspace_id(entries, "prod") == "ws-first"


def test_find_workspace_id_empty_registry() -> None:
    with pytest.raises(WorkspaceNotFoundError, match="workspace prod not found"):
        find_workspace_id([], "prod")


def test_find_workspace_id_no_match() -> None:
    entries = [WorkspaceEntry(name="dev", workspace_id="ws-1")]
    with pytest.raises(LookupError):
        find_workspace_id(entries, "prod")


async def test_register_appends_and_persists(store: LocalWorkspaceStore) -> None:
    await register_workspace(store, "dev", "ws-1")
    entry = await register_workspace(store, "prod", "ws-123")

    assert entry == WorkspaceEntry(name="prod", workspace_id="ws-123")
    assert [(e.name, e.workspace_id) for e in await list_workspaces(store)] == [
        ("dev", "ws-1"),
        ("prod", "ws-123"),
    ]
    assert await resolve_workspace_id(store, "prod") == "ws-123"


async def test_register_duplicate_leaves_file_unchanged(store: LocalWorkspaceStore, registry_path: Path) -> None:
    await register_workspace(store, "prod", "ws-123")
    before = registry_path.read_bytes()

    with pytest.raises(DuplicateWorkspaceError, match="workspace with the name prod already exists"):
        await register_workspace(store, "prod", "ws-other")

    assert registry_path.read_bytes() == before


async def test_register_creates_registry_file(store: LocalWorkspaceStore, registry_path: Path) -> None:
    assert not registry_path.exists()
    await register_workspace(store, "dev", "ws-1")
    assert registry_path.exists()


async def test_register_rejects_empty_values(store: LocalWorkspaceStore, registry_path: Path) -> None:
    with pytest.raises(ValueError):
        await register_workspace(store, "", "ws-1")
    with pytest.raises(ValueError):
        await register_workspace(store, "dev", "")
    assert not registry_path.exists()


async def test_resolve_missing_registry(store: LocalWorkspaceStore) -> None:
    with pytest.raises(WorkspaceNotFoundError):
        await resolve_workspace_id(store, "prod")
