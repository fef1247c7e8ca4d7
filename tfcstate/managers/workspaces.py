"""Workspace registry operations: register, look up, list.

Entries are only ever appended; there is no update or delete.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from tfcstate.errors import DuplicateWorkspaceError, WorkspaceNotFoundError
from tfcstate.models.workspace import WorkspaceEntry
from tfcstate.store.base import WorkspaceStore


def find_workspace_id(entries: Sequence[WorkspaceEntry], name: str) -> str:
    """Return the workspace ID registered under ``name`` (first match wins).

    Raises ``WorkspaceNotFoundError`` if no entry has that name.
    """
    for entry in entries:
        if entry.name == name:
            return entry.workspace_id
    raise WorkspaceNotFoundError(name)


async def resolve_workspace_id(store: WorkspaceStore, name: str) -> str:
    """Load the registry and look ``name`` up."""
    return find_workspace_id(await store.load(), name)


async def register_workspace(store: WorkspaceStore, name: str, workspace_id: str) -> WorkspaceEntry:
    """Append a new entry.  Raises ``DuplicateWorkspaceError`` if ``name`` is taken.

    On a duplicate the registry is not written at all.
    """
    entry = WorkspaceEntry(name=name, workspace_id=workspace_id)
    entries = await store.load()
    if any(existing.name == name for existing in entries):
        raise DuplicateWorkspaceError(name)

    entries.append(entry)
    await store.save(entries)
    logger.debug("Registered workspace {} -> {}", name, workspace_id)
    return entry


async def list_workspaces(store: WorkspaceStore) -> list[WorkspaceEntry]:
    """All registered workspaces, in registration order."""
    return await store.load()
