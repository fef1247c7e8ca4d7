"""Local stores for the workspace registry and the state file."""

from tfcstate.store.base import StateFile, WorkspaceStore
from tfcstate.store.local import LocalStateFile, LocalWorkspaceStore

__all__ = ["LocalStateFile", "LocalWorkspaceStore", "StateFile", "WorkspaceStore"]
