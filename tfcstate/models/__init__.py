"""Data models for tfcstate."""

from tfcstate.models.api import (
    CurrentStateVersionResponse,
    StateVersionAttributes,
    StateVersionCreate,
    StateVersionData,
    UnlockRequest,
)
from tfcstate.models.state import PullResult, PushResult, StateMetadata
from tfcstate.models.workspace import WorkspaceEntry

__all__ = [
    # API bodies
    "CurrentStateVersionResponse",
    # State
    "PullResult",
    "PushResult",
    "StateMetadata",
    "StateVersionAttributes",
    "StateVersionCreate",
    "StateVersionData",
    "UnlockRequest",
    # Registry
    "WorkspaceEntry",
]
