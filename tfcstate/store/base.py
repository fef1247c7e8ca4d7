"""Storage interfaces for the local workspace registry and state file.

Both live in the current directory by default and are read fresh on every
invocation.  The interface is async so the transfer managers can await
file I/O the same way they await the remote API.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from tfcstate.models.workspace import WorkspaceEntry


@runtime_checkable
class WorkspaceStore(Protocol):
    """Async protocol for the name -> workspace ID registry."""

    async def load(self) -> list[WorkspaceEntry]:
        """Read all entries in file order.  Returns ``[]`` if nothing is stored yet."""
        ...

    async def save(self, entries: Sequence[WorkspaceEntry]) -> None:
        """Replace the stored registry with ``entries``."""
        ...


@runtime_checkable
class StateFile(Protocol):
    """Async protocol for the local copy of a state document."""

    @property
    def path(self) -> Path:
        """Where the document lives, for messages."""
        ...

    async def read(self) -> bytes:
        """Read the raw state bytes.  Raises ``FileNotFoundError`` if missing."""
        ...

    async def write(self, data: bytes) -> None:
        """Replace the local copy with ``data`` verbatim."""
        ...
