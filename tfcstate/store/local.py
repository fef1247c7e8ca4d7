"""Local filesystem stores.

The registry is a pretty-printed JSON array::

    [
      {
        "name": "prod",
        "workspace_id": "ws-123"
      }
    ]

The state file holds the raw bytes of the last pulled state document.

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path, so an interrupted write never leaves a
half-written registry or state file behind.  There is no locking between
processes; two concurrent registrations race and the last writer wins.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from collections.abc import Sequence
from functools import partial
from pathlib import Path

from anyio import to_thread
from pydantic import TypeAdapter, ValidationError

from tfcstate.errors import FormatError
from tfcstate.models.workspace import WorkspaceEntry

_ENTRIES = TypeAdapter(list[WorkspaceEntry])


class LocalWorkspaceStore:
    """Local filesystem implementation of the WorkspaceStore protocol."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> list[WorkspaceEntry]:
        raw = await to_thread.run_sync(partial(_read_if_exists, self._path))
        if raw is None:
            return []
        try:
            return _ENTRIES.validate_json(raw)
        except ValidationError as exc:
            msg = f"Invalid workspace registry {self._path}: {exc}"
            raise FormatError(msg) from None

    async def save(self, entries: Sequence[WorkspaceEntry]) -> None:
        data = _ENTRIES.dump_json(list(entries), indent=2)
        await to_thread.run_sync(partial(_atomic_write, self._path, data))


class LocalStateFile:
    """Local filesystem implementation of the StateFile protocol."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def read(self) -> bytes:
        return await to_thread.run_sync(self._path.read_bytes)

    async def write(self, data: bytes) -> None:
        await to_thread.run_sync(partial(_atomic_write, self._path, data))


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: bytes) -> None:
    """Write data atomically: temp file + rename.

    Ensures readers never see a partially-written file.  The temp file is
    created in the same directory so the rename is atomic on POSIX.  A
    symlinked path is written through to its target, and the result keeps
    the mode of the file it replaces (or the umask default for a new file).
    """
    path = path.resolve() if path.is_symlink() else path
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _target_mode(path: Path) -> int:
    """Permission bits for ``path``: its current mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _read_if_exists(path: Path) -> bytes | None:
    """Read file contents, or ``None`` if the file does not exist."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
