"""State document metadata and transfer outcomes."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class StateMetadata(BaseModel):
    """Fields parsed out of a state document for the upload payload.

    Defaults apply when the document is not a JSON object or the field is
    absent.
    """

    serial: int = Field(default=0, ge=0)
    lineage: str = ""


class PullResult(BaseModel):
    workspace_name: str
    workspace_id: str
    path: Path
    size: int
    """Number of bytes written."""


class PushResult(BaseModel):
    """Outcome of a push.

    The upload and the unlock that follows it are separate outcomes: a push
    whose unlock failed is still a successful push, with ``unlocked=False``
    and the failure message in ``unlock_error``.
    """

    workspace_name: str
    workspace_id: str
    md5: str
    serial: int
    lineage: str
    unlocked: bool = True
    unlock_error: str | None = None
