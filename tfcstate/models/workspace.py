"""Workspace registry model.

A registry entry maps a short local name to a Terraform Cloud workspace ID
(``ws-...``).  The registry file is a JSON array of these entries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class WorkspaceEntry(BaseModel):
    """One registry row.  Names are unique within a registry."""

    name: str = Field(min_length=1)
    workspace_id: str = Field(min_length=1, description="Remote workspace ID, e.g. ws-abc123")
