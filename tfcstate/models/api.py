"""JSON:API request / response bodies for the Terraform Cloud state endpoints.

Only the fields this tool reads or writes are modelled.  Responses ignore
unknown keys; a missing or wrong-typed field fails validation, which the
callers translate to ``FormatError``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Current state version (response)
# ---------------------------------------------------------------------------


class CurrentStateVersionAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hosted_state_download_url: str = Field(alias="hosted-state-download-url")
    """Pre-signed, time-limited URL for the raw state bytes."""


class CurrentStateVersionData(BaseModel):
    attributes: CurrentStateVersionAttributes


class CurrentStateVersionResponse(BaseModel):
    """Body of ``GET /workspaces/{id}/current-state-version``."""

    data: CurrentStateVersionData


# ---------------------------------------------------------------------------
# State version (create)
# ---------------------------------------------------------------------------


class StateVersionAttributes(BaseModel):
    md5: str
    """Lowercase hex MD5 of the raw state bytes."""

    state: str
    """Base64 of the raw state bytes."""

    serial: int
    lineage: str


class StateVersionData(BaseModel):
    type: Literal["state-versions"] = "state-versions"
    attributes: StateVersionAttributes


class StateVersionCreate(BaseModel):
    """Body of ``POST /workspaces/{id}/state-versions``."""

    data: StateVersionData


# ---------------------------------------------------------------------------
# Unlock action
# ---------------------------------------------------------------------------


class LockReference(BaseModel):
    type: Literal["workspace-lock"] = "workspace-lock"


class LockRelationship(BaseModel):
    data: LockReference = Field(default_factory=LockReference)


class UnlockRelationships(BaseModel):
    lock: LockRelationship = Field(default_factory=LockRelationship)


class UnlockAttributes(BaseModel):
    reason: str


class UnlockData(BaseModel):
    type: Literal["actions"] = "actions"
    attributes: UnlockAttributes
    relationships: UnlockRelationships = Field(default_factory=UnlockRelationships)


class UnlockRequest(BaseModel):
    """Body of ``POST /workspaces/{id}/actions/unlock``."""

    data: UnlockData

    @classmethod
    def with_reason(cls, reason: str) -> UnlockRequest:
        return cls(data=UnlockData(attributes=UnlockAttributes(reason=reason)))
