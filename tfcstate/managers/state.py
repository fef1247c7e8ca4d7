"""Remote state transfer: pull and push.

Pull::

    registry lookup -> lock -> current-state-version -> download -> write file

Push::

    registry lookup -> read file -> build payload -> create state version -> unlock

Every step runs strictly after the previous one and the first failure
aborts the sequence.  Nothing is rolled back: a pull that fails after
locking leaves the workspace locked, and a push that fails before its
unlock leaves it locked too.  The pull case is logged with a hint to run
the ``unlock`` command.
"""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import ValidationError

from tfcstate.client import TfcClient, expect_status
from tfcstate.errors import FormatError, TfcStateError
from tfcstate.managers.locks import acquire_lock, release_lock
from tfcstate.managers.workspaces import resolve_workspace_id
from tfcstate.models.api import CurrentStateVersionResponse, StateVersionCreate
from tfcstate.models.state import PullResult, PushResult
from tfcstate.payload import build_state_version
from tfcstate.settings import DEFAULT_UNLOCK_REASON
from tfcstate.store.base import StateFile, WorkspaceStore

# ---------------------------------------------------------------------------
# API calls
# ---------------------------------------------------------------------------


async def get_download_url(client: TfcClient, workspace_id: str) -> str:
    """Return the hosted download URL of the workspace's current state version.

    Raises ``APIStatusError`` on any status but 200 and ``FormatError`` if
    the body lacks ``data.attributes.hosted-state-download-url``.
    """
    response = await client.request("GET", f"/workspaces/{workspace_id}/current-state-version")
    expect_status(response, httpx.codes.OK, f"failed to get current state version for workspace {workspace_id}")
    try:
        body = CurrentStateVersionResponse.model_validate_json(response.content)
    except ValidationError as exc:
        msg = f"Unexpected current-state-version response for workspace {workspace_id}: {exc}"
        raise FormatError(msg) from None
    return body.data.attributes.hosted_state_download_url


async def upload_state_version(client: TfcClient, workspace_id: str, body: StateVersionCreate) -> None:
    """Create a new state version.  Raises ``APIStatusError`` on any status but 201."""
    response = await client.request(
        "POST",
        f"/workspaces/{workspace_id}/state-versions",
        content=body.model_dump_json(),
    )
    expect_status(response, httpx.codes.CREATED, f"failed to upload state for workspace {workspace_id}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def pull_state(
    client: TfcClient,
    store: WorkspaceStore,
    state_file: StateFile,
    workspace_name: str,
) -> PullResult:
    """Lock the workspace and write its current state to ``state_file``.

    The lock stays held on success; a later ``push_state``
    releases it.
    """
    workspace_id = await resolve_workspace_id(store, workspace_name)
    await acquire_lock(client, workspace_id)

    try:
        url = await get_download_url(client, workspace_id)
        data = await client.download(url)
        await state_file.write(data)
    except (TfcStateError, OSError):
        logger.warning(
            "Pull aborted; workspace {} ({}) is still locked. Run `tfcstate unlock {}` to release it.",
            workspace_name,
            workspace_id,
            workspace_name,
        )
        raise

    logger.info("Pulled {} bytes of state for workspace {} ({})", len(data), workspace_name, workspace_id)
    return PullResult(workspace_name=workspace_name, workspace_id=workspace_id, path=state_file.path, size=len(data))


async def push_state(
    client: TfcClient,
    store: WorkspaceStore,
    state_file: StateFile,
    workspace_name: str,
    *,
    unlock_reason: str = DEFAULT_UNLOCK_REASON,
) -> PushResult:
    """Upload ``state_file`` as a new state version, then unlock the workspace.

    An unlock failure after a successful upload does not raise: it is logged
    and reported through ``PushResult.unlocked`` / ``unlock_error``.
    """
    workspace_id = await resolve_workspace_id(store, workspace_name)
    data = await state_file.read()
    body = build_state_version(data)
    attributes = body.data.attributes

    await upload_state_version(client, workspace_id, body)
    logger.info(
        "Uploaded state serial={} lineage={} to workspace {}", attributes.serial, attributes.lineage, workspace_id
    )

    result = PushResult(
        workspace_name=workspace_name,
        workspace_id=workspace_id,
        md5=attributes.md5,
        serial=attributes.serial,
        lineage=attributes.lineage,
    )
    try:
        await release_lock(client, workspace_id, reason=unlock_reason)
    except TfcStateError as exc:
        logger.warning("State uploaded but unlocking workspace {} failed: {}", workspace_id, exc)
        return result.model_copy(update={"unlocked": False, "unlock_error": str(exc)})
    return result
