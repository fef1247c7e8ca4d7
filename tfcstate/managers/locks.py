"""Remote workspace lock: acquire before a pull, release after a push.

The lock lives only in the remote service; nothing is recorded locally.
A pull acquires it and leaves it held, and a later successful push (or the
``unlock`` command) releases it.  Both calls succeed only on HTTP 200; the
service's "already locked" answer is reported like any other status.
"""

from __future__ import annotations

import httpx
from loguru import logger

from tfcstate.client import TfcClient, expect_status
from tfcstate.models.api import UnlockRequest
from tfcstate.settings import DEFAULT_UNLOCK_REASON


async def acquire_lock(client: TfcClient, workspace_id: str) -> None:
    """Lock the workspace.  Raises ``APIStatusError`` on any status but 200."""
    response = await client.request("POST", f"/workspaces/{workspace_id}/actions/lock")
    expect_status(response, httpx.codes.OK, f"failed to acquire lock on workspace {workspace_id}")
    logger.info("Locked workspace {}", workspace_id)


async def release_lock(client: TfcClient, workspace_id: str, *, reason: str = DEFAULT_UNLOCK_REASON) -> None:
    """Unlock the workspace.  Raises ``APIStatusError`` on any status but 200."""
    body = UnlockRequest.with_reason(reason).model_dump_json()
    response = await client.request("POST", f"/workspaces/{workspace_id}/actions/unlock", content=body)
    expect_status(response, httpx.codes.OK, f"failed to release lock on workspace {workspace_id}")
    logger.info("Unlocked workspace {}", workspace_id)
