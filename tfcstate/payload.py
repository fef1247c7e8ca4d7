"""State-version payload construction.

Turns the raw bytes of a local state document into the body of a
``POST /workspaces/{id}/state-versions`` request: the bytes themselves
(base64), their MD5 (lowercase hex) and the ``serial`` / ``lineage`` fields
the service uses to order and group state versions.
"""

from __future__ import annotations

import base64
import hashlib
import json

from loguru import logger

from tfcstate.errors import FormatError
from tfcstate.models.api import StateVersionAttributes, StateVersionCreate, StateVersionData
from tfcstate.models.state import StateMetadata


def md5_hex(data: bytes) -> str:
    """MD5 digest of the raw bytes, lowercase hex."""
    return hashlib.md5(data).hexdigest()  # noqa: S324


def extract_metadata(data: bytes) -> StateMetadata:
    """Parse ``serial`` and ``lineage`` out of a state document.

    A document that is not a JSON object yields the defaults (serial 0, empty
    lineage) and the upload goes ahead; the service decides whether to accept
    it.  Absent or ``null`` fields also take their default.  A field that is
    present with the wrong type raises ``FormatError``.
    """
    try:
        document = json.loads(data)
    except (ValueError, RecursionError):
        logger.warning("State document is not valid JSON; uploading with serial=0 and empty lineage")
        return StateMetadata()
    if not isinstance(document, dict):
        logger.warning("State document is not a JSON object; uploading with serial=0 and empty lineage")
        return StateMetadata()

    serial = document.get("serial")
    if serial is None:
        serial = 0
    elif isinstance(serial, bool) or not isinstance(serial, int) or serial < 0:
        msg = f"State serial must be a non-negative integer, got {serial!r}"
        raise FormatError(msg)

    lineage = document.get("lineage")
    if lineage is None:
        lineage = ""
    elif not isinstance(lineage, str):
        msg = f"State lineage must be a string, got {lineage!r}"
        raise FormatError(msg)

    return StateMetadata(serial=serial, lineage=lineage)


def build_state_version(data: bytes) -> StateVersionCreate:
    """Build the create-state-version body for ``data``."""
    metadata = extract_metadata(data)
    return StateVersionCreate(
        data=StateVersionData(
            attributes=StateVersionAttributes(
                md5=md5_hex(data),
                state=base64.b64encode(data).decode("ascii"),
                serial=metadata.serial,
                lineage=metadata.lineage,
            )
        )
    )
