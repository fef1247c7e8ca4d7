"""Error taxonomy.

Every failure is fatal for the invocation.  The CLI turns any
``TfcStateError`` (and ``OSError`` for filesystem problems) into a
non-zero exit with the message on stderr.  Lookup and format errors also
subclass the matching builtin so callers can catch them generically.
"""

from __future__ import annotations


class TfcStateError(Exception):
    """Base class for all expected failures."""


class ConfigurationError(TfcStateError):
    """Required configuration (the API token) is missing."""


class WorkspaceNotFoundError(TfcStateError, LookupError):
    """No registry entry has the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"workspace {name} not found")


class DuplicateWorkspaceError(TfcStateError, ValueError):
    """A registry entry with the same name already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"workspace with the name {name} already exists")


class TransportError(TfcStateError):
    """The request never produced a response (DNS, connect, read...)."""


class APIStatusError(TransportError):
    """The remote side answered with an unexpected status code."""

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class FormatError(TfcStateError, ValueError):
    """A document (API response, registry file, state file) has an unexpected shape."""
