"""Thin async client for the Terraform Cloud API.

Wraps an ``httpx.AsyncClient`` and adds the bearer token and the JSON:API
media type to every API request.  Status handling is left to the callers,
which know what "success" means for each endpoint; ``expect_status`` is the
shared check.

Downloads of pre-signed state URLs go through ``download`` and carry no
credentials.  Nothing is retried and no timeout beyond httpx's default is
configured.
"""

from __future__ import annotations

from types import TracebackType

import httpx
from loguru import logger

from tfcstate.errors import APIStatusError, TransportError
from tfcstate.settings import DEFAULT_API_URL

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"


class TfcClient:
    """Authenticated access to ``{base_url}/...`` API paths.

    Parameters
    ----------
    token:
        API token, sent as ``Authorization: Bearer <token>``.
    base_url:
        API root, e.g. ``https://app.terraform.io/api/v2``.
    http_client:
        Client to send requests with.  A private one is created (and closed
        by ``aclose``) if not provided.  Must not carry default auth headers,
        since it is also used for unauthenticated downloads.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._own_client = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> TfcClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._own_client:
            await self._http.aclose()

    # -- Requests --------------------------------------------------------------

    async def request(self, method: str, path: str, *, content: bytes | str | None = None) -> httpx.Response:
        """Send an authenticated API request and return the response, whatever its status."""
        url = f"{self._base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": JSONAPI_CONTENT_TYPE,
        }
        response = await self._send(method, url, headers=headers, content=content)
        logger.debug("{} {} -> {}", method, path, response.status_code)
        return response

    async def download(self, url: str) -> bytes:
        """Fetch a pre-signed URL without credentials.  Anything but 200 is an error."""
        response = await self._send("GET", url, follow_redirects=True)
        expect_status(response, httpx.codes.OK, f"failed to download state from {_strip_query(url)}")
        logger.debug("Downloaded {} bytes from {}", len(response.content), _strip_query(url))
        return response.content

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        content: bytes | str | None = None,
        follow_redirects: bool = False,
    ) -> httpx.Response:
        try:
            return await self._http.request(
                method, url, headers=headers, content=content, follow_redirects=follow_redirects
            )
        except httpx.RequestError as exc:
            msg = f"{method} {_strip_query(url)} failed: {exc}"
            raise TransportError(msg) from exc


def expect_status(response: httpx.Response, expected: int, message: str) -> None:
    """Raise ``APIStatusError`` unless ``response`` has exactly ``expected`` status."""
    if response.status_code != expected:
        msg = f"{message} (status code {response.status_code})"
        raise APIStatusError(msg, response.status_code)


def _strip_query(url: str) -> str:
    """Drop the query string so pre-signed credentials never end up in logs or errors."""
    return url.split("?", 1)[0]
