"""HTTP transport for the Daikin cloud API.

The transport only knows how to issue a GET with query parameters and hand
back the response text. Authentication parameters, decoding and retries are
not its concern; a failed request surfaces immediately as a
DaikinTransportError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import aiohttp

from .constants import API_DEFAULTS, BASE_URL
from .infrastructure.errors import (
    DaikinConnectionError,
    DaikinTimeoutError,
    DaikinTransportError,
)

_LOGGER = logging.getLogger(__name__)

QueryParams = Mapping[str, str | int]


class Transport(Protocol):
    """Contract the API client relies on."""

    async def get(self, path: str, params: QueryParams) -> str: ...

    async def close(self) -> None: ...


class DaikinTransport:
    """aiohttp based transport.

    Args:
        token: Value of the ``Authorization`` header, fixed for the lifetime
            of the transport.
        base_url: Scheme and host of the cloud API.
        session: Optional shared aiohttp session. A session passed in is never
            closed by the transport.
        timeout: Total timeout per request in seconds.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = BASE_URL,
        session: aiohttp.ClientSession | None = None,
        timeout: float = API_DEFAULTS.READ_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {"Authorization": token}
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def get(self, path: str, params: QueryParams) -> str:
        """Issue a GET request and return the body text.

        Raises:
            DaikinTransportError: If the cloud answers outside the 2xx range.
            DaikinTimeoutError: If the request times out.
            DaikinConnectionError: If the request cannot be completed.
        """
        url = self.base_url + path
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        session = await self._get_session()

        try:
            async with session.get(url, params=dict(params), headers=self._headers, timeout=timeout) as response:
                status = response.status
                body = await response.text(errors="replace")  # undecodable bytes become U+FFFD
        except TimeoutError as err:
            raise DaikinTimeoutError(f"Request to {path} timed out after {self.timeout}s") from err
        except aiohttp.ClientError as err:
            raise DaikinConnectionError(f"Request to {path} failed: {type(err).__name__}: {err}") from err

        if not 200 <= status < 300:
            _LOGGER.debug("GET %s answered with status %d: %s", path, status, body)
            raise DaikinTransportError(f"Response code is out of 2xx: {status}", status_code=status)

        return body
