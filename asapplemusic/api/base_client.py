"""
Base API client providing the HTTP transport shared by Apple Music requests.
Includes session management, URL building, response capture and the error types
raised by the library.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union, Sequence
from urllib.parse import urlencode, quote_plus

import aiohttp
from yarl import URL

from ..models.error import Error
from ..utils.http import get_status_code, is_success

logger = logging.getLogger(__name__)

class APIError(Exception):
    """Base exception for API errors."""
    pass

class AuthenticationError(APIError):
    """Exception raised when a token cannot be obtained."""
    pass

class AppleMusicError(APIError):
    """Exception carrying the normalized error of a failed request."""

    def __init__(self, error: Error):
        super().__init__(str(error))
        self.error = error

    @property
    def status(self) -> str:
        return self.error.status

@dataclass
class RawResponse:
    """Everything known about one HTTP exchange, successful or not."""
    url: str
    status: Optional[int] = None
    reason: Optional[str] = None
    payload: Optional[Any] = None
    exception: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.exception is None and is_success(self.status)

QueryValue = Union[str, int, Sequence[str], None]

def build_query(params: Optional[Dict[str, QueryValue]]) -> str:
    """
    Encode query parameters the way the API expects them.

    None values are dropped, sequences are joined with commas and spaces
    become '+'.
    """
    if not params:
        return ""
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = ",".join(str(v) for v in value)
        pairs.append((key, str(value)))
    return urlencode(pairs, safe=",", quote_via=quote_plus)

class BaseAPIClient:
    """Base class owning the aiohttp session and raw GET requests."""

    def __init__(self, base_url: str, timeout: int = 30, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self):
        """Ensure HTTP session is created."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session and not self.session.closed:
            await self.session.close()

    def build_url(self, path: str, params: Optional[Dict[str, QueryValue]] = None) -> str:
        """Build the full request URL for an endpoint path."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = build_query(params)
        if query:
            url = f"{url}?{query}"
        return url

    async def _get(self, url: str, headers: Optional[Dict[str, str]] = None) -> RawResponse:
        """
        Perform a GET request and capture the outcome.

        Transport failures are recorded on the returned RawResponse rather
        than raised, so callers can normalize every outcome the same way.
        """
        await self._ensure_session()
        raw = RawResponse(url=url)

        logger.info(f"Making request: {url}")
        try:
            async with self.session.get(URL(url, encoded=True), headers=headers or {}) as response:
                raw.status = get_status_code(response)
                raw.reason = response.reason
                raw.payload = await self._read_payload(response, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"HTTP request failed: {url}: {e!r}")
            raw.exception = e

        return raw

    async def _read_payload(self, response, url: str) -> Optional[Any]:
        """Decode the JSON body, returning None when it is empty, not UTF-8 or not JSON."""
        body = await response.read()
        if not body or not body.strip():
            return None
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError:
            logger.warning(f"Response from {url} is not valid JSON")
            return None
