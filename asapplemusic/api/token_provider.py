"""
Token provider for Apple Music requests.

Catalog endpoints need a developer token only; `/me` endpoints also need a
music user token obtained by exchanging the developer token.
"""

import asyncio
import inspect
import json
import logging
import os
import time
from enum import Enum
from typing import Dict, Any, Optional, Tuple, Callable, Union, Awaitable

import aiohttp
import backoff
import jwt

from .base_client import AuthenticationError

logger = logging.getLogger(__name__)

UserTokenProvider = Callable[[str], Union[Optional[str], Awaitable[Optional[str]]]]

TOKEN_KEYS = ("token", "developerToken", "access_token")

# Apple rejects developer tokens valid for longer than six months
MAX_TOKEN_TTL = 15777000

class SourceAPI(Enum):
    """Credential mode of a request."""
    DEVELOPER = "developer"
    USER = "user"

class TokenProvider:
    """Acquires and holds the developer token and the music user token."""

    def __init__(
        self,
        developer_token: Optional[str] = None,
        token_url: Optional[str] = None,
        token_method: str = "GET",
        key_id: Optional[str] = None,
        team_id: Optional[str] = None,
        private_key: Optional[str] = None,
        token_ttl: int = 3600,
        user_token: Optional[str] = None,
        user_token_provider: Optional[UserTokenProvider] = None,
        max_retries: int = 3,
        timeout: int = 30,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the token provider.

        Developer token sources are tried in order: a static token, the
        token server, then local signing with the key id, team id and
        private key.

        Args:
            developer_token: Static developer token
            token_url: URL of a server that issues developer tokens
            token_method: HTTP method used against the token server (GET or POST)
            key_id: MusicKit private key identifier
            team_id: Apple Developer team ID
            private_key: PEM private key content or a path to a .p8 file
            token_ttl: Lifetime in seconds of locally signed tokens
            user_token: Static music user token
            user_token_provider: Callable exchanging a developer token for a user token
            max_retries: Attempts made against the token server on transport errors
            timeout: Token server request timeout in seconds
            session: Optional aiohttp session to reuse
        """
        self.static_developer_token = developer_token
        self.token_url = token_url
        self.token_method = token_method.upper()
        self.key_id = key_id
        self.team_id = team_id
        self.private_key = private_key
        self.token_ttl = min(token_ttl, MAX_TOKEN_TTL)
        self.static_user_token = user_token
        self.user_token_provider = user_token_provider
        self.max_retries = max(1, max_retries)
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None

        self._developer_token: Optional[str] = None
        self._developer_token_expires_at: Optional[float] = None
        self._user_token: Optional[str] = None
        self._lock: Optional[asyncio.Lock] = None

    @classmethod
    def from_settings(cls, settings, user_token_provider: Optional[UserTokenProvider] = None) -> 'TokenProvider':
        """Create a provider from application settings."""
        return cls(
            developer_token=settings.APPLE_MUSIC_DEVELOPER_TOKEN,
            token_url=settings.APPLE_MUSIC_TOKEN_URL,
            token_method=settings.APPLE_MUSIC_TOKEN_METHOD,
            key_id=settings.APPLE_MUSIC_KEY_ID,
            team_id=settings.APPLE_MUSIC_TEAM_ID,
            private_key=settings.APPLE_MUSIC_PRIVATE_KEY,
            token_ttl=settings.APPLE_MUSIC_TOKEN_TTL,
            user_token=settings.APPLE_MUSIC_USER_TOKEN,
            user_token_provider=user_token_provider,
            max_retries=settings.apple_music.max_retries,
            timeout=settings.apple_music.timeout
        )

    @property
    def can_sign(self) -> bool:
        return bool(self.key_id and self.team_id and self.private_key)

    @property
    def has_developer_token(self) -> bool:
        return self._developer_token is not None and not self._developer_token_expired()

    @property
    def has_user_token(self) -> bool:
        return self._user_token is not None

    def set_developer_token(self, token: Optional[str]):
        """Replace the active developer token."""
        self._developer_token = token
        self._developer_token_expires_at = None

    def set_user_token(self, token: Optional[str]):
        """Replace the active music user token."""
        self._user_token = token

    def clear(self):
        """Drop held tokens so the next request acquires new ones."""
        self._developer_token = None
        self._developer_token_expires_at = None
        self._user_token = None

    refresh = clear

    async def close(self):
        if self.session and self._owns_session and not self.session.closed:
            await self.session.close()

    async def get_developer_token(self) -> Optional[str]:
        """
        Get the active developer token, acquiring one if none is held.

        Returns:
            The token, or None when no source is configured or acquisition failed
        """
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self.has_developer_token:
                return self._developer_token

            try:
                token = await self._acquire_developer_token()
            except AuthenticationError as e:
                logger.error(f"Developer token unavailable: {e}")
                return None

            if token is None:
                logger.warning("No developer token source configured")
            self._developer_token = token
            return token

    async def get_user_token(self) -> Optional[str]:
        """
        Get the active music user token, exchanging the developer token if needed.

        Returns:
            The token, or None when no user token can be obtained
        """
        if self._user_token is not None:
            return self._user_token

        if self.static_user_token:
            self._user_token = self.static_user_token
            return self._user_token

        if self.user_token_provider is None:
            logger.warning("No music user token configured")
            return None

        developer_token = await self.get_developer_token()
        if developer_token is None:
            return None

        try:
            token = self.user_token_provider(developer_token)
            if inspect.isawaitable(token):
                token = await token
        except AuthenticationError as e:
            logger.error(f"Music user token exchange failed: {e}")
            return None
        except Exception:
            logger.exception("Music user token provider raised an error")
            return None

        self._user_token = token or None
        return self._user_token

    async def tokens_for(self, mode: SourceAPI) -> Optional[Tuple[str, Optional[str]]]:
        """
        Get the tokens a request in the given mode needs.

        Returns:
            (developer_token, user_token) where user_token is None in developer
            mode, or None when a required token is missing
        """
        developer_token = await self.get_developer_token()
        if developer_token is None:
            return None

        if mode is SourceAPI.DEVELOPER:
            return developer_token, None

        user_token = await self.get_user_token()
        if user_token is None:
            return None
        return developer_token, user_token

    def headers_for(self, mode: SourceAPI, tokens: Tuple[str, Optional[str]]) -> Dict[str, str]:
        """Build request headers for a credential mode."""
        developer_token, user_token = tokens
        headers = {"Authorization": f"Bearer {developer_token}"}
        if mode is SourceAPI.USER and user_token:
            headers["Music-User-Token"] = user_token
        return headers

    def generate_developer_token(self) -> str:
        """
        Sign a developer token (ES256 JWT) with the configured private key.

        Returns:
            Encoded JWT
        """
        if not self.can_sign:
            raise AuthenticationError("Key ID, team ID and private key are required to sign tokens")

        now = int(time.time())
        payload = {
            'iss': self.team_id,
            'iat': now,
            'exp': now + self.token_ttl
        }

        headers = {
            'alg': 'ES256',
            'kid': self.key_id
        }

        try:
            token = jwt.encode(payload, self._load_private_key(), algorithm='ES256', headers=headers)
        except (ValueError, TypeError, jwt.PyJWTError) as e:
            raise AuthenticationError(f"Failed to sign developer token: {e}") from e

        self._developer_token_expires_at = now + self.token_ttl
        logger.info("Signed new developer token")
        return token

    async def _acquire_developer_token(self) -> Optional[str]:
        if self.static_developer_token:
            return self.static_developer_token
        if self.token_url:
            return await self._fetch_from_token_server()
        if self.can_sign:
            return self.generate_developer_token()
        return None

    def _developer_token_expired(self) -> bool:
        # Only locally signed tokens carry a known expiry
        if self._developer_token_expires_at is None:
            return False
        return time.time() >= self._developer_token_expires_at - 60

    def _load_private_key(self) -> str:
        key = self.private_key
        if os.path.isfile(key):
            with open(key, 'r') as f:
                return f.read()
        return key.replace("\\n", "\n")

    async def _ensure_session(self):
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True

    async def _fetch_from_token_server(self) -> str:
        """Fetch a developer token, retrying transport errors with exponential backoff."""
        fetch = backoff.on_exception(
            backoff.expo,
            (aiohttp.ClientError, asyncio.TimeoutError),
            max_tries=self.max_retries,
            logger=logger
        )(self._request_token)

        try:
            return await fetch()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationError(f"Token server unreachable: {e!r}") from e

    async def _request_token(self) -> str:
        await self._ensure_session()
        logger.info(f"Requesting developer token from {self.token_url}")

        async with self.session.request(self.token_method, self.token_url) as response:
            if response.status >= 400:
                raise AuthenticationError(f"Token server returned HTTP {response.status}")
            body = await response.text()

        token = self._parse_token(body)
        if not token:
            raise AuthenticationError("Token server response did not contain a token")
        return token

    @staticmethod
    def _parse_token(body: str) -> Optional[str]:
        """Extract a token from a JSON document or a plain-text body."""
        body = (body or "").strip()
        if not body:
            return None
        if body.startswith("{"):
            try:
                data: Dict[str, Any] = json.loads(body)
            except ValueError:
                return None
            for key in TOKEN_KEYS:
                if data.get(key):
                    return str(data[key])
            return None
        return body
