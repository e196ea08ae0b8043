"""API clients for the Apple Music REST API."""

from .base_client import BaseAPIClient, APIError, AuthenticationError, AppleMusicError, RawResponse
from .token_provider import TokenProvider, SourceAPI
from .apple_music_client import AppleMusicClient

__all__ = [
    'BaseAPIClient',
    'APIError',
    'AuthenticationError',
    'AppleMusicError',
    'RawResponse',
    'TokenProvider',
    'SourceAPI',
    'AppleMusicClient'
]
