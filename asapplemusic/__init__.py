"""
Apple Music REST API client.

Obtains developer and music user tokens, issues catalog, chart, search and
library requests, and decodes responses into typed models.
"""

from .api import AppleMusicClient, AppleMusicError, APIError, TokenProvider, SourceAPI
from .models import Error, ErrorCode
from .utils import ValidationError

__version__ = "1.0.0"

__all__ = [
    'AppleMusicClient',
    'AppleMusicError',
    'APIError',
    'TokenProvider',
    'SourceAPI',
    'Error',
    'ErrorCode',
    'ValidationError'
]
