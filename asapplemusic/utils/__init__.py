"""Utility modules for the Apple Music client."""

from .http import get_status_code, error_code_for_status, is_success
from .validators import (
    RequestValidator,
    ValidationError,
    validate_chart_types,
    validate_search_types,
    CHART_TYPES,
    SEARCH_TYPES
)

__all__ = [
    'get_status_code',
    'error_code_for_status',
    'is_success',
    'RequestValidator',
    'ValidationError',
    'validate_chart_types',
    'validate_search_types',
    'CHART_TYPES',
    'SEARCH_TYPES'
]
