"""
HTTP response helpers.
"""

from typing import Any, Optional
from ..models.error import ErrorCode

def get_status_code(response: Any) -> Optional[int]:
    """Get the status code of an HTTP response, or None for anything else."""
    status = getattr(response, "status", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return None

def error_code_for_status(status: Optional[int]) -> Optional[ErrorCode]:
    """Map an HTTP status to the matching Apple Music error code."""
    return ErrorCode.from_status(status)

def is_success(status: Optional[int]) -> bool:
    return status is not None and 200 <= status < 300
