"""
Error data model mirroring the Apple Music API error object.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum

class ErrorCode(Enum):
    """Apple Music error codes: the HTTP status followed by two digits."""
    OK = "20000"
    CREATED = "20100"
    ACCEPTED = "20200"
    NO_CONTENT = "20400"
    MOVED_PERMANENTLY = "30100"
    FOUND = "30200"
    BAD_REQUEST = "40000"
    UNAUTHORIZED = "40100"
    FORBIDDEN = "40300"
    NOT_FOUND = "40400"
    METHOD_NOT_ALLOWED = "40500"
    CONFLICT = "40900"
    PAYLOAD_TOO_LARGE = "41300"
    URI_TOO_LONG = "41400"
    TOO_MANY_REQUESTS = "42900"
    INTERNAL_SERVER_ERROR = "50000"
    NOT_IMPLEMENTED = "50100"
    SERVICE_UNAVAILABLE = "50300"

    @classmethod
    def from_value(cls, value: Any) -> Optional['ErrorCode']:
        """Look up a code by its string value, returning None when unknown."""
        if value is None:
            return None
        try:
            return cls(str(value))
        except ValueError:
            return None

    @classmethod
    def from_status(cls, status: Optional[int]) -> Optional['ErrorCode']:
        """Map an HTTP status to its error code."""
        if status is None:
            return None
        return cls.from_value(str(status * 100))

@dataclass
class ErrorSource:
    """Reference to the source of an error."""
    parameter: Optional[str] = None    # URI query parameter that caused the error
    pointer: Optional[str] = None      # JSON pointer into the request document

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ErrorSource':
        return cls(parameter=data.get("parameter"), pointer=data.get("pointer"))

    def to_dict(self) -> Dict[str, Any]:
        return {"parameter": self.parameter, "pointer": self.pointer}

@dataclass
class Error:
    """Normalized error returned by every failed request."""
    id: str = "Unknown"
    status: str = "404"
    code: Optional[ErrorCode] = ErrorCode.NOT_FOUND
    title: str = "Resource Not Found"
    detail: Optional[str] = None
    source: Optional[ErrorSource] = None

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status as an integer, if the status string is numeric."""
        try:
            return int(self.status)
        except (TypeError, ValueError):
            return None

    @classmethod
    def missing_token(cls) -> 'Error':
        """Error produced locally when no usable token is available."""
        return cls(
            status="401",
            code=ErrorCode.UNAUTHORIZED,
            title="Unauthorized request",
            detail="Missing token, refresh current token or request a new token"
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Error':
        """Create Error from an entry of a response's `errors` array."""
        defaults = cls()
        source = data.get("source")
        return cls(
            id=str(data.get("id") or defaults.id),
            status=str(data.get("status") or defaults.status),
            code=ErrorCode.from_value(data.get("code")) if "code" in data else defaults.code,
            title=data.get("title") or defaults.title,
            detail=data.get("detail"),
            source=ErrorSource.from_dict(source) if isinstance(source, dict) else None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "code": self.code.value if self.code else None,
            "title": self.title,
            "detail": self.detail,
            "source": self.source.to_dict() if self.source else None
        }

    def __str__(self) -> str:
        text = f"{self.status} {self.title}"
        if self.detail:
            text += f": {self.detail}"
        return text
