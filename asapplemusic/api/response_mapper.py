"""
Response mapping: turns a raw HTTP exchange into either a decoded result or a
normalized Error.

Three shapes come back from the API and the transport:

* a success payload (``{"data": [...]}`` or ``{"results": {...}}``),
* a JSON:API error document (``{"errors": [{...}]}``), possibly with a 2xx status,
* a transport failure with no usable body.
"""

import logging
from typing import Dict, Any, Optional, List, Callable, Tuple, Type, TypeVar

from .base_client import RawResponse
from ..models.error import Error
from ..models.resource import Resource
from ..models.chart import ChartResults
from ..models.search import SearchResults
from ..utils.http import error_code_for_status, is_success

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Resource)

Decoder = Callable[[Dict[str, Any]], Any]

def error_from_payload(payload: Any) -> Optional[Error]:
    """Get the first entry of an `errors` array, if the payload carries one."""
    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return Error.from_dict(errors[0])
    return None

def transport_error(raw: RawResponse) -> Error:
    """Synthesize an Error for a request that failed in transport."""
    error = Error()
    code = error_code_for_status(raw.status)
    if raw.status is not None and code is not None:
        error.status = str(raw.status)
        error.code = code
    error.detail = str(raw.exception) or raw.exception.__class__.__name__
    return error

def status_error(raw: RawResponse) -> Error:
    """Synthesize an Error for a non-2xx response without an error document."""
    return Error(
        status=str(raw.status),
        code=error_code_for_status(raw.status),
        title=raw.reason or "Request failed",
        detail=f"HTTP {raw.status} from {raw.url}"
    )

def error_for(raw: RawResponse) -> Optional[Error]:
    """Get the normalized error for a raw response, or None on success."""
    error = error_from_payload(raw.payload)
    if error is not None:
        return error
    if raw.exception is not None:
        return transport_error(raw)
    if not is_success(raw.status):
        return status_error(raw)
    return None

def map_response(raw: RawResponse, decode: Decoder,
                 require_key: Optional[str] = None) -> Tuple[Any, Optional[Error]]:
    """
    Map a raw response to exactly one of (result, None) or (None, error).

    Args:
        raw: Captured HTTP exchange
        decode: Decoder applied to the payload of a successful response
        require_key: Top-level key a successful payload must contain; when it
            is absent the request is reported as unauthorized
    """
    error = error_for(raw)
    if error is not None:
        logger.error(f"Request failed: {raw.url}: {error}")
        return None, error

    payload = raw.payload if isinstance(raw.payload, dict) else None
    if require_key and (payload is None or require_key not in payload):
        logger.error(f"Unauthorized request: {raw.url}")
        return None, Error.missing_token()

    logger.info(f"Request successful: {raw.url}")
    try:
        return decode(payload or {}), None
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Could not decode response from {raw.url}: {e}")
        return decode({}), None

def single(resource_cls: Type[T]) -> Callable[[Dict[str, Any]], Optional[T]]:
    """Decoder for the first element of `data`."""
    def _decode(payload: Dict[str, Any]) -> Optional[T]:
        data = payload.get("data")
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            if payload:
                logger.warning(f"No {resource_cls.__name__} in response data")
            return None
        return resource_cls.from_api_data(data[0])
    return _decode

def many(resource_cls: Type[T]) -> Callable[[Dict[str, Any]], List[T]]:
    """Decoder for every element of `data`."""
    def _decode(payload: Dict[str, Any]) -> List[T]:
        data = payload.get("data")
        if not isinstance(data, list):
            return []
        return [resource_cls.from_api_data(item) for item in data if isinstance(item, dict)]
    return _decode

def charts(payload: Dict[str, Any]) -> ChartResults:
    results = payload.get("results")
    return ChartResults.from_dict(results if isinstance(results, dict) else {})

def search_results(payload: Dict[str, Any]) -> SearchResults:
    results = payload.get("results")
    return SearchResults.from_dict(results if isinstance(results, dict) else {})

def search_hints(payload: Dict[str, Any]) -> List[str]:
    results = payload.get("results")
    terms = results.get("terms") if isinstance(results, dict) else None
    if not isinstance(terms, list):
        return []
    return [str(term) for term in terms]
