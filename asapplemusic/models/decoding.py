"""
Helpers for turning camelCase API dictionaries into snake_case dataclasses and back.
"""

import logging
from dataclasses import field, fields, MISSING
from enum import Enum
from typing import Dict, Any, Optional, Callable, Iterable

logger = logging.getLogger(__name__)

def camel_case(name: str) -> str:
    """Convert a snake_case field name to the API's camelCase key."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)

def api_field(key: Optional[str] = None, parse: Optional[Callable[[Any], Any]] = None,
              default: Any = None, default_factory: Optional[Callable[[], Any]] = None):
    """
    Declare a dataclass field decoded from an API attribute.

    Args:
        key: API key when it differs from camel_case(field name)
        parse: Converter applied to non-null raw values
        default: Default value when the attribute is missing
        default_factory: Factory for mutable defaults
    """
    metadata = {}
    if key:
        metadata["key"] = key
    if parse:
        metadata["parse"] = parse
    if default_factory is not None:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)

def list_of(parse: Callable[[Any], Any]) -> Callable[[Any], list]:
    """Build a parser that applies `parse` to each item of a list."""
    def _parse(values):
        if not isinstance(values, list):
            return []
        return [parse(value) for value in values if value is not None]
    return _parse

def decode_fields(cls, data: Dict[str, Any], skip: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Collect constructor kwargs for dataclass `cls` from an API dictionary.

    Only keys present in `data` are returned, so missing optional
    attributes fall back to the dataclass defaults. A nested value that
    cannot be parsed is dropped with a warning and keeps its default.

    Raises:
        TypeError: If `data` is not a dictionary
    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected an object for {cls.__name__}, got {type(data).__name__}")

    kwargs = {}
    skipped = set(skip)
    for f in fields(cls):
        if f.name in skipped or not f.init:
            continue
        key = f.metadata.get("key", camel_case(f.name))
        if key not in data:
            continue
        value = data[key]
        parser = f.metadata.get("parse")
        if parser is not None and value is not None:
            try:
                value = parser(value)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Ignoring malformed {key} for {cls.__name__}: {e}")
                continue
        if value is None and (f.default is not MISSING or f.default_factory is not MISSING):
            # Explicit nulls keep the declared default
            continue
        kwargs[f.name] = value
    return kwargs

def encode_value(value: Any) -> Any:
    """Recursively convert models, enums and containers to plain data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    return value

def encode_fields(obj) -> Dict[str, Any]:
    """Plain-data dictionary of every dataclass field on `obj`."""
    return {f.name: encode_value(getattr(obj, f.name)) for f in fields(obj)}
