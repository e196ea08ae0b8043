"""
Input validation utilities for request parameters.
"""

import re
from typing import List, Optional, Sequence, Union

class ValidationError(Exception):
    """Exception raised for validation errors."""
    pass

CHART_TYPES = ("albums", "songs", "music-videos", "playlists")

SEARCH_TYPES = (
    "activities",
    "artists",
    "apple-curators",
    "albums",
    "curators",
    "songs",
    "playlists",
    "music-videos",
    "stations",
)

class RequestValidator:
    """Validator for identifiers and query parameters sent to the API."""

    ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
    STOREFRONT_PATTERN = re.compile(r"^[A-Za-z]{2}$")
    LANG_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")

    @classmethod
    def validate_id(cls, resource_id: str) -> str:
        """Validate a single resource identifier."""
        if not isinstance(resource_id, str) or not resource_id.strip():
            raise ValidationError("Resource id must be a non-empty string")

        resource_id = resource_id.strip()
        if not cls.ID_PATTERN.match(resource_id):
            raise ValidationError(f"Invalid resource id: {resource_id!r}")

        return resource_id

    @classmethod
    def validate_ids(cls, ids: Union[str, Sequence[str]]) -> List[str]:
        """
        Validate a list of identifiers.

        Args:
            ids: Sequence of ids or a comma separated string

        Returns:
            List of validated ids
        """
        if isinstance(ids, str):
            ids = [part for part in ids.split(",") if part.strip()]

        if not ids:
            raise ValidationError("At least one resource id is required")

        return [cls.validate_id(resource_id) for resource_id in ids]

    @classmethod
    def validate_storefront(cls, storefront: str) -> str:
        """Validate a two-letter storefront code."""
        if not isinstance(storefront, str) or not cls.STOREFRONT_PATTERN.match(storefront.strip()):
            raise ValidationError(f"Invalid storefront: {storefront!r} (expected a two-letter code)")
        return storefront.strip().lower()

    @classmethod
    def validate_lang(cls, lang: Optional[str]) -> Optional[str]:
        """Validate an optional language tag such as en-us."""
        if lang is None:
            return None
        if not isinstance(lang, str) or not cls.LANG_PATTERN.match(lang):
            raise ValidationError(f"Invalid language tag: {lang!r}")
        return lang

    @classmethod
    def validate_limit(cls, limit: Optional[int]) -> Optional[int]:
        if limit is None:
            return None
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError("Limit must be an integer")
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        return limit

    @classmethod
    def validate_offset(cls, offset: Optional[int]) -> Optional[int]:
        if offset is None:
            return None
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ValidationError("Offset must be an integer")
        if offset < 0:
            raise ValidationError("Offset must not be negative")
        return offset

    @classmethod
    def validate_term(cls, term: str) -> str:
        """Validate a search term."""
        if not isinstance(term, str) or not term.strip():
            raise ValidationError("Search term must be a non-empty string")
        return term.strip()

    @classmethod
    def validate_types(cls, types: Union[str, Sequence[str], None], allowed: Sequence[str],
                       required: bool = False) -> Optional[List[str]]:
        """Validate resource types against the allowed set."""
        if types is None:
            if required:
                raise ValidationError("At least one type is required")
            return None

        if isinstance(types, str):
            types = [part.strip() for part in types.split(",") if part.strip()]

        if not types:
            if required:
                raise ValidationError("At least one type is required")
            return None

        invalid = [value for value in types if value not in allowed]
        if invalid:
            raise ValidationError(f"Invalid types: {invalid}. Valid options: {list(allowed)}")

        return list(types)

def validate_chart_types(types: Union[str, Sequence[str]]) -> List[str]:
    """Validate the chart types requested."""
    return RequestValidator.validate_types(types, CHART_TYPES, required=True)

def validate_search_types(types: Union[str, Sequence[str], None]) -> Optional[List[str]]:
    """Validate the optional result types of a search."""
    return RequestValidator.validate_types(types, SEARCH_TYPES)
