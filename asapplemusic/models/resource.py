"""
Base resource model and relationship handling.

Every object returned by the API is a JSON:API style resource::

    {"id": "...", "type": "albums", "href": "...", "attributes": {...},
     "relationships": {"artists": {"href": "...", "data": [...]}}}

Subclasses declare their attributes as flat snake_case dataclass fields;
`Resource.from_api_data` fills them from the `attributes` object and
decodes every relationship into a `Relationship` holding typed members.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, ClassVar, Type
from .decoding import decode_fields, encode_value, encode_fields

logger = logging.getLogger(__name__)

RESOURCE_TYPES: Dict[str, Type['Resource']] = {}

def register_resource(cls):
    """Class decorator adding a model to the type registry."""
    RESOURCE_TYPES[cls.RESOURCE_TYPE] = cls
    return cls

def resource_from_api_data(data: Dict[str, Any]) -> 'Resource':
    """Decode a resource dictionary with the model registered for its `type`."""
    resource_cls = RESOURCE_TYPES.get(data.get("type"), Resource)
    return resource_cls.from_api_data(data)

@dataclass
class Relationship:
    """A named association from one resource to others."""
    href: Optional[str] = None
    next: Optional[str] = None
    data: List['Resource'] = field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        """Identifiers of the related resources."""
        return [member.id for member in self.data if member.id]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Relationship':
        members = data.get("data") or []
        # Some relationships (station) hold a single object
        if isinstance(members, dict):
            members = [members]
        return cls(
            href=data.get("href"),
            next=data.get("next"),
            data=[resource_from_api_data(m) for m in members if isinstance(m, dict)]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "href": self.href,
            "next": self.next,
            "data": [member.to_dict() for member in self.data]
        }

@dataclass
class Resource:
    """Common resource fields shared by every model."""
    id: Optional[str] = None
    type: Optional[str] = None
    href: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    relationships: Dict[str, Relationship] = field(default_factory=dict)

    RESOURCE_TYPE: ClassVar[str] = ""
    _BASE_FIELDS: ClassVar[tuple] = ("id", "type", "href", "meta", "relationships")

    def __post_init__(self):
        if self.type is None and self.RESOURCE_TYPE:
            self.type = self.RESOURCE_TYPE

    def relationship_ids(self, name: str) -> List[str]:
        """Identifiers in the named relationship, empty when it was not included."""
        relationship = self.relationships.get(name)
        return relationship.ids if relationship else []

    @classmethod
    def from_api_data(cls, data: Dict[str, Any]) -> 'Resource':
        """Create the model from a single element of a response's `data` array."""
        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            logger.warning(f"Ignoring malformed attributes for {cls.__name__} {data.get('id')}")
            attributes = {}

        kwargs = decode_fields(cls, attributes, skip=cls._BASE_FIELDS)
        kwargs["id"] = data.get("id")
        kwargs["type"] = data.get("type") or cls.RESOURCE_TYPE or None
        kwargs["href"] = data.get("href")
        kwargs["meta"] = data.get("meta") or {}

        relationships = data.get("relationships") or {}
        kwargs["relationships"] = {
            name: Relationship.from_dict(value)
            for name, value in relationships.items()
            if isinstance(value, dict)
        }
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the resource to a plain dictionary."""
        result = encode_fields(self)
        result["relationships"] = encode_value(self.relationships)
        return result
