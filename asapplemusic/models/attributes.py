"""
Supporting attribute objects shared by catalog and library resources.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from .decoding import api_field, decode_fields, encode_fields

@dataclass
class Artwork:
    """Artwork image description; `url` contains {w} and {h} placeholders."""
    url: str = ""
    width: int = 0
    height: int = 0
    bg_color: Optional[str] = None
    text_color1: Optional[str] = None
    text_color2: Optional[str] = None
    text_color3: Optional[str] = None
    text_color4: Optional[str] = None

    def url_for(self, width: Optional[int] = None, height: Optional[int] = None) -> str:
        """
        Get the image URL for a concrete size.

        Missing dimensions fall back to the maximum size available.
        """
        width = width or self.width
        height = height or self.height
        return self.url.replace("{w}", str(width)).replace("{h}", str(height))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Artwork':
        return cls(**decode_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self)

@dataclass
class EditorialNotes:
    """Notes shown alongside featured content."""
    standard: str = ""   # Prominent display
    short: str = ""      # Inline display

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EditorialNotes':
        return cls(**decode_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self)

@dataclass
class Playable:
    """Parameters used to play back a resource."""
    id: str = ""
    kind: str = ""
    is_library: bool = False
    catalog_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Playable':
        return cls(**decode_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self)

@dataclass
class Preview:
    """Audio or video preview."""
    url: str = ""
    hls_url: Optional[str] = None
    artwork: Optional[Artwork] = api_field(parse=Artwork.from_dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Preview':
        return cls(**decode_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return encode_fields(self)

def notes_or_text(value: Any) -> Any:
    """Parse a description that is either a notes object or plain text."""
    if isinstance(value, dict):
        return EditorialNotes.from_dict(value)
    return str(value)
