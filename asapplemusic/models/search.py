"""
Search result data model.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List
from .resource import Resource, resource_from_api_data

@dataclass
class SearchResults:
    """Resources matching a search term, grouped by type."""
    activities: List[Resource] = field(default_factory=list)
    artists: List[Resource] = field(default_factory=list)
    apple_curators: List[Resource] = field(default_factory=list)
    albums: List[Resource] = field(default_factory=list)
    curators: List[Resource] = field(default_factory=list)
    songs: List[Resource] = field(default_factory=list)
    playlists: List[Resource] = field(default_factory=list)
    music_videos: List[Resource] = field(default_factory=list)
    stations: List[Resource] = field(default_factory=list)

    # API section key -> attribute, in the order results are flattened
    SECTIONS = {
        "activities": "activities",
        "artists": "artists",
        "apple-curators": "apple_curators",
        "albums": "albums",
        "curators": "curators",
        "songs": "songs",
        "playlists": "playlists",
        "music-videos": "music_videos",
        "stations": "stations",
    }

    @property
    def items(self) -> List[Resource]:
        """All results as one list."""
        flattened = []
        for attr in self.SECTIONS.values():
            flattened.extend(getattr(self, attr))
        return flattened

    def __len__(self) -> int:
        return sum(len(getattr(self, attr)) for attr in self.SECTIONS.values())

    @classmethod
    def from_dict(cls, results: Dict[str, Any]) -> 'SearchResults':
        kwargs = {}
        for key, attr in cls.SECTIONS.items():
            section = results.get(key)
            if not isinstance(section, dict):
                continue
            kwargs[attr] = [
                resource_from_api_data(item)
                for item in section.get("data") or []
                if isinstance(item, dict)
            ]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: [item.to_dict() for item in getattr(self, attr)]
            for key, attr in self.SECTIONS.items()
        }
