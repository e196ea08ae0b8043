"""
Chart data models.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List
from .resource import Resource, resource_from_api_data

@dataclass
class Chart:
    """A chart: resources of one type ordered by popularity."""
    chart: str = ""                    # Chart identifier, e.g. "most-played"
    name: str = ""                     # Localized chart name
    href: str = ""
    next: Optional[str] = None
    data: List[Resource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Chart':
        return cls(
            chart=data.get("chart", ""),
            name=data.get("name", ""),
            href=data.get("href", ""),
            next=data.get("next"),
            data=[resource_from_api_data(item) for item in data.get("data") or [] if isinstance(item, dict)]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chart": self.chart,
            "name": self.name,
            "href": self.href,
            "next": self.next,
            "data": [item.to_dict() for item in self.data]
        }

@dataclass
class ChartResults:
    """Charts grouped by the requested chart types."""
    albums: List[Chart] = field(default_factory=list)
    music_videos: List[Chart] = field(default_factory=list)
    songs: List[Chart] = field(default_factory=list)
    playlists: List[Chart] = field(default_factory=list)

    SECTIONS = {
        "albums": "albums",
        "music-videos": "music_videos",
        "songs": "songs",
        "playlists": "playlists",
    }

    @property
    def is_empty(self) -> bool:
        return not (self.albums or self.music_videos or self.songs or self.playlists)

    @classmethod
    def from_dict(cls, results: Dict[str, Any]) -> 'ChartResults':
        kwargs = {}
        for key, attr in cls.SECTIONS.items():
            charts = results.get(key) or []
            kwargs[attr] = [Chart.from_dict(chart) for chart in charts if isinstance(chart, dict)]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: [chart.to_dict() for chart in getattr(self, attr)]
            for key, attr in self.SECTIONS.items()
        }
