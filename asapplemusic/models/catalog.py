"""
Catalog resource models: albums, songs, artists, playlists, curators,
activities, genres, stations and music videos.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, List
from .attributes import Artwork, EditorialNotes, Playable, Preview
from .decoding import api_field, list_of
from .resource import Resource, register_resource

class PlaylistType(Enum):
    """Kinds of catalog playlists."""
    USER_SHARED = "user-shared"
    EDITORIAL = "editorial"
    EXTERNAL = "external"
    PERSONAL_MIX = "personal-mix"
    REPLAY = "replay"

    @classmethod
    def parse(cls, value: str) -> Optional['PlaylistType']:
        try:
            return cls(value)
        except ValueError:
            return None

class DurationMixin:
    """Duration helpers for models carrying `duration_in_millis`."""

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get duration in seconds."""
        if self.duration_in_millis is None:
            return None
        return self.duration_in_millis / 1000.0

    @property
    def duration_formatted(self) -> Optional[str]:
        """Get formatted duration string (MM:SS)."""
        if self.duration_in_millis is None:
            return None
        total_seconds = int(self.duration_in_millis / 1000)
        return f"{total_seconds // 60}:{total_seconds % 60:02d}"

    @property
    def is_explicit(self) -> bool:
        return getattr(self, "content_rating", None) == "explicit"

@register_resource
@dataclass
class Album(Resource):
    """Catalog album."""
    name: str = ""
    artist_name: str = ""
    artwork: Optional[Artwork] = api_field(parse=Artwork.from_dict)
    content_rating: Optional[str] = None       # "clean", "explicit" or absent
    copyright: Optional[str] = None
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    genre_names: List[str] = api_field(default_factory=list)
    is_complete: bool = False
    is_single: bool = False
    is_compilation: bool = False
    is_mastered_for_itunes: bool = False
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    record_label: str = ""
    release_date: str = ""                     # YYYY-MM-DD
    track_count: int = 0
    upc: Optional[str] = None
    url: str = ""

    RESOURCE_TYPE = "albums"

    @property
    def artist_ids(self) -> List[str]:
        return self.relationship_ids("artists")

    @property
    def track_ids(self) -> List[str]:
        return self.relationship_ids("tracks")

@register_resource
@dataclass
class Song(DurationMixin, Resource):
    """Catalog song."""
    name: str = ""
    artist_name: str = ""
    album_name: Optional[str] = None
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    composer_name: Optional[str] = None
    content_rating: Optional[str] = None
    disc_number: int = 0
    duration_in_millis: Optional[int] = None
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    genre_names: List[str] = api_field(default_factory=list)
    isrc: str = ""
    movement_count: Optional[int] = None
    movement_name: Optional[str] = None
    movement_number: Optional[int] = None
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    previews: List[Preview] = api_field(parse=list_of(Preview.from_dict), default_factory=list)
    release_date: str = ""
    track_number: Optional[int] = None
    url: str = ""
    work_name: Optional[str] = None

    RESOURCE_TYPE = "songs"

    @property
    def preview_url(self) -> Optional[str]:
        return self.previews[0].url if self.previews else None

@register_resource
@dataclass
class Artist(Resource):
    """Catalog artist."""
    name: str = ""
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    genre_names: List[str] = api_field(default_factory=list)
    url: str = ""

    RESOURCE_TYPE = "artists"

@register_resource
@dataclass
class Playlist(Resource):
    """Catalog playlist."""
    name: str = ""
    artwork: Optional[Artwork] = api_field(parse=Artwork.from_dict)
    curator_name: Optional[str] = None
    description: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    last_modified_date: str = ""
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    playlist_type: Optional[PlaylistType] = api_field(parse=PlaylistType.parse, default=PlaylistType.EDITORIAL)
    url: str = ""

    RESOURCE_TYPE = "playlists"

@register_resource
@dataclass
class Curator(Resource):
    """Catalog curator."""
    name: str = ""
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    url: str = ""

    RESOURCE_TYPE = "curators"

    @property
    def playlist_ids(self) -> List[str]:
        return self.relationship_ids("playlists")

@register_resource
@dataclass
class AppleCurator(Curator):
    """Apple-run curator, such as a genre or editorial team."""

    RESOURCE_TYPE = "apple-curators"

@register_resource
@dataclass
class Activity(Resource):
    """Catalog activity, a theme grouping playlists."""
    name: str = ""
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    url: str = ""

    RESOURCE_TYPE = "activities"

    @property
    def playlist_ids(self) -> List[str]:
        return self.relationship_ids("playlists")

@register_resource
@dataclass
class Genre(Resource):
    """Catalog genre."""
    name: str = ""
    parent_id: Optional[str] = None
    parent_name: Optional[str] = None

    RESOURCE_TYPE = "genres"

@register_resource
@dataclass
class Station(DurationMixin, Resource):
    """Radio station."""
    name: str = ""
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    duration_in_millis: Optional[int] = None
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    episode_number: Optional[int] = None
    is_live: bool = False
    url: str = ""

    RESOURCE_TYPE = "stations"

@register_resource
@dataclass
class MusicVideo(DurationMixin, Resource):
    """Catalog music video."""
    name: str = ""
    artist_name: str = ""
    album_name: Optional[str] = None
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    content_rating: Optional[str] = None
    duration_in_millis: Optional[int] = None
    editorial_notes: Optional[EditorialNotes] = api_field(parse=EditorialNotes.from_dict)
    genre_names: List[str] = api_field(default_factory=list)
    has_4k: bool = api_field(key="has4K", default=False)
    has_hdr: bool = api_field(key="hasHDR", default=False)
    isrc: str = ""
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    previews: List[Preview] = api_field(parse=list_of(Preview.from_dict), default_factory=list)
    release_date: str = ""
    track_number: Optional[int] = None
    url: str = ""
    video_sub_type: Optional[str] = None

    RESOURCE_TYPE = "music-videos"
