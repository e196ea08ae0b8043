"""
Library resource models: content saved in the user's own music library.
"""

from dataclasses import dataclass
from typing import Optional, Union
from .attributes import Artwork, EditorialNotes, Playable, notes_or_text
from .catalog import DurationMixin
from .decoding import api_field
from .resource import Resource, register_resource

@register_resource
@dataclass
class LibraryAlbum(Resource):
    """Album in the user's library."""
    name: str = ""
    artist_name: str = ""
    artwork: Optional[Artwork] = api_field(parse=Artwork.from_dict)
    content_rating: Optional[str] = None
    date_added: Optional[str] = None
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    release_date: Optional[str] = None
    track_count: int = 0

    RESOURCE_TYPE = "library-albums"

@register_resource
@dataclass
class LibraryArtist(Resource):
    """Artist in the user's library."""
    name: str = ""

    RESOURCE_TYPE = "library-artists"

@register_resource
@dataclass
class LibrarySong(DurationMixin, Resource):
    """Song in the user's library."""
    name: str = ""
    artist_name: str = ""
    album_name: Optional[str] = None
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    content_rating: Optional[str] = None
    disc_number: int = 0
    duration_in_millis: Optional[int] = None
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    track_number: Optional[int] = None

    RESOURCE_TYPE = "library-songs"

@register_resource
@dataclass
class LibraryMusicVideo(DurationMixin, Resource):
    """Music video in the user's library."""
    name: str = ""
    artist_name: str = ""
    album_name: Optional[str] = None
    artwork: Artwork = api_field(parse=Artwork.from_dict, default_factory=Artwork)
    content_rating: Optional[str] = None
    duration_in_millis: Optional[int] = None
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)
    track_number: Optional[int] = None

    RESOURCE_TYPE = "library-music-videos"

@register_resource
@dataclass
class LibraryPlaylist(Resource):
    """Playlist in the user's library."""
    name: str = ""
    artwork: Optional[Artwork] = api_field(parse=Artwork.from_dict)
    can_edit: bool = False
    description: Optional[Union[EditorialNotes, str]] = api_field(parse=notes_or_text)
    is_public: bool = False
    play_params: Optional[Playable] = api_field(parse=Playable.from_dict)

    RESOURCE_TYPE = "library-playlists"
