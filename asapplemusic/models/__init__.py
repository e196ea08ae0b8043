"""Data models for Apple Music API resources."""

from .error import Error, ErrorCode, ErrorSource
from .attributes import Artwork, EditorialNotes, Playable, Preview
from .resource import Resource, Relationship, RESOURCE_TYPES, resource_from_api_data
from .catalog import (
    Album, Song, Artist, Playlist, PlaylistType, Curator, AppleCurator,
    Activity, Genre, Station, MusicVideo
)
from .library import LibraryAlbum, LibraryArtist, LibrarySong, LibraryMusicVideo, LibraryPlaylist
from .storefront import Storefront
from .chart import Chart, ChartResults
from .search import SearchResults

__all__ = [
    'Error',
    'ErrorCode',
    'ErrorSource',
    'Artwork',
    'EditorialNotes',
    'Playable',
    'Preview',
    'Resource',
    'Relationship',
    'RESOURCE_TYPES',
    'resource_from_api_data',
    'Album',
    'Song',
    'Artist',
    'Playlist',
    'PlaylistType',
    'Curator',
    'AppleCurator',
    'Activity',
    'Genre',
    'Station',
    'MusicVideo',
    'LibraryAlbum',
    'LibraryArtist',
    'LibrarySong',
    'LibraryMusicVideo',
    'LibraryPlaylist',
    'Storefront',
    'Chart',
    'ChartResults',
    'SearchResults'
]
