"""
Apple Music API Client

Provides catalog, chart, search and personal library requests against the
Apple Music REST API, returning typed models or a normalized Error.
"""

import inspect
import logging
from typing import Dict, List, Optional, Any, Callable, Sequence, Type, Union

import aiohttp

from config.settings import Settings
from .base_client import BaseAPIClient, AppleMusicError, QueryValue
from .token_provider import TokenProvider, SourceAPI, UserTokenProvider
from . import response_mapper
from ..models.error import Error
from ..models.resource import Resource
from ..models.catalog import (
    Album, Song, Artist, Playlist, Curator, AppleCurator,
    Activity, Genre, Station, MusicVideo
)
from ..models.library import LibraryAlbum, LibraryArtist, LibrarySong, LibraryMusicVideo, LibraryPlaylist
from ..models.storefront import Storefront
from ..models.chart import ChartResults
from ..models.search import SearchResults
from ..utils.validators import RequestValidator, ValidationError, validate_chart_types, validate_search_types

logger = logging.getLogger(__name__)

# Called with (result, None) on success or (None, error) on failure; may be a coroutine function
Callback = Callable[[Any, Optional[Error]], Any]

Ids = Union[str, Sequence[str]]

class AppleMusicClient(BaseAPIClient):
    """Apple Music API client for catalog, chart, search and library requests."""

    _shared: Optional['AppleMusicClient'] = None

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token_provider: Optional[TokenProvider] = None,
        storefront: Optional[str] = None,
        lang: Optional[str] = None,
        user_token_provider: Optional[UserTokenProvider] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize Apple Music client.

        Args:
            settings: Application settings, read from the environment when omitted
            token_provider: Token provider, built from settings when omitted
            storefront: Default storefront for catalog requests
            lang: Default language tag sent as `l`
            user_token_provider: Exchange function for music user tokens
            session: Optional aiohttp session to reuse
        """
        self.settings = settings or Settings()
        super().__init__(
            base_url=self.settings.apple_music.base_url,
            timeout=self.settings.apple_music.timeout,
            session=session
        )

        self.token_provider = token_provider or TokenProvider.from_settings(
            self.settings, user_token_provider=user_token_provider
        )
        self.storefront = RequestValidator.validate_storefront(storefront or self.settings.default_storefront)
        self.lang = RequestValidator.validate_lang(lang or self.settings.default_lang)

        if self.settings.debug:
            logging.getLogger("asapplemusic").setLevel(logging.DEBUG)

    @classmethod
    def shared(cls) -> 'AppleMusicClient':
        """Process-wide client holding configuration and the active tokens."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    @classmethod
    def reset_shared(cls):
        """Forget the shared client; the next `shared()` call builds a new one."""
        cls._shared = None

    async def close(self):
        await super().close()
        await self.token_provider.close()

    # Request plumbing

    async def _request(
        self,
        path: str,
        mode: SourceAPI,
        decode: response_mapper.Decoder,
        params: Optional[Dict[str, QueryValue]] = None,
        callback: Optional[Callback] = None,
        require_key: Optional[str] = None
    ) -> Any:
        """
        Resolve tokens, perform one GET and map the response.

        A missing token short-circuits with the unauthorized error without
        any network call.
        """
        tokens = await self.token_provider.tokens_for(mode)
        if tokens is None:
            logger.error(f"Missing token for {mode.value} request: {path}")
            return await self._deliver(callback, None, Error.missing_token())

        url = self.build_url(path, params)
        logger.debug(f"Request params for {path}: {params}")
        raw = await self._get(url, headers=self.token_provider.headers_for(mode, tokens))
        result, error = response_mapper.map_response(raw, decode, require_key=require_key)
        return await self._deliver(callback, result, error)

    async def _deliver(self, callback: Optional[Callback], result: Any, error: Optional[Error]) -> Any:
        """Hand the outcome to the callback, or raise the error when there is none."""
        if callback is not None:
            outcome = callback(result, error)
            if inspect.isawaitable(outcome):
                await outcome
            return result

        if error is not None:
            raise AppleMusicError(error)
        return result

    def _storefront(self, storefront: Optional[str]) -> str:
        if storefront is None:
            return self.storefront
        return RequestValidator.validate_storefront(storefront)

    def _lang(self, lang: Optional[str]) -> Optional[str]:
        if lang is None:
            return self.lang
        return RequestValidator.validate_lang(lang)

    async def _catalog_resource(self, resource: str, resource_cls: Type[Resource], resource_id: str,
                                storefront: Optional[str], lang: Optional[str],
                                callback: Optional[Callback]) -> Optional[Resource]:
        resource_id = RequestValidator.validate_id(resource_id)
        path = f"catalog/{self._storefront(storefront)}/{resource}/{resource_id}"
        return await self._request(path, SourceAPI.DEVELOPER, response_mapper.single(resource_cls),
                                   params={"l": self._lang(lang)}, callback=callback)

    async def _catalog_resources(self, resource: str, resource_cls: Type[Resource], ids: Ids,
                                 storefront: Optional[str], lang: Optional[str],
                                 callback: Optional[Callback]) -> List[Resource]:
        ids = RequestValidator.validate_ids(ids)
        path = f"catalog/{self._storefront(storefront)}/{resource}"
        return await self._request(path, SourceAPI.DEVELOPER, response_mapper.many(resource_cls),
                                   params={"ids": ids, "l": self._lang(lang)}, callback=callback)

    async def _library_resource(self, resource: str, resource_cls: Type[Resource], resource_id: str,
                                lang: Optional[str], callback: Optional[Callback]) -> Optional[Resource]:
        resource_id = RequestValidator.validate_id(resource_id)
        path = f"me/library/{resource}/{resource_id}"
        return await self._request(path, SourceAPI.USER, response_mapper.single(resource_cls),
                                   params={"l": self._lang(lang)}, callback=callback)

    async def _library_resources(self, resource: str, resource_cls: Type[Resource], ids: Optional[Ids],
                                 limit: Optional[int], offset: Optional[int], lang: Optional[str],
                                 callback: Optional[Callback]) -> List[Resource]:
        params = {
            "ids": RequestValidator.validate_ids(ids) if ids else None,
            "limit": RequestValidator.validate_limit(limit),
            "offset": RequestValidator.validate_offset(offset),
            "l": self._lang(lang)
        }
        return await self._request(f"me/library/{resource}", SourceAPI.USER,
                                   response_mapper.many(resource_cls), params=params, callback=callback)

    # Storefronts

    async def get_user_storefront(self, lang: Optional[str] = None,
                                  callback: Optional[Callback] = None) -> Optional[Storefront]:
        """Get the storefront of the signed-in user."""
        return await self._request("me/storefront", SourceAPI.USER, response_mapper.single(Storefront),
                                   params={"l": self._lang(lang)}, callback=callback)

    async def get_storefront(self, storefront_id: str, lang: Optional[str] = None,
                             callback: Optional[Callback] = None) -> Optional[Storefront]:
        """
        Get a single storefront.

        Args:
            storefront_id: Two-letter storefront code, e.g. "us"
            lang: Optional language tag
            callback: Optional (result, error) callback

        Returns:
            Storefront, or None when the response carried no data
        """
        storefront_id = RequestValidator.validate_storefront(storefront_id)
        return await self._request(f"storefronts/{storefront_id}", SourceAPI.DEVELOPER,
                                   response_mapper.single(Storefront),
                                   params={"l": self._lang(lang)}, callback=callback)

    async def get_multiple_storefronts(self, ids: Ids, lang: Optional[str] = None,
                                       callback: Optional[Callback] = None) -> List[Storefront]:
        """Get several storefronts by code."""
        if isinstance(ids, str):
            ids = [part for part in ids.split(",") if part.strip()]
        if not ids:
            raise ValidationError("At least one storefront id is required")
        ids = [RequestValidator.validate_storefront(storefront_id) for storefront_id in ids]
        return await self._request("storefronts", SourceAPI.DEVELOPER, response_mapper.many(Storefront),
                                   params={"ids": ids, "l": self._lang(lang)}, callback=callback)

    async def get_all_storefronts(self, limit: Optional[int] = None, offset: Optional[int] = None,
                                  lang: Optional[str] = None,
                                  callback: Optional[Callback] = None) -> List[Storefront]:
        """Get one page of all storefronts."""
        params = {
            "limit": RequestValidator.validate_limit(limit),
            "offset": RequestValidator.validate_offset(offset),
            "l": self._lang(lang)
        }
        return await self._request("storefronts", SourceAPI.DEVELOPER, response_mapper.many(Storefront),
                                   params=params, callback=callback)

    # Catalog resources

    async def get_album(self, album_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                        callback: Optional[Callback] = None) -> Optional[Album]:
        """Get a catalog album by id."""
        return await self._catalog_resource("albums", Album, album_id, storefront, lang, callback)

    async def get_multiple_albums(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                  callback: Optional[Callback] = None) -> List[Album]:
        return await self._catalog_resources("albums", Album, ids, storefront, lang, callback)

    async def get_song(self, song_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                       callback: Optional[Callback] = None) -> Optional[Song]:
        """Get a catalog song by id."""
        return await self._catalog_resource("songs", Song, song_id, storefront, lang, callback)

    async def get_multiple_songs(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                 callback: Optional[Callback] = None) -> List[Song]:
        return await self._catalog_resources("songs", Song, ids, storefront, lang, callback)

    async def get_artist(self, artist_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                         callback: Optional[Callback] = None) -> Optional[Artist]:
        """Get a catalog artist by id."""
        return await self._catalog_resource("artists", Artist, artist_id, storefront, lang, callback)

    async def get_multiple_artists(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                   callback: Optional[Callback] = None) -> List[Artist]:
        return await self._catalog_resources("artists", Artist, ids, storefront, lang, callback)

    async def get_playlist(self, playlist_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                           callback: Optional[Callback] = None) -> Optional[Playlist]:
        """Get a catalog playlist by id."""
        return await self._catalog_resource("playlists", Playlist, playlist_id, storefront, lang, callback)

    async def get_multiple_playlists(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                     callback: Optional[Callback] = None) -> List[Playlist]:
        return await self._catalog_resources("playlists", Playlist, ids, storefront, lang, callback)

    async def get_music_video(self, music_video_id: str, storefront: Optional[str] = None,
                              lang: Optional[str] = None,
                              callback: Optional[Callback] = None) -> Optional[MusicVideo]:
        """Get a catalog music video by id."""
        return await self._catalog_resource("music-videos", MusicVideo, music_video_id, storefront, lang, callback)

    async def get_multiple_music_videos(self, ids: Ids, storefront: Optional[str] = None,
                                        lang: Optional[str] = None,
                                        callback: Optional[Callback] = None) -> List[MusicVideo]:
        return await self._catalog_resources("music-videos", MusicVideo, ids, storefront, lang, callback)

    async def get_station(self, station_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                          callback: Optional[Callback] = None) -> Optional[Station]:
        """Get a catalog station by id."""
        return await self._catalog_resource("stations", Station, station_id, storefront, lang, callback)

    async def get_multiple_stations(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                    callback: Optional[Callback] = None) -> List[Station]:
        return await self._catalog_resources("stations", Station, ids, storefront, lang, callback)

    async def get_curator(self, curator_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                          callback: Optional[Callback] = None) -> Optional[Curator]:
        """Get a catalog curator by id."""
        return await self._catalog_resource("curators", Curator, curator_id, storefront, lang, callback)

    async def get_multiple_curators(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                    callback: Optional[Callback] = None) -> List[Curator]:
        return await self._catalog_resources("curators", Curator, ids, storefront, lang, callback)

    async def get_apple_curator(self, curator_id: str, storefront: Optional[str] = None,
                                lang: Optional[str] = None,
                                callback: Optional[Callback] = None) -> Optional[AppleCurator]:
        """Get an Apple curator by id."""
        return await self._catalog_resource("apple-curators", AppleCurator, curator_id, storefront, lang, callback)

    async def get_multiple_apple_curators(self, ids: Ids, storefront: Optional[str] = None,
                                          lang: Optional[str] = None,
                                          callback: Optional[Callback] = None) -> List[AppleCurator]:
        return await self._catalog_resources("apple-curators", AppleCurator, ids, storefront, lang, callback)

    async def get_activity(self, activity_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                           callback: Optional[Callback] = None) -> Optional[Activity]:
        """Get a catalog activity by id."""
        return await self._catalog_resource("activities", Activity, activity_id, storefront, lang, callback)

    async def get_multiple_activities(self, ids: Ids, storefront: Optional[str] = None,
                                      lang: Optional[str] = None,
                                      callback: Optional[Callback] = None) -> List[Activity]:
        return await self._catalog_resources("activities", Activity, ids, storefront, lang, callback)

    async def get_genre(self, genre_id: str, storefront: Optional[str] = None, lang: Optional[str] = None,
                        callback: Optional[Callback] = None) -> Optional[Genre]:
        """Get a catalog genre by id."""
        return await self._catalog_resource("genres", Genre, genre_id, storefront, lang, callback)

    async def get_multiple_genres(self, ids: Ids, storefront: Optional[str] = None, lang: Optional[str] = None,
                                  callback: Optional[Callback] = None) -> List[Genre]:
        return await self._catalog_resources("genres", Genre, ids, storefront, lang, callback)

    async def get_top_genres(self, limit: Optional[int] = None, offset: Optional[int] = None,
                             storefront: Optional[str] = None, lang: Optional[str] = None,
                             callback: Optional[Callback] = None) -> List[Genre]:
        """Get the top-level genres of a storefront."""
        params = {
            "limit": RequestValidator.validate_limit(limit),
            "offset": RequestValidator.validate_offset(offset),
            "l": self._lang(lang)
        }
        return await self._request(f"catalog/{self._storefront(storefront)}/genres", SourceAPI.DEVELOPER,
                                   response_mapper.many(Genre), params=params, callback=callback)

    # Charts and search

    async def get_charts(self, types: Ids, chart: Optional[str] = None, genre: Optional[str] = None,
                         limit: Optional[int] = None, offset: Optional[int] = None,
                         storefront: Optional[str] = None, lang: Optional[str] = None,
                         callback: Optional[Callback] = None) -> Optional[ChartResults]:
        """
        Get chart results for one or more resource types.

        Args:
            types: Chart types: albums, songs, music-videos, playlists
            chart: Chart name, e.g. "most-played"
            genre: Genre id to scope the charts to
            limit: Maximum items per chart
            offset: Offset of the first item
            storefront: Storefront code, defaults to the client's storefront
            lang: Optional language tag
            callback: Optional (result, error) callback

        Returns:
            ChartResults with one Chart list per requested type
        """
        params = {
            "types": validate_chart_types(types),
            "chart": chart or None,
            "genre": RequestValidator.validate_id(genre) if genre else None,
            "limit": RequestValidator.validate_limit(limit),
            "offset": RequestValidator.validate_offset(offset),
            "l": self._lang(lang)
        }
        return await self._request(f"catalog/{self._storefront(storefront)}/charts", SourceAPI.DEVELOPER,
                                   response_mapper.charts, params=params, callback=callback)

    async def search(self, term: str, limit: Optional[int] = None, offset: Optional[int] = None,
                     types: Optional[Ids] = None, storefront: Optional[str] = None,
                     lang: Optional[str] = None,
                     callback: Optional[Callback] = None) -> Optional[SearchResults]:
        """
        Search the catalog.

        Args:
            term: Search term; spaces are sent as '+'
            limit: Maximum results per type
            offset: Offset of the first result
            types: Resource types to search, all types when omitted
            storefront: Storefront code, defaults to the client's storefront
            lang: Optional language tag
            callback: Optional (result, error) callback

        Returns:
            SearchResults grouped by resource type
        """
        params = {
            "term": RequestValidator.validate_term(term),
            "limit": RequestValidator.validate_limit(limit),
            "offset": RequestValidator.validate_offset(offset),
            "types": validate_search_types(types),
            "l": self._lang(lang)
        }
        return await self._request(f"catalog/{self._storefront(storefront)}/search", SourceAPI.DEVELOPER,
                                   response_mapper.search_results, params=params, callback=callback,
                                   require_key="results")

    async def get_search_hints(self, term: str, limit: Optional[int] = None, types: Optional[Ids] = None,
                               storefront: Optional[str] = None, lang: Optional[str] = None,
                               callback: Optional[Callback] = None) -> Optional[List[str]]:
        """Get search term suggestions for a partial term."""
        params = {
            "term": RequestValidator.validate_term(term),
            "limit": RequestValidator.validate_limit(limit),
            "types": validate_search_types(types),
            "l": self._lang(lang)
        }
        return await self._request(f"catalog/{self._storefront(storefront)}/search/hints", SourceAPI.DEVELOPER,
                                   response_mapper.search_hints, params=params, callback=callback,
                                   require_key="results")

    # Personal library

    async def get_library_album(self, album_id: str, lang: Optional[str] = None,
                                callback: Optional[Callback] = None) -> Optional[LibraryAlbum]:
        """Get an album from the user's library."""
        return await self._library_resource("albums", LibraryAlbum, album_id, lang, callback)

    async def get_multiple_library_albums(self, ids: Optional[Ids] = None, limit: Optional[int] = None,
                                          offset: Optional[int] = None, lang: Optional[str] = None,
                                          callback: Optional[Callback] = None) -> List[LibraryAlbum]:
        """Get library albums by id, or a page of the whole library when no ids are given."""
        return await self._library_resources("albums", LibraryAlbum, ids, limit, offset, lang, callback)

    async def get_library_artist(self, artist_id: str, lang: Optional[str] = None,
                                 callback: Optional[Callback] = None) -> Optional[LibraryArtist]:
        return await self._library_resource("artists", LibraryArtist, artist_id, lang, callback)

    async def get_multiple_library_artists(self, ids: Optional[Ids] = None, limit: Optional[int] = None,
                                           offset: Optional[int] = None, lang: Optional[str] = None,
                                           callback: Optional[Callback] = None) -> List[LibraryArtist]:
        return await self._library_resources("artists", LibraryArtist, ids, limit, offset, lang, callback)

    async def get_library_song(self, song_id: str, lang: Optional[str] = None,
                               callback: Optional[Callback] = None) -> Optional[LibrarySong]:
        return await self._library_resource("songs", LibrarySong, song_id, lang, callback)

    async def get_multiple_library_songs(self, ids: Optional[Ids] = None, limit: Optional[int] = None,
                                         offset: Optional[int] = None, lang: Optional[str] = None,
                                         callback: Optional[Callback] = None) -> List[LibrarySong]:
        return await self._library_resources("songs", LibrarySong, ids, limit, offset, lang, callback)

    async def get_library_music_video(self, music_video_id: str, lang: Optional[str] = None,
                                      callback: Optional[Callback] = None) -> Optional[LibraryMusicVideo]:
        return await self._library_resource("music-videos", LibraryMusicVideo, music_video_id, lang, callback)

    async def get_multiple_library_music_videos(self, ids: Optional[Ids] = None, limit: Optional[int] = None,
                                                offset: Optional[int] = None, lang: Optional[str] = None,
                                                callback: Optional[Callback] = None) -> List[LibraryMusicVideo]:
        return await self._library_resources("music-videos", LibraryMusicVideo, ids, limit, offset, lang, callback)

    async def get_library_playlist(self, playlist_id: str, lang: Optional[str] = None,
                                   callback: Optional[Callback] = None) -> Optional[LibraryPlaylist]:
        return await self._library_resource("playlists", LibraryPlaylist, playlist_id, lang, callback)

    async def get_multiple_library_playlists(self, ids: Optional[Ids] = None, limit: Optional[int] = None,
                                             offset: Optional[int] = None, lang: Optional[str] = None,
                                             callback: Optional[Callback] = None) -> List[LibraryPlaylist]:
        return await self._library_resources("playlists", LibraryPlaylist, ids, limit, offset, lang, callback)
