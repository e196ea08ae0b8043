"""
Request explorer: a catalog of named request types, each with its parameters
flagged optional or mandatory, used by the command line and HTTP front-ends
to run any client operation from plain string parameters.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Callable

from .api.apple_music_client import AppleMusicClient, Callback
from .utils.validators import ValidationError

logger = logging.getLogger(__name__)

class UnknownRequestError(ValueError):
    """Raised for a request type that is not in the catalog."""
    pass

def _as_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]

def _as_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Expected an integer, got {value!r}")

@dataclass
class RequestParam:
    """A parameter of a request type and the client argument it feeds."""
    name: str
    argument: str
    optional: bool = False
    convert: Callable[[str], Any] = str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "optional": self.optional}

@dataclass
class RequestType:
    """A named request type of the catalog."""
    name: str
    method: str
    description: str
    params: List[RequestParam] = field(default_factory=list)

    @property
    def mandatory(self) -> List[str]:
        return [param.name for param in self.params if not param.optional]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "params": [param.to_dict() for param in self.params]
        }

LANG = RequestParam("l", "lang", optional=True)
STOREFRONT = RequestParam("storefront", "storefront", optional=True)
LIMIT = RequestParam("limit", "limit", optional=True, convert=_as_int)
OFFSET = RequestParam("offset", "offset", optional=True, convert=_as_int)
IDS = RequestParam("ids", "ids", convert=_as_list)

def _catalog_pair(resource: str, plural: str, method: str, plural_method: str,
                  id_argument: str) -> List[RequestType]:
    return [
        RequestType(f"get{resource}", method, f"Get a catalog {resource.lower()} by id",
                    [RequestParam("id", id_argument), STOREFRONT, LANG]),
        RequestType(f"getMultiple{plural}", plural_method, f"Get several catalog {plural.lower()} by id",
                    [IDS, STOREFRONT, LANG])
    ]

def _library_pair(resource: str, plural: str, method: str, plural_method: str,
                  id_argument: str) -> List[RequestType]:
    return [
        RequestType(f"getLibrary{resource}", method, f"Get a {resource.lower()} from the user's library",
                    [RequestParam("id", id_argument), LANG]),
        RequestType(f"getMultipleLibrary{plural}", plural_method,
                    f"Get library {plural.lower()} by id, or a page of all of them",
                    [RequestParam("ids", "ids", optional=True, convert=_as_list), LIMIT, OFFSET, LANG])
    ]

def _build_catalog() -> Dict[str, RequestType]:
    request_types = [
        RequestType("getUserStorefront", "get_user_storefront", "Get the user's storefront", [LANG]),
        RequestType("getStorefront", "get_storefront", "Get a storefront by code",
                    [RequestParam("id", "storefront_id"), LANG]),
        RequestType("getMultipleStorefronts", "get_multiple_storefronts", "Get several storefronts by code",
                    [IDS, LANG]),
        RequestType("getAllStorefronts", "get_all_storefronts", "Get all storefronts", [LIMIT, OFFSET, LANG]),
    ]
    request_types += _catalog_pair("Album", "Albums", "get_album", "get_multiple_albums", "album_id")
    request_types += _catalog_pair("MusicVideo", "MusicVideos", "get_music_video", "get_multiple_music_videos",
                                   "music_video_id")
    request_types += _catalog_pair("Playlist", "Playlists", "get_playlist", "get_multiple_playlists", "playlist_id")
    request_types += _catalog_pair("Song", "Songs", "get_song", "get_multiple_songs", "song_id")
    request_types += _catalog_pair("Station", "Stations", "get_station", "get_multiple_stations", "station_id")
    request_types += _catalog_pair("Artist", "Artists", "get_artist", "get_multiple_artists", "artist_id")
    request_types += _catalog_pair("Curator", "Curators", "get_curator", "get_multiple_curators", "curator_id")
    request_types += _catalog_pair("Activity", "Activities", "get_activity", "get_multiple_activities",
                                   "activity_id")
    request_types += _catalog_pair("AppleCurator", "AppleCurators", "get_apple_curator",
                                   "get_multiple_apple_curators", "curator_id")
    request_types += _catalog_pair("Genre", "Genres", "get_genre", "get_multiple_genres", "genre_id")
    request_types += [
        RequestType("getTopGenres", "get_top_genres", "Get the top-level genres",
                    [LIMIT, OFFSET, STOREFRONT, LANG]),
        RequestType("getCharts", "get_charts", "Get charts for one or more types",
                    [RequestParam("types", "types", convert=_as_list),
                     RequestParam("chart", "chart", optional=True),
                     RequestParam("genre", "genre", optional=True),
                     LIMIT, OFFSET, STOREFRONT, LANG]),
        RequestType("searchTerm", "search", "Search the catalog",
                    [RequestParam("term", "term"), LIMIT, OFFSET,
                     RequestParam("types", "types", optional=True, convert=_as_list),
                     STOREFRONT, LANG]),
        RequestType("getSearchHints", "get_search_hints", "Get search term suggestions",
                    [RequestParam("term", "term"), LIMIT,
                     RequestParam("types", "types", optional=True, convert=_as_list),
                     STOREFRONT, LANG]),
    ]
    request_types += _library_pair("Album", "Albums", "get_library_album", "get_multiple_library_albums",
                                   "album_id")
    request_types += _library_pair("Artist", "Artists", "get_library_artist", "get_multiple_library_artists",
                                   "artist_id")
    request_types += _library_pair("Song", "Songs", "get_library_song", "get_multiple_library_songs", "song_id")
    request_types += _library_pair("MusicVideo", "MusicVideos", "get_library_music_video",
                                   "get_multiple_library_music_videos", "music_video_id")
    request_types += _library_pair("Playlist", "Playlists", "get_library_playlist",
                                   "get_multiple_library_playlists", "playlist_id")
    return {request_type.name: request_type for request_type in request_types}

REQUEST_TYPES: Dict[str, RequestType] = _build_catalog()

def get_request_type(call_type: str) -> RequestType:
    try:
        return REQUEST_TYPES[call_type]
    except KeyError:
        raise UnknownRequestError(f"Unknown request type: {call_type}")

def list_requests() -> List[RequestType]:
    """All request types of the catalog."""
    return list(REQUEST_TYPES.values())

def missing_params(call_type: str, params: Dict[str, str]) -> List[str]:
    """Names of the mandatory parameters not supplied (empty values count as missing)."""
    request_type = get_request_type(call_type)
    return [name for name in request_type.mandatory if not (params.get(name) or "").strip()]

def build_arguments(request_type: RequestType, params: Dict[str, str]) -> Dict[str, Any]:
    """Convert string parameters into keyword arguments for the client method."""
    known = {param.name: param for param in request_type.params}
    unknown = sorted(set(params) - set(known))
    if unknown:
        logger.warning(f"Ignoring unknown parameters for {request_type.name}: {unknown}")

    arguments = {}
    for name, param in known.items():
        value = (params.get(name) or "").strip()
        if not value:
            continue
        arguments[param.argument] = param.convert(value)
    return arguments

async def make_call(client: AppleMusicClient, call_type: str, params: Dict[str, str],
                    callback: Optional[Callback] = None) -> Any:
    """
    Run one request of the catalog.

    Args:
        client: Client used to perform the request
        call_type: Request type name, e.g. "getMultipleAlbums"
        params: String parameters keyed by parameter name
        callback: Optional (result, error) callback; without one, API errors raise

    Returns:
        The decoded result of the client operation
    """
    request_type = get_request_type(call_type)
    missing = missing_params(call_type, params)
    if missing:
        raise ValidationError(f"Missing required parameters for {call_type}: {', '.join(missing)}")

    arguments = build_arguments(request_type, params)
    logger.info(f"Running {call_type} with {arguments}")
    method = getattr(client, request_type.method)
    return await method(callback=callback, **arguments)

def serialize_result(result: Any) -> Any:
    """Plain-data form of a client result, ready for JSON output."""
    if result is None or isinstance(result, (str, int, float, bool)):
        return result
    if isinstance(result, (list, tuple)):
        return [serialize_result(item) for item in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result
