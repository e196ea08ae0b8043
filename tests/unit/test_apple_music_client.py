#!/usr/bin/env python3
"""
Unit tests for the Apple Music client.
Tests endpoint URLs, credential headers and result/error delivery.
"""

import aiohttp
import pytest
from unittest.mock import AsyncMock, Mock

from asapplemusic.api.apple_music_client import AppleMusicClient
from asapplemusic.api.base_client import AppleMusicError, build_query
from asapplemusic.api.token_provider import TokenProvider
from asapplemusic.models import (
    Album, Song, Storefront, Genre, LibraryAlbum, LibraryPlaylist, ChartResults, SearchResults
)
from asapplemusic.models.error import Error, ErrorCode
from asapplemusic.utils.validators import ValidationError
from tests.fakes import FakeResponse

BASE = "https://api.music.apple.com/v1"

class TestBuildQuery:
    """Unit tests for query string encoding."""

    def test_drops_none_and_joins_lists(self):
        assert build_query({"ids": ["1", "2", "3"], "l": None, "limit": 5}) == "ids=1,2,3&limit=5"

    def test_spaces_become_plus(self):
        assert build_query({"term": "taylor swift"}) == "term=taylor+swift"

    def test_empty(self):
        assert build_query({}) == ""
        assert build_query({"ids": []}) == ""

class TestCatalogRequests:
    """Unit tests for catalog endpoints."""

    @pytest.mark.asyncio
    async def test_get_album(self, client, fake_session, album_data):
        fake_session.queue(FakeResponse(body={"data": [album_data]}))

        album = await client.get_album("310730204")

        assert isinstance(album, Album)
        assert album.name == "Born to Run"
        assert fake_session.last_url == f"{BASE}/catalog/us/albums/310730204"
        assert fake_session.last_headers == {"Authorization": "Bearer dev-token"}

    @pytest.mark.asyncio
    async def test_get_multiple_songs(self, client, fake_session, song_data):
        fake_session.queue(FakeResponse(body={"data": [song_data, dict(song_data, id="2")]}))

        songs = await client.get_multiple_songs(["1441164670", "2"], storefront="GB", lang="en-GB")

        assert [song.id for song in songs] == ["1441164670", "2"]
        assert all(isinstance(song, Song) for song in songs)
        assert fake_session.last_url == f"{BASE}/catalog/gb/songs?ids=1441164670,2&l=en-GB"

    @pytest.mark.asyncio
    async def test_comma_separated_ids(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": []}))

        result = await client.get_multiple_artists("178834,5468295")

        assert result == []
        assert fake_session.last_url == f"{BASE}/catalog/us/artists?ids=178834,5468295"

    @pytest.mark.asyncio
    async def test_music_video_and_apple_curator_paths(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": []}), FakeResponse(body={"data": []}))

        await client.get_music_video("639032181")
        await client.get_multiple_apple_curators(["976439548"])

        assert fake_session.calls[0]["url"] == f"{BASE}/catalog/us/music-videos/639032181"
        assert fake_session.calls[1]["url"] == f"{BASE}/catalog/us/apple-curators?ids=976439548"

    @pytest.mark.asyncio
    async def test_top_genres(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": [{"id": "34", "type": "genres", "attributes": {"name": "Music"}}]}))

        genres = await client.get_top_genres(limit=10, offset=20)

        assert isinstance(genres[0], Genre)
        assert fake_session.last_url == f"{BASE}/catalog/us/genres?limit=10&offset=20"

    @pytest.mark.asyncio
    async def test_storefronts(self, client, fake_session, storefront_data):
        fake_session.queue(
            FakeResponse(body={"data": [storefront_data]}),
            FakeResponse(body={"data": [storefront_data]}),
            FakeResponse(body={"data": [storefront_data]})
        )

        storefront = await client.get_storefront("US")
        multiple = await client.get_multiple_storefronts("us,gb")
        all_storefronts = await client.get_all_storefronts(limit=2)

        assert isinstance(storefront, Storefront)
        assert len(multiple) == 1
        assert len(all_storefronts) == 1
        assert [call["url"] for call in fake_session.calls] == [
            f"{BASE}/storefronts/us",
            f"{BASE}/storefronts?ids=us,gb",
            f"{BASE}/storefronts?limit=2"
        ]

    @pytest.mark.asyncio
    async def test_default_lang_from_settings(self, clean_env, token_provider, fake_session):
        clean_env.setenv("APPLE_MUSIC_STOREFRONT", "jp")
        clean_env.setenv("APPLE_MUSIC_LANG", "ja")
        from config.settings import Settings
        client = AppleMusicClient(settings=Settings(), token_provider=token_provider, session=fake_session)
        fake_session.queue(FakeResponse(body={"data": []}))

        await client.get_song("1")

        assert fake_session.last_url == f"{BASE}/catalog/jp/songs/1?l=ja"

class TestChartsAndSearch:
    """Unit tests for chart and search endpoints."""

    @pytest.mark.asyncio
    async def test_get_charts(self, client, fake_session, album_data):
        fake_session.queue(FakeResponse(body={"results": {"albums": [{"chart": "most-played", "data": [album_data]}]}}))

        charts = await client.get_charts(["albums", "songs"], chart="most-played", genre="14", limit=5)

        assert isinstance(charts, ChartResults)
        assert charts.albums[0].data[0].name == "Born to Run"
        assert fake_session.last_url == (
            f"{BASE}/catalog/us/charts?types=albums,songs&chart=most-played&genre=14&limit=5"
        )

    @pytest.mark.asyncio
    async def test_search(self, client, fake_session, song_data):
        fake_session.queue(FakeResponse(body={"results": {"songs": {"data": [song_data]}}}))

        results = await client.search("bohemian rhapsody", limit=5, types=["songs", "albums"])

        assert isinstance(results, SearchResults)
        assert results.items[0].name == "Bohemian Rhapsody"
        assert fake_session.last_url == (
            f"{BASE}/catalog/us/search?term=bohemian+rhapsody&limit=5&types=songs,albums"
        )

    @pytest.mark.asyncio
    async def test_search_without_results(self, client, fake_session):
        fake_session.queue(FakeResponse(body={}))

        with pytest.raises(AppleMusicError) as exc_info:
            await client.search("anything")

        assert exc_info.value.error == Error.missing_token()
        assert exc_info.value.status == "401"

    @pytest.mark.asyncio
    async def test_search_hints(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"results": {"terms": ["love", "lover"]}}))

        hints = await client.get_search_hints("lov", limit=2)

        assert hints == ["love", "lover"]
        assert fake_session.last_url == f"{BASE}/catalog/us/search/hints?term=lov&limit=2"

class TestLibraryRequests:
    """Unit tests for personal library endpoints."""

    @pytest.mark.asyncio
    async def test_user_storefront_headers(self, client, fake_session, storefront_data):
        fake_session.queue(FakeResponse(body={"data": [storefront_data]}))

        storefront = await client.get_user_storefront()

        assert storefront.id == "us"
        assert fake_session.last_url == f"{BASE}/me/storefront"
        assert fake_session.last_headers == {
            "Authorization": "Bearer dev-token",
            "Music-User-Token": "user-token"
        }

    @pytest.mark.asyncio
    async def test_library_album(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": [
            {"id": "l.abc", "type": "library-albums", "attributes": {"name": "Mine", "trackCount": 3}}
        ]}))

        album = await client.get_library_album("l.abc")

        assert isinstance(album, LibraryAlbum)
        assert album.track_count == 3
        assert fake_session.last_url == f"{BASE}/me/library/albums/l.abc"

    @pytest.mark.asyncio
    async def test_library_list_without_ids(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": [{"id": "p.1", "type": "library-playlists"}]}))

        playlists = await client.get_multiple_library_playlists(limit=25)

        assert isinstance(playlists[0], LibraryPlaylist)
        assert fake_session.last_url == f"{BASE}/me/library/playlists?limit=25"

    @pytest.mark.asyncio
    async def test_library_list_with_ids(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": []}))

        await client.get_multiple_library_music_videos(["l.1", "l.2"])

        assert fake_session.last_url == f"{BASE}/me/library/music-videos?ids=l.1,l.2"

    @pytest.mark.asyncio
    async def test_missing_user_token(self, settings, fake_session):
        client = AppleMusicClient(
            settings=settings,
            token_provider=TokenProvider(developer_token="dev-token"),
            session=fake_session
        )

        with pytest.raises(AppleMusicError) as exc_info:
            await client.get_multiple_library_songs()

        assert exc_info.value.error.code is ErrorCode.UNAUTHORIZED
        assert fake_session.calls == []

class TestErrorDelivery:
    """Unit tests for raised and callback-delivered errors."""

    @pytest.mark.asyncio
    async def test_api_error_raises(self, client, fake_session, not_found_body):
        fake_session.queue(FakeResponse(status=404, reason="Not Found", body=not_found_body))

        with pytest.raises(AppleMusicError) as exc_info:
            await client.get_album("0")

        assert exc_info.value.error.detail == "Resource with requested id was not found"

    @pytest.mark.asyncio
    async def test_transport_error(self, client, fake_session):
        fake_session.queue(aiohttp.ClientConnectionError("Connection refused"))

        with pytest.raises(AppleMusicError) as exc_info:
            await client.get_song("1")

        assert exc_info.value.error.detail == "Connection refused"

    @pytest.mark.asyncio
    async def test_callback_receives_result(self, client, fake_session, album_data):
        fake_session.queue(FakeResponse(body={"data": [album_data]}))
        callback = Mock()

        album = await client.get_album("310730204", callback=callback)

        callback.assert_called_once_with(album, None)
        assert album.id == "310730204"

    @pytest.mark.asyncio
    async def test_callback_receives_error(self, client, fake_session):
        fake_session.queue(FakeResponse(status=500, reason="Internal Server Error"))
        callback = AsyncMock()

        result = await client.get_multiple_albums(["1"], callback=callback)

        assert result is None
        callback.assert_awaited_once()
        delivered_result, error = callback.await_args.args
        assert delivered_result is None
        assert error.status == "500"
        assert error.title == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_missing_token_with_callback(self, settings, fake_session):
        client = AppleMusicClient(settings=settings, token_provider=TokenProvider(), session=fake_session)
        callback = Mock()

        await client.get_album("1", callback=callback)

        callback.assert_called_once_with(None, Error.missing_token())
        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_validation_happens_before_request(self, client, fake_session):
        with pytest.raises(ValidationError):
            await client.get_album("not a valid id!")
        with pytest.raises(ValidationError):
            await client.get_charts([])
        with pytest.raises(ValidationError):
            await client.search("   ")
        with pytest.raises(ValidationError):
            await client.get_top_genres(limit=0)
        with pytest.raises(ValidationError):
            await client.get_album("1", storefront="usa")

        assert fake_session.calls == []

class TestUndecodableBodies:
    """Unit tests for successful responses whose body cannot be decoded."""

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, client, fake_session):
        fake_session.queue(FakeResponse(body=b'{"data":[{"id":"1","attributes":{"name":"\xff"}}]}'))
        callback = Mock()

        album = await client.get_album("1", callback=callback)

        assert album is None
        callback.assert_called_once_with(None, None)

    @pytest.mark.asyncio
    async def test_not_json(self, client, fake_session):
        fake_session.queue(FakeResponse(body="<html>Service moved</html>"))

        songs = await client.get_multiple_songs(["1", "2"])

        assert songs == []

    @pytest.mark.asyncio
    async def test_wrongly_typed_nested_attributes(self, client, fake_session):
        fake_session.queue(FakeResponse(body={"data": [{
            "id": "1", "type": "albums",
            "attributes": {"name": "Born to Run", "artwork": 5, "playParams": "x", "editorialNotes": []}
        }]}))
        callback = Mock()

        album = await client.get_album("1", callback=callback)

        callback.assert_called_once_with(album, None)
        assert album.name == "Born to Run"
        assert album.artwork is None
        assert album.play_params is None
        assert album.editorial_notes is None

class TestClientLifecycle:
    """Unit tests for sessions and the shared client."""

    @pytest.mark.asyncio
    async def test_close_keeps_injected_session(self, client, fake_session):
        async with client:
            pass

        assert fake_session.closed is False

    def test_shared_client(self, settings):
        AppleMusicClient.reset_shared()
        try:
            shared = AppleMusicClient.shared()

            assert shared is AppleMusicClient.shared()
            assert shared.storefront == "us"
        finally:
            AppleMusicClient.reset_shared()

        assert AppleMusicClient._shared is None
