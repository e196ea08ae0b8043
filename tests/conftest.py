"""
Pytest configuration and shared fixtures for the Apple Music client tests.
"""

import pytest

from config.settings import Settings
from asapplemusic.api.apple_music_client import AppleMusicClient
from asapplemusic.api.token_provider import TokenProvider
from tests.fakes import FakeSession

ENV_VARS = [
    "APPLE_MUSIC_BASE_URL",
    "APPLE_MUSIC_TIMEOUT",
    "APPLE_MUSIC_MAX_RETRIES",
    "APPLE_MUSIC_DEVELOPER_TOKEN",
    "APPLE_MUSIC_TOKEN_URL",
    "APPLE_MUSIC_TOKEN_METHOD",
    "APPLE_MUSIC_KEY_ID",
    "APPLE_MUSIC_TEAM_ID",
    "APPLE_MUSIC_PRIVATE_KEY",
    "APPLE_MUSIC_TOKEN_TTL",
    "APPLE_MUSIC_USER_TOKEN",
    "APPLE_MUSIC_STOREFRONT",
    "APPLE_MUSIC_LANG",
    "APPLE_MUSIC_DEBUG",
    "LOG_LEVEL",
]

@pytest.fixture
def clean_env(monkeypatch):
    """Remove Apple Music variables from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch

@pytest.fixture
def settings(clean_env):
    """Settings with a static developer token."""
    clean_env.setenv("APPLE_MUSIC_DEVELOPER_TOKEN", "dev-token")
    return Settings()

@pytest.fixture
def fake_session():
    return FakeSession()

@pytest.fixture
def token_provider():
    return TokenProvider(developer_token="dev-token", user_token="user-token")

@pytest.fixture
def client(settings, token_provider, fake_session):
    """Client wired to the fake session."""
    return AppleMusicClient(settings=settings, token_provider=token_provider, session=fake_session)

@pytest.fixture
def album_data():
    """Album resource as returned in a `data` array."""
    return {
        "id": "310730204",
        "type": "albums",
        "href": "/v1/catalog/us/albums/310730204",
        "attributes": {
            "name": "Born to Run",
            "artistName": "Bruce Springsteen",
            "artwork": {
                "url": "https://example.com/image/{w}x{h}bb.jpg",
                "width": 1500,
                "height": 1500,
                "bgColor": "0e0e0e",
                "textColor1": "f2f2f2"
            },
            "contentRating": None,
            "copyright": "℗ 1975 Bruce Springsteen",
            "editorialNotes": {"standard": "A landmark.", "short": "Landmark"},
            "genreNames": ["Rock", "Music"],
            "isComplete": True,
            "isSingle": False,
            "playParams": {"id": "310730204", "kind": "album"},
            "recordLabel": "Columbia",
            "releaseDate": "1975-08-25",
            "trackCount": 8,
            "url": "https://music.apple.com/us/album/born-to-run/310730204"
        },
        "relationships": {
            "artists": {
                "href": "/v1/catalog/us/albums/310730204/artists",
                "data": [{"id": "178834", "type": "artists", "href": "/v1/catalog/us/artists/178834"}]
            },
            "tracks": {
                "href": "/v1/catalog/us/albums/310730204/tracks",
                "data": [
                    {
                        "id": "310730206",
                        "type": "songs",
                        "attributes": {
                            "name": "Thunder Road",
                            "artistName": "Bruce Springsteen",
                            "durationInMillis": 289533,
                            "trackNumber": 1
                        }
                    }
                ]
            }
        }
    }

@pytest.fixture
def song_data():
    return {
        "id": "1441164670",
        "type": "songs",
        "attributes": {
            "name": "Bohemian Rhapsody",
            "artistName": "Queen",
            "albumName": "A Night at the Opera",
            "contentRating": "explicit",
            "durationInMillis": 354947,
            "isrc": "GBUM71029604",
            "previews": [{"url": "https://example.com/preview.m4a"}],
            "genreNames": ["Rock"]
        }
    }

@pytest.fixture
def storefront_data():
    return {
        "id": "us",
        "type": "storefronts",
        "href": "/v1/storefronts/us",
        "attributes": {
            "name": "United States",
            "defaultLanguageTag": "en-US",
            "supportedLanguageTags": ["en-US", "es-MX"],
            "explicitContentPolicy": "allowed"
        }
    }

@pytest.fixture
def not_found_body():
    return {
        "errors": [
            {
                "id": "QMJ5LKLNQJ3QPXL4FWFDRA6GXM",
                "status": "404",
                "code": "40400",
                "title": "Resource Not Found",
                "detail": "Resource with requested id was not found",
                "source": {"parameter": "id"}
            }
        ]
    }
