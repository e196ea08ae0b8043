#!/usr/bin/env python3
"""
Unit tests for response mapping.
"""

import asyncio

import aiohttp

from asapplemusic.api import response_mapper
from asapplemusic.api.base_client import RawResponse
from asapplemusic.models import Album, Storefront, ChartResults, SearchResults
from asapplemusic.models.error import Error, ErrorCode

URL = "https://api.music.apple.com/v1/catalog/us/albums/1"

def raw(status=200, payload=None, reason="OK", exception=None):
    return RawResponse(url=URL, status=status, reason=reason, payload=payload, exception=exception)

class TestErrorMapping:
    """Unit tests for the error rules."""

    def test_errors_array_wins(self, not_found_body):
        result, error = response_mapper.map_response(
            raw(status=404, payload=not_found_body, reason="Not Found"),
            response_mapper.single(Album)
        )

        assert result is None
        assert error.id == "QMJ5LKLNQJ3QPXL4FWFDRA6GXM"
        assert error.detail == "Resource with requested id was not found"

    def test_errors_array_with_success_status(self):
        """Test an errors body is reported even when the status is 2xx."""
        payload = {"errors": [{"status": "400", "code": "40000", "title": "Invalid Parameter"}], "data": []}

        result, error = response_mapper.map_response(raw(payload=payload), response_mapper.many(Album))

        assert result is None
        assert error.code is ErrorCode.BAD_REQUEST
        assert error.title == "Invalid Parameter"

    def test_only_first_error_is_used(self):
        payload = {"errors": [{"id": "first"}, {"id": "second"}]}

        _, error = response_mapper.map_response(raw(status=400, payload=payload), response_mapper.many(Album))

        assert error.id == "first"

    def test_transport_error_without_status(self):
        exc = aiohttp.ClientConnectionError("Connection refused")

        result, error = response_mapper.map_response(
            raw(status=None, reason=None, exception=exc), response_mapper.single(Album)
        )

        assert result is None
        assert error.detail == "Connection refused"
        assert error.status == "404"
        assert error.code is ErrorCode.NOT_FOUND
        assert error.title == "Resource Not Found"

    def test_transport_error_with_status(self):
        exc = asyncio.TimeoutError()

        _, error = response_mapper.map_response(
            raw(status=503, exception=exc), response_mapper.single(Album)
        )

        assert error.status == "503"
        assert error.code is ErrorCode.SERVICE_UNAVAILABLE
        assert error.detail == "TimeoutError"

    def test_status_without_error_body(self):
        result, error = response_mapper.map_response(
            raw(status=500, payload=None, reason="Internal Server Error"), response_mapper.many(Album)
        )

        assert result is None
        assert error.status == "500"
        assert error.code is ErrorCode.INTERNAL_SERVER_ERROR
        assert error.title == "Internal Server Error"
        assert URL in error.detail

class TestSuccessMapping:
    """Unit tests for decoding successful responses."""

    def test_single(self, album_data):
        result, error = response_mapper.map_response(
            raw(payload={"data": [album_data]}), response_mapper.single(Album)
        )

        assert error is None
        assert isinstance(result, Album)
        assert result.name == "Born to Run"

    def test_single_empty_data(self):
        result, error = response_mapper.map_response(raw(payload={"data": []}), response_mapper.single(Album))

        assert result is None
        assert error is None

    def test_many(self, storefront_data):
        result, error = response_mapper.map_response(
            raw(payload={"data": [storefront_data, dict(storefront_data, id="gb")]}),
            response_mapper.many(Storefront)
        )

        assert error is None
        assert [storefront.id for storefront in result] == ["us", "gb"]

    def test_undecodable_body(self):
        """Test a 2xx response whose body was not JSON."""
        single, error = response_mapper.map_response(raw(payload=None), response_mapper.single(Album))
        many, _ = response_mapper.map_response(raw(payload=None), response_mapper.many(Album))

        assert error is None
        assert single is None
        assert many == []

    def test_wrongly_typed_attributes(self):
        payload = {"data": [{"id": "1", "type": "albums", "attributes": {"artwork": 5, "playParams": "x", "name": "Kept"}}]}

        result, error = response_mapper.map_response(raw(payload=payload), response_mapper.single(Album))

        assert error is None
        assert result.name == "Kept"
        assert result.artwork is None
        assert result.play_params is None

    def test_decoder_failure_maps_to_empty_result(self):
        def decode(payload):
            if payload:
                raise TypeError("unexpected shape")
            return []

        result, error = response_mapper.map_response(raw(payload={"data": 5}), decode)

        assert error is None
        assert result == []

    def test_charts(self, album_data):
        payload = {"results": {"albums": [{"chart": "most-played", "name": "Top Albums", "data": [album_data]}]}}

        result, error = response_mapper.map_response(raw(payload=payload), response_mapper.charts)

        assert error is None
        assert isinstance(result, ChartResults)
        assert result.albums[0].data[0].id == "310730204"

    def test_search(self, song_data):
        payload = {"results": {"songs": {"href": "/v1/s", "data": [song_data]}}}

        result, error = response_mapper.map_response(
            raw(payload=payload), response_mapper.search_results, require_key="results"
        )

        assert error is None
        assert isinstance(result, SearchResults)
        assert result.songs[0].name == "Bohemian Rhapsody"

    def test_search_without_results_is_unauthorized(self):
        result, error = response_mapper.map_response(
            raw(payload={"meta": {}}), response_mapper.search_results, require_key="results"
        )

        assert result is None
        assert error == Error.missing_token()

    def test_search_hints(self):
        payload = {"results": {"terms": ["love", "love story", "lover"]}}

        result, error = response_mapper.map_response(
            raw(payload=payload), response_mapper.search_hints, require_key="results"
        )

        assert error is None
        assert result == ["love", "love story", "lover"]

    def test_search_hints_without_terms(self):
        result, error = response_mapper.map_response(
            raw(payload={"results": {}}), response_mapper.search_hints, require_key="results"
        )

        assert error is None
        assert result == []
