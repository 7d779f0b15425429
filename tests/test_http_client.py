"""Tests for the Exploro API request adapter."""

import json

import httpx
import pytest

from exploro_mcp.config import Settings
from exploro_mcp.errors import ApiError
from exploro_mcp.http_client import ApiClient, build_query


class TestBuildQuery:
    """Test query parameter flattening."""

    def test_omits_none_and_empty(self):
        """None and empty string are dropped."""
        assert build_query({"category": "mass", "grouped": None, "search": ""}) == [
            ("category", "mass")
        ]

    def test_repeats_list_values(self):
        """Lists become repeated keys."""
        assert build_query({"tags": ["a", "b"]}) == [("tags", "a"), ("tags", "b")]

    def test_booleans_and_numbers(self):
        """Booleans are lowercase, numbers use str()."""
        assert build_query({"grouped": True, "seasonal": False, "limit": 20}) == [
            ("grouped", "true"),
            ("seasonal", "false"),
            ("limit", "20"),
        ]

    def test_integral_floats(self):
        """Whole-number floats are written as integers."""
        assert build_query({"limit": 5.0, "max_cook_time": 12.5}) == [
            ("limit", "5"),
            ("max_cook_time", "12.5"),
        ]

    def test_empty(self):
        """No params gives no pairs."""
        assert build_query(None) == []
        assert build_query({}) == []


class TestApiClientRequests:
    """Test outbound request construction."""

    @pytest.mark.asyncio
    async def test_get_with_query(self, api_client, recorder):
        """GET drops undefined params and sends no body."""
        await api_client.request(
            "GET", "/api/v1/ingredients/units", query_params={"category": "mass", "grouped": None}
        )

        request = recorder.last
        assert request.method == "GET"
        assert str(request.url) == "http://exploro.test/api/v1/ingredients/units?category=mass"
        assert "grouped" not in request.url.params
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_repeated_query_keys(self, api_client, recorder):
        """List values are sent as tags=a&tags=b."""
        await api_client.request("GET", "/api/v1/dishes", query_params={"tags": ["a", "b"]})

        request = recorder.last
        assert request.url.params.get_list("tags") == ["a", "b"]
        assert request.url.query == b"tags=a&tags=b"

    @pytest.mark.asyncio
    async def test_headers(self, api_client, recorder):
        """Bearer token and JSON content type on every request."""
        await api_client.request("GET", "/api/v1/tags")

        request = recorder.last
        assert request.headers["Authorization"] == "Bearer secret-token"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    async def test_body_sent_for_non_get(self, api_client, recorder, method):
        """Non-GET methods carry the JSON body."""
        body = {"tag": {"name_vi": "Cay"}}
        await api_client.request(method, "/api/v1/tags", body)

        request = recorder.last
        assert request.method == method
        assert json.loads(request.content) == body

    @pytest.mark.asyncio
    async def test_get_ignores_body(self, api_client, recorder):
        """A body passed with GET is not sent."""
        await api_client.request("GET", "/api/v1/tags", {"ignored": True})
        assert recorder.last.content == b""

    @pytest.mark.asyncio
    async def test_unicode_body(self, api_client, recorder):
        """Vietnamese text survives serialization."""
        await api_client.request("POST", "/api/v1/tags", {"tag": {"name_vi": "Phở bò"}})
        assert json.loads(recorder.last.content.decode("utf-8")) == {"tag": {"name_vi": "Phở bò"}}

    @pytest.mark.asyncio
    async def test_base_url_trailing_slash(self, recorder, client_for):
        """Trailing slash on the base URL does not double up."""
        settings = Settings(_env_file=None, exploro_base_url="http://exploro.test/")
        client = ApiClient(settings, client=client_for(recorder))

        await client.request("GET", "/api/v1/menus")
        assert str(recorder.last.url) == "http://exploro.test/api/v1/menus"

    @pytest.mark.asyncio
    async def test_missing_api_key_still_sends(self, recorder, client_for):
        """Without a key the request is still made."""
        settings = Settings(_env_file=None, exploro_base_url="http://exploro.test")
        client = ApiClient(settings, client=client_for(recorder))

        await client.request("GET", "/api/v1/menus")
        assert recorder.last.headers["Authorization"].startswith("Bearer")

    @pytest.mark.asyncio
    async def test_unsupported_method(self, api_client):
        """Only GET, POST, PUT and DELETE are allowed."""
        with pytest.raises(ValueError):
            await api_client.request("PATCH", "/api/v1/tags")


class TestApiClientResponses:
    """Test response normalization."""

    @pytest.mark.asyncio
    async def test_success_returns_parsed_body(self, api_client, recorder):
        """Success returns the JSON body unmodified."""
        recorder.respond(200, {"data": [{"id": "1"}], "total": 1})
        result = await api_client.request("GET", "/api/v1/dishes")
        assert result == {"data": [{"id": "1"}], "total": 1}

    @pytest.mark.asyncio
    async def test_error_message_from_body(self, api_client, recorder):
        """error.message is used verbatim."""
        recorder.respond(404, {"error": {"message": "Not found"}})

        with pytest.raises(ApiError) as exc_info:
            await api_client.request("GET", "/api/v1/dishes/missing")

        assert str(exc_info.value) == "Not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_error_without_message_uses_status_text(self, api_client, recorder):
        """Without error.message the status text is reported."""
        recorder.respond(404, {"detail": "nope"})

        with pytest.raises(ApiError) as exc_info:
            await api_client.request("GET", "/api/v1/dishes/missing")

        assert exc_info.value.message == "API request failed: Not Found"

    @pytest.mark.asyncio
    async def test_error_with_non_json_body(self, settings, client_for):
        """Unparseable error bodies fall back to the status text."""
        client = ApiClient(
            settings, client=client_for(lambda request: httpx.Response(500, text="boom"))
        )

        with pytest.raises(ApiError) as exc_info:
            await client.request("GET", "/api/v1/dishes")

        assert exc_info.value.message == "API request failed: Internal Server Error"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_success_with_non_json_body(self, settings, client_for):
        """A success response that is not JSON is an ApiError."""
        client = ApiClient(
            settings, client=client_for(lambda request: httpx.Response(200, text="<html>"))
        )

        with pytest.raises(ApiError, match="invalid JSON"):
            await client.request("GET", "/api/v1/dishes")

    @pytest.mark.asyncio
    async def test_transport_failure(self, settings, client_for):
        """Connection errors become ApiError without a status code."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ApiClient(settings, client=client_for(refuse))

        with pytest.raises(ApiError) as exc_info:
            await client.request("GET", "/api/v1/dishes")

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_close(self, api_client):
        """close() releases the client and is idempotent."""
        await api_client.close()
        await api_client.close()
        assert api_client._client is None
