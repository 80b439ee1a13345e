"""Tests for the HTTP client."""

import asyncio

import aiohttp
import pytest

from smartmatcher.utils.http_client import HTTPClient, HTTPClientError, HTTPRequestError
from utils import make_response, make_session

BASE_URL = "http://example.com/api"


def make_client(response, token=None, **kwargs) -> HTTPClient:
    return HTTPClient(
        base_url=BASE_URL,
        headers={"User-Agent": "test"},
        token_provider=lambda: token,
        session=make_session(response),
        **kwargs,
    )


class TestHTTPClient:
    """Tests for HTTPClient."""

    @pytest.mark.asyncio
    async def test_get_success(self):
        """Test successful GET request."""
        client = make_client(make_response(200, {"key": "value"}))

        response, data = await client.get("/test", params={"q": "x"})

        assert response.status == 200
        assert data == {"key": "value"}
        kwargs = client._session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == f"{BASE_URL}/test"
        assert kwargs["params"] == {"q": "x"}
        assert kwargs["headers"]["User-Agent"] == "test"

    @pytest.mark.asyncio
    async def test_bearer_token_attached(self):
        """The token provider is consulted for every request."""
        client = make_client(make_response(200, []), token="abc.def.ghi")

        await client.get("/job-description/")

        headers = client._session.request.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer abc.def.ghi"

    @pytest.mark.asyncio
    async def test_no_token_no_authorization_header(self):
        client = make_client(make_response(200, []), token=None)

        await client.get("/job-description/")

        headers = client._session.request.call_args.kwargs["headers"]
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_post_json(self):
        """Test POST request with JSON data."""
        client = make_client(make_response(201, {"id": 123}))

        response, data = await client.post(
            "/items", json_data={"name": "test"}, headers={"X-Custom": "value"}
        )

        assert response.status == 201
        assert data == {"id": 123}
        kwargs = client._session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["json"] == {"name": "test"}
        assert kwargs["headers"]["X-Custom"] == "value"

    @pytest.mark.asyncio
    async def test_text_body(self):
        client = make_client(make_response(200, "deleted", content_type="text/plain"))

        _, data = await client.delete("/items/1")

        assert data == "deleted"

    @pytest.mark.asyncio
    async def test_http_error_carries_status_and_body(self):
        """Test that non-2xx responses raise with the parsed body."""
        client = make_client(make_response(500, {"detail": "Duplicate entry 'a@b.co'"}))

        with pytest.raises(HTTPRequestError) as exc_info:
            await client.post("/consultant-profile/", json_data={})

        error = exc_info.value
        assert error.status == 500
        assert error.method == "POST"
        assert error.url == f"{BASE_URL}/consultant-profile/"
        assert error.detail == "Duplicate entry 'a@b.co'"
        assert isinstance(error, HTTPClientError)

    @pytest.mark.asyncio
    async def test_http_error_not_raised_when_disabled(self):
        client = make_client(make_response(404, {"detail": "Not found"}), raise_for_status=False)

        response, data = await client.get("/missing")

        assert response.status == 404
        assert data == {"detail": "Not found"}

    @pytest.mark.asyncio
    async def test_client_error_wrapped(self):
        """Transport failures become HTTPRequestError without a status."""
        client = make_client(make_response())
        client._session.request.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(HTTPRequestError) as exc_info:
            await client.get("/test")

        assert exc_info.value.status is None
        assert client._session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self):
        client = make_client(make_response())
        client._session.request.side_effect = asyncio.TimeoutError()

        with pytest.raises(HTTPRequestError):
            await client.get("/slow")

    @pytest.mark.asyncio
    async def test_request_requires_session(self):
        client = HTTPClient(base_url=BASE_URL)

        with pytest.raises(RuntimeError):
            await client.get("/test")

    @pytest.mark.asyncio
    async def test_close_leaves_external_session_open(self):
        client = make_client(make_response())
        session = client._session

        await client.close()

        session.close.assert_not_called()
        assert client._session is session

    def test_build_url(self):
        client = HTTPClient(base_url=BASE_URL + "/")
        assert client.build_url("/jobs") == f"{BASE_URL}/jobs"
        assert client.build_url("jobs") == f"{BASE_URL}/jobs"
        assert client.build_url("https://other.test/x") == "https://other.test/x"

    def test_detail_falls_back_to_message(self):
        error = HTTPRequestError("boom", status=400, data={"message": "Bad input"})
        assert error.detail == "Bad input"
        assert HTTPRequestError("boom", data="plain text").detail is None
