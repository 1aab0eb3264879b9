"""Тесты одной физической попытки: декодирование и таймаут."""

import asyncio

import httpx
import pytest

from trello_client.core.exceptions import InvalidResponseError
from trello_client.core.request_builder import RequestSpec, build_request
from trello_client.core.transport import (
    AttemptTimeout,
    ContentKind,
    HTTPTransport,
    decode_response,
    is_json_content_type,
    run_with_timeout,
)

URL = "https://api.trello.com/1/boards/b1?key=secret-key&token=secret-token"


def make_response(status_code=200, **kwargs):
    return httpx.Response(status_code, request=httpx.Request("GET", URL), **kwargs)


class TestIsJsonContentType:

    @pytest.mark.parametrize("value", [
        "application/json",
        "application/json; charset=utf-8",
        "APPLICATION/JSON",
        "application/vnd.trello+json",
    ])
    def test_json(self, value):
        assert is_json_content_type(value) is True

    @pytest.mark.parametrize("value", [None, "", "text/plain", "text/html; charset=utf-8"])
    def test_not_json(self, value):
        assert is_json_content_type(value) is False


class TestDecodeResponse:

    def test_json_body(self):
        decoded = decode_response(make_response(json={"id": "b1", "name": "Roadmap"}), 12.5)

        assert decoded.content_kind is ContentKind.JSON
        assert decoded.body == {"id": "b1", "name": "Roadmap"}
        assert decoded.status_code == 200
        assert decoded.elapsed_ms == 12.5
        assert decoded.ok is True

    def test_text_body(self):
        decoded = decode_response(make_response(text="invalid id"))

        assert decoded.content_kind is ContentKind.TEXT
        assert decoded.body == "invalid id"

    def test_empty_json_body(self):
        decoded = decode_response(make_response(headers={"content-type": "application/json"}))

        assert decoded.content_kind is ContentKind.JSON
        assert decoded.body is None

    def test_malformed_json_on_success(self):
        response = make_response(content=b"{not json", headers={"content-type": "application/json"})

        with pytest.raises(InvalidResponseError) as exc_info:
            decode_response(response)

        assert exc_info.value.status_code == 200
        assert "secret-token" not in exc_info.value.url
        assert exc_info.value.retryable is False

    def test_malformed_json_on_error_falls_back_to_text(self):
        response = make_response(502, content=b"<html>Bad Gateway", headers={"content-type": "application/json"})

        decoded = decode_response(response)

        assert decoded.content_kind is ContentKind.TEXT
        assert decoded.body == "<html>Bad Gateway"
        assert decoded.ok is False
        assert decoded.reason == "Bad Gateway"


class TestRunWithTimeout:

    @pytest.mark.asyncio
    async def test_completes_in_time(self):
        async def fast():
            return "done"

        assert await run_with_timeout(fast(), 1000) == "done"

    @pytest.mark.asyncio
    async def test_aborts_after_deadline(self):
        with pytest.raises(AttemptTimeout) as exc_info:
            await run_with_timeout(asyncio.sleep(5), 50)

        assert exc_info.value.timeout_ms == 50
        assert exc_info.value.elapsed_ms >= 45
        assert exc_info.value.elapsed_ms < 5000


class TestHTTPTransport:

    @pytest.mark.asyncio
    async def test_send(self, config):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"id": "b1"}])

        prepared = build_request(config, RequestSpec("/members/me/boards"))
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            decoded = await HTTPTransport(client).send(prepared, 1000)

        assert decoded.body == [{"id": "b1"}]
        assert decoded.elapsed_ms >= 0
        assert seen[0].url.params["key"] == "test-key"
        assert seen[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_slow_server_times_out(self, config):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        prepared = build_request(config, RequestSpec("/boards/b1"))
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AttemptTimeout) as exc_info:
                await HTTPTransport(client).send(prepared, 100)

        assert exc_info.value.elapsed_ms >= 95

    @pytest.mark.asyncio
    async def test_transport_fault_propagates(self, config):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        prepared = build_request(config, RequestSpec("/boards/b1"))
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.ConnectError):
                await HTTPTransport(client).send(prepared, 1000)
