"""
Tests for AsyncTrelloHTTPClient: retry loop, backoff, timeouts and observers.
"""

import asyncio
import json
import logging
import ssl
import sys
import warnings

import httpx
import pytest

from trello_client.async_client import AsyncTrelloHTTPClient
from trello_client.core.exceptions import (
    ClientError,
    ExhaustedRetriesError,
    FailureKind,
    InvalidResponseError,
    NetworkError,
    ServerError,
    TimeoutError,
    TransportError,
)
from trello_client.core.logging import get_correlation_id
from trello_client.plugins import LoggingPlugin, RequestObserver

HOST = "api.trello.com"


def refused(request):
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request) from ConnectionRefusedError(
        111, "Connection refused"
    )


def reset(request):
    raise httpx.ReadError("[Errno 104] Connection reset by peer", request=request) from ConnectionResetError(
        104, "Connection reset by peer"
    )



class RecordingObserver(RequestObserver):
    """Записывает все вызовы хуков."""

    def __init__(self):
        self.events = []
        self.correlation_ids = []

    def before_attempt(self, context, attempt):
        self.events.append(("before", attempt.number))
        self.correlation_ids.append((get_correlation_id(), context.request_id))

    def after_attempt(self, context, attempt, response):
        self.events.append(("after", attempt.number, response.status_code))

    def on_failure(self, context, attempt, error):
        self.events.append(("failure", attempt.number, error.kind))

    def on_retry(self, context, attempt, error, delay_ms, retries_left):
        self.events.append(("retry", attempt.number, delay_ms, retries_left))


class BrokenObserver(RequestObserver):

    def before_attempt(self, context, attempt):
        raise RuntimeError("observer bug")

    def after_attempt(self, context, attempt, response):
        raise RuntimeError("observer bug")

    def on_failure(self, context, attempt, error):
        raise RuntimeError("observer bug")


class TestInit:

    def test_explicit_options(self):
        http = AsyncTrelloHTTPClient(api_key="k", token="t", timeout=1000, retries=0)

        assert http.config.timeout_ms == 1000
        assert http.config.retries == 0
        assert http.observers == []

    def test_verbose_installs_logging_plugin(self, make_config):
        http = AsyncTrelloHTTPClient(make_config(verbose_logging=True))
        assert any(isinstance(o, LoggingPlugin) for o in http.observers)

    def test_verbose_keeps_user_logging_plugin(self, make_config):
        plugin = LoggingPlugin(mask_credentials=True)
        http = AsyncTrelloHTTPClient(make_config(verbose_logging=True), observers=[plugin])
        assert http.observers == [plugin]

    @pytest.mark.asyncio
    async def test_verbose_without_logging_config_writes_to_stderr(self, make_config, monkeypatch):
        monkeypatch.setattr(logging.getLogger(), "handlers", [])
        tree = logging.getLogger("trello_client")

        http = AsyncTrelloHTTPClient(make_config(verbose_logging=True))
        installed = [
            h for h in tree.handlers
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
        ]
        assert len(installed) == 1

        await http.close()

        assert installed[0] not in tree.handlers
        assert tree.propagate is True

    def test_verbose_keeps_application_logging(self, make_config, monkeypatch):
        monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
        before = list(logging.getLogger("trello_client").handlers)

        AsyncTrelloHTTPClient(make_config(verbose_logging=True))

        assert logging.getLogger("trello_client").handlers == before

    def test_observers_sorted_by_priority(self, config):
        logging_plugin = LoggingPlugin()
        recorder = RecordingObserver()

        http = AsyncTrelloHTTPClient(config, observers=[logging_plugin, recorder])

        assert http.observers == [recorder, logging_plugin]

    @pytest.mark.asyncio
    async def test_client_created_lazily_and_closed(self, config):
        http = AsyncTrelloHTTPClient(config)
        assert http._client is None

        async with http:
            assert isinstance(http._client, httpx.AsyncClient)

        assert http._client is None


class TestSuccess:

    @pytest.mark.asyncio
    async def test_single_attempt(self, respx_mock, config, sleep):
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1", "name": "Roadmap"})
        )

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            result = await http.submit("/boards/b1")

        assert result == {"id": "b1", "name": "Roadmap"}
        assert route.call_count == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_text_body(self, respx_mock, config):
        respx_mock.delete(host=HOST, path="/1/cards/c1").mock(
            return_value=httpx.Response(200, text="ok")
        )

        async with AsyncTrelloHTTPClient(config) as http:
            assert await http.submit("/cards/c1", "DELETE") == "ok"

    @pytest.mark.asyncio
    async def test_redirect_followed(self, respx_mock, config):
        respx_mock.get(host=HOST, path="/1/boards/old").mock(
            return_value=httpx.Response(302, headers={"Location": "https://api.trello.com/1/boards/b1"})
        )
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            return_value=httpx.Response(200, json={"id": "b1"})
        )

        async with AsyncTrelloHTTPClient(config) as http:
            assert await http.submit("/boards/old") == {"id": "b1"}

        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_as_query_payload(self, respx_mock, config):
        route = respx_mock.post(host=HOST, path="/1/cards").mock(
            return_value=httpx.Response(200, json={"id": "c1"})
        )

        async with AsyncTrelloHTTPClient(config) as http:
            await http.submit("/cards", "POST", {"idList": "l1", "idLabels": ["a", "b"], "due": None}, as_query=True)

        request = route.calls.last.request
        assert request.url.params["idList"] == "l1"
        assert request.url.params["idLabels"] == "a,b"
        assert "due" not in request.url.params
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_json_body_payload(self, respx_mock, config):
        route = respx_mock.put(host=HOST, path="/1/cards/c1").mock(
            return_value=httpx.Response(200, json={"id": "c1", "closed": True})
        )

        async with AsyncTrelloHTTPClient(config) as http:
            await http.put("/cards/c1", {"closed": True})

        request = route.calls.last.request
        assert json.loads(request.content) == {"closed": True}
        assert request.headers["content-type"] == "application/json"
        assert request.url.params["token"] == "test-token"


class TestRetry:

    @pytest.mark.asyncio
    async def test_server_errors_then_success(self, respx_mock, config, sleep):
        """retries=2, 503, 503, 200 -> 3 попытки, задержки 1000 и 2000."""
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(side_effect=[
            httpx.Response(503),
            httpx.Response(503),
            httpx.Response(200, json={"id": "b1"}),
        ])

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            result = await http.submit("/boards/b1")

        assert result == {"id": "b1"}
        assert route.call_count == 3
        assert sleep.delays_ms == [1000, 2000]

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, respx_mock, make_config, sleep):
        """retries=3, 404 -> ровно одна попытка."""
        route = respx_mock.get(host=HOST, path="/1/boards/missing").mock(
            return_value=httpx.Response(404, text="The requested resource was not found.")
        )

        async with AsyncTrelloHTTPClient(make_config(retries=3), sleep=sleep) as http:
            with pytest.raises(ClientError) as exc_info:
                await http.submit("/boards/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "The requested resource was not found."
        assert route.call_count == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_budget(self, respx_mock, config, sleep):
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            side_effect=lambda request: httpx.Response(500, json={"message": "boom"})
        )

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            with pytest.raises(ExhaustedRetriesError) as exc_info:
                await http.submit("/boards/b1")

        error = exc_info.value
        assert route.call_count == 3
        assert sleep.delays_ms == [1000, 2000]
        assert isinstance(error.last_error, ServerError)
        assert error.__cause__ is error.last_error
        assert error.status_code == 500
        assert error.kind is FailureKind.SERVER
        assert "test-token" not in str(error)

    @pytest.mark.asyncio
    async def test_backoff_capped(self, respx_mock, make_config, sleep):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            side_effect=lambda request: httpx.Response(503)
        )

        async with AsyncTrelloHTTPClient(make_config(retries=5), sleep=sleep) as http:
            with pytest.raises(ExhaustedRetriesError):
                await http.submit("/boards/b1")

        assert sleep.delays_ms == [1000, 2000, 4000, 5000, 5000]

    @pytest.mark.asyncio
    async def test_zero_budget(self, respx_mock, make_config, sleep):
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            return_value=httpx.Response(502)
        )

        async with AsyncTrelloHTTPClient(make_config(retries=0), sleep=sleep) as http:
            with pytest.raises(ExhaustedRetriesError) as exc_info:
                await http.submit("/boards/b1")

        assert exc_info.value.retries == 0
        assert route.call_count == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_network_error_retried(self, respx_mock, config, sleep):
        responses = iter([refused, lambda request: httpx.Response(200, json=[])])
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            side_effect=lambda request: next(responses)(request)
        )

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            assert await http.submit("/boards/b1") == []

        assert route.call_count == 2
        assert sleep.delays_ms == [1000]

    @pytest.mark.asyncio
    async def test_network_error_exhausts_budget(self, respx_mock, make_config, sleep):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(side_effect=reset)

        async with AsyncTrelloHTTPClient(make_config(retries=1), sleep=sleep) as http:
            with pytest.raises(ExhaustedRetriesError) as exc_info:
                await http.submit("/boards/b1")

        assert isinstance(exc_info.value.last_error, NetworkError)
        assert exc_info.value.kind is FailureKind.NETWORK
        assert sleep.delays_ms == [1000]

    @pytest.mark.asyncio
    async def test_tls_failure_not_retried(self, make_config, sleep):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("certificate verify failed", request=request) from ssl.SSLCertVerificationError(
                "certificate verify failed"
            )

        transport = httpx.MockTransport(handler)
        async with AsyncTrelloHTTPClient(make_config(retries=3), transport=transport, sleep=sleep) as http:
            with pytest.raises(TransportError) as exc_info:
                await http.submit("/boards/b1")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(calls) == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_unknown_transport_fault_not_retried(self, respx_mock, config, sleep):
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(side_effect=httpx.DecodingError)

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            with pytest.raises(TransportError) as exc_info:
                await http.submit("/boards/b1")

        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert route.call_count == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_programming_errors_propagate_unchanged(self, config, sleep):
        calls = []

        def handler(request):
            calls.append(request)
            raise KeyError("bug in transport")

        transport = httpx.MockTransport(handler)
        async with AsyncTrelloHTTPClient(config, transport=transport, sleep=sleep) as http:
            with pytest.raises(KeyError):
                await http.submit("/boards/b1")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_malformed_success_not_retried(self, respx_mock, config, sleep):
        route = respx_mock.get(host=HOST, path="/1/boards/b1").mock(
            return_value=httpx.Response(200, content=b"{oops", headers={"content-type": "application/json"})
        )

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            with pytest.raises(InvalidResponseError):
                await http.submit("/boards/b1")

        assert route.call_count == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_credentials_on_every_attempt(self, respx_mock, config, sleep):
        route = respx_mock.put(host=HOST, path="/1/cards/c1").mock(side_effect=[
            httpx.Response(500),
            httpx.Response(504),
            httpx.Response(200, json={"id": "c1"}),
        ])

        async with AsyncTrelloHTTPClient(config, sleep=sleep) as http:
            await http.submit("/cards/c1", "PUT", {"name": "Renamed"})

        for call in route.calls:
            assert call.request.url.params["key"] == "test-key"
            assert call.request.url.params["token"] == "test-token"
            assert json.loads(call.request.content) == {"name": "Renamed"}

    @pytest.mark.asyncio
    async def test_budget_fixed_per_call(self, respx_mock, make_config, sleep):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(side_effect=[
            httpx.Response(503),
            httpx.Response(200, json={}),
            httpx.Response(503),
            httpx.Response(200, json={}),
        ])

        async with AsyncTrelloHTTPClient(make_config(retries=1), sleep=sleep) as http:
            await http.submit("/boards/b1")
            await http.submit("/boards/b1")

        assert sleep.delays_ms == [1000, 1000]

    @pytest.mark.asyncio
    async def test_concurrent_calls_independent(self, respx_mock, make_config, sleep):
        for board_id in ("b1", "b2"):
            respx_mock.get(host=HOST, path=f"/1/boards/{board_id}").mock(side_effect=[
                httpx.Response(503),
                httpx.Response(200, json={"id": board_id}),
            ])

        async with AsyncTrelloHTTPClient(make_config(retries=1), sleep=sleep) as http:
            results = await asyncio.gather(http.submit("/boards/b1"), http.submit("/boards/b2"))

        assert results == [{"id": "b1"}, {"id": "b2"}]
        assert sleep.delays_ms == [1000, 1000]


class TestTimeout:

    @pytest.mark.asyncio
    async def test_slow_server_times_out_and_retries(self, make_config, sleep):
        """timeout=100ms, сервер не отвечает -> TimeoutError с elapsed >= 100ms."""
        calls = []

        async def handler(request):
            calls.append(request)
            await asyncio.sleep(5)
            return httpx.Response(200)

        config = make_config(timeout_ms=100, retries=1)
        async with AsyncTrelloHTTPClient(config, transport=httpx.MockTransport(handler), sleep=sleep) as http:
            with pytest.raises(ExhaustedRetriesError) as exc_info:
                await http.submit("/boards/b1")

        last_error = exc_info.value.last_error
        assert isinstance(last_error, TimeoutError)
        assert last_error.elapsed_ms >= 95
        assert last_error.timeout_ms == 100
        assert len(calls) == 2
        assert sleep.delays_ms == [1000]

    @pytest.mark.asyncio
    async def test_fresh_timeout_per_attempt(self, make_config, sleep):
        calls = []

        async def handler(request):
            calls.append(request)
            if len(calls) == 1:
                await asyncio.sleep(5)
            await asyncio.sleep(0.06)
            return httpx.Response(200, json={"attempt": len(calls)})

        config = make_config(timeout_ms=100, retries=2)
        async with AsyncTrelloHTTPClient(config, transport=httpx.MockTransport(handler), sleep=sleep) as http:
            result = await http.submit("/boards/b1")

        assert result == {"attempt": 2}
        assert sleep.delays_ms == [1000]


class TestObservers:

    @pytest.mark.asyncio
    async def test_hook_sequence(self, respx_mock, make_config, sleep):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(side_effect=[
            httpx.Response(503),
            httpx.Response(200, json={}),
        ])
        recorder = RecordingObserver()

        async with AsyncTrelloHTTPClient(make_config(retries=1), observers=[recorder], sleep=sleep) as http:
            await http.submit("/boards/b1")

        assert recorder.events == [
            ("before", 1),
            ("after", 1, 503),
            ("failure", 1, FailureKind.SERVER),
            ("retry", 1, 1000, 0),
            ("before", 2),
            ("after", 2, 200),
        ]

    @pytest.mark.asyncio
    async def test_correlation_id_scoped_to_call(self, respx_mock, config):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(return_value=httpx.Response(200, json={}))
        recorder = RecordingObserver()

        async with AsyncTrelloHTTPClient(config, observers=[recorder]) as http:
            await http.submit("/boards/b1")

        current, request_id = recorder.correlation_ids[0]
        assert current == request_id
        assert get_correlation_id() is None

    @pytest.mark.asyncio
    async def test_observer_errors_become_warnings(self, respx_mock, config):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(return_value=httpx.Response(200, json={"id": "b1"}))

        async with AsyncTrelloHTTPClient(config, observers=[BrokenObserver()]) as http:
            with pytest.warns(UserWarning, match="BrokenObserver error in before_attempt"):
                result = await http.submit("/boards/b1")

        assert result == {"id": "b1"}

    @pytest.mark.asyncio
    async def test_observer_errors_do_not_mask_failure(self, respx_mock, config):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(return_value=httpx.Response(401, text="invalid token"))

        async with AsyncTrelloHTTPClient(config, observers=[BrokenObserver()]) as http:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                with pytest.raises(ClientError):
                    await http.submit("/boards/b1")

    @pytest.mark.asyncio
    async def test_observer_errors_under_warnings_as_errors(self, respx_mock, config, caplog):
        respx_mock.get(host=HOST, path="/1/boards/b1").mock(return_value=httpx.Response(404, text="not found"))

        async with AsyncTrelloHTTPClient(config, observers=[BrokenObserver()]) as http:
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                with caplog.at_level(logging.WARNING, logger="trello_client.async_client"):
                    with pytest.raises(ClientError) as exc_info:
                        await http.submit("/boards/b1")

        assert exc_info.value.status_code == 404
        assert "BrokenObserver error in on_failure" in caplog.text

    def test_add_remove_observer(self, config):
        http = AsyncTrelloHTTPClient(config)
        recorder = RecordingObserver()

        http.add_observer(recorder)
        assert http.observers == [recorder]

        http.remove_observer(recorder)
        assert http.observers == []
