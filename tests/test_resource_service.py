import asyncio
import logging

import httpx
import pytest

from conftest import FakeAsyncSession, FakeSession, http_response, non_http_response
from resource_loader.config.settings import Settings
from resource_loader.core.exceptions import InvalidResourceError, StatusCodeError
from resource_loader.models.request import TransportCompletion
from resource_loader.models.response import Failure, NetworkErrorKind, Success
from resource_loader.resources.network import DataResource, HTTPMethod, JSONResource
from resource_loader.services.resource_service import AsyncNetworkResourceService, NetworkResourceService
from resource_loader.transport.httpx_session import HttpClientFactory, HttpxSession

MOCK_URL = "http://test.com"
COMMON_KEY = "common"


# =============================================================================
# Service-level headers (composition instead of subclass hook)
# =============================================================================


def test_resource_headers_override_service_headers() -> None:
    session = FakeSession(TransportCompletion())
    service = NetworkResourceService(session, additional_header_fields={COMMON_KEY: "service"})
    resource_headers = {COMMON_KEY: "resource"}

    service.fetch(JSONResource(MOCK_URL, header_fields=resource_headers))

    assert session.requests[0].headers == resource_headers


def test_final_request_includes_service_and_resource_headers() -> None:
    session = FakeSession(TransportCompletion())
    service = NetworkResourceService(session, additional_header_fields={COMMON_KEY: "service"})

    service.fetch(JSONResource(MOCK_URL, header_fields={"resource_key": "resource"}))

    assert session.requests[0].headers == {COMMON_KEY: "service", "resource_key": "resource"}


def test_additional_headers_may_be_callable() -> None:
    session = FakeSession(TransportCompletion())
    tokens = iter(["t-1", "t-2"])
    service = NetworkResourceService(session, additional_header_fields=lambda: {"X-Request-Id": next(tokens)})

    service.fetch(DataResource(MOCK_URL))
    service.fetch(DataResource(MOCK_URL))

    assert [r.headers["X-Request-Id"] for r in session.requests] == ["t-1", "t-2"]


# =============================================================================
# Sync service
# =============================================================================


def test_fetch_success_and_completion_called_once() -> None:
    completion = TransportCompletion(data=b'{"id": 3}', response=http_response(200))
    service = NetworkResourceService(FakeSession(completion))
    received = []

    result = service.fetch(JSONResource(MOCK_URL), completion=received.append)

    assert isinstance(result, Success)
    assert result.model == {"id": 3}
    assert received == [result]


def test_fetch_error_status_with_unparseable_body(caplog: pytest.LogCaptureFixture) -> None:
    completion = TransportCompletion(data=b"<h1>Not Found</h1>", response=http_response(404))
    service = NetworkResourceService(FakeSession(completion))

    with caplog.at_level(logging.WARNING, logger="resource_loader.services.resource_service"):
        result = service.fetch(JSONResource(MOCK_URL))

    assert isinstance(result, Failure)
    assert result.cause.kind == NetworkErrorKind.STATUS_CODE_ERROR
    assert result.parse_error is not None
    assert "status_code_error: HTTP 404" in caplog.text

    with pytest.raises(StatusCodeError):
        result.unwrap()


def test_fetch_non_http_response() -> None:
    service = NetworkResourceService(FakeSession(TransportCompletion(data=b"{}", response=non_http_response())))

    result = service.fetch(JSONResource("file:///tmp/items.json"))

    assert result.cause.kind == NetworkErrorKind.NO_TRANSPORT_RESPONSE


def test_invalid_resource_raises_before_dispatch() -> None:
    session = FakeSession(TransportCompletion())
    service = NetworkResourceService(session)

    with pytest.raises(InvalidResourceError):
        service.fetch(DataResource("not a url"))

    assert session.requests == []


# =============================================================================
# Async service
# =============================================================================


def test_async_fetch_with_fake_session() -> None:
    error = TimeoutError("read timeout")
    session = FakeAsyncSession(TransportCompletion(data=b"{", response=http_response(200), error=error))
    service = AsyncNetworkResourceService(session)
    received = []

    async def completion(result) -> None:
        received.append(result)

    result = asyncio.run(service.fetch(JSONResource(MOCK_URL, method=HTTPMethod.PUT, json_body={}), completion))

    assert result.cause.kind == NetworkErrorKind.TRANSPORT_ERROR
    assert result.cause.error is error
    assert received == [result]
    assert session.requests[0].method == "PUT"
    assert session.requests[0].body == b"{}"


def test_async_fetch_end_to_end_over_httpx(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["x-client"] == "tests"
        assert request.url.params["page"] == "2"
        return httpx.Response(200, content=b'{"items": []}', headers={"Content-Type": "application/json"})

    session = HttpxSession(HttpClientFactory(settings, transport=httpx.MockTransport(handler)))
    service = AsyncNetworkResourceService(session, additional_header_fields={"X-Client": "tests"})
    resource = JSONResource("https://api.test/items?page=2")

    result = asyncio.run(service.fetch(resource))

    assert isinstance(result, Success)
    assert result.model == {"items": []}
    assert result.http_response.status_code == 200
    assert result.http_response.url == "https://api.test/items?page=2"


def test_async_fetch_connection_failure_over_httpx(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    session = HttpxSession(HttpClientFactory(settings, transport=httpx.MockTransport(handler)))
    result = asyncio.run(AsyncNetworkResourceService(session).fetch(DataResource("https://api.test/slow")))

    # Нет данных -> правило "нет данных" срабатывает раньше ошибки транспорта
    assert result.cause.kind == NetworkErrorKind.COULD_NOT_PARSE_DATA
    assert result.http_response is None
