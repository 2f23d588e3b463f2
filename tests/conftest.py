from typing import Dict, List, Optional

import pytest

from resource_loader.config.settings import Settings
from resource_loader.core.exceptions import ParseError
from resource_loader.models.request import OutgoingRequest, TransportCompletion
from resource_loader.models.response import ParseOutcome, TransportResponse

API_URL = "https://api.test/items"


def http_response(status_code: int = 200, headers: Optional[Dict[str, str]] = None, url: str = API_URL) -> TransportResponse:
    return TransportResponse(
        url=url,
        status_code=status_code,
        headers=headers if headers is not None else {"Content-Type": "application/json"},
    )


def non_http_response(url: str = "file:///tmp/items.json") -> TransportResponse:
    return TransportResponse(url=url)


def parse_ok(data: bytes) -> ParseOutcome[str]:
    return ParseOutcome.success(data.decode("utf-8"))


def parse_fail(data: bytes) -> ParseOutcome[str]:
    return ParseOutcome.failure(ParseError("unexpected payload"))


class FakeSession:
    """Синхронный транспорт, который отдает заранее заданный completion."""

    def __init__(self, completion: TransportCompletion):
        self.completion = completion
        self.requests: List[OutgoingRequest] = []

    def send(self, request: OutgoingRequest) -> TransportCompletion:
        self.requests.append(request)
        return self.completion


class FakeAsyncSession:
    def __init__(self, completion: TransportCompletion):
        self.completion = completion
        self.requests: List[OutgoingRequest] = []

    async def send(self, request: OutgoingRequest) -> TransportCompletion:
        self.requests.append(request)
        return self.completion


@pytest.fixture
def settings() -> Settings:
    return Settings(
        HTTP_TIMEOUT_CONNECT=1.0,
        HTTP_TIMEOUT_READ=2.0,
        MAX_CONCURRENT_REQUESTS=2,
        USER_AGENT="resource-loader-tests/1.0",
        ACCEPT="application/json",
    )
