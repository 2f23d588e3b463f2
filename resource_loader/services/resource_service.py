import asyncio
import logging
from typing import Awaitable, Callable, Dict, Mapping, Optional, Protocol, Union

from resource_loader.config.settings import Settings
from resource_loader.execution.classifier import classify_response
from resource_loader.models.request import OutgoingRequest, TransportCompletion
from resource_loader.models.response import ClassifiedResponse, ModelT
from resource_loader.resources.network import NetworkResource
from resource_loader.services.request_builder import RequestBuilder
from resource_loader.transport.httpx_session import HttpxSession
from resource_loader.transport.requests_session import RequestsSession

logger = logging.getLogger(__name__)

HeaderSource = Union[Mapping[str, str], Callable[[], Mapping[str, str]], None]


class TransportSession(Protocol):
    def send(self, request: OutgoingRequest) -> TransportCompletion: ...


class AsyncTransportSession(Protocol):
    async def send(self, request: OutgoingRequest) -> TransportCompletion: ...


def _resolve_headers(source: HeaderSource) -> Dict[str, str]:
    if source is None:
        return {}
    if callable(source):
        return dict(source())
    return dict(source)


def _log_outcome(resource: NetworkResource, result: ClassifiedResponse) -> None:
    if result.is_success:
        logger.info(f"✅ {resource.method.value} {resource.url} -> {result.http_response.status_code}")
    else:
        status = result.http_response.status_code if result.http_response else "-"
        logger.warning(f"❌ {resource.method.value} {resource.url} -> {status} ({result.cause.describe()})")


class _ResourceServiceBase:
    """
    Общая часть сервисов: сборка запроса и заголовки уровня сервиса.
    Заголовки ресурса всегда побеждают заголовки сервиса.
    """

    def __init__(self, additional_header_fields: HeaderSource = None):
        self.additional_header_fields = additional_header_fields

    def build_request(self, resource: NetworkResource) -> OutgoingRequest:
        return RequestBuilder.build(resource, _resolve_headers(self.additional_header_fields))


class NetworkResourceService(_ResourceServiceBase):
    """
    Синхронный оркестратор: Resource -> Request -> Transport -> Classifier.
    Один вызов fetch = одна попытка = один ClassifiedResponse.
    """

    def __init__(
        self,
        session: Optional[TransportSession] = None,
        additional_header_fields: HeaderSource = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(additional_header_fields)
        self.session = session or RequestsSession(settings)

    def fetch(
        self,
        resource: NetworkResource[ModelT],
        completion: Optional[Callable[[ClassifiedResponse[ModelT]], None]] = None,
    ) -> ClassifiedResponse[ModelT]:
        request = self.build_request(resource)
        logger.debug(f"Dispatching {resource!r}")

        signal = self.session.send(request)
        result = classify_response(signal.data, signal.response, signal.error, resource.parse)
        _log_outcome(resource, result)

        if completion is not None:
            completion(result)
        return result


class AsyncNetworkResourceService(_ResourceServiceBase):
    """Асинхронный вариант поверх httpx."""

    def __init__(
        self,
        session: Optional[AsyncTransportSession] = None,
        additional_header_fields: HeaderSource = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(additional_header_fields)
        self.session = session or HttpxSession(settings=settings)

    async def fetch(
        self,
        resource: NetworkResource[ModelT],
        completion: Optional[Callable[[ClassifiedResponse[ModelT]], Union[None, Awaitable[None]]]] = None,
    ) -> ClassifiedResponse[ModelT]:
        request = self.build_request(resource)
        logger.debug(f"Dispatching {resource!r}")

        signal = await self.session.send(request)
        result = classify_response(signal.data, signal.response, signal.error, resource.parse)
        _log_outcome(resource, result)

        if completion is not None:
            pending = completion(result)
            if asyncio.iscoroutine(pending):
                await pending
        return result
