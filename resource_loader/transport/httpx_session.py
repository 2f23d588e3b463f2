import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Optional, Union

import httpx

from resource_loader.config.headers import get_headers
from resource_loader.config.settings import Settings, get_settings
from resource_loader.models.request import OutgoingRequest, TransportCompletion
from resource_loader.models.response import TransportResponse

logger = logging.getLogger(__name__)


def to_transport_response(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        url=str(response.url),
        status_code=response.status_code,
        headers=dict(response.headers.items()),
    )


class HttpClientFactory:
    """
    Фабрика httpx-клиентов.
    Ограничивает количество одновременных запросов через семафор.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        # Подменяемый транспорт (httpx.MockTransport в тестах)
        self._transport = transport

        # ВАЖНО: Это лимит на уровне ПРОЦЕССА (одного event loop).
        self._semaphore = asyncio.Semaphore(self.settings.MAX_CONCURRENT_REQUESTS)

    @asynccontextmanager
    async def client(self) -> AsyncGenerator[httpx.AsyncClient, None]:
        """
        Создает контекст с настроенным клиентом.
        Ожидает свободный слот, если лимит исчерпан.
        """
        async with self._semaphore:
            timeout = httpx.Timeout(
                connect=self.settings.HTTP_TIMEOUT_CONNECT,
                read=self.settings.HTTP_TIMEOUT_READ,
                write=self.settings.HTTP_TIMEOUT_WRITE,
                pool=self.settings.HTTP_TIMEOUT_POOL,
            )

            async with httpx.AsyncClient(
                headers=get_headers(self.settings),
                timeout=timeout,
                follow_redirects=self.settings.FOLLOW_REDIRECTS,
                transport=self._transport,
            ) as client:
                yield client


class HttpxSession:
    """
    Асинхронный транспорт на базе httpx.
    httpx.RequestError -> TransportCompletion.error; любой HTTP-ответ -> data + response.
    asyncio.CancelledError не перехватывается.
    """

    def __init__(self, factory: Optional[HttpClientFactory] = None, settings: Optional[Settings] = None):
        self.factory = factory or HttpClientFactory(settings)

    async def send(self, request: OutgoingRequest) -> TransportCompletion:
        async with self.factory.client() as client:
            try:
                logger.debug(f"{request.method} {request.url}")
                response = await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                )
            except httpx.RequestError as e:
                logger.debug(f"Transport error for {request.url}: {e.__class__.__name__}: {e}")
                return TransportCompletion(data=None, response=None, error=e)

        return TransportCompletion(data=response.content, response=to_transport_response(response), error=None)

    async def send_with_callback(
        self,
        request: OutgoingRequest,
        completion: Callable[[TransportCompletion], Union[None, Awaitable[None]]],
    ) -> None:
        result = completion(await self.send(request))
        if asyncio.iscoroutine(result):
            await result
