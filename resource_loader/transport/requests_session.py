import logging
from typing import Callable, Optional

import requests

from resource_loader.config.headers import get_headers
from resource_loader.config.settings import Settings, get_settings
from resource_loader.models.request import OutgoingRequest, TransportCompletion
from resource_loader.models.response import TransportResponse

logger = logging.getLogger(__name__)


def to_transport_response(response: requests.Response) -> TransportResponse:
    return TransportResponse(
        url=response.url,
        status_code=response.status_code,
        headers=dict(response.headers.items()),
    )


class RequestsSession:
    """
    Синхронный транспорт на базе requests.
    Сетевые ошибки не бросаются, а возвращаются в TransportCompletion.error.
    raise_for_status НЕ вызываем: статус-код решает классификатор.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.session.headers.update(get_headers(self.settings))

    def send(self, request: OutgoingRequest) -> TransportCompletion:
        try:
            logger.debug(f"{request.method} {request.url}")
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.settings.timeout_pair,
                allow_redirects=self.settings.FOLLOW_REDIRECTS,
            )
        except requests.RequestException as e:
            logger.debug(f"Transport error for {request.url}: {e.__class__.__name__}: {e}")
            return TransportCompletion(data=None, response=None, error=e)

        return TransportCompletion(data=response.content, response=to_transport_response(response), error=None)

    def send_with_callback(self, request: OutgoingRequest, completion: Callable[[TransportCompletion], None]) -> None:
        completion(self.send(request))

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
