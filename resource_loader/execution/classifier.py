from typing import Callable, Optional

from resource_loader.core.exceptions import NoDataProvidedError
from resource_loader.models.response import (
    ClassifiedResponse,
    Failure,
    HttpResponseInfo,
    ModelT,
    NetworkError,
    ParseOutcome,
    Success,
    TransportResponse,
    narrow,
)


def is_error_status(status_code: int) -> bool:
    """4xx и 5xx. 399 и 600 ошибкой не считаются."""
    return 400 <= status_code < 600


def _override_cause(http_response: HttpResponseInfo, error: Optional[BaseException]) -> Optional[NetworkError]:
    """
    Причина, которая важнее "не распарсилось": статус сервера, затем ошибка транспорта.
    """
    if is_error_status(http_response.status_code):
        return NetworkError.status_code_error(http_response.status_code)
    if error is not None:
        return NetworkError.transport_error(error)
    return None


def classify_response(
    data: Optional[bytes],
    response: Optional[TransportResponse],
    error: Optional[BaseException],
    parse: Callable[[bytes], ParseOutcome[ModelT]],
) -> ClassifiedResponse[ModelT]:
    """
    Превращает сигналы завершения запроса в ровно один результат.
    Приоритет: Нет данных -> Не HTTP -> Парсинг (статус -> транспорт -> парсер)

    Чистая функция: без I/O, логов и общего состояния.
    parse вызывается не более одного раза.
    """
    # 1. Без данных анализировать нечего
    if data is None:
        return Failure(
            parse_outcome=None,
            http_response=narrow(response),
            cause=NetworkError.could_not_parse_data(NoDataProvidedError()),
        )

    # 2. Статус-код можно смотреть только у HTTP-ответа
    http_response = narrow(response)
    if http_response is None:
        if error is not None:
            return Failure(None, None, NetworkError.transport_error(error))
        return Failure(None, None, NetworkError.no_transport_response())

    # 3. Парсинг. Успех не зависит от статус-кода.
    outcome = parse(data)
    if outcome.is_success:
        return Success(outcome.model, http_response)

    cause = _override_cause(http_response, error) or NetworkError.could_not_parse_data(outcome.error)
    return Failure(outcome, http_response, cause)
