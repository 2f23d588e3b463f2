from typing import Any, Optional


class ResourceLoaderError(Exception):
    """Базовый класс ошибок."""
    pass


class ParseError(ResourceLoaderError):
    """
    Парсер ресурса не смог превратить байты в модель.
    Сравнивается по типу и тексту: одинаковый вход -> равные результаты.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class NoDataProvidedError(ParseError):
    """Транспорт не вернул тело ответа (data is None)."""

    def __init__(self, message: str = "no data provided"):
        super().__init__(message)


class InvalidResourceError(ResourceLoaderError):
    """Описание ресурса не превращается в запрос (кривой URL и т.п.)."""
    pass


class NetworkServiceError(ResourceLoaderError):
    """
    Исключение-обертка над NetworkError.
    Бросается только из ClassifiedResponse.unwrap(); классификатор ничего не бросает.
    """

    def __init__(self, cause: Any, http_response: Optional[Any] = None, message: str = ""):
        self.cause = cause
        self.http_response = http_response
        super().__init__(message or f"Network service error: {cause.kind.value}")


class NoTransportResponseError(NetworkServiceError):
    """Ответ есть, но это не HTTP (и ошибки транспорта тоже нет)."""
    pass


class SessionError(NetworkServiceError):
    """Ошибка транспорта (DNS, TLS, таймаут, обрыв соединения)."""
    pass


class StatusCodeError(NetworkServiceError):
    """4xx/5xx от сервера."""

    def __init__(self, cause: Any, http_response: Optional[Any] = None):
        self.status_code: int = cause.status_code
        super().__init__(cause, http_response, f"HTTP {self.status_code}")


class CouldNotParseDataError(NetworkServiceError):
    """Нет тела ответа или тело не распарсилось."""
    pass
