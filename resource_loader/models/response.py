from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from resource_loader.core.exceptions import (
    CouldNotParseDataError,
    NetworkServiceError,
    NoTransportResponseError,
    ParseError,
    SessionError,
    StatusCodeError,
)

ModelT = TypeVar("ModelT")

# --- 1. Enums (Классификация) ---

class NetworkErrorKind(str, Enum):
    """
    Закрытый набор причин неудачи. К каждому Failure прикреплена ровно одна.
    """
    NO_TRANSPORT_RESPONSE = "no_transport_response"   # Ответ не HTTP, ошибки нет
    TRANSPORT_ERROR = "transport_error"               # Ошибка транспорта (сессии)
    STATUS_CODE_ERROR = "status_code_error"           # 4xx / 5xx
    COULD_NOT_PARSE_DATA = "could_not_parse_data"     # Нет данных или не распарсилось

# --- 2. Transport DTOs ---

class HttpResponseInfo(BaseModel):
    """
    HTTP-метаданные ответа. Существуют только если обмен дошел до сервера
    и вернулся узнаваемый HTTP-ответ.
    """
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    url: str

    model_config = ConfigDict(frozen=True)

    def header(self, name: str) -> Optional[str]:
        """Поиск заголовка без учета регистра."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class TransportResponse(BaseModel):
    """
    То, что вернул транспорт. Для не-HTTP ответов (file://, data:, кастомные схемы)
    status_code/headers отсутствуют.
    """
    url: str
    status_code: Optional[int] = None
    headers: Optional[Dict[str, str]] = None

    model_config = ConfigDict(frozen=True)

    def as_http(self) -> Optional[HttpResponseInfo]:
        # Явная проверка формы вместо каста: HTTP = статус + заголовки
        if self.status_code is None or self.headers is None:
            return None
        return HttpResponseInfo(status_code=self.status_code, headers=self.headers, url=self.url)


def narrow(response: Optional[TransportResponse]) -> Optional[HttpResponseInfo]:
    if response is None:
        return None
    return response.as_http()

# --- 3. Error / Parse containers ---

@dataclass(frozen=True)
class NetworkError:
    """Причина неудачи + полезная нагрузка, зависящая от kind."""
    kind: NetworkErrorKind
    error: Optional[BaseException] = None
    status_code: Optional[int] = None

    @classmethod
    def no_transport_response(cls) -> "NetworkError":
        return cls(NetworkErrorKind.NO_TRANSPORT_RESPONSE)

    @classmethod
    def transport_error(cls, error: BaseException) -> "NetworkError":
        return cls(NetworkErrorKind.TRANSPORT_ERROR, error=error)

    @classmethod
    def status_code_error(cls, status_code: int) -> "NetworkError":
        return cls(NetworkErrorKind.STATUS_CODE_ERROR, status_code=status_code)

    @classmethod
    def could_not_parse_data(cls, error: BaseException) -> "NetworkError":
        return cls(NetworkErrorKind.COULD_NOT_PARSE_DATA, error=error)

    def describe(self) -> str:
        if self.kind == NetworkErrorKind.STATUS_CODE_ERROR:
            return f"{self.kind.value}: HTTP {self.status_code}"
        if self.error is not None:
            return f"{self.kind.value}: {self.error.__class__.__name__}: {self.error}"
        return self.kind.value


@dataclass(frozen=True)
class ParseOutcome(Generic[ModelT]):
    """
    Результат парсинга: либо model, либо error (ParseError), никогда оба.
    """
    model: Optional[ModelT] = None
    error: Optional[ParseError] = None

    def __post_init__(self):
        if self.error is not None and self.model is not None:
            raise ValueError("ParseOutcome cannot carry both model and error")

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, model: ModelT) -> "ParseOutcome[ModelT]":
        return cls(model=model)

    @classmethod
    def failure(cls, error: ParseError) -> "ParseOutcome[ModelT]":
        return cls(error=error)

    @classmethod
    def capture(cls, parse: Callable[[bytes], ModelT], data: bytes) -> "ParseOutcome[ModelT]":
        """
        Вызывает парсер и переводит исключения в канал результата.
        Любая не-ParseError ошибка оборачивается в ParseError (с __cause__).
        """
        try:
            return cls.success(parse(data))
        except ParseError as e:
            return cls.failure(e)
        except Exception as e:
            wrapped = ParseError(f"{e.__class__.__name__}: {e}")
            wrapped.__cause__ = e
            return cls.failure(wrapped)

# --- 4. Result Container (Единый контракт классификатора) ---

@dataclass(frozen=True)
class Success(Generic[ModelT]):
    model: ModelT
    http_response: HttpResponseInfo

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> ModelT:
        return self.model


_ERRORS_BY_KIND = {
    NetworkErrorKind.NO_TRANSPORT_RESPONSE: NoTransportResponseError,
    NetworkErrorKind.TRANSPORT_ERROR: SessionError,
    NetworkErrorKind.STATUS_CODE_ERROR: StatusCodeError,
    NetworkErrorKind.COULD_NOT_PARSE_DATA: CouldNotParseDataError,
}


@dataclass(frozen=True)
class Failure(Generic[ModelT]):
    """
    parse_outcome есть только если парсинг реально запускался.
    http_response есть только если транспорт вернул HTTP-ответ.
    """
    parse_outcome: Optional[ParseOutcome[ModelT]]
    http_response: Optional[HttpResponseInfo]
    cause: NetworkError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def parse_error(self) -> Optional[ParseError]:
        if self.parse_outcome is None:
            return None
        return self.parse_outcome.error

    def to_exception(self) -> NetworkServiceError:
        error_cls = _ERRORS_BY_KIND[self.cause.kind]
        return error_cls(self.cause, self.http_response)

    def unwrap(self) -> ModelT:
        raise self.to_exception() from self.cause.error


ClassifiedResponse = Union[Success[ModelT], Failure[ModelT]]
