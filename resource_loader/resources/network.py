from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Type

from bs4 import BeautifulSoup
from pydantic import BaseModel

from resource_loader.models.response import ModelT, ParseOutcome
from resource_loader.parsing.parsers import (
    JSONModelParser,
    PydanticModelT,
    parse_html,
    parse_json,
    parse_raw,
    parse_text,
)


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class QueryItem(BaseModel):
    name: str
    value: Optional[str] = None


class NetworkResource(Generic[ModelT]):
    """
    Декларативное описание запроса и способа разобрать ответ.
    Наследники переопределяют model_from(); parse() никогда не бросает.
    """

    default_header_fields: Dict[str, str] = {}

    def __init__(
        self,
        url: str,
        method: HTTPMethod = HTTPMethod.GET,
        header_fields: Optional[Dict[str, str]] = None,
        json_body: Optional[Any] = None,
        query_items: Optional[List[QueryItem]] = None,
    ):
        self.url = url
        self.method = HTTPMethod(method)
        # Явно переданные заголовки заменяют дефолтные заголовки типа ресурса целиком
        if header_fields is None:
            header_fields = self.default_header_fields
        self.header_fields: Dict[str, str] = dict(header_fields)
        self.json_body = json_body
        self.query_items = query_items

    def model_from(self, data: bytes) -> ModelT:
        raise NotImplementedError

    def parse(self, data: bytes) -> ParseOutcome[ModelT]:
        return ParseOutcome.capture(self.model_from, data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.method.value} {self.url})"


class DataResource(NetworkResource[bytes]):
    """Модель = сырые байты ответа."""

    def model_from(self, data: bytes) -> bytes:
        return parse_raw(data)


class TextResource(NetworkResource[str]):
    def __init__(self, url: str, encoding: str = "utf-8", **kwargs: Any):
        super().__init__(url, **kwargs)
        self.encoding = encoding

    def model_from(self, data: bytes) -> str:
        return parse_text(data, self.encoding)


class JSONResource(NetworkResource[Any]):
    default_header_fields = {"Content-Type": "application/json"}

    def model_from(self, data: bytes) -> Any:
        return parse_json(data)


class JSONModelResource(NetworkResource[PydanticModelT]):
    """JSON-ответ, провалидированный в pydantic модель."""

    default_header_fields = {"Content-Type": "application/json"}

    def __init__(self, url: str, model_cls: Type[PydanticModelT], **kwargs: Any):
        super().__init__(url, **kwargs)
        self._parser = JSONModelParser(model_cls)

    @property
    def model_cls(self) -> Type[PydanticModelT]:
        return self._parser.model_cls

    def model_from(self, data: bytes) -> PydanticModelT:
        return self._parser(data)


class HTMLResource(NetworkResource[BeautifulSoup]):
    default_header_fields = {"Accept": "text/html,application/xhtml+xml"}

    def model_from(self, data: bytes) -> BeautifulSoup:
        return parse_html(data)
