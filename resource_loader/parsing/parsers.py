import json
import logging
from typing import Any, Generic, Type, TypeVar

from bs4 import BeautifulSoup
from pydantic import BaseModel, ValidationError

from resource_loader.core.exceptions import ParseError

logger = logging.getLogger(__name__)

PydanticModelT = TypeVar("PydanticModelT", bound=BaseModel)


def parse_raw(data: bytes) -> bytes:
    return data


def parse_text(data: bytes, encoding: str = "utf-8") -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"Body is not valid {encoding}: {e}") from e


def parse_json(data: bytes) -> Any:
    """
    Тело ответа -> Python-объект.
    Пустое тело тоже ошибка: 204 для JSON-ресурса не модель.
    """
    if not data.strip():
        raise ParseError("Empty JSON body")
    try:
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Malformed JSON: {e}") from e


def parse_html(data: bytes) -> BeautifulSoup:
    if not data.strip():
        raise ParseError("Empty HTML document")
    # lxml сам определяет кодировку по meta / BOM
    return BeautifulSoup(data, "lxml")


class JSONModelParser(Generic[PydanticModelT]):
    """
    JSON -> pydantic модель. Ошибки валидации превращаются в ParseError,
    чтобы классификатор видел единый тип.
    """

    def __init__(self, model_cls: Type[PydanticModelT]):
        self.model_cls = model_cls

    def __call__(self, data: bytes) -> PydanticModelT:
        if not data.strip():
            raise ParseError(f"Empty body for {self.model_cls.__name__}")
        try:
            return self.model_cls.model_validate_json(data)
        except ValidationError as e:
            logger.debug(f"Validation failed for {self.model_cls.__name__}: {e.error_count()} error(s)")
            raise ParseError(f"{self.model_cls.__name__} validation failed: {e.error_count()} error(s)") from e
