from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from resource_loader.models.response import TransportResponse


class OutgoingRequest(BaseModel):
    """Запрос, не привязанный к конкретной HTTP-библиотеке."""
    method: str = "GET"
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class TransportCompletion:
    """
    Три независимых сигнала завершения одной попытки.
    Любой из них может отсутствовать.
    """
    data: Optional[bytes] = None
    response: Optional[TransportResponse] = None
    error: Optional[BaseException] = None
