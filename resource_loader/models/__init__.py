from resource_loader.models.request import OutgoingRequest, TransportCompletion
from resource_loader.models.response import (
    ClassifiedResponse,
    Failure,
    HttpResponseInfo,
    NetworkError,
    NetworkErrorKind,
    ParseOutcome,
    Success,
    TransportResponse,
)

__all__ = [
    "ClassifiedResponse",
    "Failure",
    "HttpResponseInfo",
    "NetworkError",
    "NetworkErrorKind",
    "OutgoingRequest",
    "ParseOutcome",
    "Success",
    "TransportCompletion",
    "TransportResponse",
]
