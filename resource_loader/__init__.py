from resource_loader.execution.classifier import classify_response, is_error_status
from resource_loader.models import (
    ClassifiedResponse,
    Failure,
    HttpResponseInfo,
    NetworkError,
    NetworkErrorKind,
    OutgoingRequest,
    ParseOutcome,
    Success,
    TransportCompletion,
    TransportResponse,
)
from resource_loader.resources.network import (
    DataResource,
    HTMLResource,
    HTTPMethod,
    JSONModelResource,
    JSONResource,
    NetworkResource,
    QueryItem,
    TextResource,
)
from resource_loader.services.resource_service import AsyncNetworkResourceService, NetworkResourceService

__all__ = [
    "AsyncNetworkResourceService",
    "ClassifiedResponse",
    "DataResource",
    "Failure",
    "HTMLResource",
    "HTTPMethod",
    "HttpResponseInfo",
    "JSONModelResource",
    "JSONResource",
    "NetworkError",
    "NetworkErrorKind",
    "NetworkResource",
    "NetworkResourceService",
    "OutgoingRequest",
    "ParseOutcome",
    "QueryItem",
    "Success",
    "TextResource",
    "TransportCompletion",
    "TransportResponse",
    "classify_response",
    "is_error_status",
]
