import json
from typing import List, Mapping, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from resource_loader.config.headers import merge_header_fields
from resource_loader.core.exceptions import InvalidResourceError
from resource_loader.models.request import OutgoingRequest
from resource_loader.resources.network import NetworkResource, QueryItem

class RequestBuilder:
    """
    Превращает описание ресурса в OutgoingRequest.
    Query items добавляются в порядке объявления, JSON тело сериализуется с отступами.
    """

    # Символы, которые можно не кодировать в значении query-параметра
    SAFE_QUERY_CHARS = "-._~!$'()*,;:@/?"

    # Схемы, для которых обязателен хост
    NETWORK_SCHEMES = ("http", "https")

    @classmethod
    def build(
        cls,
        resource: NetworkResource,
        additional_header_fields: Optional[Mapping[str, str]] = None,
    ) -> OutgoingRequest:
        url = cls.build_url(resource.url, resource.query_items)
        headers = merge_header_fields(additional_header_fields, resource.header_fields)

        return OutgoingRequest(
            method=resource.method.value,
            url=url,
            headers=headers,
            body=cls.encode_json_body(resource.json_body),
        )

    @classmethod
    def build_url(cls, url: str, query_items: Optional[List[QueryItem]] = None) -> str:
        url = (url or "").strip()
        if not url:
            raise InvalidResourceError("Resource URL cannot be empty")
        if any(ch.isspace() for ch in url):
            raise InvalidResourceError(f"Resource URL contains whitespace: {url!r}")

        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise InvalidResourceError(f"Resource URL is malformed: {url}") from e

        # Относительные и file:// URL допустимы, http(s) без хоста - нет
        if parts.scheme.lower() in cls.NETWORK_SCHEMES and not parts.netloc:
            raise InvalidResourceError(f"Resource URL has no host: {url}")

        if not query_items:
            return url

        # 1. Кодирование query items (name или name=value)
        encoded = "&".join(cls._encode_item(item) for item in query_items)

        # 2. Существующий query string дополняется, а не заменяется
        query = f"{parts.query}&{encoded}" if parts.query else encoded
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))

    @classmethod
    def encode_json_body(cls, body: Optional[object]) -> Optional[bytes]:
        if body is None:
            return None
        try:
            return json.dumps(body, indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise InvalidResourceError(f"JSON body is not serializable: {e}") from e

    @classmethod
    def _encode_item(cls, item: QueryItem) -> str:
        name = quote(item.name, safe=cls.SAFE_QUERY_CHARS)
        if item.value is None:
            return name
        return f"{name}={quote(item.value, safe=cls.SAFE_QUERY_CHARS)}"
