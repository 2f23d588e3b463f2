from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from resource_loader.config.headers import merge_header_fields
from resource_loader.config.logging import configure_logging
from resource_loader.config.settings import get_settings
from resource_loader.core.exceptions import InvalidResourceError
from resource_loader.models.response import ClassifiedResponse
from resource_loader.resources.network import HTTPMethod, JSONResource, QueryItem
from resource_loader.services.resource_service import AsyncNetworkResourceService, NetworkResourceService

logger = logging.getLogger(__name__)


def _parse_header(raw: str) -> tuple:
    if ":" not in raw:
        raise argparse.ArgumentTypeError(f"Header must look like 'Name: value', got {raw!r}")
    name, value = raw.split(":", 1)
    return name.strip(), value.strip()


def _parse_query(raw: str) -> QueryItem:
    if "=" not in raw:
        return QueryItem(name=raw)
    name, value = raw.split("=", 1)
    return QueryItem(name=name, value=value)


def _parse_json_body(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"--json-body is not valid JSON: {e}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch a JSON resource and print the classified outcome",
    )
    settings = get_settings()
    parser.add_argument("url", help="URL of the resource")
    parser.add_argument("--version", action="version", version=f"{settings.APP_NAME} {settings.APP_VERSION}")
    parser.add_argument(
        "--method", "-X",
        type=str.upper,
        choices=[m.value for m in HTTPMethod],
        default=HTTPMethod.GET.value,
    )
    parser.add_argument(
        "--header", "-H",
        dest="headers",
        type=_parse_header,
        action="append",
        default=[],
        help="Extra header 'Name: value' (repeatable).",
    )
    parser.add_argument(
        "--query", "-q",
        dest="query_items",
        type=_parse_query,
        action="append",
        default=[],
        help="Query item 'name=value' or bare 'name' (repeatable, order kept).",
    )
    parser.add_argument("--json-body", type=_parse_json_body, default=None)
    parser.add_argument("--async", dest="use_async", action="store_true", help="Use the httpx transport.")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def render(result: ClassifiedResponse) -> str:
    if result.is_success:
        body = json.dumps(result.model, indent=2, ensure_ascii=False)
        return f"SUCCESS {result.http_response.status_code}\n{body}"

    lines: List[str] = [f"FAILURE {result.cause.kind.value}", f"  cause: {result.cause.describe()}"]
    if result.http_response is not None:
        lines.append(f"  status: {result.http_response.status_code}")
        lines.append(f"  url: {result.http_response.url}")
    if result.parse_error is not None:
        lines.append(f"  parse error: {result.parse_error}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    # Заголовки из -H дополняют Content-Type JSON ресурса, а не заменяют его
    headers: Dict[str, str] = merge_header_fields(JSONResource.default_header_fields, dict(args.headers))
    resource = JSONResource(
        args.url,
        method=HTTPMethod(args.method),
        header_fields=headers,
        json_body=args.json_body,
        query_items=args.query_items or None,
    )

    try:
        if args.use_async:
            result = asyncio.run(AsyncNetworkResourceService().fetch(resource))
        else:
            result = NetworkResourceService().fetch(resource)
    except InvalidResourceError as e:
        logger.error(f"Invalid resource: {e}")
        return 2

    print(render(result))
    return 0 if result.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
