from unittest import mock

import pytest

from conftest import http_response
from resource_loader import cli
from resource_loader.config.settings import get_settings
from resource_loader.core.exceptions import ParseError
from resource_loader.models.response import Failure, NetworkError, ParseOutcome, Success


def test_parse_args_collects_headers_and_query_items() -> None:
    args = cli.parse_args([
        "https://api.test/items",
        "-X", "post",
        "-H", "Authorization: Bearer x",
        "-q", "page=2",
        "-q", "debug",
        "--json-body", '{"a": 1}',
    ])

    assert args.method == "POST"
    assert args.headers == [("Authorization", "Bearer x")]
    assert [(q.name, q.value) for q in args.query_items] == [("page", "2"), ("debug", None)]
    assert args.json_body == {"a": 1}
    assert args.use_async is False


def test_render_success() -> None:
    result = Success({"id": 1}, http_response(200).as_http())

    assert cli.render(result) == 'SUCCESS 200\n{\n  "id": 1\n}'


def test_render_failure() -> None:
    result = Failure(
        ParseOutcome.failure(ParseError("Malformed JSON")),
        http_response(502).as_http(),
        NetworkError.status_code_error(502),
    )

    text = cli.render(result)

    assert text.startswith("FAILURE status_code_error")
    assert "status: 502" in text
    assert "parse error: Malformed JSON" in text


@pytest.mark.parametrize("result, exit_code", [
    (Success([], http_response(200).as_http()), 0),
    (Failure(None, None, NetworkError.no_transport_response()), 1),
])
def test_main_exit_codes(result, exit_code: int, capsys: pytest.CaptureFixture) -> None:
    with mock.patch.object(cli, "NetworkResourceService") as service_cls:
        service_cls.return_value.fetch.return_value = result
        assert cli.main(["https://api.test/items"]) == exit_code

    resource = service_cls.return_value.fetch.call_args.args[0]
    assert resource.url == "https://api.test/items"
    assert capsys.readouterr().out.split()[0] in ("SUCCESS", "FAILURE")


def test_main_invalid_url() -> None:
    assert cli.main(["https://"]) == 2


@pytest.mark.parametrize("argv, expected", [
    ([], {"Content-Type": "application/json"}),
    (["-H", "Authorization: Bearer x"], {"Content-Type": "application/json", "Authorization": "Bearer x"}),
    (["-H", "content-type: text/plain"], {"content-type": "text/plain"}),
])
def test_main_keeps_json_content_type(argv: list, expected: dict) -> None:
    with mock.patch.object(cli, "NetworkResourceService") as service_cls:
        service_cls.return_value.fetch.return_value = Success({}, http_response(200).as_http())
        cli.main(["https://api.test/items", "-X", "POST", "--json-body", '{"a": 1}', *argv])

    resource = service_cls.return_value.fetch.call_args.args[0]
    assert resource.header_fields == expected
    assert resource.json_body == {"a": 1}


def test_version_flag(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    settings = get_settings()
    assert capsys.readouterr().out.strip() == f"{settings.APP_NAME} {settings.APP_VERSION}"
