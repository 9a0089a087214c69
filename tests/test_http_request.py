"""Tests for the curl transforms."""

import httpx
import pytest

from ptools.options import OptionState
from ptools.transforms.definitions import http_request
from ptools.transforms.definitions.http_request import (
    CurlTransform,
    IWRETransform,
    parse_curl_command,
)
from ptools.transforms.executor import TransformExecutor


class TestParseCurlCommand:
    def test_simple_get(self):
        request = parse_curl_command("curl https://example.com/api")
        assert request.method == "GET"
        assert request.url == "https://example.com/api"
        assert request.data is None

    def test_data_implies_post_with_form_content_type(self):
        request = parse_curl_command("curl -d 'a=1' -d 'b=2' example.com")
        assert request.method == "POST"
        assert request.url == "http://example.com"
        assert request.data == "a=1&b=2"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_headers_method_and_line_continuations(self):
        request = parse_curl_command(
            "curl -X PUT \\\n  -H 'Accept: application/json' \\\n"
            "  -H 'X-Token: a:b' --data-raw '{\"x\": 1}' https://h/p"
        )
        assert request.method == "PUT"
        assert request.headers == {"Accept": "application/json", "X-Token": "a:b"}
        assert request.data == '{"x": 1}'

    def test_bundled_flags_and_attached_values(self):
        request = parse_curl_command("curl -sSLk -XDELETE https://h/p")
        assert request.follow_redirects
        assert not request.verify
        assert request.method == "DELETE"

    def test_long_option_with_equals(self):
        request = parse_curl_command("curl --request=PATCH --url=https://h/p")
        assert request.method == "PATCH"
        assert request.url == "https://h/p"

    def test_get_flag_moves_data_to_query(self):
        request = parse_curl_command("curl -G -d q=1 https://h/search?lang=en")
        assert request.method == "GET"
        assert request.url == "https://h/search?lang=en&q=1"
        assert request.data is None

    def test_data_value_starting_with_dash_is_kept(self):
        request = parse_curl_command("curl -d -abc https://h/p")
        assert request.data == "-abc"

    def test_user_and_json(self):
        request = parse_curl_command("curl -u bob:secret --json '{}' https://h/p")
        assert request.auth == ("bob", "secret")
        assert request.headers["Content-Type"] == "application/json"
        assert request.method == "POST"

    @pytest.mark.parametrize(
        "text,message",
        [
            ("wget https://h", "must be a curl command"),
            ("curl", "No URL"),
            ("curl --upload-file x https://h", "Unsupported curl option: --upload-file"),
            ("curl https://h -H", "requires a value"),
            ("curl -H nocolon https://h", "Malformed header"),
        ],
    )
    def test_rejects(self, text, message):
        with pytest.raises(ValueError, match=message):
            parse_curl_command(text)


class TestCurlToIWR:
    def test_rewrites_request(self):
        output = IWRETransform.invoke(
            "curl -L -X POST -H 'Content-Type: application/json' "
            "-H \"X-Name: O'Brien\" -d '{}' https://h/p",
            OptionState(),
        )
        assert output == (
            "Invoke-WebRequest -Uri 'https://h/p' `\n"
            "    -Method POST `\n"
            "    -Headers @{ 'X-Name' = 'O''Brien' } `\n"
            "    -ContentType 'application/json' `\n"
            "    -Body '{}'"
        )

    def test_no_redirects_without_location(self):
        output = IWRETransform.invoke("curl -k https://h", OptionState())
        assert "-MaximumRedirection 0" in output
        assert "-SkipCertificateCheck" in output


class TestCurlTransform:
    @pytest.fixture
    def captured(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, headers={"X-Id": "7"}, text="created")

        http_request.set_transport(httpx.MockTransport(handler))
        yield seen
        http_request.set_transport(None)

    @pytest.mark.asyncio
    async def test_performs_request(self, captured):
        result = await TransformExecutor().execute(
            CurlTransform, "curl -X POST -H 'X-A: 1' -d 'k=v' https://h/items"
        )
        assert result.failed is False
        assert result.text == "created"

        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == "https://h/items"
        assert request.headers["X-A"] == "1"
        assert request.content == b"k=v"

    @pytest.mark.asyncio
    async def test_include_shows_status_and_headers(self, captured):
        options = OptionState.from_schema(CurlTransform.option_schema)
        options.set("include", True)

        result = await TransformExecutor().execute(CurlTransform, "curl https://h", options)

        lines = result.text.splitlines()
        assert lines[0] == "HTTP/1.1 201 Created"
        assert "x-id: 7" in lines
        assert lines[-1] == "created"

    @pytest.mark.asyncio
    async def test_network_error_is_a_failed_result(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http_request.set_transport(httpx.MockTransport(handler))
        try:
            result = await TransformExecutor().execute(CurlTransform, "curl https://h")
        finally:
            http_request.set_transport(None)

        assert result.failed
        assert result.text == "ConnectError: connection refused"
