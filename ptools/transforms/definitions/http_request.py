"""curl command transforms.

``curl`` parses a curl command line and performs the request with httpx,
showing the response body (and optionally the status line and headers).
``curl2iwr`` rewrites the same command line for PowerShell's
Invoke-WebRequest without sending anything.

Only the commonly pasted subset of curl options is understood; anything
else fails the transform with the name of the unsupported option.
"""

import base64
import logging
import shlex
from collections import deque
from typing import Optional
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, Field

from ptools import config
from ptools.options import CheckboxOption, OptionState
from ptools.transforms.schemas import TransformDefinition

logger = logging.getLogger(__name__)

# Flags that take no argument and do not change the request
_IGNORED_FLAGS = {
    "-s", "--silent", "-S", "--show-error", "-v", "--verbose", "-i", "--include",
    "--compressed", "-f", "--fail", "-#", "--progress-bar", "-g", "--globoff",
}
_DATA_OPTIONS = {"-d", "--data", "--data-raw", "--data-binary", "--data-ascii"}

# Replaced in tests with an httpx.MockTransport
_transport: Optional[httpx.AsyncBaseTransport] = None


class CurlRequest(BaseModel):
    """The request a curl command line describes."""

    method: str = "GET"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    data: Optional[str] = None
    auth: Optional[tuple[str, str]] = None
    follow_redirects: bool = False
    verify: bool = True


def set_transport(transport: Optional[httpx.AsyncBaseTransport]) -> None:
    """Route requests made by the curl transform through ``transport``."""
    global _transport
    _transport = transport


def _split_short_flags(token: str) -> list[str]:
    """Expand bundled boolean flags such as -sSL into -s -S -L."""
    if token.startswith("--") or len(token) <= 2:
        return [token]
    flags = [f"-{c}" for c in token[1:]]
    if all(f in _IGNORED_FLAGS or f in ("-L", "-k", "-I", "-G") for f in flags):
        return flags
    # Attached argument, as in -XPOST or -HAccept:*/*
    return [token[:2], token[2:]]


def parse_curl_command(text: str) -> CurlRequest:
    """Parse a curl command line into a CurlRequest."""
    tokens = shlex.split(text.replace("\\\n", " ").replace("^\n", " "))
    if not tokens or tokens[0] != "curl":
        raise ValueError("Input must be a curl command")

    method: Optional[str] = None
    url: Optional[str] = None
    headers: dict[str, str] = {}
    data_parts: list[str] = []
    auth: Optional[tuple[str, str]] = None
    follow_redirects = False
    verify = True
    as_query = False

    # Option values are taken verbatim; only option tokens get expanded
    pending = deque(tokens[1:])

    def value_of(option: str) -> str:
        if not pending:
            raise ValueError(f"Option {option} requires a value")
        return pending.popleft()

    while pending:
        arg = pending.popleft()
        if arg.startswith("--") and "=" in arg:
            arg, value = arg.split("=", 1)
            pending.appendleft(value)
        elif arg.startswith("-") and not arg.startswith("--") and len(arg) > 2:
            first, *rest = _split_short_flags(arg)
            pending.extendleft(reversed(rest))
            arg = first

        if arg in ("-X", "--request"):
            method = value_of(arg).upper()
        elif arg in ("-H", "--header"):
            name, sep, value = value_of(arg).partition(":")
            if not sep:
                raise ValueError(f"Malformed header: {name}")
            headers[name.strip()] = value.strip()
        elif arg in _DATA_OPTIONS:
            data_parts.append(value_of(arg))
        elif arg == "--json":
            data_parts.append(value_of(arg))
            headers.setdefault("Content-Type", "application/json")
            headers.setdefault("Accept", "application/json")
        elif arg in ("-u", "--user"):
            user, _, password = value_of(arg).partition(":")
            auth = (user, password)
        elif arg in ("-A", "--user-agent"):
            headers["User-Agent"] = value_of(arg)
        elif arg in ("-b", "--cookie"):
            headers["Cookie"] = value_of(arg)
        elif arg in ("-e", "--referer"):
            headers["Referer"] = value_of(arg)
        elif arg in ("-I", "--head"):
            method = "HEAD"
        elif arg in ("-G", "--get"):
            as_query = True
        elif arg in ("-L", "--location"):
            follow_redirects = True
        elif arg in ("-k", "--insecure"):
            verify = False
        elif arg == "--url":
            url = value_of(arg)
        elif arg in _IGNORED_FLAGS:
            continue
        elif arg.startswith("-"):
            raise ValueError(f"Unsupported curl option: {arg}")
        elif url is None:
            url = arg
        else:
            raise ValueError(f"Unexpected argument: {arg}")

    if not url:
        raise ValueError("No URL given")
    if "://" not in url:
        url = f"http://{url}"

    data = "&".join(data_parts) if data_parts else None
    if as_query and data is not None:
        url = f"{url}{'&' if urlsplit(url).query else '?'}{data}"
        data = None
    if method is None:
        method = "POST" if data is not None else "GET"
    if data is not None and method == "POST":
        headers.setdefault("Content-Type", "application/x-www-form-urlencoded")

    return CurlRequest(
        method=method,
        url=url,
        headers=headers,
        data=data,
        auth=auth,
        follow_redirects=follow_redirects,
        verify=verify,
    )


def _render_response(response: httpx.Response, include: bool) -> str:
    if not include:
        return response.text
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\n".join(lines) + "\n\n" + response.text


async def perform_curl(text: str, options: OptionState) -> str:
    request = parse_curl_command(text)
    logger.info(f"curl transform: {request.method} {request.url}")
    async with httpx.AsyncClient(
        timeout=config.HTTP_TIMEOUT,
        follow_redirects=request.follow_redirects,
        verify=request.verify,
        transport=_transport,
    ) as client:
        response = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.data.encode("utf-8") if request.data is not None else None,
            auth=request.auth,
        )
    return _render_response(response, options.value("include", False))


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def curl_to_iwr(text: str, options: OptionState) -> str:
    request = parse_curl_command(text)
    headers = dict(request.headers)
    content_type = headers.pop("Content-Type", None)
    user_agent = headers.pop("User-Agent", None)
    if request.auth is not None:
        token = base64.b64encode(":".join(request.auth).encode("utf-8")).decode("ascii")
        headers["Authorization"] = f"Basic {token}"

    parts = [f"Invoke-WebRequest -Uri {_ps_quote(request.url)}", f"-Method {request.method}"]
    if headers:
        pairs = "; ".join(f"{_ps_quote(k)} = {_ps_quote(v)}" for k, v in headers.items())
        parts.append(f"-Headers @{{ {pairs} }}")
    if content_type:
        parts.append(f"-ContentType {_ps_quote(content_type)}")
    if user_agent:
        parts.append(f"-UserAgent {_ps_quote(user_agent)}")
    if request.data is not None:
        parts.append(f"-Body {_ps_quote(request.data)}")
    if not request.follow_redirects:
        parts.append("-MaximumRedirection 0")
    if not request.verify:
        parts.append("-SkipCertificateCheck")
    return " `\n    ".join(parts)


CurlTransform = TransformDefinition(
    name="curl",
    description="Run a curl command and show the response",
    option_schema=[CheckboxOption(key="include", label="headers")],
    invoke=perform_curl,
)

IWRETransform = TransformDefinition(
    name="curl2iwr",
    description="Rewrite a curl command as PowerShell Invoke-WebRequest",
    invoke=curl_to_iwr,
)
