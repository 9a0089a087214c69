"""Base64 and URI encoding transforms.

Base64 works on Latin-1 text, one character per byte, so that any decoded
payload (binary included) survives a round trip through the buffer.

URI encoding mirrors the browser functions: by default only characters
that are never valid in a URI are escaped (encodeURI); with ``cmp`` set the
reserved delimiters are escaped too (encodeURIComponent).
"""

import base64
import binascii
import re
from urllib.parse import quote

from ptools.options import CheckboxOption, OptionState
from ptools.transforms.schemas import TransformDefinition

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_COMPONENT_SAFE = "!*'()"
# encodeURI additionally leaves the reserved delimiters alone
_RESERVED = ";,/?:@&=+$#"
_URI_SAFE = _COMPONENT_SAFE + _RESERVED

_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_WHITESPACE = re.compile(r"\s+")


def base64_decode(text: str, options: OptionState) -> str:
    compact = _WHITESPACE.sub("", text)
    # Forgiving like atob: missing padding is restored, a lone trailing
    # character is not
    remainder = len(compact) % 4
    if remainder == 1:
        raise ValueError("Invalid base64 input: truncated by one character")
    if remainder:
        compact += "=" * (4 - remainder)
    try:
        raw = base64.b64decode(compact, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 input: {e}") from e
    return raw.decode("latin-1")


def base64_encode(text: str, options: OptionState) -> str:
    try:
        raw = text.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ValueError(
            f"Character {text[e.start]!r} at position {e.start} is outside Latin-1"
        ) from e
    return base64.b64encode(raw).decode("ascii")


def uri_encode(text: str, options: OptionState) -> str:
    safe = _COMPONENT_SAFE if options.value("cmp", False) else _URI_SAFE
    # Lone surrogates cannot be encoded; let that surface as the failure
    return quote(text, safe=safe, encoding="utf-8", errors="strict")


def _decode_escape_run(run: str, keep: str) -> str:
    """Decode one run of %XX escapes, leaving escapes of ``keep`` intact."""
    tokens = [run[i:i + 3] for i in range(0, len(run), 3)]
    out: list[str] = []
    pending: list[int] = []

    def flush() -> None:
        if pending:
            out.append(bytes(pending).decode("utf-8"))
            pending.clear()

    for token in tokens:
        byte = int(token[1:], 16)
        if byte < 0x80 and chr(byte) in keep:
            flush()
            out.append(token)
        else:
            pending.append(byte)
    flush()
    return "".join(out)


def uri_decode(text: str, options: OptionState) -> str:
    if _BAD_ESCAPE.search(text):
        raise ValueError("URI malformed")
    keep = "" if options.value("cmp", False) else _RESERVED
    try:
        return _ESCAPE_RUN.sub(lambda m: _decode_escape_run(m.group(0), keep), text)
    except UnicodeDecodeError as e:
        raise ValueError("URI malformed") from e


Base64DecodeTransform = TransformDefinition(
    name="base64d",
    description="Decode base64 into Latin-1 text",
    invoke=base64_decode,
)

Base64EncodeTransform = TransformDefinition(
    name="base64e",
    description="Encode Latin-1 text as base64",
    invoke=base64_encode,
)

URIDecodeTransform = TransformDefinition(
    name="urid",
    description="Decode percent-escapes (decodeURI, or decodeURIComponent with cmp)",
    option_schema=[CheckboxOption(key="cmp", label="component")],
    invoke=uri_decode,
)

URIEncodeTransform = TransformDefinition(
    name="urie",
    description="Percent-encode text (encodeURI, or encodeURIComponent with cmp)",
    option_schema=[CheckboxOption(key="cmp", label="component")],
    invoke=uri_encode,
)
