"""Gzip transforms.

Compressed output is binary, so it is carried through the text buffer as
base64.
"""

import base64
import binascii
import gzip
import re

from ptools.options import IntboxOption, OptionState
from ptools.transforms.schemas import TransformDefinition

_WHITESPACE = re.compile(r"\s+")


def gzip_compress(text: str, options: OptionState) -> str:
    level = options.value("level", 9)
    if not 0 <= level <= 9:
        raise ValueError(f"Compression level must be between 0 and 9, got {level}")
    # mtime=0 keeps the output stable for identical input
    payload = gzip.compress(text.encode("utf-8"), compresslevel=level, mtime=0)
    return base64.b64encode(payload).decode("ascii")


def gzip_decompress(text: str, options: OptionState) -> str:
    try:
        payload = base64.b64decode(_WHITESPACE.sub("", text), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 input: {e}") from e
    return gzip.decompress(payload).decode("utf-8")


GzipCompressTransform = TransformDefinition(
    name="gzipc",
    description="Gzip UTF-8 text and show the result as base64",
    option_schema=[IntboxOption(key="level", default=9)],
    invoke=gzip_compress,
)

GzipDecompressTransform = TransformDefinition(
    name="gzipd",
    description="Decompress base64-encoded gzip data into UTF-8 text",
    invoke=gzip_decompress,
)
