"""Transform catalog.

The registration table below is the catalog: its order is the display
order. Adding a transform means appending its definition here.
"""

from ptools.transforms.definitions.compression import (
    GzipCompressTransform,
    GzipDecompressTransform,
)
from ptools.transforms.definitions.datetime_text import DatetimeTransform
from ptools.transforms.definitions.encoding import (
    Base64DecodeTransform,
    Base64EncodeTransform,
    URIDecodeTransform,
    URIEncodeTransform,
)
from ptools.transforms.definitions.http_request import CurlTransform, IWRETransform
from ptools.transforms.definitions.json_text import (
    JSONBeautifyTransform,
    JSONEscapeTransform,
    JSONSimplifyTransform,
    JSONUnescapeTransform,
)
from ptools.transforms.definitions.python_literal import (
    JSONToPythonDictTransform,
    PythonDictToJSONTransform,
)
from ptools.transforms.definitions.regexp import RegexpTransform
from ptools.transforms.definitions.yaml_text import JSON2YAMLTransform, YAML2JSONTransform

CATALOG = [
    RegexpTransform,
    DatetimeTransform,
    Base64DecodeTransform,
    Base64EncodeTransform,
    URIDecodeTransform,
    URIEncodeTransform,
    JSONBeautifyTransform,
    JSONSimplifyTransform,
    JSONEscapeTransform,
    JSONUnescapeTransform,
    JSON2YAMLTransform,
    YAML2JSONTransform,
    PythonDictToJSONTransform,
    JSONToPythonDictTransform,
    GzipCompressTransform,
    GzipDecompressTransform,
    CurlTransform,
    IWRETransform,
]
