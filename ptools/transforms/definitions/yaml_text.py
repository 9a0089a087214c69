"""YAML <-> JSON transforms."""

import json5
import yaml

from ptools.options import OptionState
from ptools.transforms.definitions.json_text import dump_json
from ptools.transforms.schemas import TransformDefinition


def yaml_to_json(text: str, options: OptionState) -> str:
    data = yaml.safe_load(text)
    # Timestamps and other YAML-only scalars have no JSON type; keep their text
    return dump_json(_jsonable(data))


def json_to_yaml(text: str, options: OptionState) -> str:
    return yaml.safe_dump(
        json5.loads(text),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _jsonable(value):
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


YAML2JSONTransform = TransformDefinition(
    name="yaml2json",
    description="Convert YAML into compact JSON",
    invoke=yaml_to_json,
)

JSON2YAMLTransform = TransformDefinition(
    name="json2yaml",
    description="Convert JSON (or JSON5) into YAML",
    invoke=json_to_yaml,
)
