"""Python literal <-> JSON transforms.

Python literals are read with ``ast.literal_eval``, so only plain data
(dicts, lists, tuples, sets, strings, numbers, booleans, None) is accepted;
nothing is ever executed.
"""

import ast
import pprint

import json5

from ptools.options import IntboxOption, OptionState
from ptools.transforms.definitions.json_text import dump_json
from ptools.transforms.schemas import TransformDefinition


def _to_json_value(value):
    if isinstance(value, dict):
        return {_to_json_key(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [_to_json_value(v) for v in sorted(value, key=repr)]
    if isinstance(value, bytes):
        return value.decode("latin-1")
    if isinstance(value, complex):
        raise TypeError(f"Complex number {value!r} has no JSON representation")
    return value


def _to_json_key(key) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        # Same spelling json.dumps uses for non-string keys
        return dump_json(key)
    raise TypeError(f"Key {key!r} cannot be a JSON object key")


def python_to_json(text: str, options: OptionState) -> str:
    value = ast.literal_eval(text.strip())
    return dump_json(_to_json_value(value), options.value("tab", 2))


def json_to_python(text: str, options: OptionState) -> str:
    return pprint.pformat(json5.loads(text), sort_dicts=False)


PythonDictToJSONTransform = TransformDefinition(
    name="py2json",
    description="Convert a Python literal (dict, list, ...) into JSON",
    option_schema=[IntboxOption(key="tab", default=2)],
    invoke=python_to_json,
)

JSONToPythonDictTransform = TransformDefinition(
    name="json2py",
    description="Convert JSON (or JSON5) into a Python literal",
    invoke=json_to_python,
)
