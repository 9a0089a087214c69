"""JSON transforms.

Input is parsed as JSON5 (comments, trailing commas, single quotes and
unquoted keys are accepted); output is always strict JSON.
"""

import json
from typing import Any

import json5

from ptools.options import CheckboxOption, IntboxOption, OptionState
from ptools.transforms.schemas import TransformDefinition

# Browsers cap JSON indentation at ten spaces
MAX_INDENT = 10


def dump_json(value: Any, indent: int = 0) -> str:
    """Serialize like JSON.stringify(value, null, indent)."""
    indent = min(indent, MAX_INDENT)
    if indent < 1:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def beautify(text: str, options: OptionState) -> str:
    indent = options.value("tab", 2)
    if options.value("multiline", False):
        return dump_json(json5.loads(text), indent)
    # One document per line; blank lines pass through
    return "\n".join(
        dump_json(json5.loads(line), indent) if line.strip() else line
        for line in text.split("\n")
    )


def simplify(text: str, options: OptionState) -> str:
    return dump_json(json5.loads(text))


def escape(text: str, options: OptionState) -> str:
    return json.dumps(text, ensure_ascii=False)


def unescape(text: str, options: OptionState) -> str:
    result = json5.loads(text)
    if not isinstance(result, str):
        raise TypeError("Not JSON escaped")
    return result


JSONBeautifyTransform = TransformDefinition(
    name="jsonbtf",
    description="Pretty-print JSON; each line is a document unless multiline is set",
    option_schema=[
        CheckboxOption(key="multiline"),
        IntboxOption(key="tab", default=2),
    ],
    invoke=beautify,
)

JSONSimplifyTransform = TransformDefinition(
    name="jsonsmp",
    description="Minify JSON onto a single line",
    invoke=simplify,
)

JSONEscapeTransform = TransformDefinition(
    name="jsonesc",
    description="Quote text as a JSON string literal",
    invoke=escape,
)

JSONUnescapeTransform = TransformDefinition(
    name="jsonunesc",
    description="Unquote a JSON string literal back into text",
    invoke=unescape,
)
