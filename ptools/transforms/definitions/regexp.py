"""Regular expression transform.

Modes:
- match: one line per match (the whole match, or its groups joined by tabs)
- replace: substitute every match with ``replace`` (backreferences allowed)
- split: one line per piece between matches
"""

import re

from ptools.options import (
    CheckboxOption,
    OptionState,
    RadioChoice,
    RadioOption,
    TextboxOption,
)
from ptools.transforms.schemas import TransformDefinition


def _render_match(match: re.Match) -> str:
    if not match.groups():
        return match.group(0)
    return "\t".join(g if g is not None else "" for g in match.groups())


def apply_regexp(text: str, options: OptionState) -> str:
    pattern = options.value("pattern", "")
    if not pattern:
        return text

    flags = re.MULTILINE
    if options.value("ignorecase", False):
        flags |= re.IGNORECASE
    regex = re.compile(pattern, flags)

    mode = options.value("mode", "match")
    if mode == "replace":
        return regex.sub(options.value("replace", ""), text)
    if mode == "split":
        return "\n".join(piece or "" for piece in regex.split(text))
    return "\n".join(_render_match(m) for m in regex.finditer(text))


RegexpTransform = TransformDefinition(
    name="regexp",
    description="List, replace or split on matches of a regular expression",
    option_schema=[
        TextboxOption(key="pattern"),
        TextboxOption(key="replace"),
        CheckboxOption(key="ignorecase", label="ignore case"),
        RadioOption(
            key="mode",
            default="match",
            choices=[
                RadioChoice(value="match"),
                RadioChoice(value="replace"),
                RadioChoice(value="split"),
            ],
        ),
    ],
    invoke=apply_regexp,
)
