"""Transform option model."""

from ptools.options.schemas import (
    CheckboxOption,
    IntboxOption,
    OptionKind,
    OptionSpec,
    RadioChoice,
    RadioOption,
    TextboxOption,
)
from ptools.options.state import OptionState

__all__ = [
    "CheckboxOption",
    "IntboxOption",
    "OptionKind",
    "OptionSpec",
    "OptionState",
    "RadioChoice",
    "RadioOption",
    "TextboxOption",
]
