"""Option schemas for configurable transforms.

An option is one user-adjustable parameter of a transform. Options form a
closed tagged variant discriminated by ``kind``:

- CHECKBOX: boolean toggle
- TEXTBOX: free text
- INTBOX: integer
- RADIO: one value out of a declared list of choices

The same models describe both the schema entry (``value`` unset) and the
live entry held by an OptionState (``value`` set).
"""

from abc import abstractmethod
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


class OptionKind(str, Enum):
    """Kind of input control an option is edited with."""

    CHECKBOX = "CHECKBOX"
    TEXTBOX = "TEXTBOX"
    INTBOX = "INTBOX"
    RADIO = "RADIO"


class _OptionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(
        ..., description="Identifier, unique within the owning transform"
    )
    label: Optional[str] = Field(
        default=None, description="Display text; falls back to the key"
    )

    @property
    def display_label(self) -> str:
        return self.label or self.key

    @property
    def current(self) -> Any:
        """Live value, or the default when no value has been set."""
        return self.default if self.value is None else self.value

    @abstractmethod
    def coerce(self, raw: Any) -> Any:
        """Validate a raw value for this kind; raise ValueError if it does not fit."""

    def with_value(self, raw: Any) -> "_OptionBase":
        """Return a copy carrying a new live value; other fields unchanged."""
        return self.model_copy(update={"value": self.coerce(raw)})


class CheckboxOption(_OptionBase):
    kind: Literal[OptionKind.CHECKBOX] = OptionKind.CHECKBOX
    default: bool = False
    value: Optional[bool] = None

    def coerce(self, raw: Any) -> bool:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise ValueError(f"Option '{self.key}' expects a boolean, got {raw!r}")


class TextboxOption(_OptionBase):
    kind: Literal[OptionKind.TEXTBOX] = OptionKind.TEXTBOX
    default: str = ""
    value: Optional[str] = None

    def coerce(self, raw: Any) -> str:
        if not isinstance(raw, str):
            raise ValueError(f"Option '{self.key}' expects text, got {raw!r}")
        return raw


class IntboxOption(_OptionBase):
    kind: Literal[OptionKind.INTBOX] = OptionKind.INTBOX
    default: int = 0
    value: Optional[int] = None

    def coerce(self, raw: Any) -> int:
        # bool is an int subclass but never a valid integer option
        if isinstance(raw, bool):
            raise ValueError(f"Option '{self.key}' expects an integer, got {raw!r}")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                pass
        raise ValueError(f"Option '{self.key}' expects an integer, got {raw!r}")


class RadioChoice(BaseModel):
    """One selectable value of a RADIO option."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or self.value


class RadioOption(_OptionBase):
    kind: Literal[OptionKind.RADIO] = OptionKind.RADIO
    choices: list[RadioChoice] = Field(
        ..., min_length=1, description="Selectable values, in display order"
    )
    default: str
    value: Optional[str] = None

    @model_validator(mode="after")
    def _default_is_a_choice(self) -> "RadioOption":
        if self.default not in self.choice_values:
            raise ValueError(
                f"Default '{self.default}' of option '{self.key}' "
                f"is not one of {self.choice_values}"
            )
        return self

    @property
    def choice_values(self) -> list[str]:
        return [c.value for c in self.choices]

    def coerce(self, raw: Any) -> str:
        if not isinstance(raw, str) or raw not in self.choice_values:
            raise ValueError(
                f"Option '{self.key}' expects one of {self.choice_values}, got {raw!r}"
            )
        return raw


OptionSpec = Annotated[
    Union[CheckboxOption, TextboxOption, IntboxOption, RadioOption],
    Field(discriminator="kind"),
]
