"""Transform definition schemas.

A TransformDefinition is a named text-to-text conversion plus the schema of
options it can be configured with. Definitions are static catalog entries:
built once at import time and never mutated.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ptools.options import OptionSpec


class TransformDefinition(BaseModel):
    """A named, possibly configurable, text-to-text conversion.

    ``invoke(text, options)`` returns the converted text. It may raise, and
    it may be a coroutine function (for transforms that suspend, e.g. to
    perform network requests). Both are normalized by the executor.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ..., description="Unique identifier, also used as display label"
    )
    description: str = Field(
        default="", description="What this transform does"
    )
    option_schema: list[OptionSpec] = Field(
        default_factory=list,
        description="Configurable options, in display order",
    )
    invoke: Callable[..., Any] = Field(
        ..., exclude=True, description="(text, OptionState) -> text"
    )

    @field_validator("option_schema")
    @classmethod
    def _unique_option_keys(cls, schema: list) -> list:
        seen: set[str] = set()
        for spec in schema:
            if spec.key in seen:
                raise ValueError(f"Duplicate option key: {spec.key}")
            seen.add(spec.key)
        return schema


class TransformResult(BaseModel):
    """Outcome of one transform invocation.

    On success ``text`` holds the output; on failure it holds a non-empty,
    human-readable description of what went wrong.
    """

    model_config = ConfigDict(frozen=True)

    failed: bool = False
    text: str = ""

    @classmethod
    def ok(cls, text: str) -> "TransformResult":
        return cls(failed=False, text=text)

    @classmethod
    def fail(cls, message: str) -> "TransformResult":
        return cls(failed=True, text=message or "Transform failed")

    @classmethod
    def empty(cls) -> "TransformResult":
        """The non-error empty state shown while preview is suppressed."""
        return cls(failed=False, text="")


class TransformSummary(BaseModel):
    """Lightweight summary for listing endpoints."""

    name: str
    description: str = ""
    option_keys: list[str] = []


class TransformDetail(BaseModel):
    """Full definition minus the callable, for building option controls."""

    name: str
    description: str = ""
    option_schema: list[OptionSpec] = []
    position: Optional[int] = Field(
        default=None, description="Index in the catalog display order"
    )
