# tests/conftest.py
"""Shared test fixtures.

Provides small in-memory transform catalogs so session tests can control
exactly when an invocation completes and what it returns:

- upper / reverse: plain synchronous transforms
- boom: always fails
- gated: async transform that waits until the test releases its input
- suffix: configurable through a TEXTBOX option
"""

import asyncio
from collections import defaultdict

import pytest

from ptools.options import OptionState, TextboxOption
from ptools.transforms.registry import TransformRegistry
from ptools.transforms.schemas import TransformDefinition


class Gates:
    """One asyncio.Event per input text; the gated transform waits on it."""

    def __init__(self):
        self._events: dict[str, asyncio.Event] = defaultdict(asyncio.Event)
        self.started: list[str] = []

    def release(self, text: str) -> None:
        self._events[text].set()

    async def wait(self, text: str) -> None:
        self.started.append(text)
        await self._events[text].wait()


def _boom(text: str, options: OptionState) -> str:
    raise ValueError("boom")


def _suffix(text: str, options: OptionState) -> str:
    return text + options.value("suffix", "")


@pytest.fixture
def gates() -> Gates:
    return Gates()


@pytest.fixture
def test_registry(gates: Gates) -> TransformRegistry:
    async def gated(text: str, options: OptionState) -> str:
        await gates.wait(text)
        return text.upper()

    return TransformRegistry([
        TransformDefinition(name="upper", invoke=lambda text, options: text.upper()),
        TransformDefinition(name="reverse", invoke=lambda text, options: text[::-1]),
        TransformDefinition(name="boom", invoke=_boom),
        TransformDefinition(name="gated", invoke=gated),
        TransformDefinition(
            name="suffix",
            option_schema=[TextboxOption(key="suffix", default="!")],
            invoke=_suffix,
        ),
    ])
