"""Tests for the transform executor (result wrapping)."""

import asyncio
import json

import pytest
from pydantic import ValidationError

from ptools.options import CheckboxOption, IntboxOption, OptionState
from ptools.transforms.executor import TransformExecutor, get_transform_executor
from ptools.transforms.schemas import TransformDefinition, TransformResult


@pytest.fixture
def executor():
    return TransformExecutor()


class TestSuccess:
    @pytest.mark.asyncio
    async def test_sync_value_is_returned_unchanged(self, executor):
        definition = TransformDefinition(name="upper", invoke=lambda t, o: t.upper())
        result = await executor.execute(definition, "abc")
        assert result == TransformResult(failed=False, text="ABC")

    @pytest.mark.asyncio
    async def test_coroutine_is_awaited(self, executor):
        async def slow(text, options):
            await asyncio.sleep(0)
            return text * 2

        definition = TransformDefinition(name="twice", invoke=slow)
        result = await executor.execute(definition, "ab")
        assert not result.failed
        assert result.text == "abab"

    @pytest.mark.asyncio
    async def test_non_text_values_are_coerced(self, executor):
        definition = TransformDefinition(name="length", invoke=lambda t, o: len(t))
        result = await executor.execute(definition, "abcd")
        assert result.text == "4"

    @pytest.mark.asyncio
    async def test_defaults_used_when_no_options_given(self, executor):
        definition = TransformDefinition(
            name="indent",
            option_schema=[IntboxOption(key="tab", default=3)],
            invoke=lambda t, o: " " * o.value("tab") + t,
        )
        result = await executor.execute(definition, "x")
        assert result.text == "   x"


class TestFailure:
    @pytest.mark.asyncio
    async def test_raised_error_becomes_failed_result(self, executor):
        def parse(text, options):
            return json.loads(text)

        definition = TransformDefinition(name="parse", invoke=parse)
        result = await executor.execute(definition, "{not json")
        assert result.failed
        assert result.text.startswith("JSONDecodeError")

    @pytest.mark.asyncio
    async def test_failed_coroutine_becomes_failed_result(self, executor):
        async def reject(text, options):
            await asyncio.sleep(0)
            raise TypeError("Not JSON escaped")

        definition = TransformDefinition(name="reject", invoke=reject)
        result = await executor.execute(definition, "1")
        assert result == TransformResult(failed=True, text="TypeError: Not JSON escaped")

    @pytest.mark.asyncio
    async def test_message_is_never_empty(self, executor):
        def silent(text, options):
            raise RuntimeError()

        definition = TransformDefinition(name="silent", invoke=silent)
        result = await executor.execute(definition, "")
        assert result.failed
        assert result.text == "RuntimeError"

    @pytest.mark.asyncio
    async def test_options_passed_through(self, executor):
        def strict(text, options):
            if options.value("strict"):
                raise ValueError("strict mode rejects everything")
            return text

        definition = TransformDefinition(
            name="strict", option_schema=[CheckboxOption(key="strict")], invoke=strict
        )
        options = OptionState.from_schema(definition.option_schema)
        assert not (await executor.execute(definition, "x", options)).failed

        options.set("strict", True)
        assert (await executor.execute(definition, "x", options)).failed


class TestDefinition:
    def test_duplicate_option_keys_rejected(self):
        with pytest.raises(ValidationError):
            TransformDefinition(
                name="dup",
                option_schema=[CheckboxOption(key="a"), IntboxOption(key="a")],
                invoke=lambda t, o: t,
            )

    def test_invoke_is_not_serialized(self):
        definition = TransformDefinition(name="id", invoke=lambda t, o: t)
        assert "invoke" not in definition.model_dump()

    def test_global_executor_is_shared(self):
        assert get_transform_executor() is get_transform_executor()
