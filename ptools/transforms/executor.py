"""Transform executor - applies a transform definition to text.

Every invocation goes through ``TransformExecutor.execute``, which always
returns a TransformResult:
- success: the transform's output coerced to text
- failure: a readable message built from whatever the transform raised

Nothing a transform raises escapes this boundary. There are no retries; a
failed invocation is reported once and the caller may re-invoke later with
different input or options.
"""

import inspect
import logging
import time
from typing import Any, Optional

from ptools.options import OptionState
from ptools.transforms.schemas import TransformDefinition, TransformResult

logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    """Render an exception the way the result pane shows it."""
    detail = str(error).strip()
    name = type(error).__name__
    return f"{name}: {detail}" if detail else name


def coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


class TransformExecutor:
    """Executes transform definitions against text.

    Stateless; a single instance is shared by every transform instance.
    """

    async def execute(
        self,
        definition: TransformDefinition,
        text: str,
        options: Optional[OptionState] = None,
    ) -> TransformResult:
        """Invoke ``definition`` on ``text`` with ``options``.

        Args:
            definition: The transform to run
            text: Input text
            options: Live option state; defaults to the schema defaults

        Returns:
            TransformResult with the output or the failure message
        """
        if options is None:
            options = OptionState.from_schema(definition.option_schema)

        start_time = time.time()
        try:
            value = definition.invoke(text, options)
            if inspect.isawaitable(value):
                value = await value
            output = coerce_text(value)
        except Exception as e:
            elapsed = int((time.time() - start_time) * 1000)
            logger.debug(
                f"Transform '{definition.name}' failed after {elapsed}ms: {e!r}"
            )
            return TransformResult.fail(describe_error(e))

        elapsed = int((time.time() - start_time) * 1000)
        logger.debug(
            f"Transform '{definition.name}' produced {len(output)} chars in {elapsed}ms"
        )
        return TransformResult.ok(output)


# Global executor instance
_executor: Optional[TransformExecutor] = None


def get_transform_executor() -> TransformExecutor:
    """Get the global transform executor instance."""
    global _executor
    if _executor is None:
        _executor = TransformExecutor()
    return _executor
