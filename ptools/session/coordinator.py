"""Chaining coordinator - promotes a transform's output into the buffer.

Promotion is the only write path into the shared buffer besides the input
surface. Writing the buffer notifies every instance bound to it, so each of
them recomputes against the promoted text.
"""

import logging

from ptools.session.buffer import SharedBuffer
from ptools.session.controller import TransformInstance
from ptools.transforms.schemas import TransformResult

logger = logging.getLogger(__name__)


class ChainingCoordinator:
    """Promotes instance outputs into one shared buffer."""

    def __init__(self, buffer: SharedBuffer):
        self.buffer = buffer

    async def promote(self, instance: TransformInstance) -> TransformResult:
        """Replace the buffer with a fresh successful result of ``instance``.

        The cached result is not trusted: one fresh invocation is forced
        with the latest buffer and options. A failure aborts the promotion
        and leaves the buffer untouched.

        Returns:
            The forced result; the buffer was written iff it did not fail
        """
        if instance.buffer is not self.buffer:
            raise ValueError(
                f"Instance '{instance.instance_id}' is bound to another buffer"
            )

        result = await instance.recompute()
        if result.failed:
            logger.info(
                f"Promotion from '{instance.instance_id}' aborted: {result.text}"
            )
            return result

        # Last write wins when promotions overlap
        self.buffer.set(result.text, source=instance.instance_id)
        logger.info(
            f"Promoted '{instance.instance_id}' output ({len(result.text)} chars)"
        )
        return result
