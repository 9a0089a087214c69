"""Tool session - one open tool with its buffer and transform cards.

The session owns the shared buffer, the chaining coordinator and every
mounted transform instance, and is what a front end talks to:
``edit`` is the input surface's change callback, ``views`` feeds the
cards, and ``promote`` / ``set_option`` / ``toggle_collapsed`` are the
card actions.
"""

import asyncio
import logging
from typing import Any, Optional

from ptools.session.buffer import SharedBuffer
from ptools.session.controller import TransformInstance
from ptools.session.coordinator import ChainingCoordinator
from ptools.session.schemas import InstanceView
from ptools.transforms.executor import TransformExecutor
from ptools.transforms.registry import TransformRegistry, get_transform_registry
from ptools.transforms.schemas import TransformResult

logger = logging.getLogger(__name__)


class ToolSession:
    """A shared buffer plus the transform instances bound to it."""

    def __init__(
        self,
        registry: Optional[TransformRegistry] = None,
        text: str = "",
        preview_limit: Optional[int] = None,
        executor: Optional[TransformExecutor] = None,
    ):
        self.registry = registry or get_transform_registry()
        self.buffer = SharedBuffer(text)
        self.coordinator = ChainingCoordinator(self.buffer)
        self.preview_limit = preview_limit
        self._executor = executor
        self._instances: dict[str, TransformInstance] = {}

    @property
    def text(self) -> str:
        return self.buffer.value

    # ── Mounting ───────────────────────────────────────────

    def mount(
        self,
        name: str,
        options: Optional[dict[str, Any]] = None,
        refresh: bool = True,
    ) -> TransformInstance:
        """Mount a new, independent instance of transform ``name``.

        The first instance of a transform is identified by its name, later
        ones by ``name#2``, ``name#3``, ... ``options`` and ``refresh`` are
        passed to ``TransformInstance.mount``.
        """
        definition = self.registry.get(name)
        if definition is None:
            raise KeyError(
                f"Transform '{name}' not found. Available: {self.registry.list_names()}"
            )

        instance_id = name
        counter = 1
        while instance_id in self._instances:
            counter += 1
            instance_id = f"{name}#{counter}"

        instance = TransformInstance(
            definition,
            self.buffer,
            executor=self._executor,
            preview_limit=self.preview_limit,
            instance_id=instance_id,
        )
        instance.mount(options, refresh=refresh)
        self._instances[instance_id] = instance
        return instance

    def mount_all(self) -> list[TransformInstance]:
        """Mount one instance of every registered transform, in display order."""
        instances = [self.mount(name) for name in self.registry.list_names()]
        logger.info(f"Mounted {len(instances)} transform instances")
        return instances

    def unmount(self, instance_id: str) -> None:
        self.instance(instance_id).unmount()
        del self._instances[instance_id]

    def close(self) -> None:
        """Unmount every instance."""
        for instance in self._instances.values():
            instance.unmount()
        self._instances.clear()

    # ── Access ─────────────────────────────────────────────

    def instance(self, instance_id: str) -> TransformInstance:
        try:
            return self._instances[instance_id]
        except KeyError:
            raise KeyError(f"No mounted instance '{instance_id}'") from None

    def instances(self) -> list[TransformInstance]:
        return list(self._instances.values())

    def views(self) -> list[InstanceView]:
        return [instance.view() for instance in self._instances.values()]

    # ── Actions ────────────────────────────────────────────

    def edit(self, text: str) -> bool:
        """Input surface change callback."""
        return self.buffer.set(text, source="input")

    def set_option(self, instance_id: str, key: str, value: Any) -> bool:
        return self.instance(instance_id).set_option(key, value)

    def toggle_collapsed(self, instance_id: str) -> bool:
        return self.instance(instance_id).toggle_collapsed()

    async def promote(self, instance_id: str) -> TransformResult:
        return await self.coordinator.promote(self.instance(instance_id))

    async def run_step(
        self, name: str, options: Optional[dict[str, Any]] = None
    ) -> TransformResult:
        """Apply transform ``name`` to the buffer with a single invocation.

        A temporary instance is mounted without a preview, invoked once and
        unmounted before its output is written, so the write does not make
        it run again. A failure leaves the buffer untouched.
        """
        instance = self.mount(name, options=options, refresh=False)
        try:
            result = await instance.recompute()
        finally:
            self.unmount(instance.instance_id)

        if result.failed:
            logger.info(f"Step '{name}' failed: {result.text}")
            return result
        self.buffer.set(result.text, source=instance.instance_id)
        return result

    async def settle(self) -> None:
        """Wait for every instance to finish its in-flight invocations."""
        await asyncio.gather(*(i.settle() for i in self._instances.values()))
