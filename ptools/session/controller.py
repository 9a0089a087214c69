"""Recompute controller for one mounted transform instance.

A TransformInstance binds a transform definition to the shared buffer and
owns that card's option state, collapse toggle and last result. It decides
when the transform re-runs:

- on mount, and on every change to the buffer, an option, or the collapse
  toggle, while preview is enabled
- never while preview is suppressed (buffer longer than the preview limit);
  entering suppression clears the result to the empty success state

Invocations run as asyncio tasks on the running loop. Each dispatch bumps
the instance's generation counter and captures it; a completion carrying an
older generation is discarded, so the last dispatched invocation wins even
when an earlier, slower one finishes after it. Superseded invocations are
not cancelled, only ignored.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from ptools import config
from ptools.options import OptionState
from ptools.session.buffer import SharedBuffer
from ptools.session.schemas import InstanceStatus, InstanceView
from ptools.transforms.executor import TransformExecutor, get_transform_executor
from ptools.transforms.schemas import TransformDefinition, TransformResult

logger = logging.getLogger(__name__)


class TransformInstance:
    """One transform card: a definition, its own options, its live result."""

    def __init__(
        self,
        definition: TransformDefinition,
        buffer: SharedBuffer,
        executor: Optional[TransformExecutor] = None,
        preview_limit: Optional[int] = None,
        instance_id: Optional[str] = None,
    ):
        self.definition = definition
        self.buffer = buffer
        self.instance_id = instance_id or definition.name
        self.preview_limit = config.PREVIEW_LIMIT if preview_limit is None else preview_limit
        self._executor = executor or get_transform_executor()
        self._options: Optional[OptionState] = None
        self._collapsed = False
        self._result = TransformResult.empty()
        self._status = InstanceStatus.IDLE
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ── State ──────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    @property
    def options(self) -> OptionState:
        self._require_mounted()
        return self._options

    @property
    def result(self) -> TransformResult:
        return self._result

    @property
    def status(self) -> InstanceStatus:
        return self._status

    @property
    def collapsed(self) -> bool:
        return self._collapsed

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def preview_enabled(self) -> bool:
        return len(self.buffer) <= self.preview_limit

    @property
    def can_promote(self) -> bool:
        return not self._result.failed

    def view(self) -> InstanceView:
        return InstanceView(
            instance_id=self.instance_id,
            name=self.name,
            option_schema=list(self.definition.option_schema),
            options=self._options.values() if self._options is not None else [],
            result=self._result,
            collapsed=self._collapsed,
            preview_enabled=self.preview_enabled,
            status=self._status,
            can_promote=self.can_promote,
        )

    # ── Lifecycle ──────────────────────────────────────────

    def mount(
        self, options: Optional[dict[str, Any]] = None, refresh: bool = True
    ) -> None:
        """Create option state from the schema defaults and start computing.

        Args:
            options: Initial values applied over the defaults; an unknown key
                or a value of the wrong type raises ValueError
            refresh: When False, no preview is computed until the next change

        Must be called from within a running event loop when ``refresh`` is set.
        """
        if self.mounted:
            raise RuntimeError(f"Instance '{self.instance_id}' is already mounted")
        state = OptionState.from_schema(self.definition.option_schema)
        for key, value in (options or {}).items():
            if not state.set(key, value):
                raise ValueError(f"Transform '{self.name}' has no option '{key}'")
        self._options = state
        self._unsubscribe = self.buffer.subscribe(self._on_buffer_changed)
        logger.debug(f"Mounted instance '{self.instance_id}'")
        if refresh:
            self._refresh()

    def unmount(self) -> None:
        """Stop observing the buffer and drop option state.

        Invocations still in flight run to completion and are discarded.
        """
        if not self.mounted:
            return
        self._unsubscribe()
        self._unsubscribe = None
        self._generation += 1
        self._options = None
        self._result = TransformResult.empty()
        self._status = InstanceStatus.IDLE
        logger.debug(f"Unmounted instance '{self.instance_id}'")

    # ── User actions ───────────────────────────────────────

    def set_option(self, key: str, value) -> bool:
        """Set one option and recompute. Unknown keys are ignored."""
        self._require_mounted()
        if not self._options.set(key, value):
            return False
        self._refresh()
        return True

    def toggle_collapsed(self) -> bool:
        """Flip the collapse toggle; a no-op while preview is suppressed."""
        self._require_mounted()
        if not self.preview_enabled:
            return False
        self._collapsed = not self._collapsed
        self._refresh()
        return True

    async def recompute(self) -> TransformResult:
        """Run one fresh invocation with the latest buffer and options.

        While preview is suppressed the invocation still runs, but its
        result is returned without being displayed.
        """
        self._require_mounted()
        if not self.preview_enabled:
            return await self._executor.execute(
                self.definition, self.buffer.value, self._options.copy()
            )
        return await self._dispatch()

    async def settle(self) -> None:
        """Wait until no invocation of this instance is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ── Internals ──────────────────────────────────────────

    def _require_mounted(self) -> None:
        if not self.mounted:
            raise RuntimeError(f"Instance '{self.instance_id}' is not mounted")

    def _on_buffer_changed(self, text: str) -> None:
        self._refresh()

    def _refresh(self) -> None:
        if self.preview_enabled:
            self._dispatch()
        else:
            self._suppress()

    def _suppress(self) -> None:
        # Invalidate anything in flight; a failure is never kept around
        self._generation += 1
        self._result = TransformResult.empty()
        self._status = InstanceStatus.PREVIEW_SUPPRESSED

    def _dispatch(self) -> "asyncio.Task[TransformResult]":
        self._generation += 1
        generation = self._generation
        text = self.buffer.value
        options = self._options.copy()
        self._status = InstanceStatus.COMPUTING

        task = asyncio.get_running_loop().create_task(
            self._run(generation, text, options),
            name=f"{self.instance_id}:{generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self, generation: int, text: str, options: OptionState
    ) -> TransformResult:
        result = await self._executor.execute(self.definition, text, options)
        self._apply(generation, result)
        return result

    def _apply(self, generation: int, result: TransformResult) -> bool:
        if generation != self._generation:
            logger.debug(
                f"Discarding stale result for '{self.instance_id}' "
                f"(generation {generation}, latest {self._generation})"
            )
            return False
        self._result = result
        self._status = (
            InstanceStatus.SETTLED_FAILURE if result.failed
            else InstanceStatus.SETTLED_SUCCESS
        )
        return True
