"""Shared text buffer.

One buffer per tool session. It is read by every mounted transform instance
and written only by the input surface and by promotions. Subscribers are
notified synchronously, in subscription order, after every change.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

BufferListener = Callable[[str], None]


class SharedBuffer:
    """Single-writer text cell with change notification."""

    def __init__(self, text: str = ""):
        self._text = self._normalize(text)
        self._listeners: list[BufferListener] = []

    @staticmethod
    def _normalize(text: str) -> str:
        return text.replace("\r\n", "\n")

    @property
    def value(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def set(self, text: str, source: str = "input") -> bool:
        """Replace the buffer contents and notify subscribers.

        Writing the current value again is a no-op. Returns whether the
        buffer changed. Every subscriber is notified even when an earlier
        one raises; the first such exception is re-raised afterwards.
        """
        text = self._normalize(text)
        if text == self._text:
            return False
        self._text = text
        logger.debug(f"Buffer set by {source} ({len(text)} chars)")
        # Copy: a listener may unsubscribe while being notified
        errors: list[Exception] = []
        for listener in list(self._listeners):
            try:
                listener(text)
            except Exception as e:
                logger.error(f"Buffer listener {listener!r} failed: {e!r}")
                errors.append(e)
        # Every listener has seen the change; report the first failure
        if errors:
            raise errors[0]
        return True

    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)
