"""Live option state for a single transform instance.

Each mounted transform instance owns one OptionState, created from the
transform's option schema defaults. The key set is closed: it is fixed by
the schema at creation and never grows or shrinks afterwards.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from .schemas import OptionSpec

logger = logging.getLogger(__name__)


class OptionState:
    """Ordered mapping of option key -> live option entry."""

    def __init__(self, entries: Iterable[OptionSpec] = ()):
        self._entries: dict[str, OptionSpec] = {}
        for entry in entries:
            if entry.key in self._entries:
                raise ValueError(f"Duplicate option key: {entry.key}")
            self._entries[entry.key] = entry

    @classmethod
    def from_schema(cls, schema: Iterable[OptionSpec]) -> "OptionState":
        """Build a fresh state holding every schema entry at its default."""
        return cls(spec.model_copy(update={"value": spec.default}) for spec in schema)

    def get(self, key: str) -> Optional[OptionSpec]:
        return self._entries.get(key)

    def set(self, key: str, new_value: Any) -> bool:
        """Replace the live value of ``key``.

        Unknown keys are ignored and return False. A value of the wrong
        type raises ValueError and leaves the state untouched.
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Ignoring unknown option key: {key}")
            return False
        self._entries[key] = entry.with_value(new_value)
        return True

    def value(self, key: str, fallback: Any = None) -> Any:
        """Live value of ``key``, or ``fallback`` when the key is absent.

        Keys in the schema always resolve to a value of their kind (the
        default while unset), so ``None`` only comes back for a key outside
        the schema read without a fallback.
        """
        entry = self._entries.get(key)
        if entry is None:
            return fallback
        return entry.current

    def values(self) -> list[OptionSpec]:
        return list(self._entries.values())

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def as_dict(self) -> dict[str, Any]:
        return {key: entry.current for key, entry in self._entries.items()}

    def copy(self) -> "OptionState":
        # Entries are frozen, so sharing them between copies is safe
        return OptionState(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionState):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"OptionState({self.as_dict()!r})"
