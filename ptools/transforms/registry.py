"""Transform registry - the ordered catalog of transform definitions.

Follows the same shape as the other registries:
- Lazy loading with _loaded guard
- In-memory dict keyed by transform name
- Global singleton via get_transform_registry()

The catalog is a static registration table (see definitions/__init__.py);
there is no dynamic discovery. Registration order is display order.
"""

import logging
from typing import Optional, Sequence

from .schemas import TransformDefinition, TransformDetail, TransformSummary

logger = logging.getLogger(__name__)


class TransformRegistry:
    """Registry of transform definitions, in registration order."""

    def __init__(self, definitions: Optional[Sequence[TransformDefinition]] = None):
        self._source = definitions
        self._transforms: dict[str, TransformDefinition] = {}
        self._loaded = False

    def load(self) -> None:
        """Register every definition of the catalog."""
        if self._loaded:
            return

        definitions = self._source
        if definitions is None:
            from .definitions import CATALOG

            definitions = CATALOG

        for definition in definitions:
            if definition.name in self._transforms:
                raise ValueError(f"Duplicate transform name: {definition.name}")
            self._transforms[definition.name] = definition
            logger.debug(f"Registered transform: {definition.name}")

        self._loaded = True
        logger.info(f"Loaded {len(self._transforms)} transforms")

    def get(self, name: str) -> Optional[TransformDefinition]:
        """Get a transform by name."""
        self.load()
        return self._transforms.get(name)

    def list_all(self) -> list[TransformDefinition]:
        """List all transforms in display order."""
        self.load()
        return list(self._transforms.values())

    def list_names(self) -> list[str]:
        self.load()
        return list(self._transforms.keys())

    def list_summaries(self) -> list[TransformSummary]:
        self.load()
        return [
            TransformSummary(
                name=t.name,
                description=t.description,
                option_keys=[spec.key for spec in t.option_schema],
            )
            for t in self._transforms.values()
        ]

    def get_detail(self, name: str) -> Optional[TransformDetail]:
        """Definition minus its callable, with its display position."""
        self.load()
        definition = self._transforms.get(name)
        if definition is None:
            return None
        return TransformDetail(
            name=definition.name,
            description=definition.description,
            option_schema=definition.option_schema,
            position=self.list_names().index(name),
        )

    def count(self) -> int:
        """Get total number of transforms."""
        self.load()
        return len(self._transforms)


# Global registry instance
_registry: Optional[TransformRegistry] = None


def get_transform_registry() -> TransformRegistry:
    """Get the global transform registry instance."""
    global _registry
    if _registry is None:
        _registry = TransformRegistry()
        _registry.load()
    return _registry
