"""Transform definitions, registry and execution.

Provides the catalog of named text transforms, the registry that serves it
in display order, and the executor that turns every invocation into a
uniform success/failure result.
"""

from ptools.transforms.executor import TransformExecutor, get_transform_executor
from ptools.transforms.registry import TransformRegistry, get_transform_registry
from ptools.transforms.schemas import (
    TransformDefinition,
    TransformDetail,
    TransformResult,
    TransformSummary,
)

__all__ = [
    "TransformDefinition",
    "TransformDetail",
    "TransformExecutor",
    "TransformRegistry",
    "TransformResult",
    "TransformSummary",
    "get_transform_executor",
    "get_transform_registry",
]
