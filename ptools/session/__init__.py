"""Live transform sessions: shared buffer, recompute and chaining."""

from ptools.session.buffer import SharedBuffer
from ptools.session.controller import TransformInstance
from ptools.session.coordinator import ChainingCoordinator
from ptools.session.schemas import InstanceStatus, InstanceView
from ptools.session.workspace import ToolSession

__all__ = [
    "ChainingCoordinator",
    "InstanceStatus",
    "InstanceView",
    "SharedBuffer",
    "ToolSession",
    "TransformInstance",
]
