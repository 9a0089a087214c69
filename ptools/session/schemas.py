"""Session schemas - instance status and the presentation view."""

from enum import Enum

from pydantic import BaseModel, Field

from ptools.options import OptionSpec
from ptools.transforms.schemas import TransformResult


class InstanceStatus(str, Enum):
    """Recompute state of one mounted transform instance."""

    IDLE = "idle"  # Not mounted, or unmounted
    COMPUTING = "computing"  # An invocation is in flight
    SETTLED_SUCCESS = "settled_success"
    SETTLED_FAILURE = "settled_failure"
    PREVIEW_SUPPRESSED = "preview_suppressed"  # Buffer over the preview limit


class InstanceView(BaseModel):
    """Everything a presentation layer needs to render one transform card."""

    instance_id: str
    name: str
    option_schema: list[OptionSpec] = Field(
        default_factory=list, description="For building input controls"
    )
    options: list[OptionSpec] = Field(
        default_factory=list, description="Current option entries with live values"
    )
    result: TransformResult
    collapsed: bool = False
    preview_enabled: bool = True
    status: InstanceStatus
    can_promote: bool = Field(
        ..., description="False while the displayed result is a failure"
    )

    @property
    def shows_output(self) -> bool:
        """Whether the result pane is open."""
        return self.preview_enabled and not self.collapsed
