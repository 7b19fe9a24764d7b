"""wfm-workflow: workflow client over a shared request bus."""

from .bus import InMemoryRequestBus, RequestBus
from .client import WorkflowClient
from .config import ClientConfig, load_config
from .constants import Operation, ReviewStage, StepStatus, WorkorderStatus
from .contracts import (
    BusRequest,
    Result,
    StatusReview,
    Step,
    StepResult,
    UserProfile,
    Workflow,
    Workorder,
)
from .status import check_status, step_review

__version__ = "0.1.0"
__all__ = [
    "BusRequest",
    "ClientConfig",
    "InMemoryRequestBus",
    "Operation",
    "RequestBus",
    "Result",
    "ReviewStage",
    "StatusReview",
    "Step",
    "StepResult",
    "StepStatus",
    "UserProfile",
    "Workflow",
    "WorkflowClient",
    "Workorder",
    "WorkorderStatus",
    "check_status",
    "load_config",
    "step_review",
]
