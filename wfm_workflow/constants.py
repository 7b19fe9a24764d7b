"""Constants shared across the workflow client."""

from __future__ import annotations

from enum import Enum

TOPIC_PREFIX = "wfm"
SYNC_TOPIC_PREFIX = "wfm:sync"

WORKFLOW_ENTITY_NAME = "workflows"
WORKORDER_ENTITY_NAME = "workorders"
RESULTS_ENTITY_NAME = "results"
USERS_ENTITY_NAME = "users"


class Operation(str, Enum):
    """Request names understood by the bus for each entity."""

    LIST = "list"
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    REMOVE = "remove"
    READ_PROFILE = "read_profile"


class StepStatus(str, Enum):
    """Status recorded against a single step of a result."""

    COMPLETE = "complete"
    PENDING = "pending"


class WorkorderStatus(str, Enum):
    """Display status derived for a workorder."""

    NEW = "New"
    UNASSIGNED = "Unassigned"
    PENDING = "In Progress"
    COMPLETE = "Complete"


class ReviewStage(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
