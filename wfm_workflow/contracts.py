"""Data contracts exchanged with the workflow request bus."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .constants import Operation, ReviewStage


class Record(BaseModel):
    """Base for records owned by the bus.

    Accepts camelCase keys as sent over the wire as well as field names, and
    keeps any fields this package does not model. Numeric identifiers are
    read as strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the camelCase form expected by the bus."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Step(Record):
    """One ordered stage of a workflow."""

    code: str
    name: Optional[str] = None


class Workflow(Record):
    id: Optional[str] = None
    title: Optional[str] = None
    steps: List[Step] = Field(default_factory=list)


class StepResult(Record):
    """Outcome recorded for a single step, keyed by step code."""

    status: str


class Result(Record):
    """Recorded progress of a workorder through its workflow."""

    id: Optional[str] = None
    workorder_id: Optional[str] = None
    status: Optional[str] = None
    next_step_index: int = 0
    step_results: Dict[str, StepResult] = Field(default_factory=dict)


class Workorder(Record):
    id: Optional[str] = None
    workflow_id: Optional[str] = None
    assignee: Optional[Union[str, int]] = None


class UserProfile(Record):
    id: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None


class StatusReview(BaseModel):
    """Outcome of reviewing a result against its workflow steps.

    ``next_step_index`` is ``0`` both before any result is recorded and when
    the first step is the next incomplete one; ``started`` tells them apart.
    """

    next_step_index: int = 0
    complete: bool = False
    started: bool = True

    @property
    def stage(self) -> ReviewStage:
        if self.complete:
            return ReviewStage.COMPLETE
        if not self.started:
            return ReviewStage.NOT_STARTED
        return ReviewStage.IN_PROGRESS


class BusRequest(BaseModel):
    """Request descriptor handed to the bus for a single operation."""

    prefix: str
    entity: str
    operation: Operation
    payload: Dict[str, Any] = Field(default_factory=dict)
    correlation_id: Optional[str] = None
    options: Dict[str, Any] = Field(default_factory=dict)

    @property
    def topic(self) -> str:
        return f"{self.prefix}:{self.entity}:{self.operation.value}"
