"""Status derivation for workorders."""

from __future__ import annotations

from typing import Optional, Sequence

from .constants import StepStatus, WorkorderStatus
from .contracts import Result, StatusReview, Step, Workflow, Workorder


def step_review(steps: Sequence[Step], result: Optional[Result]) -> StatusReview:
    """Find the next incomplete step of ``steps`` according to ``result``.

    Without a result, or with no step results recorded, the first step is the
    next step. When every step has a complete entry the review is complete and
    ``next_step_index`` is ``len(steps)``. A step counts as complete only when
    its status equals ``StepStatus.COMPLETE`` exactly (case-sensitive).
    """
    if result is None or not result.step_results:
        return StatusReview(next_step_index=0, complete=False, started=False)

    for index, step in enumerate(steps):
        entry = result.step_results.get(step.code)
        if entry is None or entry.status != StepStatus.COMPLETE:
            return StatusReview(next_step_index=index, complete=False)

    return StatusReview(next_step_index=len(steps), complete=True)


def check_status(
    workorder: Workorder, workflow: Workflow, result: Optional[Result]
) -> WorkorderStatus:
    """Derive the display status of ``workorder``.

    Completion takes precedence over assignment, so a fully complete
    workorder reports ``COMPLETE`` even when unassigned.
    """
    review = step_review(workflow.steps, result)
    if review.next_step_index >= len(workflow.steps) - 1 and review.complete:
        return WorkorderStatus.COMPLETE
    if not workorder.assignee:
        return WorkorderStatus.UNASSIGNED
    # step_review never yields a negative index
    if review.next_step_index < 0:
        return WorkorderStatus.NEW
    return WorkorderStatus.PENDING
