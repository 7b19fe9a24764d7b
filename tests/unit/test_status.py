"""Status engine tests."""

import pytest

from wfm_workflow.constants import ReviewStage, StepStatus, WorkorderStatus
from wfm_workflow.contracts import Result, Step, Workflow, Workorder
from wfm_workflow.status import check_status, step_review

STEPS = [Step(code="a"), Step(code="b")]
WORKFLOW = Workflow(id="wf-1", steps=STEPS)


def _result(**statuses: str) -> Result:
    return Result.model_validate(
        {"stepResults": {code: {"status": s} for code, s in statuses.items()}}
    )


def test_review_without_result_is_not_started():
    review = step_review([], None)
    assert review.next_step_index == 0
    assert review.complete is False
    assert review.stage == ReviewStage.NOT_STARTED


def test_review_with_empty_step_results_is_not_started():
    review = step_review(STEPS, Result(workorder_id="wo-1"))
    assert (review.next_step_index, review.complete) == (0, False)
    assert review.stage == ReviewStage.NOT_STARTED


def test_review_finds_first_incomplete_step():
    review = step_review(STEPS, _result(a=StepStatus.COMPLETE.value))
    assert (review.next_step_index, review.complete) == (1, False)
    assert review.stage == ReviewStage.IN_PROGRESS


def test_review_all_steps_complete():
    review = step_review(
        STEPS, _result(a=StepStatus.COMPLETE.value, b=StepStatus.COMPLETE.value)
    )
    assert (review.next_step_index, review.complete) == (2, True)
    assert review.stage == ReviewStage.COMPLETE


def test_review_pending_first_step_is_in_progress():
    review = step_review(STEPS, _result(a=StepStatus.PENDING.value))
    assert (review.next_step_index, review.complete) == (0, False)
    assert review.stage == ReviewStage.IN_PROGRESS


def test_review_skips_nothing_after_gap():
    # "b" complete but "a" missing: "a" is still next
    review = step_review(STEPS, _result(b=StepStatus.COMPLETE.value))
    assert review.next_step_index == 0
    assert review.complete is False


def test_review_empty_steps_with_results_is_complete():
    review = step_review([], _result(a=StepStatus.COMPLETE.value))
    assert (review.next_step_index, review.complete) == (0, True)


@pytest.mark.parametrize("assignee", [None, "", "user-1"])
def test_complete_regardless_of_assignee(assignee):
    result = _result(a=StepStatus.COMPLETE.value, b=StepStatus.COMPLETE.value)
    status = check_status(Workorder(assignee=assignee), WORKFLOW, result)
    assert status == WorkorderStatus.COMPLETE


def test_unassigned_when_partially_complete():
    status = check_status(
        Workorder(), WORKFLOW, _result(a=StepStatus.COMPLETE.value)
    )
    assert status == WorkorderStatus.UNASSIGNED


def test_unassigned_without_result():
    assert check_status(Workorder(), WORKFLOW, None) == WorkorderStatus.UNASSIGNED


def test_pending_when_assigned_and_in_progress():
    status = check_status(
        Workorder(assignee="user-1"), WORKFLOW, _result(a=StepStatus.COMPLETE.value)
    )
    assert status == WorkorderStatus.PENDING
    assert status.value == "In Progress"


def test_pending_when_assigned_and_not_started():
    status = check_status(Workorder(assignee="user-1"), WORKFLOW, None)
    assert status == WorkorderStatus.PENDING


def test_empty_workflow_with_results_is_complete():
    status = check_status(
        Workorder(), Workflow(steps=[]), _result(x=StepStatus.COMPLETE.value)
    )
    assert status == WorkorderStatus.COMPLETE


def test_review_step_status_is_case_sensitive():
    review = step_review(STEPS, _result(a="COMPLETE", b="COMPLETE"))
    assert (review.next_step_index, review.complete) == (0, False)
