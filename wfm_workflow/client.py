"""Workflow client that forwards operations over a request bus."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

from .bus import RequestBus
from .config import ClientConfig, load_config
from .constants import (
    RESULTS_ENTITY_NAME,
    USERS_ENTITY_NAME,
    WORKFLOW_ENTITY_NAME,
    WORKORDER_ENTITY_NAME,
    Operation,
    WorkorderStatus,
)
from .contracts import (
    BusRequest,
    Record,
    Result,
    StatusReview,
    Step,
    UserProfile,
    Workflow,
    Workorder,
)
from .status import check_status, step_review

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)
RecordInput = Union[Record, Dict[str, Any]]


def _new_correlation_id() -> str:
    return str(uuid.uuid4())


def _as_payload(item: RecordInput) -> Dict[str, Any]:
    if isinstance(item, Record):
        return item.to_payload()
    return dict(item)


def _as_model(model: Type[RecordT], raw: Any) -> Optional[RecordT]:
    if raw is None:
        return None
    if isinstance(raw, model):
        return raw
    return model.model_validate(raw)


def _as_models(model: Type[RecordT], raw: Any) -> List[RecordT]:
    return [_as_model(model, item) for item in raw or [] if item is not None]


class WorkflowClient:
    """Client for workflows, workorders, results and the user profile.

    Every operation is sent through ``bus`` as a :class:`BusRequest`. Failures
    raised by the bus propagate to the caller unchanged.
    """

    def __init__(self, bus: RequestBus, config: ClientConfig | None = None) -> None:
        self._bus = bus
        self.config = config or load_config()

    async def _send(
        self,
        entity: str,
        operation: Operation,
        payload: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ) -> Any:
        prefix = (
            self.config.sync_topic_prefix
            if entity == WORKFLOW_ENTITY_NAME
            else self.config.topic_prefix
        )
        request = BusRequest(
            prefix=prefix,
            entity=entity,
            operation=operation,
            payload=payload or {},
            correlation_id=correlation_id,
            options=self.config.options,
        )
        logger.debug(
            f"Sending {request.topic} for correlation_id={correlation_id}"
        )
        try:
            return await self._bus.send(request)
        except Exception as e:
            logger.error(
                f"Request {request.topic} failed for correlation_id={correlation_id}: {e}"
            )
            raise

    # ------------------------------------------------------------------
    # Workflows

    async def list_workflows(self) -> List[Workflow]:
        reply = await self._send(WORKFLOW_ENTITY_NAME, Operation.LIST)
        return _as_models(Workflow, reply)

    async def create_workflow(self, workflow: RecordInput) -> Optional[Workflow]:
        payload = {"itemToCreate": _as_payload(workflow)}
        reply = await self._send(
            WORKFLOW_ENTITY_NAME, Operation.CREATE, payload, _new_correlation_id()
        )
        return _as_model(Workflow, reply)

    async def read_workflow(self, workflow_id: str) -> Optional[Workflow]:
        reply = await self._send(
            WORKFLOW_ENTITY_NAME, Operation.READ, {"id": workflow_id}, workflow_id
        )
        return _as_model(Workflow, reply)

    async def update_workflow(self, workflow: RecordInput) -> Optional[Workflow]:
        """Update a workflow; its ``id`` doubles as the correlation id."""
        payload = _as_payload(workflow)
        reply = await self._send(
            WORKFLOW_ENTITY_NAME,
            Operation.UPDATE,
            {"itemToUpdate": payload},
            payload.get("id"),
        )
        return _as_model(Workflow, reply)

    async def remove_workflow(self, workflow: RecordInput) -> Any:
        workflow_id = _as_payload(workflow).get("id")
        return await self._send(
            WORKFLOW_ENTITY_NAME, Operation.REMOVE, {"id": workflow_id}, workflow_id
        )

    # ------------------------------------------------------------------
    # Results

    async def list_results(self) -> List[Result]:
        reply = await self._send(RESULTS_ENTITY_NAME, Operation.LIST)
        return _as_models(Result, reply)

    async def create_result(self, result: RecordInput) -> Optional[Result]:
        payload = {"resultToCreate": _as_payload(result)}
        reply = await self._send(
            RESULTS_ENTITY_NAME, Operation.CREATE, payload, _new_correlation_id()
        )
        created = _as_model(Result, reply)
        logger.info(
            f"Created result for workorder_id={created.workorder_id if created else None}"
        )
        return created

    async def update_result(self, result: RecordInput) -> Optional[Result]:
        payload = {"resultToUpdate": _as_payload(result)}
        reply = await self._send(
            RESULTS_ENTITY_NAME, Operation.UPDATE, payload, _new_correlation_id()
        )
        return _as_model(Result, reply)

    async def create_new_result(self, workorder_id: str) -> Optional[Result]:
        """Create an empty result for ``workorder_id``."""
        return await self.create_result(
            Result(
                status=WorkorderStatus.NEW.value,
                next_step_index=0,
                workorder_id=workorder_id,
                step_results={},
            )
        )

    async def get_result_by_workorder_id(self, workorder_id: str) -> Optional[Result]:
        """Return the first listed result for ``workorder_id`` or ``None``."""
        results = await self.list_results()
        return next((r for r in results if r.workorder_id == workorder_id), None)

    # ------------------------------------------------------------------
    # Workorders and users

    async def list_workorders(self) -> List[Workorder]:
        reply = await self._send(WORKORDER_ENTITY_NAME, Operation.LIST)
        return _as_models(Workorder, reply)

    async def read_workorder(self, workorder_id: str) -> Optional[Workorder]:
        reply = await self._send(
            WORKORDER_ENTITY_NAME, Operation.READ, {"id": workorder_id}, workorder_id
        )
        return _as_model(Workorder, reply)

    async def read_user_profile(self) -> Optional[UserProfile]:
        reply = await self._send(USERS_ENTITY_NAME, Operation.READ_PROFILE)
        return _as_model(UserProfile, reply)

    # ------------------------------------------------------------------
    # Composites

    async def get_workorder_summary(
        self, workorder_id: str
    ) -> Tuple[Workorder, Optional[Workflow], Optional[Result]]:
        """Fetch a workorder together with its workflow and result.

        The workflow and result are fetched concurrently once the workorder
        is known. Raises ``LookupError`` when the workorder is missing or has
        no workflow, without sending the dependent requests.
        """
        workorder = await self.read_workorder(workorder_id)
        if workorder is None:
            raise LookupError(f"Workorder not found: {workorder_id}")
        if workorder.workflow_id is None:
            raise LookupError(f"Workorder {workorder_id} has no workflow")
        workflow, result = await asyncio.gather(
            self.read_workflow(workorder.workflow_id),
            self.get_result_by_workorder_id(workorder_id),
        )
        logger.info(f"Fetched summary for workorder_id={workorder_id}")
        return workorder, workflow, result

    async def get_workorder_status(self, workorder_id: str) -> WorkorderStatus:
        """Fetch the summary for ``workorder_id`` and derive its status."""
        workorder, workflow, result = await self.get_workorder_summary(workorder_id)
        if workflow is None:
            raise LookupError(f"Workflow not found: {workorder.workflow_id}")
        return check_status(workorder, workflow, result)

    # ------------------------------------------------------------------
    # Status

    def step_review(
        self, steps: List[Step], result: Optional[Result]
    ) -> StatusReview:
        return step_review(steps, result)

    def check_status(
        self, workorder: Workorder, workflow: Workflow, result: Optional[Result]
    ) -> WorkorderStatus:
        return check_status(workorder, workflow, result)
