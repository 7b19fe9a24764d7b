"""Request bus abstraction used by the workflow client."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, List, Protocol, Tuple

from .constants import Operation
from .contracts import BusRequest

logger = logging.getLogger(__name__)

Handler = Callable[[BusRequest], Any]


class RequestBus(Protocol):
    """Protocol for request/response buses the client sends through.

    Implementations own topic naming, transport, correlation and timeouts.
    """

    async def send(self, request: BusRequest) -> Any:
        """Deliver ``request`` and return the eventual reply."""


class InMemoryRequestBus(RequestBus):
    """Dispatch requests to handlers registered in the current process.

    Useful for tests or for wiring the client directly to local data.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[str, str, Operation], Handler] = {}
        self.sent: List[BusRequest] = []

    def register(
        self, prefix: str, entity: str, operation: Operation, handler: Handler
    ) -> None:
        """Route requests for ``prefix``/``entity``/``operation`` to ``handler``.

        ``handler`` receives the :class:`BusRequest` and may be a plain
        function or a coroutine function.
        """
        self._handlers[(prefix, entity, Operation(operation))] = handler

    async def send(self, request: BusRequest) -> Any:
        self.sent.append(request)
        handler = self._handlers.get(
            (request.prefix, request.entity, request.operation)
        )
        if handler is None:
            raise LookupError(f"No handler registered for topic: {request.topic}")

        logger.debug(
            f"Handling {request.topic} for correlation_id={request.correlation_id}"
        )
        reply = handler(request)
        if inspect.isawaitable(reply):
            reply = await reply
        return reply
