"""In-memory request bus tests."""

import pytest

from wfm_workflow.bus import InMemoryRequestBus
from wfm_workflow.constants import Operation
from wfm_workflow.contracts import BusRequest


@pytest.mark.asyncio
async def test_inmemory_bus_dispatches_sync_and_async_handlers():
    bus = InMemoryRequestBus()

    async def read(request):
        return {"id": request.payload["id"]}

    bus.register("wfm", "workorders", Operation.LIST, lambda request: [{"id": "wo-1"}])
    bus.register("wfm", "workorders", Operation.READ, read)

    listed = await bus.send(
        BusRequest(prefix="wfm", entity="workorders", operation=Operation.LIST)
    )
    read_reply = await bus.send(
        BusRequest(
            prefix="wfm",
            entity="workorders",
            operation=Operation.READ,
            payload={"id": "wo-2"},
            correlation_id="wo-2",
        )
    )

    assert listed == [{"id": "wo-1"}]
    assert read_reply == {"id": "wo-2"}
    assert [r.topic for r in bus.sent] == ["wfm:workorders:list", "wfm:workorders:read"]


@pytest.mark.asyncio
async def test_inmemory_bus_unknown_topic():
    bus = InMemoryRequestBus()
    request = BusRequest(prefix="wfm", entity="users", operation=Operation.READ_PROFILE)

    with pytest.raises(LookupError, match="wfm:users:read_profile"):
        await bus.send(request)
    assert bus.sent == [request]


@pytest.mark.asyncio
async def test_inmemory_bus_propagates_handler_errors():
    bus = InMemoryRequestBus()

    def fail(request):
        raise RuntimeError("storage offline")

    bus.register("wfm", "results", "list", fail)

    with pytest.raises(RuntimeError, match="storage offline"):
        await bus.send(
            BusRequest(prefix="wfm", entity="results", operation=Operation.LIST)
        )
