import asyncio
import pytest
from concierge.core.bus import Bus
from concierge.core.contracts import ChatAnswered

@pytest.mark.asyncio
async def test_publish_subscribe():
    bus = Bus()
    got = []

    async def handler(evt):
        got.append(evt["x"])

    bus.subscribe("demo", handler)
    await bus.publish("demo", {"x": 1})
    await asyncio.sleep(0.01)
    assert got == [1]

@pytest.mark.asyncio
async def test_subscriber_error_is_contained():
    bus = Bus()
    got = []

    async def broken(evt):
        raise RuntimeError("boom")

    async def handler(evt):
        got.append(evt["message"])

    bus.subscribe("chat.answered", broken)
    bus.subscribe("chat.answered", handler)
    event = ChatAnswered(message="hi", response="hello")
    await bus.publish(event.topic, event.dict())
    assert got == ["hi"]

@pytest.mark.asyncio
async def test_publish_without_subscribers():
    await Bus().publish("nobody.listens", {})

def test_chat_answered_requires_message():
    with pytest.raises(ValueError):
        ChatAnswered(message="")
