"""
File: tests/core/test_message_manager.py
----------------------------------------
MessageManager: duplicate suppression, bounded concurrency, isolation of
failing messages and draining a transport.
"""

import asyncio

import pytest

from wabot_core import metrics
from wabot_core.dispatcher import DispatchResult, Outcome
from wabot_core.message_manager import MessageManager
from tests.fakes.fake_chat import FakeTransport, make_message


class _CountingDispatcher:
    def __init__(self, delay: float = 0.0, fail_on: str | None = None):
        self.delay = delay
        self.fail_on = fail_on
        self.active = 0
        self.peak = 0
        self.handled: list[str] = []

    async def handle(self, message):
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            if message.text == self.fail_on:
                raise RuntimeError("dispatch exploded")
            self.handled.append(message.text)
            return DispatchResult(Outcome.REPLIED)
        finally:
            self.active -= 1


@pytest.mark.asyncio
async def test_duplicate_ids_are_dropped():
    dispatcher = _CountingDispatcher()
    manager = MessageManager(dispatcher)
    first = await manager.process_message(make_message(".a", id="m1"))
    second = await manager.process_message(make_message(".a", id="m1"))
    third = await manager.process_message(make_message(".b", id=None))
    assert first.outcome is Outcome.REPLIED
    assert second is None
    assert third is not None
    assert dispatcher.handled == [".a", ".b"]


def test_seen_set_is_bounded():
    manager = MessageManager(_CountingDispatcher(), seen_limit=3)
    for i in range(3):
        assert not manager.is_duplicate(make_message("x", id=f"id{i}"))
    assert manager.is_duplicate(make_message("x", id="id0"))
    assert not manager.is_duplicate(make_message("x", id="id3"))
    assert not manager.is_duplicate(make_message("x", id="id0"))


@pytest.mark.asyncio
async def test_concurrency_is_bounded():
    dispatcher = _CountingDispatcher(delay=0.02)
    manager = MessageManager(dispatcher, max_concurrent=2)
    transport = FakeTransport([make_message(f".m{i}", id=str(i)) for i in range(8)])
    await manager.run(transport)
    assert len(dispatcher.handled) == 8
    assert dispatcher.peak <= 2
    assert manager.in_flight == 0


@pytest.mark.asyncio
async def test_failing_message_does_not_stop_others(caplog):
    dispatcher = _CountingDispatcher(fail_on=".bad")
    manager = MessageManager(dispatcher)
    transport = FakeTransport([make_message(".ok1", id="1"), make_message(".bad", id="2"), make_message(".ok2", id="3")])
    await manager.run(transport)
    assert sorted(dispatcher.handled) == [".ok1", ".ok2"]
    assert "dispatch exploded" in caplog.text


@pytest.mark.asyncio
async def test_message_counter_increments():
    before = metrics.messages_processed
    manager = MessageManager(_CountingDispatcher())
    await manager.process_message(make_message(".x", id="count-1"))
    assert metrics.messages_processed == before + 1


@pytest.mark.asyncio
async def test_end_to_end_with_real_dispatcher(dispatcher, transport):
    manager = MessageManager(dispatcher)
    transport.inbound = [make_message(".runtime", id="r1"), make_message("hi", id="r2"), make_message(".runtime", id="r1")]
    await manager.run(transport)
    assert len(transport.sent) == 1
    assert transport.sent[0][1].startswith("*Runtime Info*")

# End of tests/core/test_message_manager.py
