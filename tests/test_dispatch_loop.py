import asyncio

import pytest

from caresync.services.reminder_dispatcher import DispatchReport
from caresync.workers.dispatch_loop import DispatchLoop


class CountingDispatcher:
    def __init__(self, fail: bool = False):
        self.ticks = 0
        self.fail = fail

    async def run_tick(self, now=None):
        self.ticks += 1
        if self.fail:
            raise RuntimeError("tick exploded")
        return DispatchReport()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        DispatchLoop(CountingDispatcher(), interval_seconds=0)


@pytest.mark.asyncio
async def test_loop_ticks_until_stopped():
    dispatcher = CountingDispatcher()
    loop = DispatchLoop(dispatcher, interval_seconds=0.01)

    loop.start()
    assert loop.running
    await asyncio.sleep(0.08)
    await loop.stop()

    assert not loop.running
    assert dispatcher.ticks >= 2
    ticks = dispatcher.ticks
    await asyncio.sleep(0.03)
    assert dispatcher.ticks == ticks


@pytest.mark.asyncio
async def test_loop_survives_crashing_tick():
    dispatcher = CountingDispatcher(fail=True)
    loop = DispatchLoop(dispatcher, interval_seconds=0.01)

    loop.start()
    await asyncio.sleep(0.05)
    assert loop.running
    await loop.stop()

    assert dispatcher.ticks >= 2


@pytest.mark.asyncio
async def test_start_twice_keeps_single_task():
    dispatcher = CountingDispatcher()
    loop = DispatchLoop(dispatcher, interval_seconds=10)

    loop.start()
    first_task = loop._task
    loop.start()
    assert loop._task is first_task
    await loop.stop()
    await loop.stop()
