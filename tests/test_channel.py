# tests/test_channel.py
import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codesum.core.channel import ChannelClosed, open_channel

@pytest.mark.asyncio
async def test_drains_buffered_items_after_close():
    tx, rx = open_channel()
    tx.send("a")
    tx.send("b")
    tx.close()

    # Closure only becomes visible once the buffer is empty
    assert rx.closed
    assert await rx.recv() == "a"
    assert await rx.recv() == "b"
    with pytest.raises(ChannelClosed):
        await rx.recv()

@pytest.mark.asyncio
async def test_async_iteration_stops_on_close():
    tx, rx = open_channel()
    with tx:
        for i in range(5):
            tx.send(i)

    assert [item async for item in rx] == [0, 1, 2, 3, 4]

@pytest.mark.asyncio
async def test_waiting_receiver_gets_later_item():
    tx, rx = open_channel()
    pending = asyncio.create_task(rx.recv())
    await asyncio.sleep(0)
    assert not pending.done()

    tx.send("late")
    assert await asyncio.wait_for(pending, timeout=1) == "late"

@pytest.mark.asyncio
async def test_close_wakes_every_waiting_receiver():
    tx, rx = open_channel()
    waiters = [asyncio.create_task(rx.recv()) for _ in range(3)]
    await asyncio.sleep(0)

    tx.close()
    results = await asyncio.wait_for(asyncio.gather(*waiters, return_exceptions=True), timeout=1)
    assert all(isinstance(r, ChannelClosed) for r in results)

@pytest.mark.asyncio
async def test_channel_stays_open_while_a_clone_is_alive():
    tx, rx = open_channel()
    clone = tx.clone()
    tx.close()
    assert not rx.closed

    clone.send("from clone")
    clone.close()
    assert rx.closed
    assert [item async for item in rx] == ["from clone"]

@pytest.mark.asyncio
async def test_close_is_idempotent_per_handle():
    tx, rx = open_channel()
    clone = tx.clone()
    tx.close()
    tx.close()
    assert not rx.closed
    clone.close()
    assert rx.closed

@pytest.mark.asyncio
async def test_send_after_close_raises():
    tx, _ = open_channel()
    tx.close()
    with pytest.raises(ChannelClosed):
        tx.send("too late")
    with pytest.raises(ChannelClosed):
        tx.clone()

@pytest.mark.asyncio
async def test_many_consumers_receive_each_item_once():
    tx, rx = open_channel()
    seen = []

    async def consume():
        async for item in rx:
            seen.append(item)
            await asyncio.sleep(0)

    consumers = [asyncio.create_task(consume()) for _ in range(4)]
    producers = [tx.clone() for _ in range(3)]
    tx.close()
    for n, producer in enumerate(producers):
        with producer:
            for i in range(10):
                producer.send((n, i))

    await asyncio.wait_for(asyncio.gather(*consumers), timeout=1)
    assert sorted(seen) == [(n, i) for n in range(3) for i in range(10)]

@pytest.mark.asyncio
async def test_cancelled_receiver_does_not_lose_items():
    tx, rx = open_channel()
    cancelled = asyncio.create_task(rx.recv())
    survivor = asyncio.create_task(rx.recv())
    await asyncio.sleep(0)

    cancelled.cancel()
    tx.send("kept")
    assert await asyncio.wait_for(survivor, timeout=1) == "kept"
    with pytest.raises(asyncio.CancelledError):
        await cancelled
