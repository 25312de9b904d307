# src/codesum/core/channel.py
"""Closeable multi-producer/multi-consumer queue for the concurrent pipeline.

A channel is closed when every producer handle has been closed. Consumers
keep receiving buffered items after that and only then see ``ChannelClosed``;
closure is the only end-of-stream signal, no marker value travels through
the queue.
"""
import asyncio
from collections import deque
from typing import Deque, Generic, Tuple, TypeVar

T = TypeVar("T")

class ChannelClosed(Exception):
    """Raised on receive from a closed, drained channel, or on send to a closed one."""

class _Channel(Generic[T]):
    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._getters: Deque[asyncio.Future] = deque()
        self._producers = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._items)

    def _wakeup_next(self) -> None:
        while self._getters:
            waiter = self._getters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return

    def _wakeup_all(self) -> None:
        while self._getters:
            waiter = self._getters.popleft()
            if not waiter.done():
                waiter.set_result(None)

    def add_producer(self) -> None:
        if self._closed:
            raise ChannelClosed("channel is closed")
        self._producers += 1

    def release_producer(self) -> None:
        self._producers -= 1
        if self._producers == 0:
            self._closed = True
            self._wakeup_all()

    def put(self, item: T) -> None:
        if self._closed:
            raise ChannelClosed("channel is closed")
        self._items.append(item)
        self._wakeup_next()

    async def get(self) -> T:
        while not self._items:
            if self._closed:
                raise ChannelClosed("channel is closed")
            waiter = asyncio.get_running_loop().create_future()
            self._getters.append(waiter)
            try:
                await waiter
            except asyncio.CancelledError:
                waiter.cancel()
                try:
                    self._getters.remove(waiter)
                except ValueError:
                    pass
                # A wakeup meant for us must not be lost
                if self._items and not waiter.cancelled():
                    self._wakeup_next()
                raise
        item = self._items.popleft()
        if self._items:
            self._wakeup_next()
        return item

class Sender(Generic[T]):
    """One producer handle. The channel closes when its last sender closes."""

    def __init__(self, channel: _Channel[T]) -> None:
        channel.add_producer()
        self._channel = channel
        self._open = True

    def send(self, item: T) -> None:
        """Enqueue ``item``; never blocks since channels are unbounded."""
        if not self._open:
            raise ChannelClosed("sender is closed")
        self._channel.put(item)

    def clone(self) -> "Sender[T]":
        return Sender(self._channel)

    def close(self) -> None:
        if self._open:
            self._open = False
            self._channel.release_producer()

    def __enter__(self) -> "Sender[T]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

class Receiver(Generic[T]):
    """Consumer side. Several tasks may await the same receiver."""

    def __init__(self, channel: _Channel[T]) -> None:
        self._channel = channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def __len__(self) -> int:
        return len(self._channel)

    async def recv(self) -> T:
        return await self._channel.get()

    def __aiter__(self) -> "Receiver[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self._channel.get()
        except ChannelClosed:
            raise StopAsyncIteration from None

def open_channel() -> Tuple[Sender, Receiver]:
    """Create an unbounded channel and return its first sender and its receiver."""
    channel: _Channel = _Channel()
    return Sender(channel), Receiver(channel)
