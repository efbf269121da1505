"""A bounded, thread-safe channel with close semantics."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Iterator

_POLL_INTERVAL = 0.01


class ChannelClosed(Exception):
    """Raised when sending on a closed channel or receiving from a drained closed one."""


class Canceled(Exception):
    """Raised when a context is canceled while waiting on a channel."""


class Channel:
    """A FIFO buffer of fixed capacity shared between threads."""

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("channel capacity must be at least 1")
        self._capacity = capacity
        self._buffer: deque[Any] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._waiters: set[threading.Event] = set()

    @property
    def capacity(self) -> int:
        return self._capacity

    def _notify(self) -> None:
        self._cond.notify_all()
        for waiter in self._waiters:
            waiter.set()

    @staticmethod
    def _check_ctx(ctx: Any) -> None:
        if ctx is not None and ctx.is_canceled():
            raise Canceled(ctx.err() or "context canceled")

    def send(self, value: Any, ctx: Any = None) -> None:
        """Put ``value`` into the channel, blocking while it is full."""
        with self._cond:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            while len(self._buffer) >= self._capacity and not self._closed:
                self._check_ctx(ctx)
                self._cond.wait(_POLL_INTERVAL if ctx is not None else None)
            if self._closed:
                raise ChannelClosed("send on closed channel")
            self._buffer.append(value)
            self._notify()

    def receive(self, ctx: Any = None) -> Any:
        """Take the oldest value, blocking while the channel is empty and open."""
        with self._cond:
            while not self._buffer and not self._closed:
                self._check_ctx(ctx)
                self._cond.wait(_POLL_INTERVAL if ctx is not None else None)
            if not self._buffer:
                raise ChannelClosed("receive from closed channel")
            value = self._buffer.popleft()
            self._notify()
            return value

    def _try_send(self, value: Any) -> bool:
        with self._cond:
            if self._closed:
                raise ChannelClosed("send on closed channel")
            if len(self._buffer) >= self._capacity:
                return False
            self._buffer.append(value)
            self._notify()
            return True

    def _try_receive(self) -> tuple[bool, Any]:
        with self._cond:
            if self._buffer:
                value = self._buffer.popleft()
                self._notify()
                return True, value
            if self._closed:
                raise ChannelClosed("receive from closed channel")
            return False, None

    def _add_waiter(self, event: threading.Event) -> None:
        with self._cond:
            self._waiters.add(event)

    def _remove_waiter(self, event: threading.Event) -> None:
        with self._cond:
            self._waiters.discard(event)

    def close(self) -> None:
        """Mark the channel closed and wake every blocked sender and receiver."""
        with self._cond:
            if not self._closed:
                self._closed = True
                self._notify()

    def closed(self) -> bool:
        """Return True once the channel has been closed."""
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._buffer)

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return