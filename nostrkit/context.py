"""Cancellation contexts with deadlines and parent propagation."""

from __future__ import annotations

import threading
import time
from datetime import datetime
from typing import Callable

from .channel import Channel, ChannelClosed

CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"

_POLL_INTERVAL = 0.01


def _as_timestamp(deadline: float | datetime | None) -> float | None:
    if deadline is None:
        return None
    if isinstance(deadline, datetime):
        return deadline.timestamp()
    return float(deadline)


class Context:
    """A cancellation signal that may carry a deadline and follow a parent."""

    def __init__(
        self,
        parent: Context | None = None,
        deadline: float | datetime | None = None,
    ) -> None:
        self._parent = parent
        self._deadline = _as_timestamp(deadline)
        self._cond = threading.Condition(threading.RLock())
        self._done = Channel(1)
        self._err: str | None = None
        self._children: list[Context] = []
        self._timer: threading.Timer | None = None
        if parent is not None:
            parent._attach(self)
        if self._deadline is not None and self._err is None:
            delay = self._deadline - time.time()
            if delay < 0:
                self._cancel(DEADLINE_EXCEEDED)
            else:
                self._timer = threading.Timer(delay, self._cancel, args=(DEADLINE_EXCEEDED,))
                self._timer.daemon = True
                self._timer.start()

    def _attach(self, child: Context) -> None:
        with self._cond:
            err = self._err
            if err is None:
                self._children.append(child)
                return
        child._cancel(err)

    def _cancel(self, message: str) -> None:
        with self._cond:
            if self._err is not None:
                return
            self._err = message
            children, self._children = self._children, []
            timer, self._timer = self._timer, None
            self._cond.notify_all()
        if timer is not None:
            timer.cancel()
        try:
            self._done.send(None)
            self._done.close()
        except ChannelClosed:
            pass
        for child in children:
            child._cancel(message)

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._cancel(CANCELED)

    def is_canceled(self) -> bool:
        """Return True once canceled, past the deadline, or the parent is canceled."""
        if self._err is not None:
            return True
        if self._deadline is not None and time.time() > self._deadline:
            self._cancel(DEADLINE_EXCEEDED)
            return True
        if self._parent is not None and self._parent.is_canceled():
            self._cancel(self._parent.err() or CANCELED)
            return True
        return False

    def wait(self, timeout: float | None = None) -> bool:
        """Block until canceled; return False if ``timeout`` seconds pass first."""
        end = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self.is_canceled():
                slice_ = _POLL_INTERVAL
                if end is not None:
                    remaining = end - time.monotonic()
                    if remaining <= 0:
                        return False
                    slice_ = min(slice_, remaining)
                self._cond.wait(slice_)
            return True

    def done(self) -> Channel:
        """A channel that yields one item and closes when the context is canceled."""
        return self._done

    def err(self) -> str | None:
        """The reason for cancellation, or None while the context is live."""
        self.is_canceled()
        return self._err


def background() -> Context:
    """A root context with no deadline and no parent."""
    return Context()


def with_deadline(parent: Context | None, deadline: float | datetime) -> Context:
    """A child of ``parent`` that cancels itself once ``deadline`` (epoch seconds or datetime) passes."""
    return Context(parent, deadline)


def with_cancel(parent: Context | None) -> tuple[Context, Callable[[], None]]:
    """A child of ``parent`` together with the function that cancels it."""
    ctx = Context(parent)
    return ctx, ctx.cancel