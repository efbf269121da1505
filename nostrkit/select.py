"""Waiting on several channel operations at once."""

from __future__ import annotations

import enum
import threading
import time
from dataclasses import dataclass
from typing import Any, Iterable

from .channel import Channel


class SelectOp(enum.Enum):
    SEND = "send"
    RECEIVE = "receive"


@dataclass
class SelectCase:
    """One operation to try: send ``value`` on ``channel``, or receive from it."""

    op: SelectOp
    channel: Channel
    value: Any = None


def select(cases: Iterable[SelectCase], timeout: float | None = None) -> tuple[int, Any]:
    """Perform the first case that can proceed, trying cases in order.

    Returns ``(index, value)``; ``value`` is the received item for a receive
    case and None for a send case. Raises TimeoutError when ``timeout``
    seconds pass with no case ready, and ChannelClosed when a case's
    channel is closed.
    """
    cases = list(cases)
    if not cases:
        raise ValueError("select needs at least one case")
    deadline = None if timeout is None else time.monotonic() + timeout
    wake = threading.Event()
    channels = {id(case.channel): case.channel for case in cases}.values()
    for channel in channels:
        channel._add_waiter(wake)
    try:
        while True:
            wake.clear()
            for index, case in enumerate(cases):
                if case.op is SelectOp.SEND:
                    if case.channel._try_send(case.value):
                        return index, None
                else:
                    ready, value = case.channel._try_receive()
                    if ready:
                        return index, value
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError("no select case became ready")
            if not wake.wait(remaining):
                raise TimeoutError("no select case became ready")
    finally:
        for channel in channels:
            channel._remove_waiter(wake)