"""Periodic ticks delivered on a channel, plus duration constants in nanoseconds."""

from __future__ import annotations

import threading

from .channel import Channel, ChannelClosed

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

NANOS_IN_SECOND = 1_000_000_000
NANOS_IN_MINUTE = NANOS_IN_SECOND * 60
NANOS_IN_HOUR = NANOS_IN_MINUTE * 60
NANOS_IN_DAY = NANOS_IN_HOUR * 24
NANOS_IN_WEEK = NANOS_IN_DAY * 7

MICROS_IN_SECOND = NANOS_IN_SECOND // 1000
MILLIS_IN_SECOND = NANOS_IN_SECOND // 1_000_000


class Ticker:
    """Sends None on ``channel`` every ``interval_ms`` milliseconds until stopped."""

    def __init__(self, interval_ms: int) -> None:
        if interval_ms < 0:
            raise ValueError("ticker interval must not be negative")
        self.interval_ms = interval_ms
        self.channel = Channel(1)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        interval = self.interval_ms / 1000
        while not self._stop.is_set():
            if self._stop.wait(interval):
                break
            try:
                self.channel.send(None)
            except ChannelClosed:
                break

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def stop(self) -> None:
        """Stop ticking, close the channel and wait for the ticking thread to end."""
        self._stop.set()
        self.channel.close()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> Ticker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()