"""Nostr events, filters and JSON codecs with Go-style concurrency primitives."""

__version__ = "0.1.0"

__all__ = [
    "channel",
    "codec",
    "context",
    "counter",
    "errors",
    "event",
    "filter",
    "hashmap",
    "select",
    "sync",
    "ticker",
]