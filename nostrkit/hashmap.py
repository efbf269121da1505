"""A bucketed hash map keyed by strings or 64-bit integers, locked per bucket."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterator, Union

Key = Union[str, int]

_MASK = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MISSING = object()


def hash_string(key: str) -> int:
    """The djb2 hash (h * 33 + c, seeded with 5381) over the UTF-8 bytes of ``key``."""
    h = 5381
    for byte in key.encode("utf-8"):
        c = byte - 256 if byte >= 128 else byte
        h = (h * 33 + c) & _MASK
    return h


def hash_int64(key: int) -> int:
    """Mix a signed 64-bit integer as ``key ^ (key >> 33)``, taken as unsigned."""
    if not _INT64_MIN <= key <= _INT64_MAX:
        raise ValueError(f"integer key {key} does not fit in 64 bits")
    return (key ^ (key >> 33)) & _MASK


def _normalize(key: Key) -> Key:
    if isinstance(key, str):
        return key
    if isinstance(key, int):
        return int(key)
    raise TypeError(f"hash map keys must be str or int, not {type(key).__name__}")


def _hash_key(key: Key) -> int:
    if isinstance(key, str):
        return hash_string(key)
    return hash_int64(key)


class HashMap:
    """Maps string or integer keys to values; each bucket has its own lock."""

    def __init__(self, num_buckets: int = 16) -> None:
        if num_buckets < 1:
            raise ValueError("a hash map needs at least one bucket")
        self._buckets: list[list[tuple[Key, Any]]] = [[] for _ in range(num_buckets)]
        self._locks = [threading.Lock() for _ in range(num_buckets)]

    @property
    def num_buckets(self) -> int:
        return len(self._buckets)

    def _slot(self, key: Key) -> tuple[Key, int]:
        key = _normalize(key)
        return key, _hash_key(key) % len(self._buckets)

    @staticmethod
    def _find(bucket: list[tuple[Key, Any]], key: Key) -> int:
        for position, (existing, _) in enumerate(bucket):
            if type(existing) is type(key) and existing == key:
                return position
        return -1

    def insert(self, key: Key, value: Any) -> None:
        """Set ``key`` to ``value``, replacing any value already stored under it."""
        key, index = self._slot(key)
        with self._locks[index]:
            bucket = self._buckets[index]
            position = self._find(bucket, key)
            if position >= 0:
                bucket[position] = (key, value)
            else:
                bucket.insert(0, (key, value))

    def get(self, key: Key, default: Any = None) -> Any:
        """The value stored under ``key``, or ``default`` when there is none."""
        key, index = self._slot(key)
        with self._locks[index]:
            bucket = self._buckets[index]
            position = self._find(bucket, key)
            return bucket[position][1] if position >= 0 else default

    def remove(self, key: Key) -> None:
        """Drop ``key`` from the map; a missing key is ignored."""
        key, index = self._slot(key)
        with self._locks[index]:
            bucket = self._buckets[index]
            position = self._find(bucket, key)
            if position >= 0:
                del bucket[position]

    def for_each(self, func: Callable[[Key, Any], Any]) -> None:
        """Call ``func(key, value)`` for every entry, stopping once it returns a false value."""
        for bucket, lock in zip(self._buckets, self._locks):
            with lock:
                for key, value in list(bucket):
                    if not func(key, value):
                        return

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, int)):
            return False
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        total = 0
        for bucket, lock in zip(self._buckets, self._locks):
            with lock:
                total += len(bucket)
        return total

    def __iter__(self) -> Iterator[Key]:
        keys: list[Key] = []
        for bucket, lock in zip(self._buckets, self._locks):
            with lock:
                keys.extend(key for key, _ in bucket)
        return iter(keys)