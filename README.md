# nostrkit

Building blocks for Nostr clients in Python, with no third-party dependencies.

## What is in it

- `nostrkit.event` – the `Event` dataclass (`id`, `pubkey`, `created_at`,
  `kind`, `content`, `sig`, `tags`).
- `nostrkit.filter` – the `Filter` dataclass (`ids`, `kinds`, `authors`,
  `tags`, `since`, `until`, `limit`, `search`, `limit_zero`).
- `nostrkit.codec` – JSON encoding and decoding:
  - `serialize_event(event)` writes compact JSON with `kind` as a decimal
    string, plus `id`, `pubkey`, `created_at` and `content`. The signature and
    tags are not written.
  - `deserialize_event(text)` and `event_from_object(obj)` read those same
    members back. `kind` may be a number or a numeric string.
  - `serialize_filter(filter)` and `deserialize_filter(obj)` convert between a
    `Filter` and a JSON-ready dict. When decoding, the `tags` member is
    required.
  - `serialize_tags(tags)` and `deserialize_tags(obj)` handle tag arrays.
    Decoding drops repeated tags.
  - `deserialize_envelope(kind, text)` decodes a relay message of the given
    `EnvelopeType` (`EVENT`, `REQ`, `COUNT`, `NOTICE`, `EOSE`, `CLOSE`,
    `CLOSED`, `OK`, `AUTH`). It returns the matching envelope dataclass, for
    example `EventEnvelope` or `OKEnvelope`.
  - Malformed input raises `CodecError`, which is a subclass of `ValueError`.
- `nostrkit.channel` – `Channel(capacity)`, a bounded thread-safe FIFO.
  - It has `send`, `receive`, `close`, `closed()`, `len()` and iteration.
  - Using a closed channel raises `ChannelClosed`.
  - `send` and `receive` take an optional context. When that context is
    canceled while they wait, they raise `Canceled`.
- `nostrkit.select` – `select(cases, timeout=None)` over `SelectCase(op,
  channel, value)` items with `SelectOp.SEND` and `SelectOp.RECEIVE`.
  - It returns `(index, value)`.
  - It raises `TimeoutError` when no case becomes ready in time.
- `nostrkit.context` – cancellable contexts.
  - `background()` creates a root context.
  - `with_cancel(parent)` returns `(ctx, cancel)`.
  - `with_deadline(parent, deadline)` takes epoch seconds or a `datetime`.
  - A `Context` has `is_canceled()`, `wait(timeout)`, `done()`, `err()` and
    `cancel()`.
  - Canceling a parent cancels its children.
- `nostrkit.sync` – `go(func, *args)` runs a function on a daemon thread.
  `WaitGroup` provides `add`, `done` and `wait(timeout)`.
- `nostrkit.counter` – `LongAdder(cells=None)`, a striped counter with
  `increment`, `sum` and `reset`.
- `nostrkit.hashmap` – `HashMap(num_buckets)`, keyed by `str` or 64-bit `int`,
  with a lock per bucket.
  - Methods: `insert`, `get`, `remove`, `for_each`, `in`, `len()` and
    iteration over keys.
  - The helpers `hash_string` (djb2) and `hash_int64` are also exposed.
- `nostrkit.ticker` – `Ticker(interval_ms)` sends `None` on `ticker.channel`
  every interval until `stop()` is called. It can be used as a context
  manager. The module also defines duration constants in nanoseconds
  (`SECOND`, `MINUTE`, …).
- `nostrkit.errors` – `CodedError(code, message)`, plus:
  - `new_error(code, fmt, *args)`, which formats `fmt` printf-style;
  - `print_error(err, file=None)`;
  - `is_error(err)`.

## Installation

```
pip install nostrkit
```

To run the test suite:

```
pip install "nostrkit[test]"
pytest
```

## Example

```python
from nostrkit.channel import Channel
from nostrkit.context import background, with_cancel
from nostrkit.sync import go, WaitGroup

chan = Channel(5)
wg = WaitGroup()
wg.add(1)

def producer():
    for i in range(10):
        chan.send(i)
    chan.close()
    wg.done()

go(producer)
for value in chan:
    print("consumed", value)
wg.wait()

ctx, cancel = with_cancel(background())
cancel()
assert ctx.is_canceled()
print(ctx.err())  # "context canceled"
```

Encoding and decoding events and envelopes:

```python
from nostrkit.event import Event
from nostrkit.codec import serialize_event, deserialize_event, deserialize_envelope

event = Event(id="event-id", pubkey="public-key", kind=1, content="Hello, Nostr!")
again = deserialize_event(serialize_event(event))
assert again.content == "Hello, Nostr!"

notice = deserialize_envelope("NOTICE", '["NOTICE","slow down"]')
assert notice.message == "slow down"
```

## What it does not do

- There is no relay connection, subscription handling or relay pool. Nothing
  here opens a network socket.
- There is no key generation, event ID hashing, signing or signature
  verification.
- Envelopes can be decoded but not encoded.
- There is no command-line program.