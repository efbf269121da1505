"""JSON encoding of events, filters, tags and relay message envelopes."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from .event import Event
from .filter import Filter

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CodecError(ValueError):
    """Raised when JSON text or a decoded value does not have the expected shape."""


class EnvelopeType(enum.Enum):
    EVENT = "EVENT"
    REQ = "REQ"
    COUNT = "COUNT"
    NOTICE = "NOTICE"
    EOSE = "EOSE"
    CLOSE = "CLOSE"
    CLOSED = "CLOSED"
    OK = "OK"
    AUTH = "AUTH"


@dataclass
class EventEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.EVENT
    subscription_id: Optional[str] = None
    event: Optional[Event] = None


@dataclass
class ReqEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.REQ
    subscription_id: Optional[str] = None
    filters: List[Filter] = field(default_factory=list)


@dataclass
class CountEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.COUNT
    subscription_id: Optional[str] = None
    count: Optional[int] = None
    filters: List[Filter] = field(default_factory=list)


@dataclass
class NoticeEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.NOTICE
    message: Optional[str] = None


@dataclass
class EOSEEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.EOSE
    message: Optional[str] = None


@dataclass
class CloseEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.CLOSE
    message: Optional[str] = None


@dataclass
class ClosedEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.CLOSED
    subscription_id: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class OKEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.OK
    event_id: Optional[str] = None
    ok: bool = False


@dataclass
class AuthEnvelope:
    type: ClassVar[EnvelopeType] = EnvelopeType.AUTH
    challenge: Optional[str] = None
    event: Optional[Event] = None


Envelope = Union[
    EventEnvelope,
    ReqEnvelope,
    CountEnvelope,
    NoticeEnvelope,
    EOSEEnvelope,
    CloseEnvelope,
    ClosedEnvelope,
    OKEnvelope,
    AuthEnvelope,
]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _atoi(value: Any) -> int:
    if _is_int(value):
        return value
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _optional_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _required_string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise CodecError(f"{what} must be a string")
    return value


def _loads(text: Any) -> Any:
    if not isinstance(text, (str, bytes, bytearray)):
        raise CodecError("JSON input must be text")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CodecError(f"error parsing JSON: {exc.msg}") from exc


def serialize_event(event: Event) -> str:
    """Encode ``event`` as compact JSON; the kind is written as a decimal string."""
    obj: Dict[str, Any] = {"kind": str(event.kind)}
    for name in ("id", "pubkey"):
        value = getattr(event, name)
        if value is not None:
            obj[name] = value
    obj["created_at"] = event.created_at
    if event.content is not None:
        obj["content"] = event.content
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def event_from_object(obj: Any) -> Event:
    """Build an Event from a decoded JSON object."""
    if not isinstance(obj, dict):
        raise CodecError("event must be a JSON object")
    created_at = obj.get("created_at")
    return Event(
        id=_optional_string(obj.get("id")),
        pubkey=_optional_string(obj.get("pubkey")),
        created_at=created_at if _is_int(created_at) else 0,
        kind=_atoi(obj.get("kind")),
        content=_optional_string(obj.get("content")),
    )


def deserialize_event(text: str) -> Event:
    """Decode an Event from JSON text."""
    return event_from_object(_loads(text))


def _string_list(value: Any, what: str) -> List[str]:
    if not isinstance(value, list):
        raise CodecError(f"{what} must be a JSON array")
    if not all(isinstance(item, str) for item in value):
        raise CodecError(f"{what} must hold only strings")
    return list(value)


def _int_list(value: Any, what: str) -> List[int]:
    if not isinstance(value, list):
        raise CodecError(f"{what} must be a JSON array")
    if not all(_is_int(item) for item in value):
        raise CodecError(f"{what} must hold only integers")
    return list(value)


def serialize_tags(tags: Optional[List[List[str]]]) -> Optional[List[List[str]]]:
    """Tags as a JSON-ready array of string arrays, or None when there are none."""
    if tags is None:
        return None
    return [list(tag) for tag in tags]


def deserialize_tags(obj: Any) -> Optional[List[List[str]]]:
    """Decode an array of string arrays, dropping repeated tags; None if ``obj`` is not an array."""
    if not isinstance(obj, list):
        return None
    tags: List[List[str]] = []
    for value in obj:
        tag: List[str] = []
        if isinstance(value, list):
            for item in value:
                if not isinstance(item, str):
                    break
                tag.append(item)
        if tag not in tags:
            tags.append(tag)
    return tags


def serialize_filter(filter: Filter) -> Dict[str, Any]:
    """A JSON-ready object describing ``filter``."""
    obj: Dict[str, Any] = {
        "ids": list(filter.ids),
        "kinds": list(filter.kinds),
        "authors": list(filter.authors),
    }
    if filter.tags is not None:
        obj["tags"] = serialize_tags(filter.tags)
    obj["since"] = filter.since
    obj["until"] = filter.until
    obj["limit"] = filter.limit
    if filter.search is not None:
        obj["search"] = filter.search
    obj["limit_zero"] = bool(filter.limit_zero)
    return obj


def deserialize_filter(obj: Any) -> Filter:
    """Build a Filter from a decoded JSON object; the ``tags`` member is required."""
    if not isinstance(obj, dict):
        raise CodecError("filter must be a JSON object")
    result = Filter()
    if obj.get("ids") is not None:
        result.ids = _string_list(obj["ids"], "ids")
    if obj.get("kinds") is not None:
        result.kinds = _int_list(obj["kinds"], "kinds")
    if obj.get("authors") is not None:
        result.authors = _string_list(obj["authors"], "authors")
    if obj.get("tags") is None:
        raise CodecError("filter has no tags")
    result.tags = deserialize_tags(obj["tags"])
    for name in ("since", "until", "limit"):
        value = obj.get(name)
        if _is_int(value):
            setattr(result, name, value)
    search = obj.get("search")
    if isinstance(search, str):
        result.search = search
    result.limit_zero = obj.get("limit_zero") is True
    return result


def _require_length(items: List[Any], minimum: int, label: str) -> None:
    if len(items) < minimum:
        raise CodecError(f"failed to decode {label} envelope")


def _event_envelope(items: List[Any]) -> EventEnvelope:
    envelope = EventEnvelope()
    if len(items) == 2:
        envelope.event = event_from_object(items[1])
    elif len(items) == 3:
        envelope.subscription_id = _required_string(items[1], "subscription id")
        envelope.event = event_from_object(items[2])
    return envelope


def _req_envelope(items: List[Any]) -> ReqEnvelope:
    if len(items) < 3:
        raise CodecError("failed to decode REQ envelope: missing filters")
    return ReqEnvelope(
        subscription_id=_required_string(items[1], "subscription id"),
        filters=[deserialize_filter(obj) for obj in items[2:]],
    )


def _count_envelope(items: List[Any]) -> CountEnvelope:
    if len(items) < 4:
        raise CodecError("failed to decode COUNT envelope: missing filters")
    envelope = CountEnvelope(subscription_id=_required_string(items[1], "subscription id"))
    if isinstance(items[2], dict) and _is_int(items[2].get("count")):
        envelope.count = items[2]["count"]
    envelope.filters = [deserialize_filter(obj) for obj in items[3:]]
    return envelope


def _message_envelope(cls: Callable[..., Any], label: str) -> Callable[[List[Any]], Any]:
    def parse(items: List[Any]) -> Any:
        _require_length(items, 2, label)
        return cls(message=_required_string(items[1], "message"))

    return parse


def _closed_envelope(items: List[Any]) -> ClosedEnvelope:
    _require_length(items, 3, "CLOSED")
    return ClosedEnvelope(
        subscription_id=_required_string(items[1], "subscription id"),
        reason=_required_string(items[2], "reason"),
    )


def _ok_envelope(items: List[Any]) -> OKEnvelope:
    _require_length(items, 4, "OK")
    return OKEnvelope(event_id=_required_string(items[1], "event id"), ok=items[2] is True)


def _auth_envelope(items: List[Any]) -> AuthEnvelope:
    _require_length(items, 2, "AUTH")
    if isinstance(items[1], dict):
        return AuthEnvelope(event=event_from_object(items[1]))
    return AuthEnvelope(challenge=_required_string(items[1], "challenge"))


_PARSERS: Dict[EnvelopeType, Callable[[List[Any]], Any]] = {
    EnvelopeType.EVENT: _event_envelope,
    EnvelopeType.REQ: _req_envelope,
    EnvelopeType.COUNT: _count_envelope,
    EnvelopeType.NOTICE: _message_envelope(NoticeEnvelope, "NOTICE"),
    EnvelopeType.EOSE: _message_envelope(EOSEEnvelope, "EOSE"),
    EnvelopeType.CLOSE: _message_envelope(CloseEnvelope, "CLOSE"),
    EnvelopeType.CLOSED: _closed_envelope,
    EnvelopeType.OK: _ok_envelope,
    EnvelopeType.AUTH: _auth_envelope,
}


def deserialize_envelope(kind: Union[EnvelopeType, str], text: str) -> Envelope:
    """Decode relay message ``text`` as an envelope of the given ``kind``."""
    try:
        envelope_type = EnvelopeType(kind)
    except ValueError as exc:
        raise CodecError(f"unknown envelope type {kind!r}") from exc
    if not isinstance(text, str):
        raise CodecError("envelope input must be text")
    if "," not in text:
        raise CodecError("envelope has no elements after its label")
    items = _loads(text)
    if not isinstance(items, list):
        raise CodecError("root is not an array")
    return _PARSERS[envelope_type](items)