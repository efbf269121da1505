import json

import pytest

from nostrkit.codec import (
    AuthEnvelope,
    CloseEnvelope,
    ClosedEnvelope,
    CodecError,
    CountEnvelope,
    EnvelopeType,
    EOSEEnvelope,
    EventEnvelope,
    NoticeEnvelope,
    OKEnvelope,
    ReqEnvelope,
    deserialize_envelope,
    deserialize_event,
    deserialize_filter,
    deserialize_tags,
    event_from_object,
    serialize_event,
    serialize_filter,
    serialize_tags,
)
from nostrkit.event import Event
from nostrkit.filter import Filter

SOURCE_MESSAGE = (
    '["EVENT","subid",{"pubkey":"test_pubkey","created_at":1234567890,"kind":1,'
    '"tags":[],"content":"Hello, Nostr!","sig":"test_sig"}]'
)


def test_serialize_event_exact_wire_form():
    event = Event(
        id="event-id",
        pubkey="public-key",
        created_at=1234567890,
        kind=1,
        content="Hello, Nostr!",
        sig="signature",
    )
    assert serialize_event(event) == (
        '{"kind":"1","id":"event-id","pubkey":"public-key",'
        '"created_at":1234567890,"content":"Hello, Nostr!"}'
    )


def test_serialize_event_omits_missing_strings():
    decoded = json.loads(serialize_event(Event(kind=7)))
    assert set(decoded) == {"kind", "created_at"}
    assert decoded["kind"] == "7"


def test_event_round_trip_keeps_fields():
    event = Event(id="abc", pubkey="pk", created_at=99, kind=30023, content="héllo ✓")
    back = deserialize_event(serialize_event(event))
    assert (back.id, back.pubkey, back.created_at, back.kind, back.content) == (
        "abc",
        "pk",
        99,
        30023,
        "héllo ✓",
    )


def test_deserialize_event_reads_kind_prefix_like_atoi():
    event = deserialize_event('{"kind":"7abc","id":"x","created_at":5}')
    assert event.kind == 7
    assert event.created_at == 5


def test_deserialize_event_rejects_bad_json():
    with pytest.raises(CodecError):
        deserialize_event("{not json")


def test_event_from_object_requires_object():
    with pytest.raises(CodecError):
        event_from_object(["id"])


def test_event_envelope_from_source_message():
    envelope = deserialize_envelope(EnvelopeType.EVENT, SOURCE_MESSAGE)
    assert isinstance(envelope, EventEnvelope)
    assert envelope.type is EnvelopeType.EVENT
    assert envelope.subscription_id == "subid"
    assert envelope.event.pubkey == "test_pubkey"
    assert envelope.event.content == "Hello, Nostr!"


def test_event_envelope_without_subscription():
    envelope = deserialize_envelope("EVENT", '["EVENT",{"id":"e1","kind":"1"}]')
    assert envelope.subscription_id is None
    assert envelope.event.id == "e1"


def test_req_envelope_parses_filters():
    text = '["REQ","sub1",{"authors":["a"],"tags":[],"limit":10}]'
    envelope = deserialize_envelope(EnvelopeType.REQ, text)
    assert isinstance(envelope, ReqEnvelope)
    assert envelope.subscription_id == "sub1"
    assert envelope.filters[0].authors == ["a"]
    assert envelope.filters[0].limit == 10


def test_req_envelope_without_filters_fails():
    with pytest.raises(CodecError):
        deserialize_envelope(EnvelopeType.REQ, '["REQ","sub1"]')


def test_count_envelope():
    text = '["COUNT","sub2",{"count":42},{"kinds":[1],"tags":[]}]'
    envelope = deserialize_envelope(EnvelopeType.COUNT, text)
    assert isinstance(envelope, CountEnvelope)
    assert envelope.count == 42
    assert envelope.filters[0].kinds == [1]


def test_count_envelope_too_short_fails():
    with pytest.raises(CodecError):
        deserialize_envelope(EnvelopeType.COUNT, '["COUNT","sub2",{"count":1}]')


@pytest.mark.parametrize(
    "kind, cls",
    [
        (EnvelopeType.NOTICE, NoticeEnvelope),
        (EnvelopeType.EOSE, EOSEEnvelope),
        (EnvelopeType.CLOSE, CloseEnvelope),
    ],
)
def test_message_envelopes(kind, cls):
    envelope = deserialize_envelope(kind, f'["{kind.value}","some text"]')
    assert isinstance(envelope, cls)
    assert envelope.message == "some text"


def test_closed_envelope():
    envelope = deserialize_envelope("CLOSED", '["CLOSED","sub3","rate limited"]')
    assert isinstance(envelope, ClosedEnvelope)
    assert (envelope.subscription_id, envelope.reason) == ("sub3", "rate limited")


def test_ok_envelope():
    envelope = deserialize_envelope("OK", '["OK","evid",true,""]')
    assert isinstance(envelope, OKEnvelope)
    assert envelope.event_id == "evid"
    assert envelope.ok is True
    rejected = deserialize_envelope("OK", '["OK","evid",false,"blocked"]')
    assert rejected.ok is False


def test_auth_envelope_challenge_and_event():
    challenge = deserialize_envelope("AUTH", '["AUTH","challenge-string"]')
    assert isinstance(challenge, AuthEnvelope)
    assert challenge.challenge == "challenge-string"
    assert challenge.event is None
    signed = deserialize_envelope("AUTH", '["AUTH",{"id":"a1","kind":"22242"}]')
    assert signed.event.kind == 22242
    assert signed.challenge is None


def test_envelope_without_comma_fails():
    with pytest.raises(CodecError):
        deserialize_envelope("NOTICE", '["NOTICE"]')


def test_envelope_root_must_be_array():
    with pytest.raises(CodecError):
        deserialize_envelope("NOTICE", '{"a":1,"b":2}')


def test_unknown_envelope_type_fails():
    with pytest.raises(CodecError):
        deserialize_envelope("BOGUS", '["BOGUS",1]')


def test_filter_round_trip():
    original = Filter(
        ids=["i1"],
        kinds=[1, 7],
        authors=["a1", "a2"],
        tags=[["e", "x"], ["p", "y"]],
        since=10,
        until=20,
        limit=5,
        search="nostr",
        limit_zero=True,
    )
    assert deserialize_filter(serialize_filter(original)) == original


def test_serialize_filter_key_order_and_optional_members():
    obj = serialize_filter(Filter())
    assert list(obj) == ["ids", "kinds", "authors", "since", "until", "limit", "limit_zero"]
    full = serialize_filter(Filter(tags=[], search="s"))
    assert "tags" in full and full["search"] == "s"


def test_deserialize_filter_requires_tags():
    with pytest.raises(CodecError):
        deserialize_filter({"ids": ["x"]})


def test_deserialize_filter_rejects_bad_arrays():
    with pytest.raises(CodecError):
        deserialize_filter({"ids": ["x", 3], "tags": []})
    with pytest.raises(CodecError):
        deserialize_filter({"kinds": [True], "tags": []})


def test_deserialize_filter_requires_object():
    with pytest.raises(CodecError):
        deserialize_filter([])


def test_tags_round_trip_and_dedupe():
    tags = [["e", "abc"], ["p", "def"]]
    assert deserialize_tags(serialize_tags(tags)) == tags
    assert deserialize_tags([["e", "abc"], ["e", "abc"]]) == [["e", "abc"]]


def test_deserialize_tags_non_array_and_partial():
    assert deserialize_tags({"e": "x"}) is None
    assert serialize_tags(None) is None
    assert deserialize_tags([["e", 5, "z"]]) == [["e"]]