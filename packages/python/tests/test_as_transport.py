"""Tests for the transport payload codec (JSON and CBOR)."""

import json

import pytest

from activitystreams_ex import (
    Activity,
    ActivityBuilder,
    Context,
    Document,
    Object,
    ObjectBuilder,
    OrderedCollection,
    OrderedCollectionBuilder,
    ParseError,
    decode_payload,
    encode_payload,
)
from activitystreams_ex.context import NAMESPACE
from activitystreams_ex.transport import (
    DEFAULT_CONTEXT_REGISTRY,
    SUPPORTED_FORMATS,
    _reverse_registry,
)


@pytest.fixture
def create_doc():
    activity = (
        ActivityBuilder.of_type("Create", "Sally created a note")
        .with_actor(lambda a: a.base(ObjectBuilder().object_type("Person").name("Sally")))
        .object(ObjectBuilder.note("A Note", "This is a simple note"))
        .to(["https://example.org/sally/followers"])
        .build()
    )
    return Document(Context(), activity)


@pytest.fixture
def cbor2():
    return pytest.importorskip("cbor2", reason="cbor2 required for CBOR payloads")


# ═══════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════


class TestJson:
    def test_default_format_is_compact_json(self, create_doc):
        data = encode_payload(create_doc)
        assert data == create_doc.to_bytes()
        assert json.loads(data)["type"] == "Create"

    def test_round_trip(self, create_doc):
        restored = decode_payload(encode_payload(create_doc), Activity)
        assert restored == create_doc

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="not valid JSON"):
            decode_payload(b"\x00\x01", Object)

    def test_deep_nesting_is_a_parse_error(self):
        depth = 200_000
        data = b'{"@context":"x","name":' + b"[" * depth + b"]" * depth + b"}"
        with pytest.raises(ParseError, match="not valid JSON"):
            decode_payload(data, Object)

    def test_limits_passed_through(self, create_doc):
        with pytest.raises(ParseError, match="size"):
            decode_payload(encode_payload(create_doc), Activity, limits={"max_document_size": 8})

    def test_item_type_passed_through(self):
        coll = OrderedCollectionBuilder().items(["https://example.org/1"]).build()
        data = encode_payload(Document(Context(), coll))
        restored = decode_payload(data, OrderedCollection, item_type=str)
        assert restored.payload.ordered_items == ("https://example.org/1",)


class TestFormats:
    def test_supported(self):
        assert SUPPORTED_FORMATS == ("json", "cbor")

    def test_unsupported_encode(self, create_doc):
        with pytest.raises(ValueError, match="Unsupported"):
            encode_payload(create_doc, fmt="msgpack")

    def test_unsupported_decode(self):
        with pytest.raises(ValueError, match="Unsupported"):
            decode_payload(b"{}", fmt="xml")


# ═══════════════════════════════════════════════════════════════════
# CBOR
# ═══════════════════════════════════════════════════════════════════


class TestCbor:
    def test_round_trip(self, cbor2, create_doc):
        data = encode_payload(create_doc, fmt="cbor")
        restored = decode_payload(data, Activity, fmt="cbor")
        assert restored == create_doc

    def test_namespace_compressed(self, cbor2, create_doc):
        raw = cbor2.loads(encode_payload(create_doc, fmt="cbor"))
        assert raw["@context"]["@vocab"] == DEFAULT_CONTEXT_REGISTRY[NAMESPACE]
        assert raw["type"] == "Create"

    def test_unknown_namespace_kept(self, cbor2):
        doc = Document(Context(namespace="https://example.org/vocab#"), Object(name="x"))
        raw = cbor2.loads(encode_payload(doc, fmt="cbor"))
        assert raw["@context"]["@vocab"] == "https://example.org/vocab#"
        assert decode_payload(encode_payload(doc, fmt="cbor"), fmt="cbor") == doc

    def test_language_kept(self, cbor2):
        doc = Document(Context(language="en"), Object(name="x"))
        restored = decode_payload(encode_payload(doc, fmt="cbor"), fmt="cbor")
        assert restored.context.language == "en"

    def test_custom_registry(self, cbor2, create_doc):
        registry = {NAMESPACE: 42}
        data = encode_payload(create_doc, fmt="cbor", context_registry=registry)
        assert cbor2.loads(data)["@context"]["@vocab"] == 42
        restored = decode_payload(data, Activity, fmt="cbor", context_registry=registry)
        assert restored.context.namespace == NAMESPACE

    def test_invalid_cbor(self, cbor2):
        with pytest.raises(ParseError, match="not valid CBOR"):
            decode_payload(b"\xff", fmt="cbor")

    def test_deep_nesting_is_a_parse_error(self, cbor2):
        depth = 200_000
        with pytest.raises(ParseError):
            decode_payload(b"\x81" * depth + b"\x00", fmt="cbor")

    def test_non_object_document(self, cbor2):
        with pytest.raises(ParseError, match="must be an object"):
            decode_payload(cbor2.dumps([1, 2]), fmt="cbor")

    def test_size_limit(self, cbor2, create_doc):
        data = encode_payload(create_doc, fmt="cbor")
        with pytest.raises(ParseError, match="size"):
            decode_payload(data, Activity, fmt="cbor", limits={"max_document_size": 4})

    def test_smaller_than_json(self, cbor2, create_doc):
        assert len(encode_payload(create_doc, fmt="cbor")) < len(encode_payload(create_doc))


class TestRegistry:
    def test_reverse_prefers_first_entry(self):
        reverse = _reverse_registry(DEFAULT_CONTEXT_REGISTRY)
        assert reverse[2] == NAMESPACE
