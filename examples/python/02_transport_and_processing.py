"""
Example 02: Transport and JSON-LD Processing
============================================

Encodes a followers collection for a transport (JSON and CBOR), applies
resource limits to an incoming payload, and expands a document with PyLD.

Use case: An inbox receiving collections from remote servers.
"""

from activitystreams_ex import (
    ActivityStreamsProcessor,
    Context,
    DEFAULT_RESOURCE_LIMITS,
    Document,
    OrderedCollection,
    OrderedCollectionBuilder,
    ParseError,
    decode_payload,
    encode_payload,
)

followers = (
    OrderedCollectionBuilder()
    .with_base(lambda b: b.id("https://example.org/sally/followers").object_type("OrderedCollection"))
    .items(["https://example.org/joe", "https://example.org/martin"])
    .build()
)
doc = Document(Context(), followers)

# ── 1. Transport payloads ───────────────────────────────────────

print("=== 1. Transport Payloads ===\n")

json_bytes = encode_payload(doc)
print(f"  JSON: {len(json_bytes)} bytes")
try:
    cbor_bytes = encode_payload(doc, fmt="cbor")
    print(f"  CBOR: {len(cbor_bytes)} bytes")
    restored = decode_payload(cbor_bytes, OrderedCollection, fmt="cbor", item_type=str)
    print(f"  CBOR round trip equal: {restored == doc}")
except ImportError as e:
    print(f"  CBOR skipped: {e}")

# ── 2. Resource limits ──────────────────────────────────────────

print("\n=== 2. Resource Limits ===\n")

for key, value in DEFAULT_RESOURCE_LIMITS.items():
    print(f"  {key}: {value:,}")

try:
    decode_payload(json_bytes, OrderedCollection, limits={"max_document_size": 64})
except ParseError as e:
    print(f"  Blocked: {e}")

# ── 3. JSON-LD processing ───────────────────────────────────────

print("\n=== 3. JSON-LD Processing ===\n")

processor = ActivityStreamsProcessor()
for node in processor.expand(doc):
    print(f"  @id:   {node['@id']}")
    print(f"  @type: {node['@type']}")
print(processor.to_rdf(doc))
