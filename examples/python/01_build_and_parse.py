"""
Example 01: Build and Parse
===========================

Builds a ``Create`` activity with the fluent builders, writes it as a
document, and reads it back into typed entities.

Use case: A server publishing a note to the followers of its author.
"""

from datetime import datetime, timezone

from activitystreams_ex import (
    Activity,
    ActivityBuilder,
    ContextBuilder,
    Document,
    KeyResolutionAmbiguity,
    Link,
    ParseError,
)

# ── 1. Building ─────────────────────────────────────────────────

print("=== 1. Building ===\n")

activity = (
    ActivityBuilder()
    .with_base(
        lambda b: b.object_type("Create")
        .summary("Sally created a note")
        .published(datetime(2015, 2, 10, 15, 4, 55, tzinfo=timezone.utc))
    )
    .with_actor(lambda a: a.with_base(lambda b: b.object_type("Person").name("Sally")))
    .with_object(lambda b: b.object_type("Note").name("A Note").content("This is a simple note"))
    .to(["https://example.org/sally/followers"])
    .build()
)

doc = Document(ContextBuilder().build(), activity)
print(doc.serialize_pretty())

# ── 2. Parsing ──────────────────────────────────────────────────

print("\n=== 2. Parsing ===\n")

parsed = Document.parse(doc.serialize(), Activity)
print(f"Summary:   {parsed.payload.summary}")  # read through to the base Object
print(f"Actor:     {parsed.payload.actor.name}")
print(f"Published: {parsed.payload.published.isoformat()}")
print(f"Equal:     {parsed == doc}")

# ── 3. Object or Link ───────────────────────────────────────────

print("\n=== 3. Object or Link ===\n")

raw = '{"@context":"https://www.w3.org/ns/activitystreams","type":"Like","actor":{"href":"https://example.org/sally"}}'
liked = Document.parse(raw, Activity)
print(f"Actor is a Link: {isinstance(liked.payload.actor, Link)}")
print(f"Context written back as: {liked.to_dict()['@context']}")

try:
    Document.parse('{"@context":{},"actor":"https://example.org/sally"}', Activity)
except ParseError as e:
    print(f"Rejected: {e}")

try:
    Document.parse(
        '{"@context":"https://www.w3.org/ns/activitystreams","actor":"https://example.org/sally"}',
        Activity,
    )
except KeyResolutionAmbiguity as e:
    print(f"Ambiguous: {e}")
