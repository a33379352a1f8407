"""
activitystreams-ex: Activity Streams 2.0 documents for Python

Immutable vocabulary entities, fluent builders, and a JSON codec that
flattens derived types into a single wire object under a normalized
``@context``. Wraps PyLD for JSON-LD processing.
"""

__version__ = "0.3.1"

from activitystreams_ex.errors import (
    ActivityStreamsError,
    ParseError,
    BuildError,
    KeyResolutionAmbiguity,
    KeyFormatError,
)
from activitystreams_ex.context import Context, NAMESPACE, normalize_context
from activitystreams_ex.object import (
    Object,
    Link,
    Preview,
    AttributedTo,
    resolve_reference,
)
from activitystreams_ex.actor import Actor, ActorReference, PublicKeyInfo, ACTOR_TYPES
from activitystreams_ex.activity import Activity, IntransitiveActivity
from activitystreams_ex.collection import (
    Collection,
    OrderedCollection,
    CollectionPage,
    OrderedCollectionPage,
)
from activitystreams_ex.builders import (
    ContextBuilder,
    ObjectBuilder,
    LinkBuilder,
    PreviewBuilder,
    ActorBuilder,
    ActivityBuilder,
    IntransitiveActivityBuilder,
    CollectionBuilder,
    OrderedCollectionBuilder,
    CollectionPageBuilder,
    OrderedCollectionPageBuilder,
)
from activitystreams_ex.document import Document
from activitystreams_ex.security import DEFAULT_RESOURCE_LIMITS
from activitystreams_ex.processor import ActivityStreamsProcessor
from activitystreams_ex.transport import encode_payload, decode_payload
from activitystreams_ex.trust import load_public_key

__all__ = [
    "ActivityStreamsError",
    "ParseError",
    "BuildError",
    "KeyResolutionAmbiguity",
    "KeyFormatError",
    "Context",
    "NAMESPACE",
    "normalize_context",
    "Object",
    "Link",
    "Preview",
    "AttributedTo",
    "resolve_reference",
    "Actor",
    "ActorReference",
    "PublicKeyInfo",
    "ACTOR_TYPES",
    "Activity",
    "IntransitiveActivity",
    "Collection",
    "OrderedCollection",
    "CollectionPage",
    "OrderedCollectionPage",
    "ContextBuilder",
    "ObjectBuilder",
    "LinkBuilder",
    "PreviewBuilder",
    "ActorBuilder",
    "ActivityBuilder",
    "IntransitiveActivityBuilder",
    "CollectionBuilder",
    "OrderedCollectionBuilder",
    "CollectionPageBuilder",
    "OrderedCollectionPageBuilder",
    "Document",
    "DEFAULT_RESOURCE_LIMITS",
    "ActivityStreamsProcessor",
    "encode_payload",
    "decode_payload",
    "load_public_key",
]
