"""Tests for Object, Link and Preview wire forms."""

from datetime import datetime, timedelta, timezone

import pytest

from activitystreams_ex import (
    ContextBuilder,
    Document,
    Link,
    LinkBuilder,
    Object,
    ObjectBuilder,
    ParseError,
    Preview,
    PreviewBuilder,
)


@pytest.fixture
def context():
    return ContextBuilder().build()


# ═══════════════════════════════════════════════════════════════════
# Object
# ═══════════════════════════════════════════════════════════════════


class TestObject:
    def test_serialize_object_with_language(self):
        obj = ObjectBuilder().name("name").build()
        doc = Document(ContextBuilder().language("en").build(), obj)
        expected = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams",
    "@language": "en"
  },
  "name": "name"
}"""
        assert doc.serialize_pretty() == expected

    def test_deserialize_object(self):
        raw = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams",
    "@language": "en"
  },
  "name": "name"
}"""
        doc = Document.parse(raw, Object)
        assert doc.context.language == "en"
        assert doc.payload.name == "name"
        assert doc.payload.object_type is None

    def test_deserialize_object_malformed(self):
        """Trailing comma is a syntax error, not a partial object."""
        raw = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams",
    "@language": "en"
  },
}"""
        with pytest.raises(ParseError):
            Document.parse(raw, Object)

    def test_serialize_note(self, context):
        note = ObjectBuilder.note("Name", "Content").build()
        expected = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Note",
  "name": "Name",
  "content": "Content"
}"""
        assert Document(context, note).serialize_pretty() == expected

    def test_deserialize_note(self):
        raw = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Note",
  "name": "Name",
  "content": "Content"
}"""
        note = Document.parse(raw).payload
        assert note.object_type == "Note"
        assert note.name == "Name"
        assert note.content == "Content"

    def test_empty_object_has_no_keys(self):
        assert Object().to_dict() == {}

    def test_unset_fields_are_omitted_not_null(self, context):
        doc = Document(context, ObjectBuilder.of_object_type("Note").build())
        assert "null" not in doc.serialize()
        assert "attributedTo" not in doc.to_dict()

    def test_unknown_keys_ignored(self):
        obj = Object.from_dict({"type": "Note", "sensitive": False, "tag": []})
        assert obj == Object(object_type="Note")

    def test_wrong_value_type_rejected(self):
        with pytest.raises(ParseError, match="name"):
            Object.from_dict({"name": 42})

    def test_nested_error_reports_path(self):
        with pytest.raises(ParseError) as info:
            Object.from_dict({"audience": {"audience": {"summary": []}}})
        assert info.value.path == "audience.audience.summary"

    def test_published_renders_with_z_suffix(self):
        obj = Object(published=datetime(2015, 2, 10, 15, 4, 55, tzinfo=timezone.utc))
        assert obj.to_dict() == {"published": "2015-02-10T15:04:55Z"}

    def test_published_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        obj = Object(published=datetime(2015, 2, 10, 17, 4, 55, tzinfo=plus_two))
        assert obj.to_dict()["published"] == "2015-02-10T15:04:55Z"

    def test_naive_published_taken_as_utc(self):
        obj = Object(published=datetime(2015, 2, 10, 15, 4, 55))
        assert obj.published.tzinfo is timezone.utc

    def test_published_fraction_in_milliseconds(self):
        obj = Object(published=datetime(2015, 2, 10, 15, 4, 55, 120000))
        assert obj.to_dict()["published"] == "2015-02-10T15:04:55.120Z"

    def test_parse_published(self):
        obj = Object.from_dict({"published": "2015-02-10T15:04:55Z"})
        assert obj.published == datetime(2015, 2, 10, 15, 4, 55, tzinfo=timezone.utc)

    def test_parse_short_fraction(self):
        obj = Object.from_dict({"published": "2020-01-01T00:00:00.5Z"})
        assert obj.published == datetime(2020, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)

    def test_parse_nanosecond_fraction_truncated(self):
        obj = Object.from_dict({"published": "2020-01-01T00:00:00.123456789+02:00"})
        assert obj.published == datetime(2019, 12, 31, 22, 0, 0, 123456, tzinfo=timezone.utc)

    def test_parse_invalid_published(self):
        with pytest.raises(ParseError, match="published"):
            Object.from_dict({"published": "last tuesday"})

    def test_audience_is_recursive(self):
        obj = ObjectBuilder().with_audience(
            lambda b: b.object_type("Group").with_audience(lambda c: c.name("inner"))
        ).build()
        assert obj.to_dict() == {
            "audience": {"type": "Group", "audience": {"name": "inner"}},
        }
        assert Object.from_dict(obj.to_dict()) == obj

    def test_entities_are_immutable(self):
        obj = Object(name="a")
        with pytest.raises(AttributeError):
            obj.name = "b"


# ═══════════════════════════════════════════════════════════════════
# Link
# ═══════════════════════════════════════════════════════════════════


class TestLink:
    def test_serialize_link(self, context):
        link = (
            LinkBuilder()
            .href("http://example.org/abc")
            .name("An example link")
            .hreflang("en")
            .link_type("Link")
            .media_type("text/html")
            .build()
        )
        expected = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Link",
  "href": "http://example.org/abc",
  "mediaType": "text/html",
  "name": "An example link",
  "hreflang": "en"
}"""
        assert Document(context, link).serialize_pretty() == expected

    def test_deserialize_link(self):
        raw = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Link",
  "href": "http://example.org/abc",
  "name": "An example link",
  "hreflang": "en"
}"""
        link = Document.parse(raw, Link).payload
        assert link.link_type == "Link"
        assert link.href == "http://example.org/abc"
        assert link.name == "An example link"
        assert link.hreflang == "en"

    def test_missing_href_is_parse_error(self):
        with pytest.raises(ParseError, match="href"):
            Link.from_dict({"type": "Link", "name": "nowhere"})

    def test_absent_type_round_trips_as_absent(self):
        link = Link.from_dict({"href": "http://example.org/a"})
        assert link.link_type is None
        assert link.to_dict() == {"href": "http://example.org/a"}

    def test_constructor_defaults_type(self):
        assert Link(href="http://example.org/a").link_type == "Link"

    def test_empty_rel_omitted(self):
        assert "rel" not in Link(href="http://example.org/a").to_dict()

    def test_rel_and_dimensions(self):
        link = LinkBuilder().href("http://example.org/i.png").rel(["canonical"]).add_rel("preview") \
            .height(100).width(200).build()
        data = link.to_dict()
        assert data["rel"] == ["canonical", "preview"]
        assert data["height"] == 100
        assert data["width"] == 200
        assert Link.from_dict(data) == link

    @pytest.mark.parametrize("height", [-1, "100", 1.5, True])
    def test_bad_height_rejected(self, height):
        with pytest.raises(ParseError, match="height"):
            Link.from_dict({"href": "http://example.org/a", "height": height})

    def test_rel_must_hold_strings(self):
        with pytest.raises(ParseError, match=r"rel\[1\]"):
            Link.from_dict({"href": "http://example.org/a", "rel": ["ok", 3]})

    def test_for_href(self):
        link = Link.for_href("http://example.org/trailer.mkv", "video/mkv")
        assert link.to_dict() == {
            "type": "Link",
            "href": "http://example.org/trailer.mkv",
            "mediaType": "video/mkv",
        }


# ═══════════════════════════════════════════════════════════════════
# Preview
# ═══════════════════════════════════════════════════════════════════


class TestPreview:
    def test_serialize_preview(self, context):
        trailer = Link.for_href("http://example.org/trailer.mkv", "video/mkv")
        preview = (
            PreviewBuilder()
            .duration("PT1M")
            .object_type("Video")
            .url(trailer)
            .name("Trailer")
            .build()
        )
        movie = (
            ObjectBuilder()
            .duration("PT2H30M")
            .name("Cool New Movie")
            .preview(preview)
            .object_type("Video")
            .build()
        )
        expected = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Video",
  "name": "Cool New Movie",
  "duration": "PT2H30M",
  "preview": {
    "type": "Video",
    "name": "Trailer",
    "duration": "PT1M",
    "url": {
      "type": "Link",
      "href": "http://example.org/trailer.mkv",
      "mediaType": "video/mkv"
    }
  }
}"""
        assert Document(context, movie).serialize_pretty() == expected

    def test_deserialize_preview(self):
        raw = """{
  "@context": {
    "@vocab": "https://www.w3.org/ns/activitystreams"
  },
  "type": "Video",
  "name": "Cool New Movie",
  "duration": "PT2H30M",
  "preview": {
    "type": "Video",
    "name": "Trailer",
    "duration": "PT1M",
    "url": {
      "href": "http://example.org/trailer.mkv",
      "mediaType": "video/mkv"
    }
  }
}"""
        movie = Document.parse(raw).payload
        assert movie.object_type == "Video"
        assert movie.name == "Cool New Movie"
        assert movie.duration == "PT2H30M"
        preview = movie.preview
        assert preview.object_type == "Video"
        assert preview.name == "Trailer"
        assert preview.duration == "PT1M"
        assert preview.url.media_type == "video/mkv"
        assert preview.url.href == "http://example.org/trailer.mkv"

    def test_default_type(self):
        assert Preview().to_dict() == {"type": "Preview"}
        assert PreviewBuilder().build().object_type == "Preview"
