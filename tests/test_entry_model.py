"""Tests for entry normalization and the persisted round trip."""

import pytest
from conftest import make_entry, utc
from pydantic import ValidationError

from feedshelf.errors import SerializationError
from feedshelf.ingestion import (
    Image,
    MediaObject,
    RemoteCategory,
    RemoteContent,
    RemoteEntry,
    RemoteLink,
    RemotePerson,
    RemoteText,
)
from feedshelf.ingestion.derive import stable_id
from feedshelf.models import Author, Content, Entry, PersistedEntry


def full_remote_entry() -> RemoteEntry:
    return RemoteEntry(
        id="https://example.com/post/1",
        title=RemoteText(content="A Post About Things"),
        published=utc(2024, 3, 4, 10, 0),
        updated=utc(2024, 3, 5, 12, 30),
        authors=[
            RemotePerson(name="Ada", email="ada@example.com"),
            RemotePerson(uri="https://example.com/~bob"),
        ],
        content=RemoteContent(
            content_type="text/html",
            body='<p>First paragraph.</p><img src="/img/cover.jpg">',
        ),
        links=[
            RemoteLink(href="https://example.com/post/1", rel="alternate"),
            RemoteLink(href="https://example.com/post/1/comments", rel="replies"),
        ],
        categories=[RemoteCategory(term="python"), RemoteCategory(term="feeds")],
        media=[MediaObject(url="https://example.com/a.mp3", content_type="audio/mpeg")],
    )


def test_from_remote_maps_every_field():
    logo = Image(uri="https://example.com/logo.png", title="Logo")
    entry = Entry.from_remote(full_remote_entry(), 7, feed_title="Example", feed_logo=logo)

    assert entry.id == stable_id("https://example.com/post/1")
    assert entry.remote_id == "https://example.com/post/1"
    assert entry.feed_id == 7
    assert entry.title == "A Post About Things"
    assert entry.slug == "a-post-about-things"
    assert entry.published_at == utc(2024, 3, 4, 10, 0)
    assert entry.updated_at == utc(2024, 3, 5, 12, 30)
    assert entry.authors == [
        Author(name="Ada", email="ada@example.com"),
        Author(uri="https://example.com/~bob"),
    ]
    assert entry.content == Content(
        content_type="text/html",
        body='<p>First paragraph.</p><img src="/img/cover.jpg">',
    )
    assert entry.links == ["https://example.com/post/1", "https://example.com/post/1/comments"]
    assert entry.summary == "First paragraph."
    assert entry.categories == ["python", "feeds"]
    assert entry.media == [MediaObject(url="https://example.com/a.mp3", content_type="audio/mpeg")]
    assert entry.featured_image == "https://example.com/img/cover.jpg"
    assert entry.feed_title == "Example"
    assert entry.feed_logo == logo
    assert entry.feed_icon is None
    assert entry.read is False


def test_from_remote_is_deterministic():
    assert Entry.from_remote(full_remote_entry(), 1) == Entry.from_remote(full_remote_entry(), 1)


def test_from_remote_does_not_mutate_input():
    remote = full_remote_entry()
    before = remote.model_dump()
    Entry.from_remote(remote, 1)
    assert remote.model_dump() == before


def test_feed_display_fields_are_copied_by_value():
    logo = Image(uri="https://example.com/logo.png")
    entry = Entry.from_remote(full_remote_entry(), 1, feed_logo=logo)

    logo.uri = "https://example.com/changed.png"

    assert entry.feed_logo.uri == "https://example.com/logo.png"


def test_missing_title_falls_back_to_id_for_slug():
    entry = make_entry(1, title=None)
    assert entry.title is None
    assert entry.slug == entry.id


def test_missing_optional_fields():
    entry = Entry.from_remote(RemoteEntry(id="bare"), 1)
    assert entry.authors == []
    assert entry.links == []
    assert entry.categories == []
    assert entry.media is None
    assert entry.content is None
    assert entry.summary is None
    assert entry.featured_image is None
    assert entry.published_at is None


def test_with_read_returns_a_copy():
    entry = make_entry(1)
    read = entry.with_read(True)
    assert read.read is True
    assert entry.read is False
    assert read.model_copy(update={"read": False}) == entry


def test_entries_are_immutable():
    entry = make_entry(1)
    with pytest.raises(ValidationError):
        entry.title = "changed"


def test_round_trip_full_entry():
    entry = Entry.from_remote(
        full_remote_entry(),
        3,
        feed_title="Example",
        feed_logo=Image(uri="https://example.com/logo.png", width=64, height=64),
        feed_icon=Image(uri="https://example.com/favicon.ico"),
    ).with_read(True)

    assert Entry.from_persisted(entry.to_persisted()) == entry


def test_round_trip_sparse_entry():
    entry = Entry.from_remote(RemoteEntry(id="sparse"), 3)
    assert Entry.from_persisted(entry.to_persisted()) == entry


def test_round_trip_from_row_mapping():
    entry = Entry.from_remote(full_remote_entry(), 3)
    row = entry.to_persisted().model_dump()
    row["created_at"] = "ignored"
    assert Entry.from_persisted(row) == entry


def test_absent_values_persist_as_null():
    persisted = Entry.from_remote(RemoteEntry(id="sparse"), 3).to_persisted()
    assert persisted.authors is None
    assert persisted.links is None
    assert persisted.categories is None
    assert persisted.media is None
    assert persisted.content is None
    assert persisted.published_at is None


def test_nested_values_persist_as_json_text():
    persisted = Entry.from_remote(full_remote_entry(), 3).to_persisted()
    assert persisted.links == '["https://example.com/post/1","https://example.com/post/1/comments"]'
    assert persisted.categories == '["python","feeds"]'
    assert persisted.published_at == "2024-03-04T10:00:00+00:00"


def test_malformed_json_column_raises_serialization_error():
    persisted = PersistedEntry(id="x", feed_id=1, authors="{not json")
    with pytest.raises(SerializationError, match="authors"):
        Entry.from_persisted(persisted)


def test_wrong_json_shape_raises_serialization_error():
    persisted = PersistedEntry(id="x", feed_id=1, links='{"href": "https://example.com"}')
    with pytest.raises(SerializationError, match="links"):
        Entry.from_persisted(persisted)


def test_malformed_timestamp_raises_serialization_error():
    persisted = PersistedEntry(id="x", feed_id=1, published_at="last tuesday")
    with pytest.raises(SerializationError, match="published_at"):
        Entry.from_persisted(persisted)


def test_sort_key_puts_undated_entries_first():
    dated = make_entry(1, "a", published=utc(2024, 1, 1))
    undated = make_entry(1, "b")
    assert undated.sort_key < dated.sort_key


def test_relative_image_without_leading_slash_resolves_against_origin():
    entry = make_entry(1, body='<img src="pic.png">', link="https://example.com/post/1")
    assert entry.featured_image == "https://example.com/pic.png"
