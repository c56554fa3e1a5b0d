"""Tests for the Feed model and FeedStore."""

import pytest
from conftest import make_entry

from feedshelf.errors import ErrorKind
from feedshelf.ingestion import Image, RemoteFeed
from feedshelf.models import Feed


def test_from_remote_derives_slug_from_title():
    remote = RemoteFeed(
        title="The Daily Example",
        link="https://example.com/",
        description="News",
        logo=Image(uri="https://example.com/logo.png"),
    )
    feed = Feed.from_remote(remote, "https://example.com/feed.xml")

    assert feed.id is None
    assert feed.slug == "the-daily-example"
    assert feed.feed_link == "https://example.com/feed.xml"
    assert feed.site_link == "https://example.com/"
    assert feed.description == "News"
    assert feed.logo == remote.logo
    assert feed.logo is not remote.logo


def test_from_remote_without_title_uses_host():
    feed = Feed.from_remote(RemoteFeed(), "https://blog.example.com/feed")
    assert feed.slug == "blog-example-com"


def test_normalize_entries_requires_saved_feed():
    feed = Feed(slug="x", feed_link="https://example.com/feed")
    with pytest.raises(ValueError):
        feed.normalize_entries(RemoteFeed())


def test_create_assigns_id(stores):
    result = stores.feeds.create(
        Feed(
            slug="example",
            title="Example",
            feed_link="https://example.com/feed.xml",
            logo=Image(uri="https://example.com/logo.png", width=32),
        )
    )

    assert result.ok
    assert result.value.id is not None
    assert result.value.logo.width == 32


def test_find_by_id_slug_and_url(stores, feed):
    assert stores.feeds.find_by_id(feed.id).value == feed
    assert stores.feeds.find_by_slug("example").value == feed
    assert stores.feeds.find_by_url("https://example.com/feed.xml").value == feed


def test_lookups_of_missing_feed_are_not_found(stores):
    assert stores.feeds.find_by_id(42).kind is ErrorKind.NOT_FOUND
    assert stores.feeds.find_by_slug("nothing").kind is ErrorKind.NOT_FOUND
    assert stores.feeds.find_by_url("https://nowhere.example/feed").kind is ErrorKind.NOT_FOUND


def test_oversized_id_is_storage_error_not_raised(stores, feed):
    assert stores.feeds.find_by_id(2**70).kind is ErrorKind.STORAGE_ENGINE_ERROR
    assert stores.subscriptions.delete(1, 2**70).kind is ErrorKind.STORAGE_ENGINE_ERROR


def test_duplicate_feed_link_is_constraint_violation(stores, feed):
    duplicate = stores.feeds.create(
        Feed(slug="another", title="Another", feed_link=feed.feed_link)
    )
    assert duplicate.kind is ErrorKind.CONSTRAINT_VIOLATION


def test_colliding_slugs_get_a_suffix(stores, feed):
    second = stores.feeds.create(Feed(slug="example", feed_link="https://two.example/feed"))
    third = stores.feeds.create(Feed(slug="example", feed_link="https://three.example/feed"))

    assert second.value.slug == "example-2"
    assert third.value.slug == "example-3"


def test_update(stores, feed):
    result = stores.feeds.update(feed.model_copy(update={"title": "Renamed"}))
    assert result.ok
    assert stores.feeds.find_by_id(feed.id).value.title == "Renamed"


def test_update_unsaved_feed_is_not_found(stores):
    result = stores.feeds.update(Feed(slug="x", feed_link="https://x.example/feed"))
    assert result.kind is ErrorKind.NOT_FOUND


def test_entries_are_not_stored_inline(stores, feed):
    with_entries = feed.with_entries([make_entry(feed.id)])
    assert "entries" not in with_entries.to_persisted()

    result = stores.feeds.update(with_entries)
    assert len(result.value.entries) == 1
    assert stores.feeds.find_by_id(feed.id).value.entries == []


def test_malformed_logo_is_serialization_error(stores, conn, feed):
    conn.execute("UPDATE feeds SET logo = 'not json' WHERE id = ?", (feed.id,))
    assert stores.feeds.find_by_id(feed.id).kind is ErrorKind.SERIALIZATION_ERROR


def test_find_by_user_id(stores, feed, other_feed):
    stores.subscriptions.create(1, feed.id)
    stores.subscriptions.create(2, other_feed.id)

    assert [f.id for f in stores.feeds.find_by_user_id(1).value] == [feed.id]
    assert len(stores.feeds.find_all().value) == 2
