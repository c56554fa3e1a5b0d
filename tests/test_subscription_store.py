"""Tests for SubscriptionStore."""

from conftest import make_entry

from feedshelf.errors import ErrorKind


def test_create_and_find(stores, feed):
    created = stores.subscriptions.create(1, feed.id)

    assert created.ok
    assert created.value.user_id == 1
    assert created.value.feed_id == feed.id
    assert created.value.created_at is not None
    assert stores.subscriptions.find(1, feed.id).value == created.value


def test_subscribing_twice_is_constraint_violation(stores, feed):
    assert stores.subscriptions.create(1, feed.id).ok
    assert stores.subscriptions.create(1, feed.id).kind is ErrorKind.CONSTRAINT_VIOLATION


def test_subscribing_to_unknown_feed_is_constraint_violation(stores):
    assert stores.subscriptions.create(1, 999).kind is ErrorKind.CONSTRAINT_VIOLATION


def test_subscriptions_are_per_user(stores, feed, other_feed):
    stores.subscriptions.create(1, feed.id)
    stores.subscriptions.create(1, other_feed.id)
    stores.subscriptions.create(2, feed.id)

    mine = stores.subscriptions.get_subscriptions_by_user_id(1).value
    assert {s.feed_id for s in mine} == {feed.id, other_feed.id}
    assert [s.feed_id for s in stores.subscriptions.get_subscriptions_by_user_id(2).value] == [feed.id]
    assert stores.subscriptions.get_subscriptions_by_user_id(3).value == []


def test_delete_keeps_feed_and_entries(stores, feed):
    stores.subscriptions.create(1, feed.id)
    stores.entries.create(make_entry(feed.id))

    assert stores.subscriptions.delete(1, feed.id).ok
    assert stores.subscriptions.find(1, feed.id).kind is ErrorKind.NOT_FOUND
    assert stores.feeds.find_by_id(feed.id).ok
    assert len(stores.entries.find_by_feed_id(feed.id).value) == 1


def test_delete_missing_subscription_is_not_found(stores, feed):
    assert stores.subscriptions.delete(1, feed.id).kind is ErrorKind.NOT_FOUND
