"""Subscription storage."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from ..errors import NotFoundError
from ..models import Subscription
from .base import BaseStore, returns_outcome


class SubscriptionStore(BaseStore[Subscription]):
    """Manage user subscriptions. Removing one never touches the feed."""

    table = "subscriptions"

    def _to_row(self, subscription: Subscription) -> Dict[str, Any]:
        created_at = subscription.created_at or datetime.now(timezone.utc)
        return {
            "user_id": subscription.user_id,
            "feed_id": subscription.feed_id,
            "created_at": created_at.isoformat(),
        }

    def _from_row(self, row: Mapping[str, Any]) -> Subscription:
        return Subscription.model_validate(dict(row))

    @returns_outcome("Error subscribing to feed")
    def create(self, user_id: int, feed_id: int) -> Subscription:
        """Subscribe a user; subscribing twice is a constraint violation."""
        row = self._insert_row(self._to_row(Subscription(user_id=user_id, feed_id=feed_id)))
        if row is None:
            raise NotFoundError(f"insert of subscription ({user_id}, {feed_id}) returned no row")
        return self._from_row(row)

    @returns_outcome("Error unsubscribing from feed")
    def delete(self, user_id: int, feed_id: int) -> bool:
        row = self._fetch_one(
            """
            DELETE FROM subscriptions
            WHERE user_id = :user_id AND feed_id = :feed_id
            RETURNING feed_id
            """,
            {"user_id": user_id, "feed_id": feed_id},
        )
        if row is None:
            raise NotFoundError(f"user {user_id} is not subscribed to feed {feed_id}")
        return True

    @returns_outcome("Error getting subscription")
    def find(self, user_id: int, feed_id: int) -> Subscription:
        row = self._fetch_one(
            "SELECT * FROM subscriptions WHERE user_id = :user_id AND feed_id = :feed_id",
            {"user_id": user_id, "feed_id": feed_id},
        )
        if row is None:
            raise NotFoundError(f"user {user_id} is not subscribed to feed {feed_id}")
        return self._from_row(row)

    @returns_outcome("Error getting subscriptions")
    def get_subscriptions_by_user_id(self, user_id: int) -> List[Subscription]:
        rows = self._fetch_all(
            "SELECT * FROM subscriptions WHERE user_id = :user_id ORDER BY created_at",
            {"user_id": user_id},
        )
        return [self._from_row(row) for row in rows]
