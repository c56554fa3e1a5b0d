"""Subscription model linking a user to a feed."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import ValueModel


class Subscription(ValueModel):
    """A user's subscription to a feed."""

    user_id: int = Field(..., description="Subscribing user")
    feed_id: int = Field(..., description="Foreign key to feeds table")
    created_at: Optional[datetime] = Field(None, description="When the user subscribed")
