"""Reader workflows built on the stores and the fetcher."""

from .orchestrator import FeedRefresh, ReaderOrchestrator, RefreshReport, newest_first
from .subscriptions import READ_COLLECTION, SubscriptionService

__all__ = [
    "FeedRefresh",
    "READ_COLLECTION",
    "ReaderOrchestrator",
    "RefreshReport",
    "SubscriptionService",
    "newest_first",
]
