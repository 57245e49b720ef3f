"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the Singleton services (Stores, Repositories, Service).
2. Choosing the backends named in the settings (memory vs. SQL).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per process.

Tests build their own objects directly or call cache_clear() on these.
"""

import logging
from functools import lru_cache

from ..config import settings
from ..domain.models import DecisionTree
from ..infrastructure.database.connection import init_db
from ..presentation.adapters.html_adapter import HtmlPresentationAdapter
from ..presentation.interface import PresentationAdapter
from ..repositories.history import HistoryStore
from ..repositories.storage import InMemoryKeyValueStore, KeyValueStore, SqlKeyValueStore
from ..repositories.tree import SqlTreeRepository, StaticTreeRepository, TreeRepository
from ..services.tree import TreeService
from ..telemetry.interface import NullTracker, Tracker
from ..telemetry.logging_tracker import LoggingTracker


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Key-value storage (Singleton)
# Note: In-memory storage must be a singleton so sessions persist across calls!
@lru_cache()
def get_key_value_store() -> KeyValueStore:
    if settings.STORAGE_BACKEND == "sql":
        init_db()
        return SqlKeyValueStore()
    return InMemoryKeyValueStore()


@lru_cache()
def get_history_store() -> HistoryStore:
    return HistoryStore(get_key_value_store())


# Tree Repository (Singleton)
@lru_cache()
def get_tree_repository() -> TreeRepository:
    if settings.TREE_SOURCE == "sql":
        init_db()
        return SqlTreeRepository()
    return StaticTreeRepository()


def build_adapter(tree: DecisionTree) -> PresentationAdapter:
    return HtmlPresentationAdapter(tree, cookie_days=settings.COOKIE_DAYS)


def build_tracker(tree_id: str) -> Tracker:
    if not settings.TRACKING_ENABLED:
        return NullTracker()
    return LoggingTracker(tree_id, base_url=settings.TRACKING_BASE_URL)


# The Tree Service (Singleton Service)
@lru_cache()
def get_tree_service() -> TreeService:
    """
    Injects all necessary components into the TreeService.
    """
    return TreeService(
        tree_repository=get_tree_repository(),
        history_store=get_history_store(),
        adapter_factory=build_adapter,
        tracker_factory=build_tracker,
    )
