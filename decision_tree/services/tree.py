"""
Tree Service - Application Orchestration Layer

This service is the entry point for embedding decision trees. It loads tree
definitions, builds one NavigationEngine per tree identifier, and dispatches
answer / back / restart events to the right engine. Trees opened through the
same service share nothing but the HistoryStore, where each owns its key.
"""

import logging
from typing import Callable, Dict, Optional

from ..domain.exceptions import ConfigurationError
from ..domain.models import DecisionTree
from ..execution.engine import NavigationEngine
from ..execution.filters import FilterEvaluator
from ..presentation.interface import PresentationAdapter
from ..repositories.history import HistoryStore
from ..repositories.tree import TreeRepository
from ..schemas.navigation import NavigationResult
from ..telemetry.interface import NullTracker, Tracker
from .exceptions import TreeNotOpenError

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[DecisionTree], PresentationAdapter]
TrackerFactory = Callable[[str], Tracker]


class TreeService:
    def __init__(
        self,
        tree_repository: TreeRepository,
        history_store: HistoryStore,
        adapter_factory: AdapterFactory,
        tracker_factory: Optional[TrackerFactory] = None,
    ):
        self.tree_repo = tree_repository
        self.history_store = history_store
        self.adapter_factory = adapter_factory
        self.tracker_factory = tracker_factory or (lambda tree_id: NullTracker())
        self.evaluator = FilterEvaluator()
        self._engines: Dict[str, NavigationEngine] = {}

    def open(self, tree_id: str) -> NavigationEngine:
        """
        Builds the engine for `tree_id` and displays its stored session.

        A tree whose definition is unusable is hidden and the
        ConfigurationError re-raised; nothing is kept for it.
        """
        tree = self.tree_repo.get_tree(tree_id)
        adapter = self.adapter_factory(tree)

        try:
            engine = NavigationEngine(
                tree=tree,
                store=self.history_store,
                adapter=adapter,
                tracker=self.tracker_factory(tree_id),
                evaluator=self.evaluator,
            )
        except ConfigurationError as e:
            logger.warning(f"Decision tree {tree_id} not initialized: {e}")
            adapter.hide_tree(str(e))
            raise

        engine.start()
        self._engines[tree_id] = engine
        logger.info(f"Opened decision tree {tree_id} at step '{engine.state.active}'")
        return engine

    def get_engine(self, tree_id: str) -> NavigationEngine:
        engine = self._engines.get(tree_id)
        if engine is None:
            raise TreeNotOpenError(f"Decision tree {tree_id} has not been opened.")
        return engine

    def is_open(self, tree_id: str) -> bool:
        return tree_id in self._engines

    def answer(self, tree_id: str, target: str, data_key: Optional[str] = None) -> NavigationResult:
        return self.get_engine(tree_id).answer(target, data_key)

    def back(self, tree_id: str) -> NavigationResult:
        return self.get_engine(tree_id).back()

    def restart(self, tree_id: str) -> NavigationResult:
        return self.get_engine(tree_id).restart()

    def reset(self, tree_id: str) -> Optional[NavigationResult]:
        """
        Forces a fresh session: clears the stored state and, if the tree is
        open, redisplays it from the first step.
        """
        self.history_store.clear(tree_id)
        engine = self._engines.get(tree_id)
        if engine is None:
            return None
        return engine.start()

    def close(self, tree_id: str) -> bool:
        """Drops the engine. The stored session is kept."""
        return self._engines.pop(tree_id, None) is not None
