"""
History Store

Owns the persisted session of each tree and reconciles it against the
steps the tree currently declares.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..domain.graph import StepGraph
from ..state.models import HistoryState
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class HistoryStore:
    def __init__(self, storage: KeyValueStore):
        self.storage = storage

    def load(self, tree_id: str, graph: StepGraph) -> HistoryState:
        """
        Returns the persisted session for `tree_id`, or the initial session.

        A stored history that mentions any step the graph no longer declares
        is discarded as a whole and the initial session is persisted in its
        place. The same applies to a record that does not parse.
        """
        record = self.storage.get(tree_id)
        if record is None:
            return HistoryState.initial(graph)

        try:
            state = HistoryState.model_validate(record)
        except ValidationError as e:
            logger.info(f"Discarding unreadable state for tree {tree_id}: {e.error_count()} error(s)")
            return self._reset(tree_id, graph)

        if not state.is_consistent_with(graph):
            stale = [step for step in state.history if step not in graph]
            logger.info(f"Resetting tree {tree_id}: history references unknown steps {stale}")
            return self._reset(tree_id, graph)

        return state

    def save(self, tree_id: str, state: Optional[HistoryState]):
        """
        Persists `state`. A state without an active step or history is not a
        valid session and clears the stored entry instead.
        """
        if state is None or not state.active or not state.history:
            logger.debug(f"Clearing stored state for tree {tree_id}: nothing valid to save")
            self.storage.remove(tree_id)
            return
        self.storage.set(tree_id, state.model_dump(mode="json"))

    def clear(self, tree_id: str) -> bool:
        return self.storage.remove(tree_id)

    def _reset(self, tree_id: str, graph: StepGraph) -> HistoryState:
        state = HistoryState.initial(graph)
        self.save(tree_id, state)
        return state
