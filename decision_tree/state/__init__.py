"""
State Layer - Runtime Data Models

Defines the persisted session state of a decision tree.
"""

from decision_tree.state.models import HistoryState

__all__ = [
    "HistoryState",
]
