"""
Decision Tree Navigator

Branching questionnaires embedded in a page: a deterministic navigation
engine with a persisted history stack, reconciled against the steps the
page declares, and summary entries filtered by what the user visited.
"""

from decision_tree.domain import (
    Answer,
    ConfigurationError,
    DecisionTree,
    DuplicateStepError,
    EmptyStepGraphError,
    InvalidTransitionError,
    Step,
    StepGraph,
    SummaryEntry,
)
from decision_tree.state import HistoryState
from decision_tree.schemas import NavigationResult, Transition
from decision_tree.execution import FilterEvaluator, NavigationEngine, parse_expression

__all__ = [
    # Domain Layer
    "Answer",
    "DecisionTree",
    "Step",
    "StepGraph",
    "SummaryEntry",
    "ConfigurationError",
    "DuplicateStepError",
    "EmptyStepGraphError",
    "InvalidTransitionError",
    # State Layer
    "HistoryState",
    # Schemas
    "NavigationResult",
    "Transition",
    # Execution Layer
    "FilterEvaluator",
    "NavigationEngine",
    "parse_expression",
]
