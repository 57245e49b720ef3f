"""
Domain Layer - Static Data Models

Defines the static structure of a decision tree: its StepGraph, Steps,
Answers and Summary entries.
"""

from decision_tree.domain.exceptions import (
    ConfigurationError,
    DuplicateStepError,
    EmptyStepGraphError,
    InvalidTransitionError,
)
from decision_tree.domain.graph import StepGraph
from decision_tree.domain.models import (
    Answer,
    DecisionTree,
    Step,
    SummaryEntry,
)

__all__ = [
    "Answer",
    "DecisionTree",
    "Step",
    "StepGraph",
    "SummaryEntry",
    # Errors
    "ConfigurationError",
    "DuplicateStepError",
    "EmptyStepGraphError",
    "InvalidTransitionError",
]
