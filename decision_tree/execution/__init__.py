"""
Execution Layer - Navigation and Summary Filtering

Defines the NavigationEngine (deterministic state machine) and the
FilterEvaluator that decides which summary entries a history unlocks.
"""

from decision_tree.execution.engine import NavigationEngine
from decision_tree.execution.filters import FilterEvaluator, parse_expression


__all__ = [
    "FilterEvaluator",
    "NavigationEngine",
    "parse_expression",
]
