"""
Schemas - Navigation Results

Defines the Pydantic models returned by the NavigationEngine.
"""

from decision_tree.schemas.navigation import NavigationResult, Transition

__all__ = [
    "NavigationResult",
    "Transition",
]
