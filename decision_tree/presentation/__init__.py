"""
Presentation Layer

The interface the NavigationEngine renders through, and an HTML
implementation of it.
"""

from decision_tree.presentation.interface import PresentationAdapter
from decision_tree.presentation.adapters.html_adapter import HtmlPresentationAdapter

__all__ = [
    "HtmlPresentationAdapter",
    "PresentationAdapter",
]
