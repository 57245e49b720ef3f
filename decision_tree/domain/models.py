"""
Domain Layer - Static Data Models

This module defines the static structure of a decision tree as declared by
the embedding page: Steps, the Answers leading out of them, and the Summary
entries shown once a terminal step is reached.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional, List, Dict

from .graph import StepGraph


@dataclass
class Answer:
    """
    Edge from the step that declares it to another step.

    Attributes:
        target: Step ID shown when this answer is selected. Opaque to the
            engine beyond a membership check in the StepGraph.
        data_key: Analytics path segment reported as "<step>/<data_key>".
        label: Human-readable text of the answer.
    """
    target: str
    data_key: Optional[str] = None
    label: Optional[str] = None


@dataclass
class Step:
    """
    One screen of the tree.

    Attributes:
        id: Unique identifier within the tree.
        title: Question or heading shown for the step.
        answers: Outgoing edges. A step without answers is terminal.
        show_summary: Display the summary on this step even if it has answers.
        cookie: Cookie name set whenever this step becomes active.
        info: Text collected into the summary for every visited step.
    """
    id: str
    title: str = ""
    answers: List[Answer] = field(default_factory=list)
    show_summary: bool = False
    cookie: Optional[str] = None
    info: Optional[str] = None


@dataclass
class SummaryEntry:
    """
    Result content on the summary, gated by history membership.

    Attributes:
        id: Unique identifier within the summary.
        text: Content to display.
        pass_filter: Comma separated AND-groups that must all be visited.
        stop_filter: Comma separated AND-groups; any visited group hides the entry.
    """
    id: str
    text: str
    pass_filter: Optional[str] = None
    stop_filter: Optional[str] = None


@dataclass
class DecisionTree:
    """
    Complete tree definition.

    Attributes:
        id: Tree identifier, also the persistence key for its session.
        title: Human-readable title.
        steps: Dict mapping Step IDs to Step objects, in declaration order.
        summary: Entries rendered on terminal steps.
    """
    id: str
    title: str = ""
    steps: Dict[str, Step] = field(default_factory=dict)
    summary: List[SummaryEntry] = field(default_factory=list)

    @cached_property
    def graph(self) -> StepGraph:
        return StepGraph(self.steps.keys())

    def get_step(self, step_id: str) -> Optional[Step]:
        return self.steps.get(step_id)

    def is_terminal(self, step_id: str) -> bool:
        """No further answers, or explicitly flagged to show the summary."""
        step = self.steps.get(step_id)
        if step is None:
            return False
        return step.show_summary or not step.answers
