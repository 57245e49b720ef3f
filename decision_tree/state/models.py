"""
State Layer - Runtime Data Models

This module defines the runtime state of one tree session: the step being
displayed and the stack of steps visited to get there.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from ..domain.graph import StepGraph


class HistoryState(BaseModel):
    """
    The persisted session of a single tree.

    `history` keeps every visited step, earliest first. Revisits are appended,
    never deduplicated, so Back always returns to the step shown before.
    """
    active: str
    history: List[str] = Field(min_length=1)
    first_step: Optional[str] = None

    @model_validator(mode="after")
    def check_active_is_last(self) -> "HistoryState":
        if self.history[-1] != self.active:
            raise ValueError(
                f"Active step '{self.active}' is not the last history entry '{self.history[-1]}'."
            )
        return self

    @classmethod
    def initial(cls, graph: StepGraph) -> "HistoryState":
        first = graph.first()
        return cls(active=first, history=[first], first_step=first)

    def is_consistent_with(self, graph: StepGraph) -> bool:
        return all(step in graph for step in self.history)

    @property
    def can_go_back(self) -> bool:
        return len(self.history) > 1
