"""
Schemas - Navigation Results

This module defines the Pydantic model every NavigationEngine operation
returns, so callers can inspect what happened without querying the
presentation layer.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

class Transition(str, Enum):
    """
    The navigation event that produced a result.

    START: The tree was activated and its stored session displayed.
    ANSWER: An answer moved the session to its target step.
    BACK: The last history entry was popped.
    RESTART: The session was reset to the first step.
    """
    START = "START"
    ANSWER = "ANSWER"
    BACK = "BACK"
    RESTART = "RESTART"

class NavigationResult(BaseModel):
    """
    Snapshot of the session after a transition, plus what the presentation
    layer was told to display.
    """
    transition: Transition
    accepted: bool = Field(
        True,
        description="False when the event had no transition and the state was left unchanged."
    )
    error: Optional[str] = Field(
        None,
        description="Why the event was rejected."
    )
    active: str
    history: List[str]
    footer_visible: bool
    summary_visible: bool = False
    visible_entries: List[str] = Field(default_factory=list)
    infos: List[str] = Field(
        default_factory=list,
        description="Info texts of the visited steps, in history order."
    )
    collaborator_errors: List[str] = Field(
        default_factory=list,
        description="Presentation or telemetry calls that raised. Never affects the state."
    )
