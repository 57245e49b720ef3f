"""
Basic structure validation.

Reports problems in a tree definition that do not stop it from working.
Only an empty step list is fatal, and StepGraph raises for that.
"""

import logging
from typing import List

from .models import DecisionTree

logger = logging.getLogger(__name__)


def _expression_ids(expression: str) -> List[str]:
    return [part for group in expression.split(",") for part in group.split()]


def validate_tree(tree: DecisionTree) -> List[str]:
    """
    Logs a warning for each structural problem and returns the messages.
    """
    warnings: List[str] = []

    for step_id, step in tree.steps.items():
        if not step_id:
            warnings.append(f"One of your steps in decision tree with ID {tree.id} does not have ID filled.")
        elif step.id != step_id:
            warnings.append(
                f"Step declared as '{step_id}' in decision tree id {tree.id} "
                f"has ID '{step.id}'; it will never be displayed."
            )
        for answer in step.answers:
            if not answer.target:
                warnings.append(
                    f"One of your answers in decision tree id {tree.id} does not have a target filled."
                )
            elif answer.target not in tree.steps:
                warnings.append(
                    f"Answer on step '{step_id}' in decision tree id {tree.id} "
                    f"points to unknown step '{answer.target}'."
                )
            if not answer.data_key:
                warnings.append(
                    f"One of your answers in decision tree id {tree.id} does not have data_key filled."
                )

    for entry in tree.summary:
        for expression in (entry.pass_filter, entry.stop_filter):
            if not expression:
                continue
            unknown = [i for i in _expression_ids(expression) if i not in tree.steps]
            if unknown:
                warnings.append(
                    f"Summary entry '{entry.id}' in decision tree id {tree.id} "
                    f"filters on unknown steps: {', '.join(unknown)}."
                )

    if not tree.summary and any(tree.is_terminal(s) for s in tree.steps):
        warnings.append(f"Your decision tree with ID {tree.id} does not have any summary entries.")

    for message in warnings:
        logger.warning(message)
    return warnings
