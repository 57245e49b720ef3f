"""
Step Graph

The fixed set of step identifiers a tree declares, in declaration order.
The first declared step is where every session starts.
"""

from collections import Counter
from typing import Iterable, Iterator, Tuple

from .exceptions import DuplicateStepError, EmptyStepGraphError


class StepGraph:
    """
    Read-only view over the declared step identifiers.

    Declaration order is not traversal order; it only decides which step
    comes first.
    """

    __slots__ = ("_steps", "_index")

    def __init__(self, steps: Iterable[str]):
        ordered = tuple(steps)
        if not ordered:
            raise EmptyStepGraphError("Decision tree should have at least one step.")

        index = frozenset(ordered)
        if len(index) != len(ordered):
            duplicates = sorted(s for s, n in Counter(ordered).items() if n > 1)
            raise DuplicateStepError(f"Duplicate step ids: {', '.join(duplicates)}")

        self._steps: Tuple[str, ...] = ordered
        self._index = index

    @property
    def steps(self) -> Tuple[str, ...]:
        return self._steps

    @property
    def first_step(self) -> str:
        return self._steps[0]

    def first(self) -> str:
        return self._steps[0]

    def contains(self, step_id: str) -> bool:
        return step_id in self._index

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"StepGraph({list(self._steps)!r})"
