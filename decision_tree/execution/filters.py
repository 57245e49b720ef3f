"""
Summary Filters

Decides which summary entries are shown for a given history.

An expression is a comma separated list of AND-groups; each group is a space
separated list of step ids. A group is satisfied when every id in it has been
visited, in any order and any number of times.

    pass  -> every group must be satisfied (absent: always satisfied)
    stop  -> any satisfied group hides the entry (absent: never hides)
"""

from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..domain.models import SummaryEntry

Expression = Tuple[FrozenSet[str], ...]


def parse_expression(text: Optional[str]) -> Expression:
    """Splits an expression into AND-groups, skipping empty ones."""
    if not text:
        return ()
    groups = (frozenset(group.split()) for group in text.split(","))
    return tuple(group for group in groups if group)


def _satisfied(group: FrozenSet[str], visited: AbstractSet[str]) -> bool:
    return group <= visited


class FilterEvaluator:
    """
    Pure predicate over a history snapshot. Holds no state of its own, so
    the same instance can be reused for every tree.
    """

    def pass_satisfied(self, visited: AbstractSet[str], entry: SummaryEntry) -> bool:
        groups = parse_expression(entry.pass_filter)
        return all(_satisfied(group, visited) for group in groups)

    def stop_satisfied(self, visited: AbstractSet[str], entry: SummaryEntry) -> bool:
        groups = parse_expression(entry.stop_filter)
        return any(_satisfied(group, visited) for group in groups)

    def visible(self, history: Sequence[str], entry: SummaryEntry) -> bool:
        visited = frozenset(history)
        return self.pass_satisfied(visited, entry) and not self.stop_satisfied(visited, entry)

    def visible_entries(self, history: Sequence[str], entries: Iterable[SummaryEntry]) -> List[str]:
        """IDs of the visible entries, in declaration order."""
        return [entry.id for entry in entries if self.visible(history, entry)]
