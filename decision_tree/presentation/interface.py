from abc import ABC, abstractmethod
from typing import List


class PresentationAdapter(ABC):
    """
    Abstract Base Class interface for whatever displays a tree (DOM, HTML,
    terminal, ...). Receives render instructions from the NavigationEngine
    and holds no navigation logic of its own.
    """

    @abstractmethod
    def render_step(self, step_id: str):
        """Display `step_id` and hide every other step."""
        pass

    @abstractmethod
    def render_summary(self, visible_entry_ids: List[str], infos: List[str]):
        """Display the summary with only the given entries and info texts."""
        pass

    @abstractmethod
    def hide_summary(self):
        """Hide the summary and drop any collected info texts."""
        pass

    @abstractmethod
    def set_footer_visible(self, visible: bool):
        """Show or hide the back/restart controls."""
        pass

    @abstractmethod
    def apply_side_effect(self, step_id: str):
        """Apply any cookie/attribute effect declared on `step_id`."""
        pass

    @abstractmethod
    def hide_tree(self, reason: str):
        """Hide the whole tree. Called when it cannot be initialized."""
        pass
