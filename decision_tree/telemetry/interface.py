from abc import ABC, abstractmethod


class Tracker(ABC):
    """
    Fire-and-forget page view tracking. Paths look like "<step>/",
    "<step>/<data_key>", "<step>/back" or "<step>/restart".
    """

    @abstractmethod
    def track(self, path: str):
        pass


class NullTracker(Tracker):
    """Used when tracking is disabled."""

    def track(self, path: str):
        pass
