import logging

from .interface import Tracker

logger = logging.getLogger("decision_tree.telemetry")


class LoggingTracker(Tracker):
    """
    Records page views in the log as "<base_url><tree_id>/<path>", the same
    page path the analytics integration reports.
    """

    def __init__(self, tree_id: str, base_url: str = ""):
        self.tree_id = tree_id
        self.base_url = base_url

    def page_path(self, path: str) -> str:
        return f"{self.base_url}{self.tree_id}/{path}"

    def track(self, path: str):
        logger.info(f"pageview {self.page_path(path)}")
