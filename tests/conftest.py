import sys
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

# Ensure the repo root is on PYTHONPATH so `import decision_tree` works in tests
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from decision_tree.domain.models import Answer, DecisionTree, Step, SummaryEntry  # noqa: E402
from decision_tree.infrastructure.database.connection import init_db  # noqa: E402
from decision_tree.presentation.interface import PresentationAdapter  # noqa: E402
from decision_tree.repositories.history import HistoryStore  # noqa: E402
from decision_tree.repositories.storage import InMemoryKeyValueStore  # noqa: E402
from decision_tree.telemetry.interface import Tracker  # noqa: E402


class RecordingAdapter(PresentationAdapter):
    """Keeps every instruction it receives, in order."""

    def __init__(self, tree=None):
        self.tree = tree
        self.calls = []

    def render_step(self, step_id):
        self.calls.append(("render_step", step_id))

    def render_summary(self, visible_entry_ids, infos):
        self.calls.append(("render_summary", list(visible_entry_ids), list(infos)))

    def hide_summary(self):
        self.calls.append(("hide_summary",))

    def set_footer_visible(self, visible):
        self.calls.append(("set_footer_visible", visible))

    def apply_side_effect(self, step_id):
        self.calls.append(("apply_side_effect", step_id))

    def hide_tree(self, reason):
        self.calls.append(("hide_tree", reason))

    def names(self):
        return [call[0] for call in self.calls]

    def last(self, name):
        matching = [call for call in self.calls if call[0] == name]
        return matching[-1] if matching else None


class RecordingTracker(Tracker):
    def __init__(self):
        self.paths = []

    def track(self, path):
        self.paths.append(path)


class BrokenAdapter(RecordingAdapter):
    """Raises on every display call."""

    def _fail(self, *args):
        raise RuntimeError("display is gone")

    render_step = _fail
    render_summary = _fail
    hide_summary = _fail
    set_footer_visible = _fail
    apply_side_effect = _fail


class BrokenTracker(Tracker):
    def track(self, path):
        raise ConnectionError("analytics unreachable")


def make_linear_tree(tree_id="linear"):
    """start -> q2 -> end, with `end` terminal."""
    return DecisionTree(
        id=tree_id,
        title="Linear",
        steps={
            "start": Step(
                id="start",
                info="Started.",
                answers=[Answer(target="q2", data_key="go")],
            ),
            "q2": Step(
                id="q2",
                info="Second question.",
                answers=[Answer(target="end", data_key="finish"), Answer(target="start", data_key="again")],
            ),
            "end": Step(id="end", info="Done.", cookie="finished"),
        },
        summary=[
            SummaryEntry(id="always", text="Always shown"),
            SummaryEntry(id="via_q2", text="Visited q2", pass_filter="q2"),
            SummaryEntry(id="both", text="Both", pass_filter="start q2, end"),
            SummaryEntry(id="not_end", text="Stopped at end", stop_filter="end"),
        ],
    )


@pytest.fixture
def tree():
    return make_linear_tree()


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def history_store(kv_store):
    return HistoryStore(kv_store)


@pytest.fixture
def adapter(tree):
    return RecordingAdapter(tree)


@pytest.fixture
def tracker():
    return RecordingTracker()


@pytest.fixture
def sql_engine():
    """Fresh in-memory SQLite database shared across sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()
