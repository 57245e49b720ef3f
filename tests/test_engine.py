"""
NavigationEngine: transitions, persistence, summary and footer decisions,
and isolation from failing collaborators.
"""

import pytest

from decision_tree.domain.exceptions import EmptyStepGraphError
from decision_tree.domain.models import Answer, DecisionTree, Step, SummaryEntry
from decision_tree.execution.engine import NavigationEngine
from decision_tree.repositories.history import HistoryStore
from decision_tree.repositories.storage import InMemoryKeyValueStore
from decision_tree.schemas.navigation import Transition
from decision_tree.state.models import HistoryState

from conftest import BrokenAdapter, BrokenTracker, RecordingAdapter, RecordingTracker


@pytest.fixture
def engine(tree, history_store, adapter, tracker):
    eng = NavigationEngine(tree, history_store, adapter, tracker)
    eng.start()
    return eng


def assert_invariant(engine):
    state = engine.state
    assert state.history
    assert state.history[-1] == state.active
    assert all(step in engine.graph for step in state.history)


# =====================================================================
# Start
# =====================================================================


def test_start_displays_first_step(tree, history_store, adapter, tracker, kv_store):
    engine = NavigationEngine(tree, history_store, adapter, tracker)
    result = engine.start()

    assert result.transition == Transition.START
    assert result.active == "start"
    assert result.history == ["start"]
    assert result.footer_visible is False
    assert result.summary_visible is False
    assert tracker.paths == ["start/"]
    assert adapter.calls == [
        ("render_step", "start"),
        ("hide_summary",),
        ("set_footer_visible", False),
    ]
    assert kv_store.get("linear")["history"] == ["start"]


def test_start_resumes_stored_session(tree, history_store, adapter):
    history_store.save("linear", HistoryState(active="end", history=["start", "q2", "end"]))

    result = NavigationEngine(tree, history_store, adapter).start()

    assert result.active == "end"
    assert result.summary_visible is True
    assert result.footer_visible is True


def test_empty_tree_cannot_be_built(history_store, adapter):
    with pytest.raises(EmptyStepGraphError):
        NavigationEngine(DecisionTree(id="empty"), history_store, adapter)


# =====================================================================
# Answer
# =====================================================================


def test_end_to_end_scenario(engine, adapter, tracker):
    result = engine.answer("q2", "go")
    assert result.active == "q2"
    assert result.history == ["start", "q2"]
    assert result.summary_visible is False

    result = engine.answer("end", "finish")
    assert result.active == "end"
    assert result.history == ["start", "q2", "end"]
    assert result.summary_visible is True
    assert result.visible_entries == ["always", "via_q2", "both"]
    assert result.infos == ["Started.", "Second question.", "Done."]
    assert adapter.last("render_summary") == (
        "render_summary", ["always", "via_q2", "both"], ["Started.", "Second question.", "Done."]
    )

    result = engine.back()
    assert result.active == "q2"
    assert result.history == ["start", "q2"]
    assert result.summary_visible is False
    assert adapter.calls[-2] == ("hide_summary",)

    assert tracker.paths == [
        "start/",
        "start/go",
        "q2/",
        "q2/finish",
        "end/",
        "q2/back",
    ]


def test_answer_persists(engine, kv_store):
    engine.answer("q2")
    assert kv_store.get("linear") == {"active": "q2", "history": ["start", "q2"], "first_step": "start"}


def test_answer_without_data_key_tracks_only_display(engine, tracker):
    engine.answer("q2")
    assert tracker.paths == ["start/", "q2/"]


def test_answer_applies_side_effect(engine, adapter):
    engine.answer("q2")
    engine.answer("end")
    assert ("apply_side_effect", "end") in adapter.calls


def test_answer_to_unknown_step_is_rejected(engine, adapter, tracker, kv_store):
    calls_before = list(adapter.calls)
    stored_before = kv_store.get("linear")

    result = engine.answer("ghost", "boo")

    assert result.accepted is False
    assert "ghost" in result.error
    assert result.active == "start"
    assert engine.state.history == ["start"]
    assert adapter.calls == calls_before
    assert tracker.paths == ["start/"]
    assert kv_store.get("linear") == stored_before


def test_revisits_are_appended(engine):
    engine.answer("q2")
    result = engine.answer("start", "again")
    assert result.history == ["start", "q2", "start"]
    assert result.footer_visible is True


def test_show_summary_flag_on_step_with_answers(history_store, adapter):
    tree = DecisionTree(
        id="flagged",
        steps={
            "a": Step(id="a", answers=[Answer(target="b")]),
            "b": Step(id="b", answers=[Answer(target="a")], show_summary=True),
        },
        summary=[SummaryEntry(id="s", text="x", pass_filter="b")],
    )
    engine = NavigationEngine(tree, history_store, adapter)
    engine.start()

    result = engine.answer("b")

    assert result.summary_visible is True
    assert result.visible_entries == ["s"]


# =====================================================================
# Back
# =====================================================================


def test_back_on_first_step_is_rejected(engine, adapter):
    calls_before = list(adapter.calls)
    result = engine.back()
    assert result.accepted is False
    assert result.transition == Transition.BACK
    assert result.history == ["start"]
    assert adapter.calls == calls_before


def test_answer_then_back_restores_length_and_active(engine):
    engine.answer("q2")
    before = engine.state
    engine.answer("start")
    engine.back()
    after = engine.state
    assert after.active == before.active
    assert len(after.history) == len(before.history)


def test_back_applies_side_effect_of_new_active(engine, adapter):
    engine.answer("q2")
    engine.back()
    assert adapter.calls[-3] == ("apply_side_effect", "start")


# =====================================================================
# Restart
# =====================================================================


def test_restart(engine, tracker, kv_store):
    engine.answer("q2")
    engine.answer("end")

    result = engine.restart()

    assert result.active == "start"
    assert result.history == ["start"]
    assert result.footer_visible is False
    assert result.summary_visible is False
    assert tracker.paths[-2:] == ["end/restart", "start/"]
    assert kv_store.get("linear")["history"] == ["start"]


def test_restart_is_idempotent(engine):
    engine.answer("q2")
    once = engine.restart()
    twice = engine.restart()
    assert once.history == twice.history
    assert once.active == twice.active
    assert engine.state == HistoryState.initial(engine.graph)


def test_restart_on_terminal_first_step_shows_summary(history_store, adapter):
    tree = DecisionTree(
        id="single",
        steps={"only": Step(id="only")},
        summary=[SummaryEntry(id="s", text="x")],
    )
    engine = NavigationEngine(tree, history_store, adapter)
    engine.start()
    result = engine.restart()
    assert result.summary_visible is True
    assert result.visible_entries == ["s"]
    assert result.footer_visible is False


# =====================================================================
# Footer
# =====================================================================


def test_footer_visibility_follows_history_length(engine, adapter):
    assert adapter.last("set_footer_visible") == ("set_footer_visible", False)
    engine.answer("q2")
    assert adapter.last("set_footer_visible") == ("set_footer_visible", True)
    engine.restart()
    assert adapter.last("set_footer_visible") == ("set_footer_visible", False)


# =====================================================================
# Invariants
# =====================================================================


def test_invariant_holds_for_a_walk(engine):
    events = [
        ("answer", "q2"), ("answer", "start"), ("answer", "q2"), ("back", None),
        ("answer", "nope"), ("back", None), ("back", None), ("back", None),
        ("answer", "q2"), ("answer", "end"), ("restart", None), ("restart", None),
    ]
    for name, arg in events:
        if name == "answer":
            engine.answer(arg)
        else:
            getattr(engine, name)()
        assert_invariant(engine)


# =====================================================================
# Collaborator isolation
# =====================================================================


def test_failing_adapter_does_not_block_persistence(tree, history_store, kv_store, tracker):
    engine = NavigationEngine(tree, history_store, BrokenAdapter(tree), tracker)
    result = engine.start()
    assert len(result.collaborator_errors) == 3

    result = engine.answer("q2", "go")

    assert result.accepted is True
    assert result.active == "q2"
    assert kv_store.get("linear")["history"] == ["start", "q2"]
    # Tracking still happens after a failed render
    assert tracker.paths[-2:] == ["start/go", "q2/"]
    assert any(e.startswith("render_step") for e in result.collaborator_errors)


def test_failing_tracker_does_not_affect_navigation(tree, history_store, kv_store):
    adapter = RecordingAdapter(tree)
    engine = NavigationEngine(tree, history_store, adapter, BrokenTracker())
    engine.start()

    result = engine.answer("q2", "go")

    assert result.active == "q2"
    assert ("render_step", "q2") in adapter.calls
    assert kv_store.get("linear")["active"] == "q2"
    assert result.collaborator_errors == [
        "track: analytics unreachable",
        "track: analytics unreachable",
    ]


def test_independent_trees_share_a_store(history_store):
    first = NavigationEngine(
        DecisionTree(id="one", steps={"a": Step(id="a", answers=[Answer(target="b")]), "b": Step(id="b")}),
        history_store, RecordingAdapter(), RecordingTracker(),
    )
    second = NavigationEngine(
        DecisionTree(id="two", steps={"x": Step(id="x", answers=[Answer(target="y")]), "y": Step(id="y")}),
        history_store, RecordingAdapter(), RecordingTracker(),
    )
    first.start()
    second.start()

    first.answer("b")

    assert first.state.active == "b"
    assert second.state.active == "x"
    assert history_store.load("two", second.graph).history == ["x"]


class FailingWritesStore(InMemoryKeyValueStore):
    def __init__(self):
        super().__init__()
        self.fail = False

    def set(self, key, value):
        if self.fail:
            raise OSError("disk full")
        super().set(key, value)


def test_failing_persistence_does_not_block_display(tree, adapter, tracker):
    storage = FailingWritesStore()
    engine = NavigationEngine(tree, HistoryStore(storage), adapter, tracker)
    engine.start()
    storage.fail = True

    result = engine.answer("q2", "go")

    assert result.accepted is True
    assert result.active == "q2"
    assert engine.state.history == ["start", "q2"]
    assert result.collaborator_errors == ["persist: disk full"]
    assert ("render_step", "q2") in adapter.calls
    assert tracker.paths == ["start/", "start/go", "q2/"]
    # The previously stored session is untouched
    assert storage.get("linear")["history"] == ["start"]

    assert engine.back().collaborator_errors == ["persist: disk full"]
    assert engine.restart().active == "start"
