"""
Engine - Navigation State Machine

The NavigationEngine drives a single tree session. Every step of the tree
is a state; answering, going back and restarting are the transitions. The
summary is not a state of its own but a display decision layered on top of
the active step.
-----------------------------------------------

Each operation runs to completion before returning:
1. Decide the new HistoryState (or reject the event, leaving state untouched).
2. Persist it through the HistoryStore.
3. Tell the presentation adapter and tracker what to show.

Steps 2 and 3 are isolated from each other. A failing save, adapter call or
tracker call is logged and reported on the NavigationResult; the decided
state stays in effect and the remaining calls still go out.
"""

import logging
from typing import Callable, List, Optional

from ..domain.exceptions import InvalidTransitionError
from ..domain.graph import StepGraph
from ..domain.models import DecisionTree
from ..domain.validation import validate_tree
from ..presentation.interface import PresentationAdapter
from ..repositories.history import HistoryStore
from ..schemas.navigation import NavigationResult, Transition
from ..state.models import HistoryState
from ..telemetry.interface import NullTracker, Tracker
from .filters import FilterEvaluator

logger = logging.getLogger(__name__)


class NavigationEngine:
    def __init__(
        self,
        tree: DecisionTree,
        store: HistoryStore,
        adapter: PresentationAdapter,
        tracker: Optional[Tracker] = None,
        evaluator: Optional[FilterEvaluator] = None,
    ):
        # Raises ConfigurationError for an empty or duplicated step list
        self.graph: StepGraph = tree.graph
        validate_tree(tree)

        self.tree = tree
        self.store = store
        self.adapter = adapter
        self.tracker = tracker or NullTracker()
        self.evaluator = evaluator or FilterEvaluator()
        self._state: Optional[HistoryState] = None

    @property
    def state(self) -> HistoryState:
        if self._state is None:
            self._state = self.store.load(self.tree.id, self.graph)
        return self._state

    @property
    def footer_visible(self) -> bool:
        return len(self.state.history) > 1

    # ==========================================================================
    # Transitions
    # ==========================================================================

    def start(self) -> NavigationResult:
        """
        Loads (and reconciles) the stored session and displays it.
        """
        self._state = None
        errors: List[str] = []
        state = self._commit(self.state, errors)

        self._call(errors, "track", self.tracker.track, f"{state.active}/")
        self._call(errors, "render_step", self.adapter.render_step, state.active)
        return self._finish(Transition.START, errors)

    def answer(self, target: str, data_key: Optional[str] = None) -> NavigationResult:
        if target not in self.graph:
            return self._reject(
                Transition.ANSWER,
                InvalidTransitionError(f"Tree {self.tree.id} has no step '{target}'."),
            )

        previous = self.state
        errors: List[str] = []
        self._commit(
            HistoryState(
                active=target,
                history=[*previous.history, target],
                first_step=self.graph.first(),
            ),
            errors,
        )

        if data_key:
            self._call(errors, "track", self.tracker.track, f"{previous.active}/{data_key}")
        self._call(errors, "render_step", self.adapter.render_step, target)
        self._call(errors, "track", self.tracker.track, f"{target}/")
        self._call(errors, "apply_side_effect", self.adapter.apply_side_effect, target)
        return self._finish(Transition.ANSWER, errors)

    def back(self) -> NavigationResult:
        current = self.state
        if not current.can_go_back:
            return self._reject(
                Transition.BACK,
                InvalidTransitionError(f"Tree {self.tree.id} is already at its first step."),
            )

        history = current.history[:-1]
        errors: List[str] = []
        state = self._commit(
            HistoryState(active=history[-1], history=history, first_step=self.graph.first()),
            errors,
        )

        self._call(errors, "render_step", self.adapter.render_step, state.active)
        self._call(errors, "track", self.tracker.track, f"{state.active}/back")
        self._call(errors, "apply_side_effect", self.adapter.apply_side_effect, state.active)
        return self._finish(Transition.BACK, errors)

    def restart(self) -> NavigationResult:
        previous = self.state
        errors: List[str] = []
        state = self._commit(HistoryState.initial(self.graph), errors)

        self._call(errors, "track", self.tracker.track, f"{previous.active}/restart")
        self._call(errors, "render_step", self.adapter.render_step, state.active)
        self._call(errors, "track", self.tracker.track, f"{state.active}/")
        self._call(errors, "apply_side_effect", self.adapter.apply_side_effect, state.active)
        return self._finish(Transition.RESTART, errors)

    # ==========================================================================
    # Display decisions (pure)
    # ==========================================================================

    def summary_visible(self) -> bool:
        return self.tree.is_terminal(self.state.active)

    def visible_entries(self) -> List[str]:
        return self.evaluator.visible_entries(self.state.history, self.tree.summary)

    def infos(self) -> List[str]:
        infos = []
        for step_id in self.state.history:
            step = self.tree.get_step(step_id)
            if step is not None and step.info:
                infos.append(step.info)
        return infos

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _commit(self, state: HistoryState, errors: List[str]) -> HistoryState:
        self._state = state
        try:
            self.store.save(self.tree.id, state)
        except Exception as e:
            logger.exception(f"Could not persist state for tree {self.tree.id}")
            errors.append(f"persist: {e}")
        return state

    def _finish(self, transition: Transition, errors: List[str]) -> NavigationResult:
        result = self._snapshot(transition)

        if result.summary_visible:
            self._call(
                errors, "render_summary", self.adapter.render_summary,
                result.visible_entries, result.infos,
            )
        else:
            self._call(errors, "hide_summary", self.adapter.hide_summary)
        self._call(errors, "set_footer_visible", self.adapter.set_footer_visible, result.footer_visible)

        result.collaborator_errors = errors
        return result

    def _reject(self, transition: Transition, error: InvalidTransitionError) -> NavigationResult:
        logger.warning(f"Ignoring {transition.value}: {error}")
        result = self._snapshot(transition)
        result.accepted = False
        result.error = str(error)
        return result

    def _snapshot(self, transition: Transition) -> NavigationResult:
        state = self.state
        summary_visible = self.summary_visible()
        return NavigationResult(
            transition=transition,
            active=state.active,
            history=list(state.history),
            footer_visible=self.footer_visible,
            summary_visible=summary_visible,
            visible_entries=self.visible_entries() if summary_visible else [],
            infos=self.infos() if summary_visible else [],
        )

    def _call(self, errors: List[str], name: str, fn: Callable, *args):
        try:
            fn(*args)
        except Exception as e:
            logger.exception(f"Collaborator call {name} failed for tree {self.tree.id}")
            errors.append(f"{name}: {e}")
