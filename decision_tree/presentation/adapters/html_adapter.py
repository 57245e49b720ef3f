"""
HTML Presentation Adapter.

Keeps a view model of what the NavigationEngine asked to display and renders
it to the decision tree markup (.step, .decision-tree__summary,
.decision-tree__footer) with Jinja2. Cookie side effects are collected as
Set-Cookie header values for the embedding page to send.
"""

import logging
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Dict, List, Optional
from urllib.parse import quote

from ...domain.models import DecisionTree
from ..interface import PresentationAdapter
from ..loader import render
from ..templates import Template

logger = logging.getLogger(__name__)


class HtmlPresentationAdapter(PresentationAdapter):
    def __init__(self, tree: DecisionTree, cookie_days: Optional[int] = None):
        self.tree = tree
        self.cookie_days = cookie_days

        self.active: Optional[str] = None
        self.summary_visible = False
        self.visible_entries: List[str] = []
        self.infos: List[str] = []
        self.footer_visible = False
        self.hidden = False
        self.hidden_reason: Optional[str] = None
        # Cookie name -> Set-Cookie header value
        self.cookies: Dict[str, str] = {}

    # --- PresentationAdapter ---

    def render_step(self, step_id: str):
        self.active = step_id

    def render_summary(self, visible_entry_ids: List[str], infos: List[str]):
        self.summary_visible = True
        self.visible_entries = list(visible_entry_ids)
        self.infos = list(infos)

    def hide_summary(self):
        self.summary_visible = False
        self.visible_entries = []
        self.infos = []

    def set_footer_visible(self, visible: bool):
        self.footer_visible = visible

    def apply_side_effect(self, step_id: str):
        step = self.tree.get_step(step_id)
        if step is None or not step.cookie:
            return
        self.cookies[step.cookie] = self.cookie_header(step.cookie, step_id)

    def hide_tree(self, reason: str):
        self.hidden = True
        self.hidden_reason = reason
        logger.warning(f"Cannot activate decision tree with ID {self.tree.id}. {reason}")

    # --- Rendering ---

    def cookie_header(self, name: str, value: str) -> str:
        parts = [f"{quote(name, safe='')}={quote(value, safe='')}"]
        if self.cookie_days:
            expires = datetime.now(timezone.utc) + timedelta(days=self.cookie_days)
            parts.append(f"expires={format_datetime(expires, usegmt=True)}")
        parts += ["path=/", "SameSite=None", "Secure"]
        return "; ".join(parts)

    def render(self) -> str:
        return render(
            Template.TREE,
            tree=self.tree,
            active=self.active,
            initialized=self.active is not None,
            hidden=self.hidden,
            summary_visible=self.summary_visible,
            visible_entries=self.visible_entries,
            infos=self.infos,
            footer_visible=self.footer_visible,
        )

    def render_summary_fragment(self) -> str:
        """Only the summary block, for replacing it in place after a transition."""
        return render(
            Template.SUMMARY,
            tree=self.tree,
            summary_visible=self.summary_visible,
            visible_entries=self.visible_entries,
            infos=self.infos,
        )
