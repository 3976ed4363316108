"""Per-session shell context.

One :class:`ShellContext` is created per shell session and handed to the
workflow and the command registry.  It owns the :class:`Focus` and, while
a build is in progress, the :class:`HostGroupAssignments`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ambari_shell.state.assignments import HostGroupAssignments
from ambari_shell.state.models import Focus, FocusType

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_NAME = "ambari-shell"


@dataclass
class ShellContext:
    """Mutable session state with the command availability guards.

    Attributes:
        focus: Current focus; replaced (never mutated) on each transition.
        assignments: Host-group store, ``None`` outside of ``BUILDING``.
        prompt_name: Prompt shown while nothing is focused.
    """

    focus: Focus = field(default_factory=Focus.none)
    assignments: Optional[HostGroupAssignments] = None
    prompt_name: str = DEFAULT_PROMPT_NAME

    # -- transitions --------------------------------------------------------

    def focus_blueprint(self, blueprint_id: str) -> None:
        """``NONE → BUILDING``; the store is set up by :meth:`reset_assignments`."""
        self._move(Focus.building(blueprint_id))

    def connect_cluster(self) -> None:
        """``BUILDING → CONNECTED``, reusing the blueprint id as cluster id."""
        self._move(Focus.connected(self.focus.value))
        self.assignments = None

    def reset_focus(self) -> None:
        """Back to ``NONE``; any build bookkeeping is discarded."""
        self._move(Focus.none())
        self.assignments = None

    def reset_assignments(self, group_names: Iterable[str]) -> HostGroupAssignments:
        """Install a fresh, empty store for *group_names*."""
        self.assignments = HostGroupAssignments(group_names)
        return self.assignments

    def _move(self, new_focus: Focus) -> None:
        logger.info(
            "Focus %s(%s) -> %s(%s)",
            self.focus.state.value,
            self.focus.value or "",
            new_focus.state.value,
            new_focus.value or "",
        )
        self.focus = new_focus

    # -- guards -------------------------------------------------------------

    def can_build(self) -> bool:
        return self.focus.state == FocusType.NONE

    def can_assign_or_preview(self) -> bool:
        return self.focus.state == FocusType.BUILDING

    def can_create(self) -> bool:
        return self.focus.state == FocusType.BUILDING

    def can_delete(self) -> bool:
        return self.focus.state == FocusType.CONNECTED

    # -- prompt -------------------------------------------------------------

    def prompt(self) -> str:
        """Prompt text reflecting the current focus."""
        if self.focus.is_building:
            return f"blueprint:{self.focus.value}>"
        if self.focus.is_connected:
            return f"cluster:{self.focus.value}>"
        return f"{self.prompt_name}>"
