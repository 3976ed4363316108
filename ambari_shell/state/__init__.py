"""Session state: focus cursor, host-group assignments, shell context."""

from ambari_shell.state.assignments import HostGroupAssignments
from ambari_shell.state.context import ShellContext
from ambari_shell.state.models import Focus, FocusType

__all__ = [
    "Focus",
    "FocusType",
    "HostGroupAssignments",
    "ShellContext",
]
