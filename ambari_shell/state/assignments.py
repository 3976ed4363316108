"""Host-group assignment bookkeeping for a cluster build.

Maps each host group of the focused blueprint to the hosts the user
assigned to it.  The key set is fixed by :meth:`HostGroupAssignments.initialize`;
assignments only ever append.  Duplicate hosts are kept as entered, the
create call on the server is the source of truth for real membership.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


class HostGroupAssignments:
    """Ordered host lists keyed by host-group name."""

    def __init__(self, group_names: Iterable[str] = ()) -> None:
        self._groups: Dict[str, List[str]] = {}
        self.initialize(group_names)

    def initialize(self, group_names: Iterable[str]) -> None:
        """Replace the whole mapping with one empty list per group name."""
        self._groups = {name: [] for name in sorted(set(group_names))}
        logger.debug("Host groups initialized: %s", ", ".join(self._groups) or "(none)")

    def assign(self, host: str, group: str) -> bool:
        """Append *host* to *group*.

        Returns ``False`` without touching the mapping when *group* is not
        one of the initialized host groups.
        """
        hosts = self._groups.get(group)
        if hosts is None:
            return False
        hosts.append(host)
        logger.info("Assigned %s to host group %s", host, group)
        return True

    def snapshot(self) -> Dict[str, List[str]]:
        """Return a copy of the current mapping for display or submission."""
        return {name: list(hosts) for name, hosts in self._groups.items()}
