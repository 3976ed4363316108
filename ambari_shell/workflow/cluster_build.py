"""Cluster build workflow: build → assign → create / delete.

Drives the focus state machine held by a :class:`ShellContext` and
delegates every remote effect to a :class:`ManagementClient`.  Each
operation returns a human-readable status string; remote rejections are
reported, never raised.

Create failure handling::

    create_cluster() ──False──▶ delete_cluster(blueprint)   (best effort)
                                 └─▶ fresh, empty host-group store
                                     focus stays BUILDING(blueprint)

The outcome of the rollback delete is not reported to the user; a failed
rollback is only logged, so remote state may be left partially created.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ambari_shell.ambari.client import AmbariClientError, ManagementClient
from ambari_shell.state.context import ShellContext
from ambari_shell.ui import render_multi_value_map

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Status messages
# ---------------------------------------------------------------------------

MSG_INVALID_BLUEPRINT = "Not a valid blueprint id"
MSG_CREATE_OK = "Successfully created cluster"
MSG_CREATE_FAILED = "Failed to create cluster"
MSG_DELETE_OK = "Successfully deleted the cluster"
MSG_DELETE_FAILED = "Could not delete the cluster"


def assigned_message(host: str, group: str) -> str:
    return f"{host} has been added to {group}"


def invalid_group_message(group: str) -> str:
    return f"{group} is not a valid host group"


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------


class ClusterBuildWorkflow:
    """Orchestrates a single session's cluster build.

    Args:
        client: Management service used for lookups and create/delete.
        context: Session state; shared with the command registry.
    """

    def __init__(self, client: ManagementClient, context: ShellContext) -> None:
        self.client = client
        self.context = context

    # -- build --------------------------------------------------------------

    def start_build(self, blueprint_id: str) -> str:
        """Focus *blueprint_id* and return its host-group layout table.

        Unknown or blank blueprint ids leave the session untouched, as does
        a lookup error while fetching the layout or host groups.
        """
        if not blueprint_id.strip() or not self.client.blueprint_exists(blueprint_id):
            logger.info("Blueprint %r does not exist", blueprint_id)
            return MSG_INVALID_BLUEPRINT

        layout = self.client.blueprint_layout(blueprint_id)
        groups = self.client.host_groups(blueprint_id)
        self.context.focus_blueprint(blueprint_id)
        self.context.reset_assignments(groups)
        return render_multi_value_map(layout, "HOSTGROUP", "COMPONENT")

    def _reset_host_groups(self) -> None:
        """Start assignment over; keeps the known groups if the lookup fails."""
        blueprint_id = self.context.focus.value
        try:
            groups = self.client.host_groups(blueprint_id)
        except AmbariClientError as exc:
            logger.error("Host group lookup for %s failed: %s", blueprint_id, exc)
            groups = self.preview_assignments().keys()
        self.context.reset_assignments(groups)

    # -- assign / preview ---------------------------------------------------

    def assign_host(self, host: str, group: str) -> str:
        if self.context.assignments is not None and self.context.assignments.assign(host, group):
            return assigned_message(host, group)
        return invalid_group_message(group)

    def preview_assignments(self) -> Dict[str, List[str]]:
        """Current host-group → hosts mapping (a copy)."""
        if self.context.assignments is None:
            return {}
        return self.context.assignments.snapshot()

    # -- create / delete ----------------------------------------------------

    def create_cluster(self) -> str:
        """Create a cluster named after the focused blueprint.

        On failure, attempts a rollback delete and starts the host
        assignment over with an empty store.
        """
        blueprint_id = self.context.focus.value
        success = self.client.create_cluster(
            blueprint_id, blueprint_id, self.preview_assignments(),
        )
        if success:
            self.context.connect_cluster()
            return MSG_CREATE_OK

        logger.warning("Cluster %s creation failed; rolling back", blueprint_id)
        if not self.client.delete_cluster(blueprint_id):
            logger.warning(
                "Rollback delete of %s failed; remote state may be incomplete",
                blueprint_id,
            )
        self._reset_host_groups()
        return MSG_CREATE_FAILED

    def delete_cluster(self) -> str:
        cluster_id = self.context.focus.value
        if not self.client.delete_cluster(cluster_id):
            return MSG_DELETE_FAILED
        self.context.reset_focus()
        return MSG_DELETE_OK
