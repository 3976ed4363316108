"""Orchestration workflows (cluster build, create, rollback, delete)."""

from ambari_shell.workflow.cluster_build import (
    MSG_CREATE_FAILED,
    MSG_CREATE_OK,
    MSG_DELETE_FAILED,
    MSG_DELETE_OK,
    MSG_INVALID_BLUEPRINT,
    ClusterBuildWorkflow,
    assigned_message,
    invalid_group_message,
)

__all__ = [
    "MSG_CREATE_FAILED",
    "MSG_CREATE_OK",
    "MSG_DELETE_FAILED",
    "MSG_DELETE_OK",
    "MSG_INVALID_BLUEPRINT",
    "ClusterBuildWorkflow",
    "assigned_message",
    "invalid_group_message",
]
