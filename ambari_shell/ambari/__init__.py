"""Ambari management API client."""

from ambari_shell.ambari.client import (
    REQUESTED_BY,
    AmbariClient,
    AmbariClientError,
    ManagementClient,
    cluster_request_body,
    parse_blueprint_layout,
)

__all__ = [
    "REQUESTED_BY",
    "AmbariClient",
    "AmbariClientError",
    "ManagementClient",
    "cluster_request_body",
    "parse_blueprint_layout",
]
