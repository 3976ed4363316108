"""Ambari management API client.

:class:`ManagementClient` is the contract the cluster build workflow
depends on; :class:`AmbariClient` implements it over the Ambari REST API
(``/api/v1``) with a single :class:`requests.Session`.

Two families of calls:

* **Lookups** (``blueprint_layout``, ``host_groups``, listings) raise
  :class:`AmbariClientError` when the server cannot answer.
* **Mutations** (``create_cluster``, ``delete_cluster``) and
  ``blueprint_exists`` never raise; failures are logged and reported as
  ``False`` so the shell can turn them into status messages.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Set

import requests

logger = logging.getLogger(__name__)

#: Value of the ``X-Requested-By`` header Ambari requires on mutations.
REQUESTED_BY: str = "ambari-shell"

DEFAULT_TIMEOUT: float = 30.0


class AmbariClientError(RuntimeError):
    """Raised when a lookup against the Ambari server fails."""


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class ManagementClient(Protocol):
    """Operations the shell consumes from the management service."""

    def blueprint_exists(self, blueprint_id: str) -> bool: ...

    def blueprint_layout(self, blueprint_id: str) -> Dict[str, List[str]]: ...

    def host_groups(self, blueprint_id: str) -> Set[str]: ...

    def create_cluster(
        self,
        name: str,
        blueprint_id: str,
        assignments: Mapping[str, Sequence[str]],
    ) -> bool: ...

    def delete_cluster(self, cluster_id: str) -> bool: ...

    def blueprint_ids(self) -> List[str]: ...

    def host_names(self) -> List[str]: ...


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def cluster_request_body(
    blueprint_id: str,
    assignments: Mapping[str, Sequence[str]],
) -> Dict[str, Any]:
    """Build the ``POST /clusters/{name}`` body.

    Example::

        {"blueprint": "bp1",
         "host_groups": [{"name": "master", "hosts": [{"fqdn": "h1"}]}]}
    """
    return {
        "blueprint": blueprint_id,
        "host_groups": [
            {"name": group, "hosts": [{"fqdn": host} for host in hosts]}
            for group, hosts in assignments.items()
        ],
    }


def parse_blueprint_layout(body: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Map each host group of a blueprint document to its component names."""
    layout: Dict[str, List[str]] = {}
    for group in body.get("host_groups", []) or []:
        name = group.get("name")
        if not name:
            continue
        layout[name] = [
            c["name"] for c in group.get("components", []) or [] if c.get("name")
        ]
    return layout


# ---------------------------------------------------------------------------
# REST implementation
# ---------------------------------------------------------------------------


class AmbariClient:
    """Synchronous Ambari REST client.

    Args:
        host: Ambari server host name.
        port: Ambari server port.
        user: Basic-auth user.
        password: Basic-auth password.
        use_ssl: Use ``https`` instead of ``http``.
        timeout: Per-request timeout in seconds.
        session: Pre-built session (tests inject a mock here).
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8080,
        user: str = "admin",
        password: str = "admin",
        *,
        use_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        scheme = "https" if use_ssl else "http"
        self.base_url = f"{scheme}://{host}:{port}/api/v1"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (user, password)
        self._session.headers.update({"X-Requested-By": REQUESTED_BY})

    # -- transport ----------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        return self._session.request(method, url, timeout=self.timeout, **kwargs)

    def _get_json(self, path: str) -> Dict[str, Any]:
        try:
            resp = self._request("GET", path)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            logger.error("GET %s failed: %s", path, exc)
            raise AmbariClientError(f"Ambari request GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise AmbariClientError(f"Ambari returned invalid JSON for {path}") from exc

    # -- blueprints ---------------------------------------------------------

    def blueprint_exists(self, blueprint_id: str) -> bool:
        try:
            resp = self._request("GET", f"blueprints/{blueprint_id}")
        except requests.RequestException as exc:
            logger.error("Blueprint lookup for %s failed: %s", blueprint_id, exc)
            return False
        return resp.ok

    def blueprint_layout(self, blueprint_id: str) -> Dict[str, List[str]]:
        return parse_blueprint_layout(self._get_json(f"blueprints/{blueprint_id}"))

    def host_groups(self, blueprint_id: str) -> Set[str]:
        return set(self.blueprint_layout(blueprint_id))

    def blueprint_ids(self) -> List[str]:
        body = self._get_json("blueprints")
        return sorted(
            item["Blueprints"]["blueprint_name"]
            for item in body.get("items", [])
            if item.get("Blueprints", {}).get("blueprint_name")
        )

    # -- hosts --------------------------------------------------------------

    def host_names(self) -> List[str]:
        body = self._get_json("hosts")
        return sorted(
            item["Hosts"]["host_name"]
            for item in body.get("items", [])
            if item.get("Hosts", {}).get("host_name")
        )

    # -- clusters -----------------------------------------------------------

    def create_cluster(
        self,
        name: str,
        blueprint_id: str,
        assignments: Mapping[str, Sequence[str]],
    ) -> bool:
        body = cluster_request_body(blueprint_id, assignments)
        try:
            resp = self._request("POST", f"clusters/{name}", json=body)
        except requests.RequestException as exc:
            logger.error("Cluster creation request for %s failed: %s", name, exc)
            return False
        if not resp.ok:
            logger.warning(
                "Cluster creation rejected (HTTP %d): %s",
                resp.status_code,
                resp.text or "(no body)",
            )
            return False
        logger.info("Cluster creation accepted: %s (blueprint %s)", name, blueprint_id)
        return True

    def delete_cluster(self, cluster_id: str) -> bool:
        try:
            resp = self._request("DELETE", f"clusters/{cluster_id}")
        except requests.RequestException as exc:
            logger.error("Cluster deletion request for %s failed: %s", cluster_id, exc)
            return False
        if not resp.ok:
            logger.warning(
                "Cluster deletion rejected (HTTP %d): %s",
                resp.status_code,
                resp.text or "(no body)",
            )
            return False
        logger.info("Cluster deleted: %s", cluster_id)
        return True

    def close(self) -> None:
        self._session.close()
