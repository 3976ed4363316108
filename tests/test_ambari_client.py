"""Tests for ambari_shell.ambari.client: Ambari REST client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ambari_shell.ambari.client import (
    REQUESTED_BY,
    AmbariClient,
    AmbariClientError,
    cluster_request_body,
    parse_blueprint_layout,
)


# ── helpers ──────────────────────────────────────────────────────────────


def _response(status: int = 200, body=None, text: str = ""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.text = text
    resp.json.return_value = body if body is not None else {}
    if resp.ok:
        resp.raise_for_status.return_value = None
    else:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


def _client(*responses, error=None):
    session = MagicMock()
    session.headers = {}
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.side_effect = list(responses)
    return AmbariClient("ambari.local", 8080, "admin", "secret", session=session), session


_BLUEPRINT = {
    "Blueprints": {"blueprint_name": "bp1", "stack_name": "HDP"},
    "host_groups": [
        {"name": "master", "components": [{"name": "NAMENODE"}, {"name": "ZOOKEEPER_SERVER"}]},
        {"name": "worker", "components": [{"name": "DATANODE"}]},
    ],
}


# ── Payload helpers ──────────────────────────────────────────────────────


class TestClusterRequestBody:
    def test_shape(self):
        body = cluster_request_body("bp1", {"master": ["h1"], "worker": ["h2", "h3"]})
        assert body == {
            "blueprint": "bp1",
            "host_groups": [
                {"name": "master", "hosts": [{"fqdn": "h1"}]},
                {"name": "worker", "hosts": [{"fqdn": "h2"}, {"fqdn": "h3"}]},
            ],
        }

    def test_empty_group_kept(self):
        body = cluster_request_body("bp1", {"master": []})
        assert body["host_groups"] == [{"name": "master", "hosts": []}]


class TestParseBlueprintLayout:
    def test_layout(self):
        assert parse_blueprint_layout(_BLUEPRINT) == {
            "master": ["NAMENODE", "ZOOKEEPER_SERVER"],
            "worker": ["DATANODE"],
        }

    def test_missing_sections(self):
        assert parse_blueprint_layout({}) == {}
        assert parse_blueprint_layout({"host_groups": [{"name": "g"}]}) == {"g": []}

    def test_nameless_group_skipped(self):
        assert parse_blueprint_layout({"host_groups": [{"components": []}]}) == {}


# ── Construction ─────────────────────────────────────────────────────────


class TestConstruction:
    def test_base_url_http(self):
        client, _ = _client()
        assert client.base_url == "http://ambari.local:8080/api/v1"

    def test_base_url_https(self):
        session = MagicMock()
        session.headers = {}
        client = AmbariClient("h", 8443, use_ssl=True, session=session)
        assert client.base_url == "https://h:8443/api/v1"

    def test_auth_and_header(self):
        _, session = _client()
        assert session.auth == ("admin", "secret")
        assert session.headers["X-Requested-By"] == REQUESTED_BY


# ── Blueprints ───────────────────────────────────────────────────────────


class TestBlueprints:
    def test_exists(self):
        client, session = _client(_response(200, _BLUEPRINT))
        assert client.blueprint_exists("bp1") is True
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == "http://ambari.local:8080/api/v1/blueprints/bp1"
        assert session.request.call_args.kwargs["timeout"] == 30.0

    def test_not_found(self):
        client, _ = _client(_response(404))
        assert client.blueprint_exists("nope") is False

    def test_exists_transport_error(self):
        client, _ = _client(error=requests.ConnectionError("refused"))
        assert client.blueprint_exists("bp1") is False

    def test_layout(self):
        client, _ = _client(_response(200, _BLUEPRINT))
        assert client.blueprint_layout("bp1")["worker"] == ["DATANODE"]

    def test_host_groups(self):
        client, _ = _client(_response(200, _BLUEPRINT))
        assert client.host_groups("bp1") == {"master", "worker"}

    def test_layout_http_error(self):
        client, _ = _client(_response(500))
        with pytest.raises(AmbariClientError, match="blueprints/bp1"):
            client.blueprint_layout("bp1")

    def test_layout_invalid_json(self):
        resp = _response(200)
        resp.json.side_effect = ValueError("no json")
        client, _ = _client(resp)
        with pytest.raises(AmbariClientError, match="invalid JSON"):
            client.blueprint_layout("bp1")

    def test_blueprint_ids_sorted(self):
        body = {"items": [
            {"Blueprints": {"blueprint_name": "zeta"}},
            {"Blueprints": {"blueprint_name": "alpha"}},
            {"Blueprints": {}},
        ]}
        client, _ = _client(_response(200, body))
        assert client.blueprint_ids() == ["alpha", "zeta"]

    def test_blueprint_ids_transport_error(self):
        client, _ = _client(error=requests.Timeout("slow"))
        with pytest.raises(AmbariClientError):
            client.blueprint_ids()


# ── Hosts ────────────────────────────────────────────────────────────────


class TestHosts:
    def test_host_names(self):
        body = {"items": [
            {"Hosts": {"host_name": "node2.local"}},
            {"Hosts": {"host_name": "node1.local"}},
        ]}
        client, session = _client(_response(200, body))
        assert client.host_names() == ["node1.local", "node2.local"]
        assert session.request.call_args.args[1].endswith("/api/v1/hosts")

    def test_no_items(self):
        client, _ = _client(_response(200, {}))
        assert client.host_names() == []


# ── Clusters ─────────────────────────────────────────────────────────────


class TestCreateCluster:
    def test_accepted(self):
        client, session = _client(_response(202))
        assert client.create_cluster("bp1", "bp1", {"master": ["h1"]}) is True
        method, url = session.request.call_args.args
        assert method == "POST"
        assert url.endswith("/clusters/bp1")
        assert session.request.call_args.kwargs["json"] == {
            "blueprint": "bp1",
            "host_groups": [{"name": "master", "hosts": [{"fqdn": "h1"}]}],
        }

    def test_rejected(self):
        client, _ = _client(_response(400, text="Invalid host group"))
        assert client.create_cluster("bp1", "bp1", {}) is False

    def test_transport_error(self):
        client, _ = _client(error=requests.ConnectionError("refused"))
        assert client.create_cluster("bp1", "bp1", {}) is False


class TestDeleteCluster:
    def test_deleted(self):
        client, session = _client(_response(200))
        assert client.delete_cluster("bp1") is True
        method, url = session.request.call_args.args
        assert method == "DELETE"
        assert url.endswith("/clusters/bp1")

    def test_rejected(self):
        client, _ = _client(_response(404))
        assert client.delete_cluster("bp1") is False

    def test_transport_error(self):
        client, _ = _client(error=requests.ConnectionError("refused"))
        assert client.delete_cluster("bp1") is False


class TestClose:
    def test_close_closes_session(self):
        client, session = _client()
        client.close()
        session.close.assert_called_once()
