"""
API Endpoint Tests for port queries

Tests all endpoints in the ports router:
- GET /api/containers (and the /api/ports alias)
- GET /api/check
- GET /api/suggest
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from quaycheck.api.app import create_app
from quaycheck.api.services import AppServices


class TestContainersEndpoint:
    """Tests for GET /api/containers"""

    def test_lists_all_containers(self, api_client, fake_docker, make_container, make_port):
        fake_docker.containers = [
            make_container(container_id="123", name="test1", image="image1", ports=[make_port(8080, 80)]),
            make_container(container_id="456", name="old", state="exited", ports=[make_port(3000, 3000)]),
        ]

        response = api_client.get("/api/containers")

        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data] == ["123", "456"]
        assert data[0]["names"] == ["/test1"]
        assert data[0]["image"] == "image1"
        assert data[0]["state"] == "running"
        assert data[1]["state"] == "exited"
        assert data[0]["ports"] == [
            {"private_port": 80, "public_port": 8080, "type": "tcp", "ip": "0.0.0.0", "published": True}
        ]

    def test_exposed_only_port_marked(self, api_client, fake_docker, make_container, make_port):
        """Test that exposed-only ports are listed but not marked published"""
        fake_docker.containers = [make_container(ports=[make_port(None, 5432)])]

        port = api_client.get("/api/containers").json()[0]["ports"][0]

        assert port["public_port"] == 0
        assert port["published"] is False
        assert "ip" not in port

    def test_empty(self, api_client):
        response = api_client.get("/api/containers")

        assert response.status_code == 200
        assert response.json() == []

    def test_ports_alias(self, api_client, fake_docker, make_container):
        fake_docker.containers = [make_container()]

        response = api_client.get("/api/ports")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_refetches_every_call(self, api_client, fake_docker, make_container):
        """Test that no inventory is cached between requests"""
        api_client.get("/api/containers")
        fake_docker.containers = [make_container()]

        assert len(api_client.get("/api/containers").json()) == 1
        assert len(fake_docker.container_requests) == 2


class TestCheckEndpoint:
    """Tests for GET /api/check"""

    @pytest.fixture(autouse=True)
    def inventory(self, fake_docker, make_container, make_port):
        fake_docker.containers = [make_container(ports=[make_port(8080, 80)])]

    def test_used_port(self, api_client):
        response = api_client.get("/api/check", params={"port": "8080"})

        assert response.status_code == 200
        assert response.json() == {
            "port": 8080,
            "available": False,
            "message": "Port is currently in use by a Docker container",
        }

    def test_free_port(self, api_client):
        response = api_client.get("/api/check", params={"port": "9000"})

        assert response.status_code == 200
        assert response.json()["available"] is True
        assert response.json()["message"] == "Port is available"

    def test_private_port_is_free_on_host(self, api_client):
        assert api_client.get("/api/check?port=80").json()["available"] is True

    def test_missing_port(self, api_client, fake_docker):
        response = api_client.get("/api/check")

        assert response.status_code == 400
        assert response.json() == {
            "error": "validation",
            "message": "Missing port parameter",
            "code": "missing_param",
        }
        assert fake_docker.container_requests == []

    def test_invalid_port(self, api_client, fake_docker):
        response = api_client.get("/api/check?port=invalid")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_param"
        assert fake_docker.container_requests == []

    def test_negative_port_is_plain_lookup(self, api_client):
        response = api_client.get("/api/check?port=-1")

        assert response.status_code == 200
        assert response.json() == {"port": -1, "available": True, "message": "Port is available"}


class TestSuggestEndpoint:
    """Tests for GET /api/suggest"""

    @pytest.fixture(autouse=True)
    def inventory(self, fake_docker, make_container, make_port):
        fake_docker.containers = [make_container(ports=[make_port(8000, 80), make_port(8001, 81)])]

    @pytest.mark.parametrize(
        "start, expected",
        [("8000", 8002), ("9000", 9000), ("10", 1024), (None, 8002), ("abc", 8002)],
    )
    def test_suggestions(self, api_client, start, expected):
        params = {"start": start} if start is not None else {}

        response = api_client.get("/api/suggest", params=params)

        assert response.status_code == 200
        assert response.json() == {
            "port": expected,
            "found": True,
            "message": f"Suggested port: {expected}",
        }

    def test_exhausted(self, api_client, fake_docker, make_container, make_port):
        fake_docker.containers = [
            make_container(ports=[make_port(p, 80) for p in range(65530, 65536)]),
        ]

        response = api_client.get("/api/suggest?start=65530")

        assert response.status_code == 200
        assert response.json() == {"port": -1, "found": False, "message": "No free ports found in range"}


class TestUpstreamFailures:
    """Upstream failures surface as classified errors, with no retry"""

    @pytest.mark.parametrize("path", ["/api/containers", "/api/check?port=8080", "/api/suggest"])
    def test_connection_refused(self, api_client, fake_docker, path):
        fake_docker.error = httpx.ConnectError("[Errno 111] Connection refused")

        response = api_client.get(path)

        assert response.status_code == 503
        assert response.json() == {
            "error": "unavailable",
            "message": "Cannot connect to Docker. Is the daemon running?",
            "code": "docker_unavailable",
        }
        assert len(fake_docker.container_requests) == 1

    @pytest.mark.parametrize(
        "response, status, error, code",
        [
            (
                httpx.Response(400, json={"message": "client version 1.50 is too new"}),
                502,
                "api_version_mismatch",
                "docker_api_version",
            ),
            (httpx.Response(403, text="Forbidden"), 403, "permission", "docker_permission"),
            (httpx.Response(504, text="Gateway Timeout"), 504, "timeout", "docker_timeout"),
            (httpx.Response(500, json={"message": "docker down"}), 500, "unknown", "docker_error"),
        ],
    )
    def test_status_mapping(self, api_client, fake_docker, response, status, error, code):
        fake_docker.response = response

        result = api_client.get("/api/containers")

        assert result.status_code == status
        body = result.json()
        assert body["error"] == error
        assert body["code"] == code
        assert set(body) == {"error", "message", "code"}

    def test_unknown_message_carries_detail(self, api_client, fake_docker):
        fake_docker.response = httpx.Response(500, json={"message": "docker down"})

        body = api_client.get("/api/suggest").json()

        assert body["message"].startswith("Docker error: ")
        assert "docker down" in body["message"]

    def test_validation_checked_before_fetch(self, api_client, fake_docker):
        """Test that a bad port is reported even while Docker is down"""
        fake_docker.error = httpx.ConnectError("[Errno 111] Connection refused")

        response = api_client.get("/api/check?port=nope")

        assert response.status_code == 400
        assert fake_docker.container_requests == []


class TestUnexpectedFailures:
    """Failures outside the normal paths keep the {error, message, code} shape"""

    def test_malformed_inventory_is_classified(self, api_client, fake_docker, make_container):
        fake_docker.containers = [{**make_container(), "Names": [None]}]

        response = api_client.get("/api/containers")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "unknown"
        assert body["code"] == "docker_error"
        assert body["message"].startswith("Docker error: ")

    def test_unexpected_error_hides_details(self, fake_docker):
        """Test that an unexpected exception is rendered as unknown without its text"""

        class FailingQueries:
            async def check(self, raw_port):
                raise RuntimeError("secret internal detail")

        services = AppServices(docker_client=fake_docker.client(), query_service=FailingQueries())

        with TestClient(create_app(services=services)) as client:
            response = client.get("/api/check?port=8080")

        assert response.status_code == 500
        assert response.json() == {
            "error": "unknown",
            "message": "Unexpected error in check_port",
            "code": "internal_error",
        }


class TestClientDisconnect:
    """A caller that goes away cancels the query and gets 499"""

    def test_disconnect_cancels_query(self, fake_docker):
        state = {"cancelled": False}

        class SlowQueries:
            async def list_containers(self):
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    state["cancelled"] = True
                    raise

        services = AppServices(docker_client=fake_docker.client(), query_service=SlowQueries())

        with TestClient(create_app(services=services)) as client:
            with patch.object(Request, "is_disconnected", AsyncMock(return_value=True)):
                response = client.get("/api/containers")

        assert response.status_code == 499
        assert response.json() == {
            "error": "client_closed",
            "message": "Client closed the request",
            "code": "client_closed_request",
        }
        assert state["cancelled"] is True
