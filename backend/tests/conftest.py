"""
Shared test fixtures

Docker is replaced by an in-process fake Engine API served through
httpx.MockTransport, so no daemon or network is needed.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from quaycheck.api.app import create_app
from quaycheck.api.services import AppServices
from quaycheck.docker.client import DockerClient
from quaycheck.startup.health import reset_health_state

FAKE_DOCKER_HOST = "tcp://socket-proxy:2375"

FAKE_VERSION = {
    "Version": "26.1.0",
    "ApiVersion": "1.45",
    "MinAPIVersion": "1.24",
    "Os": "linux",
    "Arch": "amd64",
}


class FakeDockerAPI:
    """
    Minimal Docker Engine API

    Attributes:
        containers: Payload returned by GET /containers/json
        error: Exception raised for every request when set
        response: Response returned for every request when set
        requests: Every request received
    """

    def __init__(self):
        self.containers: list[dict] = []
        self.error: Exception | None = None
        self.response: httpx.Response | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response

        path = request.url.path
        if path.endswith("/containers/json"):
            return httpx.Response(200, json=self.containers)
        if path.endswith("/version"):
            return httpx.Response(200, json=FAKE_VERSION)
        return httpx.Response(404, json={"message": "page not found"})

    @property
    def container_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/containers/json")]

    def client(self, **kwargs) -> DockerClient:
        return DockerClient(FAKE_DOCKER_HOST, transport=httpx.MockTransport(self.handler), **kwargs)


def _make_container(
    container_id: str = "3f4e8a9b1c2d5e6f7a8b9c0d",
    name: str = "web",
    state: str = "running",
    image: str = "nginx:latest",
    ports: list[dict] | None = None,
) -> dict:
    """Build one element of a GET /containers/json payload"""
    return {
        "Id": container_id,
        "Names": [f"/{name}"] if name else [],
        "Image": image,
        "State": state,
        "Status": "Up 2 hours" if state == "running" else "Exited (0) 1 hour ago",
        "Ports": ports or [],
    }


def _make_port(public: int | None, private: int, protocol: str = "tcp", ip: str = "0.0.0.0") -> dict:
    """Build one entry of a container's Ports array; public=None means exposed-only"""
    port = {"PrivatePort": private, "Type": protocol}
    if public is not None:
        port["PublicPort"] = public
        port["IP"] = ip
    return port


@pytest.fixture(autouse=True)
def clean_health_state():
    """Health state is a process-wide singleton"""
    reset_health_state()
    yield
    reset_health_state()


@pytest.fixture
def make_container():
    return _make_container


@pytest.fixture
def make_port():
    return _make_port


@pytest.fixture
def fake_docker():
    return FakeDockerAPI()


@pytest.fixture
def api_client(fake_docker):
    """TestClient running the full app (lifespan included) against the fake Docker API"""
    app = create_app(services=AppServices.from_client(fake_docker.client()))
    with TestClient(app) as client:
        yield client
