"""
Tests for Docker Engine API payload parsing
"""

import pytest

from quaycheck.docker.models import Container, ContainerState, DockerVersion, PortMapping


class TestPortMappingFromApi:
    """Tests for PortMapping.from_api"""

    def test_published_port(self):
        mapping = PortMapping.from_api({"IP": "0.0.0.0", "PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"})

        assert mapping == PortMapping(private_port=80, public_port=8080, protocol="tcp", host_ip="0.0.0.0")
        assert mapping.published is True

    def test_exposed_only_port(self):
        """Test that a missing PublicPort becomes 0 and is not published"""
        mapping = PortMapping.from_api({"PrivatePort": 5432, "Type": "tcp"})

        assert mapping.public_port == 0
        assert mapping.host_ip == ""
        assert mapping.published is False

    def test_udp(self):
        mapping = PortMapping.from_api({"PrivatePort": 53, "PublicPort": 53, "Type": "udp"})

        assert mapping.protocol == "udp"


class TestContainerFromApi:
    """Tests for Container.from_api"""

    def test_full_payload(self, make_container, make_port):
        payload = make_container(
            container_id="123456789abcdef",
            name="test1",
            image="image1",
            ports=[make_port(8080, 80), make_port(None, 443)],
        )

        container = Container.from_api(payload)

        assert container.id == "123456789abcdef"
        assert container.names == ["/test1"]
        assert container.image == "image1"
        assert container.state == ContainerState.RUNNING
        assert container.is_running
        assert [p.public_port for p in container.ports] == [8080, 0]

    def test_unknown_state_kept_verbatim(self, make_container):
        container = Container.from_api(make_container(state="hibernating"))

        assert container.state == "hibernating"
        assert not container.is_running

    def test_state_case_insensitive(self, make_container):
        assert Container.from_api(make_container(state="Running")).is_running

    def test_missing_fields(self):
        """Test that null Names and Ports are tolerated"""
        container = Container.from_api({"Id": "abc", "Names": None, "Ports": None, "State": "exited"})

        assert container.names == []
        assert container.ports == []
        assert container.state == ContainerState.EXITED

    def test_display_name_strips_slash(self, make_container):
        assert Container.from_api(make_container(name="db")).display_name == "db"

    def test_display_name_falls_back_to_short_id(self, make_container):
        container = Container.from_api(make_container(container_id="0123456789abcdef", name=""))

        assert container.display_name == "0123456789ab"


def test_docker_version_from_api():
    version = DockerVersion.from_api({"Version": "24.0.7", "ApiVersion": "1.43"})

    assert version.version == "24.0.7"
    assert version.api_version == "1.43"
    assert version.min_api_version is None


class TestMalformedPayload:
    """Non-string fields are rejected instead of flowing into responses"""

    @pytest.mark.parametrize(
        "overrides",
        [{"Names": [None]}, {"Names": "/web"}, {"Id": 123}, {"Image": ["nginx"]}, {"State": 1}],
    )
    def test_rejected(self, make_container, overrides):
        payload = {**make_container(), **overrides}

        with pytest.raises(TypeError):
            Container.from_api(payload)

    def test_null_image_is_empty(self, make_container):
        payload = {**make_container(), "Image": None}

        assert Container.from_api(payload).image == ""

    def test_non_string_protocol_rejected(self):
        with pytest.raises(TypeError):
            PortMapping.from_api({"PrivatePort": 80, "Type": 6})
