"""Tests for the domain models: request payloads and schema fidelity."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hetznercloud.core.domain.models import (
    ChangeDnsPtrRequest,
    ChangeTypeRequest,
    CreateImageRequest,
    CreateServerRequest,
    EnableRescueRequest,
    ImagesResponse,
    PricingResponse,
    Server,
    ServerResponse,
    UpdateVolumeRequest,
)

from conftest import load_fixture


class TestRequestPayloads:
    def test_unset_optionals_are_dropped(self):
        request = CreateServerRequest(name="web-1", server_type="cx11", image="ubuntu-22.04")

        assert request.to_payload() == {"name": "web-1", "server_type": "cx11", "image": "ubuntu-22.04"}

    def test_change_type_defaults_upgrade_disk_false(self):
        assert ChangeTypeRequest(server_type="cx21").to_payload() == {
            "server_type": "cx21",
            "upgrade_disk": False,
        }

    def test_empty_rescue_request_serializes_to_empty_object(self):
        assert EnableRescueRequest().to_payload() == {}

    def test_dns_ptr_none_is_kept(self):
        # A null dns_ptr resets the entry to the default hostname.
        assert ChangeDnsPtrRequest(ip="1.2.3.4").to_payload() == {"ip": "1.2.3.4", "dns_ptr": None}

    def test_unknown_request_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            EnableRescueRequest(typ="linux64")

    def test_empty_server_name_is_rejected(self):
        with pytest.raises(ValidationError):
            CreateServerRequest(name="", server_type="cx11", image="ubuntu-22.04")


@pytest.mark.parametrize(
    "request_model",
    [
        CreateServerRequest(
            name="web-1",
            server_type="cx11",
            image="ubuntu-22.04",
            location="nbg1",
            ssh_keys=["deploy"],
            volumes=[4711],
            automount=True,
            user_data="#cloud-config\n",
            labels={"env": "prod"},
        ),
        EnableRescueRequest(type="linux64", ssh_keys=[1, 2]),
        CreateImageRequest(description="nightly", type="snapshot", labels={"k": "v"}),
        ChangeDnsPtrRequest(ip="2001:db8::1", dns_ptr="host.example.com"),
        UpdateVolumeRequest(name="data", labels={}),
    ],
    ids=lambda m: type(m).__name__,
)
def test_request_round_trip(request_model):
    restored = type(request_model).model_validate(request_model.to_payload())

    assert restored == request_model


class TestResponseParsing:
    def test_unknown_response_fields_are_ignored(self):
        payload = load_fixture("server")
        payload["server"]["placement_group"] = {"id": 1}
        payload["server"]["primary_disk_size"] = 20

        server = ServerResponse.model_validate(payload).server

        assert server.name == "my-server"
        assert not hasattr(server, "primary_disk_size")

    def test_minimal_server(self):
        server = Server.model_validate({"id": 1, "name": "bare", "status": "off"})

        assert server.public_net is None
        assert server.labels == {}
        assert server.volumes == []
        assert server.rescue_enabled is False

    def test_server_dump_round_trip(self):
        response = ServerResponse.model_validate(load_fixture("server"))

        assert ServerResponse.model_validate(response.model_dump(mode="json")) == response

    def test_images_fixture(self):
        response = ImagesResponse.model_validate(load_fixture("images"))

        assert response.images[0].name == "ubuntu-16.04"
        assert response.images[1].name is None

    def test_pricing_fixture(self):
        pricing = PricingResponse.model_validate(load_fixture("pricing")).pricing

        assert pricing.server_types[0].name == "cx11"
        assert pricing.server_types[0].prices[0].price_hourly.net == "0.0050000000"
