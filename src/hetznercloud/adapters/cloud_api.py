"""Hetzner Cloud API binding.

Responsibility:
- One method per remote endpoint: verb + path template + request model +
  response model.
- Serialize request models to JSON and parse the body into response models.

What it does NOT do:
- No retries, no pagination, no interpretation of errors. `httpx` errors,
  `json.JSONDecodeError` and `pydantic.ValidationError` reach the caller as is.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any, TypeVar

import httpx

from hetznercloud.adapters.http_client import build_client
from hetznercloud.core.config import AppSettings
from hetznercloud.core.domain.models import (
    ActionResponse,
    ApiModel,
    ApiRequest,
    AttachIsoRequest,
    ChangeDnsPtrRequest,
    ChangeTypeRequest,
    CreateImageRequest,
    CreateImageResponse,
    CreateServerRequest,
    CreateServerResponse,
    DatacenterResponse,
    DatacentersResponse,
    EnableBackupRequest,
    EnableRescueRequest,
    EnableRescueResponse,
    ImagesResponse,
    IsoResponse,
    IsosResponse,
    MetricsResponse,
    PricingResponse,
    RebuildServerRequest,
    RebuildServerResponse,
    RenameServerRequest,
    ResetPasswordResponse,
    ServerResponse,
    ServersResponse,
    UpdateVolumeRequest,
    VolumeResponse,
    VolumesResponse,
)
from hetznercloud.core.logger import get_logger

ResponseT = TypeVar("ResponseT", bound=ApiModel)

logger = get_logger(__name__)


class HetznerCloudAPI:
    """Synchronous client for `https://api.hetzner.cloud/v1`.

    The instance only holds the token, the base URL and the connection pool,
    so it can be shared between independent calls.

    Usage:
        with HetznerCloudAPI(token) as api:
            servers = api.get_servers().servers

    An injected `client` must already carry the base URL and auth headers
    (see `build_client`), so `token` is optional with it and `base_url` is
    rejected.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        settings: AppSettings | None = None,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        if client is not None:
            if base_url is not None:
                raise ValueError("base_url cannot be combined with an injected client; set it on the client.")
            self._client = client
            return

        token = token or self._settings.api_token
        if not token:
            raise ValueError("An API token is required (argument or HCLOUD_API_TOKEN).")
        self._client = build_client(token, self._settings, base_url=base_url)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def close(self) -> None:
        """Close the underlying connection pool (only if we created it)."""

        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HetznerCloudAPI:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        response_model: type[ResponseT],
        *,
        body: ApiRequest | None = None,
        params: dict[str, Any] | None = None,
    ) -> ResponseT:
        payload = body.to_payload() if body is not None else None
        log = logger.bind(method=method, path=path)
        log.debug("hcloud.request", params=params, has_body=payload is not None)

        started = time.perf_counter()
        response = self._client.request(method, path, json=payload, params=params)
        log.debug(
            "hcloud.response",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        response.raise_for_status()
        return response_model.model_validate(response.json())

    # --- servers -----------------------------------------------------------

    def create_server(self, request: CreateServerRequest) -> CreateServerResponse:
        """Create a cloud server."""

        return self._request("POST", "/servers", CreateServerResponse, body=request)

    def get_servers(self) -> ServersResponse:
        """All servers of the project."""

        return self._request("GET", "/servers", ServersResponse)

    def get_servers_by_name(self, name: str) -> ServersResponse:
        """Servers filtered by exact name (zero or one entry)."""

        return self._request("GET", "/servers", ServersResponse, params={"name": name})

    def get_server(self, server_id: int) -> ServerResponse:
        return self._request("GET", f"/servers/{server_id}", ServerResponse)

    def change_server_name(self, server_id: int, request: RenameServerRequest) -> ServerResponse:
        """Rename the server in the Cloud Console (not the hostname inside the OS)."""

        return self._request("PUT", f"/servers/{server_id}", ServerResponse, body=request)

    def delete_server(self, server_id: int) -> ActionResponse:
        return self._request("DELETE", f"/servers/{server_id}", ActionResponse)

    # --- power -------------------------------------------------------------

    def _server_action(
        self,
        server_id: int,
        action: str,
        response_model: type[ResponseT],
        body: ApiRequest | None = None,
    ) -> ResponseT:
        return self._request(
            "POST",
            f"/servers/{server_id}/actions/{action}",
            response_model,
            body=body,
        )

    def power_on_server(self, server_id: int) -> ActionResponse:
        return self._server_action(server_id, "poweron", ActionResponse)

    def soft_reboot_server(self, server_id: int) -> ActionResponse:
        """ACPI reboot; the OS must support it."""

        return self._server_action(server_id, "reboot", ActionResponse)

    def reset_server(self, server_id: int) -> ActionResponse:
        """Hard reset (like pressing the reset button)."""

        return self._server_action(server_id, "reset", ActionResponse)

    def shutdown_server(self, server_id: int) -> ActionResponse:
        """ACPI shutdown; the server may ignore it."""

        return self._server_action(server_id, "shutdown", ActionResponse)

    def force_shutdown_server(self, server_id: int) -> ActionResponse:
        """Cut power immediately. Data not yet flushed to disk is lost."""

        return self._server_action(server_id, "poweroff", ActionResponse)

    def reset_root_password(self, server_id: int) -> ResetPasswordResponse:
        """Reset the root password; needs the qemu guest agent inside the server."""

        return self._server_action(server_id, "reset_password", ResetPasswordResponse)

    # --- rescue ------------------------------------------------------------

    def enable_rescue(
        self,
        server_id: int,
        request: EnableRescueRequest | None = None,
    ) -> EnableRescueResponse:
        """Enable the rescue system for the next boot.

        Without a request the API defaults apply (linux64, no SSH keys).
        """

        return self._server_action(server_id, "enable_rescue", EnableRescueResponse, request)

    def enable_rescue_and_reset(
        self,
        server_id: int,
        request: EnableRescueRequest | None = None,
    ) -> EnableRescueResponse:
        """Enable rescue mode, then reset the server so it boots into it.

        Two independent calls: if the reset fails, rescue mode stays enabled
        and the reset error is raised.
        """

        rescue = self.enable_rescue(server_id, request)
        self.reset_server(server_id)
        return rescue

    def disable_rescue(self, server_id: int) -> ActionResponse:
        """Only needed if the server hasn't booted into rescue mode yet."""

        return self._server_action(server_id, "disable_rescue", ActionResponse)

    # --- images / rebuild / type ------------------------------------------

    def get_images(self) -> ImagesResponse:
        return self._request("GET", "/images", ImagesResponse)

    def rebuild_server(self, server_id: int, request: RebuildServerRequest) -> RebuildServerResponse:
        """Reinstall the server from an image, e.g. `ubuntu-22.04`. The disk is wiped."""

        return self._server_action(server_id, "rebuild", RebuildServerResponse, request)

    def change_server_type(self, server_id: int, request: ChangeTypeRequest) -> ActionResponse:
        """Change the server type, e.g. cx11 -> cx21. The server must be off."""

        return self._server_action(server_id, "change_type", ActionResponse, request)

    def create_image(self, server_id: int, request: CreateImageRequest) -> CreateImageResponse:
        """Create a snapshot or backup image from the server's disk."""

        return self._server_action(server_id, "create_image", CreateImageResponse, request)

    # --- metrics -----------------------------------------------------------

    def get_metrics(
        self,
        server_id: int,
        metric_type: str,
        start: datetime,
        end: datetime,
    ) -> MetricsResponse:
        """Metrics of a server.

        `metric_type` is `cpu`, `disk`, `network` or a comma separated mix
        (`cpu,disk`). `start`/`end` must be timezone-aware and are sent as
        ISO-8601; naive datetimes raise `ValueError`.
        """

        for label, value in (("start", start), ("end", end)):
            if value.tzinfo is None or value.utcoffset() is None:
                raise ValueError(f"{label} must be timezone-aware, got naive {value.isoformat()}")

        params = {
            "type": metric_type,
            "start": start.isoformat(),
            "end": end.isoformat(),
        }
        return self._request("GET", f"/servers/{server_id}/metrics", MetricsResponse, params=params)

    # --- backups -----------------------------------------------------------

    def enable_backup(self, server_id: int, request: EnableBackupRequest) -> ActionResponse:
        """Enable daily backups. Increases the server price by 20%."""

        return self._server_action(server_id, "enable_backup", ActionResponse, request)

    def disable_backup(self, server_id: int) -> ActionResponse:
        """Disable backups. All existing backups are deleted immediately."""

        return self._server_action(server_id, "disable_backup", ActionResponse)

    # --- ISOs --------------------------------------------------------------

    def get_isos(self) -> IsosResponse:
        return self._request("GET", "/isos", IsosResponse)

    def get_iso(self, iso_id: int) -> IsoResponse:
        return self._request("GET", f"/isos/{iso_id}", IsoResponse)

    def attach_iso(self, server_id: int, request: AttachIsoRequest) -> ActionResponse:
        """Attach an ISO (see `get_isos`) to the server's virtual drive."""

        return self._server_action(server_id, "attach_iso", ActionResponse, request)

    def detach_iso(self, server_id: int) -> ActionResponse:
        return self._server_action(server_id, "detach_iso", ActionResponse)

    # --- networking --------------------------------------------------------

    def change_dns_ptr(self, server_id: int, request: ChangeDnsPtrRequest) -> ActionResponse:
        """Change the reverse DNS entry of a server IP.

        Floating IPs assigned to the server are not affected.
        """

        return self._server_action(server_id, "change_dns_ptr", ActionResponse, request)

    # --- datacenters / pricing --------------------------------------------

    def get_datacenter(self, datacenter_id: int) -> DatacenterResponse:
        return self._request("GET", f"/datacenters/{datacenter_id}", DatacenterResponse)

    def get_datacenters(self) -> DatacentersResponse:
        """All datacenters plus the id recommended for new servers."""

        return self._request("GET", "/datacenters", DatacentersResponse)

    def get_datacenters_by_name(self, name: str) -> DatacentersResponse:
        return self._request("GET", "/datacenters", DatacentersResponse, params={"name": name})

    def get_pricing(self) -> PricingResponse:
        return self._request("GET", "/pricing", PricingResponse)

    # --- volumes -----------------------------------------------------------

    def get_volumes(self) -> VolumesResponse:
        return self._request("GET", "/volumes", VolumesResponse)

    def get_volume(self, volume_id: int) -> VolumeResponse:
        return self._request("GET", f"/volumes/{volume_id}", VolumeResponse)

    def update_volume(self, volume_id: int, request: UpdateVolumeRequest) -> VolumeResponse:
        """Rename a volume and/or replace its labels."""

        return self._request("PUT", f"/volumes/{volume_id}", VolumeResponse, body=request)
