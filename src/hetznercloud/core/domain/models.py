"""Domain models (Pydantic v2) for the Hetzner Cloud API.

Why Pydantic in the domain:
- The API speaks JSON; the models give us parsing, type coercion and a
  stable `model_dump` for request bodies without hand-written mappers.
- The models describe *what* the API returns, not *how* it is fetched.

Notes:
- Responses ignore unknown fields so new API attributes don't break parsing.
- Request bodies are dumped with `exclude_none=True`: optional fields that the
  caller leaves unset never reach the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ApiModel(BaseModel):
    """Base for every record returned by the API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApiRequest(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready body for the request."""

        return self.model_dump(mode="json", exclude_none=True)


# --- general records -------------------------------------------------------


class Protection(ApiModel):
    delete: bool = False
    rebuild: bool | None = None


class Price(ApiModel):
    """Net/gross pair. The API sends amounts as decimal strings."""

    net: str
    gross: str


class LocationPrice(ApiModel):
    location: str
    price_hourly: Price
    price_monthly: Price


class ServerType(ApiModel):
    id: int
    name: str
    description: str | None = None
    cores: int | None = None
    memory: float | None = None
    disk: int | None = None
    storage_type: str | None = None
    cpu_type: str | None = None
    deprecated: bool | None = None
    prices: list[LocationPrice] = Field(default_factory=list)


class Location(ApiModel):
    id: int
    name: str
    description: str | None = None
    country: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    network_zone: str | None = None


class DatacenterServerTypes(ApiModel):
    supported: list[int] = Field(default_factory=list)
    available: list[int] = Field(default_factory=list)
    available_for_migration: list[int] = Field(default_factory=list)


class Datacenter(ApiModel):
    id: int
    name: str
    description: str | None = None
    location: Location | None = None
    server_types: DatacenterServerTypes | None = None


class CreatedFrom(ApiModel):
    id: int
    name: str


class Image(ApiModel):
    id: int
    type: str = Field(..., description="system, snapshot or backup.")
    status: str | None = None
    name: str | None = None
    description: str | None = None
    image_size: float | None = None
    disk_size: float | None = None
    created: datetime | None = None
    created_from: CreatedFrom | None = None
    bound_to: int | None = None
    os_flavor: str | None = None
    os_version: str | None = None
    rapid_deploy: bool | None = None
    deprecated: datetime | None = None
    protection: Protection | None = None
    labels: dict[str, str] = Field(default_factory=dict)


class ISO(ApiModel):
    id: int
    name: str
    description: str | None = None
    type: str | None = Field(default=None, description="public or private.")
    deprecated: datetime | None = None


class IPv4(ApiModel):
    ip: str
    blocked: bool = False
    dns_ptr: str | None = None


class IPv6DnsPtr(ApiModel):
    ip: str
    dns_ptr: str


class IPv6(ApiModel):
    ip: str
    blocked: bool = False
    dns_ptr: list[IPv6DnsPtr] = Field(default_factory=list)


class PublicNet(ApiModel):
    ipv4: IPv4 | None = None
    ipv6: IPv6 | None = None
    floating_ips: list[int] = Field(default_factory=list)


class Server(ApiModel):
    """A cloud server as returned by `/servers`."""

    id: int
    name: str
    status: str = Field(
        ...,
        description="Power/lifecycle state (running, initializing, starting, stopping, off, deleting, migrating, rebuilding, unknown).",
    )
    created: datetime | None = None
    public_net: PublicNet | None = None
    server_type: ServerType | None = None
    datacenter: Datacenter | None = None
    image: Image | None = None
    iso: ISO | None = None
    rescue_enabled: bool = False
    locked: bool = False
    backup_window: str | None = None
    outgoing_traffic: int | None = None
    ingoing_traffic: int | None = None
    included_traffic: int | None = None
    protection: Protection | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    volumes: list[int] = Field(default_factory=list)


class ActionResource(ApiModel):
    id: int
    type: str


class ActionError(ApiModel):
    code: str
    message: str


class Action(ApiModel):
    """Asynchronous operation tracked by the API."""

    id: int
    command: str
    status: str = Field(..., description="running, success or error.")
    progress: int = 0
    started: datetime | None = None
    finished: datetime | None = None
    resources: list[ActionResource] = Field(default_factory=list)
    error: ActionError | None = None


class Pagination(ApiModel):
    page: int
    per_page: int
    previous_page: int | None = None
    next_page: int | None = None
    last_page: int | None = None
    total_entries: int | None = None


class Meta(ApiModel):
    pagination: Pagination | None = None


class TimeSeries(ApiModel):
    values: list[tuple[float, str]] = Field(
        default_factory=list,
        description="[unix timestamp, value] pairs; values are strings as sent by the API.",
    )


class Metrics(ApiModel):
    start: datetime
    end: datetime
    step: float
    time_series: dict[str, TimeSeries] = Field(default_factory=dict)


class PricingImage(ApiModel):
    price_per_gb_month: Price


class PricingFloatingIP(ApiModel):
    price_monthly: Price


class PricingTraffic(ApiModel):
    price_per_tb: Price


class PricingServerBackup(ApiModel):
    percentage: str


class PricingVolume(ApiModel):
    price_per_gb_month: Price


class PricingServerType(ApiModel):
    id: int
    name: str
    prices: list[LocationPrice] = Field(default_factory=list)


class Pricing(ApiModel):
    currency: str
    vat_rate: str
    image: PricingImage | None = None
    floating_ip: PricingFloatingIP | None = None
    traffic: PricingTraffic | None = None
    server_backup: PricingServerBackup | None = None
    volume: PricingVolume | None = None
    server_types: list[PricingServerType] = Field(default_factory=list)


class Volume(ApiModel):
    id: int
    name: str
    size: int = Field(..., description="Size in GB.")
    created: datetime | None = None
    server: int | None = None
    location: Location | None = None
    linux_device: str | None = None
    status: str | None = None
    format: str | None = None
    protection: Protection | None = None
    labels: dict[str, str] = Field(default_factory=dict)


# --- requests --------------------------------------------------------------


class CreateServerRequest(ApiRequest):
    name: str = Field(..., min_length=1, description="Unique name, must be a valid hostname.")
    server_type: str = Field(..., description="Server type name or id, e.g. 'cx11'.")
    image: str = Field(..., description="Image name or id, e.g. 'ubuntu-22.04'.")
    start_after_create: bool | None = None
    location: str | None = None
    datacenter: str | None = None
    ssh_keys: list[str] | None = None
    volumes: list[int] | None = None
    automount: bool | None = None
    user_data: str | None = None
    labels: dict[str, str] | None = None


class RenameServerRequest(ApiRequest):
    name: str = Field(..., min_length=1)


class EnableRescueRequest(ApiRequest):
    type: str | None = Field(default=None, description="Rescue system type, e.g. 'linux64'.")
    ssh_keys: list[int] | None = None


class RebuildServerRequest(ApiRequest):
    image: str = Field(..., description="Image name or id, e.g. 'ubuntu-22.04'.")


class ChangeTypeRequest(ApiRequest):
    server_type: str
    upgrade_disk: bool = Field(
        default=False,
        description="Resize the disk too; a server with a grown disk can't be downgraded.",
    )


class CreateImageRequest(ApiRequest):
    description: str | None = None
    type: str | None = Field(default=None, description="snapshot or backup.")
    labels: dict[str, str] | None = None


class EnableBackupRequest(ApiRequest):
    backup_window: str | None = Field(default=None, description="e.g. '22-02'.")


class AttachIsoRequest(ApiRequest):
    iso: str = Field(..., description="ISO name or id.")


class ChangeDnsPtrRequest(ApiRequest):
    ip: str
    dns_ptr: str | None = Field(
        default=None,
        description="Hostname for the reverse entry; None resets it to the default.",
    )

    def to_payload(self) -> dict[str, Any]:
        # dns_ptr=null is meaningful here (reset to default).
        return self.model_dump(mode="json")


class UpdateVolumeRequest(ApiRequest):
    name: str | None = None
    labels: dict[str, str] | None = None


# --- responses -------------------------------------------------------------


class CreateServerResponse(ApiModel):
    server: Server
    action: Action | None = None
    next_actions: list[Action] = Field(default_factory=list)
    root_password: str | None = None


class ServersResponse(ApiModel):
    servers: list[Server] = Field(default_factory=list)
    meta: Meta | None = None


class ServerResponse(ApiModel):
    server: Server


class ActionResponse(ApiModel):
    action: Action


class ResetPasswordResponse(ApiModel):
    root_password: str
    action: Action


class EnableRescueResponse(ApiModel):
    root_password: str
    action: Action


class RebuildServerResponse(ApiModel):
    action: Action
    root_password: str | None = None


class CreateImageResponse(ApiModel):
    image: Image
    action: Action


class ImagesResponse(ApiModel):
    images: list[Image] = Field(default_factory=list)
    meta: Meta | None = None


class MetricsResponse(ApiModel):
    metrics: Metrics


class IsosResponse(ApiModel):
    isos: list[ISO] = Field(default_factory=list)
    meta: Meta | None = None


class IsoResponse(ApiModel):
    iso: ISO


class DatacenterResponse(ApiModel):
    datacenter: Datacenter


class DatacentersResponse(ApiModel):
    datacenters: list[Datacenter] = Field(default_factory=list)
    recommendation: int | None = Field(
        default=None,
        description="Id of the datacenter the API recommends for new servers.",
    )
    meta: Meta | None = None


class PricingResponse(ApiModel):
    pricing: Pricing


class VolumesResponse(ApiModel):
    volumes: list[Volume] = Field(default_factory=list)
    meta: Meta | None = None


class VolumeResponse(ApiModel):
    volume: Volume
