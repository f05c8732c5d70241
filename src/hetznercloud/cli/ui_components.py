"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from rendering details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hetznercloud.core.domain.models import (
    ISO,
    Action,
    DatacentersResponse,
    Image,
    Pricing,
    Server,
    Volume,
)


def _dash(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def _cell(value: object, style: str = "") -> Text:
    # API strings are user-controlled; Text keeps brackets literal.
    return Text(_dash(value), style=style)


def build_servers_table(servers: list[Server]) -> Table:
    table = Table(title="Servers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Status", style="green")
    table.add_column("Type")
    table.add_column("Datacenter")
    table.add_column("IPv4", style="magenta")
    table.add_column("IPv6", style="magenta")

    for server in servers:
        net = server.public_net
        ipv4 = net.ipv4.ip if net and net.ipv4 else None
        ipv6 = net.ipv6.ip if net and net.ipv6 else None
        status_style = "green" if server.status == "running" else "yellow"
        table.add_row(
            str(server.id),
            _cell(server.name),
            _cell(server.status, status_style),
            _cell(server.server_type.name if server.server_type else None),
            _cell(server.datacenter.name if server.datacenter else None),
            _cell(ipv4),
            _cell(ipv6),
        )
    return table


def build_server_panel(server: Server) -> Panel:
    """Detail view of a single server."""

    body = Text()
    body.append(f"Status: {server.status}\n")
    if server.server_type:
        st = server.server_type
        body.append(f"Type: {st.name} ({_dash(st.cores)} cores, {_dash(st.memory)} GB RAM, {_dash(st.disk)} GB disk)\n")
    if server.datacenter:
        body.append(f"Datacenter: {server.datacenter.name}\n")
    if server.image:
        body.append(f"Image: {_dash(server.image.name or server.image.description)}\n")
    if server.public_net and server.public_net.ipv4:
        body.append(f"IPv4: {server.public_net.ipv4.ip} ({_dash(server.public_net.ipv4.dns_ptr)})\n")
    if server.public_net and server.public_net.ipv6:
        body.append(f"IPv6: {server.public_net.ipv6.ip}\n")
    body.append(f"Rescue enabled: {server.rescue_enabled}\n")
    body.append(f"Backup window: {_dash(server.backup_window)}")
    if server.iso:
        body.append(f"\nISO: {server.iso.name}")
    if server.labels:
        labels = ", ".join(f"{k}={v}" for k, v in sorted(server.labels.items()))
        body.append(f"\nLabels: {labels}", style="dim")

    return Panel(body, title=Text(f"{server.name} (#{server.id})", style="bold cyan"), border_style="cyan")


def build_images_table(images: list[Image]) -> Table:
    table = Table(title="Images")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Name", style="white")
    table.add_column("Description")
    table.add_column("OS", style="green")
    for image in images:
        os_label = " ".join(p for p in (image.os_flavor, image.os_version) if p)
        table.add_row(
            str(image.id),
            _cell(image.type),
            _cell(image.name),
            _cell(image.description),
            _cell(os_label),
        )
    return table


def build_isos_table(isos: list[ISO]) -> Table:
    table = Table(title="ISOs")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type")
    table.add_column("Description")
    for iso in isos:
        table.add_row(str(iso.id), _cell(iso.name), _cell(iso.type), _cell(iso.description))
    return table


def build_datacenters_table(response: DatacentersResponse) -> Table:
    table = Table(title="Datacenters")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Location")
    table.add_column("Description")
    table.add_column("Recommended", style="green")
    for dc in response.datacenters:
        location = dc.location
        where = f"{location.city}, {location.country}" if location and location.city else None
        table.add_row(
            str(dc.id),
            _cell(dc.name),
            _cell(where),
            _cell(dc.description),
            "yes" if dc.id == response.recommendation else "",
        )
    return table


def build_pricing_table(pricing: Pricing) -> Table:
    """Monthly gross price per server type and location."""

    table = Table(title=Text(f"Server prices ({pricing.currency}, VAT {pricing.vat_rate}%)"))
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Location")
    table.add_column("Hourly (gross)", justify="right")
    table.add_column("Monthly (gross)", justify="right", style="green")
    for server_type in pricing.server_types:
        for price in server_type.prices:
            table.add_row(
                _cell(server_type.name),
                _cell(price.location),
                _cell(price.price_hourly.gross),
                _cell(price.price_monthly.gross),
            )
    return table


def build_volumes_table(volumes: list[Volume]) -> Table:
    table = Table(title="Volumes")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Size (GB)", justify="right")
    table.add_column("Server")
    table.add_column("Location")
    table.add_column("Device", style="dim")
    for volume in volumes:
        table.add_row(
            str(volume.id),
            _cell(volume.name),
            str(volume.size),
            _cell(volume.server),
            _cell(volume.location.name if volume.location else None),
            _cell(volume.linux_device),
        )
    return table


def build_action_panel(action: Action, *, root_password: str | None = None) -> Panel:
    """Panel for an `Action` (and the one-time root password, if any)."""

    body = Text()
    body.append(f"Command: {action.command}\n")
    body.append(f"Status: {action.status} ({action.progress}%)")
    if action.error:
        body.append(f"\nError: {action.error.code}: {action.error.message}", style="red")
    if root_password:
        body.append(f"\nRoot password: {root_password}", style="bold yellow")

    border = "red" if action.status == "error" else "green"
    return Panel(body, title=Text(f"Action #{action.id}", style="bold"), border_style=border)
