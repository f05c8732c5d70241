"""hcloud-client CLI (Typer + Rich).

Thin layer over `HetznerCloudAPI`: each command maps to one (or two) API
calls and renders the typed response. `--json PATH` writes the parsed
response model.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import httpx
import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from hetznercloud.adapters.cloud_api import HetznerCloudAPI
from hetznercloud.adapters.json_exporter import export_model_json
from hetznercloud.cli import doctor
from hetznercloud.cli.ui_components import (
    build_action_panel,
    build_datacenters_table,
    build_images_table,
    build_isos_table,
    build_pricing_table,
    build_server_panel,
    build_servers_table,
    build_volumes_table,
)
from hetznercloud.core.config import AppSettings
from hetznercloud.core.domain.models import ActionResponse, EnableRescueRequest
from hetznercloud.core.logger import setup_logging

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Hetzner Cloud API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _json_option() -> Any:
    return typer.Option(
        None,
        "--json",
        help="Also write the parsed response (all known fields, nulls included) as JSON to this path.",
    )


class PowerAction(str, Enum):
    ON = "on"
    OFF = "off"
    REBOOT = "reboot"
    RESET = "reset"
    SHUTDOWN = "shutdown"


def _open_api() -> HetznerCloudAPI:
    return HetznerCloudAPI(settings=AppSettings())


def _call(fn: Callable[[HetznerCloudAPI], T]) -> T:
    """Run one API interaction, turning errors into a message + exit code 1."""

    try:
        with _open_api() as api:
            return fn(api)
    except httpx.HTTPStatusError as exc:
        _console.print(f"[red]HTTP {exc.response.status_code}[/red] {exc.request.method} {escape(str(exc.request.url))}")
        if exc.response.text:
            _console.print(exc.response.text, style="dim", markup=False)
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _console.print(f"[red]Transport error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        _console.print(f"[red]Unexpected response shape:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc


def _maybe_export(model: BaseModel, json_path: Optional[Path]) -> None:
    if json_path is None:
        return
    out = export_model_json(model=model, output_path=json_path)
    _console.print(f"[green]JSON written to:[/green] {escape(str(out))}")


@app.callback()
def main() -> None:
    """Configure logging from settings before any command runs."""

    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)


@app.command()
def servers(
    name: Optional[str] = typer.Option(None, "--name", help="Filter by exact server name."),
    json_path: Optional[Path] = _json_option(),
) -> None:
    """List servers."""

    if name:
        response = _call(lambda api: api.get_servers_by_name(name))
    else:
        response = _call(lambda api: api.get_servers())
    _console.print(build_servers_table(response.servers))
    _maybe_export(response, json_path)


@app.command()
def server(server_id: int = typer.Argument(..., help="Server id."), json_path: Optional[Path] = _json_option()) -> None:
    """Show one server."""

    response = _call(lambda api: api.get_server(server_id))
    _console.print(build_server_panel(response.server))
    _maybe_export(response, json_path)


@app.command()
def images(json_path: Optional[Path] = _json_option()) -> None:
    """List images."""

    response = _call(lambda api: api.get_images())
    _console.print(build_images_table(response.images))
    _maybe_export(response, json_path)


@app.command()
def isos(json_path: Optional[Path] = _json_option()) -> None:
    """List ISOs."""

    response = _call(lambda api: api.get_isos())
    _console.print(build_isos_table(response.isos))
    _maybe_export(response, json_path)


@app.command()
def datacenters(
    name: Optional[str] = typer.Option(None, "--name", help="Filter by datacenter name, e.g. fsn1-dc14."),
    json_path: Optional[Path] = _json_option(),
) -> None:
    """List datacenters (the recommended one is flagged)."""

    if name:
        response = _call(lambda api: api.get_datacenters_by_name(name))
    else:
        response = _call(lambda api: api.get_datacenters())
    _console.print(build_datacenters_table(response))
    _maybe_export(response, json_path)


@app.command()
def pricing(json_path: Optional[Path] = _json_option()) -> None:
    """Show server prices."""

    response = _call(lambda api: api.get_pricing())
    _console.print(build_pricing_table(response.pricing))
    _maybe_export(response, json_path)


@app.command()
def volumes(json_path: Optional[Path] = _json_option()) -> None:
    """List volumes."""

    response = _call(lambda api: api.get_volumes())
    _console.print(build_volumes_table(response.volumes))
    _maybe_export(response, json_path)


@app.command()
def power(
    server_id: int = typer.Argument(..., help="Server id."),
    action: PowerAction = typer.Argument(..., help="on, off, reboot, reset or shutdown."),
) -> None:
    """Change the power state of a server."""

    def _do(api: HetznerCloudAPI) -> ActionResponse:
        if action is PowerAction.ON:
            return api.power_on_server(server_id)
        if action is PowerAction.OFF:
            return api.force_shutdown_server(server_id)
        if action is PowerAction.REBOOT:
            return api.soft_reboot_server(server_id)
        if action is PowerAction.RESET:
            return api.reset_server(server_id)
        return api.shutdown_server(server_id)

    response = _call(_do)
    _console.print(build_action_panel(response.action))


@app.command()
def rescue(
    server_id: int = typer.Argument(..., help="Server id."),
    ssh_keys: Optional[list[int]] = typer.Option(None, "--ssh-key", help="SSH key id to inject (repeatable)."),
    rescue_type: Optional[str] = typer.Option(None, "--type", help="Rescue system type, e.g. linux64."),
    reset: bool = typer.Option(False, "--reset", help="Reset the server right after enabling rescue mode."),
) -> None:
    """Enable rescue mode (optionally followed by a reset)."""

    request = EnableRescueRequest(type=rescue_type, ssh_keys=ssh_keys or None)
    if reset:
        response = _call(lambda api: api.enable_rescue_and_reset(server_id, request))
    else:
        response = _call(lambda api: api.enable_rescue(server_id, request))
    _console.print(build_action_panel(response.action, root_password=response.root_password))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
