"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hetznercloud.adapters.cloud_api import HetznerCloudAPI
from hetznercloud.core.config import DEFAULT_API_URL, AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Call a cheap read-only endpoint with the configured token."""

    try:
        with HetznerCloudAPI(settings=settings) as api:
            response = api.get_datacenters()
        return True, f"{len(response.datacenters)} datacenters visible"
    except httpx.HTTPStatusError as exc:
        return False, f"HTTP {exc.response.status_code}"
    except (httpx.HTTPError, ValueError) as exc:
        return False, escape(str(exc))


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="hcloud-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    has_token = bool(settings.api_token)
    table.add_row("API token", "OK" if has_token else "MISSING", "HCLOUD_API_TOKEN")
    table.add_row("API URL", "OK", settings.api_url)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "NONE", str(get_user_env_file()))

    ok_api = False
    if has_token:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API connectivity", "SKIPPED", "no token")

    _console.print(table)

    if not has_token:
        _console.print("\n[yellow]Note:[/yellow] run `hcloud-client doctor setup` to store a token.")
    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the token in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_url or DEFAULT_API_URL, show_default=True).strip()
    token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not token:
        raise typer.BadParameter("base URL and token are required")

    env_path = write_user_env_vars(
        {
            "HCLOUD_API_URL": base_url,
            "HCLOUD_API_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
