"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.analytics.tag_manager import GTM_BASE_URL
from adapters.http_client import build_async_client
from cli.ui_components import load_settings_or_exit
from core.config import AppSettings, write_user_env_vars
from core.domain.analytics import AnalyticsProvider
from core.resources_loader import check_static_assets, get_public_dir

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings_or_exit(_console)

    table = Table(title="blogshell Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Analytics
    if settings.analytics_enabled:
        table.add_row("Analytics", "OK", "GTM + GA4 initialized once per mount")
    else:
        table.add_row("Analytics", "DISABLED", "BLOGSHELL_ANALYTICS_ENABLED=false")
    table.add_row(AnalyticsProvider.TAG_MANAGER.label(), "OK", settings.gtm_id)
    table.add_row(AnalyticsProvider.MEASUREMENT.label(), "OK", settings.ga_measurement_id)
    if bool(settings.gtm_auth) != bool(settings.gtm_preview):
        table.add_row("GTM environment", "WARN", "gtm_auth and gtm_preview must be set together")

    # Static assets
    missing_assets = False
    public_dir = get_public_dir(settings)
    table.add_row("Public dir", "OK" if public_dir.is_dir() else "MISSING", str(public_dir))
    for asset in check_static_assets(settings):
        missing_assets = missing_assets or not asset.exists
        table.add_row(f"Asset {asset.url_path}", "OK" if asset.exists else "MISSING", str(asset.path))

    # Connectivity (best-effort)
    if not offline:
        ok_http, detail_http = asyncio.run(_check_http(GTM_BASE_URL, settings))
        table.add_row("Tag Manager reachable", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if missing_assets:
        _console.print(
            "\n[yellow]Note:[/yellow] Missing assets are still referenced in the head; "
            "browsers will log 404s for them."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive analytics setup (stores config in the user config .env)."""

    settings = load_settings_or_exit(_console)
    gtm_id = typer.prompt("Tag Manager container id", default=settings.gtm_id, show_default=True).strip()
    ga_id = typer.prompt("GA4 measurement id", default=settings.ga_measurement_id, show_default=True).strip()

    try:
        AnalyticsProvider.TAG_MANAGER.validate_id(gtm_id)
        AnalyticsProvider.MEASUREMENT.validate_id(ga_id)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "BLOGSHELL_GTM_ID": gtm_id,
            "BLOGSHELL_GA_MEASUREMENT_ID": ga_id,
        }
    )

    _console.print(f"[green]Saved analytics config to:[/green] {env_path}")
