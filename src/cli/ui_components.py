"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `head`, `verify` y `doctor` reutilizan las mismas tablas.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.services.head_audit import AuditReport
from core.services.shell_pipeline import ShellSession


def configure_logging(*, verbose: bool = False) -> None:
    """Logging estándar con salida Rich en stderr."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def print_banner(console: Console, *, site_title: str) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("blogshell", style="bold cyan")
    subtitle = Text(f"{site_title} • head, meta & analytics", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_head_table(session: ShellSession) -> Table:
    """Tabla con todo lo que el shell inyecta en el <head>."""

    table = Table(title="Document head")
    table.add_column("Element", style="cyan", no_wrap=True)
    table.add_column("Key", style="white")
    table.add_column("Value", style="magenta")

    for tag in session.document_shell.meta_tags():
        table.add_row("meta", tag.key, tag.content)
    for href in session.settings.stylesheets:
        table.add_row("link", "stylesheet", href)
    for link in session.app_shell.head_links():
        extra = ", ".join(f"{k}={v}" for k, v in link.attributes().items() if k not in ("rel", "href"))
        table.add_row("link", link.rel, f"{link.href} ({extra})" if extra else link.href)
    for integration in (session.app_shell.tag_manager, session.document_shell.measurement):
        if integration is not None:
            table.add_row("analytics", integration.provider.label(), integration.tracking_id)
    return table


def build_audit_table(report: AuditReport) -> Table:
    table = Table(title=f"Audit: {report.source}")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    for finding in report.findings:
        status = "[green]OK[/green]" if finding.ok else "[red]FAIL[/red]"
        table.add_row(finding.check, status, finding.detail)
    return table


def load_settings_or_exit(console: Console) -> AppSettings:
    """Carga la configuración; una config inválida termina la CLI con código 2."""

    try:
        return AppSettings()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red]\n{exc}")
        raise typer.Exit(code=2) from exc
