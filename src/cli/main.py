"""CLI principal (Typer).

Comandos:
- `render`: envuelve fragmentos HTML con el Document/Application Shell.
- `head`: muestra (o exporta a JSON) lo que el shell inyecta en el <head>.
- `verify`: audita un documento local o una URL desplegada.
- `doctor`: diagnósticos de configuración, assets y conectividad.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import httpx
import typer
from rich.console import Console

from adapters.head_parser import first_heading
from adapters.html_renderer import export_document_html
from adapters.json_exporter import export_head_manifest_json
from cli import doctor
from cli.ui_components import (
    build_audit_table,
    build_head_table,
    configure_logging,
    load_settings_or_exit,
    print_banner,
)
from core.domain.models import Page
from core.services.head_audit import ExpectedHead, audit_file, audit_url
from core.services.lifecycle import ShellHooks
from core.services.shell_pipeline import ShellSession

app = typer.Typer(
    no_args_is_help=True,
    help="Blog document shell: head links, SEO meta tags and analytics bootstrap.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    configure_logging(verbose=verbose)


def _layout_pages(pages: list[Path]) -> list[tuple[Path, str, Path]]:
    """(fichero, ruta URL, salida relativa) respecto al directorio común.

    `posts/index.html` -> `/posts`, `posts/index.html`; `about.html` -> `/about`.
    """

    for path in pages:
        if not path.is_file():
            raise typer.BadParameter(f"Page file not found: {path}")
    resolved = [path.resolve() for path in pages]
    root = Path(os.path.commonpath([path.parent for path in resolved]))

    layout: list[tuple[Path, str, Path]] = []
    seen: dict[Path, Path] = {}
    for path, full in zip(pages, resolved):
        relative = full.relative_to(root).with_suffix("")
        output = relative.with_suffix(".html")
        if output in seen:
            raise typer.BadParameter(f"{path} and {seen[output]} would both render to {output}")
        seen[output] = path

        parts = relative.parts[:-1] if relative.name == "index" else relative.parts
        layout.append((path, "/" + "/".join(parts), output))
    return layout


def _read_page(path: Path, *, route: str, title: str | None) -> Page:
    body = path.read_text(encoding="utf-8").strip()
    if not body:
        raise typer.BadParameter(f"Page file is empty: {path}")
    return Page(path=route, title=title or first_heading(body), body_html=body)


@app.command()
def render(
    pages: list[Path] = typer.Argument(..., help="HTML fragments with the page body."),
    out_dir: Path | None = typer.Option(None, "--out-dir", "-o", help="Write pages here, mirroring their source layout."),
    title: str | None = typer.Option(None, "--title", help="Page title (default: first <h1>)."),
) -> None:
    """Render full documents for one or more page fragments (one mount)."""

    settings = load_settings_or_exit(_err_console)
    if out_dir is None and len(pages) > 1:
        raise typer.BadParameter("--out-dir is required when rendering more than one page")

    hooks = ShellHooks(warning=lambda msg: _err_console.print(f"[yellow]{msg}[/yellow]"))
    session = ShellSession(settings, hooks=hooks)

    for path, route, output in _layout_pages(pages):
        rendered = session.navigate(_read_page(path, route=route, title=title))
        if out_dir is None:
            typer.echo(rendered.html, nl=False)
            continue
        out_path = export_document_html(html=rendered.html, output_path=out_dir / output)
        _console.print(f"[green]Wrote[/green] {out_path}")


@app.command()
def head(
    json_path: Path | None = typer.Option(None, "--json", help="Export the head manifest as JSON."),
    banner: bool = typer.Option(True, "--banner/--no-banner"),
) -> None:
    """Show the meta tags, links and analytics ids the shell injects."""

    settings = load_settings_or_exit(_err_console)
    session = ShellSession(settings)

    if json_path is not None:
        out_path = export_head_manifest_json(session=session, output_path=json_path)
        _console.print(f"[green]Saved head manifest to:[/green] {out_path}")
        return

    if banner:
        print_banner(_console, site_title=session.document_shell.metadata.title)
    _console.print(build_head_table(session))


@app.command()
def verify(
    target: str = typer.Argument(..., help="URL (http/https) or path to a rendered HTML file."),
) -> None:
    """Audit a rendered document; exits with code 1 when a check fails."""

    settings = load_settings_or_exit(_err_console)
    expected = ExpectedHead.from_settings(settings)

    if target.startswith(("http://", "https://")):
        try:
            report = asyncio.run(audit_url(target, expected, settings=settings))
        except httpx.HTTPError as exc:
            _err_console.print(f"[red]Could not fetch {target}:[/red] {exc}")
            raise typer.Exit(code=1) from exc
    else:
        path = Path(target)
        if not path.is_file():
            raise typer.BadParameter(f"File not found: {target}")
        report = audit_file(path, expected)

    _console.print(build_audit_table(report))
    if not report.ok:
        _console.print(f"[red]{len(report.failures)} check(s) failed.[/red]")
        raise typer.Exit(code=1)
    _console.print("[green]All checks passed.[/green]")


def run() -> None:
    app()
