"""Render del documento HTML.

Por qué está en adapters:
- El HTML es un detalle de infraestructura (Jinja2).
- El Core solo conoce `ShellFragment`, `MetaTag` y los scripts del mount.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from core.domain.models import MetaTag, ScriptPlacement, ScriptTag, ShellFragment


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env: Environment | None = None


def _get_env() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(_TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
        )
    return _env


def render_document(
    *,
    lang: str,
    meta_tags: Sequence[MetaTag],
    fragment: ShellFragment,
    scripts: Sequence[ScriptTag] = (),
) -> str:
    """Renderiza el documento completo (skeleton + head + body de la página)."""

    def _at(placement: ScriptPlacement) -> list[ScriptTag]:
        return [s for s in scripts if s.placement is placement]

    template = _get_env().get_template("document.html")
    return template.render(
        lang=lang,
        meta_tags=list(meta_tags),
        title=fragment.title,
        stylesheets=fragment.stylesheets,
        head_links=fragment.head_links,
        head_scripts=_at(ScriptPlacement.HEAD),
        body_start_scripts=_at(ScriptPlacement.BODY_START),
        body_end_scripts=_at(ScriptPlacement.BODY_END),
        path=fragment.path,
        # El body ya viene renderizado: no se re-escapa.
        body_html=Markup(fragment.body_html),
    )


def export_document_html(*, html: str, output_path: Path) -> Path:
    """Escribe un documento ya renderizado en disco (UTF-8)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path
