"""Localización de assets estáticos (public/).

Este módulo vive en `core/` porque:
- centraliza el *qué* assets referencia el shell (feed, fuente, estilos)
  sin acoplarse a la CLI;
- `doctor` y los tests resuelven rutas públicas de la misma forma.

El shell solo referencia estos assets; generarlos (feed RSS, CSS del tema)
no es responsabilidad de este repo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from core.config import AppSettings


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def get_public_dir(settings: AppSettings | None = None) -> Path:
    """Directorio público en runtime.

    Reglas:
    - Si `settings.public_dir` está definido, se usa tal cual.
    - Si BLOGSHELL_PUBLIC_DIR está definido (sin settings), también.
    - En desarrollo, usar <project_root>/public.
    """

    if settings is not None and settings.public_dir is not None:
        return settings.public_dir

    override = (os.environ.get("BLOGSHELL_PUBLIC_DIR") or "").strip()
    if override:
        return Path(override)

    return _project_root() / "public"


def resolve_public_path(url_path: str, public_dir: Path) -> Path:
    """Convierte una ruta URL (`/fonts/x.woff2`) en ruta dentro de `public_dir`."""

    relative = url_path.split("?", 1)[0].lstrip("/")
    resolved = (public_dir / relative).resolve()
    if not resolved.is_relative_to(public_dir.resolve()):
        raise ValueError(f"Asset path escapes the public directory: {url_path!r}")
    return resolved


@dataclass
class AssetStatus:
    url_path: str
    path: Path
    exists: bool


def check_static_assets(settings: AppSettings) -> list[AssetStatus]:
    """Estado de cada asset referenciado por el Application Shell."""

    public_dir = get_public_dir(settings)
    url_paths = [settings.feed_path, settings.font_path, *settings.stylesheets]
    statuses: list[AssetStatus] = []
    for url_path in url_paths:
        if url_path.startswith(("http://", "https://", "//")):
            continue
        path = resolve_public_path(url_path, public_dir)
        statuses.append(AssetStatus(url_path=url_path, path=path, exists=path.is_file()))
    return statuses
