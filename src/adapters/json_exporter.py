"""Exportación JSON del manifest del head.

Por qué JSON:
- Permite comparar el head esperado entre despliegues (diff) o alimentar
  otras herramientas SEO sin parsear HTML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.services.shell_pipeline import ShellSession


def build_head_manifest(session: ShellSession) -> dict[str, Any]:
    """Describe lo que el shell inyecta, sin renderizar ninguna página."""

    tag_manager = session.app_shell.tag_manager
    measurement = session.document_shell.measurement
    analytics = [
        {"provider": integration.provider.value, "tracking_id": integration.tracking_id}
        for integration in (tag_manager, measurement)
        if integration is not None
    ]
    return {
        "lang": session.document_shell.lang,
        "metadata": session.document_shell.metadata.model_dump(mode="json"),
        "meta_tags": [tag.model_dump(mode="json") for tag in session.document_shell.meta_tags()],
        "stylesheets": list(session.settings.stylesheets),
        "head_links": [link.attributes() for link in session.app_shell.head_links()],
        "analytics": analytics,
    }


def export_head_manifest_json(*, session: ShellSession, output_path: Path) -> Path:
    """Exporta el manifest a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_head_manifest(session)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
