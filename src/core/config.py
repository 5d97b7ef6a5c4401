"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los shells y adaptadores (analytics/HTTP) leen la config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.domain.analytics import (
    DATA_LAYER_PATTERN,
    GA_MEASUREMENT_PATTERN,
    GTM_CONTAINER_PATTERN,
)
from core.domain.models import SiteMetadata


DEFAULT_GTM_ID = "GTM-5C2PVP7"
DEFAULT_GA_MEASUREMENT_ID = "G-76T38NTY0G"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    BLOGSHELL_CONFIG_DIR, si está definido, tiene prioridad.
    """

    override = (os.environ.get("BLOGSHELL_CONFIG_DIR") or "").strip()
    if override:
        return Path(override)

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "blogshell"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "blogshell"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "blogshell"
    return Path.home() / ".config" / "blogshell"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# blogshell user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los identificadores de analytics y el registro de metadata del sitio son
    constantes del blog; las variables de entorno solo existen para entornos
    de preview o para desactivar analytics en desarrollo.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOGSHELL_",
        extra="ignore",
        case_sensitive=False,
        # El .env global de usuario se añade en `settings_customise_sources`.
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Orden: init > entorno > .env del proyecto > .env global de usuario.
        # La ruta de usuario se resuelve en cada instanciación, no al importar.
        user_dotenv = DotEnvSettingsSource(settings_cls, env_file=get_user_env_file())
        return init_settings, env_settings, dotenv_settings, user_dotenv, file_secret_settings

    # Analytics
    analytics_enabled: bool = Field(
        default=True,
        description="Inicializar GTM y GA4 en cada mount.",
    )
    gtm_id: str = Field(
        default=DEFAULT_GTM_ID,
        pattern=GTM_CONTAINER_PATTERN,
        description="Container ID de Google Tag Manager.",
    )
    gtm_data_layer_name: str = Field(
        default="dataLayer",
        pattern=DATA_LAYER_PATTERN,
        description="Nombre global del dataLayer de GTM.",
    )
    gtm_auth: str | None = Field(
        default=None,
        description="Parámetro gtm_auth para entornos de GTM (preview/staging).",
    )
    gtm_preview: str | None = Field(
        default=None,
        description="Parámetro gtm_preview para entornos de GTM (p.ej. 'env-3').",
    )
    ga_measurement_id: str = Field(
        default=DEFAULT_GA_MEASUREMENT_ID,
        pattern=GA_MEASUREMENT_PATTERN,
        description="Measurement ID de Google Analytics 4.",
    )
    ga_send_page_view: bool = Field(
        default=True,
        description="Enviar page_view automático en gtag('config').",
    )

    # Documento
    lang: str = Field(
        default="en",
        min_length=2,
        max_length=16,
        description="Atributo lang del elemento <html>.",
    )
    site_title: str = Field(default="Jaime García Díaz", min_length=1)
    site_description: str = Field(
        default=(
            "Fascinated with React, Machine Learning, Blockchain, Web3, "
            "Smart Contracts, NFTs, Solana and Ethereum"
        ),
        min_length=1,
    )
    site_image: str = Field(
        default="https://jaime.mintitmedia.com/images/blog-banner.png",
        min_length=8,
    )
    twitter_handle: str = Field(default="@yourname", pattern=r"^@\w+$")

    # Assets estáticos
    feed_path: str = Field(default="/feed.xml", pattern=r"^/")
    font_path: str = Field(default="/fonts/Inter-roman.latin.var.woff2", pattern=r"^/")
    stylesheets: list[str] = Field(
        default_factory=lambda: ["/styles/theme.css", "/styles/main.css"],
        description="Hojas de estilo globales registradas por el Application Shell.",
    )
    public_dir: Path | None = Field(
        default=None,
        description="Directorio de assets públicos (por defecto <project_root>/public).",
    )

    # HTTP (verify/doctor)
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="blogshell/0.1 (+https://jaime.mintitmedia.com)",
        min_length=1,
    )

    def site_metadata(self) -> SiteMetadata:
        return SiteMetadata(
            title=self.site_title,
            description=self.site_description,
            image=self.site_image,
            twitter_handle=self.twitter_handle,
        )
