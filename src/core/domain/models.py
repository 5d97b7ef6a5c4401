"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de los elementos del <head> (links, meta, scripts) antes
  de llegar al template.
- Serialización directa del manifest del head (JSON) sin código extra.

Nota:
- Estos modelos describen *qué* se inyecta en el documento, no *cómo* se
  renderiza (eso vive en `adapters.html_renderer`).
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class SiteMetadata(BaseModel):
    """Registro estático de metadata del sitio (SEO + previews sociales)."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1, max_length=1_000)
    image: str = Field(
        ...,
        min_length=8,
        description="URL absoluta de la imagen para Open Graph/Twitter.",
    )
    twitter_handle: str = Field(
        default="@yourname",
        description="Handle publicado en twitter:site.",
    )


class MetaTag(BaseModel):
    """Un <meta>; Open Graph usa el atributo `property`, el resto `name`."""

    model_config = ConfigDict(frozen=True)

    attribute: Literal["name", "property"] = "name"
    key: str = Field(..., min_length=1)
    content: str

    @classmethod
    def named(cls, key: str, content: str) -> "MetaTag":
        return cls(attribute="name", key=key, content=content)

    @classmethod
    def og(cls, key: str, content: str) -> "MetaTag":
        return cls(attribute="property", key=key, content=content)


class HeadLink(BaseModel):
    """Un <link> del head."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rel: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)
    type: str | None = None
    title: str | None = None
    as_: str | None = Field(default=None, alias="as")
    crossorigin: str | None = None

    def attributes(self) -> dict[str, str]:
        """Atributos HTML en orden estable, omitiendo los vacíos."""

        attrs = {
            "rel": self.rel,
            "href": self.href,
            "as": self.as_,
            "type": self.type,
            "title": self.title,
            "crossorigin": self.crossorigin,
        }
        return {k: v for k, v in attrs.items() if v is not None}


class ScriptPlacement(str, Enum):
    HEAD = "head"
    BODY_START = "body_start"
    BODY_END = "body_end"


class ScriptTag(BaseModel):
    """Script (o <noscript>) inyectado por una integración de analytics."""

    model_config = ConfigDict(frozen=True)

    placement: ScriptPlacement = ScriptPlacement.HEAD
    id: str | None = None
    src: str | None = None
    inline: str | None = None
    async_load: bool = False
    noscript: str | None = Field(
        default=None,
        description="Markup HTML para el fallback <noscript>.",
    )

    @model_validator(mode="after")
    def check_payload(self) -> "ScriptTag":
        if not (self.src or self.inline or self.noscript):
            raise ValueError("ScriptTag needs 'src', 'inline' or 'noscript'")
        return self


class Page(BaseModel):
    """Contenido ya renderizado de una página (el shell no lo transforma)."""

    path: str = Field(default="/", pattern=r"^/")
    title: str | None = Field(default=None, max_length=512)
    body_html: str = Field(..., min_length=1)
    head_links: list[HeadLink] = Field(default_factory=list)


class ShellFragment(BaseModel):
    """Salida del Application Shell para una navegación."""

    path: str = "/"
    title: str | None = None
    stylesheets: list[str] = Field(default_factory=list)
    head_links: list[HeadLink] = Field(default_factory=list)
    body_html: str
