"""Extracción de elementos del <head> con BeautifulSoup.

Lo usa la auditoría (`verify`) para comprobar documentos renderizados o
desplegados, y la CLI para derivar el título de una página a partir de su
primer <h1>.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup


@dataclass
class ParsedHead:
    lang: str | None = None
    links: list[dict[str, str]] = field(default_factory=list)
    meta: list[dict[str, str]] = field(default_factory=list)
    scripts: list[dict[str, str]] = field(default_factory=list)


def _attrs(tag) -> dict[str, str]:
    out: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            # bs4 devuelve `rel` como lista (multi-valued attribute).
            value = " ".join(value)
        out[name] = "" if value is None else str(value)
    return out


def parse_head(html: str) -> ParsedHead:
    """Devuelve links, meta y scripts del documento completo.

    Los scripts se buscan en todo el documento porque GTM/GA4 pueden vivir
    en el head o al final del body.
    """

    soup = BeautifulSoup(html or "", "html.parser")
    parsed = ParsedHead()

    html_tag = soup.find("html")
    if html_tag is not None:
        parsed.lang = _attrs(html_tag).get("lang")

    head = soup.head or soup
    for link in head.find_all("link"):
        parsed.links.append(_attrs(link))

    for meta in head.find_all("meta"):
        parsed.meta.append(_attrs(meta))

    for script in soup.find_all("script"):
        entry = _attrs(script)
        entry["text"] = script.string or ""
        parsed.scripts.append(entry)

    return parsed


def first_heading(html: str) -> str | None:
    """Texto del primer <h1>, si existe."""

    soup = BeautifulSoup(html or "", "html.parser")
    h1 = soup.find("h1")
    if h1 is None:
        return None
    text = h1.get_text(" ", strip=True)
    return text or None
