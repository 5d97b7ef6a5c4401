"""Structural audit of rendered documents.

Checks the guarantees the shells make about every page: one RSS alternate
link, one font preload, the full fixed meta set with the site metadata
values, and each analytics integration bootstrapped exactly once. Works on
HTML strings, files, or a deployed URL.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from adapters.head_parser import ParsedHead, parse_head
from adapters.http_client import fetch_html
from core.config import AppSettings
from core.domain.models import MetaTag
from core.services.document_shell import build_meta_tags


logger = logging.getLogger(__name__)


@dataclass
class AuditFinding:
    check: str
    ok: bool
    detail: str = ""


@dataclass
class ExpectedHead:
    """What a correctly shelled document must contain."""

    feed_path: str
    font_path: str
    meta_tags: list[MetaTag]
    gtm_id: str | None = None
    ga_measurement_id: str | None = None
    lang: str | None = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ExpectedHead":
        enabled = settings.analytics_enabled
        return cls(
            feed_path=settings.feed_path,
            font_path=settings.font_path,
            meta_tags=build_meta_tags(settings.site_metadata()),
            gtm_id=settings.gtm_id if enabled else None,
            ga_measurement_id=settings.ga_measurement_id if enabled else None,
            lang=settings.lang,
        )


@dataclass
class AuditReport:
    source: str
    findings: list[AuditFinding] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(f.ok for f in self.findings)

    @property
    def failures(self) -> list[AuditFinding]:
        return [f for f in self.findings if not f.ok]


def _exactly_one(check: str, count: int) -> AuditFinding:
    return AuditFinding(check=check, ok=count == 1, detail=f"found {count}")


def _check_links(head: ParsedHead, expected: ExpectedHead) -> list[AuditFinding]:
    # Solo cuenta el feed del sitio; las páginas pueden publicar feeds propios.
    rss = [
        link
        for link in head.links
        if link.get("rel") == "alternate"
        and link.get("type") == "application/rss+xml"
        and link.get("href") == expected.feed_path
    ]
    rss_findings = [_exactly_one("RSS alternate link", len(rss))]

    preload = [
        link
        for link in head.links
        if link.get("rel") == "preload" and link.get("href") == expected.font_path
    ]
    font_finding = _exactly_one("Font preload link", len(preload))
    if len(preload) == 1:
        link = preload[0]
        if link.get("as") != "font":
            font_finding = AuditFinding("Font preload link", False, f"as={link.get('as')!r}")
        elif "crossorigin" not in link:
            font_finding = AuditFinding("Font preload link", False, "crossorigin missing")
    return rss_findings + [font_finding]


def _check_meta(head: ParsedHead, expected: ExpectedHead) -> list[AuditFinding]:
    findings: list[AuditFinding] = []
    for tag in expected.meta_tags:
        matches = [m for m in head.meta if m.get(tag.attribute) == tag.key]
        check = f"meta {tag.key}"
        if len(matches) != 1:
            findings.append(_exactly_one(check, len(matches)))
            continue
        actual = matches[0].get("content", "")
        findings.append(
            AuditFinding(
                check=check,
                ok=actual == tag.content,
                detail="" if actual == tag.content else f"content={actual!r}",
            )
        )
    return findings


def _check_analytics(head: ParsedHead, expected: ExpectedHead) -> list[AuditFinding]:
    findings: list[AuditFinding] = []
    if expected.gtm_id:
        gtm = [
            s
            for s in head.scripts
            if "gtm.js" in s.get("text", "") and expected.gtm_id in s.get("text", "")
        ]
        findings.append(_exactly_one(f"Tag Manager {expected.gtm_id}", len(gtm)))
    if expected.ga_measurement_id:
        loaders = [
            s for s in head.scripts if f"gtag/js?id={expected.ga_measurement_id}" in s.get("src", "")
        ]
        findings.append(_exactly_one(f"Analytics {expected.ga_measurement_id}", len(loaders)))
    return findings


def audit_document(html: str, expected: ExpectedHead, *, source: str = "<string>") -> AuditReport:
    head = parse_head(html)
    report = AuditReport(source=source)
    if expected.lang:
        report.findings.append(
            AuditFinding(
                check="html lang",
                ok=head.lang == expected.lang,
                detail=f"lang={head.lang!r}",
            )
        )
    report.findings.extend(_check_links(head, expected))
    report.findings.extend(_check_meta(head, expected))
    report.findings.extend(_check_analytics(head, expected))
    logger.debug("Audit of %s: %d checks, %d failed", source, len(report.findings), len(report.failures))
    return report


def audit_file(path: Path, expected: ExpectedHead) -> AuditReport:
    return audit_document(path.read_text(encoding="utf-8"), expected, source=str(path))


async def audit_url(
    url: str,
    expected: ExpectedHead,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AuditReport:
    """Descarga la página y la audita. Los errores HTTP se propagan."""

    html = await fetch_html(url, settings=settings, transport=transport)
    return audit_document(html, expected, source=url)
