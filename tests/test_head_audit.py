from __future__ import annotations

import asyncio

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import HeadLink, Page
from core.services.head_audit import ExpectedHead, audit_document, audit_file, audit_url
from core.services.shell_pipeline import ShellSession, render_page


@pytest.fixture
def expected(settings) -> ExpectedHead:
    return ExpectedHead.from_settings(settings)


@pytest.fixture
def rendered(settings) -> str:
    return render_page(Page(title="Home", body_html="<h1>Home</h1>"), settings)


def _failed_checks(report) -> list[str]:
    return [f.check for f in report.failures]


def test_rendered_document_passes(rendered, expected):
    report = audit_document(rendered, expected)
    assert report.ok, _failed_checks(report)
    # lang + rss + font + 11 meta + 2 analytics
    assert len(report.findings) == 16


def test_duplicate_rss_link_fails(rendered, expected):
    extra = '<link rel="alternate" type="application/rss+xml" title="RSS" href="/feed.xml" />'
    tampered = rendered.replace("</head>", extra + "</head>")
    assert _failed_checks(audit_document(tampered, expected)) == ["RSS alternate link"]


def test_page_level_feed_does_not_count_as_site_feed(settings, expected):
    tag_feed = HeadLink(rel="alternate", type="application/rss+xml", title="React", href="/tags/react/feed.xml")
    html = ShellSession(settings).navigate(
        Page(path="/tags/react", title="React", body_html="<h1>React</h1>", head_links=[tag_feed])
    ).html

    assert 'href="/tags/react/feed.xml"' in html
    report = audit_document(html, expected)
    assert report.ok, _failed_checks(report)


def test_missing_site_feed_fails(rendered, expected):
    tampered = rendered.replace('href="/feed.xml"', 'href="/rss.xml"')
    report = audit_document(tampered, expected)
    assert _failed_checks(report) == ["RSS alternate link"]
    assert report.failures[0].detail == "found 0"


def test_preload_without_crossorigin_fails(rendered, expected):
    tampered = rendered.replace(' crossorigin="anonymous"', "")
    report = audit_document(tampered, expected)
    assert _failed_checks(report) == ["Font preload link"]
    assert report.failures[0].detail == "crossorigin missing"


def test_wrong_meta_value_and_missing_meta(rendered, expected):
    tampered = rendered.replace('content="summary_large_image"', 'content="summary"')
    tampered = tampered.replace('<meta name="robots" content="follow, index" />', "")
    failed = _failed_checks(audit_document(tampered, expected))
    assert failed == ["meta robots", "meta twitter:card"]


def test_missing_analytics_fails(expected):
    bare = render_page(Page(body_html="<p>x</p>"), AppSettings(_env_file=None, analytics_enabled=False))
    failed = _failed_checks(audit_document(bare, expected))
    assert failed == ["Tag Manager GTM-5C2PVP7", "Analytics G-76T38NTY0G"]


def test_audit_file(tmp_path, rendered, expected):
    path = tmp_path / "index.html"
    path.write_text(rendered, encoding="utf-8")
    report = audit_file(path, expected)
    assert report.ok
    assert report.source == str(path)


def test_audit_url(rendered, expected, settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["User-Agent"] == settings.user_agent
        return httpx.Response(200, text=rendered, headers={"Content-Type": "text/html; charset=utf-8"})

    report = asyncio.run(
        audit_url("https://blog.test/", expected, settings=settings, transport=httpx.MockTransport(handler))
    )
    assert report.ok
    assert report.source == "https://blog.test/"


def test_audit_url_propagates_http_errors(expected, settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="nope"))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(audit_url("https://blog.test/missing", expected, settings=settings, transport=transport))
