"""Shell orchestration utilities.

A `ShellSession` plays the role of the hosting runtime: it mounts once, then
for every navigation runs the Application Shell and hands its fragment to the
Document Shell. Entry-points (CLI, tests, a future server) go through here so
that the mount semantics live in one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from adapters.analytics import MeasurementIntegration, TagManagerIntegration
from core.config import AppSettings
from core.domain.models import Page
from core.interfaces.analytics import AnalyticsIntegration
from core.services.app_shell import ApplicationShell
from core.services.document_shell import DocumentShell
from core.services.lifecycle import Mount, ShellHooks


logger = logging.getLogger(__name__)


@dataclass
class RenderedPage:
    """Output of one navigation."""

    page: Page
    html: str
    warnings: list[str] = field(default_factory=list)


def build_integrations(
    settings: AppSettings,
) -> tuple[AnalyticsIntegration | None, AnalyticsIntegration | None]:
    """Returns (tag_manager, measurement); both None when analytics is disabled."""

    if not settings.analytics_enabled:
        logger.debug("Analytics disabled by configuration")
        return None, None
    return (
        TagManagerIntegration.from_settings(settings),
        MeasurementIntegration.from_settings(settings),
    )


class ShellSession:
    """One mounted application: effects run once, renders as often as needed."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        tag_manager: AnalyticsIntegration | None = None,
        measurement: AnalyticsIntegration | None = None,
        hooks: ShellHooks | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        if tag_manager is None and measurement is None:
            tag_manager, measurement = build_integrations(self.settings)
        self.app_shell = ApplicationShell(self.settings, tag_manager=tag_manager)
        self.document_shell = DocumentShell(self.settings, measurement=measurement)
        self.mount = Mount(hooks=hooks or ShellHooks())

    def navigate(self, page: Page) -> RenderedPage:
        warnings_before = len(self.mount.warnings)
        fragment = self.app_shell.render(self.mount, page)
        html = self.document_shell.render(self.mount, fragment)
        logger.debug("Rendered %s (render #%d)", page.path, self.mount.render_count)
        return RenderedPage(page=page, html=html, warnings=self.mount.warnings[warnings_before:])

    def render_all(self, pages: Iterable[Page]) -> list[RenderedPage]:
        return [self.navigate(page) for page in pages]


def render_page(page: Page, settings: AppSettings | None = None) -> str:
    """Render de una sola página en un mount nuevo."""

    return ShellSession(settings).navigate(page).html
