"""Application Shell.

Wraps every navigation: registers the global stylesheets, emits the shared
head links (RSS alternate, font preload) ahead of the page's own head, and
bootstraps Google Tag Manager once per mount.
"""

from __future__ import annotations

import logging

from core.config import AppSettings
from core.domain.models import HeadLink, Page, ShellFragment
from core.interfaces.analytics import AnalyticsIntegration
from core.services.lifecycle import Mount


logger = logging.getLogger(__name__)

TAG_MANAGER_EFFECT = "tag-manager"


class ApplicationShell:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        tag_manager: AnalyticsIntegration | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.tag_manager = tag_manager

    def head_links(self) -> list[HeadLink]:
        """Links compartidos por todas las páginas, en orden de emisión."""

        return [
            HeadLink(
                rel="alternate",
                type="application/rss+xml",
                title="RSS",
                href=self._settings.feed_path,
            ),
            HeadLink(
                rel="preload",
                href=self._settings.font_path,
                as_="font",
                type="font/woff2",
                crossorigin="anonymous",
            ),
        ]

    def _initialize_tag_manager(self):
        if self.tag_manager is None:
            return None
        logger.info("Initializing %s (%s)", self.tag_manager.provider.label(), self.tag_manager.tracking_id)
        return self.tag_manager.initialize()

    def render(self, mount: Mount, page: Page) -> ShellFragment:
        mount.use_effect(TAG_MANAGER_EFFECT, self._initialize_tag_manager)

        shared = self.head_links()
        # La página puede añadir links propios, pero no duplicar los compartidos.
        shared_keys = {(link.rel, link.href) for link in shared}
        page_links = [link for link in page.head_links if (link.rel, link.href) not in shared_keys]

        return ShellFragment(
            path=page.path,
            title=page.title,
            stylesheets=list(self._settings.stylesheets),
            head_links=shared + page_links,
            body_html=page.body_html,
        )
