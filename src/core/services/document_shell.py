"""Document Shell.

Skeleton estático del documento: atributo `lang`, el set fijo de meta tags
SEO/sociales derivado de `SiteMetadata`, y el bootstrap de Google Analytics 4
una vez por mount.
"""

from __future__ import annotations

import logging

from adapters.html_renderer import render_document
from core.config import AppSettings
from core.domain.models import MetaTag, ShellFragment, SiteMetadata
from core.interfaces.analytics import AnalyticsIntegration
from core.services.lifecycle import Mount


logger = logging.getLogger(__name__)

MEASUREMENT_EFFECT = "measurement"


def build_meta_tags(meta: SiteMetadata) -> list[MetaTag]:
    """Meta tags del documento, en el orden en que se emiten."""

    return [
        MetaTag.named("robots", "follow, index"),
        MetaTag.named("description", meta.description),
        MetaTag.og("og:site_name", meta.title),
        MetaTag.og("og:description", meta.description),
        MetaTag.og("og:title", meta.title),
        MetaTag.og("og:image", meta.image),
        MetaTag.named("twitter:card", "summary_large_image"),
        MetaTag.named("twitter:site", meta.twitter_handle),
        MetaTag.named("twitter:title", meta.title),
        MetaTag.named("twitter:description", meta.description),
        MetaTag.named("twitter:image", meta.image),
    ]


class DocumentShell:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        metadata: SiteMetadata | None = None,
        measurement: AnalyticsIntegration | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.metadata = metadata or self._settings.site_metadata()
        self.measurement = measurement

    @property
    def lang(self) -> str:
        return self._settings.lang

    def meta_tags(self) -> list[MetaTag]:
        return build_meta_tags(self.metadata)

    def _initialize_measurement(self):
        if self.measurement is None:
            return None
        logger.info("Initializing %s (%s)", self.measurement.provider.label(), self.measurement.tracking_id)
        return self.measurement.initialize()

    def render(self, mount: Mount, fragment: ShellFragment) -> str:
        mount.use_effect(MEASUREMENT_EFFECT, self._initialize_measurement)
        mount.render_count += 1
        return render_document(
            lang=self.lang,
            meta_tags=self.meta_tags(),
            fragment=fragment,
            scripts=mount.scripts,
        )
