"""Integración: Google Analytics 4 (gtag.js).

Equivalente a `ReactGA.initialize(<id>)`: carga `gtag/js` en async y
ejecuta el bootstrap `gtag('js', ...)` + `gtag('config', <id>)`.
"""

from __future__ import annotations

from adapters.analytics.tag_manager import js_literal
from core.config import AppSettings
from core.domain.analytics import AnalyticsProvider
from core.domain.models import ScriptPlacement, ScriptTag
from core.interfaces.analytics import AnalyticsIntegration


GTAG_URL = "https://www.googletagmanager.com/gtag/js"


class MeasurementIntegration(AnalyticsIntegration):
    provider = AnalyticsProvider.MEASUREMENT

    def __init__(self, measurement_id: str, *, send_page_view: bool = True) -> None:
        self.tracking_id = self.provider.validate_id(measurement_id)
        self.send_page_view = send_page_view

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "MeasurementIntegration":
        return cls(settings.ga_measurement_id, send_page_view=settings.ga_send_page_view)

    def script_url(self) -> str:
        return f"{GTAG_URL}?id={self.tracking_id}"

    def _bootstrap_js(self) -> str:
        config_args = js_literal(self.tracking_id)
        if not self.send_page_view:
            config_args += ", {\"send_page_view\": false}"
        return (
            "window.dataLayer = window.dataLayer || [];"
            "function gtag(){dataLayer.push(arguments);}"
            "gtag('js', new Date());"
            f"gtag('config', {config_args});"
        )

    def initialize(self) -> list[ScriptTag]:
        return [
            ScriptTag(
                placement=ScriptPlacement.HEAD,
                id=f"gtag-loader-{self.tracking_id}",
                src=self.script_url(),
                async_load=True,
            ),
            ScriptTag(
                placement=ScriptPlacement.HEAD,
                id=f"gtag-init-{self.tracking_id}",
                inline=self._bootstrap_js(),
            ),
        ]
