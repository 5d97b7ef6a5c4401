"""Integración: Google Tag Manager.

Produce el mismo markup que inyecta `react-gtm-module` al inicializar:
- un <script> en el head que crea el dataLayer y carga `gtm.js`;
- un <noscript> con iframe `ns.html` al inicio del body.
"""

from __future__ import annotations

import json
import re
from urllib.parse import urlencode

from core.config import AppSettings
from core.domain.analytics import DATA_LAYER_PATTERN, AnalyticsProvider
from core.domain.models import ScriptPlacement, ScriptTag
from core.interfaces.analytics import AnalyticsIntegration


GTM_BASE_URL = "https://www.googletagmanager.com"


def js_literal(value: str) -> str:
    """Literal JS seguro dentro de <script>: `<` nunca aparece sin escapar."""

    return json.dumps(value).replace("<", "\\u003c")


class TagManagerIntegration(AnalyticsIntegration):
    """Bootstrap de un container GTM."""

    provider = AnalyticsProvider.TAG_MANAGER

    def __init__(
        self,
        container_id: str,
        *,
        data_layer_name: str = "dataLayer",
        auth: str | None = None,
        preview: str | None = None,
    ) -> None:
        self.tracking_id = self.provider.validate_id(container_id)
        if not re.match(DATA_LAYER_PATTERN, data_layer_name or ""):
            raise ValueError(f"Invalid dataLayer name: {data_layer_name!r}")
        self.data_layer_name = data_layer_name
        self.auth = auth
        self.preview = preview

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TagManagerIntegration":
        return cls(
            settings.gtm_id,
            data_layer_name=settings.gtm_data_layer_name,
            auth=settings.gtm_auth,
            preview=settings.gtm_preview,
        )

    def _environment_query(self) -> str:
        # Entornos GTM: requieren auth y preview juntos.
        if not (self.auth and self.preview):
            return ""
        return "&" + urlencode(
            {"gtm_auth": self.auth, "gtm_preview": self.preview, "gtm_cookies_win": "x"}
        )

    def script_url(self) -> str:
        return f"{GTM_BASE_URL}/gtm.js?id={self.tracking_id}"

    def noscript_url(self) -> str:
        return f"{GTM_BASE_URL}/ns.html?id={self.tracking_id}{self._environment_query()}"

    def _loader_js(self) -> str:
        layer = js_literal(self.data_layer_name)
        env = js_literal(self._environment_query())
        return (
            "(function(w,d,s,l,i){w[l]=w[l]||[];"
            "w[l].push({'gtm.start':new Date().getTime(),event:'gtm.js'});"
            "var f=d.getElementsByTagName(s)[0],j=d.createElement(s),"
            "dl=l!='dataLayer'?'&l='+l:'';j.async=true;"
            f"j.src='{GTM_BASE_URL}/gtm.js?id='+i+dl+{env};"
            "f.parentNode.insertBefore(j,f);"
            f"}})(window,document,'script',{layer},{js_literal(self.tracking_id)});"
        )

    def initialize(self) -> list[ScriptTag]:
        iframe = (
            f'<iframe src="{self.noscript_url()}" height="0" width="0" '
            'style="display:none;visibility:hidden"></iframe>'
        )
        return [
            ScriptTag(
                placement=ScriptPlacement.HEAD,
                id=f"gtm-{self.tracking_id}",
                inline=self._loader_js(),
            ),
            ScriptTag(
                placement=ScriptPlacement.BODY_START,
                id=f"gtm-noscript-{self.tracking_id}",
                noscript=iframe,
            ),
        ]
