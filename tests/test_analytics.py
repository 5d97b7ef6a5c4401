from __future__ import annotations

import pytest

from adapters.analytics import MeasurementIntegration, TagManagerIntegration
from adapters.analytics.tag_manager import js_literal
from core.config import AppSettings
from core.domain.analytics import AnalyticsProvider
from core.domain.models import ScriptPlacement
from core.interfaces.analytics import AnalyticsIntegration


def test_tag_manager_injects_loader_and_noscript():
    gtm = TagManagerIntegration("GTM-5C2PVP7")
    head, noscript = gtm.initialize()

    assert isinstance(gtm, AnalyticsIntegration)
    assert head.placement is ScriptPlacement.HEAD
    assert "gtm.js" in head.inline
    assert '"GTM-5C2PVP7"' in head.inline
    assert '"dataLayer"' in head.inline
    assert noscript.placement is ScriptPlacement.BODY_START
    assert "https://www.googletagmanager.com/ns.html?id=GTM-5C2PVP7" in noscript.noscript
    assert "display:none;visibility:hidden" in noscript.noscript


def test_tag_manager_environment_query():
    gtm = TagManagerIntegration("GTM-5C2PVP7", auth="abc", preview="env-3", data_layer_name="shellLayer")
    head, _ = gtm.initialize()

    assert gtm.noscript_url().endswith("&gtm_auth=abc&gtm_preview=env-3&gtm_cookies_win=x")
    assert "gtm_auth=abc" in head.inline
    assert '"shellLayer"' in head.inline


def test_tag_manager_ignores_partial_environment():
    gtm = TagManagerIntegration("GTM-5C2PVP7", auth="abc")
    assert gtm.noscript_url() == "https://www.googletagmanager.com/ns.html?id=GTM-5C2PVP7"


def test_tag_manager_rejects_invalid_data_layer_name():
    with pytest.raises(ValueError):
        TagManagerIntegration("GTM-5C2PVP7", data_layer_name="x</script><script>alert(1)//")


def test_inline_loader_never_closes_the_script_tag():
    gtm = TagManagerIntegration("GTM-5C2PVP7", auth="</script><b>", preview="env-<3>")
    head, noscript = gtm.initialize()

    assert "<" not in head.inline
    assert "</script" not in noscript.noscript


def test_js_literal_escapes_angle_brackets():
    assert js_literal("</script>") == '"\\u003c/script>"'


def test_measurement_injects_gtag():
    ga = MeasurementIntegration("G-76T38NTY0G")
    loader, bootstrap = ga.initialize()

    assert loader.src == "https://www.googletagmanager.com/gtag/js?id=G-76T38NTY0G"
    assert loader.async_load is True
    assert "gtag('js', new Date());" in bootstrap.inline
    assert "gtag('config', \"G-76T38NTY0G\");" in bootstrap.inline


def test_measurement_without_page_view():
    ga = MeasurementIntegration("G-76T38NTY0G", send_page_view=False)
    _, bootstrap = ga.initialize()
    assert '{"send_page_view": false}' in bootstrap.inline


@pytest.mark.parametrize(
    ("factory", "bad_id"),
    [
        (TagManagerIntegration, "G-76T38NTY0G"),
        (TagManagerIntegration, "gtm-5c2pvp7"),
        (MeasurementIntegration, "UA-12345-1"),
        (MeasurementIntegration, ""),
    ],
)
def test_malformed_ids_are_rejected(factory, bad_id):
    with pytest.raises(ValueError):
        factory(bad_id)


def test_from_settings_uses_literal_defaults(settings: AppSettings):
    assert TagManagerIntegration.from_settings(settings).tracking_id == "GTM-5C2PVP7"
    assert MeasurementIntegration.from_settings(settings).tracking_id == "G-76T38NTY0G"


def test_provider_labels():
    assert AnalyticsProvider.TAG_MANAGER.label() == "Google Tag Manager"
    assert AnalyticsProvider.MEASUREMENT.validate_id(" G-ABC123 ") == "G-ABC123"
