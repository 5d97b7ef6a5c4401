from __future__ import annotations

import os

import pytest

from core.config import AppSettings
from core.domain.analytics import AnalyticsProvider
from core.domain.models import ScriptPlacement, ScriptTag


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Sin variables BLOGSHELL_* ni .env del desarrollador."""

    for key in list(os.environ):
        if key.startswith("BLOGSHELL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BLOGSHELL_CONFIG_DIR", str(tmp_path / "user-config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


class CountingIntegration:
    """Doble de test: cuenta cuántas veces se inicializa."""

    def __init__(self, provider: AnalyticsProvider, tracking_id: str, *, fail: bool = False) -> None:
        self.provider = provider
        self.tracking_id = tracking_id
        self.fail = fail
        self.calls = 0

    def initialize(self) -> list[ScriptTag]:
        self.calls += 1
        if self.fail:
            raise RuntimeError("network unavailable")
        return [
            ScriptTag(
                placement=ScriptPlacement.HEAD,
                id=f"fake-{self.tracking_id}",
                inline=f"console.log('{self.tracking_id}');",
            )
        ]


@pytest.fixture
def counting_tag_manager() -> CountingIntegration:
    return CountingIntegration(AnalyticsProvider.TAG_MANAGER, "GTM-5C2PVP7")


@pytest.fixture
def counting_measurement() -> CountingIntegration:
    return CountingIntegration(AnalyticsProvider.MEASUREMENT, "G-76T38NTY0G")
