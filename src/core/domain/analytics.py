"""Analytics providers known to the shells.

This module centralizes the tracking-id formats for both integrations so the
settings layer and the adapters validate against the same patterns.
"""

from __future__ import annotations

import re
from enum import Enum


GTM_CONTAINER_PATTERN = r"^GTM-[A-Z0-9]+$"
GA_MEASUREMENT_PATTERN = r"^G-[A-Z0-9]+$"
DATA_LAYER_PATTERN = r"^[A-Za-z_$][A-Za-z0-9_$]*$"


class AnalyticsProvider(str, Enum):
    """Supported analytics integrations."""

    TAG_MANAGER = "tag_manager"
    MEASUREMENT = "measurement"

    @property
    def id_pattern(self) -> str:
        if self is AnalyticsProvider.TAG_MANAGER:
            return GTM_CONTAINER_PATTERN
        return GA_MEASUREMENT_PATTERN

    def validate_id(self, tracking_id: str) -> str:
        """Return the stripped id, raising `ValueError` when the format is wrong."""

        value = (tracking_id or "").strip()
        if not re.match(self.id_pattern, value):
            raise ValueError(f"Invalid {self.label()} id: {tracking_id!r}")
        return value

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "Google Tag Manager" if self is AnalyticsProvider.TAG_MANAGER else "Google Analytics 4"
