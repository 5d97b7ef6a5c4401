"""Integraciones de analytics (scripts concretos).

Por qué un paquete:
- Agrupa una integración por proveedor (GTM, GA4).
- Cada módulo implementa `core.interfaces.analytics.AnalyticsIntegration`.
"""

from adapters.analytics.measurement import MeasurementIntegration
from adapters.analytics.tag_manager import TagManagerIntegration

__all__ = [
    "MeasurementIntegration",
    "TagManagerIntegration",
]
