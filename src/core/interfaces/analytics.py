"""Contrato de integraciones de analytics.

Por qué Protocol:
- Los shells solo necesitan "inicializa y dame los scripts a inyectar".
- Permite sustituir GTM/GA4 por dobles de test sin herencia rígida.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.analytics import AnalyticsProvider
from core.domain.models import ScriptTag


@runtime_checkable
class AnalyticsIntegration(Protocol):
    """Contrato mínimo para una integración de analytics.

    Reglas de diseño:
    - `initialize` es síncrono: solo produce markup, el navegador hace la red.
    - Se invoca como máximo una vez por mount (lo garantiza el lifecycle).
    """

    provider: AnalyticsProvider
    tracking_id: str

    def initialize(self) -> list[ScriptTag]:
        """Devuelve los scripts que la integración inyecta en el documento."""

        ...
