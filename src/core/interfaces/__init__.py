"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) para las integraciones de analytics.
- Los shells dependen de la abstracción; GTM/GA4 viven en `adapters`.
"""
