"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los elementos del documento (meta, links, scripts) como datos
  validados (Pydantic v2).
- El dominio no conoce Jinja2, HTTP ni la CLI.
"""
