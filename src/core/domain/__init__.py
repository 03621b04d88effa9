"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, subprocesos ni la CLI: solo dependencias,
  scopes y artefactos.
"""
