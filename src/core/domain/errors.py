"""Errores del dominio.

Por qué dos familias:
- Los errores de resolución son recuperables: el adaptador los convierte en
  un `ResolutionOutcome` fallido y el pipeline sigue.
- Los errores de transformación son fatales: se propagan tal cual hasta la CLI.
"""

from __future__ import annotations


class EnhancerError(Exception):
    """Base de todos los errores propios de la herramienta."""


class ArtifactResolutionError(EnhancerError):
    """El mecanismo de repositorio falló al resolver un artefacto."""


class ArtifactNotFoundError(ArtifactResolutionError):
    """Ningún repositorio (local o remoto) contiene el artefacto."""


class TransformError(EnhancerError):
    """El motor externo de transformación terminó con error."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
