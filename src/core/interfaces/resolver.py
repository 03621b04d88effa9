"""Contrato de resolución de artefactos.

Por qué Protocol:
- El Core no sabe si el artefacto viene de un repositorio local, de Maven
  Central o de un fake en tests; solo necesita una ruta o un error.
- Sustituye la búsqueda de componentes en un contenedor por un parámetro
  explícito del adaptador.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import DependencyDeclaration


@runtime_checkable
class ArtifactResolver(Protocol):
    """Contrato mínimo de un resolvedor de repositorio.

    Reglas de diseño:
    - Es síncrono: el pipeline espera cada resolución antes de seguir.
    - Señala fallos con `ArtifactNotFoundError` o `ArtifactResolutionError`.
    """

    def resolve(
        self,
        declaration: DependencyDeclaration,
        *,
        remote_repositories: Sequence[str],
        local_repository: Path,
    ) -> Path:
        """Devuelve la ruta del fichero del artefacto declarado."""

        ...
