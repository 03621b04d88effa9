"""Resolución tolerante a fallos de dependencias.

Por qué un adaptador en el Core:
- Encapsula la política de fallo parcial: una coordenada rota nunca bloquea
  el enhancement de un proyecto cuyas otras dependencias resuelven bien.
- El resolvedor concreto (repositorio Maven, fake) entra por constructor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from core.domain.errors import ArtifactResolutionError
from core.domain.models import DependencyDeclaration, ResolutionOutcome, ResolvedArtifact
from core.interfaces.resolver import ArtifactResolver

logger = logging.getLogger(__name__)


class ArtifactResolutionAdapter:
    """Resuelve declaraciones a ficheros sin abortar ni reintentar."""

    def __init__(
        self,
        resolver: ArtifactResolver,
        *,
        local_repository: Path,
        remote_repositories: Sequence[str] = (),
    ) -> None:
        self._resolver = resolver
        self._local_repository = local_repository
        self._remote_repositories = list(remote_repositories)

    def resolve(self, declaration: DependencyDeclaration) -> ResolutionOutcome:
        try:
            path = self._resolver.resolve(
                declaration,
                remote_repositories=self._remote_repositories,
                local_repository=self._local_repository,
            )
        except ArtifactResolutionError as exc:
            logger.info("%s", exc)
            return ResolutionOutcome.failure(declaration, str(exc))

        outcome = ResolutionOutcome.success(declaration, path)
        logger.info("arg=%s", outcome.artifact.path)
        return outcome

    def resolve_outcomes(self, declarations: Iterable[DependencyDeclaration]) -> list[ResolutionOutcome]:
        return [self.resolve(declaration) for declaration in declarations]


def successful_artifacts(outcomes: Iterable[ResolutionOutcome]) -> list[ResolvedArtifact]:
    return [outcome.artifact for outcome in outcomes if outcome.artifact is not None]
