"""Resolvedor de artefactos con layout Maven.

Responsabilidad:
- Buscar `<grupo/en/ruta>/<artifact>/<version>/<artifact>-<version>[-<classifier>].jar`
  en el repositorio local.
- Si no está, descargarlo del primer repositorio remoto que lo tenga (httpx) y
  dejarlo en el repositorio local.

Errores:
- Nadie lo tiene (404 en todos) -> `ArtifactNotFoundError`.
- Fallos de red, estados inesperados o declaración incompleta ->
  `ArtifactResolutionError`.
El adaptador del Core convierte ambos en resultados fallidos; aquí no se
reintenta.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Sequence

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import ArtifactNotFoundError, ArtifactResolutionError
from core.domain.models import ARTIFACT_TYPE, DependencyDeclaration

logger = logging.getLogger(__name__)


def artifact_relative_path(declaration: DependencyDeclaration) -> PurePosixPath:
    """Ruta relativa del artefacto dentro de un repositorio Maven."""

    if not declaration.version:
        raise ArtifactResolutionError(
            f"Unable to resolve {declaration.coordinates()}: no version declared"
        )
    filename = f"{declaration.artifact_id}-{declaration.version}"
    if declaration.classifier:
        filename += f"-{declaration.classifier}"
    filename += f".{ARTIFACT_TYPE}"
    return PurePosixPath(
        *declaration.group_id.split("."),
        declaration.artifact_id,
        declaration.version,
        filename,
    )


class MavenRepositoryResolver:
    """Implementa `core.interfaces.resolver.ArtifactResolver`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._owns_client = client is None

    def __enter__(self) -> "MavenRepositoryResolver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = build_client(self._settings)
        return self._client

    def resolve(
        self,
        declaration: DependencyDeclaration,
        *,
        remote_repositories: Sequence[str],
        local_repository: Path,
    ) -> Path:
        relative = artifact_relative_path(declaration)
        local_path = local_repository.joinpath(*relative.parts)
        if local_path.is_file():
            return local_path

        problems: list[str] = []
        for repository in remote_repositories:
            url = f"{repository.rstrip('/')}/{relative.as_posix()}"
            try:
                response = self._http().get(url)
            except httpx.HTTPError as exc:
                problems.append(f"{repository}: {exc}")
                continue

            if response.status_code == 404:
                logger.debug("not in %s: %s", repository, declaration.coordinates())
                continue
            if response.is_error:
                problems.append(f"{repository}: HTTP {response.status_code}")
                continue

            try:
                _store(local_path, response.content)
            except OSError as exc:
                raise ArtifactResolutionError(
                    f"Unable to store {declaration.coordinates()} in {local_repository}: {exc}"
                ) from exc
            logger.debug("downloaded %s from %s", declaration.coordinates(), repository)
            return local_path

        if problems:
            raise ArtifactResolutionError(
                f"Unable to resolve {declaration.coordinates()}: " + "; ".join(problems)
            )
        searched = [str(local_repository), *remote_repositories]
        raise ArtifactNotFoundError(
            f"Unable to find {declaration.coordinates()} in: " + ", ".join(searched)
        )


def _store(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    partial = path.with_name(path.name + ".part")
    partial.write_bytes(content)
    partial.replace(path)
