"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las declaraciones llegan de un manifiesto JSON con claves estilo Maven
  (`groupId`, `artifactId`); los alias permiten aceptarlas sin traducir a mano.

Nota:
- Estos modelos describen *qué* se resuelve, no *cómo* se obtiene.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

DEFAULT_DECLARED_SCOPE = "compile"
ARTIFACT_TYPE = "jar"


class DependencyDeclaration(BaseModel):
    """Dependencia declarada por el proyecto.

    Por qué inmutable:
    - Viene del modelo del proyecto (externo) y se recorre varias veces
      (filtro, resolución, resumen); nadie debe reescribirla por el camino.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    group_id: str = Field(
        ...,
        min_length=1,
        alias="groupId",
        description="Grupo Maven (p.ej. 'org.avaje').",
    )
    artifact_id: str = Field(
        ...,
        min_length=1,
        alias="artifactId",
        description="Identificador del artefacto dentro del grupo.",
    )
    version: str | None = Field(
        default=None,
        description="Versión concreta; sin versión el artefacto no se puede resolver.",
    )
    classifier: str | None = Field(
        default=None,
        description="Clasificador opcional (p.ej. 'sources', 'jdk15').",
    )
    declared_scope: str | None = Field(
        default=DEFAULT_DECLARED_SCOPE,
        alias="scope",
        description="Scope declarado ('compile', 'test', 'provided', ...).",
    )

    @field_validator("declared_scope", mode="before")
    @classmethod
    def _default_scope(cls, value: object) -> object:
        # `"scope": null` en el manifiesto equivale a no declararlo.
        return DEFAULT_DECLARED_SCOPE if value is None else value

    @property
    def is_test_only(self) -> bool:
        return (self.declared_scope or "").strip().lower() == "test"

    def coordinates(self) -> str:
        """Coordenadas legibles `group:artifact:jar[:classifier]:version`."""

        parts = [self.group_id, self.artifact_id, ARTIFACT_TYPE]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version or "?")
        return ":".join(parts)


class ResolvedArtifact(BaseModel):
    """Artefacto resuelto a un fichero en disco.

    Solo se crea cuando la resolución tuvo éxito.
    """

    model_config = ConfigDict(frozen=True)

    declaration: DependencyDeclaration
    path: Path = Field(
        ...,
        description="Ruta absoluta del fichero del artefacto.",
    )


class ResolutionOutcome(BaseModel):
    """Resultado recuperable de resolver una declaración.

    Por qué un resultado y no una excepción:
    - Un fallo de resolución nunca detiene el pipeline; modelarlo como valor
      evita discriminar por tipo de excepción más arriba.
    """

    model_config = ConfigDict(frozen=True)

    declaration: DependencyDeclaration
    artifact: ResolvedArtifact | None = None
    error: str | None = Field(
        default=None,
        description="Mensaje del fallo (solo si no se resolvió).",
    )

    @property
    def ok(self) -> bool:
        return self.artifact is not None

    @classmethod
    def success(cls, declaration: DependencyDeclaration, path: Path) -> "ResolutionOutcome":
        artifact = ResolvedArtifact(declaration=declaration, path=path.absolute())
        return cls(declaration=declaration, artifact=artifact)

    @classmethod
    def failure(cls, declaration: DependencyDeclaration, message: str) -> "ResolutionOutcome":
        return cls(declaration=declaration, error=message)
