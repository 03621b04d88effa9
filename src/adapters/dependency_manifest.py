"""Carga del manifiesto de dependencias (JSON).

Soporta formatos tipo:
- {"dependencies": [{"groupId": ..., "artifactId": ..., "version": ..., "scope": ...}]}
- [ {...}, {...} ] (lista directa)

Nota:
- Es el borde con la herramienta de build anfitriona: ella exporta sus
  dependencias declaradas y aquí solo se validan. No se interpreta ningún POM.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from core.domain.models import DependencyDeclaration


class DependencyManifest(BaseModel):
    dependencies: list[DependencyDeclaration] = Field(default_factory=list)


def parse_dependency_manifest(data: object) -> DependencyManifest:
    if isinstance(data, list):
        data = {"dependencies": data}
    return DependencyManifest.model_validate(data)


def load_dependency_manifest(path: Path) -> DependencyManifest:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return parse_dependency_manifest(data)
