"""Classpath assembly.

The engine walks the classpath in order when it looks up superclasses and
interfaces, so the order of segments changes the enhancement result. The
assembler is therefore a pure function: the same artifacts and
configuration always produce the same string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.domain.models import ResolvedArtifact

DEFAULT_SEPARATOR = ";"


def assemble_classpath(
    artifacts: Iterable[ResolvedArtifact],
    class_source: str | Path,
    extra_classpath: str | None = None,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Join artifact paths, the class source and an optional extra classpath.

    Layout: `<artifact><sep>...<artifact><sep><class_source>[<sep><extra>]`.
    A separator is only added before `extra_classpath` when the string built
    so far does not already end with one.
    """

    if len(separator) != 1:
        raise ValueError(f"classpath separator must be a single character, got {separator!r}")

    parts: list[str] = []
    for artifact in artifacts:
        parts.append(str(artifact.path))
        parts.append(separator)
    parts.append(str(class_source))
    classpath = "".join(parts)

    if extra_classpath:
        if not classpath.endswith(separator):
            classpath += separator
        classpath += extra_classpath
    return classpath

