"""Classpath assembly.

Tests cover:
    - Layout: artifacts in order, then class source, then extra classpath
    - Exactly one separator between segments
    - Class source appears once and is never preceded by a stray separator
    - Determinism for identical inputs
"""

from pathlib import Path

import pytest

from conftest import make_declaration
from core.domain.models import ResolvedArtifact
from core.services.classpath import assemble_classpath


def _artifact(name: str) -> ResolvedArtifact:
    return ResolvedArtifact(declaration=make_declaration(name), path=Path(f"/repo/{name}.jar"))


def test_artifacts_then_class_source():
    classpath = assemble_classpath([_artifact("a"), _artifact("b")], "target/classes")
    assert classpath == "/repo/a.jar;/repo/b.jar;target/classes"


def test_no_artifacts_is_just_class_source():
    assert assemble_classpath([], "target/classes") == "target/classes"


def test_extra_classpath_goes_last():
    classpath = assemble_classpath([_artifact("a")], "target/classes", "lib/x.jar;lib/y.jar")
    assert classpath == "/repo/a.jar;target/classes;lib/x.jar;lib/y.jar"


def test_no_duplicate_separator_before_extra_classpath():
    classpath = assemble_classpath([_artifact("a")], "target/classes;", "lib/x.jar")
    assert classpath == "/repo/a.jar;target/classes;lib/x.jar"
    assert ";;" not in classpath


def test_class_source_appears_once_between_artifacts_and_extra():
    classpath = assemble_classpath([_artifact("a"), _artifact("b")], "target/classes", "extra")
    segments = classpath.split(";")
    assert segments.count("target/classes") == 1
    assert segments.index("target/classes") == 2
    assert segments[-1] == "extra"
    assert ";;" not in classpath


def test_custom_separator():
    classpath = assemble_classpath([_artifact("a")], "target/classes", "extra", separator=":")
    assert classpath == "/repo/a.jar:target/classes:extra"


def test_separator_must_be_one_character():
    with pytest.raises(ValueError):
        assemble_classpath([], "target/classes", separator="::")


def test_assembly_is_deterministic():
    artifacts = [_artifact("a"), _artifact("b"), _artifact("c")]
    first = assemble_classpath(artifacts, "target/classes", "extra")
    second = assemble_classpath(list(artifacts), "target/classes", "extra")
    assert first == second
