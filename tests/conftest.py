"""Root conftest: shared fakes for the pipeline collaborators."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Sequence

import pytest

from core.domain.errors import ArtifactNotFoundError, ArtifactResolutionError
from core.domain.models import DependencyDeclaration

# Keep the developer's own settings out of the tests.
for _key in [key for key in os.environ if key.startswith("ENHANCER_")]:
    del os.environ[_key]


def make_declaration(artifact_id: str, scope: str = "compile", **kwargs) -> DependencyDeclaration:
    data = {"group_id": "org.example", "artifact_id": artifact_id, "version": "1.0", "declared_scope": scope}
    data.update(kwargs)
    return DependencyDeclaration(**data)


class FakeResolver:
    """Resolves artifact ids from a table; listed ids fail."""

    def __init__(self, root: Path, *, missing: Sequence[str] = (), broken: Sequence[str] = ()) -> None:
        self.root = root
        self.missing = set(missing)
        self.broken = set(broken)
        self.calls: list[tuple[str, tuple[str, ...], Path]] = []

    def resolve(self, declaration, *, remote_repositories, local_repository):
        self.calls.append((declaration.artifact_id, tuple(remote_repositories), local_repository))
        if declaration.artifact_id in self.missing:
            raise ArtifactNotFoundError(f"Unable to find {declaration.coordinates()}")
        if declaration.artifact_id in self.broken:
            raise ArtifactResolutionError(f"Unable to resolve {declaration.coordinates()}: boom")
        return self.root / f"{declaration.artifact_id}-{declaration.version}.jar"


class FakeEngine:
    def __init__(self, classpath: str, transform_args: str | None) -> None:
        self.classpath = classpath
        self.transform_args = transform_args


class FakeDriver:
    """Records construction and emits canned listener events on process()."""

    instances: list["FakeDriver"] = []

    def __init__(self, engine, class_loading_context, source_dir, destination_dir, *, infos=(), errors=(), fail=None):
        self.engine = engine
        self.class_loading_context = class_loading_context
        self.source_dir = source_dir
        self.destination_dir = destination_dir
        self.listener = None
        self.processed: list[str | None] = []
        self._infos = infos
        self._errors = errors
        self._fail = fail
        FakeDriver.instances.append(self)

    def set_listener(self, listener) -> None:
        self.listener = listener

    def process(self, packages):
        self.processed.append(packages)
        for message in self._infos:
            self.listener.on_info(message)
        for message in self._errors:
            self.listener.on_error(message)
        if self._fail is not None:
            raise self._fail


class FakePopen:
    """Stands in for `subprocess.Popen` with canned output and exit status."""

    def __init__(self, calls, *, returncode=0, stdout="", stderr=""):
        self._calls = calls
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    def __call__(self, command, **kwargs):
        self._calls.append((command, kwargs))
        self.stdout = io.StringIO(self._stdout)
        self.stderr = io.StringIO(self._stderr)
        return self

    def wait(self):
        return self._returncode

    def kill(self):
        pass


@pytest.fixture(autouse=True)
def _reset_fake_driver():
    FakeDriver.instances.clear()
    yield
    FakeDriver.instances.clear()
