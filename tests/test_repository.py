"""Maven-layout repository resolver.

Tests cover:
    - Relative layout with and without classifier
    - Local hits never touch the network
    - Remote download into the local repository, first repository wins
    - 404 everywhere -> not found; transport errors / 5xx -> resolution error
"""

import httpx
import pytest

from adapters.http_client import build_client
from adapters.repository import MavenRepositoryResolver, artifact_relative_path
from conftest import make_declaration
from core.config import AppSettings
from core.domain.errors import ArtifactNotFoundError, ArtifactResolutionError

REMOTE_A = "https://repo-a.example/maven2"
REMOTE_B = "https://repo-b.example/releases/"


def _make_resolver(handler):
    settings = AppSettings(remote_repositories=[REMOTE_A])
    client = build_client(settings, transport=httpx.MockTransport(handler))
    return MavenRepositoryResolver(settings, client=client)


def _refuse(request):
    raise AssertionError(f"unexpected request {request.url}")


def test_relative_path_layout():
    declaration = make_declaration("ebean", group_id="org.avaje", version="2.5")
    assert artifact_relative_path(declaration).as_posix() == "org/avaje/ebean/2.5/ebean-2.5.jar"

    classified = make_declaration("ebean", group_id="org.avaje", version="2.5", classifier="jdk15")
    assert artifact_relative_path(classified).as_posix() == "org/avaje/ebean/2.5/ebean-2.5-jdk15.jar"


def test_missing_version_is_a_resolution_error():
    with pytest.raises(ArtifactResolutionError):
        artifact_relative_path(make_declaration("x", version=None))


def test_local_hit_skips_network(tmp_path):
    jar = tmp_path / "org" / "example" / "a" / "1.0" / "a-1.0.jar"
    jar.parent.mkdir(parents=True)
    jar.write_bytes(b"PK")

    resolver = _make_resolver(_refuse)
    path = resolver.resolve(make_declaration("a"), remote_repositories=[REMOTE_A], local_repository=tmp_path)
    assert path == jar


def test_download_from_first_repository_that_has_it(tmp_path):
    seen = []

    def handler(request):
        seen.append(str(request.url))
        if str(request.url).startswith(REMOTE_A):
            return httpx.Response(404)
        return httpx.Response(200, content=b"PK\x03\x04jar")

    resolver = _make_resolver(handler)
    path = resolver.resolve(
        make_declaration("a"),
        remote_repositories=[REMOTE_A, REMOTE_B],
        local_repository=tmp_path,
    )
    assert path == tmp_path / "org" / "example" / "a" / "1.0" / "a-1.0.jar"
    assert path.read_bytes() == b"PK\x03\x04jar"
    assert seen == [
        f"{REMOTE_A}/org/example/a/1.0/a-1.0.jar",
        "https://repo-b.example/releases/org/example/a/1.0/a-1.0.jar",
    ]
    assert not path.with_name("a-1.0.jar.part").exists()


def test_not_found_anywhere(tmp_path):
    resolver = _make_resolver(lambda request: httpx.Response(404))
    with pytest.raises(ArtifactNotFoundError) as excinfo:
        resolver.resolve(make_declaration("c"), remote_repositories=[REMOTE_A], local_repository=tmp_path)
    assert "org.example:c:jar:1.0" in str(excinfo.value)


def test_offline_miss_is_not_found(tmp_path):
    resolver = _make_resolver(_refuse)
    with pytest.raises(ArtifactNotFoundError):
        resolver.resolve(make_declaration("c"), remote_repositories=[], local_repository=tmp_path)


def test_server_error_is_resolution_error(tmp_path):
    resolver = _make_resolver(lambda request: httpx.Response(503))
    with pytest.raises(ArtifactResolutionError) as excinfo:
        resolver.resolve(make_declaration("c"), remote_repositories=[REMOTE_A], local_repository=tmp_path)
    assert not isinstance(excinfo.value, ArtifactNotFoundError)
    assert "HTTP 503" in str(excinfo.value)


def test_transport_error_is_resolution_error(tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    resolver = _make_resolver(handler)
    with pytest.raises(ArtifactResolutionError) as excinfo:
        resolver.resolve(make_declaration("c"), remote_repositories=[REMOTE_A], local_repository=tmp_path)
    assert "connection refused" in str(excinfo.value)


def test_injected_client_is_not_closed(tmp_path):
    settings = AppSettings()
    client = build_client(settings, transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    with MavenRepositoryResolver(settings, client=client):
        pass
    assert not client.is_closed
    client.close()
