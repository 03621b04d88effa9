"""CLI principal (Typer).

Por qué Typer:
- Los parámetros del goal `enhance` se declaran una vez y llegan tipados.
- Esta capa es el borde: construye `EnhanceOptions`, el resolvedor y el
  orquestador, y deja toda la lógica al Core.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.dependency_manifest import load_dependency_manifest
from adapters.java_enhancer import JavaOfflineFileTransform, engine_factory_from_settings
from adapters.repository import MavenRepositoryResolver
from cli import doctor
from cli.ui_components import build_outcomes_table, build_summary_panel, print_banner
from core.config import AppSettings
from core.domain.errors import EnhancerError
from core.domain.models import DependencyDeclaration
from core.observability import setup_logging
from core.services.artifact_resolution import ArtifactResolutionAdapter
from core.services.enhancement_pipeline import (
    EnhanceOptions,
    EnhancementOrchestrator,
    LoggingListener,
    enhance as run_enhance,
    plan_enhancement,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Resolve dependencies, assemble the classpath and run offline class enhancement.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _settings(
    *,
    separator: str | None,
    local_repository: Path | None,
    remote_repositories: list[str] | None,
    offline: bool,
    quiet: bool,
) -> AppSettings:
    update: dict[str, object] = {}
    if separator is not None:
        update["classpath_separator"] = separator
    if local_repository is not None:
        update["local_repository"] = local_repository
    if remote_repositories:
        update["remote_repositories"] = list(remote_repositories)
    if offline:
        update["remote_repositories"] = []
    if quiet:
        update["log_level"] = "WARNING"
    # Los kwargs tienen prioridad sobre env/.env y pasan por las mismas validaciones.
    try:
        return AppSettings(**update)
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _declarations(path: Path | None) -> list[DependencyDeclaration]:
    if path is None:
        return []
    try:
        return load_dependency_manifest(path).dependencies
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        _err_console.print(f"[red]Invalid dependency manifest {path}:[/red] {exc}")
        raise typer.Exit(code=1) from exc


DependenciesOpt = typer.Option(None, "--dependencies", "-d", help="JSON manifest of declared dependencies.")
ClassSourceOpt = typer.Option(None, "--class-source", help="Directory with compiled classes (default target/<scope>classes).")
ClasspathOpt = typer.Option(None, "--classpath", help="Extra classpath appended after the class source.")
ScopeOpt = typer.Option(None, "--scope", help="Scope override ('' / 'test-').")
ExecutionIdOpt = typer.Option("default", "--execution-id", help="Execution id; containing 'test' selects the test scope.")
SeparatorOpt = typer.Option(None, "--separator", help="Classpath separator (default from settings, ';').")
LocalRepoOpt = typer.Option(None, "--local-repository", help="Local Maven-layout repository.")
RemoteRepoOpt = typer.Option(None, "--remote-repository", help="Remote repository URL (repeatable).")
OfflineOpt = typer.Option(False, "--offline", help="Only use the local repository.")
QuietOpt = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors.")


@app.command()
def enhance(
    dependencies: Path | None = DependenciesOpt,
    class_source: str | None = ClassSourceOpt,
    class_destination: str | None = typer.Option(
        None, "--class-destination", help="Where transformed classes are written (default: class source)."
    ),
    packages: str | None = typer.Option(
        None, "--packages", "-p", help="Comma-delimited package patterns; a '*' or '**' suffix includes subpackages."
    ),
    transform_args: str | None = typer.Option(None, "--transform-args", help="Arguments for the engine, e.g. debug=1."),
    classpath: str | None = ClasspathOpt,
    scope: str | None = ScopeOpt,
    execution_id: str = ExecutionIdOpt,
    separator: str | None = SeparatorOpt,
    local_repository: Path | None = LocalRepoOpt,
    remote_repository: list[str] | None = RemoteRepoOpt,
    offline: bool = OfflineOpt,
    quiet: bool = QuietOpt,
) -> None:
    """Run the full enhancement goal."""

    settings = _settings(
        separator=separator,
        local_repository=local_repository,
        remote_repositories=remote_repository,
        offline=offline,
        quiet=quiet,
    )
    setup_logging(settings.log_level)
    if not quiet:
        print_banner(_console)

    declarations = _declarations(dependencies)
    options = EnhanceOptions(
        class_source=class_source,
        class_destination=class_destination,
        packages=packages,
        transform_args=transform_args,
        classpath=classpath,
        scope=scope,
        execution_id=execution_id,
        separator=settings.classpath_separator,
    )
    orchestrator = EnhancementOrchestrator(
        engine_factory_from_settings(settings),
        JavaOfflineFileTransform,
        class_loading_context=settings.enhancer_classpath,
        listener=LoggingListener(forward_errors=settings.forward_engine_errors),
    )

    with MavenRepositoryResolver(settings) as resolver:
        resolution = ArtifactResolutionAdapter(
            resolver,
            local_repository=settings.local_repository,
            remote_repositories=settings.remote_repositories,
        )
        try:
            result = run_enhance(
                options=options,
                declarations=declarations,
                resolution=resolution,
                orchestrator=orchestrator,
            )
        except EnhancerError as exc:
            _err_console.print(f"[red]Enhancement failed:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    if not quiet:
        _console.print(build_outcomes_table(result))
        _console.print(build_summary_panel(result))


@app.command(name="classpath")
def show_classpath(
    dependencies: Path | None = DependenciesOpt,
    class_source: str | None = ClassSourceOpt,
    classpath: str | None = ClasspathOpt,
    scope: str | None = ScopeOpt,
    execution_id: str = ExecutionIdOpt,
    separator: str | None = SeparatorOpt,
    local_repository: Path | None = LocalRepoOpt,
    remote_repository: list[str] | None = RemoteRepoOpt,
    offline: bool = OfflineOpt,
    quiet: bool = QuietOpt,
    summary: bool = typer.Option(False, "--summary", help="Also show the dependency table."),
) -> None:
    """Resolve dependencies and print the assembled classpath without enhancing."""

    settings = _settings(
        separator=separator,
        local_repository=local_repository,
        remote_repositories=remote_repository,
        offline=offline,
        quiet=quiet,
    )
    setup_logging(settings.log_level)

    options = EnhanceOptions(
        class_source=class_source,
        classpath=classpath,
        scope=scope,
        execution_id=execution_id,
        separator=settings.classpath_separator,
    )
    declarations = _declarations(dependencies)
    with MavenRepositoryResolver(settings) as resolver:
        resolution = ArtifactResolutionAdapter(
            resolver,
            local_repository=settings.local_repository,
            remote_repositories=settings.remote_repositories,
        )
        result = plan_enhancement(options=options, declarations=declarations, resolution=resolution)

    if summary:
        _err_console.print(build_outcomes_table(result))
    typer.echo(result.request.classpath)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
