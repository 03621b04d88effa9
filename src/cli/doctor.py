"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, write_user_env_vars
from core.domain.scope import ScopeKind

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_java(executable: str) -> tuple[bool, str]:
    resolved = shutil.which(executable)
    if resolved is None:
        return False, f"{executable!r} not found on PATH"
    try:
        result = subprocess.run([resolved, "-version"], capture_output=True, text=True, timeout=20)
    except (OSError, subprocess.SubprocessError) as exc:
        return False, str(exc)
    # `java -version` reports on stderr.
    banner = (result.stderr or result.stdout).strip().splitlines()
    return result.returncode == 0, banner[0] if banner else resolved


def _check_enhancer_classpath(classpath: str | None, separator: str) -> tuple[str, str]:
    if not classpath:
        return "MISSING", "Set ENHANCER_ENHANCER_CLASSPATH to the engine jar(s)"
    missing = [entry for entry in classpath.split(separator) if entry and not Path(entry).exists()]
    if missing:
        return "FAIL", "Missing: " + ", ".join(missing)
    return "OK", classpath


def _check_class_source(path: Path) -> tuple[str, str]:
    if path.is_dir():
        count = sum(1 for _ in path.rglob("*.class"))
        return "OK", f"{count} class files"
    # Not an error for the pipeline; the engine just has nothing to do.
    return "EMPTY", "Directory does not exist yet (compile first)"


@app.command()
def run(
    class_source: Path | None = typer.Option(None, "--class-source", help="Class directory to inspect."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Enhancer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_java, detail_java = _check_java(settings.java_executable)
    table.add_row("Java", "OK" if ok_java else "FAIL", detail_java)

    status, detail = _check_enhancer_classpath(settings.enhancer_classpath, settings.classpath_separator)
    table.add_row("Enhancer classpath", status, detail)
    table.add_row("Enhancer main class", "OK", settings.enhancer_main_class)

    local_repo = settings.local_repository
    table.add_row("Local repository", "OK" if local_repo.is_dir() else "EMPTY", str(local_repo))
    if settings.remote_repositories:
        table.add_row("Remote repositories", "OK", ", ".join(settings.remote_repositories))
    else:
        table.add_row("Remote repositories", "OFFLINE", "Only the local repository is used")

    if class_source is not None:
        sources = {"given": class_source}
    else:
        sources = {kind.value: Path(f"target/{kind.token()}classes") for kind in ScopeKind}
    for label, path in sources.items():
        status, detail = _check_class_source(path)
        table.add_row(f"Class source ({label})", status, f"{path}: {detail}")

    _console.print(table)

    if not ok_java:
        _console.print("\n[yellow]Note:[/yellow] `enhance` needs a JVM; set ENHANCER_JAVA_EXECUTABLE if java is not on PATH.")


@app.command()
def configure(
    enhancer_classpath: str | None = typer.Option(None, "--enhancer-classpath", help="Engine jar(s)."),
    java_executable: str | None = typer.Option(None, "--java", help="Java executable."),
    local_repository: Path | None = typer.Option(None, "--local-repository", help="Local Maven repository."),
    remote_repository: list[str] | None = typer.Option(None, "--remote-repository", help="Remote repository URL (repeatable)."),
) -> None:
    """Store engine and repository settings in the user config .env."""

    if enhancer_classpath is None:
        enhancer_classpath = typer.prompt("Enhancer classpath (engine jar)", default="", show_default=False).strip()

    values: dict[str, str | None] = {
        "ENHANCER_ENHANCER_CLASSPATH": enhancer_classpath or None,
        "ENHANCER_JAVA_EXECUTABLE": java_executable,
        "ENHANCER_LOCAL_REPOSITORY": str(local_repository) if local_repository else None,
        "ENHANCER_REMOTE_REPOSITORIES": ",".join(remote_repository) if remote_repository else None,
    }
    if not any(values.values()):
        raise typer.BadParameter("nothing to configure")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved enhancer config to:[/green] {env_path}")
