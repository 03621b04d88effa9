"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `enhance` y `classpath`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.enhancement_pipeline import PipelineResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (`--quiet`, scripts).
    """

    title = Text("enhancer", style="bold cyan")
    subtitle = Text("Scope • Dependencias • Classpath • Enhancement", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_outcomes_table(result: PipelineResult) -> Table:
    """Tabla con una fila por dependencia: resuelta, fallida u omitida."""

    table = Table(title="Dependencies")
    table.add_column("Coordinates", style="cyan", no_wrap=True)
    table.add_column("Scope", style="white")
    table.add_column("Status", style="green")
    table.add_column("Detail", style="dim")

    for outcome in result.outcomes:
        declaration = outcome.declaration
        if outcome.artifact is not None:
            table.add_row(declaration.coordinates(), declaration.declared_scope, "resolved", str(outcome.artifact.path))
        else:
            table.add_row(declaration.coordinates(), declaration.declared_scope, "[red]failed[/red]", outcome.error or "")
    for declaration in result.skipped:
        table.add_row(declaration.coordinates(), declaration.declared_scope, "[yellow]skipped[/yellow]", "out of scope")
    return table


def build_summary_panel(result: PipelineResult) -> Panel:
    request = result.request
    body = Text()
    body.append(f"Scope: {result.scope.kind.value}")
    if result.scope.overridden:
        body.append(f" (override {result.scope.token!r})", style="dim")
    body.append(f"\nClass source: {request.class_source}")
    body.append(f"\nClass destination: {request.class_destination}")
    body.append(f"\nPackages: {request.packages or '-'}")
    body.append(f"\nTransform args: {request.transform_args or '-'}")
    body.append(f"\nResolved: {len(result.artifacts)}  Failed: {len(result.failures)}  Skipped: {len(result.skipped)}")
    if result.processed:
        body.append("\nEnhancement finished", style="bold green")

    return Panel(body, title=Text("Summary", style="bold yellow"), border_style="yellow")
