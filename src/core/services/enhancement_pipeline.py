"""Enhancement orchestration.

This module wires the linear pipeline: scope -> filter -> resolution ->
classpath -> external engine. The CLI delegates all of it to these
helpers, which keeps the pipeline reusable from other entry points (tests,
other build integrations) and keeps printing out of the core logic.

Only the engine step may fail fatally; everything upstream degrades to
log records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from core.domain.models import DependencyDeclaration, ResolutionOutcome, ResolvedArtifact
from core.domain.scope import EffectiveScope
from core.interfaces.transform import DriverFactory, EngineFactory, TransformationListener
from core.services.artifact_resolution import ArtifactResolutionAdapter, successful_artifacts
from core.services.classpath import DEFAULT_SEPARATOR, assemble_classpath
from core.services.dependency_scope import filter_dependencies, in_scope, resolve_scope

logger = logging.getLogger(__name__)


@dataclass
class EnhanceOptions:
    """Configuration of one `enhance` invocation, built at the process boundary."""

    class_source: str | None = None
    class_destination: str | None = None
    packages: str | None = None
    transform_args: str | None = None
    classpath: str | None = None
    scope: str | None = None
    execution_id: str = "default"
    separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True)
class EnhancementRequest:
    """Everything the engine needs; built once per invocation."""

    class_source: str
    class_destination: str
    transform_args: str | None
    packages: str | None
    classpath: str


@dataclass
class PipelineResult:
    """Output of the planning stages (and of a full run)."""

    scope: EffectiveScope
    declarations: list[DependencyDeclaration]
    outcomes: list[ResolutionOutcome]
    request: EnhancementRequest
    skipped: list[DependencyDeclaration] = field(default_factory=list)
    processed: bool = False

    @property
    def artifacts(self) -> list[ResolvedArtifact]:
        return successful_artifacts(self.outcomes)

    @property
    def failures(self) -> list[ResolutionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class LoggingListener:
    """Bridges driver events to the build log.

    Error events go to the log at error level unless `forward_errors` is
    off, in which case they are accepted and dropped.
    """

    def __init__(self, log: logging.Logger | None = None, *, forward_errors: bool = True) -> None:
        self._log = log or logger
        self._forward_errors = forward_errors

    def on_info(self, message: str) -> None:
        self._log.info("%s", message)

    def on_error(self, message: str) -> None:
        if self._forward_errors:
            self._log.error("%s", message)


class EnhancementOrchestrator:
    """Builds the external engine and driver, then triggers processing."""

    def __init__(
        self,
        engine_factory: EngineFactory,
        driver_factory: DriverFactory,
        *,
        class_loading_context: str | None = None,
        listener: TransformationListener | None = None,
    ) -> None:
        self._engine_factory = engine_factory
        self._driver_factory = driver_factory
        self._class_loading_context = class_loading_context
        self._listener = listener or LoggingListener()

    def run(self, request: EnhancementRequest) -> None:
        engine = self._engine_factory(request.classpath, request.transform_args)
        logger.info(
            "class_source=%s  transform_args=%s  class_destination=%s  packages=%s",
            request.class_source,
            request.transform_args,
            request.class_destination,
            request.packages,
        )
        driver = self._driver_factory(
            engine,
            self._class_loading_context,
            Path(request.class_source),
            Path(request.class_destination),
        )
        driver.set_listener(self._listener)
        # Engine failures propagate unchanged.
        driver.process(request.packages)


def plan_enhancement(
    *,
    options: EnhanceOptions,
    declarations: Iterable[DependencyDeclaration],
    resolution: ArtifactResolutionAdapter,
) -> PipelineResult:
    """Run scope, filter, resolution and classpath stages."""

    declarations = list(declarations)
    scope = resolve_scope(options.scope, options.execution_id)
    class_source = options.class_source or scope.default_class_source()
    class_destination = options.class_destination or class_source
    logger.info("Current Directory: %s", Path.cwd().absolute())

    retained = filter_dependencies(declarations, scope)
    skipped = [declaration for declaration in declarations if not in_scope(declaration, scope)]

    outcomes = resolution.resolve_outcomes(retained)
    classpath = assemble_classpath(
        successful_artifacts(outcomes),
        class_source,
        options.classpath,
        separator=options.separator,
    )

    request = EnhancementRequest(
        class_source=class_source,
        class_destination=class_destination,
        transform_args=options.transform_args,
        packages=options.packages,
        classpath=classpath,
    )
    return PipelineResult(
        scope=scope,
        declarations=retained,
        outcomes=outcomes,
        request=request,
        skipped=skipped,
    )


def enhance(
    *,
    options: EnhanceOptions,
    declarations: Iterable[DependencyDeclaration],
    resolution: ArtifactResolutionAdapter,
    orchestrator: EnhancementOrchestrator,
) -> PipelineResult:
    """Full `enhance` goal: plan, then hand the request to the engine."""

    result = plan_enhancement(options=options, declarations=declarations, resolution=resolution)
    orchestrator.run(result.request)
    result.processed = True
    return result
