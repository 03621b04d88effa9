"""Contracts of the external class-transformation engine.

The engine and its offline file driver are consumed, never implemented,
by the core. These protocols describe the narrow surface the orchestrator
relies on so that a subprocess-backed adapter and test fakes are
interchangeable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TransformationListener(Protocol):
    """Two-callback sink for driver events."""

    def on_info(self, message: str) -> None: ...

    def on_error(self, message: str) -> None: ...


@runtime_checkable
class TransformEngine(Protocol):
    """Engine configured with the search classpath and its own arguments."""

    classpath: str
    transform_args: str | None


@runtime_checkable
class OfflineFileTransform(Protocol):
    """Driver that walks a class directory and rewrites matching classes."""

    def set_listener(self, listener: TransformationListener) -> None: ...

    def process(self, packages: str | None) -> None:
        """Transform classes selected by comma-delimited package patterns.

        May raise on fatal engine errors; callers let it propagate.
        """

        ...


@runtime_checkable
class EngineFactory(Protocol):
    def __call__(self, classpath: str, transform_args: str | None) -> TransformEngine: ...


@runtime_checkable
class DriverFactory(Protocol):
    def __call__(
        self,
        engine: TransformEngine,
        class_loading_context: str | None,
        source_dir: Path,
        destination_dir: Path,
    ) -> OfflineFileTransform: ...
