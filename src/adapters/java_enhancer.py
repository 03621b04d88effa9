"""Adaptador del motor de transformación externo (JVM).

Responsabilidad:
- Representar el motor (`classpath`, `transform_args`) y el driver offline
  (`motor`, contexto de carga, origen, destino) con la forma que espera el Core.
- Lanzar el motor como subproceso y traducir su salida a eventos del listener:
  stdout -> `on_info`, stderr -> `on_error`, línea a línea según llegan.

Qué NO hace:
- No interpreta patrones de paquetes ni toca bytecode: eso es del motor.

Contrato de línea de comandos:
    <java> -cp <contexto> <main_class>
        --classpath <classpath> --source <dir> --destination <dir>
        [--transform-args <args>] [--packages <patrones>]
"""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import TransformError
from core.interfaces.transform import TransformationListener

logger = logging.getLogger(__name__)

_INFO = "info"
_ERROR = "error"


@dataclass(frozen=True)
class JavaTransformEngine:
    """Motor configurado; no arranca nada hasta que el driver procesa."""

    classpath: str
    transform_args: str | None = None
    java_executable: str = "java"
    main_class: str = "com.avaje.ebean.enhance.ant.MainTransform"


class _SilentListener:
    def on_info(self, message: str) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass


class JavaOfflineFileTransform:
    """Driver offline que ejecuta el motor sobre un directorio de clases."""

    def __init__(
        self,
        engine: JavaTransformEngine,
        class_loading_context: str | None,
        source_dir: Path,
        destination_dir: Path,
    ) -> None:
        self._engine = engine
        self._class_loading_context = class_loading_context
        self._source_dir = source_dir
        self._destination_dir = destination_dir
        self._listener: TransformationListener = _SilentListener()

    def set_listener(self, listener: TransformationListener) -> None:
        self._listener = listener

    def build_command(self, packages: str | None) -> list[str]:
        engine = self._engine
        command = [engine.java_executable]
        if self._class_loading_context:
            command += ["-cp", self._class_loading_context]
        command += [
            engine.main_class,
            "--classpath",
            engine.classpath,
            "--source",
            str(self._source_dir),
            "--destination",
            str(self._destination_dir),
        ]
        if engine.transform_args:
            command += ["--transform-args", engine.transform_args]
        if packages:
            command += ["--packages", packages]
        return command

    def process(self, packages: str | None) -> None:
        command = self.build_command(packages)
        logger.debug("running %s", command)
        try:
            proc = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            raise TransformError(f"Could not start {command[0]}: {exc}") from exc

        events: queue.Queue = queue.Queue()
        readers = [
            threading.Thread(target=_pump, args=(proc.stdout, _INFO, events), daemon=True),
            threading.Thread(target=_pump, args=(proc.stderr, _ERROR, events), daemon=True),
        ]
        for reader in readers:
            reader.start()

        last_error: str | None = None
        try:
            open_streams = len(readers)
            while open_streams:
                event = events.get()
                if event is None:
                    open_streams -= 1
                    continue
                kind, line = event
                if kind == _ERROR:
                    last_error = line
                    self._listener.on_error(line)
                else:
                    self._listener.on_info(line)
        except BaseException:
            proc.kill()
            proc.wait()
            raise

        for reader in readers:
            reader.join()
        returncode = proc.wait()
        if returncode != 0:
            raise TransformError(last_error or f"exit status {returncode}", returncode=returncode)


def _pump(stream, kind: str, events: queue.Queue) -> None:
    """Reenvía cada línea no vacía de `stream` a la cola en orden de llegada."""

    try:
        for raw in stream:
            line = raw.rstrip("\r\n")
            if line.strip():
                events.put((kind, line))
    finally:
        stream.close()
        events.put(None)


def engine_factory_from_settings(settings: AppSettings):
    """Fábrica `(classpath, transform_args) -> JavaTransformEngine` ligada a settings."""

    def factory(classpath: str, transform_args: str | None) -> JavaTransformEngine:
        return JavaTransformEngine(
            classpath=classpath,
            transform_args=transform_args,
            java_executable=settings.java_executable,
            main_class=settings.enhancer_main_class,
        )

    return factory
