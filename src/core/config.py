"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (repositorio/HTTP/motor Java) lean config de forma
  consistente.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

MAVEN_CENTRAL_URL = "https://repo.maven.apache.org/maven2"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "enhancer-cli"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "enhancer-cli"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "enhancer-cli"
    return Path.home() / ".config" / "enhancer-cli"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_local_repository() -> Path:
    return Path.home() / ".m2" / "repository"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# enhancer-cli user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters; los flags de la CLI
      solo sobrescriben lo que el usuario pasa explícitamente.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENHANCER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Repositorios
    local_repository: Path = Field(
        default_factory=default_local_repository,
        description="Repositorio local con layout Maven (~/.m2/repository).",
    )
    remote_repositories: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [MAVEN_CENTRAL_URL],
        description="URLs de repositorios remotos, consultados en orden.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por descarga de artefacto (segundos).",
    )
    user_agent: str = Field(
        default="enhancer-cli/0.1",
        min_length=1,
        description="User-Agent para descargas de repositorios remotos.",
    )

    # Classpath
    classpath_separator: str = Field(
        default=";",
        min_length=1,
        max_length=1,
        description="Separador de segmentos del classpath entregado al motor.",
    )

    # Motor de transformación (externo)
    java_executable: str = Field(
        default="java",
        min_length=1,
        description="Ejecutable Java usado para lanzar el motor.",
    )
    enhancer_classpath: str | None = Field(
        default=None,
        description="Classpath con el que se carga el motor (contexto de carga de clases).",
    )
    enhancer_main_class: str = Field(
        default="com.avaje.ebean.enhance.ant.MainTransform",
        min_length=1,
        description="Clase de entrada del motor de transformación offline.",
    )
    forward_engine_errors: bool = Field(
        default=True,
        description="Reenviar los eventos de error del motor al log (nivel error).",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging de la CLI.",
    )

    @field_validator("remote_repositories", mode="before")
    @classmethod
    def _split_repositories(cls, value: object) -> object:
        # Permite ENHANCER_REMOTE_REPOSITORIES=url1,url2 además de JSON.
        if not isinstance(value, str):
            return value
        if value.lstrip().startswith("["):
            return json.loads(value)
        return [part.strip() for part in value.split(",") if part.strip()]

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"
