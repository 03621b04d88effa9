"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirecciones para todas las descargas de
  repositorios remotos.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué síncrono:
    - El pipeline es secuencial: cada artefacto se resuelve antes del siguiente.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/java-archive,application/octet-stream;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
