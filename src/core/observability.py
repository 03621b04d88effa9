"""Logging setup.

Por qué Rich:
- El log de la herramienta es el "build log": se lee en una terminal, y
  `RichHandler` da niveles con color y tracebacks legibles sin formatear a mano.
- El Core solo usa `logging.getLogger(__name__)`; quién y cómo se pinta se
  decide aquí, una vez, desde la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "enhancer-rich"


def setup_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Configura el logger raíz con un único `RichHandler`."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
