"""Configuración de logging para la CLI.

Los logs de diagnóstico van por `RichHandler` a stderr; los mensajes para el
operador quedan solos en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configura el logger raíz una sola vez y lo devuelve."""

    resolved = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(resolved)

    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)

    # httpx registra cada request en INFO.
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
    return root
