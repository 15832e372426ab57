"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Mantiene la lógica de comandos separada de los detalles visuales.
- La misma salida de consola la reutilizan los comandos sync y doctor.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

INFO_STYLE = "green"
COMMENT_STYLE = "yellow"
ERROR_STYLE = "white on red"


def build_console() -> Console:
    """Consola usada por todos los comandos.

    Con soft wrap cada mensaje queda en una línea aunque la salida vaya a un pipe.
    """

    return Console(soft_wrap=True, highlight=False)


class ConsoleOutput:
    """`SyncOutput` que imprime líneas con estilo por severidad en una consola Rich."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def _write(self, message: str, style: str) -> None:
        self._console.print(f"[{style}]{escape(message)}[/]")

    def info(self, message: str) -> None:
        self._write(message, INFO_STYLE)

    def comment(self, message: str) -> None:
        self._write(message, COMMENT_STYLE)

    def error(self, message: str) -> None:
        self._write(message, ERROR_STYLE)


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
