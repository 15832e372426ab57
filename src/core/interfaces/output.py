"""Contrato de salida hacia el operador.

El Core reporta el progreso a través de este sink; la impresión queda en la CLI.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SyncOutput(Protocol):
    def info(self, message: str) -> None:
        ...

    def comment(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
