"""Estado del área de la aplicación (contexto de ejecución)."""

from __future__ import annotations

from enum import Enum

from core.domain.errors import AreaCodeError


class Area(str, Enum):
    """Áreas de ejecución que pueden requerir los servicios."""

    GLOBAL = "global"
    FRONTEND = "frontend"
    ADMINHTML = "adminhtml"
    CRONTAB = "crontab"


class AppState:
    """Guarda el código de área del proceso en curso.

    El área se fija una sola vez; volver a fijar el mismo valor se acepta.
    """

    def __init__(self) -> None:
        self._area_code: Area | None = None

    def set_area_code(self, area: Area) -> None:
        if self._area_code is not None and self._area_code is not area:
            raise AreaCodeError(f"Area code is already set to '{self._area_code.value}'")
        self._area_code = area

    @property
    def area_code(self) -> Area:
        if self._area_code is None:
            raise AreaCodeError("Area code is not set")
        return self._area_code
