"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/Algolia, registro de tiendas) lean config de
  forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "replica-sync"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "replica-sync"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "replica-sync"
    return Path.home() / ".config" / "replica-sync"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


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


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# replica-sync user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado y validación en el borde (env vars) sin contaminar el Core.
    - Un único contrato de configuración para la CLI y los adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPLICA_SYNC_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    def __init__(self, **values: Any) -> None:
        # Orden: proyecto primero (dev), luego config global de usuario. El .env
        # de usuario se resuelve en cada instancia, con el entorno actual.
        values.setdefault("_env_file", (".env", str(get_user_env_file())))
        super().__init__(**values)

    algolia_application_id: str | None = Field(
        default=None,
        description="ID de aplicación de Algolia.",
    )
    algolia_api_key: str | None = Field(
        default=None,
        description="API key de administración de Algolia (requiere el ACL editSettings).",
    )
    algolia_base_url: str | None = Field(
        default=None,
        description="Host alternativo de la API de Algolia. Por defecto https://<app id>.algolia.net.",
    )
    index_prefix: str = Field(
        default="magento2_",
        description="Prefijo que se antepone a cada nombre de índice.",
    )
    stores_path: Path = Field(
        default=Path("stores.json"),
        description="Fichero JSON con las tiendas configuradas y sus atributos de ordenación.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Reintentos máximos ante fallos transitorios (5xx, red).",
    )
    max_virtual_replicas: int = Field(
        default=20,
        ge=1,
        le=50,
        description="Réplicas virtuales permitidas por índice primario.",
    )
    task_poll_attempts: int = Field(
        default=50,
        ge=1,
        description="Consultas de estado antes de abandonar una tarea de settings pendiente.",
    )
    task_poll_interval_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Pausa entre dos consultas de estado de la tarea (segundos).",
    )
    user_agent: str = Field(
        default="replica-sync/0.1",
        min_length=1,
        description="User-Agent enviado al servicio de búsqueda.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la salida de diagnóstico.",
    )

    def algolia_host(self) -> str:
        """Base URL para las operaciones de escritura en Algolia."""

        if self.algolia_base_url:
            return self.algolia_base_url.rstrip("/")
        return f"https://{self.algolia_application_id}.algolia.net"
