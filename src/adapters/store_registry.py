"""Registro de tiendas basado en fichero.

Soporta un documento JSON como:
    {"stores": [{"id": 1, "code": "default", "name": "Default Store View",
                 "sorting": [{"attribute": "price", "direction": "asc"}]}]}

El fichero se lee una sola vez, en el primer acceso.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.domain.errors import NoSuchStoreError, ReplicaSyncError
from core.domain.models import Store, StoresFile

logger = logging.getLogger(__name__)


def load_stores(path: Path) -> StoresFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return StoresFile.model_validate(data)


class FileStoreManager:
    """`StoreManager` que lee las definiciones de tiendas desde un JSON."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._stores: dict[int, Store] | None = None

    def _load(self) -> dict[int, Store]:
        if self._stores is None:
            try:
                stores_file = load_stores(self._path)
            except FileNotFoundError as exc:
                raise ReplicaSyncError(f"Store registry not found: {self._path}") from exc
            except (json.JSONDecodeError, ValidationError) as exc:
                raise ReplicaSyncError(f"Invalid store registry {self._path}: {exc}") from exc
            self._stores = {store.id: store for store in stores_file.stores}
            logger.debug("Loaded %d stores from %s", len(self._stores), self._path)
        return self._stores

    def get_store(self, store_id: int) -> Store:
        store = self._load().get(store_id)
        if store is None:
            raise NoSuchStoreError(store_id)
        return store

    def get_stores(self) -> dict[int, Store]:
        """Tiendas activas, en el orden del fichero."""

        return {store_id: store for store_id, store in self._load().items() if store.is_active}
