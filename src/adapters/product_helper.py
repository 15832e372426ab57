"""Settings de índice derivados de la configuración de tiendas."""

from __future__ import annotations

from core.config import AppSettings
from core.domain.models import IndexSettings, SortingAttribute
from core.interfaces import StoreManager


def primary_index_name(prefix: str, store_code: str) -> str:
    return f"{prefix}{store_code}_products"


def replica_index_name(index_name: str, sorting: SortingAttribute) -> str:
    """Nombre de la réplica que sirve una opción de ordenación."""

    return f"{index_name}_{sorting.attribute}_{sorting.direction}"


class StoreProductHelper:
    """`ProductHelper` respaldado por el registro de tiendas."""

    def __init__(self, store_manager: StoreManager, settings: AppSettings | None = None) -> None:
        self._store_manager = store_manager
        self._settings = settings or AppSettings()

    def get_index_settings(self, store_id: int) -> IndexSettings:
        store = self._store_manager.get_store(store_id)
        return IndexSettings(
            index_name=primary_index_name(self._settings.index_prefix, store.code),
            sorting=list(store.sorting),
        )
