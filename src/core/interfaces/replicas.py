"""Contratos de los colaboradores de la sincronización de réplicas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el registro de tiendas, el helper de settings y el cliente de
  Algolia sean intercambiables y testeables sin acoplar el Core a ellos.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.area import Area
from core.domain.models import IndexSettings, Store


@runtime_checkable
class StoreManager(Protocol):
    """Registro de tiendas configuradas."""

    def get_store(self, store_id: int) -> Store:
        """Devuelve la tienda, o lanza `NoSuchStoreError`."""

        ...

    def get_stores(self) -> dict[int, Store]:
        """Todas las tiendas configuradas por id, en el orden del registro."""

        ...


@runtime_checkable
class ProductHelper(Protocol):
    def get_index_settings(self, store_id: int) -> IndexSettings:
        ...


@runtime_checkable
class ReplicaManager(Protocol):
    """Envía al servicio de búsqueda el layout de réplicas derivado de `settings`.

    Reglas de diseño:
    - Lanza `BadRequestError` cuando el servicio rechaza la petición.
    - Lanza `ReplicaLimitExceededError` si se piden demasiadas réplicas
      virtuales.
    - Puede lanzar `CorruptedReplicaConfigurationError` cuando el layout remoto
      no se puede conciliar con la configuración de la tienda.
    """

    def sync_replicas_to_algolia(self, store_id: int, settings: IndexSettings) -> None:
        ...


@runtime_checkable
class AreaState(Protocol):
    def set_area_code(self, area: Area) -> None:
        ...
