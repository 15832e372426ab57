"""Taxonomía de fallos de la sincronización de réplicas.

Cada excepción lleva un `FailureKind`, así el borde del comando decide según
el tipo de fallo y no según la clase concreta.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Tipos de fallo que distingue el comando de sincronización."""

    CORRUPTED_CONFIG = "corrupted_config"
    LIMIT_EXCEEDED = "limit_exceeded"
    BAD_REQUEST = "bad_request"
    UNKNOWN_STORE = "unknown_store"
    OTHER = "other"


class ReplicaSyncError(Exception):
    """Clase base de los errores durante la sincronización de réplicas."""

    kind: FailureKind = FailureKind.OTHER


class NoSuchStoreError(ReplicaSyncError, LookupError):
    kind = FailureKind.UNKNOWN_STORE

    def __init__(self, store_id: int) -> None:
        super().__init__(f'The store with ID "{store_id}" that was requested wasn\'t found.')
        self.store_id = store_id


class SearchServiceError(ReplicaSyncError):
    """Error genérico reportado por el servicio de búsqueda."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(SearchServiceError):
    """El servicio de búsqueda rechazó una petición (HTTP 400)."""

    kind = FailureKind.BAD_REQUEST


class CorruptedReplicaConfigurationError(SearchServiceError):
    """El estado remoto de las réplicas no cuadra con la configuración de la tienda.

    Forma parte del contrato de `ReplicaManager` para implementaciones que leen
    el layout remoto de réplicas antes de escribirlo. `AlgoliaReplicaManager`
    solo empuja settings y nunca la lanza; el servicio la traduce en la guía
    de rebuild.
    """

    kind = FailureKind.CORRUPTED_CONFIG


class ExceededRetriesError(SearchServiceError):
    """Fallaron todos los reintentos contra el servicio de búsqueda."""


class ReplicaLimitExceededError(ReplicaSyncError):
    """Se pidieron más réplicas virtuales de las que permite el servicio."""

    kind = FailureKind.LIMIT_EXCEEDED


class AreaCodeError(ReplicaSyncError):
    """El área de la aplicación no está fijada, o ya se fijó a otro valor."""


def classify_failure(exc: BaseException) -> FailureKind:
    """Mapea cualquier excepción al tipo de fallo al que reacciona el comando."""

    if isinstance(exc, ReplicaSyncError):
        return exc.kind
    return FailureKind.OTHER
