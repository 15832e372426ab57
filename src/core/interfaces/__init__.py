"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores concretos.
- Invierte dependencias: el Core depende de abstracciones.
"""

from core.interfaces.output import SyncOutput
from core.interfaces.replicas import AreaState, ProductHelper, ReplicaManager, StoreManager

__all__ = [
    "AreaState",
    "ProductHelper",
    "ReplicaManager",
    "StoreManager",
    "SyncOutput",
]
