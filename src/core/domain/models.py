"""Modelos de dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y campos autodocumentados (Field) sin acoplar el Core a
  librerías de I/O.
- El fichero de tiendas y los settings de índice comparten un único esquema.

Nota:
- Estos modelos describen *qué* es una tienda y sus settings de índice, no
  *cómo* se obtienen o se envían.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

SortDirection = Literal["asc", "desc"]


class SortingAttribute(BaseModel):
    """Opción de ordenación de la tienda, respaldada por un índice réplica."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    attribute: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Código del atributo de producto usado para ordenar (ej. 'price').",
    )
    direction: SortDirection = Field(
        default="asc",
        description="Dirección de ordenación.",
    )
    label: str | None = Field(
        default=None,
        description="Etiqueta visible para los compradores.",
    )
    virtual_replica: bool = Field(
        default=False,
        description="Usar réplica virtual (datos compartidos, orden por relevancia) en lugar de estándar.",
    )


class Store(BaseModel):
    """Una tienda configurada."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., ge=0, description="Identificador de la tienda.")
    code: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=r"^[a-z0-9_]+$",
        description="Código de tienda, usado para construir nombres de índice.",
    )
    name: str = Field(..., min_length=1, description="Nombre visible.")
    is_active: bool = Field(default=True)
    sorting: list[SortingAttribute] = Field(
        default_factory=list,
        description="Atributos de ordenación configurados para la tienda.",
    )


class StoresFile(BaseModel):
    stores: list[Store] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> "StoresFile":
        seen: set[int] = set()
        for store in self.stores:
            if store.id in seen:
                raise ValueError(f"duplicate store id {store.id}")
            seen.add(store.id)
        return self


class IndexSettings(BaseModel):
    """Settings por tienda que determinan cómo se estructuran las réplicas."""

    index_name: str = Field(..., min_length=1, description="Índice primario de productos.")
    sorting: list[SortingAttribute] = Field(default_factory=list)
