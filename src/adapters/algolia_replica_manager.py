"""Adaptador de réplicas para Algolia.

Envía el layout de réplicas derivado de los atributos de ordenación:
- el índice primario lista sus réplicas (`virtual(...)` para las virtuales),
- cada réplica recibe el ranking de su opción de ordenación.

Los settings de las réplicas solo se escriben cuando la tarea de settings del
primario está publicada. Escribir settings es idempotente, así que se envía el
layout completo en cada sync, sin comparar con el estado remoto.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable

import httpx

from adapters.http_client import build_algolia_client
from adapters.product_helper import replica_index_name
from core.config import AppSettings
from core.domain.errors import (
    BadRequestError,
    ExceededRetriesError,
    ReplicaLimitExceededError,
    SearchServiceError,
)
from core.domain.models import IndexSettings, SortingAttribute

logger = logging.getLogger(__name__)

DEFAULT_RANKING = ["typo", "geo", "words", "filters", "proximity", "attribute", "exact", "custom"]


def _sort_criterion(sorting: SortingAttribute) -> str:
    return f"{sorting.direction}({sorting.attribute})"


def build_replica_settings(sorting: SortingAttribute) -> dict[str, Any]:
    """Payload de settings para la réplica que sirve `sorting`."""

    if sorting.virtual_replica:
        return {"customRanking": [_sort_criterion(sorting)]}
    return {"ranking": [_sort_criterion(sorting), *DEFAULT_RANKING]}


def build_replica_list(settings: IndexSettings) -> list[str]:
    replicas: list[str] = []
    for sorting in settings.sorting:
        name = replica_index_name(settings.index_name, sorting)
        replicas.append(f"virtual({name})" if sorting.virtual_replica else name)
    return replicas


def _safe_retry_after_seconds(response: httpx.Response | None) -> float | None:
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return f"HTTP {response.status_code}"


class AlgoliaReplicaManager:
    """`ReplicaManager` sobre la API REST de Algolia."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_algolia_client(self._settings)
        self._sleep = sleep

    def __enter__(self) -> "AlgoliaReplicaManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def sync_replicas_to_algolia(self, store_id: int, settings: IndexSettings) -> None:
        virtual_count = sum(1 for sorting in settings.sorting if sorting.virtual_replica)
        limit = self._settings.max_virtual_replicas
        if virtual_count > limit:
            raise ReplicaLimitExceededError(
                f"Store {store_id} requests {virtual_count} virtual replicas on "
                f"{settings.index_name}; the limit is {limit}."
            )

        replicas = build_replica_list(settings)
        logger.debug("Store %s: setting %d replicas on %s", store_id, len(replicas), settings.index_name)
        task = self.set_settings(settings.index_name, {"replicas": replicas})

        # Las réplicas se crean de forma asíncrona: escribir en una antes de que
        # la tarea esté publicada crea un índice independiente.
        if "taskID" in task:
            self.wait_task(settings.index_name, task["taskID"])

        for sorting in settings.sorting:
            self.set_settings(
                replica_index_name(settings.index_name, sorting),
                build_replica_settings(sorting),
            )

    def set_settings(self, index_name: str, payload: dict[str, Any]) -> dict[str, Any]:
        """PUT de los settings de un índice, reintentando fallos transitorios."""

        return self._request("PUT", f"/1/indexes/{index_name}/settings", json=payload)

    def wait_task(self, index_name: str, task_id: int) -> None:
        """Consulta una tarea de indexado hasta que Algolia la da por publicada."""

        path = f"/1/indexes/{index_name}/task/{task_id}"
        attempts = self._settings.task_poll_attempts
        for attempt in range(attempts):
            status = self._request("GET", path).get("status")
            if status == "published":
                logger.debug("Task %s on %s published", task_id, index_name)
                return
            if attempt < attempts - 1:
                self._sleep(self._settings.task_poll_interval_seconds)

        raise ExceededRetriesError(
            f"Task {task_id} on {index_name} was not published after {attempts} checks."
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        last_error: Exception | None = None
        for attempt in range(self._settings.max_retries + 1):
            response: httpx.Response | None = None
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.TransportError as exc:
                last_error = exc
            else:
                if response.status_code < 400:
                    return response.json()
                message = _error_message(response)
                if response.status_code == 400:
                    raise BadRequestError(message, status_code=400)
                if response.status_code < 500 and response.status_code != 429:
                    raise SearchServiceError(message, status_code=response.status_code)
                last_error = SearchServiceError(message, status_code=response.status_code)

            if attempt >= self._settings.max_retries:
                break
            retry_after = _safe_retry_after_seconds(response)
            delay = retry_after if retry_after is not None else 1.25 * (2**attempt)
            logger.warning("Retrying %s %s after %s (attempt %d)", method, path, last_error, attempt + 1)
            self._sleep(delay + random.uniform(0.0, 0.35))

        raise ExceededRetriesError(
            f"Gave up on {path} after {self._settings.max_retries + 1} attempts: {last_error}"
        ) from last_error
