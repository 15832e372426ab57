"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y autenticación de Algolia.
- Facilita testeo: el `transport` se puede sustituir por `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.domain.errors import SearchServiceError


def build_algolia_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` ligado al host de escritura de Algolia.

    Por qué un builder:
    - Todas las peticiones llevan las mismas credenciales, timeout y User-Agent.
    - Si faltan credenciales falla aquí, antes de tocar ninguna tienda.
    """

    settings = settings or AppSettings()
    if not settings.algolia_application_id or not settings.algolia_api_key:
        raise SearchServiceError(
            "Algolia credentials are not configured "
            "(REPLICA_SYNC_ALGOLIA_APPLICATION_ID / REPLICA_SYNC_ALGOLIA_API_KEY)."
        )

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "X-Algolia-Application-Id": settings.algolia_application_id,
        "X-Algolia-API-Key": settings.algolia_api_key,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=settings.algolia_host(),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )
