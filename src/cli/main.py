"""replica-sync CLI (Typer).

Commands:
- `algolia:replicas:sync [STORE...]`: push sorting configuration to Algolia
  replica indices.
- `doctor`: configuration and connectivity checks.
"""

from __future__ import annotations

from typing import List, Optional

import typer

from adapters.algolia_replica_manager import AlgoliaReplicaManager
from adapters.product_helper import StoreProductHelper
from adapters.store_registry import FileStoreManager
from cli.doctor import app as doctor_app
from cli.logging_setup import setup_logging
from cli.ui_components import ConsoleOutput, build_console
from core.area import AppState
from core.config import AppSettings
from core.interfaces import ReplicaManager, StoreManager, SyncOutput
from core.services.replica_sync import EXIT_SUCCESS, ReplicaSyncService

app = typer.Typer(
    no_args_is_help=True,
    help="Sync storefront sorting configuration to Algolia replica indices.",
)
app.add_typer(doctor_app, name="doctor")

_console = build_console()


def build_sync_service(
    settings: AppSettings,
    *,
    output: SyncOutput,
    replica_manager: ReplicaManager,
    store_manager: StoreManager | None = None,
) -> ReplicaSyncService:
    """Wire the sync service with the file-backed store registry."""

    store_manager = store_manager or FileStoreManager(settings.stores_path)
    return ReplicaSyncService(
        state=AppState(),
        product_helper=StoreProductHelper(store_manager, settings),
        replica_manager=replica_manager,
        store_manager=store_manager,
        output=output,
    )


@app.command(name="algolia:replicas:sync")
def sync_replicas(
    store: Optional[List[int]] = typer.Argument(
        None,
        help="ID(s) for store to be synced with Algolia (optional), if not specified all stores will be synced",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Sync configured sorting attributes to Algolia replica indices."""

    settings = AppSettings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    output = ConsoleOutput(_console)
    with AlgoliaReplicaManager(settings) as replica_manager:
        service = build_sync_service(settings, output=output, replica_manager=replica_manager)
        code = service.execute(list(store or []))

    if code != EXIT_SUCCESS:
        raise typer.Exit(code=code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
