"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer

from adapters.http_client import build_algolia_client
from adapters.product_helper import primary_index_name
from adapters.store_registry import FileStoreManager
from cli.ui_components import build_checks_table, build_console
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ReplicaSyncError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = build_console()


def _check_algolia(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_algolia_client(settings) as client:
            response = client.get("/1/indexes", params={"page": 0})
    except ReplicaSyncError as exc:
        return False, str(exc)
    except Exception as exc:
        return False, f"{type(exc).__name__}: {exc}"
    if response.status_code >= 400:
        return False, f"HTTP {response.status_code}"
    return True, f"HTTP {response.status_code}"


def _check_stores(settings: AppSettings) -> tuple[bool, str]:
    try:
        stores = FileStoreManager(settings.stores_path).get_stores()
    except ReplicaSyncError as exc:
        return False, str(exc)
    if not stores:
        return False, f"No active stores in {settings.stores_path}"
    indexes = ", ".join(primary_index_name(settings.index_prefix, s.code) for s in stores.values())
    return True, f"{len(stores)} store(s): {indexes}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = build_checks_table("replica-sync Doctor")

    has_credentials = bool(settings.algolia_application_id and settings.algolia_api_key)
    if has_credentials:
        table.add_row("Algolia credentials", "OK", settings.algolia_application_id or "")
    else:
        table.add_row("Algolia credentials", "FAIL", "Run `doctor setup-credentials`")
    table.add_row("Index prefix", "OK", settings.index_prefix)

    ok_stores, detail_stores = _check_stores(settings)
    table.add_row("Store registry", "OK" if ok_stores else "FAIL", detail_stores)

    ok_http = False
    if has_credentials:
        ok_http, detail_http = _check_algolia(settings)
        table.add_row("Algolia connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (has_credentials and ok_stores and ok_http):
        raise typer.Exit(code=1)


@app.command(name="setup-credentials")
def setup_credentials() -> None:
    """Interactive Algolia setup (stores config in the user config .env)."""

    app_id = typer.prompt("Algolia application ID").strip()
    api_key = typer.prompt("Algolia admin API key", hide_input=True, confirmation_prompt=False).strip()
    stores_path = typer.prompt("Store registry path", default="stores.json", show_default=True).strip()

    if not app_id or not api_key:
        raise typer.BadParameter("application ID and API key are required")

    env_path = write_user_env_vars(
        {
            "REPLICA_SYNC_ALGOLIA_APPLICATION_ID": app_id,
            "REPLICA_SYNC_ALGOLIA_API_KEY": api_key,
            "REPLICA_SYNC_STORES_PATH": stores_path or None,
        }
    )

    _console.print(f"[green]Saved Algolia config to:[/green] {env_path}")
