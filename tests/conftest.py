"""Shared pytest fixtures for all tests."""

import json
import os

import pytest

from core.config import AppSettings


STORES = {
    "stores": [
        {
            "id": 1,
            "code": "default",
            "name": "Default",
            "sorting": [
                {"attribute": "price", "direction": "asc"},
                {"attribute": "created_at", "direction": "desc", "virtual_replica": True},
            ],
        },
        {
            "id": 2,
            "code": "secondary",
            "name": "Secondary",
            "sorting": [{"attribute": "price", "direction": "desc"}],
        },
        {"id": 3, "code": "archived", "name": "Archived", "is_active": False},
    ]
}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """
    Keep tests away from real .env files and REPLICA_SYNC_* variables.

    Args:
        tmp_path: pytest tmp_path fixture
        monkeypatch: pytest monkeypatch fixture
    """
    for key in list(os.environ):
        if key.startswith("REPLICA_SYNC_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def stores_file(tmp_path):
    """
    Write a store registry with two active stores and one inactive store.

    Returns:
        Path to the JSON file
    """
    path = tmp_path / "stores.json"
    path.write_text(json.dumps(STORES), encoding="utf-8")
    return path


@pytest.fixture
def settings(stores_file):
    """Settings with credentials and the temporary store registry."""
    return AppSettings(
        _env_file=None,
        algolia_application_id="TESTAPP",
        algolia_api_key="secret",
        stores_path=stores_file,
        max_retries=2,
    )
