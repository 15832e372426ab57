"""Replica sync orchestration.

This module holds the whole flow of the `algolia:replicas:sync` command:
building the summary line, switching to the admin area, walking the
requested stores one by one and turning known failures into operator
guidance. Printing goes through a `SyncOutput` sink and every collaborator is
injected, so the flow can be driven from the CLI, a batch job or tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.area import Area
from core.domain.errors import BadRequestError, FailureKind, ReplicaSyncError, classify_failure
from core.interfaces import AreaState, ProductHelper, ReplicaManager, StoreManager, SyncOutput

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

REBUILD_COMMAND = "algolia:replicas:rebuild"

CORRUPTED_CONFIG_MESSAGES = (
    "You appear to have a corrupted replica configuration in Algolia for your Magento instance.",
    f'Run the "{REBUILD_COMMAND}" command to correct this.',
)
LIMIT_EXCEEDED_HINT = (
    "Reduce the number of sorting attributes that have enabled virtual replicas and try again."
)


@dataclass
class StoreNameCache:
    """Store id -> display name, filled lazily for one invocation."""

    store_manager: StoreManager
    names: dict[int, str] = field(default_factory=dict)

    def resolve(self, store_id: int) -> str:
        if store_id not in self.names:
            self.names[store_id] = self.store_manager.get_store(store_id).name
        return self.names[store_id]


def summary_message(store_ids: Sequence[int], names: StoreNameCache) -> str:
    """First line of the command output."""

    count = str(len(store_ids)) if store_ids else "all"
    plural = "s" if len(store_ids) != 1 else ""
    message = f"Syncing replicas for {count} store{plural}"
    if store_ids:
        message += ": " + ", ".join(names.resolve(store_id) for store_id in store_ids)
    return message


class ReplicaSyncService:
    """Syncs sorting configuration of stores to Algolia replica indices."""

    def __init__(
        self,
        state: AreaState,
        product_helper: ProductHelper,
        replica_manager: ReplicaManager,
        store_manager: StoreManager,
        output: SyncOutput,
    ) -> None:
        self._state = state
        self._product_helper = product_helper
        self._replica_manager = replica_manager
        self._store_manager = store_manager
        self._output = output

    def execute(self, store_ids: Sequence[int] | None = None) -> int:
        """Run the sync and return the exit status.

        Only the corrupted-configuration (including bad request) and
        replica-limit failures are turned into a status; anything else
        propagates to the caller.
        """

        store_ids = list(store_ids or [])
        names = StoreNameCache(self._store_manager)

        self._output.info(summary_message(store_ids, names))

        self._state.set_area_code(Area.ADMINHTML)
        try:
            self.sync_scope(store_ids, names)
        except ReplicaSyncError as exc:
            kind = classify_failure(exc)
            if kind in (FailureKind.BAD_REQUEST, FailureKind.CORRUPTED_CONFIG):
                for line in CORRUPTED_CONFIG_MESSAGES:
                    self._output.comment(line)
                return EXIT_FAILURE
            if kind is FailureKind.LIMIT_EXCEEDED:
                self._output.error(str(exc))
                self._output.comment(LIMIT_EXCEEDED_HINT)
                return EXIT_FAILURE
            raise

        return EXIT_SUCCESS

    def sync_scope(self, store_ids: Sequence[int], names: StoreNameCache) -> None:
        """Sync the given stores, or every configured store when none are given."""

        if not store_ids:
            store_ids = list(self._store_manager.get_stores().keys())
        # The first unrecovered failure stops the batch.
        for store_id in store_ids:
            self.sync_store(store_id, names)

    def sync_store(self, store_id: int, names: StoreNameCache) -> None:
        self._output.info(f"Syncing {names.resolve(store_id)}...")
        try:
            self._replica_manager.sync_replicas_to_algolia(
                store_id, self._product_helper.get_index_settings(store_id)
            )
        except BadRequestError as exc:
            self._output.error(
                f'Failed syncing replicas for store "{names.resolve(store_id)}": {exc}'
            )
            raise
