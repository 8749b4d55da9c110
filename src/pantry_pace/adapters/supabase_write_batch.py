"""Atomic write batches through a Postgres function."""

import logging
from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from pantry_pace.domain.writes import PersistenceFailure, WriteAction
from pantry_pace.services.batch import WriteBatchCommitter

logger = logging.getLogger(__name__)

BATCH_FUNCTION = "apply_write_batch"


@dataclass
class SupabaseWriteBatch(WriteBatchCommitter):
    """Commits write actions in one transaction via `apply_write_batch`.

    The database function runs every action inside the calling
    transaction, so a failure rolls back the whole batch.
    """

    client: Client

    def commit(self, user_id: UUID, actions: list[WriteAction]) -> None:
        """Apply the batch or raise PersistenceFailure."""
        if not actions:
            return
        try:
            self.client.rpc(
                BATCH_FUNCTION,
                {
                    "p_user_id": str(user_id),
                    "p_actions": [action.to_payload() for action in actions],
                },
            ).execute()
        except APIError as exc:
            logger.warning("Write batch of %d actions rejected", len(actions))
            raise PersistenceFailure(str(exc.message or exc)) from exc
