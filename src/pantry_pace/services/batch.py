"""Atomic write batches."""

from typing import Protocol
from uuid import UUID

from pantry_pace.domain.writes import WriteAction


class WriteBatchCommitter(Protocol):
    """Applies a list of writes atomically or not at all."""

    def commit(self, user_id: UUID, actions: list[WriteAction]) -> None:
        """Apply every action in one transaction.

        Raises PersistenceFailure when the backend rejects the batch.
        """
