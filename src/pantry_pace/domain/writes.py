"""Write actions committed as a single atomic batch."""

from dataclasses import dataclass, field
from enum import Enum


class WriteOp(str, Enum):
    """Kind of write inside a batch."""

    CREATE = "create"
    UPSERT = "upsert"
    DELETE = "delete"


@dataclass(frozen=True)
class WriteAction:
    """Single write against a table."""

    op: WriteOp
    table: str
    id: str | None = None
    fields: dict[str, object] = field(default_factory=dict)

    @classmethod
    def create(cls, table: str, fields: dict[str, object]) -> "WriteAction":
        return cls(op=WriteOp.CREATE, table=table, fields=fields)

    @classmethod
    def upsert(cls, table: str, id: str, fields: dict[str, object]) -> "WriteAction":
        return cls(op=WriteOp.UPSERT, table=table, id=id, fields=fields)

    @classmethod
    def delete(cls, table: str, id: str) -> "WriteAction":
        return cls(op=WriteOp.DELETE, table=table, id=id)

    def to_payload(self) -> dict[str, object]:
        return {
            "op": self.op.value,
            "table": self.table,
            "id": self.id,
            "fields": self.fields,
        }


class PersistenceFailure(RuntimeError):
    """Raised when an atomic batch is rejected by the backend."""
