"""Domain entity for realtime change notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass
class ChangeEvent:
    """An insert/update/delete on a table.

    ``new`` holds the row after the change, ``old`` the row before it
    (only the key fields are guaranteed for deletes).
    """

    table: str
    change_type: ChangeType | str
    new: dict[str, Any] = field(default_factory=dict)
    old: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def record(self) -> dict[str, Any]:
        """The row the event is about — ``new`` when present, otherwise ``old``."""
        return self.new or self.old

    def to_payload(self) -> dict[str, Any]:
        change_type = self.change_type.value if isinstance(self.change_type, ChangeType) else self.change_type
        return {
            "table": self.table,
            "eventType": change_type,
            "new": self.new,
            "old": self.old,
            "occurred_at": self.occurred_at.isoformat(),
        }
