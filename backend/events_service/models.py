"""Event record as stored in the `events` table."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Event:
    id: int
    owner_id: int
    event_name: str
    venue: str
    date_time: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Event":
        return cls(
            id=row["event_id"],
            owner_id=row["user_id"],
            event_name=row["event_name"],
            venue=row["venue"],
            date_time=row["date_time"],
        )

    def to_dict(self) -> Dict[str, Any]:
        # Wire names match the client application (camelCase, ISO-8601 time)
        return {
            "id": self.id,
            "userId": self.owner_id,
            "eventName": self.event_name,
            "venue": self.venue,
            "dateTime": self.date_time.isoformat(),
        }
