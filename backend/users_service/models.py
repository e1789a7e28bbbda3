"""
User record as stored in the `users` table.

The password hash stays on the record for verification but is never part of
the public representation returned to clients.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    password_hash: str
    birth_date: date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        """Build a User from a `users` row (DictCursor or plain dict)."""
        return cls(
            id=row["user_id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            birth_date=row["birth_date"],
        )

    def to_public_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
