"""Data models for the short-link directory."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class ShortLinkEntry:
    """Represents a short-link entry in the database."""

    id: int
    original_url: str
    short_url: str
    autogenerated: bool
    active: bool
    create_date: datetime
    modified_date: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original_url": self.original_url,
            "short_url": self.short_url,
            "autogenerated": self.autogenerated,
            "active": self.active,
            "create_date": self.create_date.isoformat() if self.create_date else None,
            "modified_date": self.modified_date.isoformat() if self.modified_date else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShortLinkEntry":
        """Create from a dictionary or database row."""
        create_date = data["create_date"]
        modified_date = data["modified_date"]
        return cls(
            id=int(data["id"]),
            original_url=data["original_url"],
            short_url=data["short_url"],
            autogenerated=bool(data["autogenerated"]),
            active=bool(data["active"]),
            create_date=create_date if isinstance(create_date, datetime) else datetime.fromisoformat(create_date),
            modified_date=modified_date if isinstance(modified_date, datetime) else datetime.fromisoformat(modified_date),
        )
