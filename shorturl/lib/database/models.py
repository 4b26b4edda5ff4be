"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UrlMapping:
    """Represents a stored id -> original URL mapping."""

    id: int
    original_url: str

    def to_dict(self) -> dict:
        """Convert to the API response shape."""
        return {
            "original_url": self.original_url,
            "short_url": self.id,
        }

    @classmethod
    def from_record(cls, record) -> "UrlMapping":
        """Create from a database row (asyncpg Record or dict)."""
        return cls(
            id=int(record["id"]),
            original_url=record["original_url"],
        )


@dataclass
class SequenceCounter:
    """A named durable counter row."""

    name: str
    value: int = 0
