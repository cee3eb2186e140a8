"""
Span model — a half-open match interval in the masked working text.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A candidate or accepted occurrence of a name at [start, end)."""

    start: int
    end: int
    name: str

    def overlaps(self, other: "Span") -> bool:
        """Check if two spans share at least one character."""
        return not (self.end <= other.start or other.end <= self.start)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
        }

    def __repr__(self) -> str:
        return f"Span('{self.name}', [{self.start},{self.end}])"
