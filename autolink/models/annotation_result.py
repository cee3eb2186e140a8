"""
AnnotationResult — outcome of one annotate() call.
"""
from dataclasses import dataclass, field
from typing import Tuple

from autolink.models.span import Span


@dataclass(frozen=True)
class AnnotationResult:
    """Final text plus the number of links inserted."""

    text: str
    inserted_count: int
    spans: Tuple[Span, ...] = field(default=())     # masked-text offsets, ascending
    protected_count: int = 0

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "inserted_count": self.inserted_count,
            "protected_count": self.protected_count,
            "spans": [s.to_dict() for s in self.spans],
        }
