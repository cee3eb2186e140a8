"""
ProtectedRegion — a piece of existing markup shielded from linking.
"""
from dataclasses import dataclass

from autolink.config.constants import PLACEHOLDER_TEMPLATE


@dataclass(frozen=True)
class ProtectedRegion:
    """Original text captured by one protection sweep."""

    index: int
    kind: str       # "placeholder_literal" | "link" | "template" | "paired_tag" | ...
    text: str       # may contain placeholders of lower-indexed regions

    @property
    def placeholder(self) -> str:
        return PLACEHOLDER_TEMPLATE.format(index=self.index)
