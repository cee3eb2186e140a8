"""
Typed Pydantic models for the name inventory contract.

A provider returns one InventoryPage per request; the retrieval loop keeps
asking while ``next_cursor`` is set.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class InventoryPage(BaseModel):
    """One page of known names returned by a NameInventoryProvider."""

    names: List[str] = Field(default_factory=list, description="Page titles on this page.")
    next_cursor: Optional[str] = Field(None, description="Continuation cursor; None on the last page.")

    @field_validator("names")
    @classmethod
    def drop_blank_names(cls, v: List[str]) -> List[str]:
        return [name for name in v if name and name.strip()]

    @field_validator("next_cursor")
    @classmethod
    def empty_cursor_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None
