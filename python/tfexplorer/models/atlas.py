"""
tfexplorer/models/atlas.py

Response shapes of the legacy Atlas state listing
(GET /api/v1/terraform/state?page=N).
"""

from __future__ import annotations

from typing import Any, List
from pydantic import BaseModel, Field, field_validator


class AtlasEnvironment(BaseModel):
    username: str
    name: str


class AvailableState(BaseModel):
    environment: AtlasEnvironment


class AtlasStateListing(BaseModel):
    """One page of the legacy state listing. An empty page ends the listing."""

    states: List[AvailableState] = Field(default_factory=list)

    @field_validator("states", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
