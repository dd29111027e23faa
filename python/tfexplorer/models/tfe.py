"""
tfexplorer/models/tfe.py

Pydantic models for the JSON:API documents returned by the Terraform
Enterprise v2 API: organizations, workspaces and state versions.
Only the fields this tool reads are modelled; everything else is ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class Pagination(BaseModel):
    current_page: int = Field(default=1, alias="current-page")
    next_page: Optional[int] = Field(default=None, alias="next-page")


class ListMeta(BaseModel):
    pagination: Optional[Pagination] = None


class ResourceObject(BaseModel):
    """A single JSON:API resource object."""

    id: str
    type: str = ""
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ListDocument(BaseModel):
    """A JSON:API collection document (one page of it)."""

    data: List[ResourceObject] = Field(default_factory=list)
    meta: Optional[ListMeta] = None

    def next_page(self) -> Optional[int]:
        if self.meta is None or self.meta.pagination is None:
            return None
        return self.meta.pagination.next_page


class SingleDocument(BaseModel):
    data: ResourceObject


class Organization(BaseModel):
    """An organization; its id is also its name."""

    id: str


class WorkspaceAttributes(BaseModel):
    name: str


class Workspace(BaseModel):
    id: str
    attributes: WorkspaceAttributes


class StateVersionAttributes(BaseModel):
    serial: Optional[int] = None
    created_at: Optional[str] = Field(default=None, alias="created-at")
    hosted_state_download_url: Optional[str] = Field(
        default=None, alias="hosted-state-download-url"
    )


class StateVersion(BaseModel):
    id: str
    attributes: StateVersionAttributes = Field(default_factory=StateVersionAttributes)
