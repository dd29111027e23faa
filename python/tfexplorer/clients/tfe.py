"""
tfexplorer/clients/tfe.py

An asynchronous, read-only Terraform Enterprise (v2 API) client covering the
calls needed to discover workspaces and download their latest state:
  - list_organizations
  - list_workspaces
  - list_state_versions / latest_state_version
  - download_state

Collection endpoints are JSON:API documents; pages are followed until
meta.pagination.next-page is null. latest_state_version reads only page 1.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from tfexplorer.clients.base import AsyncAPIClient
from tfexplorer.errors import DecodeError, EmptyStateHistory
from tfexplorer.models.tfe import (
    ListDocument,
    Organization,
    SingleDocument,
    StateVersion,
    Workspace,
)
from tfexplorer.models.validator import validate_type

M = TypeVar("M", bound=BaseModel)

API_PREFIX = "/api/v2"
PAGE_SIZE = 100


class AsyncTFEClient(AsyncAPIClient):
    """Terraform Enterprise client authenticated with a bearer token."""

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/vnd.api+json",
        }

    async def _list(
        self,
        path: str,
        model: Type[M],
        params: Optional[Mapping[str, Any]] = None,
        max_pages: Optional[int] = None,
    ) -> List[M]:
        """Collect the items of a paged JSON:API collection as `model`.

        Pages are followed until next-page is null, or until `max_pages`
        pages have been read.
        """
        items: List[M] = []
        page: Optional[int] = 1
        pages_read = 0
        while page is not None and (max_pages is None or pages_read < max_pages):
            pages_read += 1
            query = {**(params or {}), "page[number]": page, "page[size]": PAGE_SIZE}
            raw = await self.get_json(self._url(f"{API_PREFIX}{path}"), params=query)
            document = validate_type(raw, ListDocument)
            items.extend(
                validate_type(obj.model_dump(), model) for obj in document.data
            )
            page = document.next_page()
        return items

    async def list_organizations(self) -> List[Organization]:
        """List the organizations visible to the token."""
        return await self._list("/organizations", Organization)

    async def list_workspaces(self, organization: str) -> List[Workspace]:
        """List the workspaces of one organization."""
        return await self._list(
            f"/organizations/{quote(organization)}/workspaces", Workspace
        )

    async def list_state_versions(
        self,
        organization: str,
        workspace: str,
        max_pages: Optional[int] = None,
    ) -> List[StateVersion]:
        """List the state versions of a workspace, in the order the API returns them."""
        return await self._list(
            "/state-versions",
            StateVersion,
            params={
                "filter[organization][name]": organization,
                "filter[workspace][name]": workspace,
            },
            max_pages=max_pages,
        )

    async def latest_state_version(
        self, organization: str, workspace: str
    ) -> StateVersion:
        """Return the first state version the API lists (newest first).

        Only the first page of the history is requested.

        Raises:
            EmptyStateHistory: If the workspace has no state versions.
            NetworkError: If the request fails.
            DecodeError: If the page has an unexpected shape.
        """
        versions = await self.list_state_versions(organization, workspace, max_pages=1)
        if not versions:
            raise EmptyStateHistory(
                f"no state versions for {organization}/{workspace}"
            )
        return versions[0]

    async def download_state(self, version: StateVersion) -> bytes:
        """Download the raw state for a state version.

        If the listing did not carry a download URL, the state version is
        fetched first to obtain one.

        Raises:
            NetworkError: If a request fails.
            DecodeError: If no download URL can be found.
        """
        url = version.attributes.hosted_state_download_url
        if not url:
            raw = await self.get_json(
                self._url(f"{API_PREFIX}/state-versions/{quote(version.id)}")
            )
            document = validate_type(raw, SingleDocument)
            full = validate_type(document.data.model_dump(), StateVersion)
            url = full.attributes.hosted_state_download_url
        if not url:
            raise DecodeError(f"state version {version.id} has no download URL")
        return await self.get_bytes(url)
