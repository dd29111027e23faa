"""
tfexplorer/clients/atlas.py

Client for the legacy Atlas per-account state API (v1):
  - GET /api/v1/terraform/state?page=N   (paged listing)
  - GET /api/v1/terraform/state/<name>   (raw state document)
"""

from __future__ import annotations

from typing import Dict
from urllib.parse import quote

from tfexplorer.clients.base import AsyncAPIClient
from tfexplorer.models.atlas import AtlasStateListing
from tfexplorer.models.validator import validate_type

STATE_PATH = "/api/v1/terraform/state"


class AsyncAtlasClient(AsyncAPIClient):
    """Read-only client for legacy Atlas state, authenticated by X-Atlas-Token."""

    def _auth_headers(self) -> Dict[str, str]:
        return {"X-Atlas-Token": self._token}

    async def list_states(self, page: int) -> AtlasStateListing:
        """Fetch one page of the state listing (pages start at 1).

        Raises:
            NetworkError: If the request fails.
            DecodeError: If the page is not a state listing.
        """
        raw = await self.get_json(self._url(STATE_PATH), params={"page": page})
        return validate_type(raw, AtlasStateListing)

    async def fetch_state(self, name: str) -> bytes:
        """Fetch the raw state document for '<username>/<name>'.

        Raises:
            NetworkError: If the request fails.
        """
        return await self.get_bytes(self._url(f"{STATE_PATH}/{quote(name)}"))
