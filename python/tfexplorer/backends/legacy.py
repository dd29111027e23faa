"""
tfexplorer/backends/legacy.py

Backend for the legacy Atlas state API. Environments are named
'<username>/<name>' and the listing is paged until a page comes back empty.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from tfexplorer.backends.base import StateBackend
from tfexplorer.clients.atlas import AsyncAtlasClient
from tfexplorer.models.environment import BackendVersion, Environment
from tfexplorer.models.terraform_state import TerraformState, read_state

logger = logging.getLogger(__name__)


class LegacyStateBackend(StateBackend):
    version = BackendVersion.LEGACY

    def __init__(self, client: AsyncAtlasClient) -> None:
        self._client = client

    async def discover(self) -> AsyncIterator[Environment]:
        page = 1
        while True:
            listing = await self._client.list_states(page)
            if not listing.states:
                logger.info("Legacy listing ended at page %d", page)
                return
            for state in listing.states:
                env = state.environment
                yield Environment(
                    name=f"{env.username}/{env.name}", version=self.version
                )
            page += 1

    async def load_state(self, environment: Environment) -> TerraformState:
        raw = await self._client.fetch_state(environment.name)
        return read_state(raw)
