"""
tfexplorer/backends/workspace.py

Backend for the Terraform Enterprise workspace API. Environments are named
'<organization>/<workspace>'. Loading takes the first state version the API
lists for the workspace (the API lists newest first) and downloads it.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from tfexplorer.backends.base import StateBackend
from tfexplorer.clients.tfe import AsyncTFEClient
from tfexplorer.models.environment import BackendVersion, Environment
from tfexplorer.models.terraform_state import TerraformState, read_state

logger = logging.getLogger(__name__)


class WorkspaceStateBackend(StateBackend):
    version = BackendVersion.WORKSPACE

    def __init__(self, client: AsyncTFEClient) -> None:
        self._client = client

    async def discover(self) -> AsyncIterator[Environment]:
        organizations = await self._client.list_organizations()
        for organization in organizations:
            workspaces = await self._client.list_workspaces(organization.id)
            logger.info(
                "Organization %s has %d workspaces", organization.id, len(workspaces)
            )
            for workspace in workspaces:
                yield Environment(
                    name=f"{organization.id}/{workspace.attributes.name}",
                    version=self.version,
                )

    async def load_state(self, environment: Environment) -> TerraformState:
        """Download and decode the most recent state of a workspace.

        Raises:
            EmptyStateHistory: If the workspace has no state versions.
            NetworkError: If a request fails.
            DecodeError: If the state cannot be decoded.
        """
        organization, workspace = environment.split_name()
        latest = await self._client.latest_state_version(organization, workspace)
        logger.debug("Downloading state version %s for %s", latest.id, environment.name)
        raw = await self._client.download_state(latest)
        return read_state(raw)
