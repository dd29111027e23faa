"""
tfexplorer/loader.py

Resolves an environment name through the directory and loads its state from
the backend that serves it.
"""

from __future__ import annotations

import logging

from tfexplorer.directory import EnvironmentDirectory
from tfexplorer.models.terraform_state import TerraformState

logger = logging.getLogger(__name__)


class StateLoader:
    def __init__(self, directory: EnvironmentDirectory) -> None:
        self._directory = directory

    async def load(self, name: str) -> TerraformState:
        """Fetch and decode the state for environment `name`.

        Raises:
            UnknownEnvironment: If `name` is not in the directory.
            EmptyStateHistory: If a workspace has no state yet.
            NetworkError: If a request fails.
            DecodeError: If the state cannot be decoded.
        """
        environment = self._directory.get(name)
        backend = self._directory.backend_for(environment)
        logger.debug("Loading %s (backend v%d)", name, environment.version)
        return await backend.load_state(environment)
