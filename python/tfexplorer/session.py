"""
tfexplorer/session.py

The lookup session: the currently loaded state, its flattened mapping, and
the completion candidates derived from both it and the environment directory.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from tfexplorer.directory import EnvironmentDirectory
from tfexplorer.errors import NotFound, NotLoaded
from tfexplorer.loader import StateLoader
from tfexplorer.models.environment import Environment
from tfexplorer.models.terraform_state import FlatEntry, TerraformState, flatten


class LookupSession:
    """Holds at most one loaded state. Each successful load replaces it whole."""

    def __init__(
        self,
        directory: EnvironmentDirectory,
        loader: Optional[StateLoader] = None,
    ) -> None:
        self.directory = directory
        self._loader = loader or StateLoader(directory)
        self.state: Optional[TerraformState] = None
        self.flat: Optional[Dict[str, FlatEntry]] = None
        self.loaded_environment: Optional[Environment] = None
        self._get_completions: List[str] = []

    async def load(self, name: str) -> Environment:
        """Load environment `name`, replacing the current state on success.

        On any failure the previously loaded state is left as it was.

        Raises:
            UnknownEnvironment, NetworkError, DecodeError, EmptyStateHistory
        """
        environment = self.directory.get(name)
        state = await self._loader.load(name)
        flat = flatten(state)

        self.state = state
        self.flat = flat
        self.loaded_environment = environment
        self._get_completions = sorted(flat, key=lambda key: (len(key), key))
        return environment

    def get(self, key: str) -> FlatEntry:
        """Return the flattened entry at `key`.

        Raises:
            NotLoaded: If nothing has been loaded yet.
            NotFound: If `key` is not in the loaded state.
        """
        if self.state is None or self.flat is None:
            raise NotLoaded()
        try:
            return self.flat[key]
        except KeyError:
            raise NotFound(key) from None

    def entry_for(self, key: str) -> Optional[FlatEntry]:
        if self.flat is None:
            return None
        return self.flat.get(key)

    def completion_keys_for_get(self) -> List[str]:
        """All flattened keys, shortest first."""
        return list(self._get_completions)

    def completion_keys_for_load(self) -> List[str]:
        return self.directory.names()
