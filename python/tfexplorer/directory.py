"""
tfexplorer/directory.py

The environment directory: every environment known to any backend, keyed by
display name, built once at startup and read-only afterwards.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from tfexplorer.backends.base import StateBackend
from tfexplorer.errors import (
    DecodeError,
    EnvironmentDiscoveryError,
    NetworkError,
    UnknownEnvironment,
)
from tfexplorer.models.environment import BackendVersion, Environment

logger = logging.getLogger(__name__)


class EnvironmentDirectory:
    """Immutable mapping of environment name -> Environment, plus the backend
    that serves each backend version.
    """

    def __init__(
        self,
        environments: Mapping[str, Environment],
        backends: Iterable[StateBackend],
    ) -> None:
        self._environments: Mapping[str, Environment] = MappingProxyType(
            dict(environments)
        )
        self._backends: Dict[BackendVersion, StateBackend] = {
            backend.version: backend for backend in backends
        }

    @classmethod
    async def discover(cls, backends: Iterable[StateBackend]) -> EnvironmentDirectory:
        """Run discovery on each backend in order and merge the results.

        When two backends report the same name, the later backend wins.

        Args:
            backends: Backends to query, in merge order.

        Returns:
            EnvironmentDirectory: The merged directory.

        Raises:
            EnvironmentDiscoveryError: If any backend fails; carries the
                environments found up to that point.
        """
        backend_list = list(backends)
        found: Dict[str, Environment] = {}
        for backend in backend_list:
            try:
                async for environment in backend.discover():
                    found[environment.name] = environment
            except (NetworkError, DecodeError) as exc:
                raise EnvironmentDiscoveryError(
                    f"discovery failed for {backend.version.name.lower()} backend: {exc}",
                    partial=dict(found),
                ) from exc
        logger.info("Discovered %d environments", len(found))
        return cls(found, backend_list)

    @property
    def environments(self) -> Mapping[str, Environment]:
        return self._environments

    def names(self) -> List[str]:
        return list(self._environments)

    def get(self, name: str) -> Environment:
        """Look up an environment by display name.

        Raises:
            UnknownEnvironment: If no backend reported `name`.
        """
        try:
            return self._environments[name]
        except KeyError:
            raise UnknownEnvironment(name) from None

    def backend_for(self, environment: Environment) -> StateBackend:
        return self._backends[environment.version]

    def __contains__(self, name: object) -> bool:
        return name in self._environments

    def __len__(self) -> int:
        return len(self._environments)
