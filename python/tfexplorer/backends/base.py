"""
tfexplorer/backends/base.py

Defines the StateBackend capability shared by both backend kinds:

  - discover(): yield every Environment the backend serves
  - load_state(env): fetch and decode that environment's state

The environment directory picks a backend per environment by its version,
so nothing downstream branches on the version number.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator

from tfexplorer.models.environment import BackendVersion, Environment
from tfexplorer.models.terraform_state import TerraformState


class StateBackend(ABC):
    """Abstract base class for a source of Terraform state environments."""

    version: BackendVersion

    @abstractmethod
    def discover(self) -> AsyncIterator[Environment]:
        """
        Yield every environment this backend serves, tagged with `self.version`.

        Environments are yielded as they are found, so a caller that stops on
        an error still holds everything discovered before it.

        Raises:
            NetworkError: If a listing request fails.
            DecodeError: If a listing response has an unexpected shape.
        """
        ...

    @abstractmethod
    async def load_state(self, environment: Environment) -> TerraformState:
        """
        Fetch and decode the current state of `environment`.

        Raises:
            NetworkError: If a request fails.
            DecodeError: If the state cannot be decoded.
        """
        ...
