"""
tfexplorer/models/environment.py

An Environment is one loadable state document, named
'<account-or-organization>/<state-or-workspace>' and tagged with the
backend API version that serves it.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple
from pydantic import BaseModel


class BackendVersion(IntEnum):
    """Which backend API an environment must be fetched from."""

    LEGACY = 1
    WORKSPACE = 2


class Environment(BaseModel):
    """A named state document and the backend version that serves it.

    Attributes:
        name: Display name, e.g. 'acme/prod'.
        version: BackendVersion.LEGACY or BackendVersion.WORKSPACE.
    """

    name: str
    version: BackendVersion

    class Config:
        frozen = True

    def split_name(self) -> Tuple[str, str]:
        """Split the display name on the first '/' into (owner, state name).

        Raises:
            ValueError: If the name has no '/'.
        """
        owner, sep, rest = self.name.partition("/")
        if not sep:
            raise ValueError(f"Environment name has no '/': {self.name!r}")
        return owner, rest
