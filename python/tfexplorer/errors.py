"""
tfexplorer/errors.py

Error taxonomy shared by the clients, backends, session and REPL.

Only CredentialMissing and EnvironmentDiscoveryError are fatal, and only at
startup. Everything else is rendered as a single line by the command
interpreter and the REPL keeps running.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from tfexplorer.models.environment import Environment


class ExplorerError(RuntimeError):
    """Base class for every error raised by tfexplorer."""


class CredentialMissing(ExplorerError):
    """The API token was not found in the environment."""


class NetworkError(ExplorerError):
    """A request failed in transport, timed out, or returned a non-2xx status.

    Attributes:
        status (Optional[int]): The HTTP status if a response was received.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(ExplorerError, ValueError):
    """A response body was not valid JSON or did not have the expected shape."""


class UnknownEnvironment(ExplorerError):
    """The requested environment is not in the directory."""

    def __init__(self, name: str) -> None:
        super().__init__(f"environment not found: {name}")
        self.name = name


class EmptyStateHistory(ExplorerError):
    """A workspace exists but has no state versions to download."""


class NotLoaded(ExplorerError):
    """A lookup was attempted before any environment was loaded."""

    def __init__(self) -> None:
        super().__init__("must load environment first")


class NotFound(ExplorerError):
    """The requested path is not present in the loaded state."""

    def __init__(self, key: str) -> None:
        super().__init__(f"value not found for path: {key}")
        self.key = key


class EnvironmentDiscoveryError(ExplorerError):
    """Discovery of environments failed part way through.

    Attributes:
        partial (Dict[str, Environment]): Environments found before the failure.
    """

    def __init__(self, message: str, partial: Dict[str, "Environment"]) -> None:
        super().__init__(message)
        self.partial = partial
