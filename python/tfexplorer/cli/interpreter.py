"""
tfexplorer/cli/interpreter.py

The REPL command language:

  load <env>    load an environment's state
  get <path>    print the value at a flattened path
  quit | exit   leave the REPL

Every error after startup is caught here and printed as one line; the
interpreter only stops when it moves to the TERMINATED state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List

from tfexplorer.errors import (
    DecodeError,
    EmptyStateHistory,
    NetworkError,
    NotFound,
    NotLoaded,
    UnknownEnvironment,
)
from tfexplorer.models.terraform_state import to_display_string
from tfexplorer.session import LookupSession

logger = logging.getLogger(__name__)


class InterpreterState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class CommandInterpreter:
    """Parses and runs one REPL line at a time against a LookupSession."""

    def __init__(
        self,
        session: LookupSession,
        echo: Callable[[str], None] = print,
    ) -> None:
        """
        Args:
            session (LookupSession): The session commands operate on.
            echo (Callable[[str], None]): Where user-facing lines are written.
        """
        self.session = session
        self._echo = echo
        self.state = InterpreterState.RUNNING

    @property
    def terminated(self) -> bool:
        return self.state is InterpreterState.TERMINATED

    async def execute(self, line: str) -> None:
        """Run one line of input. Never raises for user or backend errors."""
        if self.terminated:
            return

        parts = line.split()
        if not parts:
            return

        command, args = parts[0], parts[1:]

        if command in ("quit", "exit"):
            self._quit()
        elif command == "load":
            await self._load(args)
        elif command == "get":
            self._get(args)
        else:
            self._echo(f"unrecognized command '{command}'")

    def _quit(self) -> None:
        self._echo("Bye!")
        self.state = InterpreterState.TERMINATED

    async def _load(self, args: List[str]) -> None:
        if not args:
            self._echo("must pass an environment to load")
            return
        if len(args) > 1:
            self._echo("usage: load <environment>")
            return

        name = args[0]
        try:
            await self.session.load(name)
        except UnknownEnvironment:
            self._echo("environment not found")
        except EmptyStateHistory as exc:
            self._echo(f"failed to load env {name}: {exc}")
        except NetworkError as exc:
            logger.debug("Load of %s failed", name, exc_info=True)
            self._echo(f"failed to load env {name}: {exc}")
        except DecodeError as exc:
            self._echo(f"failed to read state: {exc}")
        else:
            self._echo(f"loaded env {name}")

    def _get(self, args: List[str]) -> None:
        if not args:
            self._echo("must pass an argument to get")
            return
        if len(args) > 1:
            self._echo("usage: get <path>")
            return

        try:
            entry = self.session.get(args[0])
        except NotLoaded:
            self._echo("must load environment first")
        except NotFound:
            self._echo("value not found for path")
        else:
            self._echo(to_display_string(entry.value))
