#!/usr/bin/env python3
"""
tfexplorer/cli/tfelookup.py

Entry point for the `tfelookup` REPL:

  1) Read settings (ATLAS_TOKEN is required) or exit 1.
  2) Discover environments from the legacy Atlas API and the Terraform
     Enterprise workspace API, or exit 1.
  3) Run the interactive prompt until 'quit'/'exit', then exit 0.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from tfexplorer.backends.legacy import LegacyStateBackend
from tfexplorer.backends.workspace import WorkspaceStateBackend
from tfexplorer.cli.completion import CompletionProvider
from tfexplorer.cli.interpreter import CommandInterpreter
from tfexplorer.cli.repl import run_repl
from tfexplorer.clients.atlas import AsyncAtlasClient
from tfexplorer.clients.tfe import AsyncTFEClient
from tfexplorer.directory import EnvironmentDirectory
from tfexplorer.errors import CredentialMissing, EnvironmentDiscoveryError
from tfexplorer.models.settings import ExplorerSettings, load_settings
from tfexplorer.session import LookupSession

logger = logging.getLogger("tfexplorer")


async def _run(settings: ExplorerSettings) -> int:
    """Discover environments, then run the REPL. Returns the exit status."""
    async with AsyncAtlasClient(settings) as atlas, AsyncTFEClient(settings) as tfe:
        backends = [LegacyStateBackend(atlas), WorkspaceStateBackend(tfe)]
        try:
            directory = await EnvironmentDirectory.discover(backends)
        except EnvironmentDiscoveryError as exc:
            logger.error("%s (%d environments found before failure)", exc, len(exc.partial))
            return 1

        session = LookupSession(directory)
        interpreter = CommandInterpreter(session)
        await run_repl(interpreter, CompletionProvider(session))
    return 0


def main() -> None:
    """CLI entry point for the tfelookup REPL."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except CredentialMissing as exc:
        logger.error("%s", exc)
        sys.exit(1)

    sys.exit(asyncio.run(_run(settings)))


if __name__ == "__main__":
    main()
