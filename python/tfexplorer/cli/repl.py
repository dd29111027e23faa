"""
tfexplorer/cli/repl.py

The prompt_toolkit host loop: read a line, hand it to the interpreter, repeat
until the interpreter terminates. Ctrl-C discards the current line and
Ctrl-D behaves like 'quit'.
"""

from __future__ import annotations

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.shortcuts import set_title
from prompt_toolkit.styles import Style

from tfexplorer.cli.completion import CompletionProvider, LookupCompleter
from tfexplorer.cli.interpreter import CommandInterpreter

TITLE = "TFE lookup"
PROMPT = ">>> "
STYLE = Style.from_dict({"": "ansiyellow", "prompt": "ansidefault"})


def build_prompt_session(provider: CompletionProvider) -> PromptSession:
    return PromptSession(
        completer=LookupCompleter(provider),
        complete_while_typing=True,
        style=STYLE,
    )


async def run_repl(
    interpreter: CommandInterpreter,
    provider: CompletionProvider,
    prompt_session: Optional[PromptSession] = None,
) -> None:
    """Drive the interpreter from an interactive prompt until it terminates."""
    session = prompt_session or build_prompt_session(provider)
    set_title(TITLE)

    while not interpreter.terminated:
        try:
            line = await session.prompt_async([("class:prompt", PROMPT)])
        except KeyboardInterrupt:
            continue
        except EOFError:
            line = "quit"
        await interpreter.execute(line)
