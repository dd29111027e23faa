"""
tfexplorer/cli/completion.py

Tab-completion for the REPL. CompletionProvider works on the plain text
before the cursor; LookupCompleter adapts it to prompt_toolkit.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from pydantic import BaseModel

from tfexplorer.session import LookupSession


class Suggestion(BaseModel):
    text: str
    description: str = ""

    class Config:
        frozen = True


COMMANDS: List[Suggestion] = [
    Suggestion(text="get", description="Get value for terraform path"),
    Suggestion(text="load", description="Load a terraform environment"),
    Suggestion(text="quit", description="Quit this program"),
]


def filter_has_prefix(
    suggestions: Iterable[Suggestion], prefix: str
) -> List[Suggestion]:
    """Keep suggestions whose text starts with `prefix` (case-sensitive)."""
    return [s for s in suggestions if s.text.startswith(prefix)]


def word_before_cursor(text: str) -> str:
    """The last whitespace-delimited word, or '' if the text ends in whitespace."""
    if not text or text[-1].isspace():
        return ""
    return text.split()[-1]


class CompletionProvider:
    """Computes suggestions for verbs, environment names and state paths."""

    def __init__(self, session: LookupSession) -> None:
        self.session = session

    def complete(self, text_before_cursor: str) -> List[Suggestion]:
        words = text_before_cursor.split()
        if not words:
            return []

        word = word_before_cursor(text_before_cursor)
        if len(words) == 1 and word:
            return filter_has_prefix(COMMANDS, word)

        command = words[0]
        if command == "get":
            return list(self._get_suggestions(word))
        if command == "load":
            return filter_has_prefix(
                (Suggestion(text=name) for name in self.session.completion_keys_for_load()),
                word,
            )
        return []

    def _get_suggestions(self, prefix: str) -> Iterator[Suggestion]:
        for key in self.session.completion_keys_for_get():
            if not key.startswith(prefix):
                continue
            entry = self.session.entry_for(key)
            description = f"{entry.kind.value} ({entry.value_type})" if entry else ""
            yield Suggestion(text=key, description=description)


class LookupCompleter(Completer):
    """prompt_toolkit Completer backed by a CompletionProvider."""

    def __init__(self, provider: CompletionProvider) -> None:
        self.provider = provider

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterator[Completion]:
        text = document.text_before_cursor
        start = -len(word_before_cursor(text))
        for suggestion in self.provider.complete(text):
            yield Completion(
                suggestion.text,
                start_position=start,
                display_meta=suggestion.description or None,
            )
