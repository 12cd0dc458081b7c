# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `OptionsCompleter`, a Prompt Toolkit completer that suggests the
option names declared on an `Options` instance.

This completer supports:
- `--long` and `-s` name completion for the token under the cursor
- No name suggestions where an option is still waiting for its argument
- No suggestions after `--`
- Longest common prefix insertion when several names match
"""
from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from flagwise.tokens import TokenKind, classify

if TYPE_CHECKING:
    from flagwise.options import Options


class OptionsCompleter(Completer):
    """
    Prompt Toolkit completer for command lines parsed by `Options`.

    Args:
        options (Options): The specification whose option names are suggested.
    """

    def __init__(self, options: "Options"):
        self.options = options

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = text.endswith((" ", "\t")) or not text

        parsed_args = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]

        if "--" in parsed_args:
            return
        if stub and not stub.startswith("-"):
            return
        if parsed_args and self._expects_argument(parsed_args[-1]):
            return

        yield from self._yield_lcp_completions(self.suggestions(), stub)

    def suggestions(self) -> list[str]:
        """All declared names in their command-line form, long names first."""
        long_names: list[str] = []
        short_names: list[str] = []
        for details in self.options.registry:
            if details.long_name:
                long_names.append(f"--{details.long_name}")
            if details.short_name:
                short_names.append(f"-{details.short_name}")
        return long_names + short_names

    def _expects_argument(self, text: str) -> bool:
        """True when `text` is an option that will take the next entry as its value."""
        token = classify(text)
        if token.kind == TokenKind.LONG and not token.has_value:
            details = self.options.registry.find(token.name)
            return details is not None and not details.value.has_implicit
        if token.kind != TokenKind.SHORT_CLUSTER:
            return False
        for name in token.name:
            details = self.options.registry.find(name)
            if details is None or not details.value.has_implicit:
                # The rest of the cluster is this option's value.
                return details is not None and name == token.name[-1]
        return False

    def _yield_lcp_completions(self, suggestions, stub):
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)
        if len(matches) == 1:
            yield Completion(matches[0], start_position=-len(stub), display=matches[0])
        elif len(lcp) > len(stub) and lcp not in ("-", "--"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(match, start_position=-len(stub), display=match)
        else:
            for match in matches:
                yield Completion(match, start_position=-len(stub), display=match)
