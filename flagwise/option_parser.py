# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `OptionParser`, the tokenizing and matching engine
behind `Options.parse()`.

One `OptionParser` is created per parse pass. It walks argv once, classifies
each token with `flagwise.tokens.classify()`, resolves it against the frozen
`OptionRegistry`, feeds values into per-pass clones of the declared value
prototypes and finally applies environment fallbacks and defaults.

Scan rules:
- `argv[0]` is the program name and is never scanned.
- `--` ends option parsing. Remaining entries fill the positional plan and
  whatever does not fit goes to `unmatched`. With `stop_on_positional` the scan
  halts on `--` instead.
- `--name=value` records `value` (possibly empty); `--name` acquires its
  argument (see `_acquire_argument`).
- `-abc` is scanned left to right. Flags with an implicit value chain; the
  first option needing a value takes the rest of the cluster (`-ovalue`), or
  the next argv entry when it is the last character.
- Plain tokens fill the positional plan, else go to `unmatched`. With
  `stop_on_positional` the scan halts on the first one.

Unknown options raise `OptionNotExistsError` and malformed dash tokens raise
`OptionSyntaxError`, unless unrecognised options are allowed, in which case
they are collected in `unmatched`. Every other error aborts the pass.

Precedence during finalization: argv, then the environment, then the default.
"""
from __future__ import annotations

import os
from typing import Mapping, Sequence

from flagwise.exceptions import (
    MissingArgumentError,
    OptionNotExistsError,
    OptionSyntaxError,
)
from flagwise.logger import logger
from flagwise.option import OptionDetails
from flagwise.registry import OptionRegistry
from flagwise.result import KeyValue, OptionValue, ParseResult
from flagwise.tokens import Token, TokenKind, classify
from flagwise.values import Value


class OptionParser:
    """
    Single-use engine that turns argv into a `ParseResult`.

    Args:
        registry (OptionRegistry): Declared options (read-only during the pass).
        positional (Sequence[str]): Ordered names that receive plain arguments.
        allow_unrecognised (bool): Collect unknown options instead of failing.
        stop_on_positional (bool): Halt at `--` or the first plain argument.
        environ (Mapping[str, str] | None): Environment used for `env()`
            fallbacks. Defaults to `os.environ`.
    """

    def __init__(
        self,
        registry: OptionRegistry,
        positional: Sequence[str] = (),
        allow_unrecognised: bool = False,
        stop_on_positional: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._registry: OptionRegistry = registry
        self._positional: tuple[str, ...] = tuple(positional)
        self._allow_unrecognised: bool = allow_unrecognised
        self._stop_on_positional: bool = stop_on_positional
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

        self._storage: dict[int, Value] = {}
        self._parsed: dict[int, OptionValue] = {}
        self._sequential: list[KeyValue] = []
        self._unmatched: list[str] = []
        self._next_positional: int = 0

    def parse(self, argv: Sequence[str]) -> ParseResult:
        """
        Parse `argv` and return the result.

        Raises:
            OptionParseError: On the first error; no partial result is returned.
        """
        argc = len(argv)
        current = 1
        logger.debug("Parsing %d argument(s)", max(argc - 1, 0))

        while current < argc:
            token = classify(argv[current])

            if token.kind == TokenKind.DASH_DASH:
                current += 1
                if self._stop_on_positional:
                    break
                current = self._consume_rest_as_positional(argv, current)
                break

            if token.kind == TokenKind.LONG:
                current = self._handle_long(token, argv, current)
            elif token.kind == TokenKind.SHORT_CLUSTER:
                current = self._handle_short_cluster(token, argv, current)
            else:
                if token.kind == TokenKind.MALFORMED and not self._allow_unrecognised:
                    raise OptionSyntaxError(token.text)
                if self._stop_on_positional:
                    break
                if not self._consume_positional(token.text):
                    self._add_unmatched(token.text)

            current += 1

        self._finalize()
        return ParseResult(
            keys=self._build_aliases(),
            values=self._parsed,
            sequential=self._sequential,
            unmatched=self._unmatched,
            consumed=min(current, argc),
        )

    def _handle_long(self, token: Token, argv: Sequence[str], current: int) -> int:
        details = self._registry.find(token.name)
        if details is None:
            if self._allow_unrecognised:
                self._add_unmatched(token.text)
                return current
            raise OptionNotExistsError(token.name)

        if token.has_value:
            self._parse_option(details, token.value)
            return current
        return self._acquire_argument(details, token.name, argv, current)

    def _handle_short_cluster(
        self, token: Token, argv: Sequence[str], current: int
    ) -> int:
        cluster = token.name
        for index, name in enumerate(cluster):
            details = self._registry.find(name)
            if details is None:
                if self._allow_unrecognised:
                    self._add_unmatched(f"-{name}")
                    continue
                raise OptionNotExistsError(name)

            if index + 1 == len(cluster):
                return self._acquire_argument(details, name, argv, current)
            if details.value.has_implicit:
                self._parse_option(details, details.value.get_implicit_value())
            else:
                self._parse_option(details, cluster[index + 1 :])
                break
        return current

    def _acquire_argument(
        self,
        details: OptionDetails,
        name: str,
        argv: Sequence[str],
        current: int,
    ) -> int:
        """
        Decide what value an option given without `=` receives.

        An implicit value always wins and leaves the next entry alone.
        Otherwise the next entry is consumed, unless there is none or it is `--`
        or a registered option name.
        """
        prototype = details.value
        if prototype.has_implicit:
            self._parse_option(details, prototype.get_implicit_value())
            return current

        if current + 1 >= len(argv):
            raise MissingArgumentError(name)
        candidate = argv[current + 1]
        if self._is_dash_dash_or_option_name(candidate):
            raise MissingArgumentError(name)

        self._parse_option(details, candidate)
        return current + 1

    def _is_dash_dash_or_option_name(self, text: str) -> bool:
        token = classify(text)
        if token.kind == TokenKind.DASH_DASH:
            return True
        if token.kind == TokenKind.LONG:
            return token.name in self._registry
        if token.kind == TokenKind.SHORT_CLUSTER:
            return token.name[0] in self._registry
        return False

    def _consume_rest_as_positional(self, argv: Sequence[str], current: int) -> int:
        argc = len(argv)
        while current < argc and self._consume_positional(argv[current]):
            current += 1
        for text in argv[current:]:
            self._add_unmatched(text)
        return argc

    def _consume_positional(self, text: str) -> bool:
        """Place `text` into the next open positional slot."""
        while self._next_positional < len(self._positional):
            name = self._positional[self._next_positional]
            details = self._registry.find(name)
            if details is None:
                raise OptionNotExistsError(name)

            if details.value.is_container:
                self._parse_option(details, text)
                return True
            if self._cell(details).count() == 0:
                self._parse_option(details, text)
                self._next_positional += 1
                return True
            self._next_positional += 1
        return False

    def _add_unmatched(self, text: str) -> None:
        logger.debug("Unmatched argument '%s'", text)
        self._unmatched.append(text)

    def _cell(self, details: OptionDetails) -> OptionValue:
        cell = self._parsed.get(details.id)
        if cell is None:
            cell = OptionValue(details.key)
            self._parsed[details.id] = cell
        return cell

    def _storage_for(self, details: OptionDetails) -> Value:
        storage = self._storage.get(details.id)
        if storage is None:
            storage = details.make_storage()
            self._storage[details.id] = storage
        return storage

    def _parse_option(self, details: OptionDetails, text: str) -> None:
        self._cell(details).parse(self._storage_for(details), text)
        self._sequential.append(KeyValue(details.key, text))

    def _finalize(self) -> None:
        for details in self._registry:
            cell = self._cell(details)
            if cell.count():
                continue
            prototype = details.value
            if prototype.has_env:
                env_text = self._environ.get(prototype.get_env_var())
                if env_text is not None:
                    logger.debug(
                        "Option '%s' taken from environment variable '%s'",
                        details.key,
                        prototype.get_env_var(),
                    )
                    cell.parse(self._storage_for(details), env_text)
                    continue
            if prototype.has_default:
                cell.parse_default(self._storage_for(details))
            else:
                cell.parse_no_value(details.key)

    def _build_aliases(self) -> dict[str, int]:
        keys: dict[str, int] = {}
        for details in self._registry:
            if details.short_name:
                keys[details.short_name] = details.id
            if details.long_name:
                keys[details.long_name] = details.id
        return keys
