# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lexical classification of command-line tokens.

`classify()` decides the shape of a single argument string without looking at
any registered options. The engine uses it to scan argv and again for the
lookahead that stops an option from swallowing another option as its value.

Shapes:
- `DASH_DASH`: exactly `--`.
- `LONG`: `--name` or `--name=value` (name of two or more characters).
- `SHORT_CLUSTER`: `-a`, `-abc`, or `-?`.
- `MALFORMED`: starts with `-` but fits neither of the shapes above.
- `PLAIN`: anything else, including a bare `-`.

Names are restricted to ASCII letters and digits, with `-` and `_` allowed
after the first character of a long name.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """The lexical shape of one argv entry."""

    DASH_DASH = "dash_dash"
    LONG = "long"
    SHORT_CLUSTER = "short_cluster"
    MALFORMED = "malformed"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A classified argv entry."""

    kind: TokenKind
    text: str
    name: str = ""
    has_value: bool = False
    value: str = ""

    @property
    def is_option(self) -> bool:
        """True for tokens the engine resolves against the registry."""
        return self.kind in (TokenKind.LONG, TokenKind.SHORT_CLUSTER)


def is_name_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


def is_short_name(name: str) -> bool:
    """Return True if `name` is a valid short option name."""
    return len(name) == 1 and (name == "?" or is_name_char(name))


def is_long_name(name: str) -> bool:
    """Return True if `name` is a valid long option name."""
    if len(name) < 2 or not is_name_char(name[0]):
        return False
    return all(char in "-_" or is_name_char(char) for char in name[1:])


def _classify_long(text: str) -> Token:
    body = text[2:]
    if len(body) < 2 or not is_name_char(body[0]):
        return Token(TokenKind.MALFORMED, text, name=body[:1])

    name = body[0]
    for index in range(1, len(body)):
        char = body[index]
        if char == "=":
            if len(name) < 2:
                return Token(TokenKind.MALFORMED, text, name=name)
            return Token(
                TokenKind.LONG,
                text,
                name=name,
                has_value=True,
                value=body[index + 1 :],
            )
        if char in "-_" or is_name_char(char):
            name += char
        else:
            return Token(TokenKind.MALFORMED, text, name=name)
    return Token(TokenKind.LONG, text, name=name)


def _classify_short(text: str) -> Token:
    body = text[1:]
    if len(body) == 1:
        if is_short_name(body):
            return Token(TokenKind.SHORT_CLUSTER, text, name=body)
        return Token(TokenKind.MALFORMED, text)

    name = ""
    for char in body:
        if not is_name_char(char):
            return Token(TokenKind.MALFORMED, text, name=name)
        name += char
    return Token(TokenKind.SHORT_CLUSTER, text, name=name)


def classify(text: str) -> Token:
    """
    Classify a raw argument string.

    Args:
        text (str): One argv entry.

    Returns:
        Token: The classified token. For `LONG` tokens `has_value` tells an
        explicit `--name=` (empty value) apart from `--name`.
    """
    if text == "--":
        return Token(TokenKind.DASH_DASH, text)
    if len(text) < 2 or text[0] != "-":
        return Token(TokenKind.PLAIN, text)
    if text[1] == "-":
        return _classify_long(text)
    return _classify_short(text)
