# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Storage for declared options.

`OptionRegistry` keeps every `OptionDetails` in an arena addressed by a stable
integer id and maps each declared short and long name to that id, so both
aliases of an option resolve to the same entry without shared ownership.

`parse_option_specifier()` splits a declaration string such as `"v,verbose"`
into its short and long names.
"""
from __future__ import annotations

from typing import Iterator

from flagwise.exceptions import InvalidOptionFormatError, OptionAlreadyExistsError
from flagwise.logger import logger
from flagwise.option import OptionDetails
from flagwise.tokens import is_long_name, is_short_name
from flagwise.values import Value


def parse_option_specifier(text: str) -> tuple[str, str]:
    """
    Split an option specifier into `(short, long)`.

    Accepted shapes: `"s"`, `"s,"`, `"long"`, `"s,long"`, `"s, long"`.
    The short name comes first and is a single alphanumeric character or `?`.

    Raises:
        InvalidOptionFormatError: If the specifier has any other shape.
    """
    short_name = ""
    rest = text
    if len(text) == 1 or (len(text) > 1 and text[1] == ","):
        if not is_short_name(text[0]):
            raise InvalidOptionFormatError(text)
        short_name = text[0]
        rest = text[2:]
    elif text.startswith(","):
        raise InvalidOptionFormatError(text)

    long_name = rest.lstrip(" ")
    if not long_name:
        if not short_name:
            raise InvalidOptionFormatError(text)
        return short_name, ""
    if not is_long_name(long_name):
        raise InvalidOptionFormatError(text)
    return short_name, long_name


class OptionRegistry:
    """
    Arena of declared options plus a name → id index.

    Names are unique: registering a name twice raises `OptionAlreadyExistsError`
    and leaves the registry unchanged.
    """

    def __init__(self) -> None:
        self._details: list[OptionDetails] = []
        self._names: dict[str, int] = {}

    def add(
        self,
        short_name: str,
        long_name: str,
        description: str,
        value: Value,
        arg_help: str = "",
        group: str = "",
    ) -> OptionDetails:
        """Register one option and return its entry."""
        if not short_name and not long_name:
            raise InvalidOptionFormatError("")
        if short_name and not is_short_name(short_name):
            raise InvalidOptionFormatError(short_name)
        if long_name and not is_long_name(long_name):
            raise InvalidOptionFormatError(long_name)
        for name in (short_name, long_name):
            if name and name in self._names:
                raise OptionAlreadyExistsError(name)

        details = OptionDetails(
            id=len(self._details),
            short_name=short_name,
            long_name=long_name,
            description=description,
            value=value,
            arg_help=arg_help,
            group=group,
        )
        self._details.append(details)
        for name in (short_name, long_name):
            if name:
                self._names[name] = details.id
        logger.debug("Registered %s in group '%s'", details, group)
        return details

    def find(self, name: str) -> OptionDetails | None:
        """Return the entry declared under `name`, if any."""
        option_id = self._names.get(name)
        if option_id is None:
            return None
        return self._details[option_id]

    def id_of(self, name: str) -> int | None:
        return self._names.get(name)

    def names(self) -> dict[str, int]:
        """Return a copy of the name → id index."""
        return dict(self._names)

    def __getitem__(self, option_id: int) -> OptionDetails:
        return self._details[option_id]

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[OptionDetails]:
        return iter(self._details)

    def __len__(self) -> int:
        return len(self._details)

    def __str__(self) -> str:
        return f"OptionRegistry(options={len(self._details)}, names={len(self._names)})"

    def __repr__(self) -> str:
        return str(self)
