# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the dataclasses that describe declared options.

- `Option`: a declaration as written by the caller (`"a,address"` style
  specifier, description, value prototype, argument help text).
- `OptionDetails`: the immutable registry entry created from a declaration,
  addressed by a stable integer id.
- `HelpOptionDetails` / `HelpGroupDetails`: the snapshot used to render help.

Example:
    Option("p,port", "server port", value(int).default_value("7110"), "PORT")
"""
from __future__ import annotations

from dataclasses import dataclass, field

from flagwise import values
from flagwise.values import Value


@dataclass
class Option:
    """
    A single option declaration.

    Attributes:
        opts (str): Short and/or long names, e.g. `"v"`, `"verbose"`, `"v,verbose"`.
        description (str): Help description.
        value (Value): Value prototype (a boolean flag when omitted).
        arg_help (str): Name shown for the argument in help output.
    """

    opts: str
    description: str = ""
    value: Value = field(default_factory=values.value)
    arg_help: str = ""


@dataclass(frozen=True)
class OptionDetails:
    """Registry entry for one declared option."""

    id: int
    short_name: str
    long_name: str
    description: str
    value: Value
    arg_help: str = ""
    group: str = ""

    @property
    def key(self) -> str:
        """The name used for this option in `ParseResult.arguments()`."""
        return self.long_name or self.short_name

    def make_storage(self) -> Value:
        """Return fresh storage for one parse pass."""
        return self.value.clone()

    @property
    def flags(self) -> str:
        """Command-line spelling of every name, e.g. `-v, --verbose`."""
        names = []
        if self.short_name:
            names.append(f"-{self.short_name}")
        if self.long_name:
            names.append(f"--{self.long_name}")
        return ", ".join(names)

    def __str__(self) -> str:
        return f"OptionDetails({self.flags}, type={self.value.type_name})"


@dataclass(frozen=True)
class HelpOptionDetails:
    """Everything help rendering needs to know about one option."""

    short_name: str
    long_name: str
    description: str
    default_value: str
    implicit_value: str
    arg_help: str
    has_implicit: bool
    has_default: bool
    is_container: bool
    is_boolean: bool

    @classmethod
    def from_details(cls, details: OptionDetails) -> HelpOptionDetails:
        prototype = details.value
        return cls(
            short_name=details.short_name,
            long_name=details.long_name,
            description=details.description,
            default_value=prototype.get_default_value(),
            implicit_value=prototype.get_implicit_value(),
            arg_help=details.arg_help,
            has_implicit=prototype.has_implicit,
            has_default=prototype.has_default,
            is_container=prototype.is_container,
            is_boolean=prototype.is_boolean,
        )


@dataclass
class HelpGroupDetails:
    """A named help group and its options in declaration order."""

    name: str
    description: str = ""
    options: list[HelpOptionDetails] = field(default_factory=list)
