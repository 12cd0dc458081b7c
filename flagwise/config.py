# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader that builds `Options` from YAML or TOML files.

Example (YAML):

    program: server
    help_string: Demo server
    positional: [files]
    options:
      - opts: d,debug
        description: Enable debugging
      - opts: p,port
        description: Port to bind
        type: uint16
        default: 7110
        env: SERVER_PORT
        arg_help: PORT
      - opts: files
        type: list[str]
        group: Input
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from flagwise import values
from flagwise.logger import logger
from flagwise.options import Options
from flagwise.values import INTEGER_TYPES, Value, char

SCALAR_TYPES: dict[str, Any] = {
    "bool": bool,
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "char": char,
    "datetime": datetime,
    **INTEGER_TYPES,
}


def resolve_type_name(name: str, _depth: int = 0) -> Any:
    """
    Map a config type name such as `"uint8"` or `"list[list[float]]"` to a
    target accepted by `flagwise.values.value()`.

    Raises:
        ValueError: If the name is unknown or nests lists more than two deep.
    """
    name = name.strip()
    if name.startswith("list[") and name.endswith("]"):
        if _depth >= 2:
            raise ValueError(f"Lists nest at most two levels deep: '{name}'")
        return list[resolve_type_name(name[5:-1], _depth + 1)]  # type: ignore[misc]
    if name not in SCALAR_TYPES:
        raise ValueError(
            f"Unknown option type '{name}'. Expected one of: "
            f"{', '.join(SCALAR_TYPES)} or list[...]"
        )
    return SCALAR_TYPES[name]


class RawOption(BaseModel):
    """One option entry in a Flagwise configuration file."""

    opts: str
    description: str = ""
    type: str = "bool"
    default: Any = None
    implicit: Any = None
    no_implicit: bool = False
    env: str | None = None
    delimiter: str | None = None
    arg_help: str = ""
    group: str = ""

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        resolve_type_name(value)
        return value

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, value: str | None) -> str | None:
        if value is not None and len(value) != 1:
            raise ValueError("delimiter must be a single character.")
        return value

    def to_value(self) -> Value:
        prototype = values.value(
            resolve_type_name(self.type),
            default=self.default,
            implicit=self.implicit,
            env=self.env,
            delimiter=self.delimiter,
        )
        if self.no_implicit:
            prototype.no_implicit_value()
        return prototype


class RawOptionsConfig(BaseModel):
    """Flagwise options configuration model."""

    program: str
    help_string: str = ""
    options: list[RawOption] = Field(default_factory=list)
    positional: list[str] = Field(default_factory=list)
    allow_unrecognised: bool = False
    stop_on_positional: bool = False
    custom_help: str | None = None
    positional_help: str | None = None
    show_positional_help: bool = False
    width: int = 76
    tab_expansion: bool = False

    @field_validator("width")
    @classmethod
    def validate_width(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("width must be a positive integer.")
        return value

    def to_options(self) -> Options:
        options = Options(self.program, self.help_string)
        for raw_option in self.options:
            options.add_option(
                raw_option.opts,
                raw_option.description,
                raw_option.to_value(),
                arg_help=raw_option.arg_help,
                group=raw_option.group,
            )
        if self.positional:
            options.parse_positional(self.positional)
        options.allow_unrecognised_options(self.allow_unrecognised)
        options.stop_on_positional(self.stop_on_positional)
        options.show_positional_help(self.show_positional_help)
        options.set_width(self.width)
        options.set_tab_expansion(self.tab_expansion)
        if self.custom_help is not None:
            options.custom_help(self.custom_help)
        if self.positional_help is not None:
            options.positional_help(self.positional_help)
        return options


def loader(file_path: Path | str) -> Options:
    """
    Load an option specification from a YAML or TOML file.

    The file should contain a dictionary with a `program` name and a list of
    `options`. Each option needs at least an `opts` specifier; `type` defaults
    to `bool`.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        Options: A fully registered `Options` instance.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or the content is invalid.
        OptionSpecError: If an option specifier is invalid or duplicated.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary with a list of options.\n"
            "Example:\n"
            "program: 'tool'\n"
            "options:\n"
            "  - opts: 'v,verbose'\n"
            "    description: 'Verbose output'"
        )

    logger.debug("Loading option specification from '%s'", path)
    return RawOptionsConfig(**raw_config).to_options()
