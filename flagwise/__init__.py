"""
Flagwise Options Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    ArgumentIncorrectTypeError,
    ErrorKind,
    FlagwiseError,
    InvalidOptionFormatError,
    MissingArgumentError,
    OptionAlreadyExistsError,
    OptionHasNoValueError,
    OptionNotExistsError,
    OptionNotPresentError,
    OptionParseError,
    OptionSpecError,
    OptionSyntaxError,
    OptionTypeMismatchError,
)
from .option import Option
from .options import OptionAdder, Options
from .result import KeyValue, OptionValue, ParseOutcome, ParseResult
from .values import (
    char,
    int8,
    int16,
    int32,
    int64,
    uint8,
    uint16,
    uint32,
    uint64,
    value,
)

logger = logging.getLogger("flagwise")


__all__ = [
    "Options",
    "OptionAdder",
    "Option",
    "value",
    "ParseResult",
    "ParseOutcome",
    "OptionValue",
    "KeyValue",
    "char",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "ErrorKind",
    "FlagwiseError",
    "OptionSpecError",
    "OptionParseError",
    "OptionAlreadyExistsError",
    "InvalidOptionFormatError",
    "OptionSyntaxError",
    "OptionNotExistsError",
    "MissingArgumentError",
    "ArgumentIncorrectTypeError",
    "OptionNotPresentError",
    "OptionHasNoValueError",
    "OptionTypeMismatchError",
]
