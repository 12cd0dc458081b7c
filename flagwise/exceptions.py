# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Flagwise option parser.

Errors are split by the lifecycle phase they originate from:
specification errors are raised while options are being registered and always
indicate a programming error in the embedding application, while parse errors
are raised during `Options.parse()` and describe bad user input.

Every exception carries an `ErrorKind` so that callers using the result-type
interface (`Options.try_parse()`) can branch on the failure without catching.

Exception Hierarchy:
- FlagwiseError
    ├── OptionSpecError
    │   ├── OptionAlreadyExistsError
    │   └── InvalidOptionFormatError
    ├── OptionParseError
    │   ├── OptionSyntaxError
    │   ├── OptionNotExistsError
    │   ├── MissingArgumentError
    │   ├── ArgumentIncorrectTypeError
    │   └── OptionNotPresentError
    ├── OptionHasNoValueError
    └── OptionTypeMismatchError
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Identifies the failure carried by a `FlagwiseError`."""

    OPTION_EXISTS = "option_exists"
    INVALID_OPTION_FORMAT = "invalid_option_format"
    OPTION_SYNTAX = "option_syntax"
    OPTION_NOT_EXISTS = "option_not_exists"
    MISSING_ARGUMENT = "missing_argument"
    INCORRECT_TYPE = "incorrect_type"
    OPTION_NOT_PRESENT = "option_not_present"
    OPTION_HAS_NO_VALUE = "option_has_no_value"
    TYPE_MISMATCH = "type_mismatch"

    def __str__(self) -> str:
        return self.value


class FlagwiseError(Exception):
    """Base exception for the option parser."""

    kind: ErrorKind | None = None


class OptionSpecError(FlagwiseError):
    """Raised while building an option specification."""


class OptionParseError(FlagwiseError):
    """Raised while parsing an argument vector."""


class OptionAlreadyExistsError(OptionSpecError):
    """Exception raised when an option name is registered twice."""

    kind = ErrorKind.OPTION_EXISTS

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Option '{option}' already exists")


class InvalidOptionFormatError(OptionSpecError):
    """Exception raised when an option specifier has an invalid shape."""

    kind = ErrorKind.INVALID_OPTION_FORMAT

    def __init__(self, specifier: str):
        self.specifier = specifier
        super().__init__(f"Invalid option format '{specifier}'")


class OptionSyntaxError(OptionParseError):
    """Exception raised when a dash-prefixed token matches no option shape."""

    kind = ErrorKind.OPTION_SYNTAX

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Argument '{text}' starts with a - but has incorrect syntax")


class OptionNotExistsError(OptionParseError):
    """Exception raised when argv or the positional plan names an unknown option."""

    kind = ErrorKind.OPTION_NOT_EXISTS

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Option '{option}' does not exist")


class MissingArgumentError(OptionParseError):
    """Exception raised when an option that needs a value has none available."""

    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Option '{option}' is missing an argument")


class ArgumentIncorrectTypeError(OptionParseError):
    """Exception raised when a value cannot be converted to the declared type."""

    kind = ErrorKind.INCORRECT_TYPE

    def __init__(self, text: str, type_name: str = ""):
        self.text = text
        self.type_name = type_name
        expected = f": {type_name} expected" if type_name else ""
        super().__init__(f"Argument '{text}' failed to parse{expected}")


class OptionNotPresentError(OptionParseError):
    """Exception raised when a result is queried for a name that was never declared."""

    kind = ErrorKind.OPTION_NOT_PRESENT

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Option '{option}' not present")


class OptionHasNoValueError(FlagwiseError):
    """Exception raised when a value is requested from an option that holds none."""

    kind = ErrorKind.OPTION_HAS_NO_VALUE

    def __init__(self, option: str = ""):
        self.option = option
        if option:
            super().__init__(f"Option '{option}' has no value")
        else:
            super().__init__("Option has no value")


class OptionTypeMismatchError(FlagwiseError):
    """Exception raised when a value is requested as a type it was not parsed into."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, option: str, expected: str, actual: str):
        self.option = option
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Option '{option}' holds a {actual} value, not {expected}"
        )
