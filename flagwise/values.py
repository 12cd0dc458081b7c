# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value stores and text converters for Flagwise options.

A `Value` is declared once per option as a prototype that carries the parse
policy (default, implicit value, environment binding, list delimiter). Every
parse pass works on a `clone()` of that prototype, so storage never leaks
between passes.

Variants:
- `ScalarValue`: one converted value, replaced on every occurrence.
- `BoolValue`: a scalar bool that defaults to `false` and is implicitly `true`.
- `ListValue`: splits each occurrence on a delimiter and appends the pieces.
- `NestedListValue`: appends one split inner list per occurrence.

Converters:
- `parse_integer`: sign, optional `0x` prefix and width checks via `IntegerType`.
- `parse_bool`, `parse_char`, `parse_float`, `parse_string`.
- `parse_datetime`: free-form dates via python-dateutil.
- `coerce_enum` / `coerce_literal`: Enum members and Literal choices.

Use `value()` to build a prototype from a Python type:

    value(int).default_value("42")
    value(list[int]).delimiter(";")
    value(int8).env("MY_N")
    value(list[list[float]])
"""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import EnumMeta
from functools import partial
from typing import Any, Callable, Literal, get_args, get_origin

from dateutil import parser as date_parser

from flagwise.exceptions import ArgumentIncorrectTypeError

DEFAULT_DELIMITER = ","

_U64_MAX = 2**64 - 1
_HEX_DIGITS = "0123456789abcdef"


@dataclass(frozen=True)
class IntegerType:
    """A fixed-width integer target such as `int8` or `uint32`."""

    bits: int
    signed: bool

    @property
    def name(self) -> str:
        return f"{'' if self.signed else 'u'}int{self.bits}"

    @property
    def min_value(self) -> int:
        return -(2 ** (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return 2 ** (self.bits - 1) - 1 if self.signed else 2**self.bits - 1

    def __str__(self) -> str:
        return self.name


int8 = IntegerType(8, True)
int16 = IntegerType(16, True)
int32 = IntegerType(32, True)
int64 = IntegerType(64, True)
uint8 = IntegerType(8, False)
uint16 = IntegerType(16, False)
uint32 = IntegerType(32, False)
uint64 = IntegerType(64, False)

INTEGER_TYPES: dict[str, IntegerType] = {
    integer_type.name: integer_type
    for integer_type in (int8, int16, int32, int64, uint8, uint16, uint32, uint64)
}


class CharType:
    """Marker for single-character values."""

    def __repr__(self) -> str:
        return "char"


char = CharType()


def _split_integer(text: str) -> tuple[int, bool] | None:
    """Return (magnitude, negative) or None if `text` is not an integer."""
    if not text:
        return None
    index = 0
    negative = False
    if text[0] in "+-":
        negative = text[0] == "-"
        index = 1
    if index == len(text):
        return None

    base = 10
    if text.startswith("0x", index):
        base = 16
        index += 2
        if index == len(text):
            return None

    magnitude = 0
    for digit_char in text[index:]:
        digit = _HEX_DIGITS.find(digit_char.lower()) if digit_char.isascii() else -1
        if digit < 0 or digit >= base:
            return None
        following = magnitude * base + digit
        # Accumulation never exceeds the widest supported unsigned type.
        if following > _U64_MAX:
            return None
        magnitude = following
    return magnitude, negative


def parse_integer(text: str, integer_type: IntegerType = int64) -> int:
    """
    Parse a decimal or `0x` hexadecimal integer into `integer_type`.

    The magnitude is range-checked before the sign is applied, so the exact
    signed minimum (e.g. `-128` for `int8`) is accepted.

    Raises:
        ArgumentIncorrectTypeError: On malformed text or overflow.
    """
    parsed = _split_integer(text)
    if parsed is None:
        raise ArgumentIncorrectTypeError(text, "integer")
    magnitude, negative = parsed

    if magnitude > 2**integer_type.bits - 1:
        raise ArgumentIncorrectTypeError(text, "integer")
    if not integer_type.signed:
        if negative:
            raise ArgumentIncorrectTypeError(text, "integer")
        return magnitude

    limit = -integer_type.min_value if negative else integer_type.max_value
    if magnitude > limit:
        raise ArgumentIncorrectTypeError(text, "integer")
    return -magnitude if negative else magnitude


def parse_bool(text: str) -> bool:
    """Accept `1 t T true True` and `0 f F false False`."""
    if text in ("1", "t", "T", "true", "True"):
        return True
    if text in ("0", "f", "F", "false", "False"):
        return False
    raise ArgumentIncorrectTypeError(text, "bool")


def parse_char(text: str) -> str:
    if len(text) != 1:
        raise ArgumentIncorrectTypeError(text, "char")
    return text


def parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ArgumentIncorrectTypeError(text, "float") from None


def parse_string(text: str) -> str:
    return text


def parse_datetime(text: str) -> datetime:
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        raise ArgumentIncorrectTypeError(text, "datetime") from None


def coerce_enum(text: str, enum_type: EnumMeta) -> Any:
    """
    Convert text to an Enum member.

    Tries the member name first, then the member value coerced to the type of
    the first member's value.
    """
    try:
        return enum_type[text]
    except KeyError:
        pass

    base_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(base_type(text))
    except (ValueError, TypeError):
        raise ArgumentIncorrectTypeError(text, enum_type.__name__) from None


def coerce_literal(text: str, choices: tuple[Any, ...]) -> str:
    if text not in choices:
        raise ArgumentIncorrectTypeError(text, f"one of {{{', '.join(map(str, choices))}}}")
    return text


@dataclass(frozen=True)
class ValueType:
    """
    A named converter from text to a Python value.

    Attributes:
        name (str): Type label used in error messages and help.
        convert (Callable[[str], Any]): Converts one piece of text.
        empty (Any): The element appended to a list for empty text.
        python_type (type | None): Type checked by `OptionValue.as_()`.
    """

    name: str
    convert: Callable[[str], Any]
    empty: Any = None
    python_type: type | None = None


def _wrap_callable(converter: Callable[[str], Any], name: str) -> Callable[[str], Any]:
    def _convert(text: str) -> Any:
        try:
            return converter(text)
        except ArgumentIncorrectTypeError:
            raise
        except (ValueError, TypeError) as error:
            raise ArgumentIncorrectTypeError(text, name) from error

    return _convert


def resolve_value_type(target: Any) -> ValueType:
    """
    Resolve a scalar target type into a `ValueType`.

    Handles `bool`, `int` (as `int64`), `IntegerType`, `float`, `str`, `char`,
    `datetime`, Enum classes, `Literal[...]`, ready-made `ValueType` instances
    and arbitrary callables (custom parsers).
    """
    if isinstance(target, ValueType):
        return target
    if target is bool:
        return ValueType("bool", parse_bool, False, bool)
    if target is int:
        target = int64
    if isinstance(target, IntegerType):
        return ValueType(target.name, partial(parse_integer, integer_type=target), 0, int)
    if target is float:
        return ValueType("float", parse_float, 0.0, float)
    if target is str:
        return ValueType("string", parse_string, "", str)
    if target is char or isinstance(target, CharType):
        return ValueType("char", parse_char, "\0", str)
    if target is datetime:
        return ValueType("datetime", parse_datetime, None, datetime)
    if isinstance(target, EnumMeta):
        return ValueType(target.__name__, partial(coerce_enum, enum_type=target), None, target)
    if get_origin(target) is Literal:
        return ValueType("literal", partial(coerce_literal, choices=get_args(target)), "", str)
    if callable(target):
        name = getattr(target, "__name__", type(target).__name__)
        python_type = target if isinstance(target, type) else None
        return ValueType(name, _wrap_callable(target, name), None, python_type)
    raise TypeError(f"Unsupported value type: {target!r}")


class Value(ABC):
    """
    Parse policy and typed storage for one option.

    Prototypes are configured with the fluent setters below and cloned for
    every parse pass.
    """

    def __init__(self, value_type: ValueType) -> None:
        self.value_type: ValueType = value_type
        self._default: str | None = None
        self._implicit: str | None = None
        self._env_var: str | None = None
        self._delimiter: str = DEFAULT_DELIMITER

    def default_value(self, text: str) -> Value:
        """Set the text parsed when the option is absent from argv."""
        self._default = text
        return self

    def implicit_value(self, text: str) -> Value:
        """Set the text parsed when the option is given without an argument."""
        self._implicit = text
        return self

    def no_implicit_value(self) -> Value:
        """Require an explicit argument even for boolean options."""
        self._implicit = None
        return self

    def env(self, var: str) -> Value:
        """Fall back to environment variable `var` when absent from argv."""
        self._env_var = var
        return self

    def delimiter(self, delimiter: str) -> Value:
        """Set the character that separates list elements."""
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        self._delimiter = delimiter
        return self

    @property
    def has_default(self) -> bool:
        return self._default is not None

    @property
    def has_implicit(self) -> bool:
        return self._implicit is not None

    @property
    def has_env(self) -> bool:
        return self._env_var is not None

    def get_default_value(self) -> str:
        return self._default or ""

    def get_implicit_value(self) -> str:
        return self._implicit or ""

    def get_env_var(self) -> str:
        return self._env_var or ""

    def get_delimiter(self) -> str:
        return self._delimiter

    @property
    def type_name(self) -> str:
        return self.value_type.name

    @property
    def is_boolean(self) -> bool:
        return False

    @property
    def is_container(self) -> bool:
        return False

    def parse_default(self) -> None:
        """Parse the declared default text into storage."""
        self.parse(self.get_default_value())

    def clone(self) -> Value:
        """Return a copy with the same policy and empty storage."""
        duplicate = copy.copy(self)
        duplicate._reset()
        return duplicate

    @abstractmethod
    def parse(self, text: str) -> None:
        """Convert `text` and store it."""

    @abstractmethod
    def get(self) -> Any:
        """Return the stored value."""

    @abstractmethod
    def _reset(self) -> None:
        """Drop stored values."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.type_name!r}, "
            f"default={self._default!r}, implicit={self._implicit!r}, "
            f"env={self._env_var!r})"
        )


class ScalarValue(Value):
    """A single converted value; later occurrences replace earlier ones."""

    def __init__(self, value_type: ValueType) -> None:
        super().__init__(value_type)
        self._value: Any = None

    def parse(self, text: str) -> None:
        self._value = self.value_type.convert(text)

    def get(self) -> Any:
        return self._value

    def _reset(self) -> None:
        self._value = None


class BoolValue(ScalarValue):
    """A bool that behaves as a flag: absent is false, bare is true."""

    def __init__(self) -> None:
        super().__init__(resolve_value_type(bool))
        self._default = "false"
        self._implicit = "true"

    @property
    def is_boolean(self) -> bool:
        return True


class ListValue(Value):
    """Delimited values appended across occurrences."""

    def __init__(self, value_type: ValueType) -> None:
        super().__init__(value_type)
        self._items: list[Any] = []

    @property
    def is_container(self) -> bool:
        return True

    def split(self, text: str) -> list[Any]:
        """Split and convert one occurrence; empty text yields one empty element."""
        if text == "":
            return [self.value_type.empty]
        pieces = text.split(self._delimiter)
        if len(pieces) > 1 and pieces[-1] == "":
            pieces.pop()
        return [self.value_type.convert(piece) for piece in pieces]

    def parse(self, text: str) -> None:
        self._items.extend(self.split(text))

    def get(self) -> list[Any]:
        return list(self._items)

    def _reset(self) -> None:
        self._items = []


class NestedListValue(ListValue):
    """One inner list appended per occurrence."""

    def parse(self, text: str) -> None:
        self._items.append(self.split(text))

    def get(self) -> list[list[Any]]:
        return [list(inner) for inner in self._items]


def _as_text(raw: Any, delimiter: str) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (list, tuple)):
        return delimiter.join(_as_text(item, delimiter) for item in raw)
    return str(raw)


def value(
    type_: Any = bool,
    *,
    default: Any = None,
    implicit: Any = None,
    env: str | None = None,
    delimiter: str | None = None,
) -> Value:
    """
    Build a value prototype for `type_`.

    Args:
        type_ (Any): A scalar target (see `resolve_value_type`), `list[T]` or
            `list[list[T]]`. Defaults to `bool`, which makes the option a flag.
        default (Any): Default text (non-string values are rendered as text).
        implicit (Any): Implicit text used when the option has no argument.
        env (str | None): Environment variable to fall back on.
        delimiter (str | None): List delimiter (defaults to `,`).

    Returns:
        Value: A fresh prototype.
    """
    if get_origin(type_) is list:
        (element,) = get_args(type_) or (str,)
        if get_origin(element) is list:
            (inner,) = get_args(element) or (str,)
            prototype: Value = NestedListValue(resolve_value_type(inner))
        else:
            prototype = ListValue(resolve_value_type(element))
    elif type_ is list:
        prototype = ListValue(resolve_value_type(str))
    elif type_ is bool:
        prototype = BoolValue()
    else:
        prototype = ScalarValue(resolve_value_type(type_))

    if delimiter is not None:
        prototype.delimiter(delimiter)
    if default is not None:
        prototype.default_value(_as_text(default, prototype.get_delimiter()))
    if implicit is not None:
        prototype.implicit_value(_as_text(implicit, prototype.get_delimiter()))
    if env is not None:
        prototype.env(env)
    return prototype
