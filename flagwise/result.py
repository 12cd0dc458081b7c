# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parse results returned by `Options.parse()`.

- `OptionValue`: the per-option cell (occurrence count, whether the default was
  applied, and the typed value store).
- `KeyValue`: one recognized `(name, raw text)` occurrence in argv order.
- `ParseResult`: the read-only outcome of one parse pass.
- `ParseOutcome`: success-or-failure wrapper returned by `Options.try_parse()`.

Example:
    result = options.parse(["prog", "-d", "--bar=x", "a.txt"])
    result.count("debug")            # 1
    result["bar"].as_(str)           # "x"
    [kv.key for kv in result.arguments()]
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, get_args, get_origin

from flagwise.exceptions import (
    ErrorKind,
    FlagwiseError,
    OptionHasNoValueError,
    OptionNotPresentError,
    OptionTypeMismatchError,
)
from flagwise.values import (
    INTEGER_TYPES,
    CharType,
    IntegerType,
    ListValue,
    NestedListValue,
    Value,
    ValueType,
    value,
)


def _unwrap_lists(expected: Any) -> tuple[int, Any]:
    """Split `list[list[T]]` into its nesting depth and element `T`."""
    depth = 0
    while expected is list or get_origin(expected) is list:
        depth += 1
        args = get_args(expected)
        expected = args[0] if args else None
    return depth, expected


def _storage_depth(storage: Value) -> int:
    if isinstance(storage, NestedListValue):
        return 2
    if isinstance(storage, ListValue):
        return 1
    return 0


def _element_matches(expected: Any, value_type: ValueType) -> bool:
    # Custom converters declare no result type.
    if expected is None or value_type.python_type is None:
        return True
    if expected is bool:
        return value_type.name == "bool"
    # Plain `int` accepts any integer width; `bool` is not one of them.
    if expected is int:
        return value_type.name in INTEGER_TYPES
    if isinstance(expected, IntegerType):
        return value_type.name == expected.name
    if isinstance(expected, CharType):
        return value_type.name == "char"
    if isinstance(expected, ValueType):
        return value_type.name == expected.name
    if not isinstance(expected, type) or get_origin(expected):
        return True
    return issubclass(value_type.python_type, expected)


def _type_label(expected: Any) -> str:
    if isinstance(expected, type) and not get_origin(expected):
        return expected.__name__
    return str(expected)


class OptionValue:
    """The parsed state of one option."""

    def __init__(self, name: str = "") -> None:
        self._name: str = name
        self._value: Value | None = None
        self._count: int = 0
        self._default: bool = False

    def parse(self, storage: Value, text: str) -> None:
        """Record one occurrence."""
        self._ensure_value(storage)
        self._count += 1
        assert self._value is not None
        self._value.parse(text)

    def parse_default(self, storage: Value) -> None:
        """Apply the declared default without counting an occurrence."""
        self._ensure_value(storage)
        self._default = True
        assert self._value is not None
        self._value.parse_default()

    def parse_no_value(self, name: str) -> None:
        """Mark an option that was never given and has no default."""
        self._name = name

    def _ensure_value(self, storage: Value) -> None:
        if self._value is None:
            self._value = storage

    def count(self) -> int:
        return self._count

    @property
    def has_default(self) -> bool:
        """True when the value came from the declared default."""
        return self._default

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> Any:
        return self.as_()

    def as_(self, expected: Any = None) -> Any:
        """
        Return the stored value.

        Args:
            expected (Any): Optional type the caller expects (`int`, `str`,
                `list[int]`, `int8`, ...). Checked against the declared type.

        Raises:
            OptionHasNoValueError: If nothing was parsed and no default applied.
            OptionTypeMismatchError: If `expected` does not match.
        """
        if self._value is None:
            raise OptionHasNoValueError(self._name)
        if expected is not None:
            depth, element = _unwrap_lists(expected)
            actual_depth = _storage_depth(self._value)
            if depth != actual_depth or not _element_matches(
                element, self._value.value_type
            ):
                actual = self._value.type_name
                for _ in range(actual_depth):
                    actual = f"list[{actual}]"
                raise OptionTypeMismatchError(self._name, _type_label(expected), actual)
        return self._value.get()

    def __repr__(self) -> str:
        return (
            f"OptionValue(name={self._name!r}, count={self._count}, "
            f"default={self._default}, has_value={self.has_value})"
        )


@dataclass(frozen=True)
class KeyValue:
    """A recognized option occurrence and its raw text."""

    key: str
    value: str

    def as_(self, type_: Any = str) -> Any:
        """Convert the raw text with a fresh value of `type_`."""
        storage = value(type_)
        storage.parse(self.value)
        return storage.get()


class ParseResult:
    """
    Read-only result of one parse pass.

    Lookups accept any declared short or long name; both aliases of an option
    resolve to the same `OptionValue`.
    """

    def __init__(
        self,
        keys: Mapping[str, int],
        values: Mapping[int, OptionValue],
        sequential: list[KeyValue],
        unmatched: list[str],
        consumed: int,
    ) -> None:
        self._keys: Mapping[str, int] = MappingProxyType(dict(keys))
        self._values: Mapping[int, OptionValue] = MappingProxyType(dict(values))
        self._sequential: tuple[KeyValue, ...] = tuple(sequential)
        self._unmatched: tuple[str, ...] = tuple(unmatched)
        self._consumed: int = consumed

    def count(self, name: str) -> int:
        """Number of argv (or environment) occurrences; 0 for unknown names."""
        option_id = self._keys.get(name)
        if option_id is None:
            return 0
        option_value = self._values.get(option_id)
        if option_value is None:
            return 0
        return option_value.count()

    def has(self, name: str) -> bool:
        return self.count(name) != 0

    def value(self, name: str) -> OptionValue:
        """
        Return the cell for `name`.

        Raises:
            OptionNotPresentError: If `name` was never declared.
        """
        option_id = self._keys.get(name)
        if option_id is None or option_id not in self._values:
            raise OptionNotPresentError(name)
        return self._values[option_id]

    def __getitem__(self, name: str) -> OptionValue:
        return self.value(name)

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def get(self, name: str, default: Any = None) -> Any:
        """Return the typed value for `name`, or `default` if it holds none."""
        if name not in self._keys:
            return default
        option_value = self.value(name)
        if not option_value.has_value:
            return default
        return option_value.as_()

    def arguments(self) -> tuple[KeyValue, ...]:
        """Recognized argv occurrences in encounter order."""
        return self._sequential

    def unmatched(self) -> tuple[str, ...]:
        """Tokens claimed by no option and no positional slot."""
        return self._unmatched

    def consumed(self) -> int:
        """Number of argv slots the scan advanced past."""
        return self._consumed

    def keys(self) -> Iterator[str]:
        return iter(self._keys)

    def as_dict(self) -> dict[str, Any]:
        """Map each option's primary name to its value, skipping options without one."""
        primary: dict[int, str] = {}
        for name, option_id in self._keys.items():
            # Long names are longer than one character and win over short ones.
            if option_id not in primary or len(name) > len(primary[option_id]):
                primary[option_id] = name
        return {
            name: self._values[option_id].as_()
            for option_id, name in primary.items()
            if option_id in self._values and self._values[option_id].has_value
        }

    def __str__(self) -> str:
        return (
            f"ParseResult(options={len(self._values)}, "
            f"arguments={len(self._sequential)}, unmatched={len(self._unmatched)}, "
            f"consumed={self._consumed})"
        )

    def __repr__(self) -> str:
        return str(self)


@dataclass(frozen=True)
class ParseOutcome:
    """Either a `ParseResult` or the error that aborted the pass."""

    result: ParseResult | None = None
    error: FlagwiseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    def unwrap(self) -> ParseResult:
        """Return the result or raise the stored error."""
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result
