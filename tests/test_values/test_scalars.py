from datetime import datetime
from enum import Enum
from typing import Literal

import pytest

from flagwise import Options, char, value
from flagwise.exceptions import ArgumentIncorrectTypeError
from flagwise.values import (
    BoolValue,
    ScalarValue,
    coerce_enum,
    parse_bool,
    parse_char,
    resolve_value_type,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.parametrize("text", ["1", "t", "T", "true", "True"])
def test_parse_bool_true(text):
    assert parse_bool(text) is True


@pytest.mark.parametrize("text", ["0", "f", "F", "false", "False"])
def test_parse_bool_false(text):
    assert parse_bool(text) is False


@pytest.mark.parametrize("text", ["", "yes", "TRUE", "2"])
def test_parse_bool_invalid(text):
    with pytest.raises(ArgumentIncorrectTypeError):
        parse_bool(text)


def test_parse_char():
    assert parse_char("x") == "x"
    with pytest.raises(ArgumentIncorrectTypeError):
        parse_char("xy")
    with pytest.raises(ArgumentIncorrectTypeError):
        parse_char("")


def test_coerce_enum_by_name_and_value():
    assert coerce_enum("RED", Color) is Color.RED
    assert coerce_enum("green", Color) is Color.GREEN
    assert coerce_enum("2", Level) is Level.HIGH
    with pytest.raises(ArgumentIncorrectTypeError):
        coerce_enum("yellow", Color)


def test_value_factory_variants():
    assert isinstance(value(), BoolValue)
    assert isinstance(value(bool), BoolValue)
    assert isinstance(value(str), ScalarValue)
    assert value(int).type_name == "int64"
    assert value(char).type_name == "char"
    assert value(list[int]).is_container
    assert not value(str).is_container


def test_bool_prototype_defaults():
    prototype = value(bool)
    assert prototype.is_boolean
    assert prototype.get_default_value() == "false"
    assert prototype.get_implicit_value() == "true"
    assert not prototype.no_implicit_value().has_implicit


def test_fluent_setters_return_prototype():
    prototype = value(int)
    assert prototype.default_value("4").implicit_value("5").env("N") is prototype
    assert prototype.has_default and prototype.has_implicit and prototype.has_env
    assert prototype.get_env_var() == "N"


def test_keyword_policy():
    prototype = value(list[int], default=[1, 4], delimiter=";", env="INTS")
    assert prototype.get_default_value() == "1;4"
    assert prototype.get_delimiter() == ";"
    assert value(bool, default=True).get_default_value() == "true"


def test_clone_has_empty_storage():
    prototype = value(str)
    prototype.parse("first")
    duplicate = prototype.clone()
    assert duplicate.get() is None
    assert prototype.get() == "first"


def test_unsupported_type():
    with pytest.raises(TypeError):
        resolve_value_type(42)


def test_float_and_string_scalars():
    options = Options("floats")
    options.add_options()("double", "Double precision", value(float))("name", "", value(str))

    result = options.parse(["floats", "--double", "0.5", "--name", "x", "--name", "y"])

    assert result["double"].as_(float) == 0.5
    assert result["name"].as_(str) == "y"
    assert result.count("name") == 2


def test_enum_literal_and_datetime_options():
    options = Options("typed")
    (
        options.add_options()
        ("color", "", value(Color))
        ("mode", "", value(Literal["fast", "slow"]))
        ("when", "", value(datetime))
    )

    result = options.parse(
        ["typed", "--color=red", "--mode", "slow", "--when", "2025-01-02 03:04"]
    )

    assert result["color"].as_(Color) is Color.RED
    assert result["mode"].value == "slow"
    assert result["when"].as_(datetime) == datetime(2025, 1, 2, 3, 4)

    with pytest.raises(ArgumentIncorrectTypeError):
        options.parse(["typed", "--mode=medium"])


def test_custom_parser():
    def char_pair(text: str) -> tuple[str, str]:
        if len(text) != 3:
            raise ValueError(text)
        return text[0], text[2]

    options = Options("parser")
    options.add_options()("f,foo", "foo option", value(char_pair))

    result = options.parse(["test", "--foo", "5=4"])
    assert result.count("foo") == 1
    assert result["foo"].value == ("5", "4")

    with pytest.raises(ArgumentIncorrectTypeError) as excinfo:
        options.parse(["test", "--foo", "54"])
    assert excinfo.value.type_name == "char_pair"


def test_booleans():
    options = Options("booleans")
    (
        options.add_options()
        ("bool", "A Boolean", value(bool))
        ("debug", "Debugging", value(bool))
        ("timing", "Timing", value(bool))
        ("verbose", "Verbose", value(bool))
        ("dry-run", "Dry Run", value(bool))
        ("noExplicitDefault", "No Explicit Default", value(bool))
        ("defaultTrue", "Timing", value(bool).default_value("true"))
        ("defaultFalse", "Timing", value(bool).default_value("false"))
        ("others", "Other arguments", value(list[str]))
    )
    options.parse_positional("others")

    result = options.parse(
        [
            "booleans",
            "--bool=false",
            "--debug=true",
            "--timing",
            "--verbose=1",
            "--dry-run=0",
            "extra",
        ]
    )

    for name in ("bool", "debug", "timing", "verbose", "dry-run"):
        assert result.count(name) == 1
    for name in ("noExplicitDefault", "defaultTrue", "defaultFalse"):
        assert result.count(name) == 0

    assert result["bool"].as_(bool) is False
    assert result["debug"].as_(bool) is True
    assert result["timing"].as_(bool) is True
    assert result["verbose"].as_(bool) is True
    assert result["dry-run"].as_(bool) is False
    assert result["noExplicitDefault"].as_(bool) is False
    assert result["defaultTrue"].as_(bool) is True
    assert result["defaultFalse"].as_(bool) is False
    assert result.count("others") == 1
