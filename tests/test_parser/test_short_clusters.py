import pytest

from flagwise import Options, value
from flagwise.exceptions import MissingArgumentError


def test_short_option_with_value():
    options = Options("test_short")
    options.add_options()("a", "a short option", value(str))

    argv = ["test_short", "-a", "value"]
    result = options.parse(argv)

    assert result.count("a") == 1
    assert result["a"].as_(str) == "value"
    assert result.consumed() == len(argv)


def test_short_options_without_space():
    options = Options("test_short")
    options.add_options()("x", "a short option")("a", "a short option", value(str))

    result = options.parse(["test_short", "-xxavalue"])

    assert result.count("x") == 2
    assert result.count("a") == 1
    assert result["a"].as_(str) == "value"


def test_combined_flags_in_order():
    options = Options("cluster")
    adder = options.add_options()
    for name in "fBgoZ":
        adder(name, f"flag {name}")

    result = options.parse(["cluster", "-fBgoZ"])

    for name in "fBgoZ":
        assert result.count(name) == 1
    assert [kv.key for kv in result.arguments()] == list("fBgoZ")


def test_last_char_takes_next_entry():
    options = Options("cluster")
    options.add_options()("v", "verbose")("o,output", "output", value(str))

    result = options.parse(["cluster", "-vo", "out.txt"])

    assert result.count("v") == 1
    assert result["output"].as_(str) == "out.txt"


def test_last_char_missing_argument():
    options = Options("cluster")
    options.add_options()("v", "verbose")("o,output", "output", value(str))

    with pytest.raises(MissingArgumentError):
        options.parse(["cluster", "-vo"])


def test_positional_after_flag():
    options = Options("test")
    options.add_options()("f,flag", "boolean flag", value(bool))("param", "", value(str))
    options.parse_positional("param")

    result = options.parse(["test", "-f", "name"])

    assert result.has("flag")
    assert result.has("param")
    assert result["param"].as_(str) == "name"
