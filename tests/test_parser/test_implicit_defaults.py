import pytest

from flagwise import Options, value
from flagwise.exceptions import MissingArgumentError


@pytest.fixture
def implicit_options():
    options = Options("implicit")
    (
        options.add_options()
        ("o,output", "path", value(str).implicit_value("a.out"))
        ("f,flag", "flag")
    )
    return options


@pytest.mark.parametrize(
    "argv",
    [
        ["implicit", "--output"],
        ["implicit", "--output", "--flag"],
        ["implicit", "--output", "--", "tmp"],
        ["implicit", "-o"],
    ],
)
def test_implicit_value_used(implicit_options, argv):
    result = implicit_options.parse(argv)

    assert result.has("output")
    assert result["output"].as_(str) == "a.out"


def test_implicit_value_never_consumes_next_entry(implicit_options):
    result = implicit_options.parse(["implicit", "--output", "test"])

    assert result["output"].as_(str) == "a.out"
    assert result.unmatched() == ("test",)


def test_inline_value_overrides_implicit(implicit_options):
    result = implicit_options.parse(["implicit", "--output=test"])
    assert result["output"].as_(str) == "test"

def test_empty_inline_value():
    options = Options("empty_implicit")
    options.add_options()("implicit", "Has implicit", value(str).implicit_value("foo"))

    result = options.parse(["implicit", "--implicit="])

    assert result.count("implicit") == 1
    assert result["implicit"].as_(str) == ""


def test_implicit_inside_cluster_continues():
    options = Options("cluster")
    (
        options.add_options()
        ("c,color", "color", value(str).implicit_value("auto"))
        ("v", "verbose")
    )

    result = options.parse(["cluster", "-cv"])

    assert result["color"].as_(str) == "auto"
    assert result.count("v") == 1


@pytest.fixture
def no_implicit_options():
    options = Options("no_implicit")
    options.add_options()("bool", "Boolean without implicit", value(bool).no_implicit_value())
    return options


def test_bool_without_implicit_needs_value(no_implicit_options):
    with pytest.raises(MissingArgumentError):
        no_implicit_options.parse(["no_implicit", "--bool"])


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["no_implicit", "--bool=true"], True),
        (["no_implicit", "--bool=false"], False),
        (["no_implicit", "--bool", "true"], True),
        (["no_implicit", "--bool", "false"], False),
    ],
)
def test_bool_without_implicit_values(no_implicit_options, argv, expected):
    result = no_implicit_options.parse(argv)

    assert result.count("bool") == 1
    assert result["bool"].as_(bool) is expected


@pytest.fixture
def default_options():
    options = Options("defaults")
    (
        options.add_options()
        ("default", "Has default", value(int).default_value("42"))
        ("v,vector", "Default vector", value(list[int]).default_value("1,4"))
        ("name", "Empty default", value(str).default_value(""))
    )
    return options


def test_sets_defaults(default_options):
    result = default_options.parse(["defaults"])

    for name in ("default", "vector", "name"):
        assert result.count(name) == 0
        assert result[name].has_default
    assert result["default"].as_(int) == 42
    assert result["vector"].as_(list[int]) == [1, 4]
    assert result["name"].as_(str) == ""
    assert result.arguments() == ()


def test_values_override_defaults(default_options):
    result = default_options.parse(["defaults", "--default", "5", "-v", "7"])

    assert result.count("default") == 1
    assert result["default"].as_(int) == 5
    assert not result["default"].has_default
    assert result["vector"].as_(list[int]) == [7]


@pytest.fixture
def consume_options():
    options = Options("long_option")
    options.add_options()("f,first", "first option", value(str))("s,second", "second option", value(str))
    return options


@pytest.mark.parametrize(
    "argv",
    [
        ["long_option", "--first", "-s", "sv"],
        ["long_option", "--first", "--second", "sv"],
        ["long_option", "--first", "--", "-s", "sv"],
        ["long_option", "-f", "-s", "sv"],
    ],
)
def test_registered_option_is_not_consumed_as_value(consume_options, argv):
    with pytest.raises(MissingArgumentError) as excinfo:
        consume_options.parse(argv)
    assert excinfo.value.option in ("first", "f")


def test_dash_dash_inline_value(consume_options):
    result = consume_options.parse(["long_option", "--first=--", "-s", "sv"])

    assert result["first"].as_(str) == "--"
    assert result["second"].as_(str) == "sv"


def test_unregistered_option_like_value(consume_options):
    result = consume_options.parse(["long_option", "--first", "-o", "-s", "sv"])

    assert result["first"].as_(str) == "-o"
    assert result["second"].as_(str) == "sv"


def test_empty_argument_is_consumed(consume_options):
    result = consume_options.parse(["long_option", "--first", ""])

    assert result.count("first") == 1
    assert result["first"].as_(str) == ""
