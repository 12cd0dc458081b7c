import pytest

from flagwise import Options, ParseOutcome, value
from flagwise.exceptions import ErrorKind, MissingArgumentError


@pytest.fixture
def options():
    options = Options("outcome")
    options.add_options()("n,name", "name", value(str))("count", "count", value(int))
    return options


def test_try_parse_success(options):
    outcome = options.try_parse(["outcome", "--name", "x"])

    assert isinstance(outcome, ParseOutcome)
    assert outcome.ok
    assert outcome.kind is None
    assert outcome.message == ""
    assert outcome.unwrap()["name"].as_(str) == "x"


@pytest.mark.parametrize(
    "argv, kind",
    [
        (["outcome", "--name"], ErrorKind.MISSING_ARGUMENT),
        (["outcome", "--nope"], ErrorKind.OPTION_NOT_EXISTS),
        (["outcome", "--count=ten"], ErrorKind.INCORRECT_TYPE),
        (["outcome", "--x"], ErrorKind.OPTION_SYNTAX),
    ],
)
def test_try_parse_failure(options, argv, kind):
    outcome = options.try_parse(argv)

    assert not outcome.ok
    assert outcome.result is None
    assert outcome.kind == kind
    assert outcome.message


def test_unwrap_raises_stored_error(options):
    outcome = options.try_parse(["outcome", "--name"])

    with pytest.raises(MissingArgumentError):
        outcome.unwrap()
    assert "Option 'name' is missing an argument" == outcome.message


def test_incorrect_type_message(options):
    outcome = options.try_parse(["outcome", "--count", "ten"])

    assert outcome.message == "Argument 'ten' failed to parse: integer expected"


def test_parse_or_exit(options, capsys):
    with pytest.raises(SystemExit) as excinfo:
        options.parse_or_exit(["outcome", "--nope"])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "does not exist" in captured.out


def test_parse_or_exit_success(options):
    result = options.parse_or_exit(["outcome", "-n", "y"])
    assert result["n"].as_(str) == "y"
