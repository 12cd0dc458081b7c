import pytest
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

from flagwise import Options, value
from flagwise.completer import OptionsCompleter


@pytest.fixture
def completer():
    options = Options("tool")
    (
        options.add_options()
        ("v,verbose", "verbose")
        ("version", "print version")
        ("o,output", "output file", value(str))
        ("c,color", "color", value(str).implicit_value("auto"))
    )
    return OptionsCompleter(options)


def texts(completer, text):
    return [c.text for c in completer.get_completions(Document(text), None)]


def test_suggestions(completer):
    assert completer.suggestions() == [
        "--verbose",
        "--version",
        "--output",
        "--color",
        "-v",
        "-o",
        "-c",
    ]


def test_empty_input_lists_everything(completer):
    results = list(completer.get_completions(Document(""), None))
    assert all(isinstance(c, Completion) for c in results)
    assert "--output" in [c.text for c in results]
    assert "-v" in [c.text for c in results]


def test_unique_prefix(completer):
    assert texts(completer, "--out") == ["--output"]


def test_common_prefix_inserted_first(completer):
    assert texts(completer, "--ve") == ["--ver", "--verbose", "--version"]


def test_no_suggestions_for_plain_words(completer):
    assert texts(completer, "file") == []


def test_no_suggestions_while_value_expected(completer):
    assert texts(completer, "--output ") == []
    assert texts(completer, "-vo ") == []


def test_suggestions_after_implicit_option(completer):
    assert "--verbose" in texts(completer, "--color ")


def test_no_suggestions_after_dash_dash(completer):
    assert texts(completer, "-- --") == []


def test_unbalanced_quotes(completer):
    assert texts(completer, '"--out') == []
