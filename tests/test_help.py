import pytest

from flagwise import Options, value
from flagwise.help import format_description, format_option
from flagwise.option import HelpOptionDetails


@pytest.fixture
def options():
    options = Options("tester")
    (
        options.add_options()
        ("a,address", "server address", value(str).default_value("localhost"), "ADDR")
        ("port", "port to bind", value(int))
        ("q,quiet", "be quiet")
    )
    return options


def help_details(**overrides) -> HelpOptionDetails:
    fields = dict(
        short_name="o",
        long_name="output",
        description="output file",
        default_value="",
        implicit_value="",
        arg_help="",
        has_implicit=False,
        has_default=False,
        is_container=False,
        is_boolean=False,
    )
    fields.update(overrides)
    return HelpOptionDetails(**fields)


def test_help_layout(options):
    assert options.help() == (
        "usage: tester [OPTION...]\n"
        "\n"
        "  -a, --address ADDR  server address (default: localhost)\n"
        "      --port arg      port to bind\n"
        "  -q, --quiet         be quiet\n"
    )


def test_help_string_and_custom_usage(options):
    options.help_string = "A tester"
    options.custom_help("[FLAGS]")

    assert options.help().startswith("A tester\nusage: tester [FLAGS]\n\n")


def test_format_option_variants():
    assert format_option(help_details()) == "  -o, --output arg"
    assert format_option(help_details(arg_help="FILE")) == "  -o, --output FILE"
    assert format_option(help_details(short_name="")) == "      --output arg"
    assert format_option(help_details(long_name="")) == "  -o arg"
    assert format_option(help_details(is_boolean=True)) == "  -o, --output"
    assert (
        format_option(help_details(has_implicit=True, implicit_value="a.out"))
        == "  -o, --output [=arg(=a.out)]"
    )


def test_format_description_defaults():
    assert format_description(help_details(), 0, 80) == "output file"
    assert (
        format_description(help_details(has_default=True, default_value="x"), 0, 80)
        == "output file (default: x)"
    )
    assert (
        format_description(help_details(has_default=True, default_value=""), 0, 80)
        == 'output file (default: "")'
    )
    assert (
        format_description(
            help_details(is_boolean=True, has_default=True, default_value="false"), 0, 80
        )
        == "output file"
    )
    assert (
        format_description(
            help_details(is_boolean=True, has_default=True, default_value="true"), 0, 80
        )
        == "output file (default: true)"
    )


def test_description_wraps_with_indent():
    details = help_details(description="one two three four five six")
    wrapped = format_description(details, 4, 10)

    assert wrapped == "one two\n    three four\n    five six"


def test_tab_expansion():
    details = help_details(description="a\tb")
    assert format_description(details, 0, 80, tab_expansion=True) == "a       b"
    assert format_description(details, 0, 80) == "a\tb"


def test_long_option_column_moves_description():
    options = Options("wide")
    options.add_options()("a-very-long-option-name-indeed", "desc", value(str), "VALUE")

    lines = options.help().splitlines()

    assert lines[2] == "      --a-very-long-option-name-indeed VALUE"
    assert lines[3] == " " * 32 + "desc"


def test_positional_hidden_unless_requested():
    options = Options("pos")
    options.add_options()("v,verbose", "verbose")("files", "input files", value(list[str]))
    options.parse_positional("files")

    text = options.help()
    assert "usage: pos [OPTION...] positional parameters" in text
    assert "--files" not in text

    options.show_positional_help().positional_help("FILE...")
    text = options.help()
    assert "usage: pos [OPTION...] FILE..." in text
    assert "--files arg" in text


def test_groups_sorted_and_selectable():
    options = Options("groups")
    options.add_options("Zeta")("z", "zeta")
    options.add_options("Alpha")("a", "alpha")

    assert options.groups() == ["Alpha", "Zeta"]
    assert options.group_help("Alpha").options[0].short_name == "a"

    text = options.help(["Zeta"])
    assert "Zeta\n  -z" in text
    assert "Alpha" not in text

    full = options.help()
    assert full.index("Alpha") < full.index("Zeta")
    with pytest.raises(KeyError):
        options.group_help("Missing")


def test_width_is_respected():
    options = Options("narrow")
    options.set_width(40)
    options.add_options()("q,quiet", "suppress every message that is not an error")

    lines = options.help().splitlines()[2:]
    assert all(len(line) <= 40 for line in lines)
    assert len(lines) > 1


def test_render_help(options, capsys):
    options.render_help()
    assert "--address ADDR" in capsys.readouterr().out
