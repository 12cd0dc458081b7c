# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Options`, the user-facing builder that declares options, positional
parameters and help settings, and runs parse passes over an argument vector.

Key Features:
- Chained declaration through `OptionAdder` (`options.add_options()("v,verbose", ...)`)
- Grouped help output with wrapped descriptions
- Positional plan (`parse_positional()`), with a container last entry
  absorbing all remaining positionals
- Tolerant mode that collects unknown options instead of failing
- Stop-on-positional mode for subcommand style re-slicing of argv
- Injected environment for `env()` fallbacks
- Raising (`parse`), result-type (`try_parse`) and exiting (`parse_or_exit`)
  entry points

Example:
    options = Options("server", "Demo server")
    (
        options.add_options()
        ("d,debug", "Enable debugging")
        ("p,port", "Port", value(int).default_value("7110"), "PORT")
        ("files", "Input files", value(list[str]))
    )
    options.parse_positional("files")
    result = options.parse(["server", "-d", "a.txt", "b.txt"])
    result["files"].as_(list[str])  # ["a.txt", "b.txt"]
"""
from __future__ import annotations

import sys
from typing import Mapping, NoReturn, Sequence

from rich.markup import escape

from flagwise import values
from flagwise.console import console
from flagwise.exceptions import OptionParseError
from flagwise.help import DEFAULT_WIDTH, HelpFormatter
from flagwise.logger import logger
from flagwise.option import HelpGroupDetails, HelpOptionDetails, Option
from flagwise.option_parser import OptionParser
from flagwise.registry import OptionRegistry, parse_option_specifier
from flagwise.result import ParseOutcome, ParseResult
from flagwise.values import Value


class OptionAdder:
    """
    Callable returned by `Options.add_options()`.

    Each call declares one option in the adder's group and returns the adder,
    so declarations can be chained.
    """

    def __init__(self, options: Options, group: str = "") -> None:
        self._options = options
        self._group = group

    def __call__(
        self,
        opts: str,
        description: str = "",
        value: Value | None = None,
        arg_help: str = "",
    ) -> OptionAdder:
        self._options.add_option(
            opts, description, value, arg_help=arg_help, group=self._group
        )
        return self

    @property
    def group(self) -> str:
        return self._group


class Options:
    """
    Declarative option specification and parse entry point.

    Args:
        program (str): Program name used in the usage line.
        help_string (str): Optional text shown above the usage line.
    """

    def __init__(self, program: str, help_string: str = "") -> None:
        self.program: str = program
        self.help_string: str = help_string
        self._registry: OptionRegistry = OptionRegistry()
        self._positional: tuple[str, ...] = ()
        self._help: dict[str, HelpGroupDetails] = {}
        self._custom_help: str = "[OPTION...]"
        self._positional_help: str = "positional parameters"
        self._show_positional: bool = False
        self._allow_unrecognised: bool = False
        self._stop_on_positional: bool = False
        self._width: int = DEFAULT_WIDTH
        self._tab_expansion: bool = False

    def add_options(
        self, group: str = "", options: Sequence[Option] | None = None
    ) -> OptionAdder:
        """
        Declare options in `group`.

        With `options`, every `Option` is registered immediately. The returned
        `OptionAdder` can be called to declare more options in the same group.
        """
        adder = OptionAdder(self, group)
        for option in options or ():
            self.add_option(
                option.opts, option.description, option.value, option.arg_help, group
            )
        return adder

    def add_option(
        self,
        opts: str,
        description: str = "",
        value: Value | None = None,
        arg_help: str = "",
        group: str = "",
    ) -> Options:
        """
        Declare one option.

        Args:
            opts (str): Specifier such as `"v"`, `"verbose"` or `"v,verbose"`.
            description (str): Help description.
            value (Value | None): Value prototype; a boolean flag when omitted.
            arg_help (str): Argument name shown in help.
            group (str): Help group.

        Raises:
            InvalidOptionFormatError: If `opts` is not a valid specifier.
            OptionAlreadyExistsError: If a name is already declared.
        """
        short_name, long_name = parse_option_specifier(opts)
        prototype = value if value is not None else values.value()
        details = self._registry.add(
            short_name, long_name, description, prototype, arg_help, group
        )
        help_group = self._help.setdefault(group, HelpGroupDetails(group))
        help_group.options.append(HelpOptionDetails.from_details(details))
        return self

    def parse_positional(self, *names: str | Sequence[str]) -> Options:
        """
        Set the ordered names that receive positional arguments.

        Accepts names as separate arguments or as one sequence.
        """
        flattened: list[str] = []
        for name in names:
            if isinstance(name, str):
                flattened.append(name)
            else:
                flattened.extend(name)
        self._positional = tuple(flattened)
        return self

    def allow_unrecognised_options(self, value: bool = True) -> Options:
        self._allow_unrecognised = value
        return self

    def stop_on_positional(self, value: bool = True) -> Options:
        self._stop_on_positional = value
        return self

    def custom_help(self, help_text: str) -> Options:
        self._custom_help = help_text
        return self

    def positional_help(self, help_text: str) -> Options:
        self._positional_help = help_text
        return self

    def show_positional_help(self, value: bool = True) -> Options:
        self._show_positional = value
        return self

    def set_width(self, width: int) -> Options:
        self._width = width
        return self

    def set_tab_expansion(self, expansion: bool = True) -> Options:
        self._tab_expansion = expansion
        return self

    @property
    def registry(self) -> OptionRegistry:
        return self._registry

    @property
    def positional(self) -> tuple[str, ...]:
        return self._positional

    def parse(
        self,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ParseResult:
        """
        Parse `argv` (defaults to `sys.argv`); `argv[0]` is the program name.

        Raises:
            OptionParseError: On the first parse error.
        """
        if argv is None:
            argv = sys.argv
        parser = OptionParser(
            self._registry,
            self._positional,
            allow_unrecognised=self._allow_unrecognised,
            stop_on_positional=self._stop_on_positional,
            environ=environ,
        )
        result = parser.parse(list(argv))
        logger.debug("%s parsed: %s", self.program, result)
        return result

    def try_parse(
        self,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ParseOutcome:
        """Parse without raising; the outcome holds either the result or the error."""
        try:
            return ParseOutcome(result=self.parse(argv, environ))
        except OptionParseError as error:
            logger.debug("%s parse failed: %s", self.program, error)
            return ParseOutcome(error=error)

    def parse_or_exit(
        self,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ParseResult:
        """Parse, or print the error and exit with status 1."""
        outcome = self.try_parse(argv, environ)
        if not outcome.ok:
            self._exit_with_error(outcome.message)
        return outcome.unwrap()

    def _exit_with_error(self, message: str) -> NoReturn:
        console.print(f"[error]{escape(self.program)}: {escape(message)}[/]")
        console.print(f"[muted]{escape(self._formatter().usage())}[/]")
        sys.exit(1)

    def _formatter(self) -> HelpFormatter:
        return HelpFormatter(
            self.program,
            help_string=self.help_string,
            custom_help=self._custom_help,
            positional_help=self._positional_help,
            positional=self._positional,
            show_positional=self._show_positional,
            width=self._width,
            tab_expansion=self._tab_expansion,
        )

    def help(self, groups: Sequence[str] | None = None) -> str:
        """Render help for `groups` (all groups, sorted, when omitted)."""
        names = list(groups) if groups else self.groups()
        return self._formatter().format(self._help, names)

    def render_help(self, groups: Sequence[str] | None = None) -> None:
        """Print help through the shared console."""
        console.print(escape(self.help(groups)), end="", highlight=False)

    def groups(self) -> list[str]:
        return sorted(self._help)

    def group_help(self, group: str) -> HelpGroupDetails:
        """
        Raises:
            KeyError: If no option was declared in `group`.
        """
        return self._help[group]

    def __str__(self) -> str:
        return (
            f"Options(program='{self.program}', options={len(self._registry)}, "
            f"positional={list(self._positional)})"
        )

    def __repr__(self) -> str:
        return str(self)
