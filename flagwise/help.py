# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text help rendering for `Options`.

Output layout:

    usage: prog [OPTION...] positional parameters

    Group
      -a, --address ADDR  an address (default: localhost)
          --port arg      port to bind
      -q, --quiet         be quiet

The option column is as wide as the widest option line, capped at
`OPTION_LONGEST`; wider lines push their description onto the next line.
Descriptions wrap to the space left by the configured width.
"""
from __future__ import annotations

import textwrap
from typing import Collection, Iterable

from flagwise.option import HelpGroupDetails, HelpOptionDetails

OPTION_LONGEST = 30
OPTION_DESC_GAP = 2
MIN_DESCRIPTION_WIDTH = 10
DEFAULT_WIDTH = 76
TAB_SIZE = 8


def format_option(option: HelpOptionDetails) -> str:
    """Render the left column for one option, e.g. `  -p, --port PORT`."""
    result = "  "
    if option.short_name:
        result += f"-{option.short_name}"
        if option.long_name:
            result += ","
    else:
        result += "   "

    if option.long_name:
        result += f" --{option.long_name}"

    arg = option.arg_help or "arg"
    if not option.is_boolean:
        if option.has_implicit:
            result += f" [={arg}(={option.implicit_value})]"
        else:
            result += f" {arg}"
    return result


def format_description(
    option: HelpOptionDetails,
    start: int,
    allowed: int,
    tab_expansion: bool = False,
) -> str:
    """
    Render the description column for one option.

    Args:
        option (HelpOptionDetails): The option being described.
        start (int): Indent applied to continuation lines.
        allowed (int): Maximum description width per line.
        tab_expansion (bool): Expand tabs to 8-column stops.
    """
    description = option.description
    if option.has_default and (not option.is_boolean or option.default_value != "false"):
        if option.default_value:
            description += f" (default: {option.default_value})"
        else:
            description += ' (default: "")'

    if tab_expansion:
        description = description.expandtabs(TAB_SIZE)

    lines: list[str] = []
    for paragraph in description.split("\n"):
        lines.extend(
            textwrap.wrap(
                paragraph,
                width=allowed,
                expand_tabs=False,
                replace_whitespace=False,
                break_on_hyphens=False,
            )
            or [""]
        )
    while lines and not lines[-1].strip():
        lines.pop()
    return ("\n" + " " * start).join(lines)


class HelpFormatter:
    """
    Renders help text for a set of option groups.

    Args:
        program (str): Program name shown after `usage:`.
        help_string (str): Optional text printed above the usage line.
        custom_help (str): Replaces the default `[OPTION...]` usage text.
        positional_help (str): Usage text for positional parameters.
        positional (Collection[str]): Names in the positional plan.
        show_positional (bool): List positional options in their group.
        width (int): Total output width.
        tab_expansion (bool): Expand tabs in descriptions.
    """

    def __init__(
        self,
        program: str,
        help_string: str = "",
        custom_help: str = "[OPTION...]",
        positional_help: str = "positional parameters",
        positional: Collection[str] = (),
        show_positional: bool = False,
        width: int = DEFAULT_WIDTH,
        tab_expansion: bool = False,
    ) -> None:
        self.program = program
        self.help_string = help_string
        self.custom_help = custom_help
        self.positional_help = positional_help
        self.positional = frozenset(positional)
        self.show_positional = show_positional
        self.width = width
        self.tab_expansion = tab_expansion

    def usage(self) -> str:
        result = ""
        if self.help_string:
            result += f"{self.help_string}\n"
        result += f"usage: {self.program} {self.custom_help}"
        if self.positional and self.positional_help:
            result += f" {self.positional_help}"
        return result

    def _visible(self, options: Iterable[HelpOptionDetails]) -> list[HelpOptionDetails]:
        if self.show_positional:
            return list(options)
        return [option for option in options if option.long_name not in self.positional]

    def format_group(self, group: HelpGroupDetails) -> str:
        """Render one group: its title line, then one block per option."""
        result = f"{group.name}\n" if group.name else ""
        visible = self._visible(group.options)
        columns = [format_option(option) for option in visible]

        longest = min(max((len(column) for column in columns), default=0), OPTION_LONGEST)
        allowed = MIN_DESCRIPTION_WIDTH
        if self.width > allowed + longest + OPTION_DESC_GAP:
            allowed = self.width - longest - OPTION_DESC_GAP

        indent = longest + OPTION_DESC_GAP
        for option, column in zip(visible, columns):
            description = format_description(option, indent, allowed, self.tab_expansion)
            result += column
            if len(column) > longest:
                result += "\n" + " " * indent
            else:
                result += " " * (indent - len(column))
            result += description + "\n"
        return result

    def format(self, groups: dict[str, HelpGroupDetails], names: list[str]) -> str:
        """Render the usage line followed by the requested groups in order."""
        result = self.usage() + "\n\n"
        for index, name in enumerate(names):
            group = groups.get(name)
            if group is None:
                continue
            block = self.format_group(group)
            if not block:
                continue
            result += block
            if index < len(names) - 1:
                result += "\n"
        return result
