"""
Flagwise Options Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.markup import escape
from rich.table import Table

from flagwise.config import loader
from flagwise.console import console
from flagwise.exceptions import FlagwiseError
from flagwise.options import Options
from flagwise.result import ParseResult
from flagwise.utils import get_program_invocation, setup_logging
from flagwise.values import value


def find_flagwise_config() -> Path | None:
    candidates = [
        Path.cwd() / "flagwise.yaml",
        Path.cwd() / "flagwise.toml",
        Path.cwd() / ".flagwise.yaml",
        Path.cwd() / ".flagwise.toml",
        Path(os.environ.get("FLAGWISE_CONFIG", "flagwise.yaml")),
        Path.home() / ".config" / "flagwise" / "flagwise.yaml",
        Path.home() / ".config" / "flagwise" / "flagwise.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def get_cli_options() -> Options:
    options = Options(
        "flagwise", "Parse a command line against an option specification file."
    )
    (
        options.add_options()
        ("c,config", "Specification file (YAML or TOML)", value(str), "FILE")
        ("v,verbose", "Enable debug logging")
        ("json", "Print the result as JSON")
        ("help-spec", "Print help generated from the specification and exit")
        ("h,help", "Print this help and exit")
    )
    options.custom_help("[OPTION...] PROGRAM [ARGS...]")
    options.stop_on_positional()
    return options


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    return {
        "options": result.as_dict(),
        "counts": {name: result.count(name) for name in result.as_dict()},
        "arguments": [[kv.key, kv.value] for kv in result.arguments()],
        "unmatched": list(result.unmatched()),
        "consumed": result.consumed(),
    }


def render_result(options: Options, result: ParseResult) -> None:
    table = Table(title=f"[title]{escape(options.program)}[/]", show_lines=False)
    table.add_column("Option", style="option")
    table.add_column("Count", justify="right")
    table.add_column("Source", style="muted")
    table.add_column("Value", style="value")

    given = {kv.key for kv in result.arguments()}
    for details in options.registry:
        cell = result[details.key]
        if cell.count():
            source = "argv" if details.key in given else "env"
        elif cell.has_default:
            source = "default"
        else:
            source = "-"
        shown = repr(cell.as_()) if cell.has_value else ""
        table.add_row(escape(details.flags), str(cell.count()), source, escape(shown))
    console.print(table)

    if result.unmatched():
        console.print(
            f"[warning]Unmatched:[/] {escape(' '.join(result.unmatched()))}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    cli_options = get_cli_options()
    try:
        cli_result = cli_options.parse(argv)
    except FlagwiseError as error:
        console.print(f"[error]flagwise: {escape(str(error))}[/]")
        return 1

    if cli_result.has("help"):
        cli_options.render_help()
        return 0
    if cli_result.has("verbose"):
        setup_logging(console_log_level=logging.DEBUG)

    config_path = cli_result.get("config") or find_flagwise_config()
    if not config_path:
        console.print(
            "[error]flagwise: no specification file found.[/] "
            f"Run '{escape(get_program_invocation())} --config FILE' "
            "or create flagwise.yaml."
        )
        return 1

    try:
        options = loader(config_path)
    except (FileNotFoundError, ValueError, FlagwiseError) as error:
        console.print(f"[error]flagwise: {escape(str(error))}[/]")
        return 1

    if cli_result.has("help-spec"):
        options.render_help()
        return 0

    remainder = argv[cli_result.consumed() :] or [options.program]
    outcome = options.try_parse(remainder)
    if not outcome.ok:
        console.print(f"[error]{escape(remainder[0])}: {escape(outcome.message)}[/]")
        return 1

    result = outcome.unwrap()
    if cli_result.has("json"):
        console.print_json(data=result_to_dict(result), default=str, highlight=False)
    else:
        render_result(options, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
