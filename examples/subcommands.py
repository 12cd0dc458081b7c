"""Dispatches to a subcommand using the stop-on-positional cut point."""
import sys

from flagwise import Options, value

root = Options("tool")
root.add_options()("v,verbose", "Verbose output")("C,directory", "Run in DIR", value(str), "DIR")
root.custom_help("[OPTION...] COMMAND [ARGS...]").stop_on_positional()

build = Options("tool build")
build.add_options()("j,jobs", "Parallel jobs", value(int).default_value("1"))("release", "Release build")
build.add_options()("targets", "Targets to build", value(list[str]))
build.parse_positional("targets")

COMMANDS = {"build": build}

if __name__ == "__main__":
    argv = sys.argv
    result = root.parse_or_exit(argv)
    remainder = argv[result.consumed() :]
    if not remainder or remainder[0] not in COMMANDS:
        root.render_help()
        sys.exit(1)
    command = COMMANDS[remainder[0]]
    sub_result = command.parse_or_exit(remainder)
    print("root:", result.as_dict())
    print(f"{remainder[0]}:", sub_result.as_dict())
