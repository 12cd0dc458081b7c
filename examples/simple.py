import sys

from flagwise import Options, value
from flagwise.utils import setup_logging

setup_logging()

options = Options("simple", "A small demo of grouped options")
(
    options.add_options()
    ("d,debug", "Enable debugging")
    ("o,output", "Write results to FILE", value(str).implicit_value("a.out"), "FILE")
    ("l,level", "Compression level", value(int).default_value("6").env("SIMPLE_LEVEL"))
    ("h,help", "Print help")
)
(
    options.add_options("Input")
    ("include", "Extra include paths", value(list[str]), "DIR")
    ("files", "Input files", value(list[str]))
)
options.parse_positional("files")
options.positional_help("FILE...")

# Entry point
if __name__ == "__main__":
    result = options.parse_or_exit(sys.argv)
    if result.has("help"):
        options.render_help()
        sys.exit(0)
    print(result.as_dict())
    print("unmatched:", list(result.unmatched()))
