# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Flagwise output."""
from rich.console import Console
from rich.theme import Theme

FLAGWISE_THEME = Theme(
    {
        "error": "bold #BF616A",
        "warning": "#EBCB8B",
        "option": "bold #88C0D0",
        "value": "#A3BE8C",
        "muted": "#4C566A",
        "title": "bold #81A1C1",
    }
)

console = Console(color_system="truecolor", theme=FLAGWISE_THEME)
