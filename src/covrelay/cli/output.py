"""User-facing CLI output.

Structured logs go to the configured log outputs; this module prints the
short human summary on stderr with Rich.
"""

from __future__ import annotations

from rich.console import Console

# Console for output
_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
}


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a status line with an optional success/error/warning marker."""
    prefix = _STYLES.get(style, "")
    _console.print(f"{' ' * indent}{prefix}{message}", highlight=False)
