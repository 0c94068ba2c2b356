"""Shared console and formatting utilities."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from secretdesk.config import LogFormat, get_settings
from secretdesk.logging import configure_logging

# Force colors unless explicitly disabled (NO_COLOR standard)
no_color = os.environ.get("NO_COLOR", "").lower() in ("1", "true", "yes")

console = Console(
    highlight=False,
    force_terminal=not no_color,
    no_color=no_color,
)


def success(msg: str) -> None:
    """Print success message."""
    console.print(f"  [green]✓[/green] {msg}")


def error(msg: str) -> None:
    """Print error message."""
    console.print(f"  [red]✗[/red] {msg}")


def info(msg: str) -> None:
    """Print info message."""
    console.print(f"  [dim]→[/dim] {msg}")


def dim(msg: str) -> None:
    """Print dimmed text."""
    console.print(f"  [dim]{msg}[/dim]")


def error_panel(msg: str, *, title: str = "Failed") -> None:
    """Print a styled error panel."""
    from rich.box import ROUNDED
    from rich.panel import Panel
    from rich.text import Text

    lines: list[Text] = []
    line = Text()
    line.append("✗ ", style="red bold")
    line.append(title, style="red")
    lines.append(line)
    lines.append(Text())
    lines.append(Text(msg, style="dim"))

    panel = Panel(
        Text("\n").join(lines),
        border_style="red dim",
        box=ROUNDED,
        padding=(0, 1),
        expand=False,
    )
    console.print(panel)


def nl() -> None:
    """Print newline."""
    console.print()


def setup_logging(verbose: bool = False) -> None:
    """Configure clean logging for the secretdesk CLI."""
    settings = get_settings()
    debug = verbose or settings.debug

    if settings.log_format == LogFormat.JSON:
        configure_logging(log_format=LogFormat.JSON, debug=debug)
        return

    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    # Set up rich handler for clean output
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
        keywords=[],
    )

    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("secretdesk").setLevel(level)
