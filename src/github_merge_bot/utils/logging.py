"""Console logging helpers built on Rich."""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the shared stderr console.

    Returns
    -------
    Console
        Rich console used for all bot logging.

    """
    global _console
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console


def log_info(message: str) -> None:
    """Log an informational message."""
    get_console().print(f"[blue]ℹ[/blue] {message}")


def log_success(message: str) -> None:
    """Log a success message."""
    get_console().print(f"[green]✓[/green] {message}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    get_console().print(f"[yellow]⚠[/yellow] {message}")


def log_error(message: str) -> None:
    """Log an error message."""
    get_console().print(f"[red]✗[/red] {message}")
