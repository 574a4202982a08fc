"""Main CLI entry point for github-merge-bot."""

import os

import click
from rich.console import Console
from rich.text import Text

from ..utils import get_version
from ..utils.logging import get_console
from .commands.run import run, tick


def print_banner(console: Console) -> None:
    """Print the startup banner.

    Parameters
    ----------
    console : Console
        Console to print to. Nothing is printed when
        ``GITHUB_MERGE_BOT_NO_BANNER`` is set.

    """
    if os.environ.get("GITHUB_MERGE_BOT_NO_BANNER"):
        return

    banner = Text()
    banner.append("  ╔══════════════════════════════════════════╗\n", style="bold cyan")
    banner.append("  ║                                          ║\n", style="bold cyan")
    banner.append("  ║   ", style="bold cyan")
    banner.append("🤖 GitHub Merge Bot", style="bold white")
    banner.append("                    ║\n", style="bold cyan")
    banner.append("  ║   ", style="bold cyan")
    banner.append("Rebase, re-approve, merge", style="cyan")
    banner.append("              ║\n", style="bold cyan")
    banner.append("  ║                                          ║\n", style="bold cyan")
    banner.append("  ╚══════════════════════════════════════════╝", style="bold cyan")

    console.print(banner)


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print the installed version and exit.

    Parameters
    ----------
    ctx : click.Context
        Current click context.
    param : click.Parameter
        The ``--version`` option.
    value : bool
        Whether the flag was given.

    """
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"github-merge-bot {get_version()}")
    ctx.exit()


@click.group(
    invoke_without_command=True,
    help="Merge queue bot that rebases, re-approves and merges labeled pull requests",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.option(
    "--no-banner",
    is_flag=True,
    help="Disable ASCII art banner",
)
@click.pass_context
def cli(ctx: click.Context, no_banner: bool) -> None:
    """GitHub Merge Bot - single-candidate merge queue.

    Configured through GITHUB_MERGE_BOT_* environment variables.

    Use 'github-merge-bot COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["no_banner"] = no_banner

    if ctx.invoked_subcommand is None:
        console = get_console()
        if not no_banner:
            print_banner(console)
        click.echo(ctx.get_help())


cli.add_command(run)
cli.add_command(tick)


if __name__ == "__main__":
    cli()
