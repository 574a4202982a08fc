"""CLI commands that run the merge queue."""

import sys

import click

from ...config import BotConfig
from ...merge_queue import MergeBotError, QueueManager
from ...utils.logging import log_error, log_info, log_success


def _load_manager() -> QueueManager:
    try:
        config = BotConfig.from_env()
    except ValueError as e:
        log_error(f"Configuration error: {e}")
        sys.exit(1)
    log_info(f"Merge queue for {config.full_name}")
    return QueueManager(config)


@click.command()
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds between cycles (default: GITHUB_MERGE_BOT_POLL_INTERVAL or 30)",
)
@click.option(
    "--max-cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many cycles (default: run forever)",
)
def run(interval: float | None, max_cycles: int | None) -> None:
    r"""Poll the repository and process one candidate per cycle.

    Examples:
      \b
      GITHUB_MERGE_BOT_OWNER=acme GITHUB_MERGE_BOT_REPO=widgets \\
      GITHUB_MERGE_BOT_USERNAME=merge-bot GITHUB_MERGE_BOT_PASSWORD=$TOKEN \\
        github-merge-bot run --interval 30

    """
    manager = _load_manager()
    try:
        failures = manager.run_forever(interval=interval, max_cycles=max_cycles)
    except KeyboardInterrupt:
        log_info("Interrupted, stopping")
        return
    if failures:
        log_error(f"{failures} cycle(s) aborted")
        sys.exit(1)


@click.command()
def tick() -> None:
    """Run a single cycle and exit."""
    manager = _load_manager()
    try:
        outcome = manager.run_cycle()
    except MergeBotError as e:
        log_error(f"Cycle aborted: {e}")
        sys.exit(1)
    log_success(f"Cycle finished: {outcome}")
