"""GitHub merge bot - rebase, re-approve and merge queued pull requests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("github-merge-bot")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .config import BotConfig
from .merge_queue import (
    Credentials,
    MergeResult,
    PullRequest,
    QueueManager,
    Review,
    ReviewState,
    is_approved,
    select_candidate,
)

__all__ = [
    "BotConfig",
    "QueueManager",
    "Credentials",
    "MergeResult",
    "PullRequest",
    "Review",
    "ReviewState",
    "is_approved",
    "select_candidate",
    "__version__",
]
