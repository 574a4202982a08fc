"""Single-candidate merge queue for GitHub pull requests."""

from .approval import decisive_verdicts, is_approved
from .errors import GitError, GitHubError, MergeBotError, UnresolvableReferenceError
from .freshness import FreshnessChecker
from .git_client import GitClient, procure
from .github_client import GitHubClient
from .merge_driver import MergeDriver
from .models import (
    Credentials,
    Disposition,
    FailureKind,
    FailureSignal,
    MergeResult,
    PullRequest,
    RebaseClean,
    RebaseConflict,
    RepoFound,
    RepoNotPresent,
    Review,
    ReviewState,
)
from .queue_manager import QueueManager
from .rejection import RejectionGate, classify
from .selector import select_candidate
from .update_driver import UpdateDriver

__all__ = [
    "QueueManager",
    "FreshnessChecker",
    "MergeDriver",
    "UpdateDriver",
    "RejectionGate",
    "GitClient",
    "GitHubClient",
    "classify",
    "decisive_verdicts",
    "is_approved",
    "procure",
    "select_candidate",
    "Credentials",
    "Disposition",
    "FailureKind",
    "FailureSignal",
    "MergeResult",
    "PullRequest",
    "RebaseClean",
    "RebaseConflict",
    "RepoFound",
    "RepoNotPresent",
    "Review",
    "ReviewState",
    "MergeBotError",
    "GitError",
    "GitHubError",
    "UnresolvableReferenceError",
]
