"""Merge a fresh candidate."""

from ..utils.logging import log_info, log_success
from .github_client import GitHubClient
from .models import FailureKind, FailureSignal, MergeResult, PullRequest
from .rejection import RejectionGate


class MergeDriver:
    """Ask GitHub to merge a candidate and report refusals to the gate."""

    def __init__(
        self, github: GitHubClient, gate: RejectionGate, owner: str, repo: str
    ):
        self.github = github
        self.gate = gate
        self.owner = owner
        self.repo = repo

    def try_merge(self, pr: PullRequest) -> MergeResult:
        """Attempt to merge ``pr``.

        Parameters
        ----------
        pr : PullRequest
            Up-to-date candidate.

        Returns
        -------
        MergeResult
            GitHub's answer. A refusal has already been passed to the gate.

        """
        log_info(f"Trying to merge pull request #{pr.number}...")
        result = self.github.merge(self.owner, self.repo, pr.number)
        if result.merged:
            log_success(f"Successfully merged pull request #{pr.number}.")
        else:
            self.gate.maybe_reject(
                pr, FailureSignal(FailureKind.MERGE_REFUSED, result.message)
            )
        return result
