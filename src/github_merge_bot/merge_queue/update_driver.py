"""Bring a stale candidate up to date by rebasing and force-pushing."""

from ..utils.logging import log_error, log_info, log_success
from .approval import is_approved
from .errors import GitError
from .git_client import GitClient
from .github_client import GitHubClient
from .models import (
    Credentials,
    FailureKind,
    FailureSignal,
    PullRequest,
    RebaseClean,
)
from .rejection import RejectionGate

REAPPROVE_MESSAGE = "Automatically re-approving after updating this pull request."


class UpdateDriver:
    """Rebase a candidate onto its target branch and keep its approval.

    Parameters
    ----------
    github : GitHubClient
        Client for reviews.
    git : GitClient
        Client for the local repository mirror.
    gate : RejectionGate
        Gate that receives rebase failures.
    owner : str
        Repository owner.
    repo : str
        Repository name.
    credentials : Credentials
        Credentials for the force-push.
    remote : str, optional
        Remote to fetch from and push to (default="origin").

    """

    def __init__(
        self,
        github: GitHubClient,
        git: GitClient,
        gate: RejectionGate,
        owner: str,
        repo: str,
        credentials: Credentials,
        remote: str = "origin",
    ):
        self.github = github
        self.git = git
        self.gate = gate
        self.owner = owner
        self.repo = repo
        self.credentials = credentials
        self.remote = remote

    def update(self, pr: PullRequest) -> str | None:
        """Rebase ``pr`` onto its target branch.

        No merge happens here; the rebased pull request is merged on a later
        cycle once it is fresh.

        Parameters
        ----------
        pr : PullRequest
            Stale candidate.

        Returns
        -------
        str or None
            New head commit id, or None if the rebase failed.

        """
        log_info(
            f"Updating pull request #{pr.number} by rebasing its head branch "
            f"on {pr.base_ref}..."
        )
        # Approval must be read before the history rewrite invalidates it
        reviews = self.github.list_reviews(self.owner, self.repo, pr.number)
        approved = is_approved(reviews)

        self.git.fetch(self.remote)
        # A rebase interrupted by an earlier cycle would block this one
        self.git.abort_rebase()
        self.git.checkout(pr.head_sha)
        try:
            outcome = self.git.rebase(f"{self.remote}/{pr.base_ref}")
        except GitError:
            self.git.abort_rebase()
            raise

        if not isinstance(outcome, RebaseClean):
            log_error(
                f"Unable to rebase pull request #{pr.number}: "
                f"rebase result status: {outcome.status}"
            )
            kind = (
                FailureKind.REBASE_CONFLICT
                if outcome.conflicting
                else FailureKind.REBASE_FAILED
            )
            try:
                self.gate.maybe_reject(pr, FailureSignal(kind, outcome.status))
            finally:
                self.git.abort_rebase()
            return None

        new_head = outcome.new_head_sha
        try:
            self.git.force_push(
                self.remote, f"HEAD:refs/heads/{pr.head_ref}", self.credentials
            )
        except GitError:
            self.git.abort_rebase()
            raise
        log_success(f"  Pushed {new_head[:12]} to {pr.head_ref}")

        if approved:
            log_info(f"Re-approving pull request #{pr.number} after updating...")
            self.github.create_review(
                self.owner,
                self.repo,
                pr.number,
                commit_id=new_head,
                body=REAPPROVE_MESSAGE,
                event="APPROVE",
            )
        return new_head
