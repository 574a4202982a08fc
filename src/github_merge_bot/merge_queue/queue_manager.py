"""Queue manager for running merge queue poll cycles."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Literal

from ..utils.logging import log_error, log_info
from .freshness import FreshnessChecker
from .git_client import GitClient, github_clone_url
from .github_client import GitHubClient
from .merge_driver import MergeDriver
from .rejection import RejectionGate
from .selector import select_candidate
from .update_driver import UpdateDriver

if TYPE_CHECKING:
    from ..config import BotConfig

CycleOutcome = Literal["NO_CANDIDATE", "MERGED", "NOT_MERGED", "UPDATED", "NOT_UPDATED"]


class QueueManager:
    """Run the merge queue for one repository, one candidate per cycle.

    Cycles are sequential. The local mirror is only touched by the cycle
    that is running, so no locking is needed.

    Parameters
    ----------
    config : BotConfig
        Repository, credentials and queue settings.
    github : GitHubClient, optional
        Hosting client. Built from ``config`` if omitted.
    git : GitClient, optional
        Mirror client. The mirror is loaded or cloned on first use if omitted.

    Attributes
    ----------
    config : BotConfig
        Queue settings.
    github : GitHubClient
        Client for GitHub operations.

    """

    def __init__(
        self,
        config: BotConfig,
        github: GitHubClient | None = None,
        git: GitClient | None = None,
    ):
        """Initialize queue manager.

        Parameters
        ----------
        config : BotConfig
            Repository, credentials and queue settings.
        github : GitHubClient, optional
            Hosting client. Built from ``config`` if omitted.
        git : GitClient, optional
            Mirror client. Loaded or cloned on first use if omitted.

        """
        self.config = config
        self.github = github or GitHubClient(
            config.credentials, timeout=config.command_timeout
        )
        self._git = git

    @property
    def git(self) -> GitClient:
        """Client for the local mirror, cloning it the first time."""
        if self._git is None:
            self._git = GitClient.load_or_clone(
                github_clone_url(self.config.owner, self.config.repo),
                self.config.mirror_dir,
                credentials=self.config.credentials,
                git_name=self.config.git_name,
                git_email=self.config.git_email,
                timeout=self.config.command_timeout,
            )
        return self._git

    def run_cycle(self) -> CycleOutcome:
        """Select one candidate and merge or update it.

        Returns
        -------
        CycleOutcome
            What happened to the candidate.

        Raises
        ------
        MergeBotError
            If GitHub or git fails; nothing is retried within the cycle.

        """
        owner, repo = self.config.owner, self.config.repo
        log_info(f"Checking pull requests in {self.config.full_name}...")

        pr = select_candidate(
            self.github.list_pull_requests(owner, repo),
            self.config.ready_label,
            self.config.reject_label,
        )
        if pr is None:
            log_info("No pull requests found to merge or update.")
            return "NO_CANDIDATE"

        print(f"\n{'#' * 70}")
        print(f"# Candidate: {self.config.full_name}#{pr.number}")
        print(f"# Branch: {pr.head_ref} → {pr.base_ref}")
        print(f"{'#' * 70}\n")

        gate = RejectionGate(
            self.github,
            owner,
            repo,
            self.config.reject_label,
            self.config.hold_messages,
        )
        git = self.git

        if FreshnessChecker(git).is_up_to_date(pr.head_sha, pr.base_ref):
            result = MergeDriver(self.github, gate, owner, repo).try_merge(pr)
            return "MERGED" if result.merged else "NOT_MERGED"

        driver = UpdateDriver(
            self.github, git, gate, owner, repo, self.config.credentials
        )
        new_head = driver.update(pr)
        return "UPDATED" if new_head else "NOT_UPDATED"

    def run_forever(
        self,
        interval: float | None = None,
        max_cycles: int | None = None,
    ) -> int:
        """Run cycles with a fixed delay between them.

        A cycle always finishes before the next one starts. A failing cycle
        is logged and the loop carries on.

        Parameters
        ----------
        interval : float, optional
            Seconds to sleep after each cycle. Defaults to the configured
            poll interval.
        max_cycles : int, optional
            Stop after this many cycles. Runs forever if None.

        Returns
        -------
        int
            Number of cycles that raised.

        """
        delay = self.config.poll_interval if interval is None else interval
        cycles = 0
        failures = 0

        while max_cycles is None or cycles < max_cycles:
            try:
                outcome = self.run_cycle()
                log_info(f"  → Cycle finished: {outcome}")
            except Exception as e:
                failures += 1
                log_error(f"Cycle aborted: {e}")
            cycles += 1

            if max_cycles is None or cycles < max_cycles:
                time.sleep(delay)

        return failures
