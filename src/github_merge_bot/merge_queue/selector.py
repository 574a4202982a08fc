"""Merge candidate selection."""

from collections.abc import Iterable

from .models import PullRequest


def is_queued(pr: PullRequest, ready_label: str, reject_label: str) -> bool:
    """Whether ``pr`` is ready for the bot and not rejected from the queue."""
    return ready_label in pr.labels and reject_label not in pr.labels


def select_candidate(
    pull_requests: Iterable[PullRequest],
    ready_label: str,
    reject_label: str,
) -> PullRequest | None:
    """Pick the pull request to act on this cycle.

    Eligible pull requests are ordered by creation time and the newest one
    wins. Equal timestamps keep their input order, so the later one wins.

    Parameters
    ----------
    pull_requests : Iterable[PullRequest]
        Open pull requests.
    ready_label : str
        Label that puts a pull request in the queue.
    reject_label : str
        Label that excludes a pull request, even if it is ready.

    Returns
    -------
    PullRequest or None
        The candidate, or None if nothing is eligible.

    """
    eligible = [
        pr for pr in pull_requests if is_queued(pr, ready_label, reject_label)
    ]
    if not eligible:
        return None
    return sorted(eligible, key=lambda pr: pr.created_at)[-1]
