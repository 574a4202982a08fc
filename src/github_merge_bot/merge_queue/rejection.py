"""Decide whether a failed candidate is held or rejected from the queue."""

from collections.abc import Iterable

from ..utils.logging import log_info, log_warning
from .github_client import GitHubClient
from .models import Disposition, FailureKind, FailureSignal, PullRequest

# Used when a signal is not on the hold list
DEFAULT_DISPOSITIONS: dict[FailureKind, Disposition] = {
    FailureKind.MERGE_REFUSED: Disposition.REJECT,
    FailureKind.REBASE_CONFLICT: Disposition.REJECT,
    FailureKind.REBASE_FAILED: Disposition.REJECT,
}


def classify(signal: FailureSignal, hold_messages: Iterable[str]) -> Disposition:
    """Map a failure signal to HOLD or REJECT.

    Parameters
    ----------
    signal : FailureSignal
        Failure to classify.
    hold_messages : Iterable[str]
        Messages known to be transient. Matching is exact.

    Returns
    -------
    Disposition
        ``HOLD`` if the message is on the hold list, otherwise the default
        for the signal's kind.

    """
    if signal.message in set(hold_messages):
        return Disposition.HOLD
    return DEFAULT_DISPOSITIONS[signal.kind]


class RejectionGate:
    """Label candidates that will not succeed without human intervention.

    Parameters
    ----------
    github : GitHubClient
        Client used to add the reject label.
    owner : str
        Repository owner.
    repo : str
        Repository name.
    reject_label : str
        Label that removes a pull request from the queue.
    hold_messages : Iterable[str]
        Failure messages that only hold the candidate.

    """

    def __init__(
        self,
        github: GitHubClient,
        owner: str,
        repo: str,
        reject_label: str,
        hold_messages: Iterable[str],
    ):
        self.github = github
        self.owner = owner
        self.repo = repo
        self.reject_label = reject_label
        self.hold_messages = tuple(hold_messages)

    def maybe_reject(self, pr: PullRequest, signal: FailureSignal) -> Disposition:
        """Reject ``pr`` from the queue unless ``signal`` is transient.

        Parameters
        ----------
        pr : PullRequest
            Candidate that failed.
        signal : FailureSignal
            What went wrong.

        Returns
        -------
        Disposition
            What was done.

        """
        log_info(f"Checking if should reject #{pr.number}, status: {signal}")
        disposition = classify(signal, self.hold_messages)
        if disposition is Disposition.HOLD:
            log_info(f"IN PROGRESS waiting for #{pr.number}")
            return disposition

        log_warning(f"Rejecting #{pr.number} from the queue ({signal.kind.value})")
        self.github.add_labels(self.owner, self.repo, pr.number, [self.reject_label])
        return disposition
