"""Check whether a pull request head is based on its target branch tip."""

from ..utils.logging import log_info
from .git_client import GitClient


class FreshnessChecker:
    """Compare a candidate head with the tip of its target branch.

    Parameters
    ----------
    git : GitClient
        Client for the local repository mirror.
    remote : str, optional
        Remote holding the target branch (default="origin").

    """

    def __init__(self, git: GitClient, remote: str = "origin"):
        self.git = git
        self.remote = remote

    def is_up_to_date(self, head_sha: str, base_ref: str) -> bool:
        """Check that the target branch has not moved past the head's base.

        This does not check for conflicts. It only asserts that the merge
        base of the two commits is the target branch tip.

        Parameters
        ----------
        head_sha : str
            Commit id of the candidate head.
        base_ref : str
            Target branch name.

        Returns
        -------
        bool
            True if the merge base equals the target tip.

        Raises
        ------
        UnresolvableReferenceError
            If either commit cannot be resolved after fetching.

        """
        self.git.fetch(self.remote)
        base_tip = self.git.resolve(f"{self.remote}/{base_ref}")
        head = self.git.resolve(head_sha)
        merge_base = self.git.merge_base(base_tip, head)
        up_to_date = merge_base == base_tip
        log_info(
            f"  {base_ref} at {base_tip[:12]}, merge base {merge_base[:12]}: "
            f"{'up to date' if up_to_date else 'behind'}"
        )
        return up_to_date
