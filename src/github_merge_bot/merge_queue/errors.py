"""Exceptions raised by the merge queue."""


class MergeBotError(Exception):
    """Base class for merge bot failures that abort a cycle."""


class GitError(MergeBotError):
    """A git command failed or timed out."""


class UnresolvableReferenceError(GitError):
    """A ref or commit id could not be resolved in the local mirror."""

    def __init__(self, ref: str):
        super().__init__(f"Unable to resolve {ref!r} to a commit")
        self.ref = ref


class GitHubError(MergeBotError):
    """A GitHub API call failed or timed out."""
