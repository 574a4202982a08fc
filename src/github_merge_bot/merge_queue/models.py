"""Data models for the merge queue."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ReviewState(str, Enum):
    """State of a pull request review as reported by GitHub."""

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewState":
        """Map a raw API state onto the enum, falling back to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_decisive(self) -> bool:
        """Whether this state counts towards the approval verdict."""
        return self in (ReviewState.APPROVED, ReviewState.CHANGES_REQUESTED)


class FailureKind(str, Enum):
    """Where a failure signal came from."""

    MERGE_REFUSED = "merge_refused"
    REBASE_CONFLICT = "rebase_conflict"
    REBASE_FAILED = "rebase_failed"


class Disposition(str, Enum):
    """What the rejection gate does with a failure signal."""

    HOLD = "hold"
    REJECT = "reject"


@dataclass(frozen=True)
class Credentials:
    """Username and password (or token) for GitHub and the git remote.

    Attributes
    ----------
    username : str
        GitHub login used for git pushes.
    password : str
        Password or personal access token. Excluded from ``repr``.

    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of an open pull request fetched once per cycle.

    Attributes
    ----------
    number : int
        Pull request number.
    created_at : datetime
        Creation timestamp.
    labels : frozenset[str]
        Label names on the pull request.
    head_ref : str
        Source branch name.
    head_sha : str
        Commit id of the source branch tip.
    base_ref : str
        Target branch name.
    author_id : int or None
        GitHub user id of the author.

    """

    number: int
    created_at: datetime
    labels: frozenset[str]
    head_ref: str
    head_sha: str
    base_ref: str
    author_id: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        """Build a snapshot from a GitHub REST pull request payload."""
        return cls(
            number=int(data["number"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            labels=frozenset(label["name"] for label in data.get("labels") or []),
            head_ref=data["head"]["ref"],
            head_sha=data["head"]["sha"],
            base_ref=data["base"]["ref"],
            author_id=(data.get("user") or {}).get("id"),
        )


@dataclass(frozen=True)
class Review:
    """A single review on a pull request.

    Attributes
    ----------
    author_id : int or None
        GitHub user id of the reviewer.
    state : ReviewState
        Review state.
    submitted_index : int
        Position of the review in submission order.

    """

    author_id: int | None
    state: ReviewState
    submitted_index: int

    @classmethod
    def from_api(cls, data: dict[str, Any], index: int) -> "Review":
        """Build a review from a GitHub REST review payload."""
        return cls(
            author_id=(data.get("user") or {}).get("id"),
            state=ReviewState.parse(data.get("state")),
            submitted_index=index,
        )


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a merge attempt."""

    merged: bool
    message: str


@dataclass(frozen=True)
class RebaseClean:
    """Rebase finished; HEAD now points at ``new_head_sha``."""

    new_head_sha: str


@dataclass(frozen=True)
class RebaseConflict:
    """Rebase stopped; ``status`` carries the diagnostic from git."""

    status: str
    conflicting: bool = True


RebaseOutcome = RebaseClean | RebaseConflict


@dataclass(frozen=True)
class RepoFound:
    """A usable local mirror exists at ``path``."""

    path: Path


@dataclass(frozen=True)
class RepoNotPresent:
    """No local mirror exists at ``path`` yet."""

    path: Path


ProcureResult = RepoFound | RepoNotPresent


@dataclass(frozen=True)
class FailureSignal:
    """A failure reported to the rejection gate.

    Attributes
    ----------
    kind : FailureKind
        Which operation produced the failure.
    message : str
        Diagnostic text, matched verbatim against the hold list.

    """

    kind: FailureKind
    message: str

    def __str__(self) -> str:
        return self.message
