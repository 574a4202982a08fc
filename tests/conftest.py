"""Shared fixtures for merge queue tests."""

import shutil
import subprocess
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from github_merge_bot.config import BotConfig
from github_merge_bot.merge_queue.models import (
    Credentials,
    PullRequest,
    Review,
    ReviewState,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)


def make_pr(
    number: int,
    labels: tuple[str, ...] = ("readyForBot",),
    created_offset: int = 0,
    head_sha: str = "a" * 40,
    head_ref: str = "feature",
    base_ref: str = "master",
) -> PullRequest:
    """Build a pull request snapshot created ``created_offset`` minutes in."""
    return PullRequest(
        number=number,
        created_at=BASE_TIME + timedelta(minutes=created_offset),
        labels=frozenset(labels),
        head_ref=head_ref,
        head_sha=head_sha,
        base_ref=base_ref,
        author_id=1,
    )


def make_reviews(*entries: tuple[int, str]) -> list[Review]:
    """Build reviews from (author_id, state) pairs in submission order."""
    return [
        Review(author_id=author, state=ReviewState(state), submitted_index=index)
        for index, (author, state) in enumerate(entries)
    ]


def run_git(cwd: Path, *args: str) -> str:
    """Run git as a test author and return stripped stdout."""
    result = subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def commit_file(work: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it and return the new commit id."""
    (work / name).write_text(content)
    run_git(work, "add", name)
    run_git(work, "commit", "-m", message)
    return run_git(work, "rev-parse", "HEAD")


@pytest.fixture
def credentials():
    """Test credentials."""
    return Credentials(username="merge-bot", password="s3cret-token")


@pytest.fixture
def config(tmp_path, credentials):
    """Queue configuration for acme/widgets."""
    return BotConfig(
        owner="acme",
        repo="widgets",
        credentials=credentials,
        workdir=tmp_path / "mirror",
        command_timeout=60,
    )


@pytest.fixture
def remote_repo(tmp_path):
    """Bare remote with one commit on master, plus a working clone.

    Returns
    -------
    tuple[Path, Path]
        (bare remote, working clone used to create commits).

    """
    bare = tmp_path / "remote.git"
    run_git(tmp_path, "init", "--bare", "--initial-branch=master", str(bare))
    work = tmp_path / "work"
    run_git(tmp_path, "clone", str(bare), str(work))
    run_git(work, "checkout", "-B", "master")
    commit_file(work, "README.md", "hello\n", "Initial commit")
    run_git(work, "push", "origin", "master")
    return bare, work
