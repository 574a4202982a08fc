"""Local repository mirror operations via the git executable."""

import subprocess
from pathlib import Path
from urllib.parse import quote, urlsplit, urlunsplit

from ..utils.logging import log_info
from .errors import GitError, UnresolvableReferenceError
from .models import (
    Credentials,
    ProcureResult,
    RebaseClean,
    RebaseConflict,
    RebaseOutcome,
    RepoFound,
    RepoNotPresent,
)


def github_clone_url(owner: str, repo: str) -> str:
    """Return the HTTPS clone URL of a GitHub repository."""
    return f"https://github.com/{owner}/{repo}.git"


def procure(directory: Path) -> ProcureResult:
    """Look for an existing mirror without touching the network.

    Parameters
    ----------
    directory : Path
        Expected location of the working copy.

    Returns
    -------
    ProcureResult
        ``RepoFound`` if ``directory`` holds a git working copy,
        ``RepoNotPresent`` otherwise.

    """
    if (directory / ".git").exists():
        return RepoFound(directory)
    return RepoNotPresent(directory)


def authenticated_url(url: str, credentials: Credentials) -> str:
    """Embed credentials in an HTTPS remote URL for a single push."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    username = quote(credentials.username, safe="")
    password = quote(credentials.password, safe="")
    userinfo = f"{username}:{password}"
    return urlunsplit(
        (parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment)
    )


class GitClient:
    """Run git commands against one local working copy.

    Parameters
    ----------
    repo_dir : Path
        Working copy directory.
    git_name : str, optional
        Committer name for rewritten commits.
    git_email : str, optional
        Committer email for rewritten commits.
    timeout : float or None, optional
        Seconds before a git invocation is abandoned (default=None).

    """

    def __init__(
        self,
        repo_dir: Path,
        git_name: str = "github-merge-bot",
        git_email: str = "github-merge-bot@users.noreply.github.com",
        timeout: float | None = None,
    ):
        self.repo_dir = Path(repo_dir)
        self.git_name = git_name
        self.git_email = git_email
        self.timeout = timeout

    @classmethod
    def load_or_clone(
        cls,
        url: str,
        directory: Path,
        credentials: Credentials | None = None,
        **kwargs,
    ) -> "GitClient":
        """Open the mirror in ``directory``, cloning ``url`` first if absent.

        Parameters
        ----------
        url : str
            Remote URL used as ``origin``.
        directory : Path
            Location of the mirror.
        credentials : Credentials, optional
            Used for the clone only; the stored remote stays credential-free.
        **kwargs
            Passed to the constructor.

        Returns
        -------
        GitClient
            Client bound to the mirror.

        """
        client = cls(directory, **kwargs)
        found = procure(client.repo_dir)
        if isinstance(found, RepoFound):
            return client

        log_info("Repo not found locally, cloning...")
        found.path.parent.mkdir(parents=True, exist_ok=True)
        source = authenticated_url(url, credentials) if credentials else url
        try:
            client._run_git(
                ["clone", source, str(found.path.resolve())], cwd=found.path.parent
            )
        except GitError as e:
            if credentials:
                raise GitError(str(e).replace(credentials.password, "***")) from None
            raise
        if credentials:
            client._run_git(["remote", "set-url", "origin", url])
        return client

    def _run_git(
        self, args: list[str], cwd: Path | None = None, check: bool = True
    ) -> subprocess.CompletedProcess[str]:
        """Execute a git command in the working copy.

        Parameters
        ----------
        args : list[str]
            Arguments after ``git``.
        cwd : Path, optional
            Directory to run in. Defaults to the working copy.
        check : bool, optional
            Raise on a non-zero exit (default=True).

        Returns
        -------
        subprocess.CompletedProcess[str]
            Completed process.

        Raises
        ------
        GitError
            If git fails with ``check`` set, cannot start, or times out.

        """
        cmd = [
            "git",
            "-c",
            f"user.name={self.git_name}",
            "-c",
            f"user.email={self.git_email}",
            *args,
        ]
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd or self.repo_dir,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {e.timeout}s") from e
        except OSError as e:
            raise GitError(f"Unable to run git: {e}") from e

        if check and result.returncode != 0:
            raise GitError(
                f"git {args[0]} failed ({result.returncode}): "
                f"{result.stderr.strip() or result.stdout.strip()}"
            )
        return result

    def fetch(self, remote: str = "origin") -> None:
        """Fetch all branches from ``remote``."""
        self._run_git(["fetch", "--prune", remote])

    def checkout(self, commit: str) -> None:
        """Check out ``commit`` on a detached HEAD."""
        self._run_git(["checkout", "--force", "--detach", commit])

    def resolve(self, ref: str) -> str:
        """Resolve a ref or commit id to a full commit id.

        Raises
        ------
        UnresolvableReferenceError
            If ``ref`` is unknown or not a commit.

        """
        result = self._run_git(
            ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], check=False
        )
        if result.returncode != 0:
            raise UnresolvableReferenceError(ref)
        return result.stdout.strip()

    def head_sha(self) -> str:
        """Commit id of HEAD."""
        return self.resolve("HEAD")

    def merge_base(self, first: str, second: str) -> str:
        """Return the best common ancestor of two commits.

        Raises
        ------
        GitError
            If the commits share no history.

        """
        result = self._run_git(["merge-base", first, second], check=False)
        if result.returncode != 0:
            raise GitError(f"No merge base between {first} and {second}")
        return result.stdout.strip()

    def rebase_in_progress(self) -> bool:
        """Whether a stopped rebase is waiting in the working copy."""
        git_dir = self.repo_dir / ".git"
        return any(
            (git_dir / name).exists() for name in ("rebase-merge", "rebase-apply")
        )

    def rebase(self, upstream: str) -> RebaseOutcome:
        """Rebase the current HEAD onto ``upstream``.

        Returns
        -------
        RebaseOutcome
            ``RebaseClean`` with the new HEAD, or ``RebaseConflict`` with a
            status line describing why git stopped.

        """
        result = self._run_git(["rebase", upstream], check=False)
        if result.returncode == 0:
            return RebaseClean(self.head_sha())

        output = "\n".join(part for part in (result.stdout, result.stderr) if part)
        conflict_lines = [
            line.strip() for line in output.splitlines() if line.startswith("CONFLICT")
        ]
        if conflict_lines:
            return RebaseConflict(status="CONFLICTS: " + "; ".join(conflict_lines))
        if self.rebase_in_progress():
            return RebaseConflict(
                status="STOPPED: " + _first_line(output), conflicting=False
            )
        return RebaseConflict(
            status="FAILED: " + _first_line(output), conflicting=False
        )

    def abort_rebase(self) -> None:
        """Abort a stopped rebase, if there is one."""
        if self.rebase_in_progress():
            self._run_git(["rebase", "--abort"])

    def remote_url(self, remote: str = "origin") -> str:
        """URL configured for ``remote``."""
        return self._run_git(["remote", "get-url", remote]).stdout.strip()

    def force_push(self, remote: str, refspec: str, credentials: Credentials) -> None:
        """Force-push ``refspec`` to ``remote`` using one-shot credentials.

        The credentials go into the push URL for this invocation only; the
        stored remote configuration is left unchanged.

        """
        url = self.remote_url(remote)
        if url.startswith(("http://", "https://")):
            url = authenticated_url(url, credentials)
        try:
            self._run_git(["push", "--force", url, refspec])
        except GitError as e:
            raise GitError(str(e).replace(credentials.password, "***")) from None


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return "unknown error"
