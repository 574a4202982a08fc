"""GitHub client for pull request operations via the gh CLI."""

import json
import os
import subprocess
from typing import Any

from ..utils.logging import log_error
from .errors import GitHubError
from .models import Credentials, MergeResult, PullRequest, Review

# Statuses GitHub uses when a merge is refused rather than broken
MERGE_REFUSED_STATUSES = (405, 409, 422)


class GitHubClient:
    """Call the GitHub REST API through ``gh api``.

    Credentials are handed to every invocation through its own environment;
    nothing is stored in gh's config.

    Parameters
    ----------
    credentials : Credentials
        Credentials for the current cycle. The password is used as GH_TOKEN.
    timeout : float or None, optional
        Seconds before a gh invocation is abandoned (default=None).

    Attributes
    ----------
    credentials : Credentials
        Credentials for the current cycle.
    timeout : float or None
        Per-invocation timeout.

    """

    def __init__(self, credentials: Credentials, timeout: float | None = None):
        """Initialize GitHub client.

        Parameters
        ----------
        credentials : Credentials
            Credentials for the current cycle.
        timeout : float or None, optional
            Seconds before a gh invocation is abandoned (default=None).

        """
        self.credentials = credentials
        self.timeout = timeout

    def _run_gh_command(
        self, cmd: list[str], input_data: Any = None
    ) -> subprocess.CompletedProcess[str]:
        """Execute gh CLI command.

        Parameters
        ----------
        cmd : list[str]
            Command and arguments to execute.
        input_data : Any, optional
            JSON-serializable request body, sent on stdin.

        Returns
        -------
        subprocess.CompletedProcess[str]
            Completed process; the caller checks the return code.

        Raises
        ------
        GitHubError
            If gh cannot be started or times out.

        """
        # Inherit environment and add GH_TOKEN
        env = os.environ.copy()
        env["GH_TOKEN"] = self.credentials.password

        try:
            return subprocess.run(
                cmd,
                input=None if input_data is None else json.dumps(input_data),
                capture_output=True,
                text=True,
                check=False,
                env=env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            command = " ".join(cmd)
            raise GitHubError(f"gh timed out after {e.timeout}s: {command}") from e
        except OSError as e:
            raise GitHubError(f"Unable to run gh: {e}") from e

    def _api(self, path: str, method: str = "GET", body: Any = None) -> str:
        cmd = ["gh", "api", "--method", method, path]
        if body is not None:
            cmd += ["--input", "-"]
        result = self._run_gh_command(cmd, input_data=body)
        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip()
            raise GitHubError(f"{method} {path} failed: {detail}")
        return result.stdout

    def _api_list(self, path: str) -> list[dict[str, Any]]:
        # One compact JSON object per line across all pages
        result = self._run_gh_command(["gh", "api", "--paginate", path, "--jq", ".[]"])
        if result.returncode != 0:
            raise GitHubError(f"GET {path} failed: {result.stderr.strip()}")
        return [json.loads(line) for line in result.stdout.splitlines() if line.strip()]

    def list_pull_requests(self, owner: str, repo: str) -> list[PullRequest]:
        """List open pull requests.

        Parameters
        ----------
        owner : str
            Repository owner.
        repo : str
            Repository name.

        Returns
        -------
        list[PullRequest]
            Open pull requests in API order.

        """
        items = self._api_list(f"repos/{owner}/{repo}/pulls?state=open&per_page=100")
        return [PullRequest.from_api(item) for item in items]

    def list_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        """List reviews of a pull request in submission order.

        Parameters
        ----------
        owner : str
            Repository owner.
        repo : str
            Repository name.
        number : int
            Pull request number.

        Returns
        -------
        list[Review]
            Reviews, oldest first.

        """
        items = self._api_list(
            f"repos/{owner}/{repo}/pulls/{number}/reviews?per_page=100"
        )
        return [Review.from_api(item, index) for index, item in enumerate(items)]

    def create_review(
        self,
        owner: str,
        repo: str,
        number: int,
        commit_id: str,
        body: str,
        event: str = "APPROVE",
    ) -> None:
        """Submit a review on a specific commit.

        Parameters
        ----------
        owner : str
            Repository owner.
        repo : str
            Repository name.
        number : int
            Pull request number.
        commit_id : str
            Commit the review applies to.
        body : str
            Review text.
        event : str, optional
            Review event (default="APPROVE").

        """
        self._api(
            f"repos/{owner}/{repo}/pulls/{number}/reviews",
            method="POST",
            body={"commit_id": commit_id, "body": body, "event": event},
        )

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        """Add labels to an issue or pull request."""
        self._api(
            f"repos/{owner}/{repo}/issues/{number}/labels",
            method="POST",
            body={"labels": labels},
        )

    def merge(self, owner: str, repo: str, number: int) -> MergeResult:
        """Attempt to merge a pull request.

        Parameters
        ----------
        owner : str
            Repository owner.
        repo : str
            Repository name.
        number : int
            Pull request number.

        Returns
        -------
        MergeResult
            ``merged`` and GitHub's message. A refused merge (405, 409 or
            422) is returned, not raised.

        Raises
        ------
        GitHubError
            If the call fails for any other reason (auth, network, 5xx).

        """
        path = f"repos/{owner}/{repo}/pulls/{number}/merge"
        result = self._run_gh_command(
            ["gh", "api", "--method", "PUT", "--include", path]
        )
        status, payload = _parse_included_response(result.stdout)

        if result.returncode == 0:
            return MergeResult(
                merged=bool(payload.get("merged", True)),
                message=payload.get("message", ""),
            )

        if status in MERGE_REFUSED_STATUSES:
            return MergeResult(merged=False, message=payload.get("message", ""))

        log_error(f"  Merge request for #{number} failed with status {status}")
        raise GitHubError(
            f"PUT {path} failed: {result.stderr.strip() or payload.get('message', '')}"
        )


def _parse_included_response(output: str) -> tuple[int | None, dict[str, Any]]:
    """Split ``gh api --include`` output into status code and JSON body.

    Parameters
    ----------
    output : str
        Raw stdout: status line, headers, blank line, body.

    Returns
    -------
    tuple[int or None, dict[str, Any]]
        HTTP status (None if unparsable) and decoded body ({} if absent).

    """
    normalized = output.replace("\r\n", "\n")
    head, _, body = normalized.partition("\n\n")
    status = None
    status_line = head.split("\n", 1)[0].split()
    if len(status_line) >= 2 and status_line[1].isdigit():
        status = int(status_line[1])

    try:
        payload = json.loads(body) if body.strip() else {}
    except json.JSONDecodeError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    return status, payload
