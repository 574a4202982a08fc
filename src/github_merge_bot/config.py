"""Environment-driven configuration for github-merge-bot."""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .merge_queue.models import Credentials

ENV_PREFIX = "GITHUB_MERGE_BOT_"

DEFAULT_READY_LABEL = "readyForBot"
DEFAULT_REJECT_LABEL = "rejectedFromQueue"
IN_PROGRESS_MSG = 'Required status check "workflow" is in progress.'
DEFAULT_HOLD_MESSAGES = (IN_PROGRESS_MSG,)
DEFAULT_POLL_INTERVAL = 30.0
DEFAULT_COMMAND_TIMEOUT = 300.0
DEFAULT_GIT_NAME = "github-merge-bot"
DEFAULT_GIT_EMAIL = "github-merge-bot@users.noreply.github.com"


@dataclass(frozen=True)
class BotConfig:
    """Settings for one repository's merge queue.

    Attributes
    ----------
    owner : str
        Repository owner.
    repo : str
        Repository name.
    credentials : Credentials
        Credentials for the GitHub API and git pushes.
    ready_label : str
        Label that puts a pull request in the queue.
    reject_label : str
        Label that removes a pull request from the queue.
    hold_messages : tuple[str, ...]
        Failure messages that hold a candidate instead of rejecting it.
    poll_interval : float
        Seconds to sleep between cycles.
    workdir : Path or None
        Location of the local repository mirror. Defaults to
        ``tmp/<owner>/<repo>``.
    command_timeout : float or None
        Timeout for each git or gh invocation, in seconds.
    git_name : str
        Committer name used for rebases.
    git_email : str
        Committer email used for rebases.

    """

    owner: str
    repo: str
    credentials: Credentials
    ready_label: str = DEFAULT_READY_LABEL
    reject_label: str = DEFAULT_REJECT_LABEL
    hold_messages: tuple[str, ...] = DEFAULT_HOLD_MESSAGES
    poll_interval: float = DEFAULT_POLL_INTERVAL
    workdir: Path | None = None
    command_timeout: float | None = DEFAULT_COMMAND_TIMEOUT
    git_name: str = DEFAULT_GIT_NAME
    git_email: str = DEFAULT_GIT_EMAIL

    @property
    def full_name(self) -> str:
        """Repository in owner/repo format."""
        return f"{self.owner}/{self.repo}"

    @property
    def mirror_dir(self) -> Path:
        """Directory holding the local repository mirror."""
        return self.workdir or Path("tmp") / self.owner / self.repo

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BotConfig":
        """Load configuration from ``GITHUB_MERGE_BOT_*`` variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Environment to read. Defaults to ``os.environ``.

        Returns
        -------
        BotConfig
            Parsed configuration.

        Raises
        ------
        ValueError
            If a required variable is missing or a value is malformed.

        """
        env = os.environ if environ is None else environ

        def required(name: str) -> str:
            value = env.get(ENV_PREFIX + name)
            if not value:
                raise ValueError(f"{ENV_PREFIX}{name} environment variable not set")
            return value

        owner = required("OWNER")
        repo = required("REPO")
        credentials = Credentials(
            username=required("USERNAME"),
            password=required("PASSWORD"),
        )

        workdir = env.get(ENV_PREFIX + "WORKDIR")
        timeout = _parse_float(env, "COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT)

        return cls(
            owner=owner,
            repo=repo,
            credentials=credentials,
            ready_label=env.get(ENV_PREFIX + "READY_LABEL") or DEFAULT_READY_LABEL,
            reject_label=env.get(ENV_PREFIX + "REJECT_LABEL") or DEFAULT_REJECT_LABEL,
            hold_messages=_parse_hold_messages(env),
            poll_interval=_parse_float(env, "POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            workdir=Path(workdir) if workdir else None,
            # 0 disables the timeout
            command_timeout=timeout or None,
            git_name=env.get(ENV_PREFIX + "GIT_NAME") or DEFAULT_GIT_NAME,
            git_email=env.get(ENV_PREFIX + "GIT_EMAIL") or DEFAULT_GIT_EMAIL,
        )


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{ENV_PREFIX}{name} must not be negative, got {raw!r}")
    return value


def _parse_hold_messages(env: Mapping[str, str]) -> tuple[str, ...]:
    raw = env.get(ENV_PREFIX + "HOLD_MESSAGES")
    if not raw:
        return DEFAULT_HOLD_MESSAGES
    try:
        messages = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"{ENV_PREFIX}HOLD_MESSAGES must be a JSON array of strings: {e}"
        ) from e
    if not isinstance(messages, list) or not all(
        isinstance(m, str) for m in messages
    ):
        raise ValueError(f"{ENV_PREFIX}HOLD_MESSAGES must be a JSON array of strings")
    return tuple(messages)
