"""Tests for environment configuration."""

from pathlib import Path

import pytest

from github_merge_bot.config import (
    DEFAULT_HOLD_MESSAGES,
    IN_PROGRESS_MSG,
    BotConfig,
)
from github_merge_bot.merge_queue.models import Credentials

BASE_ENV = {
    "GITHUB_MERGE_BOT_OWNER": "acme",
    "GITHUB_MERGE_BOT_REPO": "widgets",
    "GITHUB_MERGE_BOT_USERNAME": "merge-bot",
    "GITHUB_MERGE_BOT_PASSWORD": "tok",
}


def test_defaults():
    """Test that optional settings fall back to the bot defaults."""
    config = BotConfig.from_env(BASE_ENV)

    assert config.full_name == "acme/widgets"
    assert config.credentials == Credentials("merge-bot", "tok")
    assert config.ready_label == "readyForBot"
    assert config.reject_label == "rejectedFromQueue"
    assert config.hold_messages == DEFAULT_HOLD_MESSAGES == (IN_PROGRESS_MSG,)
    assert config.poll_interval == 30.0
    assert config.command_timeout == 300.0
    assert config.mirror_dir == Path("tmp") / "acme" / "widgets"


def test_in_progress_message_text():
    """Test that the default hold message matches GitHub's wording exactly."""
    assert IN_PROGRESS_MSG == 'Required status check "workflow" is in progress.'


@pytest.mark.parametrize("missing", sorted(BASE_ENV))
def test_missing_required_variable(missing):
    """Test that each required variable is enforced."""
    env = {k: v for k, v in BASE_ENV.items() if k != missing}
    with pytest.raises(ValueError, match=missing):
        BotConfig.from_env(env)


def test_overrides():
    """Test that every optional variable is read."""
    env = {
        **BASE_ENV,
        "GITHUB_MERGE_BOT_READY_LABEL": "queue",
        "GITHUB_MERGE_BOT_REJECT_LABEL": "dequeued",
        "GITHUB_MERGE_BOT_HOLD_MESSAGES": '["a", "Base branch was modified."]',
        "GITHUB_MERGE_BOT_POLL_INTERVAL": "2.5",
        "GITHUB_MERGE_BOT_WORKDIR": "/srv/mirror",
        "GITHUB_MERGE_BOT_COMMAND_TIMEOUT": "0",
        "GITHUB_MERGE_BOT_GIT_NAME": "Bot",
        "GITHUB_MERGE_BOT_GIT_EMAIL": "bot@example.com",
    }
    config = BotConfig.from_env(env)

    assert config.ready_label == "queue"
    assert config.reject_label == "dequeued"
    assert config.hold_messages == ("a", "Base branch was modified.")
    assert config.poll_interval == 2.5
    assert config.mirror_dir == Path("/srv/mirror")
    assert config.command_timeout is None
    assert (config.git_name, config.git_email) == ("Bot", "bot@example.com")


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', '[1, 2]'])
def test_bad_hold_messages(raw):
    """Test that the hold list must be a JSON array of strings."""
    with pytest.raises(ValueError, match="HOLD_MESSAGES"):
        BotConfig.from_env({**BASE_ENV, "GITHUB_MERGE_BOT_HOLD_MESSAGES": raw})


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_bad_poll_interval(raw):
    """Test that the poll interval must be a non-negative number."""
    with pytest.raises(ValueError, match="POLL_INTERVAL"):
        BotConfig.from_env({**BASE_ENV, "GITHUB_MERGE_BOT_POLL_INTERVAL": raw})


def test_password_not_in_repr():
    """Test that credentials never show the password."""
    config = BotConfig.from_env(BASE_ENV)
    assert "tok" not in repr(config.credentials).replace("merge-bot", "")
    assert "password" not in repr(config.credentials)
