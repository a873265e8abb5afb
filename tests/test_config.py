"""Tests for store configuration loading."""

import pytest

from tasktree.config import FALLBACK_OWNER, TaskTreeConfig, load_config
from tasktree.errors import ConfigError
from tasktree.task_model import TaskPriority


def test_defaults_without_config_file(tmp_path) -> None:
    config = load_config(tmp_path)
    assert config == TaskTreeConfig()
    assert config.default_priority is TaskPriority.MEDIUM
    assert config.default_priority_value == 50
    assert config.sync_before_query is True


def test_empty_config_file_means_defaults(tmp_path) -> None:
    (tmp_path / "config.yaml").write_text("")
    assert load_config(tmp_path) == TaskTreeConfig()


def test_values_are_read(tmp_path) -> None:
    (tmp_path / "config.yaml").write_text(
        "default_owner: robin\n"
        "default_priority: urgent\n"
        "default_priority_value: 200\n"
        "sync_workers: 2\n"
        "sync_before_query: false\n"
    )
    config = load_config(tmp_path)
    assert config.owner() == "robin"
    assert config.default_priority is TaskPriority.URGENT
    assert config.default_priority_value == 200
    assert config.sync_workers == 2
    assert config.sync_before_query is False


@pytest.mark.parametrize(
    "content",
    [
        "default_priority: Medium\n",  # enum values are case-sensitive
        "default_priority_value: 256\n",
        "sync_workers: 0\n",
        "unknown_key: 1\n",
        "- just\n- a list\n",
        "default_owner: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, content: str) -> None:
    (tmp_path / "config.yaml").write_text(content)
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.code == "config_error"


def test_owner_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("USER", "alex")
    assert TaskTreeConfig().owner() == "alex"


def test_owner_last_resort(monkeypatch) -> None:
    monkeypatch.delenv("USER", raising=False)
    monkeypatch.delenv("USERNAME", raising=False)

    def no_user() -> str:
        raise KeyError("no user")

    monkeypatch.setattr("tasktree.config.getpass.getuser", no_user)
    assert TaskTreeConfig().owner() == FALLBACK_OWNER


def test_default_config_round_trips_through_yaml(tmp_path) -> None:
    (tmp_path / "config.yaml").write_text(TaskTreeConfig(default_owner="sam").to_yaml())
    assert load_config(tmp_path) == TaskTreeConfig(default_owner="sam")
