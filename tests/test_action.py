from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from pr_summarizer import action
from pr_summarizer.core.errors import MissingContextError
from pr_summarizer.core.logging import ActionsFormatter, escape_command_data
from pr_summarizer.integrations.github.event_context import EventContext, PullRequestRef
from pr_summarizer.integrations.github.github_client import (
    PullRequest,
    PullRequestFile,
    PullRequestUpdate,
)

_ENV_NAMES = (
    "INPUT_GITHUB-TOKEN",
    "GITHUB_TOKEN",
    "INPUT_OPENAI-API-KEY",
    "OPENAI_API_KEY",
    "INPUT_ANTHROPIC-API-KEY",
    "ANTHROPIC_API_KEY",
    "INPUT_MODEL-PROVIDER",
    "MODEL_PROVIDER",
    "INPUT_MODEL",
    "MODEL",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path: Path):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield
    root_logger.handlers = saved_handlers
    root_logger.setLevel(saved_level)


def _write_event(tmp_path: Path, payload: dict[str, object]) -> str:
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps(payload), encoding="utf-8")
    return str(event_file)


def test_event_context_resolves_pull_request_ref(tmp_path: Path) -> None:
    event_path = _write_event(
        tmp_path,
        {"pull_request": {"number": 5}, "repository": {"full_name": "octo/repo"}},
    )
    context = EventContext.load(event_path=event_path, event_name="pull_request")
    assert context.pull_request_ref() == PullRequestRef(repo="octo/repo", number=5)


def test_event_context_falls_back_to_repository_variable(tmp_path: Path) -> None:
    event_path = _write_event(tmp_path, {"pull_request": {"number": 5}})
    context = EventContext.load(event_path=event_path, repository="octo/other")
    assert context.pull_request_ref() == PullRequestRef(repo="octo/other", number=5)


def test_event_context_without_pull_request_raises(tmp_path: Path) -> None:
    event_path = _write_event(tmp_path, {"ref": "refs/heads/main"})
    with pytest.raises(MissingContextError):
        EventContext.load(event_path=event_path, repository="octo/repo").pull_request_ref()


def test_event_context_without_event_file_raises(tmp_path: Path) -> None:
    context = EventContext.load(event_path=str(tmp_path / "missing.json"))
    assert context.payload == {}
    with pytest.raises(MissingContextError):
        context.pull_request_ref()


def test_main_fails_outside_pull_request_context(monkeypatch, tmp_path: Path, capsys) -> None:
    monkeypatch.setenv("GITHUB_EVENT_PATH", _write_event(tmp_path, {"ref": "main"}))
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

    def _fail_client(**kwargs):
        raise AssertionError("GitHub client must not be created")

    monkeypatch.setattr(action, "GitHubClient", _fail_client)

    exit_code = action.main()

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "::error::This action can only be run on pull request events" in out


def test_main_fails_without_github_token(monkeypatch, tmp_path: Path, capsys) -> None:
    monkeypatch.setenv(
        "GITHUB_EVENT_PATH",
        _write_event(tmp_path, {"pull_request": {"number": 1}, "repository": {"full_name": "o/r"}}),
    )

    assert action.main() == 1
    assert "::error::Input required and not supplied: github-token" in capsys.readouterr().out


def test_main_fails_without_provider_key(monkeypatch, tmp_path: Path, capsys) -> None:
    monkeypatch.setenv(
        "GITHUB_EVENT_PATH",
        _write_event(tmp_path, {"pull_request": {"number": 1}, "repository": {"full_name": "o/r"}}),
    )
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_API_URL", "http://127.0.0.1:9")

    assert action.main() == 1
    assert "::error::No usable provider configuration" in capsys.readouterr().out


def test_actions_formatter_renders_workflow_commands() -> None:
    formatter = ActionsFormatter()

    def record(level: int, msg: str) -> logging.LogRecord:
        return logging.LogRecord("t", level, __file__, 1, msg, None, None)

    assert formatter.format(record(logging.INFO, "plain")) == "plain"
    assert formatter.format(record(logging.WARNING, "careful")) == "::warning::careful"
    assert formatter.format(record(logging.ERROR, "50%\nfailed")) == "::error::50%25%0Afailed"


def test_escape_command_data() -> None:
    assert escape_command_data("a%b\r\nc") == "a%25b%0D%0Ac"


def _fake_client_class(*, update_status: int, updated_bodies: list[str]):
    class _FakeGitHubClient:
        def __init__(self, *, config) -> None:
            self.config = config

        def list_pull_request_files(self, *, repo: str, pr_number: int) -> list[PullRequestFile]:
            return [PullRequestFile(filename="a.py", status="added", additions=1, deletions=0)]

        def get_pull_request(self, *, repo: str, pr_number: int) -> PullRequest:
            return PullRequest(number=pr_number, body="Author text.")

        def update_pull_request_body(
            self, *, repo: str, pr_number: int, body: str
        ) -> PullRequestUpdate:
            updated_bodies.append(body)
            return PullRequestUpdate(
                status_code=update_status,
                body=body if update_status == 200 else None,
                message=None if update_status < 400 else "Server Error",
            )

        def close(self) -> None:
            return

    return _FakeGitHubClient


def _prepare_pull_request_run(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(
        "GITHUB_EVENT_PATH",
        _write_event(tmp_path, {"pull_request": {"number": 3}, "repository": {"full_name": "o/r"}}),
    )
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.setattr(
        "pr_summarizer.providers.openai_provider.OpenAIProvider.generate",
        lambda self, prompt: "- Added a.py",
    )


def test_main_succeeds_and_reports_update(monkeypatch, tmp_path: Path, capsys) -> None:
    _prepare_pull_request_run(monkeypatch, tmp_path)
    updated_bodies: list[str] = []
    monkeypatch.setattr(
        action,
        "GitHubClient",
        _fake_client_class(update_status=200, updated_bodies=updated_bodies),
    )

    assert action.main() == 0

    out = capsys.readouterr().out
    assert "Successfully updated PR description" in out
    assert "::error::" not in out
    assert updated_bodies == ["Author text.\n\n## 🤖 AI Summary\n\n- Added a.py"]


@pytest.mark.parametrize("status", [202, 500])
def test_main_warns_but_exits_zero_on_unexpected_update_status(
    monkeypatch, tmp_path: Path, capsys, status: int
) -> None:
    _prepare_pull_request_run(monkeypatch, tmp_path)
    updated_bodies: list[str] = []
    monkeypatch.setattr(
        action,
        "GitHubClient",
        _fake_client_class(update_status=status, updated_bodies=updated_bodies),
    )

    assert action.main() == 0

    out = capsys.readouterr().out
    assert f"::warning::GitHub API update returned unexpected status: {status}" in out
    assert "Successfully updated PR description" not in out
    assert "::error::" not in out
    assert len(updated_bodies) == 1
