"""Tests for the CLI entry point."""

import json
import logging

import pytest
from click.testing import CliRunner

from prdescriber_cli.cli import main
from prdescriber_core.models import RunResult

PR_PAYLOAD = {
    "number": 7,
    "title": "Fix bug",
    "user": {"login": "octocat"},
    "base": {"sha": "base"},
    "head": {"sha": "head"},
    "html_url": "https://github.com/owner/repo/pull/7",
}


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The run command reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def action_env(tmp_path, monkeypatch):
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({"action": "opened", "pull_request": PR_PAYLOAD}))
    output_file = tmp_path / "output"
    output_file.write_text("")

    for key in ("ANTHROPIC_API_KEY", "GITHUB_TOKEN", "PR_DESCRIBER_CONFIG"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.setenv("INPUT_ANTHROPIC-API-KEY", "ant")
    monkeypatch.setenv("INPUT_GITHUB-TOKEN", "tok")
    monkeypatch.setenv("INPUT_IGNORE-PATTERNS", "dist/**")
    monkeypatch.chdir(tmp_path)
    return output_file


class TestRunCommand:
    def test_success_sets_output(self, action_env, mocker):
        run = mocker.patch(
            "prdescriber_core.describer.run_describe",
            return_value=RunResult(status="succeeded", description="## Summary\nDone", pr_number=7),
        )

        result = CliRunner().invoke(main, ["run"])

        assert result.exit_code == 0, result.output
        assert "description<<" in action_env.read_text()
        assert "## Summary\nDone\n" in action_env.read_text()
        event = run.call_args.args[0]
        assert event.event_name == "pull_request"
        assert event.pull_request["number"] == 7
        assert run.call_args.kwargs["inputs"]["ignore-patterns"] == "dist/**"
        assert run.call_args.kwargs["shadow"] is False

    def test_failure_exits_non_zero(self, action_env, mocker):
        mocker.patch(
            "prdescriber_core.describer.run_describe",
            return_value=RunResult(status="failed", error="Failed to generate diff: Not Found"),
        )

        result = CliRunner().invoke(main, ["run"])

        assert result.exit_code == 1
        assert "Failed to generate diff: Not Found" in result.output
        assert action_env.read_text() == ""

    def test_skip_exits_zero_without_output(self, action_env, mocker):
        mocker.patch("prdescriber_core.describer.run_describe", return_value=RunResult(status="skipped"))

        result = CliRunner().invoke(main, ["run"])

        assert result.exit_code == 0
        assert action_env.read_text() == ""

    def test_shadow_flag_is_forwarded(self, action_env, mocker):
        run = mocker.patch(
            "prdescriber_core.describer.run_describe",
            return_value=RunResult(status="succeeded", description="d", pr_number=7),
        )

        CliRunner().invoke(main, ["run", "--shadow"])

        assert run.call_args.kwargs["shadow"] is True

    def test_config_file_is_loaded(self, action_env, mocker, tmp_path):
        (tmp_path / ".pr-describer.yml").write_text("max_tokens: 777\n")
        run = mocker.patch(
            "prdescriber_core.describer.run_describe",
            return_value=RunResult(status="skipped"),
        )

        CliRunner().invoke(main, ["run"])

        assert run.call_args.kwargs["file_config"]["max_tokens"] == 777

    def test_invalid_config_file_is_a_usage_error(self, action_env, mocker, tmp_path):
        (tmp_path / ".pr-describer.yml").write_text("max_tokens: lots\n")
        run = mocker.patch("prdescriber_core.describer.run_describe")

        result = CliRunner().invoke(main, ["run"])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
        assert "max_tokens must be a positive integer" in result.output
        run.assert_not_called()

    def test_end_to_end_with_mocked_apis(self, action_env, mocker):
        repo = mocker.MagicMock()
        repo.url = "https://api.github.com/repos/owner/repo"
        repo.requester.requestJsonAndCheck.return_value = ({}, {"data": "diff --git a/a.py b/a.py\n+x\n"})
        repo.get_pull.return_value.get_commits.return_value = []
        mocker.patch("prdescriber_core.describer.get_repo", return_value=repo)
        client = mocker.patch("prdescriber_core.providers.anthropic.Anthropic").return_value
        client.messages.create.return_value = mocker.MagicMock(
            content=[mocker.MagicMock(type="text", text="Generated description")],
            usage=mocker.MagicMock(input_tokens=3, output_tokens=2, cache_read_input_tokens=0),
        )

        result = CliRunner().invoke(main, ["run"])

        assert result.exit_code == 0, result.output
        repo.get_pull.return_value.edit.assert_called_once_with(body="Generated description")
        assert "Generated description" in action_env.read_text()


def test_version_option():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "pr-describer" in result.output
