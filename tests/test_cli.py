"""CLI parser and dispatch tests."""

from __future__ import annotations

import pytest

from plugins_automation import cli
from plugins_automation.cli import _build_parser
from plugins_automation.errors import SetupError


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "readmes"])
    assert args.verbose is True
    assert args.command == "readmes"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["bump-versions", "--verbose"])
    assert args.verbose is True
    assert args.command == "bump-versions"


def test_cli_mode_flags() -> None:
    args = _build_parser().parse_args(
        ["agent-config", "--test", "--local", "--repo", "plugin-x", "--no-ai"]
    )
    assert args.test_mode is True
    assert args.local_mode is True
    assert args.repo == "plugin-x"
    assert args.no_ai is True


def test_cli_migrate_branches_arguments() -> None:
    args = _build_parser().parse_args(
        ["migrate-branches", "--target-branch", "1.x", "--source-branch", "0.x", "--set-default"]
    )
    assert args.target_branch == "1.x"
    assert args.source_branch == "0.x"
    assert args.set_default is True


def test_cli_migrate_branches_requires_target() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["migrate-branches"])


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_main_dispatches_repository_job_with_options(monkeypatch, tmp_path) -> None:
    seen = []
    monkeypatch.setitem(cli._REPOSITORY_JOBS, "rename-scope", (seen.append, "help"))

    cli.main(["--root", str(tmp_path), "rename-scope", "--local", "--test"])

    (context,) = seen
    assert context.options.local_mode is True
    assert context.options.test_mode is True
    assert context.config.root == tmp_path.resolve()


def test_main_dispatches_migrate_branches(monkeypatch, tmp_path) -> None:
    calls = []
    monkeypatch.setattr(
        cli, "run_migrate_branches", lambda context, **kwargs: calls.append(kwargs)
    )

    cli.main(["--root", str(tmp_path), "migrate-branches", "--target-branch", "1.x"])

    assert calls == [{"target_branch": "1.x", "source_branch": None, "set_default": False}]


def test_main_exits_non_zero_without_token(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--root", str(tmp_path), "readmes"])

    assert excinfo.value.code == 1
    assert "plugins-automation readmes failed: GITHUB_TOKEN" in capsys.readouterr().err


def test_main_exits_non_zero_when_stats_fail(monkeypatch, tmp_path) -> None:
    def fail(context):
        raise SetupError("Error generating npm download statistics: offline")

    monkeypatch.setattr(cli, "run_download_stats", fail)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--root", str(tmp_path), "download-stats"])

    assert excinfo.value.code == 1
