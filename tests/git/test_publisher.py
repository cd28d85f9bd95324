"""Tests for the git publisher."""

from __future__ import annotations

from pathlib import Path

from plugins_automation.git import Publisher


def _recorder(status: str = " M README.md\n", ls_remote: str = ""):
    calls = []

    def runner(args, cwd, env=None, capture_output=False):
        calls.append((list(args), Path(cwd), env, capture_output))
        if list(args) == ["git", "status", "--porcelain"]:
            return status
        if list(args[:2]) == ["git", "ls-remote"]:
            return ls_remote
        return ""

    return calls, runner


def test_publisher_adds_and_commits_files(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    readme = repo / "README.md"
    readme.write_text("content", encoding="utf-8")
    calls, runner = _recorder()

    result = Publisher(runner=runner).commit(repo, [readme], message="docs: add readme")

    assert result is True
    assert calls[0][0] == ["git", "add", "--all", "--", "README.md"]
    assert calls[0][1] == repo
    assert calls[1][0] == ["git", "status", "--porcelain"]
    assert calls[2][0] == ["git", "commit", "-m", "docs: add readme"]
    env = calls[2][2]
    assert env["GIT_AUTHOR_NAME"]
    assert env["GIT_COMMITTER_EMAIL"]


def test_publisher_skips_commit_without_changes(tmp_path: Path) -> None:
    calls, runner = _recorder(status="")

    result = Publisher(runner=runner).commit(tmp_path, ["package.json"], message="chore: x")

    assert result is False
    assert [call[0][1] for call in calls] == ["add", "status"]


def test_publisher_branch_push_and_clone(tmp_path: Path) -> None:
    calls, runner = _recorder()
    publisher = Publisher(runner=runner)
    destination = tmp_path / "temp" / "plugin-x"

    publisher.clone("https://github.com/org/plugin-x.git", destination)
    publisher.create_branch(destination, "update-readme-1")
    publisher.create_branch(destination, "1.x", "origin/main")
    publisher.push(destination, "update-readme-1")

    assert calls[0][0] == ["git", "clone", "https://github.com/org/plugin-x.git", str(destination)]
    assert calls[0][1] == destination.parent
    assert destination.parent.is_dir()
    assert calls[1][0] == ["git", "checkout", "-b", "update-readme-1"]
    assert calls[2][0] == ["git", "checkout", "-b", "1.x", "origin/main"]
    assert calls[3][0] == ["git", "push", "origin", "update-readme-1"]


def test_publisher_remote_branch_exists(tmp_path: Path) -> None:
    _, present = _recorder(ls_remote="abc123\trefs/heads/1.x\n")
    _, absent = _recorder(ls_remote="")

    assert Publisher(runner=present).remote_branch_exists(tmp_path, "1.x") is True
    assert Publisher(runner=absent).remote_branch_exists(tmp_path, "1.x") is False
