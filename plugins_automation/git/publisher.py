"""Git operations for plugin checkouts, driven through the git CLI."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Sequence

from ..logging import get_logger

DEFAULT_AUTHOR_NAME = "plugins-automation"
DEFAULT_AUTHOR_EMAIL = "plugins-automation@users.noreply.github.com"


class Publisher:
    """Clones, branches, commits and pushes plugin repositories.

    The ``runner`` callable receives ``(args, cwd=, env=, capture_output=)`` and
    returns captured stdout; it raises on a non-zero exit status.
    """

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def clone(self, clone_url: str, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        self._run(["git", "clone", clone_url, str(destination)], cwd=destination.parent)
        self.logger.debug("Cloned %s into %s", clone_url, destination)
        return destination

    def create_branch(self, repo_path: Path, branch_name: str, start_point: str | None = None) -> None:
        args = ["git", "checkout", "-b", branch_name]
        if start_point:
            args.append(start_point)
        self._run(args, cwd=repo_path)

    def fetch(self, repo_path: Path, remote: str = "origin") -> None:
        self._run(["git", "fetch", remote], cwd=repo_path)

    def remote_branch_exists(self, repo_path: Path, branch_name: str, remote: str = "origin") -> bool:
        output = self._run(
            ["git", "ls-remote", "--heads", remote, branch_name],
            cwd=repo_path,
            capture_output=True,
        )
        return bool(output.strip())

    def commit(
        self,
        repo_path: Path,
        files: Sequence[Path | str],
        *,
        message: str,
    ) -> bool:
        """Stage the provided files and create a commit if changes exist."""
        for rel in (self._to_relative(repo_path, Path(file)) for file in files):
            self._run(["git", "add", "--all", "--", rel], cwd=repo_path)

        status = self._run(["git", "status", "--porcelain"], cwd=repo_path, capture_output=True)
        if not status.strip():
            self.logger.debug("Nothing to commit in %s", repo_path)
            return False

        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", DEFAULT_AUTHOR_NAME)
        env.setdefault("GIT_AUTHOR_EMAIL", DEFAULT_AUTHOR_EMAIL)
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])

        self._run(["git", "commit", "-m", message], cwd=repo_path, env=env)
        return True

    def push(self, repo_path: Path, branch_name: str, remote: str = "origin") -> None:
        self._run(["git", "push", remote, branch_name], cwd=repo_path)
        self.logger.debug("Pushed %s to %s", branch_name, remote)

    @staticmethod
    def _to_relative(repo: Path, file_path: Path) -> str:
        if not file_path.is_absolute():
            return file_path.as_posix()
        try:
            return file_path.relative_to(repo).as_posix()
        except ValueError:
            return file_path.as_posix()

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        return self._runner(list(args), cwd=cwd, env=env, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["Publisher"]
