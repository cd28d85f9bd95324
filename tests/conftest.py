from __future__ import annotations

import logging
from pathlib import Path

import pytest

from plugins_automation.config import AutomationConfig, RunOptions
from plugins_automation.jobs import JobContext
from plugins_automation.logging import NOISY_LOGGERS
from tests._fixtures.fake_publisher import FakePublisher
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo configure_logging() so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("plugins_automation")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _clear_llm_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL", "GITHUB_TOKEN"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_context(tmp_path: Path, repo_builder: RepoBuilder):
    """Build a JobContext whose local plugins live under the repo builder's base directory."""

    def factory(*, publisher=None, github=None, token=None, **options) -> JobContext:
        config = AutomationConfig(
            root=tmp_path / "automation",
            local_root=repo_builder.base,
            temp_dir=tmp_path / "clones",
            github_token=token,
            request_delay=0,
            download_delay=0,
        )
        return JobContext(
            config=config,
            options=RunOptions(**options),
            publisher=publisher or FakePublisher(),
            github=github,
            clock=lambda: 1700000000.0,
        )

    return factory
