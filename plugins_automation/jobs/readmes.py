"""Regenerate README.md for every plugin repository."""

from __future__ import annotations

from pathlib import Path

from ..analyzers import PluginAnalyzer
from ..errors import UnsafeWriteError
from ..llm import LLMRunner
from ..logging import get_logger
from ..models import RepositoryRef
from ..readme import ReadmeGenerator
from .base import JobContext, JobReport, check_setup, persist_changes, run_per_repository

README_FILENAME = "README.md"
BRANCH_PREFIX = "update-readme"
COMMIT_MESSAGE = "docs: update README with comprehensive documentation"
PR_TITLE = "docs: Update README with comprehensive documentation"
PR_BODY = """This PR updates the README.md with comprehensive documentation including:

- Proper installation instructions with bun
- Complete list of environment variables
- Usage examples for all actions
- Feature descriptions
- Development instructions

Generated by the plugins-automation script."""

logger = get_logger("jobs.readmes")


def write_readme(repo_path: Path, content: str, automation_root: Path) -> Path:
    """Write ``README.md`` into a plugin checkout, never onto the automation repo."""
    if not repo_path.is_dir():
        raise FileNotFoundError(f"Plugin directory not found: {repo_path}")
    if repo_path.resolve() == automation_root.resolve():
        raise UnsafeWriteError(f"Refusing to overwrite the automation README at {repo_path}")
    target = repo_path / README_FILENAME
    target.write_text(content, encoding="utf-8")
    logger.info("README written to %s", target)
    return target


def run_readmes(
    context: JobContext,
    *,
    analyzer: PluginAnalyzer | None = None,
    generator: ReadmeGenerator | None = None,
) -> JobReport:
    check_setup(context)
    analyzer = analyzer or PluginAnalyzer()
    if generator is None:
        generator = ReadmeGenerator(
            LLMRunner.from_config(context.config.llm),
            template_path=context.config.template_path,
            use_ai=not context.options.no_ai,
        )

    def handle(ref: RepositoryRef, repo_path: Path) -> None:
        info = analyzer.analyze(repo_path)
        readme_path = repo_path / README_FILENAME
        existing = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""
        readme = generator.generate(info, existing)
        if not readme.strip():
            raise ValueError("Generated README is empty")
        write_readme(repo_path, readme, context.config.root)
        persist_changes(
            context,
            ref,
            repo_path,
            [README_FILENAME],
            branch_prefix=BRANCH_PREFIX,
            message=COMMIT_MESSAGE,
            title=PR_TITLE,
            body=PR_BODY,
        )

    return run_per_repository(context, "readmes", handle)


__all__ = ["run_readmes", "write_readme"]
