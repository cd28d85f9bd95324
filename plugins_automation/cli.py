"""CLI entrypoints for plugins-automation jobs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict

from .config import RunOptions, load_config
from .errors import SetupError
from .jobs import (
    JobContext,
    run_agent_config,
    run_bump_versions,
    run_download_stats,
    run_fix_repo_urls,
    run_migrate_branches,
    run_readmes,
    run_release_prep,
    run_rename_scope,
)
from .logging import configure_logging, get_logger

_REPOSITORY_JOBS: Dict[str, tuple[Callable[[JobContext], object], str]] = {
    "readmes": (run_readmes, "Regenerate README.md for every plugin repository."),
    "agent-config": (
        run_agent_config,
        "Document environment variables in package.json agentConfig.",
    ),
    "rename-scope": (run_rename_scope, "Rename @elizaos-plugins/ package scopes to @elizaos/."),
    "fix-repo-urls": (run_fix_repo_urls, "Point repository.url at the canonical GitHub URL."),
    "bump-versions": (run_bump_versions, "Increment the patch or beta version of each plugin."),
    "release-prep": (
        run_release_prep,
        "Bump versions, install the npm deploy workflow and drop lockfiles.",
    ),
}


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_mode_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--test",
        dest="test_mode",
        action="store_true",
        help="Process a single repository (the first one, or --repo).",
    )
    parser.add_argument(
        "--local",
        dest="local_mode",
        action="store_true",
        help="Operate on sibling checkouts instead of cloning; no pull requests.",
    )
    parser.add_argument(
        "--repo",
        default=None,
        help="Repository name or URL to process in test mode.",
    )
    parser.add_argument(
        "--no-ai",
        dest="no_ai",
        action="store_true",
        help="Skip the language model and use deterministic templates.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugins-automation",
        description="Batch maintenance jobs for the plugin repositories of a GitHub organization.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--root",
        default=".",
        help="Automation working directory holding .env and .plugins-automation.yml.",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, (_, help_text) in _REPOSITORY_JOBS.items():
        job_parser = subparsers.add_parser(name, help=help_text)
        _add_verbose_option(job_parser, suppress_default=True)
        _add_mode_options(job_parser)

    migrate_parser = subparsers.add_parser(
        "migrate-branches",
        help="Create a branch from another branch and push it to every repository.",
    )
    _add_verbose_option(migrate_parser, suppress_default=True)
    _add_mode_options(migrate_parser)
    migrate_parser.add_argument("--target-branch", required=True, help="Branch to create.")
    migrate_parser.add_argument(
        "--source-branch",
        default=None,
        help="Branch to cut from (defaults to the configured main branch).",
    )
    migrate_parser.add_argument(
        "--set-default",
        action="store_true",
        help="Make the new branch the repository default.",
    )

    stats_parser = subparsers.add_parser(
        "download-stats",
        help="Write npm download statistics for the organization scopes to a workbook.",
    )
    _add_verbose_option(stats_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for plugins-automation jobs."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    options = RunOptions(
        test_mode=bool(getattr(args, "test_mode", False)),
        local_mode=bool(getattr(args, "local_mode", False)),
        repo=getattr(args, "repo", None),
        no_ai=bool(getattr(args, "no_ai", False)),
    )

    try:
        config = load_config(Path(args.root))
        context = JobContext(config=config, options=options)
        if args.command in _REPOSITORY_JOBS:
            job, _ = _REPOSITORY_JOBS[args.command]
            job(context)
        elif args.command == "migrate-branches":
            run_migrate_branches(
                context,
                target_branch=args.target_branch,
                source_branch=args.source_branch,
                set_default=bool(args.set_default),
            )
        elif args.command == "download-stats":
            run_download_stats(context)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except SetupError as exc:
        if options.local_mode is False and "GITHUB_TOKEN" in str(exc):
            logger.info("Tip: use --local to process local plugins without a GitHub token")
        parser.exit(1, f"plugins-automation {args.command} failed: {exc}\n")

    logger.info("%s completed", args.command)


if __name__ == "__main__":
    main(sys.argv[1:])
