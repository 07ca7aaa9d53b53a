"""CLI entry point for the test reporter."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from suite_reporter.config import ReporterOptions, load_options
from suite_reporter.coverage import CoverageAggregator
from suite_reporter.exit import ProcessExit
from suite_reporter.formatter import Formatter
from suite_reporter.models.coverage import CoverageSnapshot
from suite_reporter.reporter import Reporter
from suite_reporter.runners.loading import (
    available_runners,
    describe_runner,
    load_runner_manifest,
)


def resolve_paths(files: Sequence[str], cwd: Path) -> Sequence[Path]:
    """Resolve test file arguments against the working directory."""
    return [cwd / file for file in files]


def list_runners(stream: TextIO) -> None:
    """Print the installed runners, one per line."""
    for key, manifest in sorted(available_runners().items()):
        print(describe_runner(key, manifest), file=stream)


async def resolve_options(options_path: Path | None, plain: bool) -> ReporterOptions:
    """Pick the decoration options requested on the command line."""
    if plain:
        return ReporterOptions.plain()
    if options_path is not None:
        return await load_options(options_path)
    return ReporterOptions()


async def run(
    files: Sequence[str],
    runner_key: str = "replay",
    runner_config_json: str = "{}",
    options_path: Path | None = None,
    plain: bool = False,
    coverage_path: Path | None = None,
) -> int:
    """Run the test files and return exit code."""
    log = logging.getLogger("suite_reporter")
    cwd = Path.cwd()

    log.info("Loading runner: %s", runner_key)
    manifest = load_runner_manifest(runner_key)
    if manifest.info:
        log.info("%s runner: %s", runner_key, manifest.info)
    config = manifest.config_cls(**json.loads(runner_config_json))
    runner = manifest.runner_factory(config)

    snapshot = None
    if coverage_path is not None:
        log.info("Loading coverage snapshot: %s", coverage_path)
        snapshot = await asyncio.to_thread(CoverageSnapshot.from_file, coverage_path)

    reporter = Reporter(
        formatter=Formatter(options=await resolve_options(options_path, plain)),
        coverage=CoverageAggregator(cwd=cwd),
        snapshot=snapshot,
    )
    return await reporter.run(runner.run_files(resolve_paths(files, cwd)))


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run test modules and report results")
    parser.add_argument(
        "files",
        nargs="*",
        help="Test files, relative to the working directory",
    )
    parser.add_argument(
        "--runner",
        default="replay",
        help="Runner key (default: replay)",
    )
    parser.add_argument(
        "--runner-config",
        default="{}",
        help="JSON configuration for the runner",
    )
    parser.add_argument(
        "--options",
        type=Path,
        help="YAML or JSON file with output decoration options",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Disable output decoration",
    )
    parser.add_argument(
        "--coverage",
        type=Path,
        help="JSON line hit snapshot to build coverage.html from",
    )
    parser.add_argument(
        "--list-runners",
        action="store_true",
        help="List installed runners and exit",
    )

    args = parser.parse_args()

    if args.list_runners:
        list_runners(sys.stdout)
        return
    if not args.files:
        parser.error("at least one test file is required")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            files=args.files,
            runner_key=args.runner,
            runner_config_json=args.runner_config,
            options_path=args.options,
            plain=args.plain,
            coverage_path=args.coverage,
        )
    )
    ProcessExit().gracefully(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
