"""Watch a PHP project and run phpunit whenever its files change."""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from .constants import DEBOUNCE_SECONDS
from .core.coordinator import RunOptions
from .core.runner import PhpunitRunner
from .core.watcher import ChangeBatcher, create_observer
from .services import GuardReport, GuardService, ServiceResult

logger = logging.getLogger(__name__)


def report(result: ServiceResult[GuardReport]) -> None:
    """Log the outcome of a trigger; a failed run only ends the current step."""
    if not result.success:
        logger.error(f"Guard error: {result.error.message}")
        return

    guard_report = result.data
    if guard_report.task_has_failed:
        logger.warning("Task failed - fix the issues and save to retry")
        if guard_report.failed_paths:
            logger.warning(f"Remembered failures: {', '.join(guard_report.failed_paths)}")
    elif guard_report.run.ran:
        logger.info("All good")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run phpunit when PHP files change")
    parser.add_argument("--tests-path", help="Tests folder to watch and run (default: current directory)")
    parser.add_argument("--src-path", help="Source folder whose changes run the matching tests (default: current directory)")
    parser.add_argument("--command", help="phpunit executable (default: phpunit)")
    parser.add_argument("--cli", help="Extra arguments passed to phpunit")
    parser.add_argument(
        "--no-all-on-start", dest="all_on_start", action="store_false",
        help="Do not run all tests on start"
    )
    parser.add_argument(
        "--no-all-after-pass", dest="all_after_pass", action="store_false",
        help="Do not run all tests after failing tests pass again"
    )
    parser.add_argument(
        "--no-keep-failed", dest="keep_failed", action="store_false",
        help="Do not re-run failed tests with the next changes"
    )
    parser.add_argument(
        "--debounce", type=float, default=DEBOUNCE_SECONDS,
        help="Seconds to wait for more changes before running"
    )
    return parser


def options_from_args(args: argparse.Namespace) -> dict:
    """Only pass options the user actually gave, so defaults stay in RunOptions."""
    options = {
        "all_on_start": args.all_on_start,
        "all_after_pass": args.all_after_pass,
        "keep_failed": args.keep_failed,
    }
    for name in ("tests_path", "src_path", "command", "cli"):
        value = getattr(args, name)
        if value is not None:
            options[name] = value
    return options


def watched_roots(options: RunOptions) -> list[str]:
    """The source folder, plus the tests folder when it lies outside it."""
    src, tests = Path(options.src_path).resolve(), Path(options.tests_path).resolve()
    if tests == src or src in tests.parents:
        return [options.src_path]
    return [options.src_path, options.tests_path]


def watch(service: GuardService, debounce: float = DEBOUNCE_SECONDS) -> None:
    """Run the start action, then dispatch change batches until interrupted."""
    roots = watched_roots(service.coordinator.options)
    batcher = ChangeBatcher(lambda paths: report(service.on_change(paths)), debounce=debounce)
    observer = create_observer(batcher, *roots)

    report(service.start())

    observer.start()
    logger.info(f"Watching {', '.join(roots)} for changes...")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Stopping watcher...")
    finally:
        batcher.cancel()
        observer.stop()
        observer.join()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    service = GuardService(runner=PhpunitRunner(echo_output=True))
    configured = service.configure(options_from_args(args))
    if not configured.success:
        logger.error(configured.error.message)
        return 2

    watch(service, debounce=args.debounce)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
