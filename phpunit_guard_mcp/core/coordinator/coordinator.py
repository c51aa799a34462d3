"""Decide what phpunit should run after each trigger and remember what failed."""

from __future__ import annotations

import logging
from typing import Protocol

from ..inspector import Inspector
from ..runner import PhpunitRunner
from .models import RunKind, RunOptions, RunResult, RunStatus

logger = logging.getLogger(__name__)


class TestRunner(Protocol):
    """Anything that can run a list of paths and report overall success."""

    def run(self, targets: list[str], options: RunOptions) -> bool: ...


class ChangeInspector(Protocol):
    """Narrows changed paths down to the ones worth running."""

    tests_path: str
    src_path: str

    def clean(self, paths: list[str]) -> list[str]: ...


class RunCoordinator:
    """
    Single authority deciding what to run and interpreting results.

    Owns the failure memory: the test paths from the last failed selective
    run, re-run alongside the next changes while keep_failed is on. Full
    runs neither read nor write it.
    """

    def __init__(
        self,
        options: RunOptions | None = None,
        runner: TestRunner | None = None,
        inspector: ChangeInspector | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            options: Run options (defaults when None).
            runner: Test runner adapter (PhpunitRunner when None).
            inspector: Change inspector (Inspector when None). Its tests_path
                and src_path are set from the options either way.
        """
        self.options = options or RunOptions()
        self.runner = runner or PhpunitRunner()
        self.inspector = inspector or Inspector(self.options.tests_path, self.options.src_path)
        self.inspector.tests_path = self.options.tests_path
        self.inspector.src_path = self.options.src_path

        self._failed_paths: list[str] = []
        self._last_result: RunResult | None = None

    @property
    def failed_paths(self) -> list[str]:
        """Copy of the failure memory, in discovery order."""
        return list(self._failed_paths)

    @property
    def last_result(self) -> RunResult | None:
        return self._last_result

    def start(self) -> RunResult:
        """Run the whole suite if all_on_start is set."""
        if not self.options.all_on_start:
            logger.info("Skipping initial run (all_on_start disabled)")
            return RunResult.skipped()
        return self.run_all()

    def run_all(self) -> RunResult:
        """Run every test under tests_path."""
        tests_path = self.options.tests_path
        logger.info(f"Running all tests in {tests_path}")

        if self.runner.run([tests_path], self.options):
            result = RunResult.passed(RunKind.FULL, [tests_path])
        else:
            result = RunResult.failed(RunKind.FULL, [tests_path])
            logger.warning("Full run failed")

        self._last_result = result
        return result

    def run_on_changes(self, paths: list[str]) -> RunResult:
        """
        Run the changed tests, plus the ones that failed last time.

        On success the failure memory is cleared; if the previous run had
        failed and all_after_pass is set, the whole suite runs afterwards and
        its result is attached as follow_up.
        """
        previous_failed = self._previous_failed()

        changed = self.inspector.clean(list(paths))
        targets = list(changed)
        if self.options.keep_failed and self._failed_paths:
            # remembered tests may have been deleted or renamed since they failed
            remembered = self.inspector.clean(self._failed_paths)
            targets.extend(p for p in remembered if p not in targets)

        if not targets:
            # phpunit without a path runs its default suite, so an empty batch
            # runs nothing and leaves the previous outcome untouched
            logger.info("No relevant test files changed")
            return RunResult.skipped()

        logger.info(f"Running: {', '.join(targets)}")

        if not self.runner.run(targets, self.options):
            self._failed_paths = targets if self.options.keep_failed else changed
            result = RunResult.failed(RunKind.SELECTIVE, targets)
            self._last_result = result
            logger.warning(f"Selective run failed, remembering {len(self._failed_paths)} path(s)")
            return result

        self._failed_paths = []
        self._last_result = RunResult.passed(RunKind.SELECTIVE, targets)

        if self.options.all_after_pass and previous_failed:
            logger.info("Previously failing tests pass, running all tests")
            follow_up = self.run_all()
            return RunResult.passed(RunKind.SELECTIVE, targets, follow_up=follow_up)

        return self._last_result

    def _previous_failed(self) -> bool:
        return (
            self._last_result is not None
            and self._last_result.status is RunStatus.FAILED
        )
