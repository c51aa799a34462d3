"""Guard service.

Holds one RunCoordinator for the lifetime of a session and exposes its
triggers (start, change, full run) as ServiceResult-returning calls.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, field

# Import existing domain models
from ..core.coordinator import ChangeInspector, RunCoordinator, RunOptions, RunResult, TestRunner
from ..core.runner import PhpunitRunner, PhpunitRunResult
from .base import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardReport:
    """What a trigger did: the coordinator's decision plus phpunit's last report."""

    run: RunResult
    failed_paths: list[str] = field(default_factory=list)
    phpunit: PhpunitRunResult | None = None

    @property
    def task_has_failed(self) -> bool:
        return self.run.task_has_failed

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "run": self.run.to_dict(),
            "failed_paths": self.failed_paths,
            "phpunit": self.phpunit.to_dict() if self.phpunit else None,
        }


class GuardService:
    """Configure a run coordinator once, then route triggers to it."""

    def __init__(
        self,
        runner: TestRunner | None = None,
        inspector: ChangeInspector | None = None,
    ):
        """
        Args:
            runner: Test runner shared by every coordinator this service builds.
            inspector: Change inspector (a fresh Inspector per coordinator when None).
        """
        self.runner = runner or PhpunitRunner()
        self.inspector = inspector
        self.coordinator: RunCoordinator | None = None

    @property
    def configured(self) -> bool:
        return self.coordinator is not None

    def configure(self, options: dict | None = None) -> ServiceResult[RunOptions]:
        """Validate `options` and replace the coordinator (failure memory starts empty)."""
        try:
            run_options = RunOptions.from_dict(options)
        except (TypeError, ValueError) as e:
            return ServiceResult.fail(ErrorCode.VALIDATION_ERROR, f"Invalid options: {e}")

        self.coordinator = RunCoordinator(
            run_options,
            runner=self.runner,
            inspector=self.inspector,
        )
        logger.info(f"Guard configured for {run_options.tests_path}")
        return ServiceResult.ok(run_options)

    def start(self) -> ServiceResult[GuardReport]:
        """Run the initial full suite (if enabled)."""
        return self._trigger(lambda coordinator: coordinator.start())

    def run_all(self) -> ServiceResult[GuardReport]:
        """Run the full suite."""
        return self._trigger(lambda coordinator: coordinator.run_all())

    def on_change(self, paths: list[str]) -> ServiceResult[GuardReport]:
        """Run the tests affected by `paths`."""
        if paths is None or not isinstance(paths, list):
            return ServiceResult.fail(
                ErrorCode.MISSING_INPUT,
                "'paths' is required and must be a list of file paths"
            )
        if not all(isinstance(p, str) for p in paths):
            return ServiceResult.fail(
                ErrorCode.VALIDATION_ERROR,
                "'paths' must only contain strings"
            )

        return self._trigger(lambda coordinator: coordinator.run_on_changes(paths))

    def status(self) -> ServiceResult[dict]:
        """Current options, failure memory and last result."""
        if self.coordinator is None:
            return self._not_configured()

        last = self.coordinator.last_result
        return ServiceResult.ok({
            "options": self.coordinator.options.to_dict(),
            "failed_paths": self.coordinator.failed_paths,
            "last_result": last.to_dict() if last else None,
        })

    def _trigger(self, action) -> ServiceResult[GuardReport]:
        if self.coordinator is None:
            return self._not_configured()

        try:
            run = action(self.coordinator)
        except Exception as e:
            logger.exception("Guard action failed")
            return ServiceResult.fail(ErrorCode.EXECUTION_ERROR, f"Run failed: {e}")

        # A failed test run is still a successful service call; the report says so
        phpunit = getattr(self.runner, "last_result", None) if run.ran else None
        return ServiceResult.ok(GuardReport(
            run=run,
            failed_paths=self.coordinator.failed_paths,
            phpunit=phpunit,
        ))

    def _not_configured(self) -> ServiceResult:
        return ServiceResult.fail(
            ErrorCode.NOT_CONFIGURED,
            "Guard is not started. Call 'start_guard' first."
        )
