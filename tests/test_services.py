"""
Tests for the Service Layer.

Services are tested without MCP infrastructure, with fake runners
injected in place of phpunit.
"""

import pytest
from unittest.mock import Mock

from phpunit_guard_mcp.core.coordinator import RunStatus
from phpunit_guard_mcp.core.runner import PhpunitRunResult
from phpunit_guard_mcp.services import (
    ErrorCode,
    GuardReport,
    GuardService,
    ServiceResult,
    get_guard_service,
)


# =============================================================================
# ServiceResult Tests
# =============================================================================

class TestServiceResult:
    """Tests for the ServiceResult pattern."""

    def test_ok_creates_success_result(self):
        result = ServiceResult.ok({"key": "value"})

        assert result.success is True
        assert result.data == {"key": "value"}
        assert result.error is None

    def test_fail_creates_failure_result(self):
        result = ServiceResult.fail(
            ErrorCode.VALIDATION_ERROR,
            "Something went wrong",
            details={"field": "cli"}
        )

        assert result.success is False
        assert result.data is None
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert result.error.message == "Something went wrong"
        assert result.error.details == {"field": "cli"}

    def test_error_to_dict(self):
        result = ServiceResult.fail(ErrorCode.NOT_CONFIGURED, "Guard missing")

        assert result.error.to_dict() == {"code": "not_configured", "message": "Guard missing"}


# =============================================================================
# GuardService Tests
# =============================================================================

@pytest.fixture
def service_for(make_runner, identity_inspector):
    def build(*outcomes, **options):
        runner = make_runner(*outcomes)
        service = GuardService(runner=runner, inspector=identity_inspector)
        configured = service.configure(options)
        assert configured.success
        return service, runner

    return build


class TestGuardServiceConfigure:

    def test_not_configured_by_default(self):
        service = GuardService(runner=Mock())

        assert service.configured is False
        for result in (service.start(), service.run_all(), service.on_change(["a"]), service.status()):
            assert result.success is False
            assert result.error.code == ErrorCode.NOT_CONFIGURED

    def test_configure_returns_options(self, tmp_path):
        service = GuardService(runner=Mock())

        result = service.configure({"tests_path": str(tmp_path), "cli": "--colors"})

        assert result.success is True
        assert result.data.tests_path == str(tmp_path)
        assert result.data.cli == "--colors"
        assert service.configured is True

    def test_invalid_options(self):
        service = GuardService(runner=Mock())

        result = service.configure({"keep_failed": "no"})

        assert result.success is False
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert service.configured is False

    def test_unknown_option(self):
        result = GuardService(runner=Mock()).configure({"notify": True})

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "notify" in result.error.message

    def test_reconfigure_resets_failure_memory(self, service_for):
        service, _ = service_for(False)
        service.on_change(["tests/firstTest.php"])
        assert service.coordinator.failed_paths

        service.configure({})

        assert service.coordinator.failed_paths == []


class TestGuardServiceTriggers:

    def test_start_runs_all(self, service_for):
        service, runner = service_for(True, tests_path="tests")

        result = service.start()

        assert result.success is True
        assert result.data.run.status is RunStatus.PASSED
        assert runner.calls[0][0] == ["tests"]

    def test_start_skipped(self, service_for):
        service, runner = service_for(all_on_start=False)

        result = service.start()

        assert result.data.run.status is RunStatus.SKIPPED
        assert result.data.phpunit is None
        assert runner.calls == []

    def test_failed_tests_are_a_successful_service_call(self, service_for):
        service, _ = service_for(False)

        result = service.on_change(["tests/firstTest.php"])

        assert result.success is True
        assert result.data.task_has_failed is True
        assert result.data.failed_paths == ["tests/firstTest.php"]

    def test_report_includes_runner_result(self, service_for):
        service, runner = service_for(True)
        runner.last_result = PhpunitRunResult(targets=["tests"], success=True, tests=4)

        result = service.run_all()

        assert result.data.phpunit.tests == 4

    def test_on_change_requires_a_list(self, service_for):
        service, _ = service_for()

        assert service.on_change(None).error.code == ErrorCode.MISSING_INPUT
        assert service.on_change("tests/firstTest.php").error.code == ErrorCode.MISSING_INPUT

    def test_on_change_requires_strings(self, service_for):
        service, _ = service_for()

        assert service.on_change([1, 2]).error.code == ErrorCode.VALIDATION_ERROR

    def test_runner_exception_becomes_execution_error(self, identity_inspector):
        runner = Mock()
        runner.run.side_effect = RuntimeError("boom")
        service = GuardService(runner=runner, inspector=identity_inspector)
        service.configure({})

        result = service.run_all()

        assert result.success is False
        assert result.error.code == ErrorCode.EXECUTION_ERROR
        assert "boom" in result.error.message

    def test_status(self, service_for):
        service, _ = service_for(False, cli="--colors")
        service.on_change(["tests/firstTest.php"])

        status = service.status().data

        assert status["options"]["cli"] == "--colors"
        assert status["failed_paths"] == ["tests/firstTest.php"]
        assert status["last_result"]["status"] == "failed"

    def test_report_to_dict(self, service_for):
        service, _ = service_for(False)

        data = service.on_change(["tests/firstTest.php"]).data.to_dict()

        assert data["run"]["task_has_failed"] is True
        assert data["failed_paths"] == ["tests/firstTest.php"]
        assert data["phpunit"] is None


class TestFactories:

    def test_get_guard_service_is_shared(self, fresh_guard_service):
        assert get_guard_service() is get_guard_service()
        assert isinstance(get_guard_service(), GuardService)

    def test_guard_report_defaults(self):
        from phpunit_guard_mcp.core.coordinator import RunResult

        report = GuardReport(run=RunResult.skipped())

        assert report.failed_paths == []
        assert report.task_has_failed is False
