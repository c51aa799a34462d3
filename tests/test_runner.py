"""Tests for the phpunit runner module."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from phpunit_guard_mcp.core.coordinator import RunOptions
from phpunit_guard_mcp.core.runner import PhpunitRunner, parse_output

EXECUTOR = "phpunit_guard_mcp.core.runner.executor"

OK_OUTPUT = """PHPUnit 9.6.13 by Sebastian Bergmann and contributors.

...                                                                 3 / 3 (100%)

Time: 00:00.021, Memory: 6.00 MB

OK (3 tests, 5 assertions)
"""

FAILURE_OUTPUT = """PHPUnit 9.6.13 by Sebastian Bergmann and contributors.

.F.ES                                                               5 / 5 (100%)

Time: 00:01.500, Memory: 6.00 MB

There was 1 failure:

1) FirstTest::testAdd
Failed asserting that 2 matches expected 3.

FAILURES!
Tests: 5, Assertions: 7, Failures: 1, Errors: 1, Skipped: 1.
"""


def completed(cmd, returncode=0, stdout=OK_OUTPUT):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout)


@pytest.fixture
def which():
    with patch(f"{EXECUTOR}.shutil.which", return_value="/usr/bin/phpunit") as mock:
        yield mock


class TestParseOutput:
    """Test parsing of phpunit summaries."""

    def test_ok_summary(self):
        result = parse_output(OK_OUTPUT)

        assert result.tests == 3
        assert result.assertions == 5
        assert result.failures == 0
        assert result.duration == pytest.approx(0.021)

    def test_failure_summary(self):
        result = parse_output(FAILURE_OUTPUT)

        assert result.tests == 5
        assert result.assertions == 7
        assert result.failures == 1
        assert result.errors == 1
        assert result.skipped == 1
        assert result.incomplete == 0
        assert result.duration == pytest.approx(1.5)

    def test_old_style_time(self):
        assert parse_output("Time: 120 ms, Memory: 4.00MB\n").duration == pytest.approx(0.12)
        assert parse_output("Time: 2 seconds, Memory: 4.00MB\n").duration == pytest.approx(2.0)
        assert parse_output("Time: 1 minute, Memory: 4.00MB\n").duration == pytest.approx(60.0)

    def test_unrecognised_output(self):
        result = parse_output("PHP Fatal error: Class 'Foo' not found\n")

        assert result.tests == 0
        assert result.duration is None

    def test_summary_text(self):
        result = parse_output(FAILURE_OUTPUT)

        assert result.summary == "5 tests, 1 failure, 1 error, 1 skipped in 1.50 seconds"


class TestRun:
    """Test the phpunit invocation."""

    def test_single_target_command_line(self, which):
        options = RunOptions(cli="--colors", tests_path="tests")

        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([])) as run:
            assert PhpunitRunner().run(["tests"], options) is True

        assert run.call_args.args[0] == ["phpunit", "--colors", "tests"]

    def test_command_with_arguments_is_split(self, which):
        options = RunOptions(command="php vendor/bin/phpunit", cli="--testdox --colors=never")

        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([])) as run:
            PhpunitRunner().run(["tests/FirstTest.php"], options)

        assert run.call_args.args[0] == [
            "php", "vendor/bin/phpunit", "--testdox", "--colors=never", "tests/FirstTest.php"
        ]
        which.assert_called_once_with("php")

    def test_non_zero_exit_is_failure(self, which):
        runner = PhpunitRunner()

        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([], 1, FAILURE_OUTPUT)):
            assert runner.run(["tests"], RunOptions()) is False

        assert runner.last_result.returncode == 1
        assert runner.last_result.failures == 1
        assert runner.last_result.error_message is None

    def test_crash_without_tests_keeps_last_line(self, which):
        runner = PhpunitRunner()
        output = "PHP Parse error: syntax error in tests/FirstTest.php on line 3\n"

        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([], 255, output)):
            assert runner.run(["tests"], RunOptions()) is False

        assert "Parse error" in runner.last_result.error_message

    def test_last_result_records_success(self, which):
        runner = PhpunitRunner()

        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([])):
            runner.run(["tests"], RunOptions())

        assert runner.last_result.success is True
        assert runner.last_result.tests == 3
        assert runner.last_result.targets == ["tests"]

    def test_multiple_targets_are_staged_in_one_folder(self, which, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tests" / "Unit").mkdir(parents=True)
        (tmp_path / "tests" / "FirstTest.php").write_text("<?php\n")
        (tmp_path / "tests" / "Unit" / "SecondTest.php").write_text("<?php\n")
        staged = {}

        def fake_run(cmd, **kwargs):
            folder = Path(cmd[-1])
            staged["folder"] = folder
            staged["first"] = (folder / "tests" / "FirstTest.php").is_symlink()
            staged["second"] = (folder / "tests" / "Unit" / "SecondTest.php").is_symlink()
            return completed(cmd)

        with patch(f"{EXECUTOR}.subprocess.run", side_effect=fake_run):
            result = PhpunitRunner().execute(
                ["tests/FirstTest.php", "tests/Unit/SecondTest.php"], RunOptions()
            )

        assert result.success is True
        assert staged["first"] and staged["second"]
        assert not staged["folder"].exists()
        assert result.targets == ["tests/FirstTest.php", "tests/Unit/SecondTest.php"]

    def test_empty_targets_do_not_run(self, which):
        with patch(f"{EXECUTOR}.subprocess.run") as run:
            assert PhpunitRunner().run([], RunOptions()) is False

        run.assert_not_called()

    def test_timeout_is_passed_through(self, which):
        with patch(f"{EXECUTOR}.subprocess.run", return_value=completed([])) as run:
            PhpunitRunner(timeout=60).run(["tests"], RunOptions())

        assert run.call_args.kwargs["timeout"] == 60


class TestErrorHandling:
    """Adapter failures become a failed outcome."""

    def test_missing_executable(self):
        runner = PhpunitRunner()

        with patch(f"{EXECUTOR}.shutil.which", return_value=None), \
                patch(f"{EXECUTOR}.subprocess.run") as run:
            assert runner.run(["tests"], RunOptions(command="./bin/phpunit")) is False

        run.assert_not_called()
        assert runner.last_result.error_message == "./bin/phpunit is not installed on your machine"

    def test_file_not_found(self, which):
        runner = PhpunitRunner()

        with patch(f"{EXECUTOR}.subprocess.run", side_effect=FileNotFoundError()):
            assert runner.run(["tests"], RunOptions()) is False

        assert "not found" in runner.last_result.error_message

    def test_timeout(self, which):
        runner = PhpunitRunner(timeout=5)

        with patch(f"{EXECUTOR}.subprocess.run", side_effect=subprocess.TimeoutExpired("phpunit", 5)):
            assert runner.run(["tests"], RunOptions()) is False

        assert "timed out" in runner.last_result.error_message
        assert runner.last_result.summary == runner.last_result.error_message
