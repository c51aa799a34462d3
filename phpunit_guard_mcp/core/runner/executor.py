"""Execute phpunit against a set of paths and parse its summary."""

from __future__ import annotations

import logging
import re
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from ...constants import TEST_TIMEOUT_SECONDS
from .models import PhpunitRunResult

if TYPE_CHECKING:
    from ..coordinator.models import RunOptions

logger = logging.getLogger(__name__)

OK_PATTERN = re.compile(r"^OK \((\d+) tests?, (\d+) assertions?\)", re.MULTILINE)
COUNTS_PATTERN = re.compile(r"^Tests: (\d+), Assertions: (\d+)(.*)$", re.MULTILINE)
EXTRA_COUNT_PATTERN = re.compile(r"(Failures|Errors|Skipped|Incomplete): (\d+)")
# phpunit >= 9 prints "Time: 00:01.234", older versions "Time: 1.23 seconds" / "Time: 120 ms"
CLOCK_TIME_PATTERN = re.compile(r"^Time: (\d+):(\d+(?:\.\d+)?)", re.MULTILINE)
UNIT_TIME_PATTERN = re.compile(r"^Time: (\d+(?:\.\d+)?) (ms|seconds?|minutes?)", re.MULTILINE)


class PhpunitRunner:
    """Run phpunit for a list of paths and report overall success."""

    def __init__(self, timeout: float | None = TEST_TIMEOUT_SECONDS, echo_output: bool = False):
        """
        Args:
            timeout: Seconds before the phpunit process is killed (None = wait forever).
            echo_output: Print phpunit's output as well as capturing it.
        """
        self.timeout = timeout
        self.echo_output = echo_output
        self.last_result: PhpunitRunResult | None = None

    def run(self, targets: list[str], options: RunOptions) -> bool:
        """Run phpunit and return True only if every test passed."""
        self.last_result = self.execute(targets, options)
        return self.last_result.success

    def execute(self, targets: list[str], options: RunOptions) -> PhpunitRunResult:
        """Run phpunit on `targets` and return the parsed result."""
        targets = list(targets)

        if not targets:
            return PhpunitRunResult(
                targets=targets,
                success=False,
                error_message="No paths to run"
            )

        base_cmd = shlex.split(options.command) + shlex.split(options.cli)

        if shutil.which(base_cmd[0]) is None:
            message = f"{base_cmd[0]} is not installed on your machine"
            logger.error(message)
            return PhpunitRunResult(targets=targets, success=False, error_message=message)

        if len(targets) == 1:
            return self._run_command(base_cmd + [targets[0]], targets)

        # phpunit takes a single path, so several targets are linked into one folder
        with tempfile.TemporaryDirectory(prefix="phpunit-guard-") as temp_dir:
            self._stage_targets(targets, Path(temp_dir))
            return self._run_command(base_cmd + [temp_dir], targets)

    def _stage_targets(self, targets: list[str], staging_dir: Path) -> None:
        """Symlink each target into `staging_dir`, keeping its relative layout."""
        for target in targets:
            link = staging_dir / _relative_location(Path(target))
            if link.exists() or link.is_symlink():
                continue
            link.parent.mkdir(parents=True, exist_ok=True)
            link.symlink_to(Path(target).resolve())

    def _run_command(self, cmd: list[str], targets: list[str]) -> PhpunitRunResult:
        logger.info(f"Executing: {shlex.join(cmd)}")

        try:
            completed = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return self._invocation_failure(cmd, targets, f"phpunit timed out ({self.timeout}s limit)")
        except FileNotFoundError:
            return self._invocation_failure(cmd, targets, f"{cmd[0]} not found")
        except OSError as e:
            return self._invocation_failure(cmd, targets, f"Execution error: {e}")

        output = completed.stdout or ""
        if self.echo_output:
            print(output, end="")

        result = parse_output(output)
        result.targets = targets
        result.command = cmd
        result.returncode = completed.returncode
        result.success = completed.returncode == 0

        if not result.success and result.tests == 0:
            result.error_message = _last_line(output) or f"phpunit exited with code {completed.returncode}"

        log = logger.info if result.success else logger.warning
        log(f"phpunit: {result.summary}")
        return result

    def _invocation_failure(self, cmd: list[str], targets: list[str], message: str) -> PhpunitRunResult:
        logger.error(message)
        return PhpunitRunResult(
            targets=targets,
            success=False,
            command=cmd,
            error_message=message
        )


def parse_output(output: str) -> PhpunitRunResult:
    """Parse the counters and run time out of phpunit's text output."""
    result = PhpunitRunResult(targets=[], success=False, output=output)

    ok = OK_PATTERN.search(output)
    counts = COUNTS_PATTERN.search(output)

    if ok:
        result.tests = int(ok.group(1))
        result.assertions = int(ok.group(2))
    elif counts:
        result.tests = int(counts.group(1))
        result.assertions = int(counts.group(2))
        for name, value in EXTRA_COUNT_PATTERN.findall(counts.group(3)):
            setattr(result, name.lower(), int(value))

    result.duration = _parse_duration(output)
    return result


def _parse_duration(output: str) -> float | None:
    clock = CLOCK_TIME_PATTERN.search(output)
    if clock:
        return int(clock.group(1)) * 60 + float(clock.group(2))

    unit = UNIT_TIME_PATTERN.search(output)
    if unit:
        value = float(unit.group(1))
        if unit.group(2) == "ms":
            return value / 1000
        if unit.group(2).startswith("minute"):
            return value * 60
        return value

    return None


def _relative_location(target: Path) -> Path:
    """Where a target goes inside the staging folder."""
    resolved = target.resolve()
    try:
        return resolved.relative_to(Path.cwd())
    except ValueError:
        return Path(*resolved.parts[1:])


def _last_line(output: str) -> str | None:
    for line in reversed(output.splitlines()):
        if line.strip():
            return line.strip()[:200]
    return None
