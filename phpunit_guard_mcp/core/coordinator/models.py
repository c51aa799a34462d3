"""Dataclasses and types for run options and run results."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from enum import Enum

from ...constants import DEFAULT_CLI, DEFAULT_COMMAND

# Alternative spellings accepted by RunOptions.from_dict
OPTION_ALIASES: dict[str, str] = {
    "runAllOnStart": "all_on_start",
    "run_all_on_start": "all_on_start",
    "runAllAfterPass": "all_after_pass",
    "run_all_after_pass": "all_after_pass",
    "keepFailed": "keep_failed",
    "extraArgs": "cli",
    "extra_args": "cli",
    "testsPath": "tests_path",
    "srcPath": "src_path",
    "source_path": "src_path",
}


@dataclass(frozen=True)
class RunOptions:
    """Options controlling when and how phpunit runs. Fixed for a coordinator's lifetime."""

    all_on_start: bool = True
    all_after_pass: bool = True
    keep_failed: bool = True
    cli: str = DEFAULT_CLI
    tests_path: str = field(default_factory=os.getcwd)
    src_path: str = field(default_factory=os.getcwd)
    command: str = DEFAULT_COMMAND

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = bool if f.type == "bool" else str
            if not isinstance(value, expected):
                raise ValueError(
                    f"Option '{f.name}' must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
        if not self.command.strip():
            raise ValueError("Option 'command' cannot be empty")
        if not self.tests_path:
            raise ValueError("Option 'tests_path' cannot be empty")
        if not self.src_path:
            raise ValueError("Option 'src_path' cannot be empty")

    @classmethod
    def from_dict(cls, data: dict | None) -> RunOptions:
        """
        Build options from a mapping, filling in defaults for missing keys.

        Raises:
            ValueError: On unknown keys or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}

        for key, value in (data or {}).items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: '{key}'")
            if name in kwargs:
                raise ValueError(f"Option '{name}' given more than once")
            kwargs[name] = value

        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "all_on_start": self.all_on_start,
            "all_after_pass": self.all_after_pass,
            "keep_failed": self.keep_failed,
            "cli": self.cli,
            "tests_path": self.tests_path,
            "src_path": self.src_path,
            "command": self.command,
        }


class RunStatus(str, Enum):
    """Outcome of a coordinator action."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunKind(str, Enum):
    """Which kind of phpunit invocation an action made."""
    FULL = "full"
    SELECTIVE = "selective"
    NONE = "none"


@dataclass(frozen=True)
class RunResult:
    """
    Result of start / run_all / run_on_changes.

    A failed status is the task-failure signal: the host should stop the
    current triggered action but keep the coordinator alive.

    Attributes:
        status: passed, failed or skipped
        kind: full, selective or none (nothing was run)
        targets: Paths handed to the runner
        follow_up: Full run triggered after a selective run recovered
    """
    status: RunStatus
    kind: RunKind
    targets: tuple[str, ...] = ()
    follow_up: RunResult | None = None

    @classmethod
    def passed(
        cls,
        kind: RunKind,
        targets: list[str] | tuple[str, ...],
        follow_up: RunResult | None = None
    ) -> RunResult:
        return cls(RunStatus.PASSED, kind, tuple(targets), follow_up)

    @classmethod
    def failed(cls, kind: RunKind, targets: list[str] | tuple[str, ...]) -> RunResult:
        return cls(RunStatus.FAILED, kind, tuple(targets))

    @classmethod
    def skipped(cls) -> RunResult:
        return cls(RunStatus.SKIPPED, RunKind.NONE)

    @property
    def ran(self) -> bool:
        return self.status is not RunStatus.SKIPPED

    @property
    def task_has_failed(self) -> bool:
        """True if this run or its follow-up full run failed."""
        if self.status is RunStatus.FAILED:
            return True
        return self.follow_up is not None and self.follow_up.task_has_failed

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "kind": self.kind.value,
            "targets": list(self.targets),
            "task_has_failed": self.task_has_failed,
            "follow_up": self.follow_up.to_dict() if self.follow_up else None,
        }
