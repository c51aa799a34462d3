"""Data models for the phpunit runner."""

from dataclasses import dataclass, field


@dataclass
class PhpunitRunResult:
    """Complete phpunit invocation result."""
    targets: list[str]
    success: bool
    returncode: int | None = None
    tests: int = 0
    assertions: int = 0
    failures: int = 0
    errors: int = 0
    skipped: int = 0
    incomplete: int = 0
    duration: float | None = None
    output: str = ""
    command: list[str] = field(default_factory=list)
    error_message: str | None = None

    @property
    def summary(self) -> str:
        """One-line summary, e.g. '12 tests, 2 failures, 1 error in 0.52 seconds'."""
        if self.error_message and self.tests == 0:
            return self.error_message

        parts = [_plural(self.tests, "test"), _plural(self.failures, "failure")]
        if self.errors:
            parts.append(_plural(self.errors, "error"))
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.incomplete:
            parts.append(f"{self.incomplete} incomplete")

        text = ", ".join(parts)
        if self.duration is not None:
            text += f" in {self.duration:.2f} seconds"
        return text

    def to_dict(self) -> dict:
        return {
            "targets": self.targets,
            "success": self.success,
            "returncode": self.returncode,
            "summary": {
                "tests": self.tests,
                "assertions": self.assertions,
                "failures": self.failures,
                "errors": self.errors,
                "skipped": self.skipped,
                "incomplete": self.incomplete,
                "duration": self.duration,
            },
            "command": self.command,
            "error_message": self.error_message,
        }


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
