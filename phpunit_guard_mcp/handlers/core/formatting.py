"""Text formatting shared by the guard tool handlers."""

from __future__ import annotations

from ...core.coordinator import RunKind, RunResult, RunStatus
from ...services import GuardReport

STATUS_LINES = {
    RunStatus.PASSED: "✅ Tests passed",
    RunStatus.FAILED: "❌ Tests failed - task aborted, fix the issues and save to retry",
    RunStatus.SKIPPED: "⏭️ Nothing to run",
}


def format_guard_report(report: GuardReport) -> str:
    """Format a guard report as readable text."""
    lines = [
        "PHPUNIT GUARD",
        "=" * 50,
        "",
    ]
    lines.extend(_format_run(report.run))

    if report.phpunit:
        lines.extend([
            "",
            "phpunit:",
            f"  • {report.phpunit.summary}",
        ])
        if report.phpunit.error_message:
            lines.append(f"  • Error: {report.phpunit.error_message}")

    if report.failed_paths:
        lines.append("")
        lines.append(f"Remembered failures ({len(report.failed_paths)}):")
        for path in report.failed_paths:
            lines.append(f"  ✗ {path}")

    return "\n".join(lines)


def _format_run(run: RunResult, indent: str = "") -> list[str]:
    lines = [f"{indent}{STATUS_LINES[run.status]}"]

    if run.kind is RunKind.FULL:
        lines.append(f"{indent}  Full run: {run.targets[0]}")
    elif run.kind is RunKind.SELECTIVE:
        lines.append(f"{indent}  Selective run:")
        for target in run.targets:
            lines.append(f"{indent}    - {target}")

    if run.follow_up:
        lines.append("")
        lines.append(f"{indent}Follow-up full run:")
        lines.extend(_format_run(run.follow_up, indent + "  "))

    return lines
