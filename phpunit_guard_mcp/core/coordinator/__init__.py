"""Run coordinator - the full-run / selective-run policy."""

from .coordinator import ChangeInspector, RunCoordinator, TestRunner
from .models import RunKind, RunOptions, RunResult, RunStatus

__all__ = [
    "RunCoordinator",
    "ChangeInspector",
    "TestRunner",
    "RunOptions",
    "RunResult",
    "RunStatus",
    "RunKind",
]
