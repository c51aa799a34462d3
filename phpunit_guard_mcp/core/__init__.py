"""Core domain logic for the phpunit guard."""


from .coordinator import RunCoordinator, RunKind, RunOptions, RunResult, RunStatus
from .inspector import Inspector
from .runner import PhpunitRunner, PhpunitRunResult
from .watcher import ChangeBatcher, create_observer

__all__ = [
    # Coordinator
    "RunCoordinator",
    "RunOptions",
    "RunResult",
    "RunStatus",
    "RunKind",
    # Inspector
    "Inspector",
    # Runner
    "PhpunitRunner",
    "PhpunitRunResult",
    # Watcher
    "ChangeBatcher",
    "create_observer",
]
