"""
PHPUnit Guard MCP Server

Runs phpunit when PHP files change.
Full run on start, changed and failed tests on change, full run after a fix.
"""

__version__ = "0.1.0"

# Public API
from .core.coordinator import RunCoordinator, RunOptions, RunResult
from .core.inspector import Inspector
from .core.runner import PhpunitRunner, PhpunitRunResult

__all__ = [
    "__version__",
    # Coordinator
    "RunCoordinator",
    "RunOptions",
    "RunResult",
    # Inspector
    "Inspector",
    # Runner
    "PhpunitRunner",
    "PhpunitRunResult",
]
