"""Registry for guard MCP tool definitions and handlers."""

# Tool definitions and handlers
from .start_guard import (
    TOOL_DEFINITION as START_GUARD_TOOL,
    handle as handle_start_guard,
)

from .run_all import (
    TOOL_DEFINITION as RUN_ALL_TOOL,
    handle as handle_run_all,
)

from .run_on_changes import (
    TOOL_DEFINITION as RUN_ON_CHANGES_TOOL,
    handle as handle_run_on_changes,
)

from .guard_status import (
    TOOL_DEFINITION as GUARD_STATUS_TOOL,
    handle as handle_guard_status,
)


# All guard tool definitions
TOOLS = [
    START_GUARD_TOOL,
    RUN_ALL_TOOL,
    RUN_ON_CHANGES_TOOL,
    GUARD_STATUS_TOOL,
]

# Tool name to handler mapping
HANDLERS = {
    "start_guard": handle_start_guard,
    "run_all": handle_run_all,
    "run_on_changes": handle_run_on_changes,
    "guard_status": handle_guard_status,
}


__all__ = [
    # Tool definitions
    "TOOLS",
    "START_GUARD_TOOL",
    "RUN_ALL_TOOL",
    "RUN_ON_CHANGES_TOOL",
    "GUARD_STATUS_TOOL",
    # Handlers
    "HANDLERS",
    "handle_start_guard",
    "handle_run_all",
    "handle_run_on_changes",
    "handle_guard_status",
]
