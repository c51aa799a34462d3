"""MCP handler for run_on_changes (delegates to GuardService)."""

from __future__ import annotations

from mcp.types import TextContent, Tool

from ...services import ServiceResult, get_guard_service
from .formatting import format_guard_report

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="run_on_changes",
    description=(
        "Run phpunit for changed files. Keeps only existing *Test.php files "
        "and test folders, adds previously failed tests (keep_failed), and "
        "runs the whole suite once failing tests pass again (all_after_pass)."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "paths": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Changed file paths"
            }
        },
        "required": ["paths"]
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Run the tests for the changed `paths` and return the formatted report."""
    service = get_guard_service()

    result = service.on_change(arguments.get("paths"))

    if not result.success:
        return _error_response(result)

    return [TextContent(
        type="text",
        text=format_guard_report(result.data)
    )]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
