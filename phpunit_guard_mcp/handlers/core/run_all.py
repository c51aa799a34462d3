"""MCP handler for run_all (delegates to GuardService)."""

from __future__ import annotations

from mcp.types import TextContent, Tool

from ...services import ServiceResult, get_guard_service
from .formatting import format_guard_report

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="run_all",
    description=(
        "Run the whole phpunit suite in the configured tests path. "
        "Does not change the remembered failed tests."
    ),
    inputSchema={
        "type": "object",
        "properties": {}
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Run all tests and return the formatted report."""
    service = get_guard_service()

    result = service.run_all()

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
