"""MCP handler for guard_status (delegates to GuardService)."""

from __future__ import annotations

import json

from mcp.types import TextContent, Tool

from ...services import ServiceResult, get_guard_service

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="guard_status",
    description=(
        "Show the guard's run options, the remembered failed tests "
        "and the result of the last run as JSON."
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
    """Return the guard status as JSON."""
    service = get_guard_service()

    result = service.status()

    if not result.success:
        return _error_response(result)

    return [TextContent(type="text", text=json.dumps(result.data, indent=2))]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
