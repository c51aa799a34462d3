"""
Start Guard Tool - Configure the run coordinator and run the initial suite.

This tool:
1. Validates the run options (defaults for anything omitted)
2. Replaces any previous guard, so failure memory starts empty
3. Runs all tests when all_on_start is set

Uses GuardService for business logic.
"""

from __future__ import annotations

from mcp.types import TextContent, Tool

from ...services import ServiceResult, get_guard_service
from .formatting import format_guard_report

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="start_guard",
    description=(
        "Start watching a PHP project with phpunit. Sets the run options "
        "and runs the whole suite on start unless all_on_start is false."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "all_on_start": {
                "type": "boolean",
                "description": "Run all tests on start (default: true)"
            },
            "all_after_pass": {
                "type": "boolean",
                "description": "Run all tests once previously failing tests pass (default: true)"
            },
            "keep_failed": {
                "type": "boolean",
                "description": "Re-run failed tests with the next changes (default: true)"
            },
            "cli": {
                "type": "string",
                "description": "Extra arguments passed to phpunit, e.g. '--colors'"
            },
            "tests_path": {
                "type": "string",
                "description": "Tests folder (default: the server's working directory)"
            },
            "src_path": {
                "type": "string",
                "description": "Source folder whose changes run the matching FooTest.php (default: the server's working directory)"
            },
            "command": {
                "type": "string",
                "description": "phpunit executable (default: 'phpunit')"
            }
        }
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Configure the guard from `arguments` and run the start action."""
    service = get_guard_service()

    configured = service.configure(arguments or {})
    if not configured.success:
        return _error_response(configured)

    result = service.start()
    if not result.success:
        return _error_response(result)

    options = configured.data
    header = f"Guard started for {options.tests_path} (command: {options.command})"

    return [TextContent(
        type="text",
        text=f"{header}\n\n{format_guard_report(result.data)}"
    )]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
