"""Services package.

Exposes the guard service and shared result types used by the MCP handlers
and the watch command.
"""


from functools import lru_cache

# Base utilities
from .base import (
    ErrorCode,
    ServiceError,
    ServiceResult,
)

# Services
from .guard import GuardReport, GuardService

__all__ = [
    # Base
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    # Services
    "GuardService",
    "GuardReport",
    "get_guard_service",
]


@lru_cache(maxsize=1)
def get_guard_service() -> GuardService:
    """The guard service shared by every tool call in this server process."""

    return GuardService()
