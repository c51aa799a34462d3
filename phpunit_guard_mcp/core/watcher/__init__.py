"""File watching - watchdog events batched for the run coordinator."""

from .observer import ChangeBatcher, create_observer

__all__ = [
    "ChangeBatcher",
    "create_observer",
]
