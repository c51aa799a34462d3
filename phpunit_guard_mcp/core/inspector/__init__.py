"""Change inspector - narrows changed files to runnable phpunit tests."""

from .inspector import Inspector

__all__ = [
    "Inspector",
]
