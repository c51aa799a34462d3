"""Test runner module - executes phpunit and parses its results."""

from .executor import PhpunitRunner, parse_output
from .models import PhpunitRunResult

__all__ = [
    "PhpunitRunner",
    "parse_output",
    "PhpunitRunResult",
]
