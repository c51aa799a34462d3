"""
Shared constants used across the project.
"""

from typing import Final

# Run option defaults
DEFAULT_COMMAND: Final[str] = "phpunit"
DEFAULT_CLI: Final[str] = ""

# Test file detection
TEST_FILE_SUFFIX: Final[str] = "Test.php"
WATCHED_EXTENSIONS: Final[frozenset[str]] = frozenset({'.php'})

# Directories never worth reporting as changes
IGNORED_DIRECTORIES: Final[frozenset[str]] = frozenset({
    'vendor', '.git', 'node_modules', '.phpunit.cache'
})

# Watch loop
DEBOUNCE_SECONDS: Final[float] = 0.4

# Test execution (None = no limit)
TEST_TIMEOUT_SECONDS: Final[int | None] = None
