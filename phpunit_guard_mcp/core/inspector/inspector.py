"""Filter changed paths down to the phpunit test files and folders worth running."""

from __future__ import annotations

import os
from pathlib import Path

from ...constants import TEST_FILE_SUFFIX


class Inspector:
    """Clean lists of changed paths before they reach the runner."""

    def __init__(self, tests_path: str, src_path: str | None = None):
        self.tests_path = tests_path
        self.src_path = src_path or os.getcwd()

    def clean(self, paths: list[str]) -> list[str]:
        """
        Keep existing test files and test folders, in first-seen order.

        A changed source file `<src_path>/dir/Foo.php` is replaced by its
        test, `<tests_path>/dir/FooTest.php` or `<tests_path>/FooTest.php`,
        when one exists. Duplicates and empty entries are dropped, as are
        files already covered by a folder in the same list.
        """
        seen: set[str] = set()
        kept = []

        for path in paths:
            if not path:
                continue
            if not (self._is_test_file(path) or self._is_test_folder(path)):
                path = self._test_for_source(path)
                if path is None:
                    continue
            if path in seen:
                continue
            seen.add(path)
            kept.append(path)

        return self._clear_swallowed_paths(kept)

    def _is_test_file(self, path: str) -> bool:
        return path.endswith(TEST_FILE_SUFFIX) and Path(path).is_file()

    def _is_test_folder(self, path: str) -> bool:
        candidate = Path(path)
        if not candidate.is_dir():
            return False
        return _is_within(candidate, Path(self.tests_path))

    def _test_for_source(self, path: str) -> str | None:
        """The existing test file for a source file under src_path, if any."""
        source = Path(path)
        if source.suffix != ".php" or not source.is_file():
            return None
        if not _is_within(source, Path(self.src_path)):
            return None

        relative = source.resolve().relative_to(Path(self.src_path).resolve())
        test_name = f"{source.stem}{TEST_FILE_SUFFIX}"
        tests_path = Path(self.tests_path)

        for candidate in (tests_path / relative.parent / test_name, tests_path / test_name):
            if candidate.is_file():
                return str(candidate)
        return None

    def _clear_swallowed_paths(self, paths: list[str]) -> list[str]:
        folders = [Path(p).resolve() for p in paths if Path(p).is_dir()]

        def swallowed(path: str) -> bool:
            resolved = Path(path).resolve()
            return any(resolved != f and _is_within(resolved, f) for f in folders)

        return [p for p in paths if not swallowed(p)]


def _is_within(path: Path, folder: Path) -> bool:
    """True if `path` is `folder` or lives somewhere below it."""
    path, folder = path.resolve(), folder.resolve()
    return path == folder or folder in path.parents
