from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .config import LibrarySettings


class LibraryScanner:
    """Walks library roots and yields the audio files worth probing."""

    def __init__(self, settings: LibrarySettings) -> None:
        self.settings = settings
        self._exts = {ext.lower() for ext in self.settings.include_extensions}

    def iter_files(self, roots: Iterable[Path] | None = None) -> Iterator[Path]:
        for root in roots if roots is not None else self.settings.roots:
            root = Path(root)
            if root.is_file():
                if self._should_include(root):
                    yield root
                continue
            if not root.exists():
                continue
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames.sort()
                directory = Path(dirpath)
                for name in sorted(filenames):
                    file_path = directory / name
                    if not file_path.is_file():
                        continue
                    if not self._should_include(file_path):
                        continue
                    yield file_path

    def _should_include(self, path: Path) -> bool:
        if path.suffix.lower() not in self._exts:
            return False
        rel = str(path)
        for pattern in self.settings.exclude_patterns:
            if fnmatch.fnmatch(rel, pattern):
                return False
        return True
