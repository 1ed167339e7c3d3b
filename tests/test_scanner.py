import tempfile
import unittest
from pathlib import Path

from audio_probe.config import LibrarySettings
from audio_probe.scanner import LibraryScanner


class TestLibraryScanner(unittest.TestCase):
    def _tree(self, root: Path) -> None:
        (root / "Artist" / "Album").mkdir(parents=True)
        (root / "incoming").mkdir()
        (root / "Artist" / "Album" / "01.flac").write_bytes(b"x")
        (root / "Artist" / "Album" / "02.FLAC").write_bytes(b"x")
        (root / "Artist" / "Album" / "cover.jpg").write_bytes(b"x")
        (root / "incoming" / "new.flac").write_bytes(b"x")
        (root / "single.mp3").write_bytes(b"x")

    def test_filters_extensions_and_patterns(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._tree(root)
            scanner = LibraryScanner(
                LibrarySettings(
                    roots=[root],
                    include_extensions=[".flac", ".mp3"],
                    exclude_patterns=["*/incoming/*"],
                )
            )
            found = [path.relative_to(root.resolve()).as_posix() for path in scanner.iter_files()]
        self.assertEqual(found, ["single.mp3", "Artist/Album/01.flac", "Artist/Album/02.FLAC"])

    def test_explicit_roots_and_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._tree(root)
            scanner = LibraryScanner(LibrarySettings(include_extensions=[".flac"]))
            found = list(
                scanner.iter_files(
                    [root / "incoming", root / "single.mp3", root / "Artist" / "Album" / "01.flac"]
                )
            )
        self.assertEqual([p.name for p in found], ["new.flac", "01.flac"])

    def test_missing_root_is_ignored(self) -> None:
        scanner = LibraryScanner(LibrarySettings(roots=["/this/path/does/not/exist"]))
        self.assertEqual(list(scanner.iter_files()), [])


if __name__ == "__main__":
    unittest.main()
