"""Filesystem-backed file tree."""

from pathlib import Path
from typing import BinaryIO


class LocalFileNode:
    """FileNode over a local path.

    Children are listed sorted by name so the enumeration order is stable
    across platforms.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalFileNode({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_directory(self) -> bool:
        return self.path.is_dir()

    @property
    def size(self) -> int | None:
        if self.is_directory:
            return None
        return self.path.stat().st_size

    def children(self) -> list["LocalFileNode"]:
        if not self.is_directory:
            raise NotADirectoryError(f"Not a directory: {self.path}")
        return [LocalFileNode(p) for p in sorted(self.path.iterdir(), key=lambda p: p.name)]

    def open_stream(self) -> BinaryIO:
        if self.is_directory:
            raise IsADirectoryError(f"Cannot open a directory: {self.path}")
        return open(self.path, "rb")
