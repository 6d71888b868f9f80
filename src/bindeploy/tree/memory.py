"""In-memory file tree, for hosts that assemble artifacts without a filesystem."""

import io
from typing import BinaryIO


class MemoryFile:
    """Leaf node holding its content in memory."""

    is_directory = False

    def __init__(self, name: str, content: bytes = b"", size: int | None = -1):
        self.name = name
        self.content = content
        # -1 means "derive from content"; None means "unknown up front"
        self._size = len(content) if size == -1 else size
        self.open_count = 0

    def __repr__(self) -> str:
        return f"MemoryFile({self.name!r})"

    @property
    def size(self) -> int | None:
        return self._size

    def children(self) -> list:
        raise NotADirectoryError(f"Not a directory: {self.name}")

    def open_stream(self) -> BinaryIO:
        self.open_count += 1
        return io.BytesIO(self.content)


class MemoryDirectory:
    """Directory node whose children keep their insertion order."""

    is_directory = True
    size = None

    def __init__(self, name: str, children: list | None = None):
        self.name = name
        self._children = list(children or [])

    def __repr__(self) -> str:
        return f"MemoryDirectory({self.name!r}, {len(self._children)} children)"

    def add(self, node) -> "MemoryDirectory":
        self._children.append(node)
        return self

    def children(self) -> list:
        return list(self._children)

    def open_stream(self) -> BinaryIO:
        raise IsADirectoryError(f"Cannot open a directory: {self.name}")
