"""FileNode protocol."""

from typing import BinaryIO, Protocol, Sequence


class FileNode(Protocol):
    """Read-only view of one file or directory in an artifact tree.

    A node is either a directory (has children, no stream) or a leaf
    (has a stream, no children), never both.
    """

    @property
    def name(self) -> str:
        """Name of this node, without any path prefix."""
        ...

    @property
    def is_directory(self) -> bool:
        ...

    @property
    def size(self) -> int | None:
        """Size in bytes, or None if it cannot be known up front."""
        ...

    def children(self) -> Sequence["FileNode"]:
        """List child nodes in enumeration order. Directories only."""
        ...

    def open_stream(self) -> BinaryIO:
        """Open the file contents for reading. Leaves only."""
        ...
