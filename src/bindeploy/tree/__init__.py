"""File tree views consumed by the flattener."""

from bindeploy.tree.base import FileNode
from bindeploy.tree.local import LocalFileNode
from bindeploy.tree.memory import MemoryDirectory, MemoryFile

__all__ = ["FileNode", "LocalFileNode", "MemoryDirectory", "MemoryFile"]
