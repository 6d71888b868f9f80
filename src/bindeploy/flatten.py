"""Flatten a file tree into an ordered list of binaries."""

import logging
from typing import Sequence

from bindeploy.errors import DeployError, ErrorKind
from bindeploy.tree.base import FileNode
from bindeploy.types import Binary, join_destination

logger = logging.getLogger(__name__)


def flatten(root: FileNode, flatten_dirs: bool = False) -> list[Binary]:
    """Walk the children of `root` depth-first and return one Binary per leaf.

    The root itself is never included. With `flatten_dirs` every leaf is
    named after itself alone; otherwise its destination name is the
    '/'-joined path of directories from the root.

    Order follows `children()` exactly. Leaves that flatten to the same
    name are all kept; the later one overwrites the earlier at the backend.

    Raises:
        DeployError: IO_ERROR if listing a directory fails.
    """
    return _walk(_list(root), "", flatten_dirs)


def _walk(nodes: Sequence[FileNode], parent: str, flatten_dirs: bool) -> list[Binary]:
    binaries: list[Binary] = []
    for node in nodes:
        if node.is_directory:
            prefix = parent if flatten_dirs else join_destination(parent, node.name)
            binaries.extend(_walk(_list(node), prefix, flatten_dirs))
        else:
            binary = Binary.from_file(node, parent)
            logger.debug(f"Prepare {binary.destination_name} for deployment")
            binaries.append(binary)
    return binaries


def _list(node: FileNode) -> Sequence[FileNode]:
    try:
        return node.children()
    except OSError as e:
        raise DeployError(
            ErrorKind.IO_ERROR,
            f"Cannot list directory {node.name!r}: {e}",
            cause=e,
        ) from e
