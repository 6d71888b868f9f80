"""Core type definitions for bindeploy."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from bindeploy.errors import DeployError, ErrorKind
from bindeploy.tree.base import FileNode


def join_destination(parent: str, name: str) -> str:
    """Join a parent prefix and a file name with '/'.

    An empty parent stays empty; a non-empty parent gets a trailing '/'
    if it lacks one.
    """
    if parent and not parent.endswith("/"):
        parent += "/"
    return parent + name


class BuildResult(str, Enum):
    """Outcome recorded on an execution context."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Binary:
    """A leaf file paired with its destination name under the target root."""

    file: FileNode
    destination_name: str

    def __post_init__(self):
        if not self.destination_name:
            raise DeployError(ErrorKind.INVALID_ARGUMENT, "Destination name must not be empty")
        if self.destination_name.startswith("/"):
            raise DeployError(
                ErrorKind.INVALID_ARGUMENT,
                f"Destination name must be relative: {self.destination_name!r}",
            )

    @classmethod
    def from_file(cls, file: FileNode, parent: str | None = "") -> Binary:
        """Build a Binary named after the file, optionally under a parent prefix."""
        if parent is None:
            raise DeployError(ErrorKind.INVALID_ARGUMENT, "Parent shouldn't be None")
        return cls(file, join_destination(parent, file.name))

    @property
    def size(self) -> int | None:
        return self.file.size

    def open(self) -> BinaryIO:
        return self.file.open_stream()


@dataclass
class ExecutionContext:
    """Identity and status of one deploy invocation.

    `scope` selects which credentials are visible; `result` is flipped to
    FAILURE by the orchestrator when a deploy fails.
    """

    run_id: str
    scope: str = ""
    result: BuildResult = BuildResult.SUCCESS
    _cancel_event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    def mark_failed(self) -> None:
        self.result = BuildResult.FAILURE

    def cancel(self) -> None:
        """Signal that no further uploads should start."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()


@dataclass
class DeployResult:
    """Outcome of one Repository.deploy call."""

    succeeded_count: int = 0
    failure: DeployError | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure
