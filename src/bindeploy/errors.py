"""Error types for deployments."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bindeploy.types import Binary


class ErrorKind(str, Enum):
    """Categories of deployment failure."""

    INVALID_ARGUMENT = "invalid_argument"
    IO_ERROR = "io_error"
    CREDENTIALS_NOT_FOUND = "credentials_not_found"
    TRANSPORT = "transport"
    REMOTE_REJECTED = "remote_rejected"
    CANCELLED = "cancelled"


class DeployError(Exception):
    """A failed deployment step.

    Carries the failing binary (if the failure is tied to one), the
    underlying cause, and for rejected HTTP uploads the response status line.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        binary: Binary | None = None,
        cause: BaseException | None = None,
        status_line: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.binary = binary
        self.cause = cause
        self.status_line = status_line

    @property
    def binary_name(self) -> str | None:
        return self.binary.destination_name if self.binary is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.binary is not None:
            return f"{self.binary.destination_name}: {message}"
        return message
