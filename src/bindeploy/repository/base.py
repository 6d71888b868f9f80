"""Repository protocol."""

from typing import Protocol, Sequence

from bindeploy.types import Binary, DeployResult, ExecutionContext


class Repository(Protocol):
    """Protocol for upload backends.

    Implementations upload binaries in the given order and stop at the
    first failure. Nothing is retried beyond what the backend is configured
    to do, and nothing already uploaded is rolled back. Network clients live
    for a single `deploy` call.
    """

    def deploy(self, binaries: Sequence[Binary], ctx: ExecutionContext) -> DeployResult:
        """Upload binaries. Failures are reported in the result, not raised."""
        ...
