"""bindeploy - publish build artifacts to a remote repository."""

from bindeploy.deployer import BinaryDeployer
from bindeploy.errors import DeployError, ErrorKind
from bindeploy.flatten import flatten
from bindeploy.types import Binary, BuildResult, DeployResult, ExecutionContext

__all__ = [
    "Binary",
    "BinaryDeployer",
    "BuildResult",
    "DeployError",
    "DeployResult",
    "ErrorKind",
    "ExecutionContext",
    "flatten",
]
