"""Deployment orchestration: flatten the artifact tree and hand it to a repository."""

import logging

from bindeploy.errors import DeployError
from bindeploy.flatten import flatten
from bindeploy.repository.base import Repository
from bindeploy.tree.base import FileNode
from bindeploy.types import Binary, DeployResult, ExecutionContext

logger = logging.getLogger(__name__)


class BinaryDeployer:
    """Build-step entry point.

    Retries are not attempted here; whatever the backend reports is final.
    A failed deploy marks the execution context as failed. Files uploaded
    before the failure stay uploaded.
    """

    def __init__(self, repository: Repository, flatten: bool = False):
        self.repository = repository
        self.flatten = flatten

    def plan(self, root: FileNode) -> list[Binary]:
        """Return the binaries a deploy of `root` would upload, in order."""
        return flatten(root, self.flatten)

    def perform(self, root: FileNode, ctx: ExecutionContext) -> DeployResult:
        logger.info("Deploying files")
        try:
            binaries = self.plan(root)
        except DeployError as e:
            logger.error(f"Cannot collect files to deploy: {e}")
            ctx.mark_failed()
            return DeployResult(failure=e)
        except BaseException:
            ctx.mark_failed()
            raise

        try:
            result = self.repository.deploy(binaries, ctx)
        except BaseException:
            # unexpected errors fail the build and propagate
            ctx.mark_failed()
            raise

        if result.failure is not None:
            ctx.mark_failed()
            logger.error(
                f"Deployment failed after {result.succeeded_count}/{len(binaries)} file(s): "
                f"{result.failure}"
            )
        else:
            logger.info(f"Deployed {result.succeeded_count} file(s)")
        return result
