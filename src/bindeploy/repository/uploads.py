"""Fail-fast upload sequencing shared by the repository backends."""

import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Sequence

from bindeploy.errors import DeployError, ErrorKind
from bindeploy.types import Binary, DeployResult, ExecutionContext

logger = logging.getLogger(__name__)

UploadFn = Callable[[Binary], None]


def _cancelled(binary: Binary) -> DeployError:
    return DeployError(ErrorKind.CANCELLED, "Deployment cancelled before upload started", binary)


def run_uploads(
    binaries: Sequence[Binary],
    upload: UploadFn,
    ctx: ExecutionContext,
    max_workers: int = 1,
) -> DeployResult:
    """Upload binaries, stopping at the first failure.

    `upload` must raise DeployError for any failure it can attribute to a
    binary; other exceptions propagate unchanged.

    With max_workers == 1 uploads happen strictly in order. With more
    workers, no new upload is started once a failure is seen, the failure
    reported is the one with the lowest index, and `succeeded_count` only
    includes uploads that finished before the failure was observed.
    """
    if max_workers <= 1:
        return _run_sequential(binaries, upload, ctx)
    return _run_pooled(binaries, upload, ctx, max_workers)


def _run_sequential(binaries: Sequence[Binary], upload: UploadFn, ctx: ExecutionContext) -> DeployResult:
    succeeded = 0
    for binary in binaries:
        if ctx.cancelled:
            return DeployResult(succeeded, _cancelled(binary))
        try:
            upload(binary)
        except DeployError as e:
            return DeployResult(succeeded, e)
        succeeded += 1
    return DeployResult(succeeded)


def _run_pooled(
    binaries: Sequence[Binary],
    upload: UploadFn,
    ctx: ExecutionContext,
    max_workers: int,
) -> DeployResult:
    queue = iter(enumerate(binaries))
    pending: dict[Future, int] = {}
    failures: dict[int, DeployError] = {}
    succeeded = 0

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="bindeploy-upload") as pool:

        def submit_next() -> bool:
            for index, binary in queue:
                if ctx.cancelled:
                    failures[index] = _cancelled(binary)
                    return False
                pending[pool.submit(upload, binary)] = index
                return True
            return False

        while len(pending) < max_workers and submit_next():
            pass

        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            aborted = bool(failures)
            for future in done:
                index = pending.pop(future)
                try:
                    future.result()
                except DeployError as e:
                    failures[index] = e
                    continue
                if not aborted:
                    succeeded += 1

            if failures:
                if pending:
                    logger.debug(f"Upload failed, waiting for {len(pending)} in-flight upload(s)")
                continue
            while len(pending) < max_workers and submit_next():
                pass

    if failures:
        return DeployResult(succeeded, failures[min(failures)])
    return DeployResult(succeeded)
