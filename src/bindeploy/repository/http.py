"""HTTP upload endpoint repository using httpx."""

import logging
from typing import Sequence

import httpx

from bindeploy.config import HttpConfig
from bindeploy.credentials.base import CredentialStore, UsernamePassword, resolve_credential
from bindeploy.errors import DeployError, ErrorKind
from bindeploy.repository.uploads import run_uploads
from bindeploy.types import Binary, DeployResult, ExecutionContext

logger = logging.getLogger(__name__)


def normalize_location(remote_location: str) -> str:
    """Ensure the base location ends with '/'."""
    if not remote_location.endswith("/"):
        remote_location += "/"
    return remote_location


class HttpRepository:
    """POSTs each binary to `remote_location + destination_name`.

    Bodies are read fully before sending, so an auth round-trip never
    consumes the source stream twice. The transport never retries.
    """

    def __init__(
        self,
        config: HttpConfig,
        credentials: CredentialStore | None = None,
        max_workers: int = 1,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config
        self.remote_location = normalize_location(config.remote_location)
        self.credentials = credentials
        self.max_workers = max_workers
        self._transport = transport

    def deploy(self, binaries: Sequence[Binary], ctx: ExecutionContext) -> DeployResult:
        if not binaries:
            return DeployResult()

        try:
            auth = self._resolve_auth(ctx)
        except DeployError as e:
            return DeployResult(failure=e)

        with self._create_client(auth) as client:
            return run_uploads(
                binaries,
                lambda binary: self._upload(client, binary),
                ctx,
                self.max_workers,
            )

    def _resolve_auth(self, ctx: ExecutionContext) -> httpx.BasicAuth | None:
        credentials_id = self.config.credentials_id
        if not credentials_id:
            return None
        if self.credentials is None:
            raise DeployError(
                ErrorKind.CREDENTIALS_NOT_FOUND,
                f"No credential store configured to resolve {credentials_id!r}",
            )
        credential = resolve_credential(self.credentials, credentials_id, ctx.scope, UsernamePassword)
        # BasicAuth sends the header up front instead of waiting for a 401
        return httpx.BasicAuth(credential.username, credential.password.get_secret_value())

    def _create_client(self, auth: httpx.BasicAuth | None) -> httpx.Client:
        transport = self._transport or httpx.HTTPTransport(retries=0)
        return httpx.Client(auth=auth, timeout=self.config.timeout, transport=transport)

    def _upload(self, client: httpx.Client, binary: Binary) -> None:
        name = binary.destination_name
        url = self.remote_location + name

        try:
            with binary.open() as stream:
                body = stream.read()
        except OSError as e:
            raise DeployError(ErrorKind.IO_ERROR, f"Cannot read file: {e}", binary, cause=e) from e

        try:
            response = client.post(url, content=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Cannot deploy file {name}: {e}")
            raise DeployError(ErrorKind.TRANSPORT, f"Upload failed: {e}", binary, cause=e) from e

        if not 200 <= response.status_code < 300:
            status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}"
            logger.warning(f"Cannot deploy file {name}. Response from target was {response.status_code}")
            raise DeployError(ErrorKind.REMOTE_REJECTED, status_line, binary, status_line=status_line)

        logger.debug(f"Deployed {name} to {self.remote_location}")
