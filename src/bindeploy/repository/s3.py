"""S3-compatible object store repository using boto3."""

import logging
from typing import Any, Callable, Sequence

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from bindeploy.config import ObjectStoreConfig
from bindeploy.credentials.base import AwsCredential, CredentialStore, resolve_credential
from bindeploy.errors import DeployError, ErrorKind
from bindeploy.repository.uploads import run_uploads
from bindeploy.types import Binary, DeployResult, ExecutionContext

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ObjectStoreConfig, AwsCredential], Any]


def create_s3_client(config: ObjectStoreConfig, credential: AwsCredential):
    """Create a boto3 S3 client for one deploy call."""
    session = boto3.session.Session(
        aws_access_key_id=credential.access_key_id,
        aws_secret_access_key=credential.secret_access_key.get_secret_value(),
        aws_session_token=(
            credential.session_token.get_secret_value() if credential.session_token else None
        ),
        region_name=config.region,
    )

    client_kwargs: dict[str, Any] = {}
    if config.endpoint_url:
        client_kwargs["endpoint_url"] = config.endpoint_url
    if config.max_attempts is not None:
        client_kwargs["config"] = Config(retries={"max_attempts": config.max_attempts})

    return session.client("s3", **client_kwargs)


class ObjectStoreRepository:
    """Uploads each binary as one object, keyed by its destination name."""

    def __init__(
        self,
        config: ObjectStoreConfig,
        credentials: CredentialStore,
        max_workers: int = 1,
        client_factory: ClientFactory = create_s3_client,
    ):
        self.config = config
        self.credentials = credentials
        self.max_workers = max_workers
        self._client_factory = client_factory

    @property
    def bucket_name(self) -> str:
        return self.config.bucket_name

    def deploy(self, binaries: Sequence[Binary], ctx: ExecutionContext) -> DeployResult:
        if not binaries:
            return DeployResult()

        logger.debug(f"Will deploy {len(binaries)} file(s) to S3::{self.bucket_name}")
        try:
            credential = resolve_credential(
                self.credentials, self.config.credentials_id, ctx.scope, AwsCredential
            )
        except DeployError as e:
            return DeployResult(failure=e)

        try:
            client = self._client_factory(self.config, credential)
        except (BotoCoreError, ValueError) as e:
            logger.warning(f"Cannot create S3 client for S3::{self.bucket_name}: {e}")
            return DeployResult(
                failure=DeployError(ErrorKind.TRANSPORT, f"Cannot create S3 client: {e}", cause=e)
            )

        try:
            return run_uploads(
                binaries,
                lambda binary: self._upload(client, binary),
                ctx,
                self.max_workers,
            )
        finally:
            client.close()

    def _upload(self, client, binary: Binary) -> None:
        name = binary.destination_name
        size = binary.size
        if size is None or size < 0:
            raise DeployError(
                ErrorKind.INVALID_ARGUMENT,
                "Size must be known before uploading to an object store",
                binary,
            )

        logger.debug(f"Preparing upload for {name} to S3::{self.bucket_name}")
        try:
            stream = binary.open()
        except OSError as e:
            raise DeployError(ErrorKind.IO_ERROR, f"Cannot open file: {e}", binary, cause=e) from e

        with stream:
            try:
                client.put_object(
                    Bucket=self.bucket_name,
                    Key=name,
                    Body=stream,
                    ContentLength=size,
                )
            except (BotoCoreError, ClientError) as e:
                logger.warning(f"Cannot deploy file {name} to S3::{self.bucket_name}: {e}")
                raise DeployError(ErrorKind.TRANSPORT, f"Upload failed: {e}", binary, cause=e) from e
            except OSError as e:
                raise DeployError(ErrorKind.IO_ERROR, f"Cannot read file: {e}", binary, cause=e) from e

        logger.debug(f"Deployed {name} to S3::{self.bucket_name}")
