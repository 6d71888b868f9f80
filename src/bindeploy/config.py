"""Configuration models for bindeploy."""

from pathlib import Path
from typing import Annotated, Literal, Union

import httpx
import yaml
from pydantic import BaseModel, Field, field_validator


def validate_http_url(v: str, what: str) -> str:
    """Require an absolute http(s) URI."""
    try:
        url = httpx.URL(v)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid URI for {what}: {v!r}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"{what} must be an absolute http(s) URI: {v!r}")
    return v


class ObjectStoreConfig(BaseModel):
    """S3-compatible object store repository."""

    type: Literal["s3"] = "s3"
    credentials_id: str
    bucket_name: str
    region: str | None = None
    endpoint_url: str | None = None  # MinIO, localstack, ...
    max_attempts: int | None = None  # SDK retry attempts; None keeps the SDK default

    @field_validator("bucket_name")
    @classmethod
    def validate_bucket(cls, v: str) -> str:
        if not v or "/" in v:
            raise ValueError(f"Invalid bucket name: {v!r}")
        return v

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_http_url(v, "Endpoint URL")


class HttpConfig(BaseModel):
    """HTTP upload endpoint repository."""

    type: Literal["http"] = "http"
    remote_location: str
    credentials_id: str | None = None
    timeout: float = 30.0

    @field_validator("remote_location")
    @classmethod
    def validate_remote_location(cls, v: str) -> str:
        return validate_http_url(v, "Remote location")


RepositoryConfig = Annotated[Union[ObjectStoreConfig, HttpConfig], Field(discriminator="type")]


class DeployerConfig(BaseModel):
    """Main bindeploy configuration."""

    repository: RepositoryConfig
    flatten: bool = False
    max_workers: int = Field(default=1, ge=1)
    credentials_file: str = ".bindeploy/credentials.yaml"


def load_config(path: Path) -> DeployerConfig:
    """Load configuration from YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return DeployerConfig(**(data or {}))


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# bindeploy configuration

repository:
  type: http  # 'http' (POST to an upload endpoint) or 's3' (object store)
  remote_location: https://repo.example.com/releases/
  # credentials_id: nexus  # Omit for unauthenticated uploads
  timeout: 30

  # Object store settings (type: s3)
  # credentials_id: artifacts-s3
  # bucket_name: my-build-artifacts
  # region: us-east-1
  # endpoint_url: http://localhost:9000  # S3-compatible services
  # max_attempts: 3

# Drop the directory structure and upload every file under its own name.
# Files with the same name overwrite each other; the last one listed wins.
flatten: false

# Uploads in flight at once. 1 uploads strictly in order.
max_workers: 1

# Credentials by ID. Values like ${ENV_VAR} are read from the environment.
credentials_file: .bindeploy/credentials.yaml
"""
