"""YAML file credential store.

File format:

    artifacts-s3:
      type: aws
      access_key_id: AKIA...
      secret_access_key: ${ARTIFACTS_SECRET_KEY}
    nexus:
      type: username_password
      username: deployer
      password: ${NEXUS_PASSWORD}
      scopes: [release-job]

Values written as ${NAME} are read from the environment at lookup time.
"""

import logging
import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel

from bindeploy.credentials.base import AwsCredential, Credential, UsernamePassword

logger = logging.getLogger(__name__)

ENV_REF_PATTERN = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


class CredentialEntry(BaseModel):
    """One entry of the credentials file."""

    type: Literal["aws", "username_password"]
    scopes: list[str] = []
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    username: str | None = None
    password: str | None = None


def _expand(value: str | None) -> str | None:
    if value is None:
        return None
    match = ENV_REF_PATTERN.match(value)
    if match is None:
        return value
    name = match.group(1)
    if name not in os.environ:
        logger.warning(f"Environment variable {name} referenced by credentials is not set")
        return None
    return os.environ[name]


class YamlCredentialStore:
    """Credential store reading a YAML mapping of ID to entry."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries: dict[str, CredentialEntry] | None = None

    def _load(self) -> dict[str, CredentialEntry]:
        if self._entries is None:
            if not self.path.exists():
                logger.debug(f"Credentials file {self.path} not found")
                self._entries = {}
            else:
                with open(self.path) as f:
                    data = yaml.safe_load(f) or {}
                self._entries = {str(k): CredentialEntry(**v) for k, v in data.items()}
        return self._entries

    def lookup(self, credentials_id: str, scope: str) -> Credential | None:
        entry = self._load().get(credentials_id)
        if entry is None:
            return None
        if entry.scopes and scope not in entry.scopes:
            logger.debug(f"Credentials {credentials_id} not visible from scope {scope!r}")
            return None

        if entry.type == "aws":
            access_key_id = _expand(entry.access_key_id)
            secret_access_key = _expand(entry.secret_access_key)
            if not access_key_id or not secret_access_key:
                return None
            return AwsCredential(
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                session_token=_expand(entry.session_token),
            )

        username = _expand(entry.username)
        password = _expand(entry.password)
        if not username or password is None:
            return None
        return UsernamePassword(username=username, password=password)
