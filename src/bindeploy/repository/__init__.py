"""Upload backends."""

from bindeploy.config import DeployerConfig, HttpConfig, ObjectStoreConfig
from bindeploy.credentials.base import CredentialStore
from bindeploy.repository.base import Repository
from bindeploy.repository.http import HttpRepository
from bindeploy.repository.s3 import ObjectStoreRepository

__all__ = [
    "HttpRepository",
    "ObjectStoreRepository",
    "Repository",
    "create_repository",
]


def create_repository(config: DeployerConfig, credentials: CredentialStore) -> Repository:
    """Build the repository backend selected by `config.repository.type`."""
    repo_config = config.repository
    if isinstance(repo_config, ObjectStoreConfig):
        return ObjectStoreRepository(repo_config, credentials, max_workers=config.max_workers)
    if isinstance(repo_config, HttpConfig):
        return HttpRepository(repo_config, credentials, max_workers=config.max_workers)
    raise ValueError(f"Unknown repository type: {repo_config.type}")
