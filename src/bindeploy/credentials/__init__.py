"""Credential lookup."""

from bindeploy.credentials.base import AwsCredential, Credential, CredentialStore, UsernamePassword
from bindeploy.credentials.memory import MemoryCredentialStore
from bindeploy.credentials.yaml_store import YamlCredentialStore

__all__ = [
    "AwsCredential",
    "Credential",
    "CredentialStore",
    "MemoryCredentialStore",
    "UsernamePassword",
    "YamlCredentialStore",
]
