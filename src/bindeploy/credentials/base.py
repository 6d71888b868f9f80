"""Credential types and the CredentialStore protocol."""

from typing import Protocol, TypeVar

from pydantic import BaseModel, SecretStr

from bindeploy.errors import DeployError, ErrorKind


class AwsCredential(BaseModel):
    """Access key pair for an object store."""

    access_key_id: str
    secret_access_key: SecretStr
    session_token: SecretStr | None = None


class UsernamePassword(BaseModel):
    """Username and password for HTTP basic authentication."""

    username: str
    password: SecretStr


Credential = AwsCredential | UsernamePassword

C = TypeVar("C", AwsCredential, UsernamePassword)


class CredentialStore(Protocol):
    """Protocol for looking up stored credentials."""

    def lookup(self, credentials_id: str, scope: str) -> Credential | None:
        """Find a credential by ID as visible from `scope`. Returns None if absent."""
        ...


def resolve_credential(
    store: CredentialStore,
    credentials_id: str,
    scope: str,
    kind: type[C],
) -> C:
    """Look up a credential of a specific type.

    Raises:
        DeployError: CREDENTIALS_NOT_FOUND if absent or of another type.
    """
    credential = store.lookup(credentials_id, scope)
    if credential is None:
        raise DeployError(
            ErrorKind.CREDENTIALS_NOT_FOUND,
            f"No credentials with ID {credentials_id!r} in scope {scope!r}",
        )
    if not isinstance(credential, kind):
        raise DeployError(
            ErrorKind.CREDENTIALS_NOT_FOUND,
            f"Credentials {credentials_id!r} are not of type {kind.__name__}",
        )
    return credential
