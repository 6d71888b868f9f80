"""In-process credential store."""

from bindeploy.credentials.base import Credential


class MemoryCredentialStore:
    """Credential store backed by a dict.

    Entries registered with `scopes` are only visible from those scopes.
    """

    def __init__(self):
        self._entries: dict[str, tuple[Credential, frozenset[str]]] = {}

    def add(self, credentials_id: str, credential: Credential, scopes: list[str] | None = None) -> None:
        self._entries[credentials_id] = (credential, frozenset(scopes or ()))

    def lookup(self, credentials_id: str, scope: str) -> Credential | None:
        entry = self._entries.get(credentials_id)
        if entry is None:
            return None
        credential, scopes = entry
        if scopes and scope not in scopes:
            return None
        return credential
