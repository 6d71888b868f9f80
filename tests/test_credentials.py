"""Tests for credential stores."""

import pytest

from bindeploy.credentials import (
    AwsCredential,
    MemoryCredentialStore,
    UsernamePassword,
    YamlCredentialStore,
)
from bindeploy.credentials.base import resolve_credential
from bindeploy.errors import DeployError, ErrorKind

CREDENTIALS_YAML = """
artifacts-s3:
  type: aws
  access_key_id: AKIAEXAMPLE
  secret_access_key: ${TEST_S3_SECRET}
nexus:
  type: username_password
  username: deployer
  password: plain-password
  scopes: [release]
"""


@pytest.fixture
def yaml_store(tmp_path):
    path = tmp_path / "credentials.yaml"
    path.write_text(CREDENTIALS_YAML)
    return YamlCredentialStore(path)


class TestYamlCredentialStore:
    def test_expands_environment(self, yaml_store, monkeypatch):
        monkeypatch.setenv("TEST_S3_SECRET", "from-env")

        credential = yaml_store.lookup("artifacts-s3", "any")

        assert isinstance(credential, AwsCredential)
        assert credential.access_key_id == "AKIAEXAMPLE"
        assert credential.secret_access_key.get_secret_value() == "from-env"

    def test_unset_environment_variable(self, yaml_store, monkeypatch):
        monkeypatch.delenv("TEST_S3_SECRET", raising=False)
        assert yaml_store.lookup("artifacts-s3", "any") is None

    def test_username_password(self, yaml_store):
        credential = yaml_store.lookup("nexus", "release")

        assert isinstance(credential, UsernamePassword)
        assert credential.username == "deployer"
        assert credential.password.get_secret_value() == "plain-password"

    def test_scope_restriction(self, yaml_store):
        assert yaml_store.lookup("nexus", "nightly") is None

    def test_unknown_id(self, yaml_store):
        assert yaml_store.lookup("missing", "release") is None

    def test_missing_file(self, tmp_path):
        store = YamlCredentialStore(tmp_path / "nope.yaml")
        assert store.lookup("anything", "") is None

    def test_secrets_hidden_in_repr(self, yaml_store):
        credential = yaml_store.lookup("nexus", "release")
        assert "plain-password" not in repr(credential)


class TestResolveCredential:
    def test_returns_matching_type(self):
        store = MemoryCredentialStore()
        store.add("id", UsernamePassword(username="u", password="p"))

        credential = resolve_credential(store, "id", "", UsernamePassword)

        assert credential.username == "u"

    def test_missing(self):
        with pytest.raises(DeployError) as exc_info:
            resolve_credential(MemoryCredentialStore(), "id", "job", UsernamePassword)
        assert exc_info.value.kind == ErrorKind.CREDENTIALS_NOT_FOUND

    def test_wrong_type(self):
        store = MemoryCredentialStore()
        store.add("id", UsernamePassword(username="u", password="p"))

        with pytest.raises(DeployError, match="not of type AwsCredential"):
            resolve_credential(store, "id", "", AwsCredential)
