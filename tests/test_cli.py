"""Tests for the CLI."""

import signal

import httpx
import pytest
from typer.testing import CliRunner

from bindeploy import cli
from bindeploy.repository import HttpRepository

runner = CliRunner()

CONFIG_YAML = """
repository:
  type: http
  remote_location: https://repo.example.com/files
"""


@pytest.fixture
def artifacts(tmp_path):
    root = tmp_path / "dist"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    return root


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bindeploy.yaml").write_text(CONFIG_YAML)
    return tmp_path


def mock_repository(monkeypatch, status=201, on_request=None):
    requests = []

    def handler(request):
        requests.append(request)
        if on_request is not None:
            on_request(request)
        return httpx.Response(status)

    def create(config, credentials):
        return HttpRepository(config.repository, credentials, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "create_repository", create)
    return requests


class TestPlan:
    def test_lists_destinations(self, artifacts):
        result = runner.invoke(cli.app, ["plan", str(artifacts)])

        assert result.exit_code == 0
        assert "a.txt" in result.output
        assert "sub/b.txt" in result.output

    def test_flatten_warns_on_collisions(self, artifacts):
        (artifacts / "b.txt").write_text("top")

        result = runner.invoke(cli.app, ["plan", str(artifacts), "--flatten"])

        assert result.exit_code == 0
        assert "last one wins" in result.output

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(cli.app, ["plan", str(tmp_path / "nope")])
        assert result.exit_code == 1


class TestDeploy:
    def test_success(self, artifacts, workdir, monkeypatch):
        requests = mock_repository(monkeypatch)

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 0, result.output
        assert "Deployed 2 file(s)" in result.output
        assert [str(r.url) for r in requests] == [
            "https://repo.example.com/files/a.txt",
            "https://repo.example.com/files/sub/b.txt",
        ]

    def test_flatten_override(self, artifacts, workdir, monkeypatch):
        requests = mock_repository(monkeypatch)

        result = runner.invoke(cli.app, ["deploy", str(artifacts), "--flatten"])

        assert result.exit_code == 0, result.output
        assert str(requests[1].url) == "https://repo.example.com/files/b.txt"

    def test_rejected_upload_fails(self, artifacts, workdir, monkeypatch):
        requests = mock_repository(monkeypatch, status=403)

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 1
        assert "Deployment failed" in result.output
        assert "a.txt" in result.output
        assert len(requests) == 1

    def test_missing_config(self, artifacts, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 1
        assert "not found" in result.output


    def test_invalid_config(self, artifacts, workdir, monkeypatch):
        requests = mock_repository(monkeypatch)
        (workdir / "bindeploy.yaml").write_text(CONFIG_YAML + "max_workers: 0\n")

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
        assert isinstance(result.exception, SystemExit)
        assert requests == []

    def test_malformed_yaml(self, artifacts, workdir, monkeypatch):
        mock_repository(monkeypatch)
        (workdir / "bindeploy.yaml").write_text("repository: [unclosed\n")

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_interrupt_cancels_remaining_uploads(self, artifacts, workdir, monkeypatch):
        installed = []
        previous = object()

        def fake_signal(signum, handler):
            installed.append((signum, handler))
            return previous

        monkeypatch.setattr(cli.signal, "signal", fake_signal)

        def interrupt(request):
            # first registered handler is the one bindeploy installed
            installed[0][1](signal.SIGINT, None)

        requests = mock_repository(monkeypatch, on_request=interrupt)

        result = runner.invoke(cli.app, ["deploy", str(artifacts)])

        assert result.exit_code == 1
        assert "Interrupted" in result.output
        assert "cancelled" in result.output
        assert "sub/b.txt" in result.output
        assert len(requests) == 1
        assert installed[0][0] == signal.SIGINT
        assert installed[-1] == (signal.SIGINT, previous)


class TestInit:
    def test_writes_template(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli.app, ["init"])

        assert result.exit_code == 0
        assert (tmp_path / "bindeploy.yaml").exists()
