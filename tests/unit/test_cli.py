"""Unit tests for the command-line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest
import respx  # noqa: TC002
from typer.testing import CliRunner

from meilisearch_lite import __version__
from meilisearch_lite.cli import app


if TYPE_CHECKING:
    from pathlib import Path


BASE_URL = "http://meili.test:7700"

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the CLI at the mocked server, away from any local config file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MEILI_MASTER_KEY", raising=False)
    monkeypatch.setenv("MEILI_MEILISEARCH__HOST", BASE_URL)
    monkeypatch.setenv("MEILI_LOGGING__FORMAT", "logfmt")


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version_option(self) -> None:
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"meili-lite version {__version__}" in result.output

    def test_verbose_and_quiet_are_exclusive(self) -> None:
        """Test --verbose and --quiet cannot be combined."""
        result = runner.invoke(app, ["--verbose", "--quiet", "config"])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """Test an explicit config file must exist."""
        result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "config"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_config_command(self, tmp_path: Path) -> None:
        """Test the effective configuration is shown without the key."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("meilisearch:\n  api_key: secret\npolling:\n  timeout: 7\n")

        result = runner.invoke(app, ["--config", str(config_file), "config"])

        assert result.exit_code == 0
        assert f"host: {BASE_URL}" in result.output
        assert "api_key: set" in result.output
        assert "secret" not in result.output
        assert "timeout=7.0s" in result.output


class TestServerCommands:
    """Tests for commands that talk to the server."""

    @pytest.mark.respx(base_url=BASE_URL)
    def test_health(self, respx_mock: respx.MockRouter) -> None:
        """Test a healthy server."""
        respx_mock.get("/health").mock(return_value=httpx.Response(204))

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "healthy" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_health_failure(self, respx_mock: respx.MockRouter) -> None:
        """Test failures are reported on stderr with exit code 1."""
        respx_mock.get("/health").mock(return_value=httpx.Response(503))

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "Error: Unaccepted status code 503" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_version(self, respx_mock: respx.MockRouter) -> None:
        """Test the server version is printed."""
        respx_mock.get("/version").mock(
            return_value=httpx.Response(
                200,
                json={
                    "commitSha": "b46889b",
                    "buildDate": "2020-06-01T10:00:00Z",
                    "pkgVersion": "0.10.1",
                },
            )
        )

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "0.10.1 (commit b46889b)" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_indexes(
        self,
        respx_mock: respx.MockRouter,
        index_json: dict[str, Any],
    ) -> None:
        """Test indexes are listed one per line."""
        respx_mock.get("/indexes").mock(return_value=httpx.Response(200, json=[index_json]))

        result = runner.invoke(app, ["indexes"])

        assert result.exit_code == 0
        assert "movies\tMovies\tid" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_search(self, respx_mock: respx.MockRouter) -> None:
        """Test hits are printed as JSON lines."""
        route = respx_mock.post("/indexes/movies/search").mock(
            return_value=httpx.Response(
                200,
                json={
                    "hits": [{"id": 1, "title": "Carol"}],
                    "nbHits": 1,
                    "offset": 0,
                    "limit": 5,
                    "processingTimeMs": 1,
                    "query": "carol",
                },
            )
        )

        result = runner.invoke(app, ["search", "movies", "carol", "--limit", "5"])

        assert result.exit_code == 0
        assert json.dumps({"id": 1, "title": "Carol"}) in result.output
        assert json.loads(route.calls.last.request.content) == {"q": "carol", "limit": 5}

    @pytest.mark.respx(base_url=BASE_URL)
    def test_placeholder_search(self, respx_mock: respx.MockRouter) -> None:
        """Test an empty query runs a placeholder search."""
        route = respx_mock.post("/indexes/movies/search").mock(
            return_value=httpx.Response(200, json={"hits": []})
        )

        result = runner.invoke(app, ["search", "movies"])

        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == {}


class TestWaitCommand:
    """Tests for the wait command."""

    @pytest.mark.respx(base_url=BASE_URL)
    def test_wait_processed(self, respx_mock: respx.MockRouter) -> None:
        """Test a processed update exits successfully."""
        respx_mock.get("/indexes/movies/updates/4").mock(
            return_value=httpx.Response(200, json={"updateId": 4, "status": "processed"})
        )

        result = runner.invoke(app, ["wait", "movies", "4"])

        assert result.exit_code == 0
        assert "processed" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_wait_failed(self, respx_mock: respx.MockRouter) -> None:
        """Test a failed update exits with code 1."""
        respx_mock.get("/indexes/movies/updates/4").mock(
            return_value=httpx.Response(200, json={"updateId": 4, "status": "failed"})
        )

        result = runner.invoke(app, ["wait", "movies", "4"])

        assert result.exit_code == 1
        assert "failed" in result.output

    @pytest.mark.respx(base_url=BASE_URL)
    def test_wait_timeout(self, respx_mock: respx.MockRouter) -> None:
        """Test an update that stays enqueued times out."""
        respx_mock.get("/indexes/movies/updates/4").mock(
            return_value=httpx.Response(200, json={"updateId": 4, "status": "enqueued"})
        )

        result = runner.invoke(
            app,
            ["wait", "movies", "4", "--timeout", "0.1", "--interval", "0.02"],
        )

        assert result.exit_code == 1
        assert "did not complete within 0.1s" in result.output
