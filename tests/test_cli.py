"""Tests for the cgikit console command (cgikit._cli)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cgikit._cli import CGI_HEADER, main
from cgikit.testing import encode_multipart, make_environ, multipart_environ


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _isolated_env(**overrides: str | None) -> dict[str, str | None]:
    """CliRunner env: the given CGI variables, every other CGI variable unset."""
    env: dict[str, str | None] = {
        name: None
        for name in ("QUERY_STRING", "CONTENT_TYPE", "CONTENT_LENGTH", "NOCGI")
    }
    env.update(make_environ(**overrides))
    return env


class TestMain:
    def test_text_dump_of_get(self, runner: CliRunner) -> None:
        result = runner.invoke(main, [], env=_isolated_env(QUERY_STRING="name=Alice"))
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes.startswith(CGI_HEADER.encode())
        assert "                name\t[Alice]\n" in result.output
        assert "         SERVER_NAME\t[localhost]\n" in result.output

    def test_json_dump_of_multipart_post(self, runner: CliRunner) -> None:
        body = encode_multipart([("f", "hello"), ("f", "again")])
        env = _isolated_env()
        env.update(multipart_environ(body))
        result = runner.invoke(main, ["--json"], env=env, input=body)
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout_bytes[len(CGI_HEADER) :])
        assert payload["f"] == ["hello", "again"]
        assert payload["REQUEST_METHOD"] == ["POST"]

    def test_check_active(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--check"], env=_isolated_env())
        assert result.exit_code == 0
        assert result.output == ""

    def test_check_disabled(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--check"], env=_isolated_env(NOCGI="1"))
        assert result.exit_code == 1

    def test_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "decoder.yaml"
        path.write_text("fields: [QUERY_STRING]\n")
        result = runner.invoke(
            main, ["--config", str(path)], env=_isolated_env(QUERY_STRING="a=1")
        )
        assert result.exit_code == 0, result.output
        assert "SERVER_NAME" not in result.output
        assert "                   a\t[1]\n" in result.output

    def test_bad_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "decoder.yaml"
        path.write_text("bogus: 1\n")
        result = runner.invoke(main, ["--config", str(path)], env=_isolated_env())
        assert result.exit_code == 1
        assert "unknown config keys" in result.output
