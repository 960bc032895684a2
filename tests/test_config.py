"""
Tests for configuration parsing.
"""
import pytest

from bigquery_mcp.config import (
    DEFAULT_LOCATION,
    ServerConfig,
    load_environment,
    parse_args,
    validate_config,
)
from bigquery_mcp.errors import ConfigError


def test_defaults():
    config = parse_args(["--project-id", "proj"])
    assert config == ServerConfig(project_id="proj")
    assert config.location == DEFAULT_LOCATION == "us-central1"
    assert config.enumerate_resources is False
    assert config.default_max_bytes_billed == "1000000000"


def test_all_options():
    config = parse_args(
        ["--project-id", "proj", "--location", "EU", "--enumerate-resources", "--log-level", "DEBUG"]
    )
    assert config.location == "EU"
    assert config.enumerate_resources is True
    assert config.log_level == "DEBUG"


def test_project_id_is_required(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args([])
    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_unknown_argument(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--project-id", "proj", "--verbose"])
    assert exc.value.code != 0


def test_missing_value():
    with pytest.raises(SystemExit):
        parse_args(["--project-id"])


def test_blank_project_id():
    with pytest.raises(ConfigError):
        parse_args(["--project-id", "  "])


def test_blank_location():
    with pytest.raises(ConfigError):
        validate_config(ServerConfig(project_id="proj", location=""))


def test_config_is_immutable():
    config = ServerConfig(project_id="proj")
    with pytest.raises(AttributeError):
        config.project_id = "other"


def test_load_environment_reads_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("BIGQUERY_MCP_TEST_VALUE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("BIGQUERY_MCP_TEST_VALUE=hello\n")

    load_environment(env_file)

    import os
    assert os.environ["BIGQUERY_MCP_TEST_VALUE"] == "hello"
    monkeypatch.delenv("BIGQUERY_MCP_TEST_VALUE")
