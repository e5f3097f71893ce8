from __future__ import annotations

import pytest

from privx_cli.cli.config import ConfigError, load_cli_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PRIVX_API_BASE_URL", raising=False)
    monkeypatch.delenv("PRIVX_API_TOKEN", raising=False)


def test_defaults_when_file_missing(tmp_path) -> None:
    config = load_cli_config(tmp_path / "missing.toml")
    assert config.base_url == "https://localhost"
    assert config.api_token is None
    assert config.timeout == 30.0
    assert config.retries == 0


def test_file_values_used(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        'base_url = "https://privx.example"\napi_token = "file-token"\ntimeout = 5\nretries = 2\n',
        encoding="utf-8",
    )
    config = load_cli_config(config_path)
    assert config.base_url == "https://privx.example"
    assert config.api_token == "file-token"
    assert config.timeout == 5.0
    assert config.retries == 2


def test_cli_table_is_supported(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[cli]\nbase_url = "https://table.example"\n', encoding="utf-8")
    assert load_cli_config(config_path).base_url == "https://table.example"


def test_env_overrides_config_file(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        'base_url = "https://file.example"\napi_token = "from_file"\n', encoding="utf-8"
    )
    monkeypatch.setenv("PRIVX_API_BASE_URL", "https://env.example")
    monkeypatch.setenv("PRIVX_API_TOKEN", "from_env")
    config = load_cli_config(config_path)
    assert config.base_url == "https://env.example"
    assert config.api_token == "from_env"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("timeout = 0\n", "timeout must be greater than zero"),
        ('timeout = "soon"\n', "timeout must be a number"),
        ("retries = -1\n", "retries must not be negative"),
        ("retries = true\n", "retries must be an integer"),
        ('base_url = "  "\n', "base_url must not be empty"),
        ('cli = "flat"\n', r"\[cli\] must be a table"),
        ("base_url = \n", "invalid TOML"),
    ],
)
def test_invalid_values_raise(tmp_path, content: str, message: str) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_cli_config(config_path)


def test_unreadable_config_path_raises_config_error(tmp_path) -> None:
    with pytest.raises(ConfigError, match="cannot read config file"):
        load_cli_config(tmp_path)
