"""Configuration helpers for the privx-cli command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path.home() / ".privx_cli" / "config.toml"
DEFAULT_BASE_URL = "https://localhost"
BASE_URL_ENV_VAR = "PRIVX_API_BASE_URL"
API_TOKEN_ENV_VAR = "PRIVX_API_TOKEN"


@dataclass(frozen=True)
class CLIConfig:
    base_url: str = DEFAULT_BASE_URL
    api_token: str | None = None
    timeout: float = 30.0
    retries: int = 0


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _to_positive_float(value: Any, field_name: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number") from exc
    if parsed <= 0:
        raise ConfigError(f"{field_name} must be greater than zero")
    return parsed


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc
    if parsed < 0:
        raise ConfigError(f"{field_name} must not be negative")
    return parsed


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if config_path.exists():
        parsed = _load_toml(config_path)
    else:
        parsed = {}

    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    env_base_url = os.getenv(BASE_URL_ENV_VAR)
    configured_base_url = str(source.get("base_url", DEFAULT_BASE_URL)).strip()
    base_url = env_base_url.strip() if env_base_url else configured_base_url
    if not base_url:
        raise ConfigError("base_url must not be empty")

    env_api_token = os.getenv(API_TOKEN_ENV_VAR)
    api_token_raw = env_api_token if env_api_token else source.get("api_token")
    api_token = str(api_token_raw).strip() or None if api_token_raw is not None else None

    timeout = _to_positive_float(source.get("timeout", 30.0), "timeout")
    retries = _to_non_negative_int(source.get("retries", 0), "retries")

    return CLIConfig(
        base_url=base_url,
        api_token=api_token,
        timeout=timeout,
        retries=retries,
    )
