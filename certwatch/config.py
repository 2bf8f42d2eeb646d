from __future__ import annotations

from pathlib import Path
from typing import Literal

import os

import yaml

import tomllib

_toml_loads = tomllib.loads

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_IGNORE_HOSTNAMES = ["localhost", "localhost.localdomain"]

# Environment variables mapped onto Settings fields.
_ENV_OVERRIDES = {
    "CERTWATCH_WARN_PERIOD": "warn_period",
    "CERTWATCH_WARN_ADDRESS": "warn_address",
    "CERTWATCH_LOG_DIR": "log_dir",
    "CERTWATCH_EXIT_MODE": "exit_mode",
}


class Settings(BaseModel):
    warn_period: int = Field(30, ge=0)
    warn_address: str = "root"
    quiet: bool = False

    # Locally generated default certificates are never reported.
    ignore_hostnames: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_HOSTNAMES)
    )

    exit_mode: Literal["legacy", "status"] = "legacy"
    log_dir: str | None = None

    @field_validator("warn_address")
    @classmethod
    def _address_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("warn_address must not be empty")
        return value


def load_config_dict(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"config file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    raw: dict
    if suffix == ".toml":
        raw = _toml_loads(text)
    elif suffix in {".yaml", ".yml"}:
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid yaml in {path}: {exc}") from exc
    else:
        raise ValueError(f"unsupported config format: {suffix}")

    # Settings may live under a [certwatch] table or at the top level.
    section = raw.get("certwatch", raw) if isinstance(raw, dict) else raw
    if not isinstance(section, dict):
        raise ValueError(f"config section must be a table: {path}")
    return section


def _env_overrides(env: dict[str, str]) -> dict:
    values: dict = {}
    for key, field in _ENV_OVERRIDES.items():
        if env.get(key):
            values[field] = env[key]
    return values


def load_settings(
    config_file: str | None = None,
    *,
    overrides: dict | None = None,
    env: dict[str, str] | None = None,
) -> Settings:
    """Merge defaults, config file, environment and explicit overrides.

    Later sources win. Overrides whose value is None are ignored so unset
    command line options fall through to the file or the default.
    """

    if env is None:
        # Load dotenv from the working directory (optional)
        load_dotenv(dotenv_path=Path(".env"), override=False)
        env = dict(os.environ)

    merged: dict = {}

    config_filename = config_file or env.get("CERTWATCH_CONFIG_FILE")
    if config_filename:
        merged.update(load_config_dict(Path(config_filename)))

    merged.update(_env_overrides(env))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    return Settings.model_validate(merged)
