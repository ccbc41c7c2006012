"""starchain.core.config

Two config surfaces only:
1) `config/default.yaml` (optionally `config/user.yaml`)
2) Environment variables (`STARCHAIN_` prefix, `__` for nesting)

Everything else is derived.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from starchain import CHALLENGE_TAG, CHALLENGE_WINDOW_SECONDS, GENESIS_DATA
from starchain.core.exceptions import ConfigError


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class LedgerConfig(BaseModel):
    challenge_window_seconds: int = CHALLENGE_WINDOW_SECONDS
    challenge_tag: str = CHALLENGE_TAG
    genesis_data: str = GENESIS_DATA
    require_address_match: bool = False

    @field_validator("challenge_window_seconds")
    @classmethod
    def window_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("challenge_window_seconds must be >= 1")
        return v

    @field_validator("challenge_tag")
    @classmethod
    def tag_must_be_one_segment(cls, v: str) -> str:
        if not v or ":" in v:
            raise ValueError("challenge_tag must be non-empty and must not contain ':'")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "STARCHAIN_", "env_nested_delimiter": "__"}

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must hold a mapping: {path}")

        # user.yaml overlays default.yaml when both sit in the same directory
        user = path.parent / "user.yaml"
        if path.name != "user.yaml" and user.exists():
            user_data = yaml.safe_load(user.read_text()) or {}
            if isinstance(user_data, dict):
                raw = _deep_merge(raw, user_data)

        return cls(**raw)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        return cls.from_yaml(root / "config" / "default.yaml")
