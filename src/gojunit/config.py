"""Report configuration from environment variables and YAML files."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

SUITE_NAME_ENV = "GOJUNIT_SUITE"
GO_VERSION_ENV = "GOVERSION"

_KEYS = {"suite_name", "go_version", "go_binary"}


class ConfigError(Exception):
    """Raised when a config file cannot be loaded or is invalid."""


@dataclass(frozen=True)
class ReportConfig:
    """Settings that change report output without touching the model.

    ``suite_name`` replaces every suite name when set. ``go_version``
    skips the ``go version`` subprocess when it is not None, including
    when it is empty.
    """
    suite_name: Optional[str] = None
    go_version: Optional[str] = None
    go_binary: str = "go"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["ReportConfig"] = None,
    ) -> "ReportConfig":
        """Apply ``GOJUNIT_SUITE`` and ``GOVERSION`` on top of ``base``."""
        if environ is None:
            environ = os.environ
        config = base or cls()

        suite_name = environ.get(SUITE_NAME_ENV)
        if suite_name:
            config = replace(config, suite_name=suite_name)
        if GO_VERSION_ENV in environ:
            config = replace(config, go_version=environ[GO_VERSION_ENV])
        return config


def load_config(path: str, environ: Optional[Mapping[str, str]] = None) -> ReportConfig:
    """Load a ReportConfig from a YAML file, then apply environment overrides.

    Args:
        path: Path to the YAML file.
        environ: Environment to read overrides from. Defaults to os.environ.

    Raises:
        ConfigError: If the file is missing, invalid YAML, or fails validation.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a YAML mapping, got {type(data).__name__}")

    unknown = set(data) - _KEYS
    if unknown:
        raise ConfigError(
            f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}. "
            f"Valid keys: {', '.join(sorted(_KEYS))}"
        )
    for key, value in data.items():
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' must be a string, got {type(value).__name__}")

    base = ReportConfig(
        suite_name=data.get("suite_name") or None,
        go_version=data.get("go_version"),
        go_binary=data.get("go_binary") or "go",
    )
    return ReportConfig.from_env(environ, base=base)
