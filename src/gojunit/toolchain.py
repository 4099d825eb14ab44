"""Lookup of the Go toolchain version recorded in report properties."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from gojunit.config import ReportConfig

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"

_VERSION_PREFIX = "go version "


def go_version(config: Optional[ReportConfig] = None) -> str:
    """Return the version reported by the ``go`` binary on PATH.

    This is the toolchain that ran the tests, not the interpreter running
    this package. Set ``GOVERSION`` to skip the subprocess call. A failed
    lookup is logged and reported as ``"unknown"``.
    """
    if config is None:
        config = ReportConfig.from_env()
    if config.go_version is not None:
        return config.go_version

    logger.debug("exec: %s version", config.go_binary)
    try:
        proc = subprocess.run(
            [config.go_binary, "version"],
            stdout=subprocess.PIPE,
            check=True,
            text=True,
            errors="replace",
        )
    except (OSError, ValueError, subprocess.CalledProcessError) as e:
        logger.warning("failed to lookup go version for junit xml: %s", e)
        return UNKNOWN_VERSION
    return proc.stdout.strip().removeprefix(_VERSION_PREFIX)
