"""safe-tempfile runtime configuration.

Sources, lowest to highest priority:
  - built-in defaults
  - environment variables (SAFE_TEMPFILE_*, TMPDIR)
  - command-line flags
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .mode import DEFAULT_MODE

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10000

# Mapping: config key → env var name
_ENV_OVERRIDES: list[tuple[str, str]] = [
    ("tmpdir", "TMPDIR"),
    ("max_attempts", "SAFE_TEMPFILE_MAX_ATTEMPTS"),
    ("debug", "SAFE_TEMPFILE_DEBUG"),
    ("log_file", "SAFE_TEMPFILE_LOG_FILE"),
]


@dataclass(frozen=True)
class TempfileConfig:
    directory: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    name: str | None = None
    mode: int = DEFAULT_MODE
    tmpdir: str | None = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    debug: bool = False
    log_file: Path | None = None

    @property
    def explicit(self) -> bool:
        return self.name is not None


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read configuration values from the environment."""
    if environ is None:
        environ = os.environ
    out: dict[str, Any] = {}
    for config_key, env_var in _ENV_OVERRIDES:
        val = environ.get(env_var)
        if not val:
            continue
        if config_key == "max_attempts":
            try:
                attempts = int(val)
            except ValueError:
                logger.warning("Invalid %s value %r; ignoring", env_var, val)
                continue
            if attempts < 1:
                logger.warning("Invalid %s value %r; ignoring", env_var, val)
                continue
            out[config_key] = attempts
        elif config_key == "debug":
            out[config_key] = val.lower() == "true"
        elif config_key == "log_file":
            out[config_key] = Path(val)
        else:
            out[config_key] = val
    return out


def build_config(
    *,
    directory: str | None = None,
    prefix: str | None = None,
    suffix: str | None = None,
    name: str | None = None,
    mode: int = DEFAULT_MODE,
    debug: bool = False,
    environ: Mapping[str, str] | None = None,
) -> TempfileConfig:
    """Merge command-line values over environment overrides."""
    merged: dict[str, Any] = env_overrides(environ)
    if debug:
        merged["debug"] = True
    return TempfileConfig(
        directory=directory,
        prefix=prefix,
        suffix=suffix,
        name=name,
        mode=mode,
        **merged,
    )
