"""Settings and run-configuration access.

Settings come from the environment and are overridden by CLI flags. The
run configuration is the INI-style file the pipeline leaves in each run
directory; only feature switches are read from it.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "run"
TRUTHY = {"1", "yes", "true", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


class Settings(BaseModel):
    """Configuration for a seqhealth invocation."""

    lenient: bool = Field(
        default=False, description="Downgrade missing metrics to warnings"
    )
    run_config_name: str = Field(
        default="logs/run.config", description="Run configuration path, relative to the run directory"
    )
    health_check_log: str = Field(
        default="logs/HealthCheck.out", description="Health-check log path, relative to the run directory"
    )

    @property
    def strict(self) -> bool:
        return not self.lenient

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Build settings from SEQHEALTH_* variables, then apply overrides."""
        values: dict = {"lenient": _env_flag("SEQHEALTH_LENIENT")}
        run_config = os.getenv("SEQHEALTH_RUN_CONFIG")
        if run_config:
            values["run_config_name"] = run_config
        health_log = os.getenv("SEQHEALTH_HEALTH_CHECK_LOG")
        if health_log:
            values["health_check_log"] = health_log
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def read_run_config(run_dir: Path | str, settings: Settings | None = None) -> dict[str, str]:
    """Read the run configuration of a run directory.

    Section headers are optional; `KEY = value` and `KEY<TAB>value` lines
    are both accepted and keys are case-insensitive (returned upper-cased).
    A missing file yields an empty mapping.
    """
    settings = settings or Settings.from_env()
    path = Path(run_dir) / settings.run_config_name
    if not path.is_file():
        logger.debug("No run configuration at %s", path)
        return {}

    parser = configparser.ConfigParser(
        delimiters=("=", "\t"), interpolation=None, strict=False, allow_no_value=True
    )
    text = path.read_text(encoding="utf-8")
    if not text.lstrip().startswith("["):
        text = f"[{DEFAULT_SECTION}]\n{text}"
    parser.read_string(text, source=str(path))

    config: dict[str, str] = {}
    for section in parser.sections():
        for key, value in parser.items(section):
            config[key.strip().upper()] = (value or "").strip()
    return config


def is_feature_enabled(key: str, run_dir: Path | str, settings: Settings | None = None) -> bool:
    """Return True if the run configuration switches `key` on."""
    value = read_run_config(run_dir, settings).get(key.upper())
    if value is None:
        logger.debug("Feature %s not set for %s", key, run_dir)
        return False
    return value.lower() in TRUTHY
