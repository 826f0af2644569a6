from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_KEY = "public_test_84adydvuspk28kawj499s3f4bmemmcwf1ad54wtagihn0"
DEFAULT_PORT = 8080
DEFAULT_ENVIRONMENT = "development"
DEFAULT_BIND_HOST = "0.0.0.0"  # nosec B104 - the page is served to devices on the network


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str | None = Field(
        default=None, description="Optional log file; rotated when it reaches max_size_mb."
    )
    level: str = Field(default="INFO")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class StitchConfig(BaseModel):
    """Process-wide settings, read once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    public_key: str = Field(default=DEFAULT_PUBLIC_KEY)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    environment: str = Field(default=DEFAULT_ENVIRONMENT)
    bind_host: str = Field(default=DEFAULT_BIND_HOST)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def public_key_configured(self) -> bool:
        return bool(self.public_key)


def _clean(env: Mapping[str, str], name: str) -> str | None:
    raw = (env.get(name) or "").strip()
    return raw or None


def _verbatim(env: Mapping[str, str], name: str) -> str | None:
    # Blank means unset; anything else is kept exactly as given.
    raw = env.get(name) or ""
    return raw if raw.strip() else None


def _parse_port(raw: str | None) -> int:
    if raw is None:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric PORT=%r; using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 1 <= port <= 65535:
        logger.warning("Ignoring out-of-range PORT=%d; using %d", port, DEFAULT_PORT)
        return DEFAULT_PORT
    return port


def load_stitch_config(environ: Mapping[str, str] | None = None) -> StitchConfig:
    """Build the config from environment variables.

    - Missing or blank values fall back to defaults; startup never fails here.
    - FASTEN_ENV wins over NODE_ENV for the environment label.
    """

    env = os.environ if environ is None else environ

    logging_config = LoggingConfig()
    log_file = _clean(env, "FASTEN_LOG_FILE")
    log_level = (_clean(env, "FASTEN_LOG_LEVEL") or logging_config.level).upper()
    if log_level not in logging.getLevelNamesMapping():
        logger.warning("Ignoring unknown FASTEN_LOG_LEVEL=%r", log_level)
        log_level = logging_config.level
    if log_file or log_level != logging_config.level:
        logging_config = LoggingConfig(file=log_file, level=log_level)

    return StitchConfig(
        public_key=_verbatim(env, "FASTEN_PUBLIC_KEY") or DEFAULT_PUBLIC_KEY,
        port=_parse_port(_clean(env, "PORT")),
        environment=(
            _clean(env, "FASTEN_ENV") or _clean(env, "NODE_ENV") or DEFAULT_ENVIRONMENT
        ),
        bind_host=_clean(env, "FASTEN_BIND") or DEFAULT_BIND_HOST,
        logging=logging_config,
    )
