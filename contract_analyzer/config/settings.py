"""
Settings for the contract analyzer.

Values come from environment variables, optionally seeded from a ``.env``
file. The analysis endpoint is fixed per deployment; it is never taken from
runtime input.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from contract_analyzer.exceptions import ConfigurationError

logger = structlog.get_logger("config")

PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3000
DEFAULT_PATH = "/upload"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class AnalyzerSettings(BaseModel):
    """Resolved configuration for one process."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_HOST, description="Analysis service host")
    port: int = Field(default=DEFAULT_PORT, description="Analysis service port")
    path: str = Field(default=DEFAULT_PATH, description="Upload path on the service")
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="Read/write/pool timeout for the upload request",
    )
    connect_timeout_seconds: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT_SECONDS,
        description="TCP connect timeout",
    )
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=PROJECT_ROOT / "logs")

    @property
    def endpoint_url(self) -> str:
        """Full URL of the upload endpoint."""
        return f"http://{self.host}:{self.port}{self.path}"


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    dotenv: bool = True,
) -> AnalyzerSettings:
    """
    Build AnalyzerSettings from the environment.

    Args:
        env: Mapping to read from. Defaults to ``os.environ``.
        dotenv: Load a ``.env`` file into ``os.environ`` first
                (ignored when an explicit ``env`` is given).

    Returns:
        AnalyzerSettings

    Raises:
        ConfigurationError: If any value is malformed or out of range.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    host = (env.get("ANALYSIS_SERVICE_HOST") or "").strip() or DEFAULT_HOST
    port = _get_int(env, "ANALYSIS_SERVICE_PORT", DEFAULT_PORT)
    path = (env.get("ANALYSIS_SERVICE_PATH") or "").strip() or DEFAULT_PATH
    timeout_seconds = _get_float(env, "ANALYSIS_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    connect_timeout = _get_float(
        env, "ANALYSIS_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
    )
    log_level = (env.get("LOG_LEVEL") or "").strip().upper() or "INFO"
    log_dir_raw = (env.get("LOG_DIR") or "").strip()

    if not 1 <= port <= 65535:
        raise ConfigurationError(f"ANALYSIS_SERVICE_PORT out of range: {port}")
    if not path.startswith("/"):
        raise ConfigurationError(f"ANALYSIS_SERVICE_PATH must start with '/', got {path!r}")
    if timeout_seconds <= 0:
        raise ConfigurationError(f"ANALYSIS_TIMEOUT_SECONDS must be positive, got {timeout_seconds}")
    if connect_timeout <= 0:
        raise ConfigurationError(
            f"ANALYSIS_CONNECT_TIMEOUT_SECONDS must be positive, got {connect_timeout}"
        )
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}, got {log_level!r}")

    settings = AnalyzerSettings(
        host=host,
        port=port,
        path=path,
        timeout_seconds=timeout_seconds,
        connect_timeout_seconds=connect_timeout,
        log_level=log_level,
        log_dir=Path(os.path.expanduser(log_dir_raw)) if log_dir_raw else PROJECT_ROOT / "logs",
    )
    logger.debug("settings_loaded", endpoint=settings.endpoint_url, timeout=timeout_seconds)
    return settings


def validate_settings(env: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Check the environment without raising.

    Returns:
        List of problems, empty when the configuration is usable.
    """
    try:
        load_settings(env=env, dotenv=env is None)
    except ConfigurationError as e:
        return [str(e)]
    return []


def describe_settings(settings: AnalyzerSettings) -> Dict[str, str]:
    """Flat view of the settings for display in the health check."""
    return {
        "endpoint": settings.endpoint_url,
        "timeout": f"{settings.timeout_seconds:g}s (connect {settings.connect_timeout_seconds:g}s)",
        "log_level": settings.log_level,
        "log_dir": str(settings.log_dir),
    }
