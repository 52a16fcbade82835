"""
llhls Settings Module

Environment-driven settings for the command line tool and service wrappers.
Production uses environment variables, local development uses .env files.
"""

import logging
import os
from typing import Optional

import dotenv

logger = logging.getLogger(__name__)

dotenv.load_dotenv()

# Environment detection
ENV = os.getenv("ENV", "prod")


class ConfigError(Exception):
    """Configuration validation error"""

    pass


def get_env(key: str, default: Optional[str] = None, required: bool = True) -> Optional[str]:
    """Get environment variable with validation and logging."""
    value = os.getenv(key, default)
    if required and value is None:
        raise ConfigError(f"Required environment variable {key} is not set")
    if value:
        # Don't log sensitive values
        if any(sensitive in key.lower() for sensitive in ["password", "secret", "token"]):
            logger.debug(f"Loaded env var {key}: [REDACTED]")
        else:
            logger.debug(f"Loaded env var {key}: {value}")
    return value


def get_env_int(key: str, default: Optional[int] = None, required: bool = True) -> int:
    """Get environment variable as integer."""
    str_default = str(default) if default is not None else None
    value = get_env(key, str_default, required)
    try:
        return int(value) if value else 0
    except ValueError:
        raise ConfigError(f"Environment variable {key}='{value}' is not a valid integer")


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = get_env(key, str(default).lower(), required=False)
    return (value or "").lower() in ("true", "1", "yes", "on")


def get_log_level() -> int:
    name = (get_env("LLHLS_LOG_LEVEL", "INFO", required=False) or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"LLHLS_LOG_LEVEL='{name}' is not a valid log level")
    return level


LOG_LEVEL = get_log_level()
CONFIG_PATH = get_env("LLHLS_CONFIG_PATH", required=False)
METRICS_PORT = get_env_int("LLHLS_METRICS_PORT", 0, required=False)
ENABLE_TELEMETRY = get_env_bool("LLHLS_ENABLE_TELEMETRY", False)
OTEL_EXPORTER_OTLP_ENDPOINT = get_env("OTEL_EXPORTER_OTLP_ENDPOINT", required=False)
