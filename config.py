"""
Test suite configuration module.

This module defines configuration classes for the environments the
storefront suite can target (development, staging, production).
Configuration values are loaded from environment variables with
sensible defaults, so CI can tune timeouts and browser mode without
touching code. The storefront URL itself comes from TEST_BASE_URL (see
tests/e2e/conftest.py).
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _env_bool(name: str, default: bool) -> bool:
    """Read a ``"true"``/``"false"`` flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, keeping the default on garbage."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


class Config:
    """Base configuration with default settings."""

    # Per-action timeout handed to the browser context (milliseconds)
    TIMEOUT_MS: int = _env_int("TIMEOUT", 30000)

    # Bound for page readiness probes (milliseconds)
    LOAD_TIMEOUT_MS: int = _env_int("LOAD_TIMEOUT", 10000)

    HEADLESS: bool = _env_bool("HEADLESS", True)

    VIEWPORT: dict = {"width": 1280, "height": 720}

    REPORTS_DIR: Path = BASE_DIR / "reports"


class DevelopmentConfig(Config):
    """Development environment configuration."""


class StagingConfig(Config):
    """Staging environment configuration."""

    TIMEOUT_MS: int = _env_int("TIMEOUT", 45000)


class ProductionConfig(Config):
    """Production environment configuration."""

    TIMEOUT_MS: int = _env_int("TIMEOUT", 60000)


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "staging": StagingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, staging, production).
             If None, uses the TEST_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("TEST_ENV", "development")
    return config.get(env, config["default"])
