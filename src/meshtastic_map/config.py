"""Configuration management with CLI args, environment variables, and defaults."""

import os
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

T = TypeVar("T")

ENV_PREFIX = "MESHTASTIC_MAP_"


class EnvVars:
    """Centralized environment variable names for consistent access."""

    # === Database ===
    DATABASE_URL = f"{ENV_PREFIX}DATABASE_URL"
    # Name the ingestion service's schema tooling already uses
    LEGACY_DATABASE_URL = "DATABASE_URL"

    # === API ===
    API_HOST = f"{ENV_PREFIX}API_HOST"
    API_PORT = f"{ENV_PREFIX}API_PORT"
    API_TITLE = f"{ENV_PREFIX}API_TITLE"
    API_VERSION = f"{ENV_PREFIX}API_VERSION"
    STATIC_DIR = f"{ENV_PREFIX}STATIC_DIR"
    COMPRESSION_ENABLED = f"{ENV_PREFIX}COMPRESSION_ENABLED"

    # === Metrics ===
    METRICS_ENABLED = f"{ENV_PREFIX}METRICS_ENABLED"

    # === Logging ===
    LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"
    LOG_FORMAT = f"{ENV_PREFIX}LOG_FORMAT"


def get_env_value(
    env_var: str,
    default: T,
    type_converter: type = str,
    fallback_env_var: Optional[str] = None,
) -> T:
    """
    Get a value from an environment variable with type conversion.

    Args:
        env_var: Primary environment variable name
        default: Default value if not found
        type_converter: Type to convert to (str, int, float, bool)
        fallback_env_var: Optional legacy/fallback environment variable name

    Returns:
        The environment value converted to the specified type, or the default
    """
    env_value = os.getenv(env_var)

    if env_value is None and fallback_env_var:
        env_value = os.getenv(fallback_env_var)

    if env_value is not None:
        if type_converter == bool:
            return env_value.lower() in ("true", "1", "yes", "on")  # type: ignore
        return type_converter(env_value)

    return default


def get_config_value(
    cli_arg: Optional[Any],
    env_var: str,
    default: T,
    type_converter: type = str,
    fallback_env_var: Optional[str] = None,
) -> T:
    """
    Get a configuration value with priority: CLI > Environment > Default.

    Args:
        cli_arg: CLI argument value (highest priority)
        env_var: Primary environment variable name
        default: Default value (lowest priority)
        type_converter: Type to convert to (str, int, float, bool)
        fallback_env_var: Optional legacy/fallback environment variable name

    Returns:
        The resolved configuration value
    """
    if cli_arg is not None:
        return cli_arg

    return get_env_value(env_var, default, type_converter, fallback_env_var)


@dataclass
class Config:
    """Application configuration."""

    # === Database ===
    database_url: str = "sqlite:///./data/meshtastic.db"

    # === API ===
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_title: str = "Meshtastic Map API"
    api_version: str = "1.0.0"
    static_dir: Optional[str] = None
    compression_enabled: bool = True

    # === Prometheus ===
    metrics_enabled: bool = True

    # === Logging ===
    log_level: str = "INFO"
    log_format: str = "json"  # json|text

    @classmethod
    def from_args_and_env(cls, cli_args: Optional[dict] = None) -> "Config":
        """
        Load configuration from CLI arguments, environment variables, and defaults.

        Priority: CLI args > Environment variables > Defaults

        Args:
            cli_args: Dictionary of CLI option values; None or missing keys
                fall through to the environment

        Returns:
            Config instance
        """
        args = cli_args or {}
        config = cls()

        config.database_url = get_config_value(
            args.get("database_url"),
            EnvVars.DATABASE_URL,
            config.database_url,
            fallback_env_var=EnvVars.LEGACY_DATABASE_URL,
        )

        config.api_host = get_config_value(args.get("api_host"), EnvVars.API_HOST, config.api_host)
        config.api_port = get_config_value(
            args.get("api_port"), EnvVars.API_PORT, config.api_port, int
        )
        config.api_title = get_config_value(
            args.get("api_title"), EnvVars.API_TITLE, config.api_title
        )
        config.api_version = get_config_value(
            args.get("api_version"), EnvVars.API_VERSION, config.api_version
        )
        config.static_dir = get_config_value(
            args.get("static_dir"), EnvVars.STATIC_DIR, config.static_dir
        )
        config.compression_enabled = get_config_value(
            args.get("compression"), EnvVars.COMPRESSION_ENABLED, config.compression_enabled, bool
        )

        config.metrics_enabled = get_config_value(
            args.get("metrics"), EnvVars.METRICS_ENABLED, config.metrics_enabled, bool
        )

        config.log_level = get_config_value(
            args.get("log_level"), EnvVars.LOG_LEVEL, config.log_level
        ).upper()
        config.log_format = get_config_value(
            args.get("log_format"), EnvVars.LOG_FORMAT, config.log_format
        ).lower()

        return config

    def display(self) -> str:
        """
        Display configuration in human-readable format.

        Returns:
            Formatted configuration string
        """
        from sqlalchemy.engine import make_url

        from .database.engine import normalize_database_url

        database = make_url(normalize_database_url(self.database_url))

        lines = [
            "Configuration:",
            "  Database:",
            f"    URL: {database.render_as_string(hide_password=True)}",
            "  API:",
            f"    Host: {self.api_host}",
            f"    Port: {self.api_port}",
            f"    Static Files: {self.static_dir or 'Disabled'}",
            f"    Compression: {'Enabled' if self.compression_enabled else 'Disabled'}",
            f"    Metrics: {'Enabled' if self.metrics_enabled else 'Disabled'}",
            "  Logging:",
            f"    Level: {self.log_level}",
            f"    Format: {self.log_format}",
        ]

        return "\n".join(lines)
