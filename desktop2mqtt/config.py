"""Configuration management with Pydantic validation.

Supports three configuration sources (in priority order):
1. YAML config file (for traditional deployments)
2. Environment variables (for containers and systemd units)
3. Default values
"""

import os
import socket
from pathlib import Path
from typing import Optional, Literal
import yaml
from pydantic import BaseModel, Field, field_validator


class MQTTConfig(BaseModel):
    """MQTT broker configuration."""

    host: str = Field(
        default="localhost",
        description="MQTT broker hostname or IP"
    )
    port: int = Field(
        default=1883,
        ge=1,
        le=65535,
        description="MQTT broker port"
    )
    username: Optional[str] = Field(
        default=None,
        description="MQTT username (optional)"
    )
    password: Optional[str] = Field(
        default=None,
        description="MQTT password (optional)"
    )
    client_id: str = Field(
        default="desktop2mqtt",
        description="MQTT client identifier"
    )
    discovery_prefix: str = Field(
        default="homeassistant",
        description="Home Assistant MQTT discovery prefix"
    )
    use_tls: bool = Field(
        default=False,
        description="Connect to the broker over TLS"
    )
    keepalive: int = Field(
        default=60,
        ge=5,
        le=3600,
        description="Keepalive interval in seconds"
    )
    reconnect_interval: float = Field(
        default=5.0,
        ge=1.0,
        le=300.0,
        description="Seconds to wait before reconnecting after a connection loss"
    )
    qos: int = Field(
        default=0,
        ge=0,
        le=2,
        description="Default QoS level for publishes and subscriptions"
    )

    @field_validator("username", "password", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        """Convert empty strings to None."""
        if v == "":
            return None
        return v


def _local_hostname() -> str:
    return socket.gethostname().lower()


class DeviceConfig(BaseModel):
    """Identity of this machine as seen by Home Assistant.

    Read once at startup; every topic and unique id is derived from it.
    """

    model_config = {"frozen": True}

    hostname: str = Field(
        default_factory=_local_hostname,
        min_length=1,
        description="Host name used in topics (defaults to the OS host name)"
    )

    @field_validator("hostname", mode="before")
    @classmethod
    def lower_hostname(cls, v):
        """Host names are always lower-cased; empty means the OS host name."""
        if v is None or v == "":
            return _local_hostname()
        if isinstance(v, str):
            return v.lower()
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    library_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level for aiomqtt and asyncio"
    )
    file: Optional[Path] = Field(
        default=None,
        description="Log file path (optional)"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    @field_validator("level", "library_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""

    mqtt: MQTTConfig = Field(
        default_factory=MQTTConfig,
        description="MQTT broker settings"
    )
    device: DeviceConfig = Field(
        default_factory=DeviceConfig,
        description="Host identity settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


# Environment variable mapping
ENV_MAPPING = {
    # MQTT
    "MQTT_HOST": ("mqtt", "host"),
    "MQTT_PORT": ("mqtt", "port", int),
    "MQTT_USERNAME": ("mqtt", "username"),
    "MQTT_PASSWORD": ("mqtt", "password"),
    "MQTT_CLIENT_ID": ("mqtt", "client_id"),
    "MQTT_DISCOVERY_PREFIX": ("mqtt", "discovery_prefix"),
    "MQTT_USE_TLS": ("mqtt", "use_tls", _parse_bool),
    "MQTT_KEEPALIVE": ("mqtt", "keepalive", int),
    "MQTT_RECONNECT_INTERVAL": ("mqtt", "reconnect_interval", float),
    "MQTT_QOS": ("mqtt", "qos", int),

    # Device
    "DEVICE_HOSTNAME": ("device", "hostname"),

    # Logging
    "LOG_LEVEL": ("logging", "level"),
    "LOG_LIBRARY_LEVEL": ("logging", "library_level"),
}


def _get_env_value(env_var: str, mapping: tuple):
    """Get environment variable value with optional type conversion."""
    value = os.environ.get(env_var)
    if value is None:
        return None

    # Apply type conversion if specified; pydantic reports what is left invalid
    if len(mapping) > 2:
        converter = mapping[2]
        try:
            return converter(value)
        except (ValueError, TypeError):
            return value
    return value


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables.

    Returns:
        AppConfig with values from environment (or defaults)
    """
    config_dict = {
        "mqtt": {},
        "device": {},
        "logging": {},
    }

    for env_var, mapping in ENV_MAPPING.items():
        value = _get_env_value(env_var, mapping)
        if value is not None:
            section = mapping[0]
            key = mapping[1]
            config_dict[section][key] = value

    return AppConfig(**config_dict)


def load_config(config_path: str) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config validation fails
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r") as f:
        raw_config = yaml.safe_load(f) or {}

    # Support environment variable substitution
    raw_config = _substitute_env_vars(raw_config)

    return AppConfig(**raw_config)


def get_config(config_path: Optional[str] = None) -> AppConfig:
    """Get configuration from config file or environment variables.

    Priority:
    1. Config file (if path provided and file exists)
    2. Environment variables
    3. Default values

    Args:
        config_path: Optional path to YAML config file

    Returns:
        Validated AppConfig instance
    """
    if config_path:
        path = Path(config_path)
        if path.exists():
            return load_config(config_path)

    # Fall back to environment variables (includes defaults)
    return load_config_from_env()


def _substitute_env_vars(config):
    """Recursively substitute environment variables in config values.

    Environment variables are referenced as ${VAR_NAME} or $VAR_NAME.
    Unset variables are left as written.
    """
    if isinstance(config, dict):
        return {k: _substitute_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_substitute_env_vars(item) for item in config]
    elif isinstance(config, str):
        if config.startswith("${") and config.endswith("}"):
            var_name = config[2:-1]
            return os.environ.get(var_name, config)
        elif config.startswith("$") and not config.startswith("${"):
            var_name = config[1:]
            return os.environ.get(var_name, config)
        return config
    else:
        return config


def create_default_config() -> str:
    """Generate default configuration as YAML string."""
    config = AppConfig()
    return yaml.dump(
        config.model_dump(mode="json", exclude_none=True),
        default_flow_style=False,
        sort_keys=False,
    )


def print_env_help() -> str:
    """Generate help text for environment variables."""
    lines = [
        "Environment Variables:",
        "",
        "  MQTT:",
        "    MQTT_HOST               Broker hostname/IP (default: localhost)",
        "    MQTT_PORT               Broker port (default: 1883)",
        "    MQTT_USERNAME           Username (optional)",
        "    MQTT_PASSWORD           Password (optional)",
        "    MQTT_CLIENT_ID          Client ID (default: desktop2mqtt)",
        "    MQTT_DISCOVERY_PREFIX   HA discovery prefix (default: homeassistant)",
        "    MQTT_USE_TLS            Use TLS: true/false (default: false)",
        "    MQTT_KEEPALIVE          Keepalive seconds (default: 60)",
        "    MQTT_RECONNECT_INTERVAL Seconds between reconnects (default: 5)",
        "    MQTT_QOS                Default QoS 0-2 (default: 0)",
        "",
        "  Device:",
        "    DEVICE_HOSTNAME         Host name used in topics (default: OS host name)",
        "",
        "  Logging:",
        "    LOG_LEVEL               DEBUG, INFO, WARNING, ERROR (default: INFO)",
        "    LOG_LIBRARY_LEVEL       Level for aiomqtt and asyncio (default: WARNING)",
    ]
    return "\n".join(lines)
