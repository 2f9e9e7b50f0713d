"""Tests for configuration loading."""

import pytest
import yaml
from pydantic import ValidationError

from desktop2mqtt.config import (
    ENV_MAPPING,
    AppConfig,
    DeviceConfig,
    MQTTConfig,
    create_default_config,
    get_config,
    load_config,
    load_config_from_env,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without configuration variables set."""
    for env_var in ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)


class TestModels:
    """Tests for the configuration models."""

    def test_defaults(self):
        config = MQTTConfig()

        assert config.host == "localhost"
        assert config.port == 1883
        assert config.discovery_prefix == "homeassistant"
        assert config.keepalive == 60
        assert config.qos == 0

    def test_empty_credentials_become_none(self):
        config = MQTTConfig(username="", password="")
        assert config.username is None
        assert config.password is None

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            MQTTConfig(port=70000)

    def test_hostname_is_lowercased(self):
        """Test host names are lower-cased before use in topics."""
        assert DeviceConfig(hostname="Desktop1").hostname == "desktop1"

    def test_hostname_defaults_to_os(self, monkeypatch):
        monkeypatch.setattr("socket.gethostname", lambda: "WORKSTATION")
        assert DeviceConfig().hostname == "workstation"
        assert DeviceConfig(hostname="").hostname == "workstation"

    def test_device_is_frozen(self):
        """Test the host identity cannot change after startup."""
        device = DeviceConfig(hostname="desktop1")
        with pytest.raises(ValidationError):
            device.hostname = "other"

    def test_log_level_case_insensitive(self):
        assert AppConfig(logging={"level": "debug"}).logging.level == "DEBUG"


class TestEnvironment:
    """Tests for environment variable configuration."""

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("MQTT_HOST", "broker.lan")
        monkeypatch.setenv("MQTT_PORT", "8883")
        monkeypatch.setenv("MQTT_USE_TLS", "yes")
        monkeypatch.setenv("DEVICE_HOSTNAME", "LAPTOP")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("LOG_LIBRARY_LEVEL", "debug")

        config = load_config_from_env()

        assert config.mqtt.host == "broker.lan"
        assert config.mqtt.port == 8883
        assert config.mqtt.use_tls is True
        assert config.device.hostname == "laptop"
        assert config.logging.level == "WARNING"
        assert config.logging.library_level == "DEBUG"

    def test_invalid_env_value(self, monkeypatch):
        """Test unconvertible values are reported by validation."""
        monkeypatch.setenv("MQTT_PORT", "abc")
        with pytest.raises(ValidationError):
            load_config_from_env()

    def test_get_config_falls_back_to_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MQTT_HOST", "broker.lan")
        config = get_config(str(tmp_path / "missing.yaml"))
        assert config.mqtt.host == "broker.lan"


class TestYamlFile:
    """Tests for YAML configuration files."""

    def test_load_with_substitution(self, monkeypatch, tmp_path):
        """Test ${VAR} references are replaced from the environment."""
        monkeypatch.setenv("TEST_BROKER_PASSWORD", "secret")
        path = tmp_path / "config.yaml"
        path.write_text(
            "mqtt:\n"
            "  host: broker.lan\n"
            "  username: ''\n"
            "  password: '${TEST_BROKER_PASSWORD}'\n"
            "device:\n"
            "  hostname: Work-PC\n"
        )

        config = load_config(str(path))

        assert config.mqtt.host == "broker.lan"
        assert config.mqtt.username is None
        assert config.mqtt.password == "secret"
        assert config.device.hostname == "work-pc"

    def test_unset_variable_left_as_written(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("mqtt:\n  password: '${TEST_UNSET_VARIABLE}'\n")

        assert load_config(str(path)).mqtt.password == "${TEST_UNSET_VARIABLE}"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(str(path)).mqtt.host == "localhost"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_default_config_round_trip(self, tmp_path):
        """Test the generated default config loads back."""
        generated = create_default_config()
        data = yaml.safe_load(generated)

        assert data["mqtt"]["host"] == "localhost"
        assert "password" not in data["mqtt"]

        path = tmp_path / "config.yaml"
        path.write_text(generated)
        assert load_config(str(path)).mqtt == MQTTConfig()
