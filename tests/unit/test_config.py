"""Unit tests for configuration module."""

import pytest

from meshtastic_map.config import Config, EnvVars, get_config_value, get_env_value


class TestConfig:
    """Test configuration parsing and defaults."""

    def test_default_config_values(self):
        """Test default configuration values."""
        config = Config()

        assert config.database_url == "sqlite:///./data/meshtastic.db"
        assert config.api_host == "0.0.0.0"
        assert config.api_port == 8080
        assert config.api_title == "Meshtastic Map API"
        assert config.api_version == "1.0.0"
        assert config.static_dir is None
        assert config.compression_enabled is True
        assert config.metrics_enabled is True
        assert config.log_level == "INFO"
        assert config.log_format == "json"

    def test_config_custom_values(self):
        """Test configuration with custom values."""
        config = Config(api_port=9000, database_url="/tmp/test.db", log_level="DEBUG")

        assert config.api_port == 9000
        assert config.database_url == "/tmp/test.db"
        assert config.log_level == "DEBUG"

    def test_from_args_and_env_without_anything(self):
        """Test loading with no CLI args and a clean environment."""
        config = Config.from_args_and_env()

        assert config == Config()

    def test_cli_args_take_priority(self, monkeypatch):
        """Test CLI values override the environment."""
        monkeypatch.setenv(EnvVars.API_PORT, "9000")
        monkeypatch.setenv(EnvVars.DATABASE_URL, "sqlite:///env.db")

        config = Config.from_args_and_env(
            {"api_port": 7000, "database_url": "sqlite:///cli.db"}
        )

        assert config.api_port == 7000
        assert config.database_url == "sqlite:///cli.db"

    def test_environment_values(self, monkeypatch):
        """Test environment variables fill in missing CLI values."""
        monkeypatch.setenv(EnvVars.API_HOST, "127.0.0.1")
        monkeypatch.setenv(EnvVars.API_PORT, "9001")
        monkeypatch.setenv(EnvVars.STATIC_DIR, "/srv/map")
        monkeypatch.setenv(EnvVars.METRICS_ENABLED, "false")
        monkeypatch.setenv(EnvVars.COMPRESSION_ENABLED, "0")

        config = Config.from_args_and_env({"api_host": None})

        assert config.api_host == "127.0.0.1"
        assert config.api_port == 9001
        assert config.static_dir == "/srv/map"
        assert config.metrics_enabled is False
        assert config.compression_enabled is False

    def test_legacy_database_url(self, monkeypatch):
        """Test the unprefixed DATABASE_URL is used as a fallback."""
        monkeypatch.setenv(EnvVars.LEGACY_DATABASE_URL, "mysql+pymysql://u:p@db/meshtastic")

        config = Config.from_args_and_env()

        assert config.database_url == "mysql+pymysql://u:p@db/meshtastic"

    def test_prefixed_database_url_wins_over_legacy(self, monkeypatch):
        """Test the prefixed variable beats the legacy one."""
        monkeypatch.setenv(EnvVars.LEGACY_DATABASE_URL, "sqlite:///legacy.db")
        monkeypatch.setenv(EnvVars.DATABASE_URL, "sqlite:///prefixed.db")

        config = Config.from_args_and_env()

        assert config.database_url == "sqlite:///prefixed.db"

    def test_log_settings_are_normalized(self, monkeypatch):
        """Test log level is upper-cased and format lower-cased."""
        monkeypatch.setenv(EnvVars.LOG_FORMAT, "TEXT")

        config = Config.from_args_and_env({"log_level": "debug"})

        assert config.log_level == "DEBUG"
        assert config.log_format == "text"

    def test_invalid_port_raises(self, monkeypatch):
        """Test a non-numeric port is rejected."""
        monkeypatch.setenv(EnvVars.API_PORT, "http")

        with pytest.raises(ValueError):
            Config.from_args_and_env()

    def test_display_hides_password(self):
        """Test the database password is masked."""
        config = Config(database_url="mysql+pymysql://map:hunter2@db:3306/meshtastic")

        output = config.display()

        assert "hunter2" not in output
        assert "map:***@db:3306/meshtastic" in output
        assert "Port: 8080" in output

    def test_display_normalizes_paths(self):
        """Test a bare SQLite path is shown as a URL."""
        config = Config(database_url="/var/lib/meshtastic.db", static_dir="/srv/map")

        output = config.display()

        assert "sqlite:////var/lib/meshtastic.db" in output
        assert "Static Files: /srv/map" in output


class TestEnvHelpers:
    """Test environment lookup helpers."""

    @pytest.mark.parametrize("raw", ["true", "1", "yes", "on", "TRUE"])
    def test_truthy_booleans(self, monkeypatch, raw):
        """Test accepted spellings of true."""
        monkeypatch.setenv(EnvVars.METRICS_ENABLED, raw)
        assert get_env_value(EnvVars.METRICS_ENABLED, False, bool) is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", "off", ""])
    def test_falsy_booleans(self, monkeypatch, raw):
        """Test anything else is false."""
        monkeypatch.setenv(EnvVars.METRICS_ENABLED, raw)
        assert get_env_value(EnvVars.METRICS_ENABLED, True, bool) is False

    def test_default_when_unset(self):
        """Test the default is returned untouched."""
        assert get_env_value(EnvVars.API_PORT, 1234, int) == 1234

    def test_cli_false_is_not_ignored(self, monkeypatch):
        """Test an explicit False from the CLI beats the environment."""
        monkeypatch.setenv(EnvVars.METRICS_ENABLED, "true")
        assert get_config_value(False, EnvVars.METRICS_ENABLED, True, bool) is False
