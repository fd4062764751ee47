"""
Unit tests for config.py
"""

import os
import tempfile
from unittest import mock

import pytest
import yaml

from schemadump.config import ConfigLoader


def write_config(config) -> str:
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.yaml', delete=False
    ) as f:
        yaml.dump(config, f)
        f.flush()
        return f.name


class TestConfigLoader:
    """Tests for ConfigLoader class."""

    @pytest.fixture
    def sample_config(self):
        """Sample configuration dictionary."""
        return {
            "connection": {
                "host": "localhost",
                "port": 3306,
                "user": "root",
                "password": "secret",
                "database": "shop"
            },
            "output": {
                "file": "./dumps/shop.sql",
                "page_size": 250
            },
            "logging": {
                "level": "INFO",
                "file": "./dumps/dump.log"
            }
        }

    @pytest.fixture
    def config_file(self, sample_config):
        """Create a temporary config file."""
        path = write_config(sample_config)
        yield path
        os.unlink(path)

    def test_load_config(self, config_file):
        """Test loading a valid config file."""
        loader = ConfigLoader(config_file)
        assert loader.config is not None

    def test_file_not_found(self):
        """Test that FileNotFoundError is raised for missing file."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader("/nonexistent/path/config.yaml")

    def test_get_connection_settings(self, config_file):
        """Test getting connection settings."""
        loader = ConfigLoader(config_file)
        connection = loader.get_connection_settings()
        assert connection["host"] == "localhost"
        assert connection["port"] == 3306
        assert connection["user"] == "root"
        assert connection["database"] == "shop"

    def test_missing_connection_keys(self):
        """Test that missing required connection keys raise ValueError."""
        path = write_config({"connection": {"host": "localhost"}})
        try:
            loader = ConfigLoader(path)
            with pytest.raises(ValueError) as exc_info:
                loader.get_connection_settings()
        finally:
            os.unlink(path)

        assert "user" in str(exc_info.value)
        assert "database" in str(exc_info.value)

    def test_password_defaults_to_empty(self):
        """Test that an omitted password becomes an empty string."""
        path = write_config({"connection": {"host": "h", "user": "u", "database": "d"}})
        try:
            connection = ConfigLoader(path).get_connection_settings()
        finally:
            os.unlink(path)

        assert connection["password"] == ""

    def test_get_output_settings(self, config_file):
        """Test getting output settings."""
        loader = ConfigLoader(config_file)
        output = loader.get_output_settings()
        assert output["file"] == "./dumps/shop.sql"
        assert output["page_size"] == 250

    def test_get_logging_settings(self, config_file):
        """Test getting logging settings."""
        loader = ConfigLoader(config_file)
        logging = loader.get_logging_settings()
        assert logging["level"] == "INFO"
        assert logging["file"] == "./dumps/dump.log"

    def test_empty_sections(self):
        """Test handling of missing config sections."""
        path = write_config({"connection": {"host": "localhost"}})
        try:
            loader = ConfigLoader(path)
        finally:
            os.unlink(path)

        assert loader.get_output_settings() == {}
        assert loader.get_logging_settings() == {}

    def test_empty_file(self):
        """Test that an empty file loads as an empty config."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            path = f.name
        try:
            loader = ConfigLoader(path)
        finally:
            os.unlink(path)

        assert loader.config == {}
        with pytest.raises(ValueError):
            loader.get_connection_settings()


class TestEnvironmentVariables:
    """Tests for environment variable resolution."""

    @pytest.fixture
    def env_config_file(self):
        """Create a temporary config file with env vars."""
        path = write_config({
            "connection": {
                "host": "${DB_HOST}",
                "port": 3306,
                "user": "${DB_USER}",
                "password": "${DB_PASSWORD}",
                "database": "shop"
            },
            "output": {
                "file": "${OUTPUT_DIR}/shop.sql"
            }
        })
        yield path
        os.unlink(path)

    def test_resolve_env_vars(self, env_config_file):
        """Test environment variables are resolved."""
        with mock.patch.dict(os.environ, {
            "DB_HOST": "db.example.com",
            "DB_USER": "myuser",
            "DB_PASSWORD": "mypassword",
            "OUTPUT_DIR": "/var/backups"
        }):
            loader = ConfigLoader(env_config_file)
            connection = loader.get_connection_settings()
            assert connection["host"] == "db.example.com"
            assert connection["user"] == "myuser"
            assert connection["password"] == "mypassword"

            output = loader.get_output_settings()
            assert output["file"] == "/var/backups/shop.sql"

    def test_missing_env_var_becomes_empty(self, env_config_file):
        """Test missing environment variables become empty strings."""
        with mock.patch.dict(os.environ, {}, clear=True):
            loader = ConfigLoader(env_config_file)
            assert loader.config["connection"]["host"] == ""
            assert loader.config["connection"]["password"] == ""

    def test_env_var_in_nested_list(self):
        """Test env var resolution in nested lists."""
        path = write_config({"extra": ["${ITEM_1}", {"name": "${ITEM_2}"}]})
        try:
            with mock.patch.dict(os.environ, {"ITEM_1": "a", "ITEM_2": "b"}):
                loader = ConfigLoader(path)
        finally:
            os.unlink(path)

        assert loader.config["extra"] == ["a", {"name": "b"}]

    def test_non_string_values_unchanged(self):
        """Test that non-string values are not modified."""
        path = write_config({
            "connection": {
                "host": "localhost",
                "port": 3306,
                "ssl": True,
                "timeout": None
            }
        })
        try:
            loader = ConfigLoader(path)
        finally:
            os.unlink(path)

        connection = loader.config["connection"]
        assert connection["port"] == 3306
        assert connection["ssl"] is True
        assert connection["timeout"] is None
