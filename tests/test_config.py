"""Tests for configuration loading."""

import pytest
import tempfile
from pathlib import Path
from schema_introspection.config import load_config, Config, IntrospectionConfig


def test_load_example_config():
    """Test loading the example configuration."""
    config_path = Path(__file__).parent.parent / "config" / "example_config.yaml"

    if not config_path.exists():
        pytest.skip("Example config not found")

    config = load_config(str(config_path))

    assert config.database.name == "postgresql"
    assert config.database.config["host"] == "localhost"
    assert config.database.config["port"] == 5432
    assert config.database.config["database"] == "analytics"
    assert config.database.config["connect_timeout"] == 10

    assert config.introspection.default_schema == "public"
    assert config.introspection.concurrent_fetch is True

    assert config.logging.level == "INFO"
    assert config.logging.structured is False


def write_config(text: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(text)
        return f.name


def test_load_minimal_config():
    """Test loading minimal configuration with defaults."""
    minimal_yaml = """
database:
  host: localhost
  database: test
  user: test
  password: test
"""
    config_path = write_config(minimal_yaml)

    try:
        config = load_config(config_path)

        assert config.database.config == {
            "host": "localhost",
            "database": "test",
            "user": "test",
            "password": "test",
        }
        assert config.introspection == IntrospectionConfig()
        assert config.logging.level == "INFO"
        assert config.logging.log_file is None
    finally:
        Path(config_path).unlink()


def test_load_custom_sections():
    config_path = write_config("""
database:
  name: warehouse
  host: db
  database: dw
  user: u
introspection:
  default_schema: main
  concurrent_fetch: false
logging:
  level: DEBUG
  structured: true
""")
    try:
        config = load_config(config_path)

        assert config.database.name == "warehouse"
        assert "name" not in config.database.config
        assert config.introspection.default_schema == "main"
        assert config.introspection.concurrent_fetch is False
        assert config.logging.level == "DEBUG"
        assert config.logging.structured is True
    finally:
        Path(config_path).unlink()


def test_empty_config_file():
    config_path = write_config("")
    try:
        config = load_config(config_path)
        assert config.database.config == {}
    finally:
        Path(config_path).unlink()


def test_unknown_introspection_option():
    config_path = write_config("introspection:\n  cache: true\n")
    try:
        with pytest.raises(TypeError):
            load_config(config_path)
    finally:
        Path(config_path).unlink()


def test_missing_config_file():
    """Test error when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/config.yaml")


def test_config_defaults():
    """Test default configuration values."""
    config = Config()

    assert config.database.config == {}
    assert config.introspection.default_schema == "public"
    assert config.introspection.concurrent_fetch is True
    assert config.logging.structured is False


def test_empty_sections_use_defaults():
    """Sections present in the YAML but left empty fall back to defaults."""
    config_path = write_config("database:\nintrospection:\nlogging:\n")
    try:
        config = load_config(config_path)

        assert config.database.config == {}
        assert config.database.name == "postgresql"
        assert config.introspection == IntrospectionConfig()
        assert config.logging.level == "INFO"
    finally:
        Path(config_path).unlink()
