"""Configuration management for schema introspection."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import yaml
from pathlib import Path


@dataclass
class DatabaseConfig:
    """Connection settings handed to the PostgreSQL session provider."""

    config: Dict[str, Any] = field(default_factory=dict)
    name: str = "postgresql"


@dataclass
class IntrospectionConfig:
    """Configuration for the introspection traversal."""

    default_schema: str = "public"  # Used when the database has no comment
    concurrent_fetch: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    introspection: IntrospectionConfig = field(default_factory=IntrospectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        database:
          host: localhost
          port: 5432
          database: app
          user: app
          password: secret
          min_connections: 1
          max_connections: 5
          connect_timeout: 10

        introspection:
          default_schema: public
          concurrent_fetch: true

        logging:
          level: INFO
          structured: false
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Parse database config
    db_data = dict(data.get("database") or {})
    name = db_data.pop("name", "postgresql")
    database = DatabaseConfig(config=db_data, name=name)

    # Parse introspection config
    introspection_data = data.get("introspection") or {}
    introspection = IntrospectionConfig(**introspection_data)

    # Parse logging config
    logging_data = data.get("logging") or {}
    logging_config = LoggingConfig(**logging_data)

    return Config(
        database=database, introspection=introspection, logging=logging_config
    )
