"""Configuration management for the message store.

This module handles loading and validating configuration from environment
variables. It provides type-safe configuration for the Message DB connection,
default read options and logging.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class MessageDBConfig:
    """Configuration for Message DB connection.

    Attributes:
        host: PostgreSQL host (default: localhost)
        port: PostgreSQL port (default: 5432)
        database: Database name (default: message_store)
        user: Database user (required)
        password: Database password (required)
        min_size: Minimum connection pool size (default: 2)
        max_size: Maximum connection pool size (default: 10)

    Example:
        >>> config = MessageDBConfig(
        ...     host="localhost",
        ...     port=5432,
        ...     database="message_store",
        ...     user="postgres",
        ...     password="secret"
        ... )
    """

    host: str
    port: int
    database: str
    user: str
    password: str
    min_size: int = 2
    max_size: int = 10

    def __post_init__(self) -> None:
        """Validate Message DB configuration after initialization.

        Raises:
            ValueError: If required fields are empty or invalid
        """
        if not self.host or not self.host.strip():
            raise ValueError("Message DB host cannot be empty")
        if self.port <= 0 or self.port > 65535:
            raise ValueError(f"Message DB port must be 1-65535, got {self.port}")
        if not self.database or not self.database.strip():
            raise ValueError("Message DB database cannot be empty")
        if not self.user or not self.user.strip():
            raise ValueError("Message DB user cannot be empty")
        if not self.password:
            raise ValueError("Message DB password cannot be empty")
        if self.min_size < 0:
            raise ValueError(f"Pool min_size must be >= 0, got {self.min_size}")
        if self.max_size < max(self.min_size, 1):
            raise ValueError(
                f"Pool max_size must be >= min_size and > 0, got {self.max_size}"
            )

    def to_connection_string(self) -> str:
        """Generate PostgreSQL connection string in DSN format."""
        return (
            f"host={self.host} "
            f"port={self.port} "
            f"dbname={self.database} "
            f"user={self.user} "
            f"password={self.password}"
        )


@dataclass(frozen=True)
class StoreConfig:
    """Default read options used by the CLI.

    Attributes:
        position: Starting position for reads (default: 0)
        batch_size: Maximum number of messages per read (default: 1000)
    """

    position: int = 0
    batch_size: int = 1000

    def __post_init__(self) -> None:
        """Validate read options.

        Raises:
            ValueError: If position is negative or batch_size is not positive
        """
        if self.position < 0:
            raise ValueError(f"position must be >= 0, got {self.position}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be > 0, got {self.batch_size}")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, text)

    Example:
        >>> config = LoggingConfig(log_level="INFO", log_format="json")
    """

    log_level: str
    log_format: str

    def __post_init__(self) -> None:
        """Validate logging configuration after initialization.

        Raises:
            ValueError: If log_level or log_format is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {self.log_level}")

        valid_formats = {"json", "text"}
        if self.log_format.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}, got {self.log_format}")


@dataclass(frozen=True)
class Config:
    """Complete configuration for the message store.

    Attributes:
        message_db: Message DB connection configuration
        store: Default read options
        logging: Logging configuration

    Example:
        >>> config = load_config()
        >>> print(config.message_db.host)
    """

    message_db: MessageDBConfig
    store: StoreConfig
    logging: LoggingConfig


def load_config(env_file: str | None = None) -> Config:
    """Load configuration from environment variables.

    This function loads environment variables (optionally from a .env file)
    and constructs a complete Config object.

    Args:
        env_file: Optional path to .env file to load (default: .env in current directory)

    Returns:
        Complete Config object with all sub-configurations

    Raises:
        ValueError: If required environment variables are missing or invalid

    Environment Variables:
        Message DB:
            - DB_HOST: PostgreSQL host (default: localhost)
            - DB_PORT: PostgreSQL port (default: 5432)
            - DB_NAME: Database name (default: message_store)
            - DB_USER: Database user (required)
            - DB_PASSWORD: Database password (required)
            - DB_POOL_MIN_SIZE: Minimum pool size (default: 2)
            - DB_POOL_MAX_SIZE: Maximum pool size (default: 10)

        Reads:
            - READ_POSITION: Default starting position (default: 0)
            - READ_BATCH_SIZE: Default batch size (default: 1000)

        Logging:
            - LOG_LEVEL: Logging level (default: INFO)
            - LOG_FORMAT: Log format (default: json)
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    message_db = MessageDBConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "message_store"),
        user=_get_required_env("DB_USER"),
        password=_get_required_env("DB_PASSWORD"),
        min_size=int(os.getenv("DB_POOL_MIN_SIZE", "2")),
        max_size=int(os.getenv("DB_POOL_MAX_SIZE", "10")),
    )

    store = StoreConfig(
        position=int(os.getenv("READ_POSITION", "0")),
        batch_size=int(os.getenv("READ_BATCH_SIZE", "1000")),
    )

    logging = LoggingConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT", "json").lower(),
    )

    return Config(message_db=message_db, store=store, logging=logging)


def _get_required_env(var_name: str) -> str:
    """Get a required environment variable or raise an error.

    Raises:
        ValueError: If the environment variable is not set
    """
    value = os.getenv(var_name)
    if value is None:
        raise ValueError(
            f"Required environment variable {var_name} is not set. "
            f"Please set it in your environment or .env file."
        )
    return value
