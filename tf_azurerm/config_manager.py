"""
Configuration Management for tf-azurerm

This module provides centralized configuration management with validation and
environment variable handling for the provider client, timeouts and logging.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import colorlog
from dotenv import load_dotenv

from .environments import CloudEnvironment, get_environment
from .exceptions import ConfigurationError
from .timeout_config import Timeouts

# Load environment variables
load_dotenv()


def _set_azure_http_log_level(log_level: str) -> None:
    """Set log levels for HTTP-related loggers to reduce noise."""
    http_loggers = [
        "azure.core.pipeline.policies.http_logging_policy",
        "azure.core.pipeline",
        "azure.identity",
        "azure.mgmt",
        "azure",
        "urllib3",
        "urllib3.connectionpool",
        "http.client",
    ]
    # HTTP logging should only appear at DEBUG level
    target_level = logging.DEBUG if log_level == "DEBUG" else logging.WARNING
    for name in http_loggers:
        logging.getLogger(name).setLevel(target_level)


logger = logging.getLogger(__name__)


@dataclass
class AzureConfig:
    """Configuration for the Azure account the provider acts against."""

    tenant_id: str = field(default_factory=lambda: os.getenv("AZURE_TENANT_ID", ""))
    environment: str = field(
        default_factory=lambda: os.getenv("AZURE_ENVIRONMENT", "public")
    )

    def __post_init__(self) -> None:
        """Validate the environment name eagerly."""
        self.environment = get_environment(self.environment).name

    def get_environment(self) -> CloudEnvironment:
        return get_environment(self.environment)

    def validate(self) -> None:
        if not self.tenant_id:
            raise ConfigurationError(
                "Tenant ID is required",
                config_section="azure",
                recovery_suggestion="Pass --tenant-id or set AZURE_TENANT_ID",
            )


@dataclass
class TimeoutConfig:
    """Per-operation deadlines in seconds."""

    read: int = field(default_factory=lambda: Timeouts.READ)

    def __post_init__(self) -> None:
        if self.read < 1:
            raise ConfigurationError(
                "Read timeout must be at least 1 second", config_section="timeouts"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = field(
        default_factory=lambda: os.getenv(
            "LOG_FORMAT", "%(log_color)s%(levelname)s:%(name)s:%(message)s"
        )
    )
    file_output: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        self.level = self.level.upper()

    def get_log_level(self) -> int:
        """Convert string log level to logging constant."""
        level_attr = getattr(logging, self.level, None)
        if level_attr is None:
            raise ValueError(f"Invalid log level: {self.level}")
        return int(level_attr)


@dataclass
class ProviderConfig:
    """Main configuration class that aggregates all configuration sections."""

    azure: AzureConfig = field(default_factory=AzureConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def tenant_id(self) -> str:
        return self.azure.tenant_id

    @classmethod
    def from_environment(
        cls,
        tenant_id: Optional[str] = None,
        environment: Optional[str] = None,
        read_timeout: Optional[int] = None,
    ) -> "ProviderConfig":
        """
        Create configuration from environment variables.

        Args:
            tenant_id: Azure tenant ID, overriding AZURE_TENANT_ID
            environment: Azure cloud name, overriding AZURE_ENVIRONMENT
            read_timeout: Read deadline in seconds, overriding TF_AZURERM_TIMEOUT_READ

        Returns:
            ProviderConfig: Configured instance
        """
        config = cls()
        if tenant_id:
            config.azure.tenant_id = tenant_id
        if environment:
            config.azure.environment = get_environment(environment).name
        if read_timeout is not None:
            config.timeouts = TimeoutConfig(read=read_timeout)
        return config

    def validate_all(self) -> None:
        """Validate all configuration sections."""
        try:
            self.azure.validate()
            self.azure.__post_init__()
            self.timeouts.__post_init__()
            self.logging.__post_init__()
            logger.info("✅ Configuration validation successful")
        except Exception as e:
            logger.exception(f"❌ Configuration validation failed: {e}")
            raise

    def log_configuration_summary(self) -> None:
        """Log a summary of the current configuration."""
        logger.info("=" * 60)
        logger.info("🔧 TF-AZURERM CONFIGURATION")
        logger.info("=" * 60)
        logger.info(f"📋 Tenant ID: {self.azure.tenant_id or 'Not configured'}")
        logger.info(f"☁️  Environment: {self.azure.environment}")
        logger.info(f"⏱️  Read Timeout: {self.timeouts.read}s")
        logger.info(f"📝 Logging Level: {self.logging.level}")
        if self.logging.file_output:
            logger.info(f"📄 Log File: {self.logging.file_output}")
        logger.info("=" * 60)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "azure": {
                "tenant_id": self.azure.tenant_id,
                "environment": self.azure.environment,
            },
            "timeouts": {"read": self.timeouts.read},
            "logging": {
                "level": self.logging.level,
                "file_output": self.logging.file_output,
            },
        }


def setup_logging(config: LoggingConfig) -> None:
    """
    Setup logging configuration based on config.
    """
    _set_azure_http_log_level(config.level.upper())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(config.get_log_level())

    console_handler = colorlog.StreamHandler()
    console_handler.setFormatter(colorlog.ColoredFormatter(config.format))
    root_logger.addHandler(console_handler)

    if config.file_output:
        file_handler = logging.FileHandler(config.file_output)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s:%(name)s:%(message)s"
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Reduce Azure SDK noise
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(
        logging.WARNING
    )

    logger.info(
        f"📝 Logging configured: level={config.level}, file={config.file_output or 'console'}"
    )


def create_config_from_env(
    tenant_id: Optional[str] = None,
    environment: Optional[str] = None,
    read_timeout: Optional[int] = None,
) -> ProviderConfig:
    """
    Factory function to create and validate configuration from environment.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = ProviderConfig.from_environment(tenant_id, environment, read_timeout)
    config.validate_all()
    return config
