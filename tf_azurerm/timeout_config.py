"""
Centralized timeout configuration for provider operations.

Each resource and data source operation runs under an overall deadline. The
defaults mirror the provider schema (a data source read gets five minutes) and
can be overridden via environment variables.

Usage:
    from tf_azurerm.timeout_config import Deadline, Timeouts

    deadline = Deadline(Timeouts.READ, operation="subscriptions.read")
    deadline.check()

Environment Variables:
    - TF_AZURERM_TIMEOUT_READ: Data source reads (default: 300s)
    - TF_AZURERM_TIMEOUT_AZURE_SDK_CONNECTION: SDK connection (default: 30s)
    - TF_AZURERM_TIMEOUT_AZURE_SDK_READ: SDK socket read (default: 60s)
"""

import logging
import os
import time
from typing import Callable, Final, Optional

logger = logging.getLogger(__name__)


def _get_timeout(env_var: str, default: int) -> int:
    """Get timeout value from environment variable or use default.

    Args:
        env_var: Environment variable name
        default: Default timeout in seconds

    Returns:
        Timeout value in seconds
    """
    value = os.environ.get(env_var)
    if value is not None:
        try:
            timeout = int(value)
            if timeout <= 0:
                logger.warning(
                    f"Invalid timeout value for {env_var}: {value}. "
                    f"Must be positive. Using default: {default}s"
                )
                return default
            return timeout
        except ValueError:
            logger.warning(
                f"Invalid timeout value for {env_var}: {value}. "
                f"Must be integer. Using default: {default}s"
            )
            return default
    return default


class Timeouts:
    """Timeout constants for provider operations, in seconds."""

    READ: Final[int] = _get_timeout("TF_AZURERM_TIMEOUT_READ", 300)

    AZURE_SDK_CONNECTION: Final[int] = _get_timeout(
        "TF_AZURERM_TIMEOUT_AZURE_SDK_CONNECTION", 30
    )
    AZURE_SDK_READ: Final[int] = _get_timeout("TF_AZURERM_TIMEOUT_AZURE_SDK_READ", 60)


class OperationTimeoutError(TimeoutError):
    """Raised when an operation exceeds its deadline."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        timeout_value: float | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.timeout_value = timeout_value

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.timeout_value:
            parts.append(f"timeout={self.timeout_value}s")
        return " | ".join(parts)


class Deadline:
    """An absolute point in time an operation must finish by."""

    def __init__(
        self,
        timeout: float,
        operation: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout <= 0:
            raise ValueError("Deadline timeout must be positive")
        self.timeout = timeout
        self.operation = operation
        self._clock = clock
        self._expires_at = clock() + timeout

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    def check(self) -> None:
        """Raise OperationTimeoutError once the deadline has passed."""
        if self.expired():
            log_timeout_event(self.operation or "operation", self.timeout)
            raise OperationTimeoutError(
                "context deadline exceeded",
                operation=self.operation,
                timeout_value=self.timeout,
            )


def log_timeout_event(
    operation: str,
    timeout_value: float,
    level: str = "warning",
) -> None:
    """Log a timeout event with consistent formatting."""
    log_func = getattr(logger, level, logger.warning)
    log_func(f"Operation '{operation}' timed out after {timeout_value} seconds")
