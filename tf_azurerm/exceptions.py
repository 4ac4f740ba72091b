"""
Custom Exception Hierarchy for tf-azurerm

This module provides the exception hierarchy shared by the state upgraders and
the data sources, carrying structured context (resource type, schema version,
identifiers) so that failures can be surfaced to the operator verbatim.
"""

from typing import Any, Dict, Optional


class TfAzurermError(Exception):
    """
    Base exception class for all tf-azurerm errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        # Messages built with the cause already inlined don't repeat it
        if self.cause and str(self.cause) not in self.message:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


# State-related exceptions
class MigrationError(TfAzurermError):
    """Raised when a persisted resource state cannot be upgraded."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        from_version: Optional[int] = None,
        old_id: Optional[str] = None,
        new_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if resource_type:
            context["resource_type"] = resource_type
        if from_version is not None:
            context["from_version"] = from_version
        if old_id is not None:
            context["old_id"] = old_id
        if new_id is not None:
            context["new_id"] = new_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "STATE_MIGRATION_FAILED")
        super().__init__(message, **kwargs)


# Listing-related exceptions
class ListError(TfAzurermError):
    """Raised when a listing request against the Azure API fails.

    The underlying cause is appended to the message, e.g.
    ``Error listing subscriptions: <cause>``.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        kwargs.setdefault("error_code", "LIST_FAILED")
        super().__init__(message, cause=cause, **kwargs)


# Configuration-related exceptions
class ConfigurationError(TfAzurermError):
    """Raised when provider configuration is invalid or incomplete."""

    def __init__(
        self, message: str, config_section: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if config_section:
            context["config_section"] = config_section
        kwargs["context"] = context
        kwargs.setdefault("error_code", "CONFIGURATION_INVALID")
        kwargs.setdefault(
            "recovery_suggestion", "Check configuration file and environment variables"
        )
        super().__init__(message, **kwargs)
