"""CLI commands for tf-azurerm."""

from .base import CommandContext, command_context, exit_with_error, report_error
from .state import upgrade_state
from .subscriptions import subscriptions

__all__ = [
    "CommandContext",
    "command_context",
    "exit_with_error",
    "report_error",
    "subscriptions",
    "upgrade_state",
]
