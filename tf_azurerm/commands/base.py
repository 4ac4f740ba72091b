"""Base command infrastructure and shared utilities.

This module provides common utilities used across command modules:
- CommandContext for shared command execution context
- Helpers for building configuration and the provider client
"""

import sys
from typing import Any, Optional

import click

from ..clients import ProviderClient
from ..config_manager import ProviderConfig, create_config_from_env, setup_logging
from ..exceptions import TfAzurermError
from ..logging_config import configure_logging


class CommandContext:
    """Shared context for command execution."""

    def __init__(
        self,
        ctx: click.Context,
        debug: bool = False,
        log_level: str = "INFO",
    ):
        self.click_ctx = ctx
        self.debug = debug
        self.log_level = log_level

    def get_config(
        self,
        tenant_id: Optional[str] = None,
        environment: Optional[str] = None,
        require_tenant: bool = True,
    ) -> ProviderConfig:
        """Build configuration from arguments and environment."""
        if require_tenant:
            config = create_config_from_env(tenant_id, environment)
        else:
            config = ProviderConfig.from_environment(tenant_id, environment)
        config.logging.level = self.log_level
        setup_logging(config.logging)
        configure_logging(config.logging.get_log_level(), json_output=not self.debug)
        if self.debug:
            config.log_configuration_summary()
        return config

    def get_client(
        self,
        tenant_id: Optional[str] = None,
        environment: Optional[str] = None,
        require_tenant: bool = True,
        **kwargs: Any,
    ) -> ProviderClient:
        """Build a provider client for the configured account."""
        config = self.get_config(tenant_id, environment, require_tenant)
        return ProviderClient(config, **kwargs)


def command_context(ctx: click.Context) -> CommandContext:
    """Create CommandContext from click context."""
    obj = ctx.obj or {}
    return CommandContext(
        ctx=ctx,
        debug=obj.get("debug", False),
        log_level=obj.get("log_level", "INFO"),
    )


def exit_with_error(message: str, code: int = 1) -> None:
    """Exit with error message."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def report_error(exc: TfAzurermError, debug: bool = False) -> None:
    """Print a provider error and exit with a non-zero status."""
    if debug:
        click.echo(str(exc.to_dict()), err=True)
    exit_with_error(str(exc))
