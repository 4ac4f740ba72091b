"""Subscriptions command for reading the azurerm_subscriptions data source."""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ..exceptions import TfAzurermError
from ..services.subscription import MatchCriteria, SubscriptionsDataSource
from .base import command_context, report_error

console = Console()


@click.command()
@click.option("--display-name-prefix", default="", help="Case-insensitive prefix")
@click.option("--display-name-contains", default="", help="Case-insensitive substring")
@click.option(
    "--exact-match",
    default="",
    help="Exact display name; overrides the prefix and contains filters",
)
@click.option(
    "--tenant-id",
    required=False,
    help="Azure tenant ID (defaults to AZURE_TENANT_ID from .env)",
)
@click.option("--environment", help="Azure cloud (public, china, usgovernment)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def subscriptions(
    ctx: click.Context,
    display_name_prefix: str,
    display_name_contains: str,
    exact_match: str,
    tenant_id: Optional[str],
    environment: Optional[str],
    output_json: bool,
) -> None:
    """List subscriptions, filtered by display name.

    Examples:
        tf-azurerm subscriptions --display-name-prefix dev
        tf-azurerm subscriptions --exact-match Production --json
    """
    cmd_ctx = command_context(ctx)
    criteria = MatchCriteria(
        display_name_prefix=display_name_prefix,
        display_name_contains=display_name_contains,
        exact_match=exact_match,
    )

    try:
        client = cmd_ctx.get_client(tenant_id, environment)
        state = SubscriptionsDataSource(client).read(criteria)
    except TfAzurermError as exc:
        report_error(exc, cmd_ctx.debug)
        return

    if output_json:
        click.echo(json.dumps(state, indent=2))
        return

    records = state["subscriptions"]
    if not records:
        click.echo(f"No subscriptions found matching {criteria.describe()}.")
        return

    table = Table(title=f"Subscriptions ({criteria.describe()})")
    table.add_column("Display Name", style="cyan")
    table.add_column("Subscription ID")
    table.add_column("State", style="green")
    table.add_column("Quota ID", style="dim")
    table.add_column("Spending Limit", style="dim")

    for record in records:
        table.add_row(
            record.get("display_name", ""),
            record.get("subscription_id", ""),
            record.get("state", ""),
            record.get("quota_id", ""),
            record.get("spending_limit", ""),
        )

    console.print(table)
    click.echo(f"\nTotal: {len(records)} subscription(s)")
