"""upgrade-state command for migrating persisted storage share state.

Accepts either a bare attribute mapping (with ``--from-version``) or a state
instance object of the form ``{"schema_version": N, "attributes": {...}}``.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ..exceptions import TfAzurermError
from ..services.storage import storage_share_state_migrator
from .base import command_context, exit_with_error, report_error


def _split_instance(document: Dict[str, Any], from_version: Optional[int]):
    """Return (attributes, version, is_instance) for a loaded state document."""
    if "attributes" in document and isinstance(document["attributes"], dict):
        version = document.get("schema_version")
        if version is None:
            version = from_version
        return document["attributes"], version, True
    return document, from_version, False


@click.command("upgrade-state")
@click.argument("state_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--from-version",
    type=int,
    help="Schema version the state was written with (read from the file when present)",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the upgraded state here instead of stdout",
)
@click.option("--environment", help="Azure cloud (public, china, usgovernment)")
@click.pass_context
def upgrade_state(
    ctx: click.Context,
    state_file: Path,
    from_version: Optional[int],
    output_file: Optional[Path],
    environment: Optional[str],
) -> None:
    """Upgrade an azurerm_storage_share state to the current schema version."""
    cmd_ctx = command_context(ctx)

    try:
        document = json.loads(state_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        exit_with_error(f"{state_file} is not valid JSON: {exc}")
        return
    if not isinstance(document, dict):
        exit_with_error(f"{state_file} must contain a JSON object")
        return

    attributes, version, is_instance = _split_instance(document, from_version)
    if version is None:
        exit_with_error("--from-version is required when the file has no schema_version")
        return
    # bool is an int subclass but never a schema version
    if isinstance(version, bool) or not isinstance(version, int):
        exit_with_error(f"schema_version must be an integer, got {version!r}")
        return

    try:
        client = cmd_ctx.get_client(environment=environment, require_tenant=False)
        upgraded = storage_share_state_migrator.upgrade(attributes, version, client)
    except TfAzurermError as exc:
        report_error(exc, cmd_ctx.debug)
        return

    if is_instance:
        result: Dict[str, Any] = dict(document)
        result["schema_version"] = storage_share_state_migrator.schema_version
        result["attributes"] = upgraded
    else:
        result = upgraded

    rendered = json.dumps(result, indent=2)
    if output_file:
        output_file.write_text(rendered + "\n", encoding="utf-8")
        click.echo(
            f"Upgraded state from version {version} to "
            f"{storage_share_state_migrator.schema_version}: {output_file}"
        )
    else:
        click.echo(rendered)
