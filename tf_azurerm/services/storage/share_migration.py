"""State upgraders for azurerm_storage_share.

Version history of the identifier:

- v0: whatever the resource originally stored
- v1: ``{name}/{resource_group_name}/{storage_account_name}``
- v2: ``https://{account}.file.{storage_suffix}/{name}``
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping

from ...exceptions import MigrationError
from ...state_migration import PersistedState, StateMigrator, StateUpgrader
from .share_schema import (
    RESOURCE_TYPE,
    SCHEMA_VERSION,
    StorageShareStateV0,
    StorageShareStateV1,
    StorageShareStateV2,
)

if TYPE_CHECKING:
    from ...clients import ProviderClient

logger = logging.getLogger(__name__)

ID_SEPARATOR = "/"
V1_ID_SEGMENTS = 3


def _require_string(state: Mapping[str, Any], key: str, from_version: int) -> str:
    value = state.get(key)
    if value is None:
        raise MigrationError(
            f"`{key}` is missing from the state",
            resource_type=RESOURCE_TYPE,
            from_version=from_version,
        )
    if not isinstance(value, str):
        raise MigrationError(
            f"Expected `{key}` to be a string but got {type(value).__name__}",
            resource_type=RESOURCE_TYPE,
            from_version=from_version,
        )
    return value


def upgrade_storage_share_v0_to_v1(
    raw_state: PersistedState, _meta: Any = None
) -> PersistedState:
    """Rebuild the identifier from the share, resource group and account names."""
    share_name = _require_string(raw_state, "name", 0)
    resource_group = _require_string(raw_state, "resource_group_name", 0)
    account_name = _require_string(raw_state, "storage_account_name", 0)

    old_id = raw_state.get("id")
    new_id = ID_SEPARATOR.join([share_name, resource_group, account_name])
    logger.debug(f"Updating ID from {old_id!r} to {new_id!r}")

    upgraded: Dict[str, Any] = dict(raw_state)
    upgraded["id"] = new_id
    return upgraded


def upgrade_storage_share_v1_to_v2(
    raw_state: PersistedState, meta: "ProviderClient"
) -> PersistedState:
    """Rewrite the identifier to the share's file endpoint URL.

    The resource group segment is dropped; share URLs don't carry it.
    """
    old_id = _require_string(raw_state, "id", 1)

    # name/resourceGroup/accountName
    segments = old_id.split(ID_SEPARATOR)
    if len(segments) != V1_ID_SEGMENTS:
        raise MigrationError(
            f"Expected {V1_ID_SEGMENTS} segments in the ID but got {len(segments)}",
            resource_type=RESOURCE_TYPE,
            from_version=1,
            old_id=old_id,
        )

    share_name = segments[0]
    account_name = segments[2]

    new_id = meta.build_share_resource_id(account_name, share_name)
    logger.debug(f"Updating Resource ID from {old_id!r} to {new_id!r}")

    upgraded: Dict[str, Any] = dict(raw_state)
    upgraded["id"] = new_id
    return upgraded


storage_share_state_migrator = StateMigrator(
    RESOURCE_TYPE,
    schema_version=SCHEMA_VERSION,
    upgraders=[
        StateUpgrader(0, StorageShareStateV0, upgrade_storage_share_v0_to_v1),
        StateUpgrader(1, StorageShareStateV1, upgrade_storage_share_v1_to_v2),
    ],
    current_type=StorageShareStateV2,
)


def upgrade_storage_share_state(
    state: Mapping[str, Any], version: int, meta: "ProviderClient"
) -> PersistedState:
    """Upgrade a storage share state stored at ``version`` to the current schema."""
    return storage_share_state_migrator.upgrade(state, version, meta)
