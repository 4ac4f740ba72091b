"""azurerm_storage_share state handling."""

from .share_migration import (
    storage_share_state_migrator,
    upgrade_storage_share_state,
    upgrade_storage_share_v0_to_v1,
    upgrade_storage_share_v1_to_v2,
)
from .share_schema import (
    StorageShareStateV0,
    StorageShareStateV1,
    StorageShareStateV2,
)

__all__ = [
    "StorageShareStateV0",
    "StorageShareStateV1",
    "StorageShareStateV2",
    "storage_share_state_migrator",
    "upgrade_storage_share_state",
    "upgrade_storage_share_v0_to_v1",
    "upgrade_storage_share_v1_to_v2",
]
