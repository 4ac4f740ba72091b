"""Persisted state record types for azurerm_storage_share, one per schema version."""

import re
from typing import Optional

from pydantic import Field, field_validator

from ...state_migration import StateRecord
from .share_id import parse_share_resource_id

RESOURCE_TYPE = "azurerm_storage_share"
SCHEMA_VERSION = 2

DEFAULT_QUOTA_GB = 5120
MIN_QUOTA_GB = 1
MAX_QUOTA_GB = 5120

MAX_RESOURCE_GROUP_NAME_LENGTH = 90
RESOURCE_GROUP_NAME_PATTERN = re.compile(r"[-\w.()]+")


class StorageShareStateV0(StateRecord):
    """State written by schema version 0.

    Versions 0 and 1 share the same fields; only the identifier format
    differs (see ``StorageShareStateV1``).
    """

    id: Optional[str] = None
    name: Optional[str] = None
    resource_group_name: Optional[str] = None
    storage_account_name: Optional[str] = None
    quota: int = Field(default=DEFAULT_QUOTA_GB, ge=MIN_QUOTA_GB, le=MAX_QUOTA_GB)
    url: Optional[str] = None

    @field_validator("quota", mode="before")
    @classmethod
    def default_null_quota(cls, v: Optional[int]) -> int:
        # Null in state means the attribute was never set
        return DEFAULT_QUOTA_GB if v is None else v

    @field_validator("resource_group_name")
    @classmethod
    def validate_resource_group_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not 1 <= len(v) <= MAX_RESOURCE_GROUP_NAME_LENGTH:
            raise ValueError(
                f"resource_group_name must be 1 - {MAX_RESOURCE_GROUP_NAME_LENGTH} "
                f"characters long, got {len(v)}"
            )
        if not RESOURCE_GROUP_NAME_PATTERN.fullmatch(v):
            raise ValueError(
                "resource_group_name may only contain alphanumeric characters, "
                "underscores, periods, hyphens and parentheses"
            )
        if v.endswith("."):
            raise ValueError("resource_group_name cannot end in a period")
        return v


class StorageShareStateV1(StorageShareStateV0):
    """State written by schema version 1.

    The identifier is ``{name}/{resource_group_name}/{storage_account_name}``.
    """


class StorageShareStateV2(StateRecord):
    """State written by schema version 2.

    The identifier is the share's file endpoint URL. ``resource_group_name``
    is no longer part of the identity and is carried along as an extra field
    when present.
    """

    id: str
    name: Optional[str] = None
    storage_account_name: Optional[str] = None
    quota: int = Field(default=DEFAULT_QUOTA_GB, ge=MIN_QUOTA_GB, le=MAX_QUOTA_GB)
    url: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        parse_share_resource_id(v)
        return v
