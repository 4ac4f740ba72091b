"""
Versioned state migration

A resource's persisted state is tagged with the schema version it was written
with. When the schema changes, the resource registers one upgrader per old
version; each upgrader turns a state of version N into a state of version
N+1. ``StateMigrator`` applies the chain in order until the state reaches the
current schema version.

Every version has an explicit record type (a pydantic model). The stored
state is validated against its version's record type so that fields with a
declared default are filled in and malformed values are rejected; the output
of each upgrader is validated against the record type of the version it
produces, so a bad result is reported against the step that made it.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import MigrationError

logger = logging.getLogger(__name__)

PersistedState = Dict[str, Any]
StateUpgradeFunc = Callable[[PersistedState, Any], PersistedState]


class StateRecord(BaseModel):
    """Base class for versioned state record types.

    Fields a schema version does not know about are kept as extras so that
    migrating never loses data.
    """

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class StateUpgrader:
    """Upgrades a state from ``version`` to ``version + 1``."""

    version: int
    type: Type[StateRecord]
    upgrade: StateUpgradeFunc


class StateMigrator:
    """Applies a total, ordered chain of state upgraders.

    Usage:
        migrator = StateMigrator(
            "azurerm_storage_share",
            schema_version=2,
            upgraders=[
                StateUpgrader(0, StorageShareStateV0, upgrade_v0_to_v1),
                StateUpgrader(1, StorageShareStateV1, upgrade_v1_to_v2),
            ],
            current_type=StorageShareStateV2,
        )
        state = migrator.upgrade(raw_state, stored_version, client)
    """

    def __init__(
        self,
        resource_type: str,
        schema_version: int,
        upgraders: Sequence[StateUpgrader],
        current_type: Optional[Type[StateRecord]] = None,
    ) -> None:
        ordered = sorted(upgraders, key=lambda u: u.version)
        versions = [u.version for u in ordered]

        if len(set(versions)) != len(versions):
            raise ValueError(
                f"{resource_type}: more than one upgrader registered for a version: {versions}"
            )
        if ordered:
            oldest = ordered[0].version
            if oldest < 0:
                raise ValueError(f"{resource_type}: schema versions start at 0")
            expected = list(range(oldest, schema_version))
            if versions != expected:
                raise ValueError(
                    f"{resource_type}: upgraders must cover versions {expected} "
                    f"without gaps, got {versions}"
                )
        elif schema_version < 0:
            raise ValueError(f"{resource_type}: schema versions start at 0")

        self.resource_type = resource_type
        self.schema_version = schema_version
        self.current_type = current_type
        self._upgraders: List[StateUpgrader] = ordered

    @property
    def oldest_version(self) -> int:
        return self._upgraders[0].version if self._upgraders else self.schema_version

    def pending_upgraders(self, version: int) -> List[StateUpgrader]:
        """Upgraders that would run for a state stored at ``version``."""
        if version > self.schema_version or version < self.oldest_version:
            raise MigrationError(
                f"Unsupported schema version {version}; supported versions are "
                f"{self.oldest_version} to {self.schema_version}",
                resource_type=self.resource_type,
                from_version=version,
            )
        return self._upgraders[version - self.oldest_version :]

    def upgrade(
        self, state: Mapping[str, Any], version: int, ctx: Any = None
    ) -> PersistedState:
        """
        Upgrade ``state`` from ``version`` to the current schema version.

        The input mapping is never modified; the upgraded state is returned
        only once every step has succeeded.

        Raises:
            MigrationError: If the version is unsupported or a step fails
        """
        pending = self.pending_upgraders(version)
        working: PersistedState = copy.deepcopy(dict(state))

        if not pending:
            logger.debug(
                f"{self.resource_type} state is already at version {self.schema_version}"
            )
            return working

        working = _apply_record_type(
            pending[0].type, working, self.resource_type, version
        )
        for index, upgrader in enumerate(pending):
            previous = working
            try:
                working = upgrader.upgrade(working, ctx)
            except MigrationError as exc:
                exc.context.setdefault("resource_type", self.resource_type)
                exc.context.setdefault("from_version", upgrader.version)
                raise
            except (KeyError, TypeError, ValueError) as exc:
                raise MigrationError(
                    f"Upgrading state from version {upgrader.version} failed: {exc}",
                    resource_type=self.resource_type,
                    from_version=upgrader.version,
                    cause=exc,
                ) from exc
            logger.debug(
                f"Upgraded {self.resource_type} state from version "
                f"{upgrader.version} to {upgrader.version + 1}"
            )

            # The step's output is checked as the next version's record
            if index + 1 < len(pending):
                next_type: Optional[Type[StateRecord]] = pending[index + 1].type
            else:
                next_type = self.current_type
            if next_type is not None:
                working = _apply_record_type(
                    next_type,
                    working,
                    self.resource_type,
                    upgrader.version,
                    produced_by=previous,
                )
        return working


def _state_id(state: Mapping[str, Any]) -> Optional[str]:
    value = state.get("id")
    return value if isinstance(value, str) else None


def _apply_record_type(
    record_type: Type[StateRecord],
    state: PersistedState,
    resource_type: str,
    version: int,
    produced_by: Optional[PersistedState] = None,
) -> PersistedState:
    """Validate ``state`` against ``record_type`` and fill in declared defaults.

    Fields already present are replaced with their validated value; absent
    fields are only added when the schema declares a non-null default.

    When ``produced_by`` is given, ``state`` is the output of the upgrader for
    ``version`` run on ``produced_by``, and a failure reports both identifiers.
    """
    try:
        record = record_type.model_validate(state)
    except PydanticValidationError as exc:
        if produced_by is None:
            raise MigrationError(
                f"State does not match schema version {version}: {exc}",
                resource_type=resource_type,
                from_version=version,
                cause=exc,
            ) from exc
        raise MigrationError(
            f"Upgraded state does not match schema version {version + 1}: {exc}",
            resource_type=resource_type,
            from_version=version,
            old_id=_state_id(produced_by),
            new_id=_state_id(state),
            cause=exc,
        ) from exc

    result = dict(state)
    for key, value in record.model_dump().items():
        if key in result or value is not None:
            result[key] = value
    return result
