"""
azurerm_subscriptions data source

Lists every subscription visible to the provider's credential and keeps the
ones whose display name matches the configured criteria.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import structlog

from ...clients import ProviderClient
from ...exceptions import ListError
from ...pagination import PAGING_ERRORS, AdvanceFailure, PagedSequence
from ...tags import flatten_tags
from ...timeout_config import Deadline
from .models import MatchCriteria, SubscriptionRecord

logger = structlog.get_logger(__name__)

DATA_SOURCE_NAME = "azurerm_subscriptions"


def _enum_value(value: Any) -> str:
    """String form of an SDK enum field; ``""`` when the service sent none."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def flatten_subscription(subscription: Any) -> SubscriptionRecord:
    """Flatten an SDK ``Subscription`` into a record, without tags."""
    record = SubscriptionRecord(
        id=getattr(subscription, "id", None),
        subscription_id=getattr(subscription, "subscription_id", None),
        tenant_id=getattr(subscription, "tenant_id", None),
        display_name=getattr(subscription, "display_name", None),
        state=_enum_value(getattr(subscription, "state", None)),
    )

    policies = getattr(subscription, "subscription_policies", None)
    if policies is not None:
        record.location_placement_id = getattr(policies, "location_placement_id", None)
        record.quota_id = getattr(policies, "quota_id", None)
        record.spending_limit = _enum_value(getattr(policies, "spending_limit", None))

    return record


class SubscriptionsDataSource:
    """
    Read-only data source over the tenant's subscriptions.

    Args:
        client: Provider client supplying the SubscriptionClient and account
    """

    def __init__(self, client: ProviderClient) -> None:
        self.client = client

    def list_matching(
        self,
        criteria: Optional[MatchCriteria] = None,
        deadline: Optional[Deadline] = None,
    ) -> List[SubscriptionRecord]:
        """
        List subscriptions whose display name matches ``criteria``.

        Records keep the order the service returned them in. An empty list is
        a valid result.

        Raises:
            ListError: If the listing can't be started or the cursor can't
                advance to the next subscription. No partial result is
                returned.
        """
        criteria = criteria or MatchCriteria()
        tenant_id = self.client.account.tenant_id
        log = logger.bind(data_source=DATA_SOURCE_NAME, tenant_id=tenant_id)
        log.info("listing_subscriptions", criteria=criteria.describe())

        try:
            if deadline is not None:
                deadline.check()
            pager = self.client.subscription_client().subscriptions.list()
            entries = iter(
                PagedSequence(
                    pager,
                    before_advance=deadline.check if deadline is not None else None,
                )
            )
            # The first page is fetched lazily, on the first pull
            entry = next(entries, None)
        except PAGING_ERRORS as exc:
            log.error("list_subscriptions_failed", error=str(exc))
            raise ListError(
                "Error listing subscriptions",
                cause=exc,
                context={"tenant_id": tenant_id},
            ) from exc

        subscriptions: List[SubscriptionRecord] = []
        seen = 0
        while entry is not None:
            if isinstance(entry, AdvanceFailure):
                log.error("advance_subscriptions_failed", error=str(entry.error))
                raise ListError(
                    "Error going to next subscriptions value",
                    cause=entry.error,
                    context={"tenant_id": tenant_id},
                ) from entry.error

            seen += 1
            record = flatten_subscription(entry)
            if criteria.matches(record.display_name):
                record.tags = flatten_tags(getattr(entry, "tags", None))
                subscriptions.append(record)
            entry = next(entries, None)

        log.info("listed_subscriptions", total=seen, matched=len(subscriptions))
        return subscriptions

    def read(self, criteria: Optional[MatchCriteria] = None) -> Dict[str, Any]:
        """
        Read the data source and return its state.

        The listing runs under the configured read timeout.
        """
        criteria = criteria or MatchCriteria()
        deadline = Deadline(
            self.client.config.timeouts.read, operation=f"{DATA_SOURCE_NAME}.read"
        )
        subscriptions = self.list_matching(criteria, deadline=deadline)

        return {
            "id": f"subscriptions-{self.client.account.tenant_id}",
            "display_name_prefix": criteria.display_name_prefix,
            "display_name_contains": criteria.display_name_contains,
            "exact_match": criteria.exact_match,
            "subscriptions": [s.to_state() for s in subscriptions],
        }
