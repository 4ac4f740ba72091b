"""azurerm_subscriptions data source."""

from .models import MatchCriteria, SubscriptionRecord
from .subscriptions_data_source import (
    SubscriptionsDataSource,
    flatten_subscription,
)

__all__ = [
    "MatchCriteria",
    "SubscriptionRecord",
    "SubscriptionsDataSource",
    "flatten_subscription",
]
