from enum import Enum
from types import SimpleNamespace
from typing import Any, Callable, Iterator, List, Optional
from unittest.mock import Mock

import pytest

from tf_azurerm.clients import ProviderClient
from tf_azurerm.config_manager import AzureConfig, ProviderConfig


class FakeSubscriptionState(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class FakeSpendingLimit(str, Enum):
    ON = "On"
    OFF = "Off"


def make_subscription(
    display_name: Optional[str],
    subscription_id: str = "00000000-0000-0000-0000-000000000001",
    tenant_id: Optional[str] = "tenant-123",
    state: Any = FakeSubscriptionState.ENABLED,
    policies: Any = None,
    tags: Any = None,
) -> SimpleNamespace:
    """Build an object shaped like azure.mgmt.subscription.models.Subscription."""
    return SimpleNamespace(
        id=f"/subscriptions/{subscription_id}",
        subscription_id=subscription_id,
        tenant_id=tenant_id,
        display_name=display_name,
        state=state,
        subscription_policies=policies,
        tags=tags,
    )


def paged(items: List[Any], fail_at: Optional[int] = None, error: Optional[BaseException] = None) -> Iterator[Any]:
    """Lazy stand-in for ItemPaged that raises ``error`` when item ``fail_at`` is pulled."""
    for index, item in enumerate(items):
        if fail_at is not None and index == fail_at:
            raise error  # type: ignore[misc]
        yield item


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Provide a configuration for the public cloud."""
    return ProviderConfig(azure=AzureConfig(tenant_id="tenant-123", environment="public"))


@pytest.fixture
def mock_subscription_client() -> Mock:
    """Provide a mock SubscriptionClient instance."""
    return Mock()


@pytest.fixture
def subscription_client_factory(mock_subscription_client: Mock) -> Callable[..., Mock]:
    """Factory for SubscriptionClient."""
    return lambda credential, **kwargs: mock_subscription_client


@pytest.fixture
def provider_client(
    provider_config: ProviderConfig,
    subscription_client_factory: Callable[..., Mock],
) -> ProviderClient:
    """Provide a ProviderClient with injected credential and factories."""
    return ProviderClient(
        provider_config,
        credential=Mock(),
        subscription_client_factory=subscription_client_factory,
    )


@pytest.fixture(name="make_subscription")
def make_subscription_fixture() -> Callable[..., SimpleNamespace]:
    return make_subscription


@pytest.fixture(name="paged")
def paged_fixture() -> Callable[..., Iterator[Any]]:
    return paged


@pytest.fixture
def policies() -> SimpleNamespace:
    """Subscription policies as returned by the service."""
    return SimpleNamespace(
        location_placement_id="Public_2014-09-01",
        quota_id="PayAsYouGo_2014-09-01",
        spending_limit=FakeSpendingLimit.OFF,
    )
