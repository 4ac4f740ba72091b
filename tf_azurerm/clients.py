"""
Provider client

The client is the context handed to every resource operation and state
upgrader: it knows which tenant and cloud environment the provider acts
against, holds the credential, and builds the Azure SDK clients and
environment-specific identifiers the operations need.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from azure.identity import DefaultAzureCredential
from azure.mgmt.subscription import SubscriptionClient

from .config_manager import ProviderConfig
from .environments import CloudEnvironment
from .services.storage.share_id import build_share_resource_id
from .timeout_config import Timeouts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    """The tenant and cloud the provider is configured for."""

    tenant_id: str
    environment: CloudEnvironment


class ProviderClient:
    """
    Shared context for resource operations.

    SDK clients are created through injectable factories so that tests can
    substitute mocks without touching the network.
    """

    def __init__(
        self,
        config: ProviderConfig,
        credential: Optional[Any] = None,
        subscription_client_factory: Optional[Callable[..., Any]] = None,
    ) -> None:
        """
        Initialize the provider client.

        Args:
            config: Provider configuration
            credential: Optional Azure credential (for dependency injection/testing)
            subscription_client_factory: Optional factory for SubscriptionClient (for testing)
        """
        self.config = config
        self.account = Account(
            tenant_id=config.azure.tenant_id,
            environment=config.azure.get_environment(),
        )
        self._credential = credential
        self.subscription_client_factory = (
            subscription_client_factory or SubscriptionClient
        )

    @property
    def credential(self) -> Any:
        """The Azure credential, created on first use."""
        if self._credential is None:
            self._credential = DefaultAzureCredential(
                authority=self.account.environment.authority_host
            )
        return self._credential

    @property
    def environment(self) -> CloudEnvironment:
        return self.account.environment

    def subscription_client(self) -> Any:
        """Create a SubscriptionClient for the active environment."""
        environment = self.account.environment
        logger.debug(
            f"Creating SubscriptionClient for {environment.resource_manager_url}"
        )
        return self.subscription_client_factory(
            self.credential,
            base_url=environment.resource_manager_url,
            credential_scopes=[environment.credential_scope],
            connection_timeout=Timeouts.AZURE_SDK_CONNECTION,
            read_timeout=Timeouts.AZURE_SDK_READ,
        )

    def build_share_resource_id(self, account_name: str, share_name: str) -> str:
        """Build a storage share identifier in the active environment."""
        return build_share_resource_id(
            self.account.environment, account_name, share_name
        )
