"""Azure cloud environments the provider can target.

The active environment decides which management endpoint the SDK clients talk
to and which DNS suffix storage data-plane identifiers are built from.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from azure.identity import AzureAuthorityHosts

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloudEnvironment:
    """Endpoints for a single Azure cloud."""

    name: str
    resource_manager_url: str
    storage_endpoint_suffix: str
    authority_host: str

    @property
    def credential_scope(self) -> str:
        """OAuth scope for the resource manager endpoint."""
        return f"{self.resource_manager_url.rstrip('/')}/.default"


PUBLIC_CLOUD = CloudEnvironment(
    name="public",
    resource_manager_url="https://management.azure.com/",
    storage_endpoint_suffix="core.windows.net",
    authority_host=AzureAuthorityHosts.AZURE_PUBLIC_CLOUD,
)

CHINA_CLOUD = CloudEnvironment(
    name="china",
    resource_manager_url="https://management.chinacloudapi.cn/",
    storage_endpoint_suffix="core.chinacloudapi.cn",
    authority_host=AzureAuthorityHosts.AZURE_CHINA,
)

US_GOVERNMENT_CLOUD = CloudEnvironment(
    name="usgovernment",
    resource_manager_url="https://management.usgovcloudapi.net/",
    storage_endpoint_suffix="core.usgovcloudapi.net",
    authority_host=AzureAuthorityHosts.AZURE_GOVERNMENT,
)

ENVIRONMENTS: Dict[str, CloudEnvironment] = {
    env.name: env for env in (PUBLIC_CLOUD, CHINA_CLOUD, US_GOVERNMENT_CLOUD)
}

# Names the Azure CLI and older SDKs use for the same clouds
_ALIASES: Dict[str, str] = {
    "azurecloud": "public",
    "azurepubliccloud": "public",
    "azurechinacloud": "china",
    "azureusgovernment": "usgovernment",
    "azureusgovernmentcloud": "usgovernment",
}


def get_environment(name: str) -> CloudEnvironment:
    """Look up a cloud environment by name (case-insensitive).

    Raises:
        ConfigurationError: If the name is not a known environment
    """
    key = (name or "").strip().lower()
    key = _ALIASES.get(key, key)
    environment = ENVIRONMENTS.get(key)
    if environment is None:
        raise ConfigurationError(
            f"Unknown Azure environment: {name!r}",
            config_section="environment",
            recovery_suggestion=f"Use one of: {', '.join(sorted(ENVIRONMENTS))}",
        )
    logger.debug(f"Using Azure environment '{environment.name}'")
    return environment
