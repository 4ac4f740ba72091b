"""
tf-azurerm

Resources and data sources for an Azure infrastructure-as-code provider:
versioned state upgrades for storage shares and a filtered subscriptions
data source.
"""

__version__ = "0.1.0"
