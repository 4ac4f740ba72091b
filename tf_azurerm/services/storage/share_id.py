"""Storage share identifiers.

Shares are addressed by their file data-plane URL,
``https://{account}.file.{storage_suffix}/{share}``, where the suffix depends
on the cloud environment.
"""

from typing import NamedTuple
from urllib.parse import urlparse

from ...environments import CloudEnvironment


class ShareResourceId(NamedTuple):
    account_name: str
    share_name: str


def build_file_endpoint(environment: CloudEnvironment, account_name: str) -> str:
    return f"https://{account_name}.file.{environment.storage_endpoint_suffix}"


def build_share_resource_id(
    environment: CloudEnvironment, account_name: str, share_name: str
) -> str:
    """Build the canonical identifier of a share in ``environment``."""
    return f"{build_file_endpoint(environment, account_name)}/{share_name}"


def parse_share_resource_id(resource_id: str) -> ShareResourceId:
    """Split a share identifier back into account and share names.

    Raises:
        ValueError: If ``resource_id`` is not a share URL
    """
    parsed = urlparse(resource_id)
    if parsed.scheme != "https" or not parsed.hostname:
        raise ValueError(f"Expected an https URL but got {resource_id!r}")

    host_parts = parsed.hostname.split(".")
    if len(host_parts) < 3 or host_parts[1] != "file":
        raise ValueError(f"Expected a file endpoint but got {parsed.hostname!r}")

    path = parsed.path.strip("/")
    if not path or "/" in path:
        raise ValueError(f"Expected a single share name in {resource_id!r}")

    return ShareResourceId(account_name=host_parts[0], share_name=path)
