from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final
from urllib.parse import urlparse

from azure.identity import AzureAuthorityHosts


class AzureCloud(str, Enum):
    """Azure clouds the client can authenticate against."""

    PUBLIC = "AzurePublicCloud"
    CHINA = "AzureChinaCloud"
    US_GOVERNMENT = "AzureUSGovernmentCloud"

    @classmethod
    def from_name(cls, name: str) -> "AzureCloud":
        """Look up a cloud by name, ignoring letter case.

        Raises:
            ValueError: If ``name`` is not a known cloud.
        """
        for cloud in cls:
            if cloud.value.upper() == name.strip().upper():
                return cloud
        raise ValueError(f"Unknown Azure cloud: {name!r}")


@dataclass(frozen=True)
class CloudEndpoints:
    authority_host: str
    resource_manager: str


_CLOUD_ENDPOINTS: Final[dict[AzureCloud, CloudEndpoints]] = {
    AzureCloud.PUBLIC: CloudEndpoints(
        authority_host=f"https://{AzureAuthorityHosts.AZURE_PUBLIC_CLOUD}",
        resource_manager="https://management.azure.com/",
    ),
    AzureCloud.CHINA: CloudEndpoints(
        authority_host=f"https://{AzureAuthorityHosts.AZURE_CHINA}",
        resource_manager="https://management.chinacloudapi.cn/",
    ),
    AzureCloud.US_GOVERNMENT: CloudEndpoints(
        authority_host=f"https://{AzureAuthorityHosts.AZURE_GOVERNMENT}",
        resource_manager="https://management.usgovcloudapi.net/",
    ),
}


def cloud_endpoints(cloud: AzureCloud) -> CloudEndpoints:
    """Return the well-known endpoints of ``cloud``."""
    return _CLOUD_ENDPOINTS[cloud]


def authority_from_url(url: str) -> str:
    """Return the URL authority (scheme + host).

    Args:
        url: Absolute URL (e.g., "https://management.azure.com/subscriptions").

    Returns:
        The "<scheme>://<host>" portion of the URL.

    Raises:
        ValueError: If ``url`` is not absolute or lacks a host.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("url must be an absolute URL")
    return f"{parsed.scheme}://{parsed.netloc}"


def default_scope(resource_url: str) -> str:
    return f"{authority_from_url(resource_url)}/.default"


def resource_manager_scope(
    cloud: AzureCloud, resource_manager_endpoint: str | None = None
) -> str:
    """Return the ``.default`` token scope for Azure Resource Manager.

    Args:
        cloud: Cloud whose well-known endpoint is used.
        resource_manager_endpoint: Custom endpoint that takes precedence over
            the cloud's endpoint.
    """
    endpoint = resource_manager_endpoint or cloud_endpoints(cloud).resource_manager
    return default_scope(endpoint)
