"""Client options shared by every credential built from one configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .clouds import cloud_endpoints
from .config import ARMClientConfig

DEFAULT_USER_AGENT = "azclient-auth"


@dataclass
class ClientOptions:
    """Keyword options forwarded to azure-identity credential constructors.

    ``extra`` carries any other azure-core pipeline keyword (``transport``,
    ``connection_timeout``, ...) verbatim.
    """

    authority: str | None = None
    user_agent: str | None = None
    retry_total: int | None = None
    logging_enable: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "authority": self.authority,
            "user_agent": self.user_agent,
            "retry_total": self.retry_total,
        }
        kwargs = {k: v for k, v in kwargs.items() if v is not None}
        if self.logging_enable:
            kwargs["logging_enable"] = True
        kwargs.update(self.extra)
        return kwargs


ClientOptionsMutator = Callable[[ClientOptions], None]


def get_client_options(arm_config: ARMClientConfig) -> ClientOptions:
    """Build the base :class:`ClientOptions` for an ARM configuration.

    Args:
        arm_config: ARM settings. ``authority_host`` overrides the authority
            of the configured cloud.

    Returns:
        A fresh, mutable :class:`ClientOptions`.
    """
    authority = arm_config.authority_host or cloud_endpoints(arm_config.cloud).authority_host
    return ClientOptions(
        authority=authority,
        user_agent=arm_config.user_agent or DEFAULT_USER_AGENT,
    )
