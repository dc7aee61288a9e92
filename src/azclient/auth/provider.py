from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from azure.core.credentials import TokenCredential
from azure.identity import (
    CertificateCredential,
    ClientSecretCredential,
    ManagedIdentityCredential,
    WorkloadIdentityCredential,
)

from .certificate import decode_pkcs12, pem_bundle
from .config import ARMClientConfig, AzureAuthConfig
from .errors import CertificateReadError, CredentialConstructionError, NoCredentialsError
from .options import ClientOptions, ClientOptionsMutator, get_client_options

logger = logging.getLogger(__name__)


class CredentialKind(str, Enum):
    """Credential slots of an :class:`AuthProvider`."""

    FEDERATED_IDENTITY = "federated_identity"
    MANAGED_IDENTITY = "managed_identity"
    CLIENT_SECRET = "client_secret"
    NETWORK_CLIENT_SECRET = "network_client_secret"
    MULTI_TENANT = "multi_tenant"
    CLIENT_CERTIFICATE = "client_certificate"

    @property
    def slot(self) -> str:
        return f"{self.value}_credential"


# Workload federation > managed identity > static secret > static certificate.
PRIMARY_ORDER: tuple[CredentialKind, ...] = (
    CredentialKind.FEDERATED_IDENTITY,
    CredentialKind.MANAGED_IDENTITY,
    CredentialKind.CLIENT_SECRET,
    CredentialKind.CLIENT_CERTIFICATE,
)


@dataclass(frozen=True)
class AuthProvider:
    """Credentials resolved from one configuration snapshot.

    Each slot holds a :class:`TokenCredential` or ``None`` when that
    mechanism is not configured. Instances are immutable and safe to share
    between threads.
    """

    federated_identity_credential: TokenCredential | None = None
    managed_identity_credential: TokenCredential | None = None
    client_secret_credential: TokenCredential | None = None
    network_client_secret_credential: TokenCredential | None = None
    multi_tenant_credential: TokenCredential | None = None
    client_certificate_credential: TokenCredential | None = None

    def get(self, kind: CredentialKind) -> TokenCredential | None:
        return getattr(self, kind.slot)

    def configured_kinds(self) -> tuple[CredentialKind, ...]:
        """Return the populated slots in declaration order."""
        return tuple(kind for kind in CredentialKind if self.get(kind) is not None)

    def get_az_identity(self) -> TokenCredential:
        """Return the primary credential.

        Raises:
            NoCredentialsError: If none of the primary mechanisms is configured.
        """
        for kind in PRIMARY_ORDER:
            credential = self.get(kind)
            if credential is not None:
                logger.debug("Using %s credential", kind.value)
                return credential
        raise NoCredentialsError()

    def get_network_az_identity(self) -> TokenCredential:
        """Return the credential scoped to the network resource tenant."""
        if self.network_client_secret_credential is not None:
            return self.network_client_secret_credential
        raise NoCredentialsError()

    def get_multi_tenant_identity(self) -> TokenCredential:
        """Return the credential allowed to request tokens for the network tenant."""
        if self.multi_tenant_credential is not None:
            return self.multi_tenant_credential
        raise NoCredentialsError()

    def is_multi_tenant_mode_enabled(self) -> bool:
        return self.multi_tenant_credential is not None


def _construct(
    kind: CredentialKind,
    credential_cls: Callable[..., TokenCredential],
    *args: Any,
    **kwargs: Any,
) -> TokenCredential:
    try:
        credential = credential_cls(*args, **kwargs)
    except ValueError as e:
        raise CredentialConstructionError(
            f"constructing the {kind.value} credential: {e}"
        ) from e
    logger.info("Constructed %s credential", kind.value)
    return credential


def managed_identity_selector(user_assigned_identity_id: str | None) -> dict[str, str]:
    """Classify a user-assigned identity as a resource ID or a client ID.

    Returns:
        ``{"resource_id": ...}`` when the value looks like an ARM resource ID,
        ``{"client_id": ...}`` for any other non-empty value, ``{}`` otherwise.
    """
    if not user_assigned_identity_id:
        return {}
    if "/SUBSCRIPTIONS/" in user_assigned_identity_id.upper():
        return {"resource_id": user_assigned_identity_id}
    return {"client_id": user_assigned_identity_id}


def new_auth_provider(
    arm_config: ARMClientConfig,
    auth_config: AzureAuthConfig,
    *mutators: ClientOptionsMutator,
    client_options: ClientOptions | None = None,
) -> AuthProvider:
    """Build every credential the configuration enables.

    Mechanisms are evaluated independently, so several credentials may be
    built; :meth:`AuthProvider.get_az_identity` picks the one to use.

    Args:
        arm_config: ARM settings (tenants, cloud, user agent).
        auth_config: Authentication settings.
        *mutators: Callables applied in order to the client options before
            any credential is built.
        client_options: Base options. Defaults to
            :func:`get_client_options` of ``arm_config``.

    Returns:
        The resolved :class:`AuthProvider`.

    Raises:
        CredentialConstructionError: If azure-identity rejects a credential.
        CertificateReadError: If the client certificate file cannot be read.
        CertificateDecodeError: If the client certificate cannot be decoded.
        UnsupportedKeyTypeError: If the client certificate key is not RSA.
    """
    options = client_options if client_options is not None else get_client_options(arm_config)
    for mutate in mutators:
        mutate(options)
    opts = options.to_kwargs()

    tenant_id = arm_config.get_tenant_id()
    client_id = auth_config.get_client_id()

    federated_identity_credential = None
    token_file, federated_enabled = auth_config.get_federated_token_file()
    if federated_enabled:
        federated_identity_credential = _construct(
            CredentialKind.FEDERATED_IDENTITY,
            WorkloadIdentityCredential,
            tenant_id=tenant_id,
            client_id=client_id,
            token_file_path=token_file,
            **opts,
        )

    managed_identity_credential = None
    if auth_config.use_managed_identity_extension:
        managed_identity_credential = _construct(
            CredentialKind.MANAGED_IDENTITY,
            ManagedIdentityCredential,
            **managed_identity_selector(auth_config.user_assigned_identity_id),
            **opts,
        )

    client_secret_credential = None
    network_client_secret_credential = None
    multi_tenant_credential = None
    client_secret = auth_config.get_client_secret()
    if client_secret:
        client_secret_credential = _construct(
            CredentialKind.CLIENT_SECRET,
            ClientSecretCredential,
            tenant_id,
            client_id,
            client_secret,
            **opts,
        )
        network_tenant_id = arm_config.network_resource_tenant_id
        if network_tenant_id and network_tenant_id.casefold() != tenant_id.casefold():
            logger.debug(
                "Network resource tenant %s differs from tenant %s",
                network_tenant_id,
                tenant_id,
            )
            network_client_secret_credential = _construct(
                CredentialKind.NETWORK_CLIENT_SECRET,
                ClientSecretCredential,
                network_tenant_id,
                client_id,
                client_secret,
                **opts,
            )
            multi_tenant_credential = _construct(
                CredentialKind.MULTI_TENANT,
                ClientSecretCredential,
                tenant_id,
                client_id,
                client_secret,
                additionally_allowed_tenants=[network_tenant_id],
                **opts,
            )

    # A certificate without a password is treated as not configured.
    client_certificate_credential = None
    certificate_password = auth_config.get_certificate_password()
    if auth_config.certificate_path and certificate_password:
        path = auth_config.certificate_path
        try:
            data = path.read_bytes()
        except OSError as e:
            raise CertificateReadError(
                f"reading the client certificate from file {path}: {e}"
            ) from e
        certificate, private_key = decode_pkcs12(data, certificate_password)
        client_certificate_credential = _construct(
            CredentialKind.CLIENT_CERTIFICATE,
            CertificateCredential,
            tenant_id,
            client_id,
            certificate_data=pem_bundle(certificate, private_key),
            send_certificate_chain=True,
            **opts,
        )

    return AuthProvider(
        federated_identity_credential=federated_identity_credential,
        managed_identity_credential=managed_identity_credential,
        client_secret_credential=client_secret_credential,
        network_client_secret_credential=network_client_secret_credential,
        multi_tenant_credential=multi_tenant_credential,
        client_certificate_credential=client_certificate_credential,
    )
