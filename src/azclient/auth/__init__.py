"""Credential resolution for Azure SDK clients.

Public API:
- new_auth_provider() → AuthProvider
- AuthProvider (resolved credentials + priority accessors)
- ARMClientConfig, AzureAuthConfig (settings)
- ClientOptions, get_client_options() (options passed to every credential)
- decode_pkcs12() (PKCS#12 client certificate adapter)
- NoCredentialsError and the other errors in :mod:`azclient.auth.errors`
"""

from .certificate import decode_pkcs12
from .clouds import AzureCloud, resource_manager_scope
from .config import ARMClientConfig, AzureAuthConfig
from .errors import (
    AuthError,
    CertificateDecodeError,
    CertificateReadError,
    CredentialConstructionError,
    NoCredentialsError,
    UnsupportedKeyTypeError,
)
from .options import ClientOptions, ClientOptionsMutator, get_client_options
from .provider import AuthProvider, CredentialKind, new_auth_provider

__all__ = [
    "ARMClientConfig",
    "AuthError",
    "AuthProvider",
    "AzureAuthConfig",
    "AzureCloud",
    "CertificateDecodeError",
    "CertificateReadError",
    "ClientOptions",
    "ClientOptionsMutator",
    "CredentialConstructionError",
    "CredentialKind",
    "NoCredentialsError",
    "UnsupportedKeyTypeError",
    "decode_pkcs12",
    "get_client_options",
    "new_auth_provider",
    "resource_manager_scope",
]
