"""Exceptions raised while resolving and selecting Azure credentials."""

from __future__ import annotations

NO_CREDENTIALS_MESSAGE = "no credentials provided for Azure cloud provider"


class AuthError(Exception):
    """Base class for all azclient.auth errors."""


class NoCredentialsError(AuthError):
    """The requested credential is not configured."""

    def __init__(self, message: str = NO_CREDENTIALS_MESSAGE) -> None:
        super().__init__(message)


class CredentialConstructionError(AuthError):
    """An azure-identity credential rejected its constructor arguments."""


class CertificateReadError(AuthError, OSError):
    """The client certificate file could not be read."""


class CertificateDecodeError(AuthError, ValueError):
    """The PKCS#12 client certificate could not be decoded."""


class UnsupportedKeyTypeError(AuthError, TypeError):
    """The PKCS#12 client certificate holds a non-RSA private key."""
