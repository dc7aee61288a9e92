"""PKCS#12 client certificate helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Literal

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

from .errors import CertificateDecodeError, UnsupportedKeyTypeError

KeyType = Literal["rsa", "ec"]


def decode_pkcs12(
    data: bytes, password: str
) -> tuple[x509.Certificate, rsa.RSAPrivateKey]:
    """Extract the certificate and RSA private key from a PKCS#12 archive.

    No chain, trust or expiry validation is done here.

    Args:
        data: Raw PKCS#12 (``.pfx``/``.p12``) bytes.
        password: Password protecting the archive.

    Returns:
        A tuple ``(certificate, private_key)``.

    Raises:
        CertificateDecodeError: If the archive cannot be decoded with
            ``password`` or lacks a certificate or private key.
        UnsupportedKeyTypeError: If the private key is not an RSA key.
    """
    try:
        private_key, certificate, _ = pkcs12.load_key_and_certificates(
            data, password.encode()
        )
    except ValueError as e:
        raise CertificateDecodeError(
            f"decoding the PKCS#12 client certificate: {e}"
        ) from e

    if private_key is None or certificate is None:
        raise CertificateDecodeError(
            "PKCS#12 certificate must contain a certificate and a private key"
        )
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise UnsupportedKeyTypeError(
            "PKCS#12 certificate must contain a RSA private key"
        )
    return certificate, private_key


def pem_bundle(certificate: x509.Certificate, private_key: rsa.RSAPrivateKey) -> bytes:
    """Serialize a key and certificate into a single unencrypted PEM blob."""
    key_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,  # produces "PRIVATE KEY"
        encryption_algorithm=serialization.NoEncryption(),
    )
    return key_pem + certificate.public_bytes(serialization.Encoding.PEM)


def generate_self_signed_pkcs12(
    common_name: str,
    password: str,
    *,
    key_type: KeyType = "rsa",
    serial_number: int = 1,
    validity_days: int = 365,
    key_size: int = 2048,
    pkcs12_path: str | Path | None = None,
) -> bytes:
    """Generate a self-signed certificate packed in a password-protected PKCS#12.

    Meant for development and tests; production certificates come from a CA
    or Key Vault.

    Args:
        common_name: Common Name (CN) for the certificate subject.
        password: Password used to encrypt the archive. Must not be empty.
        key_type: ``"rsa"`` or ``"ec"`` (P-256). Only RSA archives are
            accepted by :func:`decode_pkcs12`.
        serial_number: Serial number for the certificate.
        validity_days: Offset in days from now for the certificate
            expiration time.
        key_size: RSA key size in bits. Ignored for EC keys.
        pkcs12_path: Optional path to write the archive to. If ``None``, the
            archive is only returned.

    Returns:
        The PKCS#12 archive bytes.
    """
    # Inspect the result with OpenSSL:
    #   openssl pkcs12 -in cert.pfx -info -nokeys

    if not password:
        raise ValueError("A non-empty password is required.")

    key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey
    if key_type == "rsa":
        key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    elif key_type == "ec":
        key = ec.generate_private_key(ec.SECP256R1())
    else:
        raise ValueError(f"Unsupported key_type: {key_type!r}")

    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(serial_number)
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=validity_days))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(private_key=key, algorithm=hashes.SHA256())
    )

    archive = pkcs12.serialize_key_and_certificates(
        name=common_name.encode(),
        key=key,
        cert=cert,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(password.encode()),
    )

    if pkcs12_path is not None:
        Path(pkcs12_path).write_bytes(archive)

    return archive
