from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator

import pytest

from azclient.auth import provider
from azclient.auth.certificate import generate_self_signed_pkcs12

PFX_PASSWORD = "pfx-password"


@pytest.fixture(autouse=True)
def clear_azure_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove AZURE_* / AAD_* vars to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    to_clear = [k for k in os.environ if k.upper().startswith(("AZURE_", "AAD_"))]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


class _Recorder:
    """Factory to create recorder classes that capture init arguments."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.cls = self._make(name)

    @staticmethod
    def _make(name: str):
        class _C:
            calls: list[tuple[tuple[Any, ...], dict[str, Any]]]
            error: Exception | None = None

            def __init__(self, *args: Any, **kwargs: Any) -> None:
                if type(self).error is not None:
                    raise type(self).error
                type(self).calls.append((args, dict(kwargs)))
                self.args = args
                self.kwargs = dict(kwargs)

            @classmethod
            def call_count(cls) -> int:
                return len(cls.calls)

            @classmethod
            def last_kwargs(cls) -> dict[str, Any] | None:
                return cls.calls[-1][1] if cls.calls else None

        _C.calls = []
        _C.__name__ = name
        _C.__qualname__ = name
        return _C


@pytest.fixture()
def stub_identity(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace the azure-identity credentials used by the provider with recorders.

    Returns:
        dict[str, Any]: Recorder classes keyed by credential class name.
    """
    names = [
        "WorkloadIdentityCredential",
        "ManagedIdentityCredential",
        "ClientSecretCredential",
        "CertificateCredential",
    ]
    recorders = {n: _Recorder(n).cls for n in names}
    for n, cls in recorders.items():
        monkeypatch.setattr(provider, n, cls)
    return recorders


@pytest.fixture(scope="session")
def pfx_password() -> str:
    return PFX_PASSWORD


@pytest.fixture(scope="session")
def rsa_pfx(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A password-protected PKCS#12 archive holding an RSA key."""
    path = tmp_path_factory.mktemp("certs") / "rsa.pfx"
    generate_self_signed_pkcs12("azclient-rsa", PFX_PASSWORD, pkcs12_path=path)
    return path


@pytest.fixture(scope="session")
def ec_pfx(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A password-protected PKCS#12 archive holding an EC key."""
    path = tmp_path_factory.mktemp("certs") / "ec.pfx"
    generate_self_signed_pkcs12(
        "azclient-ec", PFX_PASSWORD, key_type="ec", pkcs12_path=path
    )
    return path
