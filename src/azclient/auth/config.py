from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .clouds import AzureCloud, authority_from_url


class ARMClientConfig(BaseSettings):
    """Azure Resource Manager client settings shared by every credential.

    Environment variables (aliases supported where noted):
        - AZURE_CLOUD (alias: AZURE_ENVIRONMENT)
        - AZURE_TENANT_ID
        - AZURE_NETWORK_RESOURCE_TENANT_ID
        - AZURE_USER_AGENT
        - AZURE_AUTHORITY_HOST
        - AZURE_RESOURCE_MANAGER_ENDPOINT
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # The field name is listed in every AliasChoices so that keyword
    # construction keeps working next to the environment names.

    cloud: AzureCloud = Field(
        default=AzureCloud.PUBLIC,
        validation_alias=AliasChoices("cloud", "AZURE_CLOUD", "AZURE_ENVIRONMENT"),
    )
    tenant_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tenant_id", "AZURE_TENANT_ID")
    )
    network_resource_tenant_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "network_resource_tenant_id", "AZURE_NETWORK_RESOURCE_TENANT_ID"
        ),
    )
    user_agent: str | None = Field(
        default=None, validation_alias=AliasChoices("user_agent", "AZURE_USER_AGENT")
    )
    authority_host: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authority_host", "AZURE_AUTHORITY_HOST"),
    )
    resource_manager_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "resource_manager_endpoint", "AZURE_RESOURCE_MANAGER_ENDPOINT"
        ),
    )

    @field_validator("cloud", mode="before")
    @classmethod
    def _parse_cloud(cls, v: object) -> object:
        """Accept cloud names in any letter case."""
        if isinstance(v, str) and not isinstance(v, AzureCloud):
            return AzureCloud.from_name(v)
        return v

    @field_validator("authority_host", "resource_manager_endpoint")
    @classmethod
    def _ensure_absolute_url(cls, v: str | None) -> str | None:
        if v is not None:
            authority_from_url(v)
        return v

    def get_tenant_id(self) -> str:
        return self.tenant_id or ""


class AzureAuthConfig(BaseSettings):
    """Credentials the client may authenticate with.

    Any number of mechanisms may be populated at once; which credentials get
    built, and which one is used, is decided by
    :func:`azclient.auth.provider.new_auth_provider`.

    Environment variables (aliases supported where noted):
        - AZURE_CLIENT_ID (alias: AAD_CLIENT_ID)
        - AZURE_CLIENT_SECRET (alias: AAD_CLIENT_SECRET)
        - AZURE_CLIENT_CERTIFICATE_PATH
        - AZURE_CLIENT_CERTIFICATE_PASSWORD
        - AZURE_USE_MANAGED_IDENTITY_EXTENSION
        - AZURE_USER_ASSIGNED_IDENTITY_ID
        - AZURE_USE_FEDERATED_WORKLOAD_IDENTITY_EXTENSION
        - AZURE_FEDERATED_TOKEN_FILE
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("client_id", "AZURE_CLIENT_ID", "AAD_CLIENT_ID"),
    )
    client_secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "client_secret", "AZURE_CLIENT_SECRET", "AAD_CLIENT_SECRET"
        ),
    )
    certificate_path: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "certificate_path", "AZURE_CLIENT_CERTIFICATE_PATH"
        ),
    )
    certificate_password: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "certificate_password", "AZURE_CLIENT_CERTIFICATE_PASSWORD"
        ),
    )
    use_managed_identity_extension: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "use_managed_identity_extension", "AZURE_USE_MANAGED_IDENTITY_EXTENSION"
        ),
    )
    user_assigned_identity_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "user_assigned_identity_id", "AZURE_USER_ASSIGNED_IDENTITY_ID"
        ),
    )
    use_federated_workload_identity_extension: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "use_federated_workload_identity_extension",
            "AZURE_USE_FEDERATED_WORKLOAD_IDENTITY_EXTENSION",
        ),
    )
    federated_token_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("federated_token_file", "AZURE_FEDERATED_TOKEN_FILE"),
    )

    @field_validator("certificate_path", "federated_token_file", mode="before")
    @classmethod
    def _empty_path_is_unset(cls, v: object) -> object:
        """Treat empty environment values as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _cross_field_validation(self) -> "AzureAuthConfig":
        """Reject a federated workload identity without a token file."""
        if self.use_federated_workload_identity_extension and not self.federated_token_file:
            raise ValueError(
                "use_federated_workload_identity_extension requires federated_token_file."
            )
        return self

    def get_client_id(self) -> str:
        return self.client_id or ""

    def get_client_secret(self) -> str:
        return self.client_secret.get_secret_value() if self.client_secret else ""

    def get_certificate_password(self) -> str:
        return (
            self.certificate_password.get_secret_value()
            if self.certificate_password
            else ""
        )

    def get_federated_token_file(self) -> tuple[str, bool]:
        """Return the federated token file path and whether it is enabled."""
        path = str(self.federated_token_file) if self.federated_token_file else ""
        return path, self.use_federated_workload_identity_extension
